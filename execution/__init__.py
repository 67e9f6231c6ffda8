# Execution layer - deterministic Python scripts
#
# This directory holds the score pipeline and its maintenance tools.
# Scripts here handle the Gemini call, content checks, Supabase reads and writes, and file exports.
#
# Modules import each other by bare name; each script puts this directory on sys.path,
# and importing the package does the same for the installed console scripts.

import sys
from pathlib import Path

_here = str(Path(__file__).parent)
if _here not in sys.path:
    sys.path.insert(0, _here)

"""
Shared utilities for execution scripts.
"""

import os
from typing import Mapping, Optional

from dotenv import load_dotenv

from schemas import Settings

# Load environment variables
load_dotenv()

REQUIRED_SUPABASE_VARS = ("SUPABASE_URL", "SUPABASE_ANON_KEY")
REQUIRED_GEMINI_VARS = ("GEMINI_API_KEY",)


def load_settings(
    require_gemini: bool = True,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """
    Load process configuration once into an immutable Settings object.

    Args:
        require_gemini: Also require GEMINI_API_KEY (the export and seed
            tools only talk to the datastore)
        environ: Mapping to read from, defaults to os.environ

    Returns:
        Frozen Settings

    Raises:
        ValueError: If any required variable is missing or empty
    """
    env = os.environ if environ is None else environ

    required = list(REQUIRED_SUPABASE_VARS)
    if require_gemini:
        required = list(REQUIRED_GEMINI_VARS) + required

    missing = [key for key in required if not env.get(key)]
    if missing:
        raise ValueError(
            f"Missing required environment variables: {', '.join(missing)}"
        )

    overrides = {}
    if env.get("GEMINI_MODEL"):
        overrides["gemini_model"] = env["GEMINI_MODEL"]
    if env.get("GEMINI_BASE_URL"):
        overrides["gemini_base_url"] = env["GEMINI_BASE_URL"].rstrip("/")

    return Settings(
        gemini_api_key=env.get("GEMINI_API_KEY") or None,
        supabase_url=env["SUPABASE_URL"].rstrip("/"),
        supabase_anon_key=env["SUPABASE_ANON_KEY"],
        **overrides,
    )


def mask_secret(text: str, secret: Optional[str], placeholder: str = "***API_KEY***") -> str:
    """Replace every occurrence of a secret in text before it is printed or raised."""
    if not secret:
        return text
    return text.replace(secret, placeholder)

"""
Normalization and validation of generated score text.

The provider sometimes answers with a preamble, or with no real results at
all. This module:
- Strips anything before the first tournament heading
- Checks the remaining text looks like an actual results block

A failed validation is an expected outcome, not an error: the caller skips
the write and exits successfully.
"""

import re
from typing import List, Tuple

from prompts import SECTION_MARKER
from schemas import ContentValidation

# Rough floor for a block with at least one heading and a couple of results
MIN_CONTENT_LENGTH = 100

DEFEATED_TOKEN = " def. "
VERSUS_TOKEN = " vs "
SCORE_PATTERN = re.compile(r"\d+-\d+")


def normalize_content(content: str) -> str:
    """
    Drop any preamble before the first section marker and trim whitespace.

    Text without a marker is only trimmed. Normalizing twice is a no-op.

    Args:
        content: Raw completion text

    Returns:
        Normalized text
    """
    first_header = content.find(SECTION_MARKER)
    if first_header > 0:
        content = content[first_header:]
    return content.strip()


def _has_match_result(content: str) -> bool:
    return (
        DEFEATED_TOKEN in content
        or VERSUS_TOKEN in content
        or SCORE_PATTERN.search(content) is not None
    )


def _check_structure(content: str) -> Tuple[bool, bool, List[str]]:
    """
    Check for a tournament heading and at least one match result.

    Returns:
        Tuple of (has marker, has match result, list of errors)
    """
    errors = []

    has_marker = SECTION_MARKER in content
    if not has_marker:
        errors.append(f"No section marker '{SECTION_MARKER.strip()}' found")

    has_match = _has_match_result(content)
    if not has_match:
        errors.append("No match result (def., vs or score) found")

    return has_marker, has_match, errors


def validate_content(content: str) -> ContentValidation:
    """
    Validate normalized completion text.

    Args:
        content: Normalized text

    Returns:
        ContentValidation with results
    """
    if not content or not content.strip():
        return ContentValidation(
            is_valid=False,
            errors=["Content is empty"],
            has_content=False,
            has_section_marker=False,
            has_match_result=False,
            long_enough=False,
        )

    has_marker, has_match, errors = _check_structure(content)

    long_enough = len(content) >= MIN_CONTENT_LENGTH
    if not long_enough:
        errors.append(
            f"Content too short: {len(content)} < {MIN_CONTENT_LENGTH} characters"
        )

    return ContentValidation(
        is_valid=len(errors) == 0,
        errors=errors,
        has_content=True,
        has_section_marker=has_marker,
        has_match_result=has_match,
        long_enough=long_enough,
    )


def is_valid_content(content: str) -> bool:
    """Return True if the text passes every content check."""
    return validate_content(content).is_valid

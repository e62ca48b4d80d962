"""Comment text validation.

Used by input collaborators before they issue an add or edit intent. The
reducer itself stores whatever text it is given.
"""

from pydantic import BaseModel

COMMENT_MAX_LENGTH = 10000
COMMENT_MIN_LENGTH = 1

# Remaining-character count below which input widgets should warn.
WARNING_THRESHOLD = 100


class TextValidation(BaseModel):
    """Outcome of validating comment text."""

    is_valid: bool
    errors: list[str] = []


def validate_comment_text(text: str) -> TextValidation:
    """Validate comment text length after trimming surrounding whitespace.

    Args:
        text: Raw comment text

    Returns:
        Validation outcome with one message per failed rule
    """
    trimmed = text.strip()
    errors: list[str] = []

    if len(trimmed) < COMMENT_MIN_LENGTH:
        errors.append("Comment cannot be empty")
    if len(trimmed) > COMMENT_MAX_LENGTH:
        errors.append(f"Comment cannot exceed {COMMENT_MAX_LENGTH:,} characters")

    return TextValidation(is_valid=not errors, errors=errors)


def remaining_characters(text: str) -> int:
    """Characters left before the limit (negative when over it)."""
    return COMMENT_MAX_LENGTH - len(text)


def is_near_limit(text: str) -> bool:
    return remaining_characters(text) < WARNING_THRESHOLD

"""
Input sanitization for free-text request fields.
"""
import re
from typing import Any

MAX_FIELD_LENGTH = 6000

_ANGLE_BRACKETS = re.compile(r"[<>]")


def clean_input(value: Any, max_length: int = MAX_FIELD_LENGTH) -> str:
    """
    Normalize a raw request value into a safe prompt fragment.

    Trims whitespace, caps the length and removes ``<`` / ``>`` so embedded
    markup can't be smuggled into the prompt. This is best-effort; no encoding
    normalization or content filtering happens here.

    Args:
        value: Raw field value (any type, may be None)
        max_length: Maximum number of characters kept

    Returns:
        Sanitized string, empty if value is None
    """
    if value is None:
        return ""

    cleaned = str(value).strip()[:max_length]
    cleaned = _ANGLE_BRACKETS.sub("", cleaned)

    # Removing brackets or truncating can expose edge whitespace again
    return cleaned.strip()

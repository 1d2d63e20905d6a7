"""Identity normalization shared by the Todoist wire models.

REST v1 sends 64-bit integer ids, REST v2 sends strings. Everything inside
tdreport compares ids as strings.
"""

from typing import Any, Optional


def normalize_id(value: Any) -> str:
    """Coerce a wire id (int or str) to its string form."""
    if value is None:
        return ""
    return str(value)


def normalize_optional_id(value: Any) -> Optional[str]:
    """Coerce an optional reference id; empty and zero values mean "no reference"."""
    if value is None:
        return None
    text = str(value)
    if text in ("", "0"):
        return None
    return text

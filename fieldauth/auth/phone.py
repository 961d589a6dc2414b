"""
Phone number and project name input helpers.
"""

import re
from urllib.parse import unquote

# E.164-like: optional +, first digit 1-9, 2 to 15 digits in total
PHONE_PATTERN = re.compile(r"\+?[1-9][0-9]{1,14}")

# A '%' not followed by two hex digits
_MALFORMED_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def is_valid_phone(phone: str) -> bool:
    """
    Check a member phone number format.

    Examples:
        is_valid_phone("+15551234567") -> True
        is_valid_phone("15551234567") -> True
        is_valid_phone("+0123") -> False
        is_valid_phone("abc") -> False
    """
    if not phone:
        return False
    return PHONE_PATTERN.fullmatch(phone) is not None


def decode_project_name(project_name: str) -> str:
    """
    Percent-decode a project name received from a client.

    Mirrors URI component decoding: '+' is kept as-is and malformed
    escapes are rejected instead of passed through.

    Raises:
        ValueError: If the value contains a malformed escape sequence
    """
    if _MALFORMED_ESCAPE.search(project_name):
        raise ValueError(f"Malformed escape sequence in project name: {project_name!r}")

    try:
        return unquote(project_name, errors="strict")
    except UnicodeDecodeError as e:
        raise ValueError(f"Project name is not valid UTF-8 once decoded: {project_name!r}") from e

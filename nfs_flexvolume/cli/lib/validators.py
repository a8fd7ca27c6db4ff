"""
Input validation functions.
"""

import os
from typing import Union

MAX_MODE = 0o7777


def parse_mode(value: Union[int, str]) -> int:
    """
    Parse a filesystem permission mode.

    Strings follow C `strtoul(..., 0)` conventions: a leading "0" means
    octal ("0755"), "0o"/"0x"/"0b" prefixes select the base, anything else
    is decimal ("493").

    Args:
        value: Mode as an integer or numeric string

    Returns:
        Mode as an integer

    Raises:
        ValueError: If the mode is empty, not numeric, or out of range
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid mode: {value!r}")

    if isinstance(value, int):
        mode = value
    else:
        raw = str(value).strip().lower().replace("_", "")
        if not raw:
            raise ValueError("Mode cannot be empty")
        try:
            if raw.startswith(("0x", "0o", "0b")):
                mode = int(raw, 0)
            elif len(raw) > 1 and raw.startswith("0"):
                mode = int(raw, 8)
            else:
                mode = int(raw, 10)
        except ValueError:
            raise ValueError(f"Invalid mode: {value!r}")

    if mode < 0 or mode > MAX_MODE:
        raise ValueError(f"Mode must be between 0 and {oct(MAX_MODE)}, got {oct(mode)}")

    return mode


def validate_sub_path(sub_path: str) -> None:
    """
    Validate a sub-directory path inside a share.

    Args:
        sub_path: Relative path (e.g., "data/logs")

    Raises:
        ValueError: If the path is absolute or contains ".." segments
    """
    if not sub_path:
        return

    if os.path.isabs(sub_path):
        raise ValueError(f"subPath must be relative, got {sub_path!r}")

    if ".." in sub_path.split("/"):
        raise ValueError(f"subPath must not contain '..' segments, got {sub_path!r}")

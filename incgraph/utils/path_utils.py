"""Path normalization utilities for include resolution."""

import os
import re
from pathlib import Path, PurePosixPath
from typing import Optional, Pattern, Union


def normalize_path_separators(path: Union[str, Path]) -> Path:
    """
    Convert an include spelling to a native path.

    Sources may spell includes with either slash style regardless of the
    host OS, so backslashes are treated as separators too.

    Examples:
        >>> normalize_path_separators("sub\\\\inc.h").as_posix()
        'sub/inc.h'
    """
    return Path(str(path).replace("\\", "/"))


def canonicalize(path: Union[str, Path]) -> Path:
    """Resolve symlinks and ``..`` segments through the operating system."""
    return Path(os.path.realpath(path))


def filename_matches(regex: Optional[Pattern[str]], path: Union[str, Path]) -> bool:
    """
    Check the final path component against an exclude pattern.

    Returns False when there is no pattern or the path has no file name.
    """
    if regex is None:
        return False
    name = Path(path).name
    return bool(name) and regex.search(name) is not None


def name_matches(regex: Optional[Pattern[str]], name: str) -> bool:
    """Check a raw include spelling against an exclude pattern."""
    if regex is None or not name:
        return False
    return regex.search(name) is not None


def path_ends_with(path: Union[str, Path], suffix: Union[str, Path]) -> bool:
    """
    Check whether ``path`` ends with ``suffix`` component-wise.

    Examples:
        >>> path_ends_with("/src/net/socket.h", "net/socket.h")
        True
        >>> path_ends_with("/src/net/websocket.h", "socket.h")
        False
    """
    path_parts = PurePosixPath(str(path).replace("\\", "/")).parts
    suffix_parts = PurePosixPath(str(suffix).replace("\\", "/")).parts
    if not suffix_parts or len(suffix_parts) > len(path_parts):
        return False
    return path_parts[-len(suffix_parts):] == suffix_parts


def compile_exclude(pattern: Optional[str]) -> Optional[Pattern[str]]:
    """Compile an exclude expression; empty or None means no exclusion.

    Raises:
        re.error: If the expression is invalid.
    """
    if not pattern:
        return None
    return re.compile(pattern)

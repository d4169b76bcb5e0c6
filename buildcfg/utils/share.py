"""Small helpers shared by the config loader, plugins and CLI."""

import logging
import os
import posixpath
import re
import sys
from typing import Any, Optional

logger = logging.getLogger(__name__)

IS_WINDOWS = sys.platform == "win32"

LINE_SPLIT = re.compile(r"\r?\n")


def is_object(value: Any) -> bool:
    """True for mapping-typed config values."""
    return isinstance(value, dict)


def is_array(value: Any) -> bool:
    """True for sequence-typed config values. Strings are not sequences here."""
    return isinstance(value, (list, tuple))


def is_empty_object(value: Any) -> bool:
    if not value:
        return True
    return len(value) == 0


def arraify(target: Any) -> list:
    """Wrap a single value in a list; sequences pass through as lists."""
    return list(target) if is_array(target) else [target]


def to_array(value: Any) -> list:
    """
    Coerce an optional value-or-list into a list.

    Examples:
        to_array(None) -> []
        to_array("react") -> ["react"]
        to_array(["react", "less"]) -> ["react", "less"]
    """
    if not value:
        return []
    return arraify(value)


def normalize_path(path: str) -> str:
    """Normalize to a POSIX-style path, e.g. 'src/a/../b' -> 'src/b'."""
    return posixpath.normpath(str(path).replace("\\", "/"))


def get_file_system_stats(path: str) -> Optional[os.stat_result]:
    """Return stat info for a path, or None if it doesn't exist or can't be read."""
    try:
        return os.stat(path)
    except FileNotFoundError:
        return None
    except OSError as e:
        logger.error(f"Error accessing file {path}: {e}")
        return None


def pad(source: str, n: int = 2) -> str:
    """Indent every line of source by n spaces."""
    return "\n".join(" " * n + line for line in LINE_SPLIT.split(source))


def clear_screen() -> None:
    """Clear the terminal. Never raises."""
    try:
        if IS_WINDOWS:
            sys.stdout.write("\x1b[2J\x1b[0f")
        else:
            sys.stdout.write("\x1bc")
        sys.stdout.flush()
    except OSError as e:
        logger.error(f"Failed to clear screen: {e}")

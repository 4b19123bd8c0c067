"""Path string helpers.

Paths are plain strings with ``/`` separators. A trailing slash marks a
directory path for create_path.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

SEPARATOR = "/"

# Longest path accepted without a warning
MAX_PATH_LENGTH = 2048


def strip_trailing_slash(path: str) -> str:
    """Remove one trailing separator, leaving a bare root untouched."""
    if len(path) > 1 and path.endswith(SEPARATOR):
        return path[:-1]
    return path


def join_path(base: str, name: str) -> str:
    """Join a directory and an entry name.

    An empty base yields the name alone, which is how root-relative
    paths are built.
    """
    if not base:
        return name
    if base.endswith(SEPARATOR):
        return f"{base}{name}"
    return f"{base}{SEPARATOR}{name}"


def is_directory_path(path: str) -> bool:
    """Return True if the path ends with a separator."""
    return path.endswith(SEPARATOR)


def parent_path(path: str) -> str | None:
    """Get the parent directory path, including its trailing separator.

    Args:
        path: A file or directory path.

    Returns:
        The parent path ending in a separator, or None when the path has
        no separator past its first character.

    Example:
        >>> parent_path("/tmp/a/b/")
        '/tmp/a/'
        >>> parent_path("file.txt") is None
        True
    """
    trimmed = path[:-1] if is_directory_path(path) else path
    slash = trimmed.rfind(SEPARATOR)
    if slash <= 0:
        return None
    return trimmed[: slash + 1]


def check_path_length(path: str, caller: str, limit: int = MAX_PATH_LENGTH) -> bool:
    """Warn when a path is unusually long.

    Args:
        path: Path to check.
        caller: Operation name used in the log message.
        limit: Length above which a warning is logged.

    Returns:
        True if the path is within the limit.
    """
    if len(path) > limit:
        logger.warning("%s: path length %d exceeds %d characters", caller, len(path), limit)
        return False
    return True

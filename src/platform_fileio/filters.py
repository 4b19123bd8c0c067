"""Directory exclusion set consulted during traversal.

A DirectoryFilter can be created per traversal context. The module also
keeps one process-wide instance behind ``add_excluded_directory`` and
friends for callers that rely on shared state; it has no locking, so
mutate it from one thread at a time.
"""

from __future__ import annotations

from collections.abc import Iterable

from platform_fileio.config import DEFAULT_EXCLUDED_DIRECTORIES


class DirectoryFilter:
    """Set of exact directory base names to prune.

    Satisfies the ExclusionSet protocol structurally. Matching is
    case-sensitive and compares base names only, never paths.
    """

    def __init__(self, defaults: Iterable[str] | None = None) -> None:
        """Initialize an empty filter.

        Args:
            defaults: Names added by init_excluded_directories. Defaults to
                the version-control folders ``.svn`` and ``CVS``.
        """
        self._defaults = tuple(DEFAULT_EXCLUDED_DIRECTORIES if defaults is None else defaults)
        self._excluded: set[str] = set()
        self._initialized = False

    def add_excluded_directory(self, name: str) -> None:
        """Exclude a directory base name."""
        self._excluded.add(name)

    def is_excluded_directory(self, name: str) -> bool:
        """Check whether a base name is excluded."""
        return name in self._excluded

    def init_excluded_directories(self) -> None:
        """Seed the defaults once."""
        if self._initialized:
            return
        self._excluded.update(self._defaults)
        self._initialized = True

    @property
    def excluded(self) -> frozenset[str]:
        """Snapshot of the excluded names."""
        return frozenset(self._excluded)

    def __contains__(self, name: object) -> bool:
        return name in self._excluded

    def __len__(self) -> int:
        return len(self._excluded)


_default_filter = DirectoryFilter()


def get_default_filter() -> DirectoryFilter:
    """Get the process-wide filter."""
    return _default_filter


def add_excluded_directory(name: str) -> None:
    """Exclude a directory name in the process-wide filter."""
    _default_filter.add_excluded_directory(name)


def is_excluded_directory(name: str) -> bool:
    """Check a directory name against the process-wide filter."""
    return _default_filter.is_excluded_directory(name)


def init_excluded_directories() -> None:
    """Seed the process-wide filter once."""
    _default_filter.init_excluded_directories()

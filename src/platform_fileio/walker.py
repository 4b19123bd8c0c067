"""Recursive directory enumeration.

Both dumps walk depth-first in pre-order using an explicit stack of
pending directory listings, so tree depth never grows the call stack.
Entries within a directory are visited in name order. A root that cannot
be opened fails the dump; a nested directory that cannot be opened is
treated as empty.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from typing import TYPE_CHECKING

from platform_fileio.filters import get_default_filter
from platform_fileio.paths import MAX_PATH_LENGTH, check_path_length, join_path, strip_trailing_slash
from platform_fileio.stringtable import InternTable
from platform_fileio.types import FileInfo

if TYPE_CHECKING:
    from platform_fileio.config import PlatformConfig
    from platform_fileio.protocols import ExclusionSet, StringTable

logger = logging.getLogger(__name__)

# Depth budget meaning "descend without limit"
UNLIMITED_DEPTH = -1

_DOT_ENTRIES = (".", "..")


def _next_budget(budget: int) -> int:
    return budget - 1 if budget > 0 else budget


class TreeWalker:
    """Enumerates directories and files below a root.

    Satisfies the DirectoryWalker protocol structurally. The depth budget
    counts the levels of subdirectories that may be entered below the
    root: 0 stays at the root, a negative value has no limit.
    """

    def __init__(
        self,
        exclusions: ExclusionSet | None = None,
        strings: StringTable | None = None,
        max_path_length: int = MAX_PATH_LENGTH,
    ) -> None:
        """Initialize the walker.

        Args:
            exclusions: Directory names to prune. Defaults to the
                process-wide filter.
            strings: Interning service for emitted paths.
            max_path_length: Root length above which a warning is logged.
        """
        self.exclusions = exclusions if exclusions is not None else get_default_filter()
        self.strings = strings or InternTable()
        self.max_path_length = max_path_length

    @classmethod
    def create(
        cls,
        config: PlatformConfig,
        exclusions: ExclusionSet | None = None,
        strings: StringTable | None = None,
    ) -> TreeWalker:
        """Create a walker configured from PlatformConfig.

        Args:
            config: Platform configuration.
            exclusions: Optional exclusion set (process-wide if omitted).
            strings: Optional interning service.

        Returns:
            Configured TreeWalker.
        """
        return cls(exclusions=exclusions, strings=strings, max_path_length=config.max_path_length)

    def dump_directories(
        self,
        path: str,
        directories: list[str],
        depth: int = UNLIMITED_DEPTH,
        include_root: bool = True,
        relative: bool = False,
    ) -> bool:
        """Collect directory paths below a root in pre-order.

        Args:
            path: Root directory; one trailing slash is ignored.
            directories: Output list, appended to.
            depth: Levels to descend; negative means unlimited.
            include_root: Emit the root first. Ignored when ``relative``.
            relative: Emit paths relative to the root instead of
                prefixed with it.

        Returns:
            False if the root cannot be opened as a directory.
        """
        self.exclusions.init_excluded_directories()
        root = strip_trailing_slash(path)
        check_path_length(root, "TreeWalker.dump_directories", self.max_path_length)

        try:
            entries = self._list_directory(root)
        except OSError as e:
            logger.debug("Cannot open directory %s: %s", root, e)
            return False

        if include_root and not relative:
            directories.append(self.strings.insert(root))

        # Frames of (path relative to root, unvisited entries, depth budget)
        stack: list[tuple[str, Iterator[os.DirEntry[str]], int]] = []
        if depth != 0:
            stack.append(("", iter(entries), depth))

        while stack:
            rel_dir, pending, budget = stack[-1]
            entry = next(pending, None)
            if entry is None:
                stack.pop()
                continue
            if not self._is_good_directory(entry):
                continue

            rel_path = join_path(rel_dir, entry.name)
            full_path = join_path(root, rel_path)
            directories.append(self.strings.insert(rel_path if relative else full_path))

            child_budget = _next_budget(budget)
            if child_budget == 0:
                continue
            try:
                children = self._list_directory(full_path)
            except OSError as e:
                logger.debug("Skipping unreadable directory %s: %s", full_path, e)
                continue
            stack.append((rel_path, iter(children), child_budget))

        return True

    def dump_path(
        self,
        path: str,
        files: list[FileInfo],
        depth: int = UNLIMITED_DEPTH,
    ) -> bool:
        """Collect the regular files below a root in pre-order.

        Directories are entered under the same depth and exclusion rules
        as dump_directories but are not emitted themselves.

        Args:
            path: Root directory; one trailing slash is ignored.
            files: Output list, appended to.
            depth: Levels to descend; negative means unlimited.

        Returns:
            False if the root cannot be opened as a directory.
        """
        self.exclusions.init_excluded_directories()
        root = strip_trailing_slash(path)
        check_path_length(root, "TreeWalker.dump_path", self.max_path_length)

        try:
            entries = self._list_directory(root)
        except OSError as e:
            logger.debug("Cannot open directory %s: %s", root, e)
            return False

        stack: list[tuple[str, Iterator[os.DirEntry[str]], int]] = [(root, iter(entries), depth)]

        while stack:
            current, pending, budget = stack[-1]
            entry = next(pending, None)
            if entry is None:
                stack.pop()
                continue

            entry_path = join_path(current, entry.name)
            if self._is_directory_entry(entry):
                if budget == 0 or not self._is_good_directory(entry):
                    continue
                try:
                    children = self._list_directory(entry_path)
                except OSError as e:
                    logger.debug("Skipping unreadable directory %s: %s", entry_path, e)
                    continue
                stack.append((entry_path, iter(children), _next_budget(budget)))
            else:
                files.append(
                    FileInfo(
                        full_path=self.strings.insert(current),
                        file_name=self.strings.insert(entry.name),
                        file_size=self._file_size(entry_path),
                    )
                )

        return True

    def has_sub_directory(self, path: str) -> bool:
        """Check for at least one subdirectory that is not excluded.

        Returns:
            False if there is none or the path cannot be opened.
        """
        self.exclusions.init_excluded_directories()
        try:
            entries = self._list_directory(path)
        except OSError:
            return False
        return any(self._is_good_directory(entry) for entry in entries)

    def is_sub_directory(self, parent: str, sub: str) -> bool:
        """Check that ``parent/sub`` is a directory."""
        return os.path.isdir(join_path(parent, sub))

    def _list_directory(self, path: str) -> list[os.DirEntry[str]]:
        with os.scandir(path) as it:
            return sorted(it, key=lambda entry: entry.name)

    def _is_good_directory(self, entry: os.DirEntry[str]) -> bool:
        # Name checks first so excluded directories are never stat'd
        if entry.name in _DOT_ENTRIES or self.exclusions.is_excluded_directory(entry.name):
            return False
        return self._is_directory_entry(entry)

    @staticmethod
    def _is_directory_entry(entry: os.DirEntry[str]) -> bool:
        try:
            return entry.is_dir(follow_symlinks=False)
        except OSError:
            return False

    @staticmethod
    def _file_size(path: str) -> int:
        try:
            return os.stat(path).st_size
        except OSError:
            return 0

"""Single-path filesystem operations.

PlatformFileSystem wraps the os and stat calls the rest of the
application needs for individual paths: recursive path creation, type and
size queries, deletion and timestamps. Failures come back as False, 0 or
None; nothing here raises for an OS error.
"""

from __future__ import annotations

import logging
import os
import stat
from typing import TYPE_CHECKING

from platform_fileio.paths import (
    MAX_PATH_LENGTH,
    check_path_length,
    is_directory_path,
    parent_path,
)
from platform_fileio.stringtable import InternTable
from platform_fileio.types import FileTimes

if TYPE_CHECKING:
    from platform_fileio.config import PlatformConfig
    from platform_fileio.protocols import StringTable

logger = logging.getLogger(__name__)


def compare_file_times(a: float, b: float) -> int:
    """Order two timestamps: 1 if a is later, -1 if earlier, else 0."""
    if a > b:
        return 1
    if a < b:
        return -1
    return 0


class PlatformFileSystem:
    """Production filesystem implementation.

    Satisfies the FileSystem protocol structurally.
    """

    def __init__(
        self,
        strings: StringTable | None = None,
        directory_mode: int = 0o777,
        max_path_length: int = MAX_PATH_LENGTH,
    ) -> None:
        """Initialize the filesystem.

        Args:
            strings: Interning service for returned paths.
            directory_mode: Permission bits for created directories,
                before the process umask is applied.
            max_path_length: Path length above which a warning is logged.
        """
        self.strings = strings or InternTable()
        self.directory_mode = directory_mode
        self.max_path_length = max_path_length

    @classmethod
    def create(cls, config: PlatformConfig, strings: StringTable | None = None) -> PlatformFileSystem:
        """Create a filesystem configured from PlatformConfig."""
        return cls(
            strings=strings,
            directory_mode=config.directory_mode,
            max_path_length=config.max_path_length,
        )

    def create_path(self, path: str) -> bool:
        """Ensure a path and its missing ancestors exist.

        Only components followed by a slash are directories: for
        ``a/b/file.txt`` the directories ``a/`` and ``a/b/`` are created but
        the file is not. An existing path of any type counts as success.

        Args:
            path: Path to create.

        Returns:
            True if the path exists afterwards, False as soon as one
            directory cannot be created.
        """
        if not path:
            return False
        if os.path.exists(path):
            return True

        parent = parent_path(path)
        if parent is not None and not self.create_path(parent):
            return False

        if is_directory_path(path):
            try:
                os.mkdir(path, self.directory_mode)
            except FileExistsError:
                # Created concurrently, or a non-directory holds the name
                if os.path.isdir(path):
                    return True
                logger.warning("Failed to create directory %s: a file is in the way", path)
                return False
            except OSError as e:
                logger.warning("Failed to create directory %s: %s", path, e)
                return False
        return True

    def is_file(self, path: str) -> bool:
        """Check if a path is a regular file."""
        mode = self._stat_mode(path)
        return mode is not None and stat.S_ISREG(mode)

    def is_directory(self, path: str) -> bool:
        """Check if a path is a directory."""
        mode = self._stat_mode(path)
        return mode is not None and stat.S_ISDIR(mode)

    def get_file_size(self, path: str) -> int:
        """Get a file's size in bytes, or 0 if it cannot be read."""
        if not path:
            return 0
        try:
            return os.stat(path).st_size
        except OSError:
            return 0

    def delete_file(self, path: str) -> bool:
        """Remove a file.

        Returns:
            True if it was removed.
        """
        if not path:
            return False
        check_path_length(path, "PlatformFileSystem.delete_file", self.max_path_length)
        try:
            os.remove(path)
        except OSError as e:
            logger.debug("Failed to delete %s: %s", path, e)
            return False
        return True

    def touch(self, path: str) -> bool:
        """Set an existing file's access and modification times to now.

        Returns:
            False if the path is empty or missing; the file is never created.
        """
        if not path:
            return False
        try:
            os.utime(path, None)
        except OSError as e:
            logger.debug("Failed to touch %s: %s", path, e)
            return False
        return True

    def get_file_times(self, path: str) -> FileTimes | None:
        """Get a path's change and modification times.

        Returns:
            FileTimes, or None if the path is empty or cannot be stat'd.
        """
        if not path:
            return None
        try:
            info = os.stat(path)
        except OSError:
            return None
        return FileTimes(create_time=info.st_ctime, modify_time=info.st_mtime)

    def compare_file_times(self, a: float, b: float) -> int:
        """Order two timestamps: 1 if a is later, -1 if earlier, else 0."""
        return compare_file_times(a, b)

    def get_current_directory(self) -> str:
        """Get the process working directory."""
        return self.strings.insert(os.getcwd())

    def set_current_directory(self, path: str) -> bool:
        """Change the process working directory.

        Returns:
            True on success.
        """
        try:
            os.chdir(path)
        except OSError as e:
            logger.debug("Failed to change directory to %s: %s", path, e)
            return False
        return True

    @staticmethod
    def _stat_mode(path: str) -> int | None:
        if not path:
            return None
        try:
            return os.stat(path).st_mode
        except OSError:
            return None

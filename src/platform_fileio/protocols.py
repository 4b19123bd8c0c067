"""Protocol definitions for collaborators of the file layer.

Traversal and path queries depend on these interfaces rather than on
concrete classes, so tests can inject their own string tables and
exclusion sets without touching process-wide state.

All concrete implementations satisfy these protocols structurally (duck typing).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from platform_fileio.types import FileInfo, FileTimes


@runtime_checkable
class StringTable(Protocol):
    """Protocol for the string interning service.

    Every path or name handed back to callers goes through ``insert``.
    """

    def insert(self, value: str) -> str:
        """Return the canonical instance of a string.

        Args:
            value: String to intern.

        Returns:
            A string equal to ``value``; equal inputs yield the same object.
        """
        ...


@runtime_checkable
class ExclusionSet(Protocol):
    """Protocol for the set of directory names pruned during traversal."""

    def add_excluded_directory(self, name: str) -> None:
        """Exclude a directory base name.

        Args:
            name: Exact, case-sensitive base name.
        """
        ...

    def is_excluded_directory(self, name: str) -> bool:
        """Check whether a base name is excluded.

        Args:
            name: Directory base name.

        Returns:
            True if traversal must skip it.
        """
        ...

    def init_excluded_directories(self) -> None:
        """Seed the set with its defaults; repeated calls do nothing."""
        ...


@runtime_checkable
class DirectoryWalker(Protocol):
    """Protocol for recursive directory enumeration."""

    def dump_directories(
        self,
        path: str,
        directories: list[str],
        depth: int = -1,
        include_root: bool = True,
        relative: bool = False,
    ) -> bool:
        """Collect directory paths below a root in pre-order.

        Args:
            path: Root directory.
            directories: Output list, appended to.
            depth: Levels to descend; negative means unlimited.
            include_root: Emit the root itself first.
            relative: Emit paths relative to the root.

        Returns:
            False if the root cannot be opened.
        """
        ...

    def dump_path(self, path: str, files: list[FileInfo], depth: int = -1) -> bool:
        """Collect the regular files below a root in pre-order.

        Args:
            path: Root directory.
            files: Output list, appended to.
            depth: Levels to descend; negative means unlimited.

        Returns:
            False if the root cannot be opened.
        """
        ...

    def has_sub_directory(self, path: str) -> bool:
        """Check for at least one subdirectory that is not excluded."""
        ...

    def is_sub_directory(self, parent: str, sub: str) -> bool:
        """Check that ``parent/sub`` is a directory."""
        ...


@runtime_checkable
class FileSystem(Protocol):
    """Protocol for single-path filesystem queries and mutations."""

    def create_path(self, path: str) -> bool:
        """Ensure a path and its missing ancestors exist.

        Args:
            path: Path to create; a trailing slash marks a directory.

        Returns:
            True if the path exists afterwards.
        """
        ...

    def is_file(self, path: str) -> bool:
        """Check if a path is a regular file."""
        ...

    def is_directory(self, path: str) -> bool:
        """Check if a path is a directory."""
        ...

    def get_file_size(self, path: str) -> int:
        """Get a file's size in bytes, or 0 if it cannot be read."""
        ...

    def delete_file(self, path: str) -> bool:
        """Remove a file."""
        ...

    def touch(self, path: str) -> bool:
        """Set a file's access and modification times to now."""
        ...

    def get_file_times(self, path: str) -> FileTimes | None:
        """Get a path's change and modification times."""
        ...

    def compare_file_times(self, a: float, b: float) -> int:
        """Order two timestamps: 1 if a is later, -1 if earlier, else 0."""
        ...

    def get_current_directory(self) -> str:
        """Get the process working directory."""
        ...

    def set_current_directory(self, path: str) -> bool:
        """Change the process working directory.

        Args:
            path: Directory to change to.

        Returns:
            True on success.
        """
        ...

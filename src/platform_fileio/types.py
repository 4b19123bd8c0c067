"""Shared data types for the platform file layer."""

from __future__ import annotations

import enum
from dataclasses import dataclass

__all__ = [
    "AccessMode",
    "Capability",
    "FileInfo",
    "FileTimes",
    "IOResult",
    "Status",
]


class Status(enum.Enum):
    """Observable state of a FileHandle.

    Doubles as the result of every handle operation: callers check it
    after each call instead of catching exceptions.
    """

    OK = "ok"
    IO_ERROR = "io_error"
    END_OF_STREAM = "end_of_stream"
    UNKNOWN_ERROR = "unknown_error"
    CLOSED = "closed"

    @property
    def is_error(self) -> bool:
        """True for IO_ERROR and UNKNOWN_ERROR."""
        return self in (Status.IO_ERROR, Status.UNKNOWN_ERROR)


class AccessMode(enum.Enum):
    """How a file is opened."""

    READ = "read"
    WRITE = "write"
    READ_WRITE = "read_write"
    WRITE_APPEND = "write_append"


class Capability(enum.Flag):
    """Operations permitted on an open handle."""

    NONE = 0
    READ = enum.auto()
    WRITE = enum.auto()


@dataclass(frozen=True)
class IOResult:
    """Outcome of a read or write.

    Attributes:
        status: Handle status after the operation.
        count: Number of bytes actually transferred.
    """

    status: Status
    count: int = 0


@dataclass(frozen=True)
class FileInfo:
    """A regular file found by a path dump.

    Attributes:
        full_path: Containing directory path.
        file_name: Base name of the file.
        file_size: Size in bytes (0 if it could not be read).
    """

    full_path: str
    file_name: str
    file_size: int = 0

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.file_name:
            raise ValueError("file_name cannot be empty")
        if self.file_size < 0:
            raise ValueError("file_size cannot be negative")

    @property
    def path(self) -> str:
        """Directory and name joined with a slash."""
        return f"{self.full_path.rstrip('/')}/{self.file_name}"


@dataclass(frozen=True)
class FileTimes:
    """Timestamps of a path, in seconds since the epoch.

    POSIX records no creation time, so ``create_time`` holds the inode
    change time.
    """

    create_time: float
    modify_time: float

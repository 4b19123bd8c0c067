"""Status-gated file handle.

A FileHandle owns at most one open OS file. Every operation reports its
outcome through the handle's Status instead of raising, so callers check
the returned status after each call. Broken preconditions are handled by
Contracts: fatal in strict mode, logged no-ops otherwise.
"""

from __future__ import annotations

import errno
import logging
import os
from collections.abc import Callable
from typing import IO, TYPE_CHECKING, Any

from platform_fileio.contracts import Contracts
from platform_fileio.paths import MAX_PATH_LENGTH, check_path_length
from platform_fileio.types import AccessMode, Capability, IOResult, Status

if TYPE_CHECKING:
    from platform_fileio.config import PlatformConfig

logger = logging.getLogger(__name__)

Opener = Callable[[str, str], IO[bytes]]

_OPEN_MODES = {
    AccessMode.READ: "rb",
    AccessMode.WRITE: "wb",
    AccessMode.READ_WRITE: "ab+",
    AccessMode.WRITE_APPEND: "ab",
}

_CAPABILITIES = {
    AccessMode.READ: Capability.READ,
    AccessMode.WRITE: Capability.WRITE,
    AccessMode.READ_WRITE: Capability.READ | Capability.WRITE,
    AccessMode.WRITE_APPEND: Capability.WRITE,
}


def status_from_error(error: OSError | None) -> Status:
    """Map an OS error to a handle status.

    Permission problems are IO_ERROR; everything else, including a
    failure with no error at all, is UNKNOWN_ERROR.
    """
    if error is not None and error.errno == errno.EACCES:
        return Status.IO_ERROR
    return Status.UNKNOWN_ERROR


def _default_opener(path: str, mode: str) -> IO[bytes]:
    return open(path, mode)


class FileHandle:
    """Exclusively owned, status-gated handle to one OS file.

    Starts CLOSED with no capability. ``open`` sets the capability for the
    access mode; ``close`` (also run on context exit and garbage
    collection) releases the file and clears it. Handles cannot be copied.
    """

    def __init__(
        self,
        opener: Opener | None = None,
        contracts: Contracts | None = None,
        max_path_length: int = MAX_PATH_LENGTH,
    ) -> None:
        """Initialize a closed handle.

        Args:
            opener: Callable taking (path, mode) and returning a binary file
                object. Defaults to the builtin open.
            contracts: Precondition policy. Defaults to strict unless Python
                runs with -O.
            max_path_length: Path length above which open logs a warning.
        """
        self._file: IO[bytes] | None = None
        self._status = Status.CLOSED
        self._capability = Capability.NONE
        self._opener = opener or _default_opener
        self._contracts = contracts or Contracts()
        self._max_path_length = max_path_length

    @classmethod
    def create(cls, config: PlatformConfig) -> FileHandle:
        """Create a handle configured from PlatformConfig.

        Args:
            config: Platform configuration.

        Returns:
            Closed FileHandle using the configured contract policy.
        """
        return cls(
            contracts=Contracts(strict=config.strict_contracts),
            max_path_length=config.max_path_length,
        )

    @property
    def status(self) -> Status:
        """Current status."""
        return self._status

    @property
    def capability(self) -> Capability:
        """Capabilities granted by the last successful open."""
        return self._capability

    @property
    def is_open(self) -> bool:
        """True while an OS file is held."""
        return self._file is not None

    def has_capability(self, cap: Capability) -> bool:
        """Check whether any bit of ``cap`` is granted."""
        return bool(self._capability & cap)

    def open(self, path: str, mode: AccessMode) -> Status:
        """Open a file, closing any file already held.

        READ requires an existing file. WRITE creates or truncates.
        WRITE_APPEND creates if absent and appends. READ_WRITE creates if
        absent, appends on write, and is positioned at the start.

        Args:
            path: File to open.
            mode: Access mode.

        Returns:
            OK on success (END_OF_STREAM for an empty READ_WRITE file),
            otherwise IO_ERROR or UNKNOWN_ERROR.
        """
        check_path_length(path, "FileHandle.open", self._max_path_length)

        if self._status is not Status.CLOSED:
            self.close()

        if not self._contracts.require(mode in _OPEN_MODES, f"FileHandle.open: bad access mode {mode!r}"):
            return self._status

        try:
            self._file = self._opener(path, _OPEN_MODES[mode])
        except OSError as e:
            logger.debug("Failed to open %s (%s): %s", path, mode.value, e)
            return self._set_error(e)

        self._capability = _CAPABILITIES[mode]
        # Status must be OK before positioning
        self._status = Status.OK

        if mode is AccessMode.READ_WRITE:
            self.set_position(0)

        return self._status

    def get_position(self) -> int:
        """Get the current byte offset, or 0 if it cannot be determined."""
        if not self._check_open("get_position"):
            return 0
        try:
            return self._file.tell()
        except OSError as e:
            self._set_error(e)
            return 0

    def set_position(self, position: int, absolute: bool = True) -> Status:
        """Move the file position.

        Seeking past the end is allowed. The resulting status is
        END_OF_STREAM when the new position is at or beyond the file size,
        otherwise OK. Has no effect while the status is an error.

        Args:
            position: Target offset, or delta when ``absolute`` is False.
            absolute: Position from the start of the file.

        Returns:
            The resulting status.
        """
        if not self._check_open("set_position"):
            return self._status

        if self._status not in (Status.OK, Status.END_OF_STREAM):
            return self._status

        try:
            if absolute:
                if not self._contracts.require(
                    position >= 0, "FileHandle.set_position: negative absolute position"
                ):
                    return self._status
                self._file.seek(position, os.SEEK_SET)
            else:
                if not self._contracts.require(
                    self._file.tell() + position >= 0,
                    "FileHandle.set_position: negative relative position",
                ):
                    return self._status
                self._file.seek(position, os.SEEK_CUR)
            final_position = self._file.tell()
        except OSError as e:
            return self._set_error(e)

        if final_position >= self.get_size():
            self._status = Status.END_OF_STREAM
        else:
            self._status = Status.OK
        return self._status

    def get_size(self) -> int:
        """Get the file's size in bytes.

        Returns:
            The size while the status is OK or END_OF_STREAM, else 0.
            Also 0 if the OS query fails.
        """
        self._contracts.warn(self._status is not Status.CLOSED, "FileHandle.get_size: file closed")

        if self._status not in (Status.OK, Status.END_OF_STREAM) or self._file is None:
            return 0
        try:
            return os.fstat(self._file.fileno()).st_size
        except OSError:
            return 0

    def read(self, size: int, dst: bytearray | memoryview) -> IOResult:
        """Read up to ``size`` bytes into ``dst``.

        Reads only while the status is OK. A short read sets END_OF_STREAM.

        Args:
            size: Number of bytes requested.
            dst: Writable buffer of at least ``size`` bytes.

        Returns:
            IOResult with the resulting status and the bytes read.
        """
        if not self._check_open("read"):
            return IOResult(self._status)
        if not (
            self._contracts.require(dst is not None, "FileHandle.read: no destination buffer")
            and self._contracts.require(
                self.has_capability(Capability.READ), "FileHandle.read: file lacks read capability"
            )
            and self._contracts.require(
                0 <= size <= len(dst), "FileHandle.read: destination buffer smaller than size"
            )
        ):
            return IOResult(self._status)
        self._contracts.warn(size != 0, "FileHandle.read: size of zero")

        if self._status is not Status.OK or size == 0:
            return IOResult(self._status)

        try:
            count = self._file.readinto(memoryview(dst)[:size]) or 0
        except OSError as e:
            return IOResult(self._set_error(e))

        if count != size:
            self._status = Status.END_OF_STREAM
        return IOResult(self._status, count)

    def write(self, size: int, src: bytes | bytearray | memoryview) -> IOResult:
        """Write exactly ``size`` bytes from ``src``.

        Writes only while the status is OK or END_OF_STREAM. A short write
        sets an error status.

        Args:
            size: Number of bytes to write.
            src: Buffer holding at least ``size`` bytes.

        Returns:
            IOResult with the resulting status and the bytes written.
        """
        if not self._check_open("write"):
            return IOResult(self._status)
        if not (
            self._contracts.require(src is not None, "FileHandle.write: no source buffer")
            and self._contracts.require(
                self.has_capability(Capability.WRITE), "FileHandle.write: file lacks write capability"
            )
            and self._contracts.require(
                0 <= size <= len(src), "FileHandle.write: source buffer smaller than size"
            )
        ):
            return IOResult(self._status)
        self._contracts.warn(size != 0, "FileHandle.write: size of zero")

        if self._status not in (Status.OK, Status.END_OF_STREAM) or size == 0:
            return IOResult(self._status)

        try:
            count = self._file.write(memoryview(src)[:size])
        except OSError as e:
            written = getattr(e, "characters_written", 0)
            return IOResult(self._set_error(e), min(written, size))

        count = count or 0
        if count != size:
            self._set_error(None)
        return IOResult(self._status, count)

    def flush(self) -> Status:
        """Push buffered writes to the OS."""
        if not self._check_open("flush"):
            return self._status
        if not self._contracts.require(
            self.has_capability(Capability.WRITE), "FileHandle.flush: cannot flush a read-only file"
        ):
            return self._status

        try:
            self._file.flush()
        except OSError as e:
            return self._set_error(e)
        self._status = Status.OK
        return self._status

    def close(self) -> Status:
        """Release the file.

        The handle is CLOSED afterwards even if the OS reports a failure;
        that failure is returned as IO_ERROR or UNKNOWN_ERROR.

        Returns:
            CLOSED, or the mapped error status of a failed release.
        """
        if self._status is Status.CLOSED:
            return self._status

        file, self._file = self._file, None
        self._capability = Capability.NONE
        self._status = Status.CLOSED

        if file is not None:
            try:
                file.close()
            except OSError as e:
                logger.warning("Failed to close file: %s", e)
                return status_from_error(e)
        return self._status

    def _check_open(self, operation: str) -> bool:
        return self._contracts.require(
            self._status is not Status.CLOSED, f"FileHandle.{operation}: file closed"
        ) and self._contracts.require(
            self._file is not None, f"FileHandle.{operation}: invalid file handle"
        )

    def _set_error(self, error: OSError | None) -> Status:
        self._status = status_from_error(error)
        return self._status

    def __enter__(self) -> FileHandle:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def __del__(self) -> None:
        if getattr(self, "_file", None) is not None:
            self.close()

    def __copy__(self) -> FileHandle:
        raise TypeError("FileHandle cannot be copied")

    def __deepcopy__(self, memo: dict[int, Any]) -> FileHandle:
        raise TypeError("FileHandle cannot be copied")

    def __repr__(self) -> str:
        return f"FileHandle(status={self._status.value}, capability={self._capability!r})"

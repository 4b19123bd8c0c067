"""Platform file layer: status-gated file handles and directory traversal."""

__version__ = "0.1.0"

# Export the public API for callers and dependency injection
from platform_fileio.contracts import ContractViolation, Contracts
from platform_fileio.filehandle import FileHandle
from platform_fileio.filesystem import PlatformFileSystem
from platform_fileio.filters import (
    DirectoryFilter,
    add_excluded_directory,
    init_excluded_directories,
    is_excluded_directory,
)
from platform_fileio.protocols import DirectoryWalker, ExclusionSet, FileSystem, StringTable
from platform_fileio.types import AccessMode, Capability, FileInfo, FileTimes, IOResult, Status
from platform_fileio.walker import UNLIMITED_DEPTH, TreeWalker

__all__ = [
    "__version__",
    "AccessMode",
    "Capability",
    "ContractViolation",
    "Contracts",
    "DirectoryFilter",
    "DirectoryWalker",
    "ExclusionSet",
    "FileHandle",
    "FileInfo",
    "FileSystem",
    "FileTimes",
    "IOResult",
    "PlatformFileSystem",
    "Status",
    "StringTable",
    "TreeWalker",
    "UNLIMITED_DEPTH",
    "add_excluded_directory",
    "init_excluded_directories",
    "is_excluded_directory",
]

"""Application context for dependency injection.

This module separates object creation from object use. Each context
owns its own DirectoryFilter, so traversals wired through different
contexts never share exclusion state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from platform_fileio.config import PlatformConfig
from platform_fileio.filehandle import FileHandle
from platform_fileio.filters import DirectoryFilter
from platform_fileio.protocols import DirectoryWalker, FileSystem, StringTable


def _default_strings() -> StringTable:
    """Create the default string interning service."""
    from platform_fileio.stringtable import InternTable
    return InternTable()


@dataclass
class AppContext:
    """Container for the file layer's services.

    Dependencies are typed using Protocol interfaces, not concrete classes,
    so test doubles can be injected without inheritance.
    """

    config: PlatformConfig
    exclusions: DirectoryFilter
    walker: DirectoryWalker
    filesystem: FileSystem
    strings: StringTable = field(default_factory=_default_strings)

    def new_file(self) -> FileHandle:
        """Create a closed FileHandle using this context's configuration."""
        return FileHandle.create(self.config)


def create_context(
    config: PlatformConfig | None = None,
    config_path: Path | None = None,
) -> AppContext:
    """Factory for application dependencies.

    Use this in production code. For tests, construct AppContext directly
    with test doubles.

    Args:
        config: Explicit configuration.
        config_path: YAML file to load when ``config`` is not given.
            Falls back to ~/.platform-fileio/config.yaml, then defaults.

    Returns:
        Configured AppContext.
    """
    from platform_fileio.filesystem import PlatformFileSystem
    from platform_fileio.stringtable import InternTable
    from platform_fileio.walker import TreeWalker

    if config is None:
        config = PlatformConfig.from_file(config_path) if config_path else PlatformConfig.load_default()

    strings = InternTable()
    exclusions = DirectoryFilter(defaults=config.excluded_directories)
    walker = TreeWalker.create(config, exclusions=exclusions, strings=strings)
    filesystem = PlatformFileSystem.create(config, strings=strings)

    return AppContext(
        config=config,
        exclusions=exclusions,
        walker=walker,
        filesystem=filesystem,
        strings=strings,
    )

"""Configuration for the platform file layer."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field

from platform_fileio.paths import MAX_PATH_LENGTH

# Default configuration location
CONFIG_DIR = Path.home() / ".platform-fileio"
CONFIG_FILE = CONFIG_DIR / "config.yaml"

DEFAULT_EXCLUDED_DIRECTORIES = [".svn", "CVS"]


class PlatformConfig(BaseModel):
    """Settings shared by file handles, traversal and path creation."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    excluded_directories: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXCLUDED_DIRECTORIES),
        alias="excludedDirectories",
    )
    strict_contracts: bool = Field(default=__debug__, alias="strictContracts")
    max_path_length: int = Field(default=MAX_PATH_LENGTH, gt=0, alias="maxPathLength")
    # Shared install locations must stay writable for everyone
    directory_mode: int = Field(default=0o777, ge=0, le=0o7777, alias="directoryMode")

    @classmethod
    def from_file(cls, path: Path) -> PlatformConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML file.

        Returns:
            Parsed PlatformConfig.

        Raises:
            FileNotFoundError: If file doesn't exist.
            ValueError: If the YAML is invalid or holds unknown keys.
        """
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        try:
            data = yaml.safe_load(path.read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Config file must hold a mapping: {path}")
        return cls.model_validate(data)

    @classmethod
    def load_default(cls) -> PlatformConfig:
        """Load ~/.platform-fileio/config.yaml, or defaults if it is absent."""
        if CONFIG_FILE.exists():
            return cls.from_file(CONFIG_FILE)
        return cls()

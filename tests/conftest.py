"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from platform_fileio.contracts import Contracts
from platform_fileio.filehandle import FileHandle
from platform_fileio.filters import DirectoryFilter
from platform_fileio.walker import TreeWalker


@pytest.fixture
def strict_handle() -> FileHandle:
    """Create a handle whose contract violations raise."""
    return FileHandle(contracts=Contracts(strict=True))


@pytest.fixture
def tolerant_handle() -> FileHandle:
    """Create a handle whose contract violations are logged no-ops."""
    return FileHandle(contracts=Contracts(strict=False))


@pytest.fixture
def sample_file(tmp_path: Path) -> Path:
    """Create a file holding ten known bytes."""
    path = tmp_path / "sample.bin"
    path.write_bytes(b"0123456789")
    return path


# ============================================================================
# Directory Tree Fixtures
# ============================================================================


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    """Create a directory tree for traversal tests.

    Layout:
        root/a.txt          (3 bytes)
        root/.svn/entries
        root/x/
        root/y/b.txt        (5 bytes)
        root/y/z/c.txt      (0 bytes)
    """
    root = tmp_path / "root"
    (root / "x").mkdir(parents=True)
    (root / ".svn").mkdir()
    (root / ".svn" / "entries").write_text("svn")
    (root / "y" / "z").mkdir(parents=True)
    (root / "a.txt").write_bytes(b"abc")
    (root / "y" / "b.txt").write_bytes(b"hello")
    (root / "y" / "z" / "c.txt").touch()
    return root


@pytest.fixture
def exclusions() -> DirectoryFilter:
    """Create an independent exclusion set seeded with the defaults."""
    return DirectoryFilter()


@pytest.fixture
def walker(exclusions: DirectoryFilter) -> TreeWalker:
    """Create a walker bound to an independent exclusion set."""
    return TreeWalker(exclusions=exclusions)

"""
Test Configuration - Shared fixtures for file indexer tests.

Uses pytest fixtures to create isolated test environments.
"""

import shutil
import tempfile
from pathlib import Path
from typing import Generator

import pytest

from fileindex.config import IndexerConfig, set_config


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    tmp = tempfile.mkdtemp(prefix="fileindex_test_")
    # Resolve to handle macOS /var -> /private/var symlink
    resolved = Path(tmp).resolve()
    yield resolved
    shutil.rmtree(str(resolved), ignore_errors=True)


@pytest.fixture
def test_config() -> Generator[IndexerConfig, None, None]:
    """Create an isolated test configuration."""
    config = IndexerConfig(
        workers=4,
        queue_size=8,
        lock_stripes=8,
    )
    set_config(config)
    yield config
    set_config(None)


@pytest.fixture
def sample_tree(temp_dir: Path) -> dict[str, Path]:
    """
    Create the tree used by the end-to-end tests:

        a.txt
        b.txt
        sub/a.txt
    """
    files = {}

    a = temp_dir / "a.txt"
    a.write_text("top level a")
    files["a"] = a

    b = temp_dir / "b.txt"
    b.write_text("top level b")
    files["b"] = b

    sub = temp_dir / "sub"
    sub.mkdir()
    sub_a = sub / "a.txt"
    sub_a.write_text("nested a")
    files["sub_a"] = sub_a

    return files


@pytest.fixture
def many_files(temp_dir: Path) -> list[Path]:
    """Create 40 files spread over a few nested directories."""
    files = []
    for d in range(4):
        directory = temp_dir / f"dir_{d}" / "nested"
        directory.mkdir(parents=True)
        for i in range(10):
            f = directory / f"file_{d}_{i}.txt"
            f.write_text(f"Content {d}/{i}")
            files.append(f)
    return files

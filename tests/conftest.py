"""Shared pytest fixtures and configuration for the droplet-cli test suite.

Guidelines
----------
* No network access in any test; the droplet runner is always a mock.
* Filesystem tests work inside ``tmp_path`` only.
* Core tests must be pure — no side effects.
"""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from droplet_cli.infra.packager import FilesystemPackager

# (relative path, content or None for a directory, mode), in archive order.
SAMPLE_TREE: tuple[tuple[str, bytes | None, int], ...] = (
    ("aaa", b"AAAAAAAAA", 0o700),
    ("bbb", b"BBBBBBB", 0o750),
    ("ccc", b"CCCCCC", 0o644),
    ("subfolder", None, 0o755),
    ("subfolder/sub", b"SUBSUB", 0o644),
)


def build_tree(root: Path) -> Path:
    """Materialise :data:`SAMPLE_TREE` under *root* with exact modes."""
    for rel, content, _mode in SAMPLE_TREE:
        target = root / rel
        if content is None:
            target.mkdir()
        else:
            target.write_bytes(content)
    # chmod after creation so the process umask cannot interfere.
    for rel, _content, mode in SAMPLE_TREE:
        os.chmod(root / rel, mode)
    return root


@pytest.fixture
def droplet_tree(tmp_path: Path) -> Path:
    """A directory holding the sample tree."""
    root = tmp_path / "tar_contents"
    root.mkdir()
    return build_tree(root)


@pytest.fixture
def archive_dir(tmp_path: Path) -> Path:
    """Separate directory receiving generated archives."""
    out = tmp_path / "archives"
    out.mkdir()
    return out


@pytest.fixture
def packager(archive_dir: Path) -> FilesystemPackager:
    return FilesystemPackager(temp_dir=str(archive_dir))


@pytest.fixture
def runner() -> MagicMock:
    """Recording stand-in for the droplet store; every call succeeds."""
    mock = MagicMock()
    mock.list_droplets.return_value = []
    return mock


@pytest.fixture
def sample_tree() -> tuple[tuple[str, bytes | None, int], ...]:
    """The ``(path, content, mode)`` triples of :func:`droplet_tree`, in order."""
    return SAMPLE_TREE

"""Tests for path resolution (infra/packager.py)."""

from __future__ import annotations

from pathlib import Path

import pytest

from droplet_cli.exceptions import FileSystemError
from droplet_cli.infra.archiver import read_archive_entries
from droplet_cli.infra.packager import FilesystemPackager


class TestResolve:
    def test_file_is_returned_unchanged(
        self, packager: FilesystemPackager, tmp_path: Path,
    ) -> None:
        bits = tmp_path / "bits.zip"
        bits.write_bytes(b"PK")

        assert packager.resolve(str(bits)) == str(bits)
        assert packager.created_archives == ()

    def test_directory_is_archived(
        self, packager: FilesystemPackager, droplet_tree: Path, archive_dir: Path,
    ) -> None:
        artifact = packager.resolve(str(droplet_tree))

        assert artifact.endswith(".tar")
        assert Path(artifact).parent == archive_dir
        assert packager.created_archives == (artifact,)
        assert [e.name for e in read_archive_entries(artifact)][:3] == [
            "aaa", "bbb", "ccc",
        ]

    def test_missing_path(self, packager: FilesystemPackager, tmp_path: Path) -> None:
        missing = str(tmp_path / "non_existent_file")

        with pytest.raises(FileSystemError) as exc_info:
            packager.resolve(missing)

        assert str(exc_info.value) == f"Error opening {missing}"
        assert exc_info.value.path == missing
        assert packager.created_archives == ()


class TestPackageDirectory:
    def test_always_archives(
        self, packager: FilesystemPackager, droplet_tree: Path,
    ) -> None:
        artifact = packager.package_directory(str(droplet_tree))
        assert len(read_archive_entries(artifact)) == 5

    def test_file_cannot_be_packaged(
        self, packager: FilesystemPackager, droplet_tree: Path,
    ) -> None:
        with pytest.raises(FileSystemError, match="Error archiving"):
            packager.package_directory(str(droplet_tree / "aaa"))
        assert packager.created_archives == ()


class TestCleanup:
    def test_removes_created_archives(
        self, packager: FilesystemPackager, droplet_tree: Path,
    ) -> None:
        first = packager.package_directory(str(droplet_tree))
        second = packager.resolve(str(droplet_tree))

        packager.cleanup()

        assert not Path(first).exists()
        assert not Path(second).exists()
        assert packager.created_archives == ()

    def test_leaves_user_files_alone(
        self, packager: FilesystemPackager, droplet_tree: Path,
    ) -> None:
        packager.resolve(str(droplet_tree / "aaa"))
        packager.cleanup()
        assert (droplet_tree / "aaa").exists()

    def test_idempotent(self, packager: FilesystemPackager, droplet_tree: Path) -> None:
        artifact = packager.package_directory(str(droplet_tree))
        Path(artifact).unlink()
        packager.cleanup()
        packager.cleanup()

"""Filesystem-backed :class:`~droplet_cli.core.protocols.ArtifactPackager`.

Decides whether a user-supplied path can be uploaded as-is (a file) or
must be archived first (a directory), using a single ``os.stat`` call.
Archives created here are tracked so the CLI can remove them once the
command has finished.
"""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path

from droplet_cli.exceptions import FileSystemError
from droplet_cli.infra.archiver import archive_directory

logger = logging.getLogger(__name__)


class FilesystemPackager:
    """Concrete :class:`ArtifactPackager` working on the local filesystem.

    This class satisfies the
    :class:`~droplet_cli.core.protocols.ArtifactPackager` protocol
    structurally — no explicit inheritance required.

    Parameters
    ----------
    temp_dir:
        Where archives are written; ``None`` means the system temp dir.
    """

    def __init__(self, temp_dir: str | None = None) -> None:
        self._temp_dir: str | None = temp_dir
        self._created: list[str] = []

    @property
    def created_archives(self) -> tuple[str, ...]:
        """Paths of every archive produced by this packager, oldest first."""
        return tuple(self._created)

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def resolve(self, path: str) -> str:
        """Return *path* for a file, or a new archive of a directory.

        Raises
        ------
        FileSystemError
            ``"Error opening <path>"`` when *path* cannot be stat-ed, or
            the archiver's error when packaging fails.
        """
        try:
            st = os.stat(path)
        except OSError as exc:
            raise FileSystemError(
                f"Error opening {path}",
                path=path,
                hint=exc.strerror,
            ) from exc

        if stat.S_ISDIR(st.st_mode):
            return self.package_directory(path)

        logger.debug("uploading %s as-is", path)
        return path

    def package_directory(self, path: str) -> str:
        """Archive the directory at *path* and remember the result."""
        archive_path = archive_directory(path, temp_dir=self._temp_dir)
        self._created.append(archive_path)
        logger.info("packaged %s into %s", path, archive_path)
        return archive_path

    # ------------------------------------------------------------------
    # Cleanup
    # ------------------------------------------------------------------

    def cleanup(self) -> None:
        """Delete every archive this packager created (idempotent)."""
        while self._created:
            archive_path = self._created.pop()
            try:
                Path(archive_path).unlink(missing_ok=True)
            except OSError as exc:
                logger.warning("could not remove %s: %s", archive_path, exc)

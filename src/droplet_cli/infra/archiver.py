"""Infrastructure: packaging a directory tree into a tar archive.

This module is the **only** place in the codebase that writes archives.
The layout of the produced stream is part of the upload contract:

* one entry per file or sub-directory, named relative to the root
  (posix separators, the root itself is never emitted);
* depth-first order, siblings sorted by name, a directory's contents
  immediately after the directory entry;
* permission bits copied verbatim from ``lstat``; owner ids and names
  zeroed.

Rules
-----
* Symbolic links and special files abort the whole operation.
* Every ``OSError`` / ``tarfile.TarError`` is re-raised as
  :class:`~droplet_cli.exceptions.FileSystemError`.
* A failed archive is removed; its path is never returned.
* The archive being written is never packaged into itself, even when
  the temp directory lies inside the packaged tree.
"""

from __future__ import annotations

import logging
import os
import stat
import tarfile
import tempfile
from collections.abc import Iterator
from pathlib import Path

from droplet_cli.core.models import ArchiveEntry, EntryKind
from droplet_cli.exceptions import FileSystemError

logger = logging.getLogger(__name__)

ARCHIVE_SUFFIX: str = ".tar"
ARCHIVE_PREFIX: str = "droplet-"


# ---------------------------------------------------------------------------
# Traversal
# ---------------------------------------------------------------------------

def _entry_for(path: Path, arcname: str, st: os.stat_result) -> ArchiveEntry:
    """Build the :class:`ArchiveEntry` for *path* from its ``lstat`` result."""
    mode = stat.S_IMODE(st.st_mode)
    if stat.S_ISDIR(st.st_mode):
        return ArchiveEntry(name=arcname, kind=EntryKind.DIRECTORY, mode=mode)
    if stat.S_ISREG(st.st_mode):
        return ArchiveEntry(
            name=arcname, kind=EntryKind.FILE, mode=mode, size=st.st_size,
        )
    raise FileSystemError(
        f"Error archiving {path}: unsupported file type",
        path=str(path),
        hint="Only regular files and directories can be packaged.",
    )


def walk_tree(
    root: str | os.PathLike[str],
    *,
    exclude: str | os.PathLike[str] | None = None,
) -> Iterator[tuple[Path, ArchiveEntry]]:
    """Yield ``(source_path, entry)`` pairs in archive order.

    *exclude* names a file to leave out wherever it appears in the tree,
    matched by device and inode.  :func:`archive_directory` passes its
    own output file so an archive written inside *root* never contains
    itself.

    Raises
    ------
    FileSystemError
        For symlinks, special files, or any unreadable directory.
    """
    skip: tuple[int, int] | None = None
    if exclude is not None:
        try:
            excluded = os.stat(exclude)
        except OSError as exc:
            raise FileSystemError(
                f"Error archiving {root}: {exc.strerror or exc}",
                path=str(exclude),
            ) from exc
        skip = (excluded.st_dev, excluded.st_ino)

    def _walk(directory: Path, prefix: str) -> Iterator[tuple[Path, ArchiveEntry]]:
        try:
            names = sorted(os.listdir(directory))
        except OSError as exc:
            raise FileSystemError(
                f"Error archiving {directory}: {exc.strerror or exc}",
                path=str(directory),
            ) from exc

        for name in names:
            path = directory / name
            try:
                st = os.lstat(path)
            except OSError as exc:
                raise FileSystemError(
                    f"Error archiving {path}: {exc.strerror or exc}",
                    path=str(path),
                ) from exc
            if (st.st_dev, st.st_ino) == skip:
                logger.debug("skipping %s (archive being written)", path)
                continue
            entry = _entry_for(path, prefix + name, st)
            yield path, entry
            if entry.is_dir:
                yield from _walk(path, entry.name + "/")

    yield from _walk(Path(root), "")


# ---------------------------------------------------------------------------
# Writing
# ---------------------------------------------------------------------------

def _tarinfo(entry: ArchiveEntry, mtime: float) -> tarfile.TarInfo:
    info = tarfile.TarInfo(entry.name)
    info.mode = entry.mode
    info.mtime = int(mtime)
    info.uid = info.gid = 0
    info.uname = info.gname = ""
    if entry.is_dir:
        info.type = tarfile.DIRTYPE
        info.size = 0
    else:
        info.type = tarfile.REGTYPE
        info.size = entry.size
    return info


def _add(tar: tarfile.TarFile, path: Path, entry: ArchiveEntry) -> None:
    logger.debug("archiving %s (%s, %04o)", entry.name, entry.kind.value, entry.mode)
    try:
        info = _tarinfo(entry, os.lstat(path).st_mtime)
        if entry.is_dir:
            tar.addfile(info)
            return
        with open(path, "rb") as fh:
            tar.addfile(info, fh)
    except (OSError, tarfile.TarError) as exc:
        reason = getattr(exc, "strerror", None) or exc
        raise FileSystemError(
            f"Error archiving {path}: {reason}",
            path=str(path),
        ) from exc


def archive_directory(
    root: str | os.PathLike[str],
    *,
    temp_dir: str | None = None,
) -> str:
    """Write the tree under *root* to a new ``.tar`` temp file.

    Parameters
    ----------
    root:
        Directory to package.  Entries are named relative to it.
    temp_dir:
        Directory for the archive; defaults to the system temp dir.

    Returns
    -------
    str
        Path of the finished archive.  The caller owns the file.

    Raises
    ------
    FileSystemError
        When any part of the tree cannot be read or packaged.
    """
    try:
        fd, archive_path = tempfile.mkstemp(
            prefix=ARCHIVE_PREFIX, suffix=ARCHIVE_SUFFIX, dir=temp_dir,
        )
    except OSError as exc:
        raise FileSystemError(
            f"Error creating archive for {root}: {exc.strerror or exc}",
            path=str(root),
        ) from exc

    count = 0
    try:
        with os.fdopen(fd, "wb") as fileobj:
            with tarfile.open(
                fileobj=fileobj, mode="w", format=tarfile.PAX_FORMAT,
            ) as tar:
                for path, entry in walk_tree(root, exclude=archive_path):
                    _add(tar, path, entry)
                    count += 1
    except (OSError, tarfile.TarError) as exc:
        Path(archive_path).unlink(missing_ok=True)
        raise FileSystemError(
            f"Error archiving {root}: {exc}",
            path=str(root),
        ) from exc
    except FileSystemError:
        Path(archive_path).unlink(missing_ok=True)
        raise

    logger.debug("wrote %d entries from %s to %s", count, root, archive_path)
    return archive_path


# ---------------------------------------------------------------------------
# Reading back
# ---------------------------------------------------------------------------

def read_archive_entries(archive_path: str | os.PathLike[str]) -> list[ArchiveEntry]:
    """Return the entries of *archive_path* in stream order.

    Raises
    ------
    FileSystemError
        If the archive cannot be opened, is corrupt, or holds members
        other than regular files and directories.
    """
    entries: list[ArchiveEntry] = []
    try:
        with tarfile.open(archive_path, mode="r:") as tar:
            for member in tar:
                if member.isdir():
                    kind = EntryKind.DIRECTORY
                elif member.isfile():
                    kind = EntryKind.FILE
                else:
                    raise FileSystemError(
                        f"Unsupported archive member {member.name}",
                        path=str(archive_path),
                    )
                entries.append(
                    ArchiveEntry(
                        name=member.name,
                        kind=kind,
                        mode=member.mode,
                        size=member.size,
                    )
                )
    except (OSError, tarfile.TarError) as exc:
        raise FileSystemError(
            f"Error reading archive {archive_path}: {exc}",
            path=str(archive_path),
        ) from exc
    return entries

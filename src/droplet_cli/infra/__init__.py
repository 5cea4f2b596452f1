"""Infrastructure layer — filesystem packaging and the droplet store client.

This layer wraps all interaction with the operating system and the
network.  Every raw ``OSError`` or ``urllib`` exception must be caught
here and re-raised as a :class:`~droplet_cli.exceptions.DropletError`
subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from droplet_cli.infra.archiver import archive_directory, read_archive_entries
from droplet_cli.infra.config import DropletConfig, load_config
from droplet_cli.infra.http_runner import HttpDropletRunner
from droplet_cli.infra.packager import FilesystemPackager

__all__: list[str] = [
    "DropletConfig",
    "FilesystemPackager",
    "HttpDropletRunner",
    "archive_directory",
    "load_config",
    "read_archive_entries",
]

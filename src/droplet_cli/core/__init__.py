"""Core / service layer — pure command logic and data transformations.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O; both arrive through protocols.
* No imports from ``cli`` or ``infra``.
* All functions must be fully typed and deterministic.
"""

from droplet_cli.core.commands import (
    build_droplet,
    launch_droplet,
    list_droplets,
    upload_bits,
)
from droplet_cli.core.models import (
    ArchiveEntry,
    CommandOutcome,
    Droplet,
    EntryKind,
    OutcomeKind,
)
from droplet_cli.core.protocols import ArtifactPackager, DropletRunner

__all__: list[str] = [
    "ArchiveEntry",
    "ArtifactPackager",
    "CommandOutcome",
    "Droplet",
    "DropletRunner",
    "EntryKind",
    "OutcomeKind",
    "build_droplet",
    "launch_droplet",
    "list_droplets",
    "upload_bits",
]

"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — preserving the dependency inversion principle.
"""

from __future__ import annotations

from typing import Protocol

from droplet_cli.core.models import Droplet


class DropletRunner(Protocol):
    """Contract for the remote droplet store and runner.

    Any object that implements these four methods satisfies this
    protocol structurally (no explicit inheritance required).  Failures
    are signalled by raising; the command layer converts every
    exception into a classified outcome.
    """

    def upload_bits(self, droplet_name: str, artifact_path: str) -> None:
        """Upload the file at *artifact_path* as the bits of *droplet_name*."""
        ...  # pragma: no cover

    def build_droplet(self, droplet_name: str, buildpack_url: str) -> None:
        """Request a remote build of previously uploaded bits."""
        ...  # pragma: no cover

    def list_droplets(self) -> list[Droplet]:
        """Return every droplet known to the store, in store order."""
        ...  # pragma: no cover

    def launch_droplet(self, droplet_name: str) -> None:
        """Start an application from *droplet_name*."""
        ...  # pragma: no cover


class ArtifactPackager(Protocol):
    """Contract for turning a user path into an uploadable artifact.

    Implementations must raise
    :class:`~droplet_cli.exceptions.FileSystemError` for any local
    failure.
    """

    def resolve(self, path: str) -> str:
        """Return *path* itself for a file, or a fresh archive for a directory.

        Raises
        ------
        FileSystemError
            When *path* does not exist or cannot be archived.
        """
        ...  # pragma: no cover

    def package_directory(self, path: str) -> str:
        """Archive the directory at *path* unconditionally."""
        ...  # pragma: no cover

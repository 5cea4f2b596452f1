"""Custom exception hierarchy for droplet-cli.

All exceptions that cross layer boundaries must inherit from
:class:`DropletError`.  Raw ``OSError`` and ``urllib`` exceptions must
NEVER propagate beyond the infrastructure layer — they must be caught
and re-raised as a typed subclass defined here.

Hierarchy
---------
DropletError
├── UsageError
├── FileSystemError
├── RemoteError
│   └── TargetNotConfiguredError
├── ConfigError
└── EnvironmentError
"""

from __future__ import annotations


class DropletError(Exception):
    """Base exception for all droplet-cli errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Argument validation ---------------------------------------------------

class UsageError(DropletError):
    """Raised when a command receives missing or malformed arguments."""


# --- Local packaging -------------------------------------------------------

class FileSystemError(DropletError):
    """Raised when a path cannot be opened or a directory cannot be archived.

    ``path`` names the filesystem object that failed.
    """

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.path: str | None = path


# --- Remote droplet store --------------------------------------------------

class RemoteError(DropletError):
    """Raised when a call against the droplet store fails."""


class TargetNotConfiguredError(RemoteError):
    """Raised when a remote call is attempted without a configured target."""


# --- Configuration ---------------------------------------------------------

class ConfigError(DropletError):
    """Raised when the configuration file or environment is malformed."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(DropletError):
    """Raised when a required runtime dependency is not available."""

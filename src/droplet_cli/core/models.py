"""Domain models for droplet-cli.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  They carry zero I/O, zero dependencies on
external packages, and must remain pure across the entire lifecycle.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime


# ---------------------------------------------------------------------------
# Droplet record
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Droplet:
    """A named, pre-built application artifact held by the droplet store."""

    name: str
    """Unique droplet name; also used as a path component on the store."""

    created_at: datetime | None = None
    """Creation time, or ``None`` for droplets stored before timestamps."""


# ---------------------------------------------------------------------------
# Archive entries
# ---------------------------------------------------------------------------

class EntryKind(enum.Enum):
    """Kind of filesystem object recorded in an archive."""

    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True, slots=True)
class ArchiveEntry:
    """One member of a packaged directory archive."""

    name: str
    """Posix-style path relative to the packaged root."""

    kind: EntryKind

    mode: int
    """Permission bits, e.g. ``0o644``."""

    size: int = 0
    """Content length in bytes; always ``0`` for directories."""

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY


# ---------------------------------------------------------------------------
# Command outcomes
# ---------------------------------------------------------------------------

class OutcomeKind(enum.Enum):
    """Exit classification of a single command step."""

    SUCCESS = "success"
    INVALID_SYNTAX = "invalid_syntax"
    FILE_SYSTEM_ERROR = "file_system_error"
    COMMAND_FAILED = "command_failed"


@dataclass(frozen=True, slots=True)
class CommandOutcome:
    """Result of one command step: a message plus its classification.

    ``lines`` carries pre-rendered output (e.g. the droplet table) that
    the CLI prints verbatim after the message.
    """

    message: str
    kind: OutcomeKind = OutcomeKind.SUCCESS
    lines: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS

    @classmethod
    def success(cls, message: str, *, lines: tuple[str, ...] = ()) -> CommandOutcome:
        return cls(message=message, lines=lines)

    @classmethod
    def failure(cls, message: str, kind: OutcomeKind) -> CommandOutcome:
        if kind is OutcomeKind.SUCCESS:
            raise ValueError("A failure outcome needs a failure classification.")
        return cls(message=message, kind=kind)

"""Exit-code constants used by the CLI layer.

Centralised here so that every exit path uses a well-known, tested
value rather than magic integers scattered across the codebase.
"""

from __future__ import annotations

from droplet_cli.core.models import OutcomeKind

SUCCESS: int = 0
"""Clean exit — command completed without error."""

COMMAND_FAILED: int = 1
"""A remote call failed, or a known DropletError was caught."""

INVALID_SYNTAX: int = 2
"""Missing or malformed arguments.  Matches argparse's own usage exit."""

FILE_SYSTEM_ERROR: int = 3
"""A local path could not be opened or packaged."""

UNEXPECTED_ERROR: int = 70
"""An unhandled exception escaped all known error boundaries (EX_SOFTWARE)."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""


_BY_OUTCOME: dict[OutcomeKind, int] = {
    OutcomeKind.SUCCESS: SUCCESS,
    OutcomeKind.INVALID_SYNTAX: INVALID_SYNTAX,
    OutcomeKind.FILE_SYSTEM_ERROR: FILE_SYSTEM_ERROR,
    OutcomeKind.COMMAND_FAILED: COMMAND_FAILED,
}


def for_outcome(kind: OutcomeKind) -> int:
    """Map a command outcome classification to its process exit code."""
    return _BY_OUTCOME[kind]

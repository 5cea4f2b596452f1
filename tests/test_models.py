"""Tests for domain models (core/models.py).

All models are frozen dataclasses — these tests verify immutability,
equality semantics, and the outcome constructors.
"""

from __future__ import annotations

from dataclasses import FrozenInstanceError
from datetime import datetime

import pytest

from droplet_cli.core.models import (
    ArchiveEntry,
    CommandOutcome,
    Droplet,
    EntryKind,
    OutcomeKind,
)


# ---------------------------------------------------------------------------
# Droplet
# ---------------------------------------------------------------------------

class TestDroplet:
    def test_fields_accessible(self) -> None:
        d = Droplet("drop-a", datetime(2015, 6, 15))
        assert d.name == "drop-a"
        assert d.created_at == datetime(2015, 6, 15)

    def test_created_at_defaults_to_none(self) -> None:
        assert Droplet("drop-a").created_at is None

    def test_frozen(self) -> None:
        d = Droplet("drop-a")
        with pytest.raises(FrozenInstanceError):
            d.name = "other"  # type: ignore[misc]

    def test_equality(self) -> None:
        assert Droplet("a", datetime(2015, 1, 1)) == Droplet("a", datetime(2015, 1, 1))
        assert Droplet("a") != Droplet("b")

    def test_hashable(self) -> None:
        assert len({Droplet("a"), Droplet("a"), Droplet("b")}) == 2


# ---------------------------------------------------------------------------
# ArchiveEntry
# ---------------------------------------------------------------------------

class TestArchiveEntry:
    def test_file_entry(self) -> None:
        entry = ArchiveEntry("aaa", EntryKind.FILE, 0o700, 9)
        assert not entry.is_dir
        assert entry.size == 9

    def test_directory_entry(self) -> None:
        entry = ArchiveEntry("subfolder", EntryKind.DIRECTORY, 0o755)
        assert entry.is_dir
        assert entry.size == 0

    def test_frozen(self) -> None:
        entry = ArchiveEntry("aaa", EntryKind.FILE, 0o644)
        with pytest.raises(FrozenInstanceError):
            entry.mode = 0o777  # type: ignore[misc]


# ---------------------------------------------------------------------------
# CommandOutcome
# ---------------------------------------------------------------------------

class TestCommandOutcome:
    def test_success(self) -> None:
        outcome = CommandOutcome.success("Droplet launched")
        assert outcome.ok
        assert outcome.kind is OutcomeKind.SUCCESS
        assert outcome.lines == ()

    def test_success_with_lines(self) -> None:
        outcome = CommandOutcome.success("", lines=("a", "b"))
        assert outcome.lines == ("a", "b")

    @pytest.mark.parametrize(
        "kind",
        [
            OutcomeKind.INVALID_SYNTAX,
            OutcomeKind.FILE_SYSTEM_ERROR,
            OutcomeKind.COMMAND_FAILED,
        ],
    )
    def test_failure(self, kind: OutcomeKind) -> None:
        outcome = CommandOutcome.failure("boom", kind)
        assert not outcome.ok
        assert outcome.kind is kind
        assert outcome.message == "boom"

    def test_failure_rejects_success_kind(self) -> None:
        with pytest.raises(ValueError):
            CommandOutcome.failure("boom", OutcomeKind.SUCCESS)

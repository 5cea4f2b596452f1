"""Pure sorting and rendering of droplet listings.

Every function in this module is a **pure** transformation — no I/O,
no side effects, fully deterministic, and trivially unit-testable.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from droplet_cli.core.models import Droplet

HEADER: str = "Droplet\t\tCreated At"

_MONTHS: tuple[str, ...] = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


# ---------------------------------------------------------------------------
# Sort
# ---------------------------------------------------------------------------

def sort_droplets(droplets: Sequence[Droplet]) -> list[Droplet]:
    """Order droplets newest first; undated droplets trail in input order."""
    dated: list[tuple[float, Droplet]] = [
        (d.created_at.timestamp(), d) for d in droplets if d.created_at is not None
    ]
    undated = [d for d in droplets if d.created_at is None]
    # sorted() is stable, so equal timestamps keep their input order too.
    dated.sort(key=_sort_key, reverse=True)
    return [d for _, d in dated] + undated


def _sort_key(pair: tuple[float, Droplet]) -> float:
    return pair[0]


# ---------------------------------------------------------------------------
# Render
# ---------------------------------------------------------------------------

def format_created_at(created_at: datetime) -> str:
    """Render ``created_at`` as ``"June 15, 2015"`` (no zero padding)."""
    month = _MONTHS[created_at.month - 1]
    return f"{month} {created_at.day}, {created_at.year}"


def render_row(droplet: Droplet) -> str:
    """Render one table row; undated droplets show only their name."""
    if droplet.created_at is None:
        return droplet.name
    return f"{droplet.name}\t\t{format_created_at(droplet.created_at)}"


def render_droplet_table(droplets: Sequence[Droplet]) -> list[str]:
    """Return the header line followed by one line per droplet, newest first."""
    return [HEADER, *(render_row(d) for d in sort_droplets(droplets))]

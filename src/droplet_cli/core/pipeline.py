"""Fail-fast step runner shared by multi-step commands.

A command is an ordered list of zero-argument steps, each returning a
:class:`~droplet_cli.core.models.CommandOutcome`.  Steps run in order
until one fails; later steps are never invoked.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from droplet_cli.core.models import CommandOutcome

Step = Callable[[], CommandOutcome]


def run_steps(steps: Iterable[Step]) -> tuple[CommandOutcome, ...]:
    """Run *steps* in order, stopping after the first failed outcome.

    Returns every outcome produced, so earlier success messages are
    still shown.  The last outcome carries the exit classification.
    """
    outcomes: list[CommandOutcome] = []
    for step in steps:
        outcome = step()
        outcomes.append(outcome)
        if not outcome.ok:
            break
    return tuple(outcomes)


def final_outcome(outcomes: tuple[CommandOutcome, ...]) -> CommandOutcome:
    """Return the outcome that decides the exit classification."""
    if not outcomes:
        raise ValueError("A command must produce at least one outcome.")
    return outcomes[-1]

"""Root logging configuration for the ``droplet`` command.

Diagnostics go through :mod:`logging` on stderr; user-facing results go
through :mod:`droplet_cli.cli.console` and never through logging.
"""

from __future__ import annotations

import logging

LOG_FORMAT: str = "%(levelname)s: %(message)s"


def level_for(verbose_count: int, quiet_count: int) -> int:
    """Map ``-v`` / ``-q`` counts to a root logging level.

    WARNING by default, INFO with ``-v``, DEBUG with ``-vv``, ERROR with
    ``-q``.  Quiet wins over verbose.
    """
    if quiet_count >= 1:
        return logging.ERROR
    if verbose_count >= 2:
        return logging.DEBUG
    if verbose_count == 1:
        return logging.INFO
    return logging.WARNING


def setup_logging(verbose_count: int = 0, quiet_count: int = 0) -> None:
    """Configure the root logger once per process."""
    root_level = level_for(verbose_count, quiet_count)
    logging.basicConfig(level=root_level, format=LOG_FORMAT)
    # basicConfig is a no-op once handlers exist; the level must still move.
    logging.getLogger().setLevel(root_level)

"""CLI console helpers with optional Rich support.

This module intentionally avoids module-level imports of optional UI
dependencies so bootstrap paths (``--help``, ``--version``) remain
functional even when Rich is not installed.

User-supplied text (droplet names, paths, server messages) is always
rendered as literal text, never parsed as Rich markup.
"""

from __future__ import annotations

import sys
from typing import Any

from droplet_cli.exceptions import EnvironmentError


def _load_rich() -> tuple[type[Any], type[Any]]:
    """Return ``(Console, Text)`` from Rich or raise ``EnvironmentError``."""
    try:
        from rich.console import Console
        from rich.text import Text
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Console, Text


class _ConsoleProxy:
    """Minimal output proxy with a plain ``print`` fallback."""

    def _emit(self, text: str, *, style: str | None, stderr: bool) -> None:
        try:
            console_class, text_class = _load_rich()
        except EnvironmentError:
            print(text, file=sys.stderr if stderr else sys.stdout)
            return
        console_class(stderr=stderr).print(
            text_class(text, style=style or ""),
            soft_wrap=True,
        )

    def line(self, text: str) -> None:
        """Print *text* unstyled on stdout."""
        self._emit(text, style=None, stderr=False)

    def success(self, text: str) -> None:
        """Print a success message on stdout."""
        self._emit(text, style="green", stderr=False)

    def error(self, text: str) -> None:
        """Print an error message on stderr."""
        self._emit(text, style="bold red", stderr=True)

    def hint(self, text: str) -> None:
        """Print follow-up guidance on stderr."""
        self._emit(text, style="yellow", stderr=True)


console = _ConsoleProxy()

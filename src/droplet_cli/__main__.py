"""Allow ``python -m droplet_cli`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m droplet_cli`` behaves identically to the ``droplet``
console script.
"""

from __future__ import annotations

from droplet_cli.cli.app import cli

if __name__ == "__main__":
    cli()

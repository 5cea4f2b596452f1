"""CLI application entry point and command routing for droplet-cli.

This module is the **sole error boundary** for the entire application.
It catches :class:`~droplet_cli.exceptions.DropletError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages via Rich and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — validation and sequencing belong to
  :mod:`droplet_cli.core.commands`, packaging and transport to ``infra``.
* ``print()`` is forbidden outside the CLI layer; the console proxy is
  used exclusively.
* This module is the only place that translates between command
  outcomes and the OS process exit code.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable
from typing import NoReturn

from droplet_cli.cli import exit_codes
from droplet_cli.cli.console import console
from droplet_cli.cli.logging_setup import setup_logging
from droplet_cli.core import commands
from droplet_cli.core.models import CommandOutcome, OutcomeKind
from droplet_cli.core.pipeline import final_outcome
from droplet_cli.core.protocols import DropletRunner
from droplet_cli.exceptions import DropletError
from droplet_cli.infra.packager import FilesystemPackager
from droplet_cli.version import __version__

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

class _ArgumentParser(argparse.ArgumentParser):
    """``ArgumentParser`` whose errors follow the incorrect-usage convention."""

    def error(self, message: str) -> NoReturn:
        console.error(f"{commands.INCORRECT_USAGE} {message}")
        console.hint(self.format_usage().strip())
        raise SystemExit(exit_codes.INVALID_SYNTAX)


def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser and its sub-commands.

    Positional arguments are optional at the grammar level so that the
    command layer owns arity validation and its exit classification.
    """
    parser = _ArgumentParser(
        prog="droplet",
        description="Upload, build, list and launch droplets.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--target",
        default=None,
        help="Droplet API base URL (overrides DROPLET_TARGET and the config file).",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v", "--verbose", action="count", default=0,
        help="Increase log output (-vv for debug).",
    )
    verbosity.add_argument(
        "-q", "--quiet", action="count", default=0,
        help="Only log errors.",
    )

    sub = parser.add_subparsers(dest="command", metavar="<command>")

    upload = sub.add_parser(
        "upload-bits",
        help="Upload a file, or an archived directory, as a droplet's bits.",
    )
    upload.add_argument("droplet_name", nargs="?", metavar="DROPLET_NAME")
    upload.add_argument("path", nargs="?", metavar="PATH")

    build = sub.add_parser(
        "build-droplet",
        help="Upload the current directory and build it with a buildpack.",
    )
    build.add_argument("droplet_name", nargs="?", metavar="DROPLET_NAME")
    build.add_argument("buildpack_url", nargs="?", metavar="BUILDPACK_URL")
    build.add_argument(
        "--source",
        default=".",
        metavar="DIR",
        help="Directory to package (default: current directory).",
    )

    sub.add_parser("list-droplets", help="List droplets, most recent first.")

    launch = sub.add_parser("launch-droplet", help="Launch an app from a droplet.")
    launch.add_argument("droplet_name", nargs="?", metavar="DROPLET_NAME")

    # Each sub-command carries its own usage line for the incorrect-usage hint.
    for subparser in sub.choices.values():
        subparser.set_defaults(usage=subparser.format_usage().strip())

    return parser


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def _render(outcomes: tuple[CommandOutcome, ...], usage: str) -> int:
    """Print every outcome in order and return the final exit code."""
    for outcome in outcomes:
        if outcome.ok:
            if outcome.message:
                console.success(outcome.message)
            for line in outcome.lines:
                console.line(line)
            continue
        console.error(outcome.message)
        if outcome.kind is OutcomeKind.INVALID_SYNTAX:
            console.hint(usage)
    return exit_codes.for_outcome(final_outcome(outcomes).kind)


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _default_runner(target: str | None) -> DropletRunner:
    """Build the store client; its configuration loads on first remote call."""
    from droplet_cli.infra.http_runner import HttpDropletRunner

    return HttpDropletRunner(target=target)


def _dispatch(
    args: argparse.Namespace,
    runner: DropletRunner,
    packager: FilesystemPackager,
) -> tuple[CommandOutcome, ...]:
    handlers: dict[str, Callable[[], tuple[CommandOutcome, ...]]] = {
        "upload-bits": lambda: commands.upload_bits(
            runner, packager, args.droplet_name, args.path,
        ),
        "build-droplet": lambda: commands.build_droplet(
            runner, packager, args.droplet_name, args.buildpack_url, args.source,
        ),
        "list-droplets": lambda: commands.list_droplets(runner),
        "launch-droplet": lambda: commands.launch_droplet(runner, args.droplet_name),
    }
    return handlers[args.command]()


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(
    argv: list[str] | None = None,
    *,
    runner: DropletRunner | None = None,
    packager: FilesystemPackager | None = None,
) -> int:
    """Run the droplet CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.
    runner:
        Droplet store client.  Defaults to an :class:`HttpDropletRunner`
        built from the configuration.
    packager:
        Local packager.  Defaults to a fresh :class:`FilesystemPackager`
        whose archives are deleted before returning.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose, args.quiet)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    owns_packager = packager is None
    active_packager = packager if packager is not None else FilesystemPackager()
    active_runner = runner if runner is not None else _default_runner(args.target)

    try:
        outcomes = _dispatch(args, active_runner, active_packager)
    finally:
        if owns_packager:
            active_packager.cleanup()

    code = _render(outcomes, args.usage)
    logger.debug("%s finished with exit code %d", args.command, code)
    return code


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except DropletError as exc:
        console.error(f"Error: {exc}")
        if exc.hint:
            console.hint(f"Hint: {exc.hint}")
        sys.exit(exit_codes.COMMAND_FAILED)
    except KeyboardInterrupt:
        console.hint("\nAborted by user.")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.error(
            "Unexpected error. Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)

"""Droplet commands: argument checks, step order and outcome classification.

Each public function implements one user-facing command as an
independent state machine.  Collaborators are passed in explicitly:

* a :class:`~droplet_cli.core.protocols.DropletRunner` for remote calls;
* an :class:`~droplet_cli.core.protocols.ArtifactPackager` for local
  packaging (upload and build only).

Guarantees
----------
* No exception escapes a command: validation problems, filesystem
  failures and runner errors all become a classified
  :class:`~droplet_cli.core.models.CommandOutcome`.
* A validation or filesystem failure prevents every later remote call.
* The last outcome returned carries the single exit classification.
"""

from __future__ import annotations

from collections.abc import Callable

from droplet_cli.core.listing import render_droplet_table
from droplet_cli.core.models import CommandOutcome, OutcomeKind
from droplet_cli.core.pipeline import run_steps
from droplet_cli.core.protocols import ArtifactPackager, DropletRunner
from droplet_cli.exceptions import FileSystemError, UsageError

INCORRECT_USAGE: str = "Incorrect Usage."

_PATH_SEPARATORS: tuple[str, ...] = ("/", "\\")


# ---------------------------------------------------------------------------
# Validation (pure)
# ---------------------------------------------------------------------------

def validate_droplet_name(droplet_name: str | None) -> str:
    """Return *droplet_name* or raise :class:`UsageError`.

    Names are used as path components on the droplet store, so they must
    be non-empty and free of path separators.
    """
    if not droplet_name:
        raise UsageError(INCORRECT_USAGE)
    if any(sep in droplet_name for sep in _PATH_SEPARATORS):
        raise UsageError(
            INCORRECT_USAGE,
            hint=f"Droplet name {droplet_name!r} must not contain path separators.",
        )
    return droplet_name


def _require_arguments(*values: str | None) -> tuple[str, ...]:
    """Return *values* unchanged, or raise :class:`UsageError` if any is missing."""
    present = tuple(value for value in values if value is not None)
    if len(present) != len(values):
        raise UsageError(INCORRECT_USAGE)
    return present


def _invalid_syntax(exc: UsageError) -> CommandOutcome:
    message = str(exc) if not exc.hint else f"{exc} {exc.hint}"
    return CommandOutcome.failure(message, OutcomeKind.INVALID_SYNTAX)


# ---------------------------------------------------------------------------
# Steps
# ---------------------------------------------------------------------------

def _upload_step(
    runner: DropletRunner,
    droplet_name: str,
    artifact_path: str,
) -> CommandOutcome:
    try:
        runner.upload_bits(droplet_name, artifact_path)
    except Exception as exc:
        return CommandOutcome.failure(
            f"Error uploading to {droplet_name}: {exc}",
            OutcomeKind.COMMAND_FAILED,
        )
    return CommandOutcome.success(f"Successfully uploaded {droplet_name}")


def _package_and_upload_step(
    runner: DropletRunner,
    droplet_name: str,
    package: Callable[[str], str],
    path: str,
) -> CommandOutcome:
    """Package *path* with *package*, then upload the artifact."""
    try:
        artifact_path = package(path)
    except FileSystemError as exc:
        return CommandOutcome.failure(str(exc), OutcomeKind.FILE_SYSTEM_ERROR)
    return _upload_step(runner, droplet_name, artifact_path)


def _build_step(
    runner: DropletRunner,
    droplet_name: str,
    buildpack_url: str,
) -> CommandOutcome:
    try:
        runner.build_droplet(droplet_name, buildpack_url)
    except Exception as exc:
        return CommandOutcome.failure(
            f"Error submitting build of {droplet_name}: {exc}",
            OutcomeKind.COMMAND_FAILED,
        )
    return CommandOutcome.success(f"Submitted build of {droplet_name}")


# ---------------------------------------------------------------------------
# Public commands
# ---------------------------------------------------------------------------

def upload_bits(
    runner: DropletRunner,
    packager: ArtifactPackager,
    droplet_name: str | None,
    path: str | None,
) -> tuple[CommandOutcome, ...]:
    """Upload a file, or an archive of a directory, as *droplet_name*'s bits.

    Outcomes
    --------
    * missing argument / bad name → ``INVALID_SYNTAX``
    * path missing or not archivable → ``FILE_SYSTEM_ERROR``
    * runner failure → ``COMMAND_FAILED``
    """
    try:
        given_name, artifact_source = _require_arguments(droplet_name, path)
        name = validate_droplet_name(given_name)
    except UsageError as exc:
        return (_invalid_syntax(exc),)

    return (
        _package_and_upload_step(runner, name, packager.resolve, artifact_source),
    )


def build_droplet(
    runner: DropletRunner,
    packager: ArtifactPackager,
    droplet_name: str | None,
    buildpack_url: str | None,
    source_dir: str,
) -> tuple[CommandOutcome, ...]:
    """Archive *source_dir*, upload it, then request a remote build.

    *source_dir* is always packaged, even if it names a file.  The build
    is only requested when the upload succeeded.
    """
    try:
        given_name, buildpack = _require_arguments(droplet_name, buildpack_url)
        name = validate_droplet_name(given_name)
    except UsageError as exc:
        return (_invalid_syntax(exc),)

    return run_steps([
        lambda: _package_and_upload_step(
            runner, name, packager.package_directory, source_dir,
        ),
        lambda: _build_step(runner, name, buildpack),
    ])


def list_droplets(runner: DropletRunner) -> tuple[CommandOutcome, ...]:
    """Fetch every droplet and render them newest first."""
    try:
        droplets = runner.list_droplets()
    except Exception as exc:
        return (
            CommandOutcome.failure(
                f"Error listing droplets: {exc}",
                OutcomeKind.COMMAND_FAILED,
            ),
        )
    return (CommandOutcome.success("", lines=tuple(render_droplet_table(droplets))),)


def launch_droplet(
    runner: DropletRunner,
    droplet_name: str | None,
) -> tuple[CommandOutcome, ...]:
    """Launch an application from *droplet_name*."""
    try:
        name = validate_droplet_name(droplet_name)
    except UsageError as exc:
        return (_invalid_syntax(exc),)

    try:
        runner.launch_droplet(name)
    except Exception as exc:
        return (
            CommandOutcome.failure(
                f"Error launching {name}: {exc}",
                OutcomeKind.COMMAND_FAILED,
            ),
        )
    return (CommandOutcome.success("Droplet launched"),)

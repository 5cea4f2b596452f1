"""Infrastructure: locating the droplet store target.

Resolution order (first hit wins):

1. ``--target`` on the command line (applied by the CLI layer);
2. ``DROPLET_TARGET`` environment variable;
3. ``target`` key of the JSON config file (``DROPLET_CONFIG`` or
   ``~/.droplet/config.json``).

A missing target is not an error here; only a remote call needs one.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from droplet_cli.exceptions import ConfigError

logger = logging.getLogger(__name__)

TARGET_ENV: str = "DROPLET_TARGET"
TIMEOUT_ENV: str = "DROPLET_TIMEOUT"
CONFIG_ENV: str = "DROPLET_CONFIG"
DEFAULT_CONFIG_PATH: Path = Path("~/.droplet/config.json")
DEFAULT_TIMEOUT: float = 30.0


@dataclass(frozen=True, slots=True)
class DropletConfig:
    """Resolved runtime settings for the droplet store client."""

    target: str | None = None
    """Base URL of the droplet API, e.g. ``http://droplets.example.com``."""

    timeout: float = DEFAULT_TIMEOUT
    """Per-request timeout in seconds."""

    def with_target(self, target: str | None) -> DropletConfig:
        """Return a copy with *target* applied when it is set."""
        if not target:
            return self
        return replace(self, target=target.rstrip("/"))


def config_path(env: Mapping[str, str]) -> Path:
    """Return the config file location honouring ``DROPLET_CONFIG``."""
    raw = env.get(CONFIG_ENV)
    return Path(raw).expanduser() if raw else DEFAULT_CONFIG_PATH.expanduser()


def _read_file(path: Path) -> dict[str, Any]:
    if not path.is_file():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise ConfigError(
            f"Could not read config file {path}: {exc}",
            hint=f"Fix or remove {path}.",
        ) from exc
    if not isinstance(data, dict):
        raise ConfigError(
            f"Config file {path} must contain a JSON object.",
            hint=f"Fix or remove {path}.",
        )
    return data


def _parse_timeout(raw: object, source: str) -> float:
    try:
        timeout = float(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid timeout {raw!r} in {source}.") from exc
    if timeout <= 0:
        raise ConfigError(f"Timeout in {source} must be positive, got {raw!r}.")
    return timeout


def load_config(
    env: Mapping[str, str] | None = None,
    path: Path | None = None,
) -> DropletConfig:
    """Load settings from *env* (default ``os.environ``) and the config file.

    Raises
    ------
    ConfigError
        If the config file is unreadable or a value is malformed.
    """
    env = os.environ if env is None else env
    file_path = path if path is not None else config_path(env)
    data = _read_file(file_path)

    target = env.get(TARGET_ENV) or data.get("target") or None
    if target is not None and not isinstance(target, str):
        raise ConfigError(f"'target' in {file_path} must be a string.")

    timeout = DEFAULT_TIMEOUT
    if TIMEOUT_ENV in env:
        timeout = _parse_timeout(env[TIMEOUT_ENV], TIMEOUT_ENV)
    elif "timeout" in data:
        timeout = _parse_timeout(data["timeout"], str(file_path))

    logger.debug("target=%s timeout=%s (config file %s)", target, timeout, file_path)
    return DropletConfig(target=target.rstrip("/") if target else None, timeout=timeout)

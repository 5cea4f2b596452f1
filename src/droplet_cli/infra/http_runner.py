"""HTTP implementation of :class:`~droplet_cli.core.protocols.DropletRunner`.

This module is the **only** place in the codebase that talks to the
droplet store.  All ``urllib`` exceptions are caught here and re-raised
as :class:`~droplet_cli.exceptions.RemoteError` — nothing raw escapes
the infrastructure boundary.

Endpoints (relative to the configured target)
----------------------------------------------
* ``PUT  /v1/droplets/<name>/bits``    — artifact bytes
* ``POST /v1/droplets/<name>/build``   — ``{"buildpack_url": ...}``
* ``GET  /v1/droplets``                — ``[{"name", "created_at"}, ...]``
* ``POST /v1/droplets/<name>/launch``
"""

from __future__ import annotations

import json
import logging
import os
import urllib.error
import urllib.parse
import urllib.request
from datetime import datetime, timezone
from typing import Any, BinaryIO

from droplet_cli.core.models import Droplet
from droplet_cli.exceptions import RemoteError, TargetNotConfiguredError
from droplet_cli.infra.archiver import ARCHIVE_SUFFIX
from droplet_cli.infra.config import DropletConfig, load_config

logger = logging.getLogger(__name__)

API_PREFIX: str = "/v1/droplets"


class HttpDropletRunner:
    """Concrete :class:`DropletRunner` backed by ``urllib.request``.

    Usage::

        runner = HttpDropletRunner(target="http://droplets.example.com")
        runner.upload_bits("my-app", "/tmp/droplet-abc.tar")

    Without an explicit *config*, settings are read by
    :func:`~droplet_cli.infra.config.load_config` on the first remote
    call, so a malformed config file only fails commands that talk to
    the droplet store.

    This class satisfies the :class:`~droplet_cli.core.protocols.DropletRunner`
    protocol structurally — no explicit inheritance required.
    """

    def __init__(
        self,
        config: DropletConfig | None = None,
        *,
        target: str | None = None,
    ) -> None:
        self._config: DropletConfig | None = config
        self._target: str | None = target

    @property
    def config(self) -> DropletConfig:
        """Resolved settings, with the ``--target`` override applied.

        Raises
        ------
        ConfigError
            If the config file or environment is malformed.
        """
        if self._config is None:
            self._config = load_config()
        return self._config.with_target(self._target)

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def upload_bits(self, droplet_name: str, artifact_path: str) -> None:
        content_type = (
            "application/x-tar"
            if artifact_path.endswith(ARCHIVE_SUFFIX)
            else "application/octet-stream"
        )
        try:
            size = os.path.getsize(artifact_path)
            body = open(artifact_path, "rb")
        except OSError as exc:
            raise RemoteError(f"could not read {artifact_path}: {exc}") from exc
        with body:
            self._request(
                "PUT",
                self._droplet_path(droplet_name, "bits"),
                body=body,
                headers={
                    "Content-Type": content_type,
                    "Content-Length": str(size),
                },
            )

    def build_droplet(self, droplet_name: str, buildpack_url: str) -> None:
        self._request_json(
            "POST",
            self._droplet_path(droplet_name, "build"),
            {"buildpack_url": buildpack_url},
        )

    def list_droplets(self) -> list[Droplet]:
        payload = self._request_json("GET", API_PREFIX)
        if not isinstance(payload, list):
            raise RemoteError("droplet store returned an unexpected listing.")
        return [self._parse_droplet(item) for item in payload]

    def launch_droplet(self, droplet_name: str) -> None:
        self._request_json("POST", self._droplet_path(droplet_name, "launch"), {})

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    @staticmethod
    def _droplet_path(droplet_name: str, action: str) -> str:
        return f"{API_PREFIX}/{urllib.parse.quote(droplet_name, safe='')}/{action}"

    @staticmethod
    def _url(config: DropletConfig, path: str) -> str:
        if not config.target:
            raise TargetNotConfiguredError(
                "no droplet target configured",
                hint="Pass --target or set DROPLET_TARGET.",
            )
        return f"{config.target}{path}"

    def _request_json(
        self,
        method: str,
        path: str,
        data: dict[str, Any] | None = None,
    ) -> Any:
        body = json.dumps(data).encode() if data is not None else None
        headers = {"Accept": "application/json"}
        if body is not None:
            headers["Content-Type"] = "application/json"
        raw = self._request(method, path, body=body, headers=headers)
        if not raw:
            return None
        try:
            return json.loads(raw.decode())
        except ValueError as exc:
            raise RemoteError(f"invalid JSON from droplet store: {exc}") from exc

    def _request(
        self,
        method: str,
        path: str,
        *,
        body: bytes | BinaryIO | None = None,
        headers: dict[str, str] | None = None,
    ) -> bytes:
        config = self.config
        url = self._url(config, path)
        logger.debug("%s %s", method, url)
        req = urllib.request.Request(url, data=body, method=method)
        for key, value in (headers or {}).items():
            req.add_header(key, value)
        try:
            with urllib.request.urlopen(req, timeout=config.timeout) as resp:
                return resp.read()
        except urllib.error.HTTPError as exc:
            detail = _error_detail(exc)
            raise RemoteError(
                f"{exc.code} {exc.reason}" + (f": {detail}" if detail else ""),
            ) from exc
        except urllib.error.URLError as exc:
            raise RemoteError(
                f"cannot reach {config.target}: {exc.reason}",
                hint="Check the target URL and your network.",
            ) from exc
        except TimeoutError as exc:
            raise RemoteError(
                f"request to {config.target} timed out after {config.timeout:g}s",
            ) from exc
        except OSError as exc:
            raise RemoteError(f"connection to {config.target} failed: {exc}") from exc

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    @staticmethod
    def _parse_droplet(item: object) -> Droplet:
        if not isinstance(item, dict) or not isinstance(item.get("name"), str):
            raise RemoteError(f"malformed droplet record: {item!r}")
        return Droplet(
            name=item["name"],
            created_at=parse_timestamp(item.get("created_at")),
        )


# ---------------------------------------------------------------------------
# Utility
# ---------------------------------------------------------------------------

def parse_timestamp(value: object) -> datetime | None:
    """Parse an RFC 3339 string or Unix seconds; ``None`` stays ``None``."""
    if value is None or value == "":
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    if isinstance(value, str):
        text = value[:-1] + "+00:00" if value.endswith("Z") else value
        try:
            return datetime.fromisoformat(text)
        except ValueError as exc:
            raise RemoteError(f"invalid timestamp {value!r}") from exc
    raise RemoteError(f"invalid timestamp {value!r}")


def _error_detail(exc: urllib.error.HTTPError) -> str:
    """Extract an ``error`` message from a JSON error body, if any."""
    try:
        payload = json.loads(exc.read().decode() or "null")
    except (OSError, ValueError):
        return ""
    if isinstance(payload, dict):
        return str(payload.get("error") or payload.get("message") or "")
    return ""

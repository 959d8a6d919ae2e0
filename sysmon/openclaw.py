"""Helpers for reading the OpenClaw gateway configuration file."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_GATEWAY_PORT = 18789


def load_openclaw_config(path: str | Path) -> dict[str, Any]:
    """Return the parsed config, or an empty dict if it cannot be used."""
    path = Path(path)
    try:
        config = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        logger.warning("OpenClaw config not found: %s", path)
        return {}
    except (OSError, ValueError) as exc:
        logger.error("Failed to read OpenClaw config %s: %s", path, exc)
        return {}

    if not isinstance(config, dict):
        logger.error("OpenClaw config %s is not a JSON object", path)
        return {}
    return config


def _gateway(config: dict[str, Any]) -> dict[str, Any]:
    gateway = config.get("gateway")
    return gateway if isinstance(gateway, dict) else {}


def gateway_port(config: dict[str, Any]) -> int:
    port = _gateway(config).get("port")
    return port if isinstance(port, int) and port > 0 else DEFAULT_GATEWAY_PORT


def gateway_mode(config: dict[str, Any]) -> str:
    return _gateway(config).get("mode") or "local"


def gateway_status_url(
    config: dict[str, Any],
    host: str = "localhost",
    path: str = "/api/status",
) -> str:
    return f"http://{host}:{gateway_port(config)}{path}"


def gateway_token(config: dict[str, Any]) -> str:
    # Read for completeness only: nothing in this service authenticates with it.
    auth = _gateway(config).get("auth")
    if not isinstance(auth, dict):
        return ""
    return auth.get("token") or ""

"""Config loading from JSON files and the process environment."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from apito_sdk.contracts.config import DEFAULT_BASE_URL, ApitoConfig
from apito_sdk.contracts.exceptions import ConfigError

ENV_BASE_URL = "APITO_BASE_URL"
ENV_API_KEY = "APITO_API_KEY"
ENV_TIMEOUT = "APITO_TIMEOUT"
ENV_TENANT_ID = "APITO_TENANT_ID"


def load_config(path: str | Path) -> ApitoConfig:
    config_path = Path(path).expanduser().resolve()

    try:
        raw_payload: Any = json.loads(config_path.read_text(encoding="utf-8"))
        return ApitoConfig.model_validate(raw_payload)
    except OSError as exc:
        raise ConfigError(f"failed reading config file: {config_path}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"invalid JSON in config file: {config_path}") from exc
    except ValidationError as exc:
        raise ConfigError(f"invalid config: {exc}") from exc


def config_from_env(environ: Mapping[str, str] | None = None) -> ApitoConfig:
    """Build a config from ``APITO_*`` variables.

    ``APITO_BASE_URL`` defaults to the hosted endpoint; ``APITO_TIMEOUT`` is
    in seconds.
    """
    env = os.environ if environ is None else environ

    payload: dict[str, Any] = {
        "base_url": (env.get(ENV_BASE_URL) or "").strip() or DEFAULT_BASE_URL,
        "api_key": (env.get(ENV_API_KEY) or "").strip(),
        "tenant_id": env.get(ENV_TENANT_ID),
    }
    timeout = (env.get(ENV_TIMEOUT) or "").strip()
    if timeout:
        payload["timeout"] = timeout

    try:
        return ApitoConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigError(f"invalid config from environment: {exc}") from exc

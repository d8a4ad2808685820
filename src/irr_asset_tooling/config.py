"""Settings for irr-asset: defaults, then an optional YAML file, then the environment.

YAML config keys are the DEFAULT_SETTINGS keys, e.g.:

    api_url: https://reg.ote.arin.net/rest/
    org_handle: EXAMPLE-ARIN
    sync_dir: sync/as-sets
    bgpq4_host: rr.ntt.net
    timeout: 30
    on_empty: keep
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from irr_asset_tooling.flatten import FlattenOptions
from irr_asset_tooling.flatten.bgpq4 import DEFAULT_BGPQ4_HOST, DEFAULT_BGPQ4_PATH, DEFAULT_TIMEOUT
from irr_asset_tooling.registry.client import DEFAULT_API_URL, DEFAULT_REQUEST_TIMEOUT

DEFAULT_SETTINGS: dict[str, Any] = {
    "api_url": DEFAULT_API_URL,
    "api_key": "",
    "org_handle": "",
    "sync_dir": "sync/as-sets",
    "bgpq4_host": DEFAULT_BGPQ4_HOST,
    "bgpq4_path": DEFAULT_BGPQ4_PATH,
    "timeout": DEFAULT_TIMEOUT,
    "on_empty": "keep",
    "request_timeout": DEFAULT_REQUEST_TIMEOUT,
}

ENV_VARS: dict[str, str] = {
    "ARIN_API_KEY": "api_key",
    "ARIN_ORG": "org_handle",
    "ARIN_API_URL": "api_url",
    "ASSET_SYNC_DIR": "sync_dir",
    "BGPQ4_HOST": "bgpq4_host",
    "BGPQ4_PATH": "bgpq4_path",
    "FLATTEN_TIMEOUT": "timeout",
    "FLATTEN_ON_EMPTY": "on_empty",
}

FLOAT_KEYS = ("timeout", "request_timeout")


def _coerce(settings: dict[str, Any]) -> dict[str, Any]:
    for key in FLOAT_KEYS:
        try:
            settings[key] = float(settings[key])
        except (TypeError, ValueError):
            msg = f"Invalid {key}: {settings[key]!r} (expected a number of seconds)"
            raise ValueError(msg) from None
    for key, value in settings.items():
        if key not in FLOAT_KEYS:
            settings[key] = "" if value is None else str(value)
    return settings


def load_config_file(path: Path) -> dict[str, Any]:
    """Known keys from a YAML config file. Unknown keys are ignored."""
    with path.open() as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        msg = f"Config file must be a mapping: {path}"
        raise ValueError(msg)
    return {k: v for k, v in data.items() if k in DEFAULT_SETTINGS}


def load_settings(
    config_path: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Merged settings dict (defaults < config file < environment)."""
    env = os.environ if env is None else env
    settings = dict(DEFAULT_SETTINGS)
    if config_path is not None:
        settings.update(load_config_file(config_path))
    for var, key in ENV_VARS.items():
        value = env.get(var)
        if value:
            settings[key] = value
    return _coerce(settings)


def flatten_options(settings: Mapping[str, Any]) -> FlattenOptions:
    return FlattenOptions(timeout=settings["timeout"], on_empty=settings["on_empty"])

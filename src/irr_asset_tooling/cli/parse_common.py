"""Shared CLI argument parsing for common flags (--config, --timeout, --on-empty, --verbose)."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

from irr_asset_tooling.config import load_settings

LOG_FORMAT = "%(asctime)s - %(name)s [%(levelname)s] - %(message)s"


def parse_flags(
    argv: list[str],
    *specs: tuple[str, str, Any, Callable[[str], Any] | None],
) -> tuple[dict[str, Any], list[str]]:
    """Parse optional --flag value from argv in one pass.

    Each spec is (key, flag_str, default, converter).
    E.g. ("sync_dir", "--sync-dir", None, path_resolver).
    converter can be None for string values.
    Returns (dict of key -> value, remaining argv).
    """
    result: dict[str, Any] = {}
    for key, _flag, default, _converter in specs:
        result[key] = default() if callable(default) else default

    rest: list[str] = []
    i = 0
    while i < len(argv):
        matched = False
        for key, flag_str, _default, converter in specs:
            if argv[i] == flag_str and i + 1 < len(argv):
                result[key] = converter(argv[i + 1]) if converter else argv[i + 1]
                i += 2
                matched = True
                break
        if not matched:
            rest.append(argv[i])
            i += 1
    return result, rest


def path_resolver(s: str) -> Path:
    """Resolve a path argument to absolute Path (e.g. --config, --sync-dir)."""
    return Path(s).resolve()


def settings_from_argv(argv: list[str]) -> tuple[dict[str, Any], list[str]]:
    """Load settings (with --config <yaml>) and apply --timeout / --on-empty overrides.

    Returns (settings, remaining argv).
    """
    parsed, rest = parse_flags(
        argv,
        ("config", "--config", None, path_resolver),
        ("timeout", "--timeout", None, None),
        ("on_empty", "--on-empty", None, None),
    )
    settings = load_settings(parsed["config"])
    if parsed["timeout"] is not None:
        try:
            settings["timeout"] = float(parsed["timeout"])
        except ValueError:
            msg = f"Invalid --timeout: {parsed['timeout']!r} (expected seconds)"
            raise ValueError(msg) from None
    if parsed["on_empty"] is not None:
        settings["on_empty"] = parsed["on_empty"]
    return settings, rest


def configure_logging(argv: list[str]) -> list[str]:
    """basicConfig from --verbose/--debug (or IRR_ASSET_LOG_LEVEL). Returns argv without those flags."""
    level_name = os.environ.get("IRR_ASSET_LOG_LEVEL", "WARNING").upper()
    if "--debug" in argv:
        level_name = "DEBUG"
    elif "--verbose" in argv:
        level_name = "INFO"
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        msg = f"Invalid log level: {level_name}"
        raise ValueError(msg)
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    return [a for a in argv if a not in ("--verbose", "--debug")]

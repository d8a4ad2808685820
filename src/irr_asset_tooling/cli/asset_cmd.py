"""`irr-asset convert` and `irr-asset flatten`: local file commands (no registry access)."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

from irr_asset_tooling.asset import format_for_path, render
from irr_asset_tooling.cli.parse_common import parse_flags, settings_from_argv
from irr_asset_tooling.config import flatten_options
from irr_asset_tooling.flatten import FlattenError, MemberResolver
from irr_asset_tooling.helpers import normalize_members
from irr_asset_tooling.sync import load_local_as_set


def _resolver(settings: dict) -> MemberResolver:
    return MemberResolver(host=settings["bgpq4_host"], executable=settings["bgpq4_path"])


def _input_path(rest: list[str], usage: str) -> Path:
    positional = [a for a in rest if not a.startswith("--")]
    if not positional:
        print(usage, file=sys.stderr)
        sys.exit(1)
    path = Path(positional[0])
    if not path.is_file():
        print(f"❌ {path} not found", file=sys.stderr)
        sys.exit(1)
    return path


def run_convert_argv(argv: list[str]) -> None:
    """irr-asset convert <file> [--to rpsl|xml|yaml] [--flatten] [--timeout s] [--on-empty p] [--config f]."""
    try:
        settings, rest = settings_from_argv(argv)
    except (OSError, ValueError) as e:
        print(f"❌ {e}", file=sys.stderr)
        sys.exit(1)
    parsed, rest = parse_flags(rest, ("to", "--to", "rpsl", None))
    path = _input_path(
        rest, "Usage: irr-asset convert <file.yaml|file.rpsl|file.xml> [--to rpsl|xml|yaml] [--flatten]"
    )

    try:
        options = flatten_options(settings)
        asset = asyncio.run(
            load_local_as_set(path, _resolver(settings), options, flatten="--flatten" in rest)
        )
        print(render(asset, parsed["to"]), end="")
    except (FlattenError, ValueError, OSError) as e:
        print(f"❌ {path}: {e}", file=sys.stderr)
        sys.exit(1)
    sys.exit(0)


def run_flatten_argv(argv: list[str]) -> None:
    """irr-asset flatten <file.yaml> [--timeout s] [--on-empty p] [--config f].

    Prints the resolved members, one per line.
    """
    try:
        settings, rest = settings_from_argv(argv)
    except (OSError, ValueError) as e:
        print(f"❌ {e}", file=sys.stderr)
        sys.exit(1)
    path = _input_path(
        rest, "Usage: irr-asset flatten <file.yaml> [--timeout s] [--on-empty keep|empty|error]"
    )
    if format_for_path(path) != "yaml":
        print(f"❌ {path}: flatten needs a YAML definition", file=sys.stderr)
        sys.exit(1)

    try:
        options = flatten_options(settings)
        asset = asyncio.run(load_local_as_set(path, _resolver(settings), options))
    except (FlattenError, ValueError, OSError) as e:
        print(f"❌ {path}: {e}", file=sys.stderr)
        sys.exit(1)
    for member in normalize_members(asset.members):
        print(member)
    sys.exit(0)

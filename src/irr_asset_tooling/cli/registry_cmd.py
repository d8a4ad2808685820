"""`irr-asset sync | dump | list`: commands that talk to the registry."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

from irr_asset_tooling.cli.parse_common import parse_flags, path_resolver, settings_from_argv
from irr_asset_tooling.config import flatten_options
from irr_asset_tooling.flatten import MemberResolver
from irr_asset_tooling.registry import RegistryClient, RegistryError
from irr_asset_tooling.sync import dump_as_sets, sync_as_sets


def _settings_and_client(argv: list[str]) -> tuple[dict[str, Any], RegistryClient, list[str]]:
    """Settings, a RegistryClient, and remaining argv. Exits 1 without API key or org handle."""
    try:
        settings, rest = settings_from_argv(argv)
    except (OSError, ValueError) as e:
        print(f"❌ {e}", file=sys.stderr)
        sys.exit(1)
    parsed, rest = parse_flags(rest, ("org_handle", "--org", None, None))
    if parsed["org_handle"]:
        settings["org_handle"] = parsed["org_handle"]

    if not settings["api_key"]:
        print(
            "Error: ARIN_API_KEY environment variable (or api_key in --config) is required",
            file=sys.stderr,
        )
        sys.exit(1)
    if not settings["org_handle"]:
        print("Error: ARIN_ORG environment variable (or --org) is required", file=sys.stderr)
        sys.exit(1)

    client = RegistryClient(
        settings["api_key"],
        settings["api_url"],
        timeout=settings["request_timeout"],
    )
    return settings, client, rest


def run_sync_argv(argv: list[str]) -> None:
    """irr-asset sync [--sync-dir d] [--dry-run] [--org h] [--timeout s] [--on-empty p] [--config f]."""
    settings, client, rest = _settings_and_client(argv)
    parsed, rest = parse_flags(rest, ("sync_dir", "--sync-dir", None, path_resolver))
    sync_dir = parsed["sync_dir"] or Path(settings["sync_dir"])
    try:
        options = flatten_options(settings)
    except ValueError as e:
        print(f"❌ {e}", file=sys.stderr)
        sys.exit(1)
    resolver = MemberResolver(host=settings["bgpq4_host"], executable=settings["bgpq4_path"])
    rc = sync_as_sets(
        client,
        settings["org_handle"],
        sync_dir,
        resolver=resolver,
        options=options,
        dry_run="--dry-run" in rest,
    )
    sys.exit(rc)


def run_dump_argv(argv: list[str]) -> None:
    """irr-asset dump [--out-dir d] [--org h] [--config f]: write every AS-SET as RPSL."""
    settings, client, rest = _settings_and_client(argv)
    parsed, _ = parse_flags(rest, ("out_dir", "--out-dir", None, path_resolver))
    out_dir = parsed["out_dir"] or Path(settings["sync_dir"])
    sys.exit(dump_as_sets(client, settings["org_handle"], out_dir))


def run_list_argv(argv: list[str]) -> None:
    """irr-asset list [--org h] [--config f]: AS-SET names of the org, one per line."""
    settings, client, _ = _settings_and_client(argv)
    try:
        listed = client.list_as_sets(settings["org_handle"])
    except (RegistryError, ValueError) as e:
        print(f"❌ {e}", file=sys.stderr)
        sys.exit(1)
    for asset in listed:
        print(asset.name)
    sys.exit(0)

"""Sync local AS-SET definitions (sync/as-sets/{name}.yaml|.rpsl) to the registry.

For every AS-SET of the org: the local YAML (flattened with bgpq4) or RPSL
definition is compared with the registry object by member set, and the
registry object is modified when they differ. AS-SETs without a local file are
written out as {name}.rpsl so they can be edited next time.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

from irr_asset_tooling.asset import (
    ASSet,
    asset_from_rpsl,
    asset_from_xml,
    asset_from_yaml,
    asset_from_yaml_and_flatten,
    asset_to_rpsl,
    format_for_path,
)
from irr_asset_tooling.flatten import FlattenError, FlattenOptions, MemberResolver
from irr_asset_tooling.helpers import same_members
from irr_asset_tooling.registry import RegistryClient, RegistryError

log = logging.getLogger(__name__)

LOCAL_SUFFIXES = (".yaml", ".rpsl")


def find_local_definition(sync_dir: Path, name: str) -> Path | None:
    """{name}.yaml if present, else {name}.rpsl, else None."""
    for suffix in LOCAL_SUFFIXES:
        p = sync_dir / f"{name}{suffix}"
        if p.is_file():
            return p
    return None


async def load_local_as_set(
    path: Path,
    resolver: MemberResolver | None = None,
    options: FlattenOptions | None = None,
    flatten: bool = True,
) -> ASSet:
    """Load an AS-SET file by extension; YAML members are flattened unless flatten=False."""
    text = path.read_text()
    fmt = format_for_path(path)
    if fmt == "yaml":
        if flatten:
            return await asset_from_yaml_and_flatten(text, options, resolver)
        return asset_from_yaml(text)
    if fmt == "rpsl":
        return asset_from_rpsl(text)
    if fmt == "xml":
        return asset_from_xml(text)
    msg = f"Unsupported AS-SET file type: {path}"
    raise ValueError(msg)


async def load_local_as_sets(
    paths: dict[str, Path],
    resolver: MemberResolver,
    options: FlattenOptions | None = None,
) -> dict[str, ASSet | BaseException]:
    """Load all definitions concurrently, sharing the resolver's expansion cache.

    A failing definition maps to its exception; the others still load.
    """
    names = list(paths)
    results = await asyncio.gather(
        *(load_local_as_set(paths[n], resolver, options) for n in names),
        return_exceptions=True,
    )
    return dict(zip(names, results))


def _report_changes(name: str, local: list[str], remote: list[str]) -> None:
    added = sorted(set(local) - set(remote))
    removed = sorted(set(remote) - set(local))
    print(f"Changes detected for {name}:")
    if added:
        print(f"  + {', '.join(added)}")
    if removed:
        print(f"  - {', '.join(removed)}")


def sync_as_sets(
    client: RegistryClient,
    org_handle: str,
    sync_dir: Path,
    *,
    resolver: MemberResolver | None = None,
    options: FlattenOptions | None = None,
    dry_run: bool = False,
) -> int:
    """Sync every AS-SET of org_handle. Returns 0, or 1 if any AS-SET failed."""
    print(f"Fetching AS-SET list for {org_handle}...")
    try:
        listed = client.list_as_sets(org_handle)
    except (RegistryError, ValueError) as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1
    print(f"Found {len(listed)} AS-SET(s).")

    sync_dir.mkdir(parents=True, exist_ok=True)
    local_paths = {a.name: find_local_definition(sync_dir, a.name) for a in listed}
    to_load = {name: p for name, p in local_paths.items() if p is not None}
    resolver = resolver or MemberResolver()
    loaded = asyncio.run(load_local_as_sets(to_load, resolver, options)) if to_load else {}

    failures = 0
    for name, path in local_paths.items():
        print(f"Processing AS-SET: {name}")
        try:
            remote = client.view_as_set(name)
        except (RegistryError, ValueError) as e:
            print(f"❌ {name}: {e}", file=sys.stderr)
            failures += 1
            continue

        if path is None:
            out = sync_dir / f"{name}.rpsl"
            print(f"No local definition for {name}; writing {out}")
            out.write_text(asset_to_rpsl(remote))
            continue

        local = loaded[name]
        if isinstance(local, BaseException):
            if not isinstance(local, (FlattenError, ValueError, OSError)):
                raise local
            print(f"❌ {path}: {local}", file=sys.stderr)
            failures += 1
            continue

        if local.name != name:
            log.warning("%s defines %s; syncing it as %s", path, local.name, name)
            local.name = name

        if same_members(local.members, remote.members):
            print(f"No changes for {name}, skipping.")
            continue

        _report_changes(name, local.members, remote.members)
        if dry_run:
            print(f"[dry-run] would update {name} on the registry")
            continue

        if not local.org_handle:
            local.org_handle = remote.org_handle
        try:
            client.modify_as_set(name, local)
        except (RegistryError, ValueError) as e:
            print(f"❌ {name}: {e}", file=sys.stderr)
            failures += 1
            continue
        print(f"✅ Updated {name} on the registry")

    if failures:
        print(f"❌ {failures} AS-SET(s) failed", file=sys.stderr)
        return 1
    return 0


def dump_as_sets(client: RegistryClient, org_handle: str, out_dir: Path) -> int:
    """Write every AS-SET of org_handle as {name}.rpsl. Returns 0, or 1 on any failure."""
    try:
        listed = client.list_as_sets(org_handle)
    except (RegistryError, ValueError) as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    out_dir.mkdir(parents=True, exist_ok=True)
    failures = 0
    for asset in listed:
        try:
            detailed = client.view_as_set(asset.name)
        except (RegistryError, ValueError) as e:
            print(f"❌ {asset.name}: {e}", file=sys.stderr)
            failures += 1
            continue
        out = out_dir / f"{detailed.name or asset.name}.rpsl"
        out.write_text(asset_to_rpsl(detailed))
        log.debug("Wrote %s", out)
        print(f"✅ Wrote {out}")
    return 1 if failures else 0

"""Human-editable YAML AS-SET definitions.

    name: AS-EXAMPLE
    source: ARIN
    orgHandle: EXAMPLE-ARIN
    description: |
      Example customers
    remarks: |
      Managed with irr-asset
    created: 2024-01-01T00:00:00Z
    pocLinks:
      - { handle: TECH-ARIN, function: T, description: Tech }
    members:
      - AS64500
      - AS-CUSTOMER: { flat: true, depth: 2, source: RADB }

Member entries with config are downgraded to their names by asset_from_yaml;
asset_from_yaml_and_flatten expands the flat ones with bgpq4 instead.
"""

from __future__ import annotations

from typing import Any

import yaml

from irr_asset_tooling.asset.model import ARIN_SOURCE, ASSet, PocLink
from irr_asset_tooling.flatten import (
    FlattenOptions,
    InvalidSpecification,
    MemberResolver,
    member_names,
    parse_member_specs,
)
from irr_asset_tooling.helpers import is_record, normalize_members, parse_date, split_multiline


def _load(yaml_text: str) -> dict[str, Any]:
    try:
        data = yaml.safe_load(yaml_text)
    except yaml.YAMLError as e:
        msg = f"Invalid ASSet YAML: {e}"
        raise InvalidSpecification(msg) from e
    if not is_record(data):
        msg = "Invalid ASSet YAML: root must be a mapping"
        raise InvalidSpecification(msg)
    return data


def _source(data: dict[str, Any]) -> str:
    source = data.get("source")
    return source.strip() if isinstance(source, str) else ""


def _poc_links(value: Any) -> list[PocLink]:
    if not isinstance(value, list):
        return []
    out: list[PocLink] = []
    for item in value:
        if not is_record(item):
            continue
        handle = item.get("handle")
        if not isinstance(handle, str) or not handle.strip():
            continue
        function = item.get("function")
        description = item.get("description")
        out.append(
            PocLink(
                handle=handle.strip(),
                function=function if isinstance(function, str) else "",
                description=description if isinstance(description, str) else "",
            )
        )
    return out


def asset_from_yaml_object(data: Any) -> ASSet:
    """Build an ASSet from already-loaded YAML data. Members keep their names only."""
    if not is_record(data):
        msg = "Invalid ASSet YAML: root must be a mapping"
        raise InvalidSpecification(msg)

    name = data.get("name")
    name = name.strip() if isinstance(name, str) else ""
    if not name:
        msg = "Invalid ASSet YAML: missing/empty 'name'"
        raise InvalidSpecification(msg)

    source = _source(data)
    if source and source != ARIN_SOURCE:
        msg = f"Invalid ASSet YAML: unsupported 'source' ({source})"
        raise InvalidSpecification(msg)

    org_handle = data.get("orgHandle")
    return ASSet(
        name=name,
        creation_date=parse_date(data.get("created")),
        descriptions=split_multiline(data.get("description")),
        remarks=split_multiline(data.get("remarks")),
        members=normalize_members(member_names(data.get("members"))),
        poc_links=_poc_links(data.get("pocLinks")),
        org_handle=org_handle.strip()
        if isinstance(org_handle, str) and org_handle.strip()
        else None,
    )


def asset_from_yaml(yaml_text: str) -> ASSet:
    return asset_from_yaml_object(_load(yaml_text))


async def asset_from_yaml_and_flatten(
    yaml_text: str,
    options: FlattenOptions | None = None,
    resolver: MemberResolver | None = None,
) -> ASSet:
    """Parse YAML and expand every `flat: true` member with bgpq4.

    The top-level `source` doubles as the default bgpq4 -S list, so it is
    required here.
    """
    data = _load(yaml_text)
    asset = asset_from_yaml_object(data)
    source = _source(data)
    if not source:
        msg = "Invalid ASSet YAML: missing/empty 'source' for flattening"
        raise InvalidSpecification(msg)

    resolver = resolver or MemberResolver()
    specs = parse_member_specs(data.get("members"))
    asset.members = await resolver.resolve(specs, options, source)
    return asset


def asset_to_yaml(asset: ASSet) -> str:
    """Render the plain YAML form (members as names, sorted)."""
    data: dict[str, Any] = {"name": asset.name, "source": asset.source}
    if asset.org_handle:
        data["orgHandle"] = asset.org_handle
    if asset.descriptions:
        data["description"] = "\n".join(asset.descriptions) + "\n"
    if asset.remarks:
        data["remarks"] = "\n".join(asset.remarks) + "\n"
    if asset.creation_date:
        data["created"] = asset.creation_date
    if asset.poc_links:
        data["pocLinks"] = [
            {"handle": p.handle, "function": p.function, "description": p.description}
            for p in asset.poc_links
        ]
    data["members"] = normalize_members(asset.members)
    return yaml.safe_dump(data, default_flow_style=False, sort_keys=False)

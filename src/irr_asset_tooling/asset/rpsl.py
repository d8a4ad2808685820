"""RPSL text <-> ASSet.

    as-set:     AS-EXAMPLE
    descr:      Example customers
    remarks:    first line
                continued line
    org-handle: EXAMPLE-ARIN
    tech-c:     TECH-ARIN
    admin-c:    ADMIN-ARIN
    members:    AS64500
    source:     ARIN
"""

from __future__ import annotations

from irr_asset_tooling.asset.model import POC_ADMIN, POC_TECH, ASSet, PocLink, check_source
from irr_asset_tooling.helpers import normalize_members


def parse_rpsl_fields(text: str) -> dict[str, list[str]]:
    """Attribute name (lower-cased) -> values in order.

    Lines starting with whitespace continue the previous value; a blank line
    ends the continuation. '#' and '%' lines are comments.
    """
    fields: dict[str, list[str]] = {}
    last_key: str | None = None

    for raw_line in text.replace("\r\n", "\n").split("\n"):
        line = raw_line.rstrip()
        if not line:
            last_key = None
            continue
        if line.startswith(("#", "%")):
            continue
        if raw_line[0] in " \t":
            if last_key and fields.get(last_key):
                values = fields[last_key]
                continuation = raw_line.lstrip(" \t")
                values[-1] = f"{values[-1]}\n{continuation}".rstrip()
            continue

        key, sep, value = line.partition(":")
        key = key.strip().lower()
        if not sep or not key:
            continue
        fields.setdefault(key, []).append(value.strip())
        last_key = key

    return fields


def _first(fields: dict[str, list[str]], *keys: str) -> str:
    for key in keys:
        if fields.get(key):
            return fields[key][0].strip()
    return ""


def asset_from_rpsl(text: str) -> ASSet:
    """Parse RPSL text. Raises ValueError on empty input, missing as-set, or a non-ARIN source."""
    if not isinstance(text, str) or not text.strip():
        msg = "Invalid RPSL: empty input"
        raise ValueError(msg)

    fields = parse_rpsl_fields(text)
    name = _first(fields, "as-set", "as_set")
    if not name:
        msg = "Invalid RPSL: missing 'as-set' attribute"
        raise ValueError(msg)
    check_source(_first(fields, "source"), "Invalid RPSL")

    asset = ASSet(name=name)
    org_handle = _first(fields, "org-handle", "org_handle", "orghandle")
    if org_handle:
        asset.org_handle = org_handle

    asset.descriptions = [d.strip() for d in fields.get("descr", []) if d.strip()]
    asset.remarks = [
        line.strip()
        for remark in fields.get("remarks", [])
        for line in remark.split("\n")
        if line.strip()
    ]
    asset.members = normalize_members(fields.get("members", []))

    for handle in fields.get("tech-c", []):
        if handle.strip():
            asset.poc_links.append(PocLink(handle.strip(), POC_TECH, "Tech"))
    for handle in fields.get("admin-c", []):
        if handle.strip():
            asset.poc_links.append(PocLink(handle.strip(), POC_ADMIN, "Admin"))
    return asset


def asset_to_rpsl(asset: ASSet) -> str:
    """Render RPSL. POC links other than tech/admin have no RPSL attribute and are omitted."""
    if not asset.name or not asset.name.strip():
        msg = "ASSet.name is required"
        raise ValueError(msg)

    lines = [f"as-set: {asset.name.strip()}"]
    lines += [f"descr: {d.strip()}" for d in asset.descriptions if d.strip()]
    lines += [f"remarks: {r.strip()}" for r in asset.remarks if r.strip()]
    if asset.org_handle and asset.org_handle.strip():
        lines.append(f"org-handle: {asset.org_handle.strip()}")

    for poc in asset.poc_links:
        handle = poc.handle.strip()
        if not handle:
            continue
        if poc.function == POC_TECH:
            lines.append(f"tech-c: {handle}")
        elif poc.function == POC_ADMIN:
            lines.append(f"admin-c: {handle}")

    lines += [f"members: {m}" for m in normalize_members(asset.members)]
    lines.append(f"source: {asset.source}")
    return "\n".join(lines) + "\n"

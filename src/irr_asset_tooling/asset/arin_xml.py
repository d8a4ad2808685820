"""ARIN Reg-RWS XML <-> ASSet (payloads of the irr/as-set endpoints)."""

from __future__ import annotations

from typing import Any
from xml.parsers.expat import ExpatError

import xmltodict

from irr_asset_tooling.asset.model import ASSet, PocLink, check_source
from irr_asset_tooling.helpers import (
    as_list,
    format_date,
    is_record,
    node_text,
    normalize_members,
    parse_date,
)

ARIN_NS = "http://www.arin.net/regrws/core/v1"
XML_HEADER = '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'


def _parse(xml_text: str) -> dict[str, Any]:
    try:
        doc = xmltodict.parse(
            xml_text,
            process_namespaces=True,
            namespaces={ARIN_NS: None},
        )
    except ExpatError as e:
        msg = f"Invalid ARIN XML: {e}"
        raise ValueError(msg) from e
    return doc or {}


def _attr(node: Any, name: str) -> str:
    if not is_record(node):
        return ""
    value = node.get(f"@{name}")
    return value if isinstance(value, str) else ""


def _lines(container: Any) -> list[str]:
    if not is_record(container):
        return []
    texts = (node_text(line).strip() for line in as_list(container.get("line")))
    return [t for t in texts if t]


def asset_from_xml(xml_text: str) -> ASSet:
    """Parse an <asSet> document. Raises ValueError on a missing root or a non-ARIN source."""
    root = _parse(xml_text).get("asSet")
    if not is_record(root):
        msg = "Invalid ARIN asSet XML: missing <asSet> root"
        raise ValueError(msg)

    source = root.get("source")
    if isinstance(source, str):
        check_source(source.strip(), "Invalid ARIN asSet XML")

    name = root.get("name")
    asset = ASSet(
        name=name.strip() if isinstance(name, str) else "",
        creation_date=parse_date(root.get("creationDate")),
        last_modified_date=parse_date(root.get("lastModifiedDate")),
        descriptions=_lines(root.get("description")),
        remarks=_lines(root.get("remarks")),
    )

    org_handle = root.get("orgHandle")
    if isinstance(org_handle, str) and org_handle.strip():
        asset.org_handle = org_handle.strip()

    poc_links = root.get("pocLinks")
    refs = as_list(poc_links.get("pocLinkRef")) if is_record(poc_links) else []
    for ref in refs:
        handle = _attr(ref, "handle")
        if handle:
            asset.poc_links.append(
                PocLink(handle, _attr(ref, "function"), _attr(ref, "description"))
            )

    members = root.get("members")
    nodes = as_list(members.get("member")) if is_record(members) else []
    asset.members = normalize_members([_attr(m, "name") for m in nodes])
    return asset


def _numbered(lines: list[str]) -> list[dict[str, str]]:
    return [{"@number": str(i), "#text": text} for i, text in enumerate(lines) if text.strip()]


def asset_to_xml(asset: ASSet) -> str:
    """Render the <asSet> payload for create/modify. Name and org handle are required."""
    if not asset.name or not asset.name.strip():
        msg = "ASSet.name is required"
        raise ValueError(msg)
    if not asset.org_handle or not asset.org_handle.strip():
        msg = "ASSet.org_handle is required"
        raise ValueError(msg)

    body: dict[str, Any] = {"@xmlns": ARIN_NS}
    if asset.creation_date:
        body["creationDate"] = format_date(asset.creation_date)
    if _numbered(asset.descriptions):
        body["description"] = {"line": _numbered(asset.descriptions)}
    if _numbered(asset.remarks):
        body["remarks"] = {"line": _numbered(asset.remarks)}
    if asset.last_modified_date:
        body["lastModifiedDate"] = format_date(asset.last_modified_date)
    body["orgHandle"] = asset.org_handle.strip()

    refs = [
        {
            "@description": p.description or "",
            "@function": p.function or "",
            "@handle": p.handle.strip(),
        }
        for p in asset.poc_links
        if p.handle and p.handle.strip()
    ]
    if refs:
        body["pocLinks"] = {"pocLinkRef": refs}

    body["source"] = asset.source

    members = normalize_members(asset.members)
    if members:
        body["members"] = {"member": [{"@name": m} for m in members]}

    body["name"] = asset.name.strip()

    xml = xmltodict.unparse({"asSet": body}, full_document=False, pretty=True, indent="    ")
    return f"{XML_HEADER}\n{xml}"


def parse_as_set_refs(xml_text: str) -> list[str]:
    """AS-SET names from a <collection> of <asSetRef name="..."/> (org listing)."""
    doc = _parse(xml_text)
    if "collection" not in doc:
        msg = "Invalid ARIN list response: missing <collection> root"
        raise ValueError(msg)
    collection = doc["collection"]
    refs = as_list(collection.get("asSetRef")) if is_record(collection) else []
    names = (_attr(ref, "name").strip() for ref in refs)
    return [n for n in names if n]

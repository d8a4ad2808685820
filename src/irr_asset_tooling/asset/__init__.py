"""AS-SET model and its representations: ARIN XML, RPSL, YAML definitions."""

from pathlib import Path

from .arin_xml import asset_from_xml, asset_to_xml, parse_as_set_refs
from .model import ARIN_SOURCE, POC_ADMIN, POC_TECH, ASSet, PocLink
from .rpsl import asset_from_rpsl, asset_to_rpsl, parse_rpsl_fields
from .yaml_config import (
    asset_from_yaml,
    asset_from_yaml_and_flatten,
    asset_from_yaml_object,
    asset_to_yaml,
)

YAML_SUFFIXES = (".yaml", ".yml")
RPSL_SUFFIXES = (".rpsl", ".txt")
XML_SUFFIXES = (".xml",)


def format_for_path(path: Path) -> str | None:
    """'yaml', 'rpsl' or 'xml' from the file extension; None if unknown."""
    suffix = path.suffix.lower()
    if suffix in YAML_SUFFIXES:
        return "yaml"
    if suffix in RPSL_SUFFIXES:
        return "rpsl"
    if suffix in XML_SUFFIXES:
        return "xml"
    return None


def render(asset: ASSet, fmt: str) -> str:
    """Render asset as 'rpsl', 'xml' or 'yaml'. Raises ValueError for other formats."""
    if fmt == "rpsl":
        return asset_to_rpsl(asset)
    if fmt == "xml":
        return asset_to_xml(asset)
    if fmt == "yaml":
        return asset_to_yaml(asset)
    msg = f"Unknown format: {fmt} (use rpsl, xml or yaml)"
    raise ValueError(msg)


__all__ = [
    "ARIN_SOURCE",
    "POC_ADMIN",
    "POC_TECH",
    "ASSet",
    "PocLink",
    "asset_from_rpsl",
    "asset_from_xml",
    "asset_from_yaml",
    "asset_from_yaml_and_flatten",
    "asset_from_yaml_object",
    "asset_to_rpsl",
    "asset_to_xml",
    "asset_to_yaml",
    "format_for_path",
    "parse_as_set_refs",
    "parse_rpsl_fields",
    "render",
]

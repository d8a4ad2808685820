"""Member list parsing: plain names or per-member config mappings -> MemberSpec.

YAML shapes accepted (permissive, user-edited):

    members:
      - AS64500
      - AS-CUSTOMER: { flat: true, depth: 2 }
      - flat: true            # shared defaults for the keys below
        source: RADB,RIPE
        AS-DOWNSTREAM:
        AS-OTHER: { source: ARIN }
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

RESERVED_KEYS = frozenset({"flat", "depth", "source"})


@dataclass(frozen=True)
class MemberSpec:
    """One declared AS-SET member. sources is the bgpq4 -S list (YAML key: source)."""

    name: str
    flat: bool = False
    depth: int | None = None
    sources: str | None = None


def _flag(value: Any) -> bool | None:
    return value if isinstance(value, bool) else None


def _depth(value: Any) -> int | None:
    # bool is an int subclass; `depth: true` is not a depth
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


def _sources(value: Any) -> str | None:
    return value.strip() if isinstance(value, str) else None


def _specs_from_record(record: dict[Any, Any]) -> list[MemberSpec]:
    common_flat = bool(_flag(record.get("flat")))
    common_depth = _depth(record.get("depth"))
    common_sources = _sources(record.get("source"))

    out: list[MemberSpec] = []
    for raw_name, cfg in record.items():
        if not isinstance(raw_name, str) or raw_name in RESERVED_KEYS:
            continue
        name = raw_name.strip()
        if not name:
            continue

        flat, depth, sources = common_flat, common_depth, common_sources
        if isinstance(cfg, dict):
            if _flag(cfg.get("flat")) is not None:
                flat = cfg["flat"]
            if _depth(cfg.get("depth")) is not None:
                depth = cfg["depth"]
            if _sources(cfg.get("source")) is not None:
                sources = cfg["source"].strip()

        out.append(MemberSpec(name=name, flat=flat, depth=depth, sources=sources))
    return out


def parse_member_specs(value: Any) -> list[MemberSpec]:
    """Normalize a YAML members list into MemberSpec records, in input order.

    Unrecognized or malformed entries are skipped without error.
    """
    if not isinstance(value, list):
        return []
    out: list[MemberSpec] = []
    for item in value:
        if isinstance(item, str):
            name = item.strip()
            if name:
                out.append(MemberSpec(name=name))
        elif isinstance(item, dict):
            out.extend(_specs_from_record(item))
    return out


def member_names(value: Any) -> list[str]:
    """Member names only; per-member config is dropped."""
    return [spec.name for spec in parse_member_specs(value)]

"""ARIN AS-SET object, independent of its textual representation."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

ARIN_SOURCE = "ARIN"

POC_TECH = "T"
POC_ADMIN = "AD"


@dataclass
class PocLink:
    handle: str
    function: str = ""
    description: str = ""


@dataclass
class ASSet:
    name: str = ""
    creation_date: datetime | None = None
    last_modified_date: datetime | None = None
    descriptions: list[str] = field(default_factory=list)
    remarks: list[str] = field(default_factory=list)
    poc_links: list[PocLink] = field(default_factory=list)
    org_handle: str | None = None
    members: list[str] = field(default_factory=list)

    @property
    def source(self) -> str:
        return ARIN_SOURCE


def check_source(source: str, where: str) -> None:
    """Raise ValueError if an explicit source is not ARIN."""
    if source and source != ARIN_SOURCE:
        msg = f"{where}: unexpected source {source!r} (only {ARIN_SOURCE} is supported)"
        raise ValueError(msg)

"""Shared helpers for irr_asset_tooling (text, dates, member lists).

Used by asset formats, the YAML config loader, and the sync workflow.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timezone
from typing import Any

# --- Text ---


def is_record(value: Any) -> bool:
    """True for a mapping (YAML/XML object), False for lists, scalars and None."""
    return isinstance(value, dict)


def as_list(value: Any) -> list[Any]:
    """xmltodict yields a dict for one child and a list for many; always return a list."""
    if value is None:
        return []
    return value if isinstance(value, list) else [value]


def node_text(value: Any) -> str:
    """Text of an XML node: plain string, or the '#text' of a node with attributes."""
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        text = value.get("#text")
        return text if isinstance(text, str) else ""
    return ""


def split_multiline(value: Any) -> list[str]:
    """Split a multi-line string into trimmed, non-empty lines. Non-strings give []."""
    if not isinstance(value, str):
        return []
    return [line.strip() for line in re.split(r"\r?\n", value) if line.strip()]


# --- Members ---


def normalize_members(members: list[Any]) -> list[str]:
    """Trim, drop blanks and non-strings, sort case-insensitively. Duplicates are kept."""
    cleaned = [m.strip() for m in members if isinstance(m, str) and m.strip()]
    return sorted(cleaned, key=lambda m: (m.casefold(), m))


def same_members(a: list[str], b: list[str]) -> bool:
    """Compare two member lists as sets."""
    return set(a) == set(b)


# --- Dates ---


def parse_date(value: Any) -> datetime | None:
    """Parse an ISO-8601 string (or a YAML date/datetime) into a datetime; None when invalid."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def format_date(value: datetime) -> str:
    """UTC ISO-8601 with milliseconds and a Z suffix (e.g. 2024-01-02T03:04:05.000Z)."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    utc = value.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"

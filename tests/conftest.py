"""Pytest fixtures for irr-asset tooling tests."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

SAMPLE_RPSL = """\
as-set: AS-EXAMPLE
descr: Example customers
remarks: first remark
    continued remark
org-handle: EXAMPLE-ARIN
tech-c: TECH-ARIN
admin-c: ADMIN-ARIN
members: AS64501
members: AS-CUSTOMER
members: AS64500
source: ARIN
"""

SAMPLE_XML = """\
<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<asSet xmlns="http://www.arin.net/regrws/core/v1">
    <creationDate>2024-01-02T03:04:05-05:00</creationDate>
    <description>
        <line number="0">Example customers</line>
    </description>
    <remarks>
        <line number="0">first remark</line>
        <line number="1">second remark</line>
    </remarks>
    <orgHandle>EXAMPLE-ARIN</orgHandle>
    <pocLinks>
        <pocLinkRef description="Tech" function="T" handle="TECH-ARIN"/>
    </pocLinks>
    <source>ARIN</source>
    <members>
        <member name="AS64501"/>
        <member name="AS64500"/>
    </members>
    <name>AS-EXAMPLE</name>
</asSet>
"""

SAMPLE_LIST_XML = """\
<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<collection xmlns="http://www.arin.net/regrws/core/v1">
    <asSetRef name="AS-EXAMPLE"/>
    <asSetRef name="AS-OTHER"/>
</collection>
"""

SAMPLE_YAML = """\
name: AS-EXAMPLE
source: ARIN
orgHandle: EXAMPLE-ARIN
description: |
  Example customers

  second line
remarks: managed by irr-asset
pocLinks:
  - handle: TECH-ARIN
    function: T
    description: Tech
members:
  - AS64500
  - AS-CUSTOMER:
      flat: true
      depth: 1
"""


class FakeQuery:
    """Stand-in for query_expanded_asns.

    results maps (name, sources) to a list of ASNs or an exception to raise.
    Yields to the event loop once per call so concurrent callers interleave.
    """

    def __init__(self, results: dict | None = None) -> None:
        self.results = results or {}
        self.calls: list[tuple[str, str | None]] = []

    async def __call__(self, spec, timeout, sources=None, *, host=None, executable=None):
        self.calls.append((spec.name, sources))
        await asyncio.sleep(0)
        result = self.results.get((spec.name, sources), [])
        if isinstance(result, Exception):
            raise result
        return list(result)


@pytest.fixture
def fake_query() -> type[FakeQuery]:
    """FakeQuery class; call it with a results dict."""
    return FakeQuery


@pytest.fixture
def sync_dir(tmp_path: Path) -> Path:
    d = tmp_path / "sync" / "as-sets"
    d.mkdir(parents=True)
    return d


@pytest.fixture
def sample_rpsl() -> str:
    return SAMPLE_RPSL


@pytest.fixture
def sample_xml() -> str:
    return SAMPLE_XML


@pytest.fixture
def sample_list_xml() -> str:
    return SAMPLE_LIST_XML


@pytest.fixture
def sample_yaml() -> str:
    return SAMPLE_YAML

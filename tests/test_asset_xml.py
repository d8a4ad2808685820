"""Tests for irr_asset_tooling.asset.arin_xml (ARIN Reg-RWS payloads)."""

from datetime import datetime, timezone

import pytest

from irr_asset_tooling.asset import ASSet, PocLink, asset_from_xml, asset_to_xml, parse_as_set_refs


class TestAssetFromXml:
    def test_sample(self, sample_xml: str) -> None:
        asset = asset_from_xml(sample_xml)
        assert asset.name == "AS-EXAMPLE"
        assert asset.descriptions == ["Example customers"]
        assert asset.remarks == ["first remark", "second remark"]
        assert asset.org_handle == "EXAMPLE-ARIN"
        assert asset.poc_links == [PocLink("TECH-ARIN", "T", "Tech")]
        assert asset.members == ["AS64500", "AS64501"]
        assert asset.creation_date == datetime(2024, 1, 2, 8, 4, 5, tzinfo=timezone.utc)
        assert asset.last_modified_date is None

    def test_single_member_without_namespace(self) -> None:
        asset = asset_from_xml(
            '<asSet><name>AS-X</name><members><member name="AS1"/></members></asSet>'
        )
        assert asset.name == "AS-X"
        assert asset.members == ["AS1"]
        assert asset.org_handle is None

    def test_missing_root(self) -> None:
        with pytest.raises(ValueError, match="missing <asSet> root"):
            asset_from_xml("<other/>")

    def test_malformed_xml(self) -> None:
        with pytest.raises(ValueError, match="Invalid ARIN XML"):
            asset_from_xml("<asSet><name>")

    def test_foreign_source_rejected(self) -> None:
        with pytest.raises(ValueError, match="RADB"):
            asset_from_xml("<asSet><source>RADB</source><name>AS-X</name></asSet>")


class TestAssetToXml:
    def test_element_order_and_header(self) -> None:
        asset = ASSet(
            name="AS-EXAMPLE",
            creation_date=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
            descriptions=["Example customers"],
            remarks=["r1", "r2"],
            org_handle="EXAMPLE-ARIN",
            poc_links=[PocLink("TECH-ARIN", "T", "Tech")],
            members=["AS64501", "AS64500"],
        )
        xml = asset_to_xml(asset)
        assert xml.startswith('<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n<asSet')
        assert 'xmlns="http://www.arin.net/regrws/core/v1"' in xml
        assert "<creationDate>2024-01-02T03:04:05.000Z</creationDate>" in xml
        assert '<line number="1">r2</line>' in xml
        assert '<pocLinkRef description="Tech" function="T" handle="TECH-ARIN"' in xml
        order = [
            "<creationDate>",
            "<description>",
            "<remarks>",
            "<orgHandle>",
            "<pocLinks>",
            "<source>",
            "<members>",
            "<name>",
        ]
        positions = [xml.index(tag) for tag in order]
        assert positions == sorted(positions)
        assert xml.index('name="AS64500"') < xml.index('name="AS64501"')

    def test_optional_parts_omitted(self) -> None:
        xml = asset_to_xml(ASSet(name="AS-X", org_handle="ORG-ARIN"))
        assert "<members" not in xml
        assert "<pocLinks" not in xml
        assert "<description" not in xml
        assert "<source>ARIN</source>" in xml

    @pytest.mark.parametrize(
        ("asset", "match"),
        [
            (ASSet(name="", org_handle="ORG-ARIN"), "name"),
            (ASSet(name="AS-X"), "org_handle"),
        ],
    )
    def test_required_fields(self, asset: ASSet, match: str) -> None:
        with pytest.raises(ValueError, match=match):
            asset_to_xml(asset)

    def test_reparse(self, sample_xml: str) -> None:
        asset = asset_from_xml(sample_xml)
        again = asset_from_xml(asset_to_xml(asset))
        assert again == asset


class TestParseAsSetRefs:
    def test_names(self, sample_list_xml: str) -> None:
        assert parse_as_set_refs(sample_list_xml) == ["AS-EXAMPLE", "AS-OTHER"]

    def test_single_and_empty(self) -> None:
        assert parse_as_set_refs('<collection><asSetRef name="AS-ONE"/></collection>') == ["AS-ONE"]
        assert parse_as_set_refs("<collection/>") == []

    def test_missing_collection(self) -> None:
        with pytest.raises(ValueError, match="collection"):
            parse_as_set_refs("<asSet/>")

"""Tests for irr_asset_tooling.registry.client (urlopen mocked)."""

import sys
from io import BytesIO
from unittest.mock import MagicMock, patch
from urllib.error import HTTPError, URLError
from urllib.parse import parse_qs, urlsplit

import pytest

from irr_asset_tooling.asset import ASSet
from irr_asset_tooling.registry import (
    ObjectAction,
    ObjectType,
    RegistryClient,
    RegistryError,
)

client_module = sys.modules["irr_asset_tooling.registry.client"]


def _fake_urlopen_success(text: str = "", status: int = 200) -> MagicMock:
    """Create a mock urlopen response usable as a context manager."""
    response = MagicMock()
    response.status = status
    response.read.return_value = text.encode()
    response.__enter__.return_value = response
    return response


def _http_error(code: int, text: str = "") -> HTTPError:
    return HTTPError("url", code, "error", {}, BytesIO(text.encode()))


def _sent(mock_urlopen: MagicMock):
    """(request, query dict) of the last urlopen call."""
    req = mock_urlopen.call_args[0][0]
    query = {k: v[0] for k, v in parse_qs(urlsplit(req.full_url).query).items()}
    return req, query


class TestUrlFor:
    def test_fields_are_quoted(self) -> None:
        client = RegistryClient("secret")
        method, url = client.url_for(ObjectType.AS_SET, ObjectAction.VIEW, name="AS-FOO:AS-BAR")
        assert method == "GET"
        assert url == "https://reg.arin.net/rest/irr/as-set/AS-FOO%3AAS-BAR"

    def test_base_url_without_trailing_slash(self) -> None:
        client = RegistryClient("secret", "https://reg.ote.arin.net/rest")
        _, url = client.url_for(ObjectType.AS_SET, ObjectAction.LIST, org_handle="EXAMPLE-ARIN")
        assert url == "https://reg.ote.arin.net/rest/org/EXAMPLE-ARIN/as-sets"

    def test_unsupported_pair(self) -> None:
        with pytest.raises(ValueError, match="Unsupported action for route"):
            RegistryClient("secret").url_for(ObjectType.ROUTE, ObjectAction.VIEW, name="x")


class TestExecute:
    def test_sends_apikey_headers_and_body(self) -> None:
        client = RegistryClient("secret", timeout=5)
        with patch.object(client_module, "urlopen", return_value=_fake_urlopen_success("<ok/>", 201)) as m:
            result = client.execute(
                ObjectType.AS_SET,
                ObjectAction.CREATE,
                body="<asSet/>",
                params={"orgHandle": "ORG"},
            )
        assert result.is_success
        assert result.status == 201
        assert result.message == "<ok/>"
        req, query = _sent(m)
        assert req.get_method() == "POST"
        assert req.full_url.startswith("https://reg.arin.net/rest/irr/as-set?")
        assert query == {"apikey": "secret", "orgHandle": "ORG"}
        assert req.data == b"<asSet/>"
        assert req.get_header("Content-type") == "application/xml"
        assert m.call_args[1]["timeout"] == 5

    def test_http_error_is_a_failed_result(self) -> None:
        client = RegistryClient("secret")
        with patch.object(client_module, "urlopen", side_effect=_http_error(404, "not found")):
            result = client.execute(ObjectType.AS_SET, ObjectAction.VIEW, name="AS-X")
        assert not result.is_success
        assert result.status == 404
        assert result.message == "not found"

    def test_path_override_with_query(self) -> None:
        override = {(ObjectType.AS_SET, ObjectAction.LIST): ("GET", "irr/as-set?orgHandle={org_handle}")}
        client = RegistryClient("secret", paths=override)
        with patch.object(client_module, "urlopen", return_value=_fake_urlopen_success()) as m:
            client.execute(ObjectType.AS_SET, ObjectAction.LIST, org_handle="ORG")
        _, query = _sent(m)
        assert query == {"orgHandle": "ORG", "apikey": "secret"}

    def test_api_key_required(self) -> None:
        client = RegistryClient("  ")
        with patch.object(client_module, "urlopen") as m:
            with pytest.raises(ValueError, match="API key"):
                client.execute(ObjectType.AS_SET, ObjectAction.VIEW, name="AS-X")
        m.assert_not_called()

    def test_network_error(self) -> None:
        client = RegistryClient("secret")
        with patch.object(client_module, "urlopen", side_effect=URLError("refused")):
            with pytest.raises(RegistryError, match="refused") as exc:
                client.execute(ObjectType.AS_SET, ObjectAction.VIEW, name="AS-X")
        assert exc.value.status is None

    def test_timeout(self) -> None:
        client = RegistryClient("secret")
        with patch.object(client_module, "urlopen", side_effect=TimeoutError("timed out")):
            with pytest.raises(RegistryError, match="timed out"):
                client.execute(ObjectType.AS_SET, ObjectAction.VIEW, name="AS-X")


class TestAsSetOperations:
    def test_view(self, sample_xml: str) -> None:
        client = RegistryClient("secret")
        with patch.object(client_module, "urlopen", return_value=_fake_urlopen_success(sample_xml)) as m:
            asset = client.view_as_set(" AS-EXAMPLE ")
        assert asset.name == "AS-EXAMPLE"
        req, _ = _sent(m)
        assert req.get_method() == "GET"
        assert urlsplit(req.full_url).path == "/rest/irr/as-set/AS-EXAMPLE"

    def test_view_failure_raises(self) -> None:
        client = RegistryClient("secret")
        with patch.object(client_module, "urlopen", side_effect=_http_error(404, "<error/>")):
            with pytest.raises(RegistryError) as exc:
                client.view_as_set("AS-MISSING")
        assert exc.value.status == 404
        assert exc.value.body == "<error/>"

    def test_view_requires_name(self) -> None:
        client = RegistryClient("secret")
        with patch.object(client_module, "urlopen") as m:
            with pytest.raises(ValueError, match="AS-SET name is required for viewing"):
                client.view_as_set("")
        m.assert_not_called()

    def test_list(self, sample_list_xml: str) -> None:
        client = RegistryClient("secret")
        with patch.object(client_module, "urlopen", return_value=_fake_urlopen_success(sample_list_xml)):
            listed = client.list_as_sets("EXAMPLE-ARIN")
        assert [a.name for a in listed] == ["AS-EXAMPLE", "AS-OTHER"]

    def test_list_requires_org(self) -> None:
        with pytest.raises(ValueError, match="Org handle is required for listing"):
            RegistryClient("secret").list_as_sets(" ")

    def test_create_from_model(self, sample_xml: str) -> None:
        client = RegistryClient("secret")
        with patch.object(client_module, "urlopen", return_value=_fake_urlopen_success(sample_xml)) as m:
            asset = ASSet(name="AS-EXAMPLE", org_handle="EXAMPLE-ARIN")
            created = client.create_as_set(asset, "EXAMPLE-ARIN")
        assert created.name == "AS-EXAMPLE"
        req, query = _sent(m)
        assert query["orgHandle"] == "EXAMPLE-ARIN"
        assert b"<name>AS-EXAMPLE</name>" in req.data

    def test_modify_with_raw_xml(self, sample_xml: str) -> None:
        client = RegistryClient("secret")
        with patch.object(client_module, "urlopen", return_value=_fake_urlopen_success(sample_xml)) as m:
            client.modify_as_set("AS-EXAMPLE", sample_xml)
        req, _ = _sent(m)
        assert req.get_method() == "PUT"
        assert req.data == sample_xml.strip().encode()

    def test_modify_requires_content(self) -> None:
        with pytest.raises(ValueError, match="AS-SET content is required for modifying"):
            RegistryClient("secret").modify_as_set("AS-X", "  ")

    def test_delete(self) -> None:
        client = RegistryClient("secret")
        with patch.object(client_module, "urlopen", return_value=_fake_urlopen_success()) as m:
            client.delete_as_set("AS-X")
        assert _sent(m)[0].get_method() == "DELETE"

    def test_delete_failure(self) -> None:
        client = RegistryClient("secret")
        with patch.object(client_module, "urlopen", side_effect=_http_error(403, "forbidden")):
            with pytest.raises(RegistryError, match="HTTP 403"):
                client.delete_as_set("AS-X")

"""ARIN Reg-RWS client for IRR objects (XML over HTTPS, apikey query parameter).

Paths are looked up per (object type, action) and can be overridden, e.g. to
point at ARIN's OT&E environment or a different object type layout.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.parse import quote, urlencode, urljoin
from urllib.request import Request, urlopen

from irr_asset_tooling.asset import (
    ASSet,
    asset_from_xml,
    asset_to_xml,
    parse_as_set_refs,
)

log = logging.getLogger(__name__)

DEFAULT_API_URL = "https://reg.arin.net/rest/"
DEFAULT_REQUEST_TIMEOUT = 30.0

XML_HEADERS = {
    "Content-Type": "application/xml",
    "Accept": "application/xml",
}


class ObjectType(str, Enum):
    ROUTE = "route"
    ROUTE6 = "route6"
    AUT_NUM = "aut-num"
    AS_SET = "as-set"
    ROUTE_SET = "route-set"


class ObjectAction(str, Enum):
    CREATE = "create"
    VIEW = "view"
    DELETE = "delete"
    MODIFY = "modify"
    LIST = "list"


# (type, action) -> (HTTP method, path template relative to api_url)
DEFAULT_PATHS: dict[tuple[ObjectType, ObjectAction], tuple[str, str]] = {
    (ObjectType.AS_SET, ObjectAction.VIEW): ("GET", "irr/as-set/{name}"),
    (ObjectType.AS_SET, ObjectAction.LIST): ("GET", "org/{org_handle}/as-sets"),
    (ObjectType.AS_SET, ObjectAction.CREATE): ("POST", "irr/as-set"),
    (ObjectType.AS_SET, ObjectAction.MODIFY): ("PUT", "irr/as-set/{name}"),
    (ObjectType.AS_SET, ObjectAction.DELETE): ("DELETE", "irr/as-set/{name}"),
}


class RegistryError(RuntimeError):
    """Registry request failed (transport error or non-2xx status)."""

    def __init__(self, message: str, status: int | None = None, body: str = "") -> None:
        self.status = status
        self.body = body
        super().__init__(message)


@dataclass
class TaskResult:
    is_success: bool
    status: int
    message: str


def _required(value: str | None, what: str, action: str) -> str:
    if not value or not value.strip():
        msg = f"{what} is required for {action} AS-SET"
        raise ValueError(msg)
    return value.strip()


class RegistryClient:
    """Authenticated requests against the registry; success is HTTP 2xx."""

    def __init__(
        self,
        api_key: str,
        api_url: str = DEFAULT_API_URL,
        *,
        paths: dict[tuple[ObjectType, ObjectAction], tuple[str, str]] | None = None,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ):
        self.api_key = api_key
        self.api_url = api_url if api_url.endswith("/") else api_url + "/"
        self.paths = dict(DEFAULT_PATHS)
        if paths:
            self.paths.update(paths)
        self.timeout = timeout

    def url_for(self, object_type: ObjectType, action: ObjectAction, **fields: str) -> tuple[str, str]:
        """(method, absolute URL) with path fields URL-encoded."""
        try:
            method, template = self.paths[(object_type, action)]
        except KeyError:
            msg = f"Unsupported action for {object_type.value}: {action.value}"
            raise ValueError(msg) from None
        path = template.format(**{k: quote(v, safe="") for k, v in fields.items()})
        return method, urljoin(self.api_url, path)

    def execute(
        self,
        object_type: ObjectType,
        action: ObjectAction,
        *,
        body: str | None = None,
        params: dict[str, str] | None = None,
        **fields: str,
    ) -> TaskResult:
        """Send one request. Raises ValueError without an API key, RegistryError on transport errors."""
        if not self.api_key or not self.api_key.strip():
            msg = "API key is required"
            raise ValueError(msg)

        method, url = self.url_for(object_type, action, **fields)
        query: dict[str, Any] = {"apikey": self.api_key}
        if params:
            query.update(params)

        log.debug("%s %s", method, url)
        sep = "&" if "?" in url else "?"
        req = Request(
            f"{url}{sep}{urlencode(query)}",
            data=body.encode() if body is not None else None,
            headers=XML_HEADERS,
            method=method,
        )
        try:
            with urlopen(req, timeout=self.timeout) as response:
                status = response.status
                raw = response.read()
        except HTTPError as e:
            status = e.code
            raw = e.read() if e.fp is not None else b""
        except (URLError, TimeoutError) as e:
            msg = f"{method} {url} failed: {e}"
            raise RegistryError(msg) from e

        return TaskResult(
            is_success=200 <= status < 300,
            status=status,
            message=raw.decode(errors="replace"),
        )

    def _check(self, result: TaskResult, what: str) -> TaskResult:
        if not result.is_success:
            msg = f"Failed to {what}: HTTP {result.status}: {result.message}"
            raise RegistryError(msg, status=result.status, body=result.message)
        return result

    def view_as_set(self, name: str) -> ASSet:
        name = _required(name, "AS-SET name", "viewing")
        result = self.execute(ObjectType.AS_SET, ObjectAction.VIEW, name=name)
        return asset_from_xml(self._check(result, f"view AS-SET {name}").message)

    def list_as_sets(self, org_handle: str) -> list[ASSet]:
        """AS-SETs of an org; only names are filled in (use view_as_set for details)."""
        org_handle = _required(org_handle, "Org handle", "listing")
        result = self.execute(ObjectType.AS_SET, ObjectAction.LIST, org_handle=org_handle)
        names = parse_as_set_refs(self._check(result, f"list AS-SETs of {org_handle}").message)
        return [ASSet(name=n) for n in names]

    def create_as_set(self, content: ASSet | str, org_handle: str) -> ASSet:
        body = asset_to_xml(content) if isinstance(content, ASSet) else content
        body = _required(body, "AS-SET content", "creating")
        org_handle = _required(org_handle, "Org handle", "creating")
        result = self.execute(
            ObjectType.AS_SET,
            ObjectAction.CREATE,
            body=body,
            params={"orgHandle": org_handle},
        )
        return asset_from_xml(self._check(result, "create AS-SET").message)

    def modify_as_set(self, name: str, content: ASSet | str) -> ASSet:
        body = asset_to_xml(content) if isinstance(content, ASSet) else content
        body = _required(body, "AS-SET content", "modifying")
        name = _required(name, "AS-SET name", "modifying")
        result = self.execute(ObjectType.AS_SET, ObjectAction.MODIFY, body=body, name=name)
        return asset_from_xml(self._check(result, f"modify AS-SET {name}").message)

    def delete_as_set(self, name: str) -> None:
        name = _required(name, "AS-SET name", "deleting")
        result = self.execute(ObjectType.AS_SET, ObjectAction.DELETE, name=name)
        self._check(result, f"delete AS-SET {name}")

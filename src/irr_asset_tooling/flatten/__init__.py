"""Member flattening: parse member specs, expand AS-SETs with bgpq4, cache and resolve."""

from .bgpq4 import (
    DEFAULT_BGPQ4_HOST,
    DEFAULT_TIMEOUT,
    build_bgpq4_args,
    parse_bgpq4_output,
    query_expanded_asns,
    sanitize_list_name,
)
from .cache import ExpansionCache, cache_key
from .errors import (
    EmptyExpansionError,
    ExpansionFailure,
    FlattenError,
    InvalidSpecification,
    MalformedOutput,
)
from .resolver import ON_EMPTY_CHOICES, FlattenOptions, MemberResolver
from .specs import MemberSpec, member_names, parse_member_specs

__all__ = [
    "DEFAULT_BGPQ4_HOST",
    "DEFAULT_TIMEOUT",
    "ON_EMPTY_CHOICES",
    "EmptyExpansionError",
    "ExpansionCache",
    "ExpansionFailure",
    "FlattenError",
    "FlattenOptions",
    "InvalidSpecification",
    "MalformedOutput",
    "MemberResolver",
    "MemberSpec",
    "build_bgpq4_args",
    "cache_key",
    "member_names",
    "parse_bgpq4_output",
    "parse_member_specs",
    "query_expanded_asns",
    "sanitize_list_name",
]

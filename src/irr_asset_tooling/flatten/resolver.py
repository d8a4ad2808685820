"""Resolve MemberSpecs into the final member list of an AS-SET.

Per member: non-flat names pass through; flat members are expanded with bgpq4
(through the ExpansionCache), retried once without -S when a sources-specific
query comes back empty, and finally handled by the on_empty policy.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass

from irr_asset_tooling.flatten.bgpq4 import (
    DEFAULT_BGPQ4_HOST,
    DEFAULT_BGPQ4_PATH,
    DEFAULT_TIMEOUT,
    query_expanded_asns,
)
from irr_asset_tooling.flatten.cache import ExpansionCache, cache_key
from irr_asset_tooling.flatten.errors import EmptyExpansionError
from irr_asset_tooling.flatten.specs import MemberSpec

log = logging.getLogger(__name__)

ON_EMPTY_CHOICES = ("keep", "empty", "error")

Query = Callable[..., Awaitable[list[str]]]


@dataclass(frozen=True)
class FlattenOptions:
    """timeout: seconds per bgpq4 run. on_empty: keep (literal name), empty (drop), error (raise)."""

    timeout: float = DEFAULT_TIMEOUT
    on_empty: str = "keep"

    def __post_init__(self) -> None:
        if self.on_empty not in ON_EMPTY_CHOICES:
            msg = f"on_empty must be one of {', '.join(ON_EMPTY_CHOICES)}: {self.on_empty!r}"
            raise ValueError(msg)
        if self.timeout <= 0:
            msg = f"timeout must be positive: {self.timeout!r}"
            raise ValueError(msg)


class MemberResolver:
    """Flattens member specs with bgpq4, sharing one ExpansionCache.

    query is called as query(spec, timeout, sources, host=..., executable=...);
    tests substitute a fake coroutine function.
    """

    def __init__(
        self,
        cache: ExpansionCache | None = None,
        query: Query = query_expanded_asns,
        host: str = DEFAULT_BGPQ4_HOST,
        executable: str = DEFAULT_BGPQ4_PATH,
    ) -> None:
        self.cache = cache if cache is not None else ExpansionCache()
        self._query = query
        self.host = host
        self.executable = executable

    async def _expand(self, spec: MemberSpec, timeout: float, sources: str | None) -> list[str]:
        def producer() -> Awaitable[list[str]]:
            return self._query(
                spec, timeout, sources, host=self.host, executable=self.executable
            )

        # shielded: a cancelled caller must not cancel the run other callers share
        return await asyncio.shield(self.cache.get_or_start(cache_key(spec, sources), producer))

    async def flatten(
        self,
        spec: MemberSpec,
        options: FlattenOptions | None = None,
        sources: str | None = None,
    ) -> list[str]:
        """Contribution of one member to the output list (see module docstring)."""
        if not spec.flat:
            return [spec.name]
        opts = options or FlattenOptions()

        asns = await self._expand(spec, opts.timeout, sources)
        if asns:
            return asns

        if sources:
            log.debug(
                "Empty expansion for %s with -S %s; retrying with default sources",
                spec.name,
                sources,
            )
            asns = await self._expand(spec, opts.timeout, None)
            if asns:
                return asns

        if opts.on_empty == "empty":
            log.debug("Dropping %s: empty expansion", spec.name)
            return []
        if opts.on_empty == "error":
            raise EmptyExpansionError(spec.name)
        log.debug("Keeping %s as a literal member: empty expansion", spec.name)
        return [spec.name]

    async def resolve(
        self,
        specs: Iterable[MemberSpec],
        options: FlattenOptions | None = None,
        default_sources: str | None = None,
    ) -> list[str]:
        """Flatten specs in order and deduplicate. Fails on the first member that raises."""
        out: list[str] = []
        for spec in specs:
            sources = spec.sources if spec.sources is not None else default_sources
            out.extend(await self.flatten(spec, options, sources))
        return list(dict.fromkeys(out))

"""In-flight and completed bgpq4 expansions, keyed by (name, depth, sources).

Concurrent callers for the same key share one asyncio.Task, so bgpq4 runs at
most once per key. get_or_start is synchronous: lookup and insertion happen
without a suspension point, which is what makes the dedup hold on a single
event loop. Failed tasks are evicted so the next request starts over.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from irr_asset_tooling.flatten.specs import MemberSpec

log = logging.getLogger(__name__)

Producer = Callable[[], Awaitable[list[str]]]


def cache_key(spec: MemberSpec, sources: str | None = None) -> str:
    """name|depth|sources, with empty parts for unset depth/sources."""
    depth = str(spec.depth) if spec.depth is not None else ""
    return f"{spec.name}|{depth}|{(sources or '').strip()}"


class ExpansionCache:
    """Per-run memo of expansion tasks. Construct once and share between resolvers."""

    def __init__(self) -> None:
        self._entries: dict[str, asyncio.Task[list[str]]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def clear(self) -> None:
        self._entries.clear()

    def get_or_start(self, key: str, producer: Producer) -> asyncio.Task[list[str]]:
        """Return the task for key, starting producer() only if there is none.

        Must be called from a running event loop.
        """
        existing = self._entries.get(key)
        if existing is not None:
            log.debug("Expansion cache hit: %s", key)
            return existing
        log.debug("Expansion cache miss: %s", key)
        task = asyncio.ensure_future(self._run(key, producer))
        self._entries[key] = task
        return task

    async def _run(self, key: str, producer: Producer) -> list[str]:
        try:
            return await producer()
        except BaseException:
            self._entries.pop(key, None)
            raise

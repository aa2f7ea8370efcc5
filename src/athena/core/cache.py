"""TTL response cache for side-effect-free tools.

The cache is owned by a single :class:`~athena.core.pipeline.ToolPipeline`
and mutated only through :meth:`ResponseCache.store`. Entries expire
passively: a stale entry is never served, but it is only removed when a
store pushes the size past ``max_entries`` and triggers a sweep.

No locking is done. The pipeline runs on one asyncio event loop and the
dict operations here never await, so a lookup or store cannot interleave
with another. Two concurrent identical calls may both miss and both
execute; the later store simply overwrites the earlier one.
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

logger = logging.getLogger(__name__)

DEFAULT_TTL = 300.0
DEFAULT_MAX_ENTRIES = 1000


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """A cached tool result and the clock reading when it was stored."""

    data: str
    timestamp: float


def make_key(tool_name: str, arguments: Mapping[str, Any]) -> str:
    """Build a cache key: tool name plus canonical JSON of the arguments."""
    canonical = json.dumps(
        arguments,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )
    return f"{tool_name}:{canonical}"


class ResponseCache:
    """In-memory map of cache key to :class:`CacheEntry` with a fixed TTL."""

    def __init__(
        self,
        *,
        ttl: float = DEFAULT_TTL,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl
        self._max_entries = max_entries
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    @property
    def ttl(self) -> float:
        return self._ttl

    @property
    def max_entries(self) -> int:
        return self._max_entries

    def lookup(self, key: str) -> str | None:
        """Return cached data if present and younger than the TTL."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.timestamp < self._ttl:
            return entry.data
        return None

    def store(self, key: str, data: str) -> None:
        """Insert or overwrite an entry, sweeping stale ones past the high-water mark."""
        self._entries[key] = CacheEntry(data=data, timestamp=self._clock())
        if len(self._entries) > self._max_entries:
            self.sweep()

    def sweep(self) -> int:
        """Remove every entry whose age has reached the TTL.

        Returns:
            Number of entries removed.
        """
        now = self._clock()
        stale = [k for k, v in self._entries.items() if now - v.timestamp >= self._ttl]
        for key in stale:
            del self._entries[key]
        if stale:
            logger.debug("Swept %d stale cache entries", len(stale))
        return len(stale)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

"""Short-lived in-process cache for repeated listing queries."""
from __future__ import annotations

import re
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from typing import Any

from homehub.config import SETTINGS


@dataclass
class _CacheEntry:
    data: Any
    stored_at: float


class TTLCache:
    def __init__(self, ttl_seconds: float | None = None, clock: Callable[[], float] = time.monotonic) -> None:
        self._ttl = SETTINGS.cache_ttl_seconds if ttl_seconds is None else ttl_seconds
        self._clock = clock
        self._entries: dict[str, _CacheEntry] = {}

    def get(self, key: str) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.stored_at > self._ttl:
            del self._entries[key]
            return None
        return entry.data

    def set(self, key: str, data: Any) -> None:
        self._entries[key] = _CacheEntry(data=data, stored_at=self._clock())

    def invalidate(self, key: str) -> None:
        self._entries.pop(key, None)

    def invalidate_pattern(self, pattern: str) -> None:
        regex = re.compile(pattern)
        for key in [key for key in self._entries if regex.search(key)]:
            del self._entries[key]

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


def expenses_cache_key(
    household_id: int,
    start_date: date | None = None,
    end_date: date | None = None,
    category: str | None = None,
    limit: int | None = None,
) -> str:
    key = f"expenses-{household_id}"
    if start_date:
        key += f"-from-{start_date.isoformat()}"
    if end_date:
        key += f"-to-{end_date.isoformat()}"
    if category:
        key += f"-cat-{category}"
    if limit:
        key += f"-limit-{limit}"
    return key


def tasks_cache_key(household_id: int) -> str:
    return f"tasks-{household_id}"


def inventory_cache_key(household_id: int) -> str:
    return f"inventory-{household_id}"


shared_cache = TTLCache()

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional, Tuple

import httpx

from webservice.config.settings import get_settings

CacheKey = Tuple[str, Tuple[Tuple[str, str], ...]]

_BYPASS_DIRECTIVES = {"no-cache", "no-store"}


@dataclass
class CachedResponse:
    status_code: int
    content: bytes
    stored_at: datetime
    max_age: timedelta

    def is_fresh(self, now: datetime) -> bool:
        return now - self.stored_at < self.max_age


def _directives(value: str | None) -> dict[str, str | None]:
    if not value:
        return {}
    parsed: dict[str, str | None] = {}
    for part in value.split(","):
        token = part.strip().lower()
        if not token:
            continue
        name, sep, arg = token.partition("=")
        parsed[name.strip()] = arg.strip().strip('"') if sep else None
    return parsed


def max_age_of(response: httpx.Response) -> Optional[timedelta]:
    """Return the freshness lifetime a response allows, or None if it must not be stored."""

    directives = _directives(response.headers.get("cache-control"))
    if _BYPASS_DIRECTIVES & directives.keys():
        return None
    raw = directives.get("max-age")
    if raw is None:
        return None
    try:
        seconds = int(raw)
    except ValueError:
        return None
    if seconds <= 0:
        return None
    return timedelta(seconds=seconds)


def request_bypasses_cache(headers: Iterable[tuple[str, str]]) -> bool:
    for name, value in headers:
        if name.lower() == "cache-control" and _BYPASS_DIRECTIVES & _directives(value).keys():
            return True
    return False


def make_key(url: str, headers: Iterable[tuple[str, str]]) -> CacheKey:
    return url, tuple((name.lower(), value) for name, value in headers)


class ResponseCache:
    """In-memory store of successful responses keyed by URL and request headers."""

    def __init__(self, *, max_entries: int | None = None) -> None:
        settings = get_settings()
        self._max_entries = max_entries if max_entries is not None else settings.cache_max_entries
        self._store: "OrderedDict[CacheKey, CachedResponse]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._store)

    def store(self, key: CacheKey, response: httpx.Response, *, now: Optional[datetime] = None) -> bool:
        if not 200 <= response.status_code <= 299 or self._max_entries <= 0:
            return False
        max_age = max_age_of(response)
        if max_age is None:
            return False
        self._store.pop(key, None)
        self._store[key] = CachedResponse(
            status_code=response.status_code,
            content=response.content,
            stored_at=now or datetime.now(timezone.utc),
            max_age=max_age,
        )
        while len(self._store) > self._max_entries:
            self._store.popitem(last=False)
        return True

    def get(self, key: CacheKey, *, now: Optional[datetime] = None) -> Optional[CachedResponse]:
        entry = self._store.get(key)
        if not entry:
            return None
        now = now or datetime.now(timezone.utc)
        if not entry.is_fresh(now):
            self._store.pop(key, None)
            return None
        return entry

    def clear(self) -> None:
        self._store.clear()


__all__ = ["CachedResponse", "ResponseCache", "make_key", "max_age_of", "request_bypasses_cache"]

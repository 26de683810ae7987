from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from functools import lru_cache
from pathlib import Path
from typing import Any, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from webservice.client.cache import ResponseCache, make_key, request_bypasses_cache
from webservice.client.query import build_url
from webservice.config.settings import Settings, get_settings
from webservice.errors import ApiError, DecodeError, HttpError, UnknownError
from webservice.keystore import get_key_for
from webservice.models import HeaderField, QueryParameter, Result

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


class Webservice:
    """Issue a GET request and decode the JSON body into a caller-chosen type.

    Each call opens its own HTTP session from ``session_factory``; the only
    state shared between calls is the response cache.
    """

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        session_factory: Callable[[], httpx.AsyncClient] | None = None,
        cache: ResponseCache | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._session_factory = session_factory or self._default_session
        if cache is not None:
            self._cache: ResponseCache | None = cache
        elif self._settings.cache_enabled:
            self._cache = ResponseCache(max_entries=self._settings.cache_max_entries)
        else:
            self._cache = None

    def _default_session(self) -> httpx.AsyncClient:
        headers = {"User-Agent": self._settings.user_agent} if self._settings.user_agent else None
        return httpx.AsyncClient(
            timeout=self._settings.http_timeout_seconds,
            follow_redirects=self._settings.follow_redirects,
            headers=headers,
        )

    @property
    def cache(self) -> ResponseCache | None:
        return self._cache

    async def load(
        self,
        url: str,
        model: type[T] | Any,
        *,
        query_parameters: Sequence[QueryParameter] = (),
        headers: Sequence[HeaderField] = (),
    ) -> T:
        """Fetch ``url`` with the given query and headers and decode the body as ``model``.

        Raises :class:`~webservice.errors.InvalidURLError` before any network
        activity if the assembled URL is malformed, :class:`HttpError` for a
        non-2xx status, :class:`DecodeError` when the body does not fit
        ``model`` and :class:`UnknownError` for transport failures.
        """

        full_url = build_url(url, query_parameters)
        header_items = [(field.name, field.value) for field in headers]
        LOGGER.debug("Loading %s", full_url)

        key = make_key(full_url, header_items)
        use_cache = self._cache is not None and not request_bypasses_cache(header_items)
        if use_cache:
            cached = self._cache.get(key)
            if cached is not None:
                LOGGER.debug("Serving %s from cache", full_url)
                return self._decode(cached.content, model, full_url)

        try:
            async with self._session_factory() as session:
                request = session.build_request("GET", full_url, headers=header_items)
                response = await session.send(request)
        except UnicodeEncodeError as exc:
            # httpx only accepts ASCII header names and values
            LOGGER.warning("Request to %s has a header that cannot be encoded: %s", full_url, exc)
            raise UnknownError(f"request to {full_url} has an unencodable header: {exc}", cause=exc) from exc
        except httpx.HTTPError as exc:
            LOGGER.warning("Request to %s failed: %s", full_url, exc)
            raise UnknownError(f"request to {full_url} failed: {exc}", cause=exc) from exc

        if not 200 <= response.status_code <= 299:
            LOGGER.warning("Request to %s returned HTTP %s", full_url, response.status_code)
            raise HttpError(response.status_code)

        if use_cache:
            self._cache.store(key, response)
        return self._decode(response.content, model, full_url)

    async def load_result(
        self,
        url: str,
        model: type[T] | Any,
        *,
        query_parameters: Sequence[QueryParameter] = (),
        headers: Sequence[HeaderField] = (),
    ) -> Result[T]:
        try:
            value = await self.load(url, model, query_parameters=query_parameters, headers=headers)
        except ApiError as exc:
            return Result.failure(exc)
        return Result.success(value)

    def load_sync(
        self,
        url: str,
        model: type[T] | Any,
        *,
        query_parameters: Sequence[QueryParameter] = (),
        headers: Sequence[HeaderField] = (),
    ) -> T:
        """Blocking variant of :meth:`load`; must not be called from a running event loop."""

        return asyncio.run(self.load(url, model, query_parameters=query_parameters, headers=headers))

    def get_key_for(self, name: str, *, path: str | Path | None = None) -> str | None:
        return get_key_for(name, path=path if path is not None else self._settings.secrets_path)

    def _decode(self, content: bytes, model: type[T] | Any, url: str) -> T:
        try:
            return TypeAdapter(model).validate_json(content)
        except ValidationError as exc:
            LOGGER.warning("Could not decode response from %s: %s", url, exc)
            raise DecodeError(exc) from exc


@lru_cache(maxsize=1)
def get_webservice() -> Webservice:
    """Process-wide executor built from the current settings."""

    return Webservice()


__all__ = ["Webservice", "get_webservice"]

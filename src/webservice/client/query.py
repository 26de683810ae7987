from __future__ import annotations

from collections.abc import Sequence
from urllib.parse import quote

import httpx

from webservice.errors import InvalidURLError
from webservice.models import QueryParameter

_ALLOWED_SCHEMES = ("http", "https")


def _encode(component: str) -> str:
    # Everything outside the RFC 3986 unreserved set is escaped, including & = + / ?
    return quote(component, safe="")


def build_query_string(parameters: Sequence[QueryParameter]) -> str:
    """Serialize parameters as ``?k=v&k=v`` in caller order, or ``""`` if there are none."""

    if not parameters:
        return ""
    pairs = [f"{_encode(param.key)}={_encode(param.value)}" for param in parameters]
    return "?" + "&".join(pairs)


def build_url(base_url: str, parameters: Sequence[QueryParameter] = ()) -> str:
    """Append the encoded query to ``base_url`` and validate the result.

    A base URL that already carries a query is extended with ``&`` so the
    result never contains a second ``?``.
    """

    query = build_query_string(parameters)
    if query and "?" in base_url:
        separator = "" if base_url.endswith(("?", "&")) else "&"
        candidate = f"{base_url}{separator}{query[1:]}"
    else:
        candidate = f"{base_url}{query}"
    validate_url(candidate)
    return candidate


def validate_url(url: str) -> httpx.URL:
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as exc:
        raise InvalidURLError(url, str(exc)) from exc
    if parsed.scheme not in _ALLOWED_SCHEMES:
        raise InvalidURLError(url, "expected an http or https URL")
    if not parsed.host:
        raise InvalidURLError(url, "missing host")
    return parsed


__all__ = ["build_query_string", "build_url", "validate_url"]

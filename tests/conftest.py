from __future__ import annotations

import os
from collections.abc import Callable
from typing import Iterator

import httpx
import pytest

from webservice.client import webservice as webservice_module
from webservice.config import settings as settings_module

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture(autouse=True)
def clear_settings(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("WEBSERVICE_"):
            monkeypatch.delenv(key)
    settings_module.get_settings.cache_clear()
    webservice_module.get_webservice.cache_clear()
    yield
    settings_module.get_settings.cache_clear()
    webservice_module.get_webservice.cache_clear()


@pytest.fixture
def make_service() -> Callable[..., webservice_module.Webservice]:
    def _factory(handler: Handler, **kwargs) -> webservice_module.Webservice:
        transport = httpx.MockTransport(handler)
        return webservice_module.Webservice(
            session_factory=lambda: httpx.AsyncClient(transport=transport),
            **kwargs,
        )

    return _factory

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Annotated, Any

from pydantic import BeforeValidator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _parse_path(value: Any) -> Path:
    if isinstance(value, Path):
        return value
    return Path(str(value).strip())


def _parse_optional_str(value: Any) -> str | None:
    if value in (None, ''):
        return None
    return str(value)


SecretsPath = Annotated[Path, BeforeValidator(_parse_path)]
OptionalStr = Annotated[str | None, BeforeValidator(_parse_optional_str)]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file='.env',
        env_prefix='WEBSERVICE_',
        extra='ignore',
    )

    http_timeout_seconds: float = 60.0
    follow_redirects: bool = True
    user_agent: OptionalStr = None
    cache_enabled: bool = True
    cache_max_entries: int = 256
    secrets_path: SecretsPath = Path('api-keys.plist')
    log_level: str = 'INFO'


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()

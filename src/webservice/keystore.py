from __future__ import annotations

import logging
import plistlib
from pathlib import Path
from xml.parsers.expat import ExpatError

from webservice.config.settings import get_settings

LOGGER = logging.getLogger(__name__)


def get_key_for(name: str, *, path: str | Path | None = None) -> str | None:
    """Look up ``name`` in a flat string-to-string property list.

    The file defaults to ``WEBSERVICE_SECRETS_PATH``. A missing or unreadable
    file, a missing key or a non-string value all yield ``None``.
    """

    plist_path = Path(path) if path is not None else get_settings().secrets_path
    if not plist_path.is_file():
        LOGGER.warning("Secrets file %s not found", plist_path)
        return None

    try:
        with plist_path.open("rb") as handle:
            data = plistlib.load(handle)
    except (OSError, ExpatError, ValueError) as exc:
        LOGGER.warning("Could not read secrets file %s: %s", plist_path, exc)
        return None

    if not isinstance(data, dict):
        LOGGER.warning("Secrets file %s does not contain a dictionary", plist_path)
        return None

    value = data.get(name)
    if value is None:
        LOGGER.warning("Secret %r not present in %s", name, plist_path)
        return None
    if not isinstance(value, str):
        LOGGER.warning("Secret %r in %s is not a string", name, plist_path)
        return None
    return value


__all__ = ["get_key_for"]

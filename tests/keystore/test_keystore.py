from __future__ import annotations

import logging
import plistlib
from pathlib import Path

import pytest

from webservice.client.webservice import Webservice
from webservice.config.settings import Settings
from webservice.keystore import get_key_for


@pytest.fixture
def api_keys(tmp_path: Path) -> Path:
    path = tmp_path / 'api-keys.plist'
    path.write_bytes(plistlib.dumps({'weather': 'abc123', 'maps': 'xyz', 'retries': 3}))
    return path


def test_present_key_returns_value(api_keys: Path) -> None:
    assert get_key_for('weather', path=api_keys) == 'abc123'


def test_absent_key_returns_none_and_logs(api_keys: Path, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger='webservice.keystore'):
        assert get_key_for('news', path=api_keys) is None
    assert "Secret 'news' not present" in caplog.text


def test_missing_file_returns_none_and_logs(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger='webservice.keystore'):
        assert get_key_for('weather', path=tmp_path / 'nope.plist') is None
    assert 'Secrets file' in caplog.text
    assert 'not found' in caplog.text


def test_binary_plist_is_supported(tmp_path: Path) -> None:
    path = tmp_path / 'keys.plist'
    path.write_bytes(plistlib.dumps({'weather': 'bin'}, fmt=plistlib.FMT_BINARY))
    assert get_key_for('weather', path=path) == 'bin'


@pytest.mark.parametrize('content', [b'not a plist', b'<?xml version="1.0"?><plist><dict><key>a'])
def test_corrupt_file_returns_none_and_logs(tmp_path: Path, caplog: pytest.LogCaptureFixture, content: bytes) -> None:
    path = tmp_path / 'broken.plist'
    path.write_bytes(content)
    with caplog.at_level(logging.WARNING, logger='webservice.keystore'):
        assert get_key_for('weather', path=path) is None
    assert 'Could not read secrets file' in caplog.text


def test_non_dict_root_returns_none(tmp_path: Path) -> None:
    path = tmp_path / 'list.plist'
    path.write_bytes(plistlib.dumps(['weather']))
    assert get_key_for('weather', path=path) is None


def test_non_string_value_returns_none(api_keys: Path) -> None:
    assert get_key_for('retries', path=api_keys) is None


def test_default_path_comes_from_settings(api_keys: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv('WEBSERVICE_SECRETS_PATH', str(api_keys))
    assert get_key_for('maps') == 'xyz'


def test_webservice_delegates_to_keystore(api_keys: Path) -> None:
    service = Webservice(settings=Settings(secrets_path=api_keys))
    assert service.get_key_for('weather') == 'abc123'
    assert service.get_key_for('missing') is None

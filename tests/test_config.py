"""Tests for KeyokuSettings and the user-level .env helpers."""

import httpx
import pytest
from pydantic import ValidationError

from keyoku import Keyoku
from keyoku.core import config
from keyoku.core.config import DEFAULT_BASE_URL, KeyokuSettings, write_user_env_vars


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("KEYOKU_API_KEY", "KEYOKU_BASE_URL", "KEYOKU_ENTITY_ID", "KEYOKU_TIMEOUT_SECONDS", "KEYOKU_USER_AGENT"):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = KeyokuSettings(_env_file=None)

    assert settings.api_key is None
    assert settings.base_url == DEFAULT_BASE_URL == "https://api.keyoku.dev"
    assert settings.timeout_seconds == 30.0
    assert settings.entity_id is None
    assert settings.user_agent.startswith("keyoku-python/")


def test_trailing_slash_is_stripped():
    settings = KeyokuSettings(_env_file=None, base_url="https://memory.example.test/")
    assert settings.base_url == "https://memory.example.test"


def test_reads_prefixed_environment(monkeypatch):
    monkeypatch.setenv("KEYOKU_API_KEY", "env-key")
    monkeypatch.setenv("KEYOKU_BASE_URL", "https://env.example.test//")
    monkeypatch.setenv("KEYOKU_TIMEOUT_SECONDS", "5")
    monkeypatch.setenv("KEYOKU_ENTITY_ID", "tenant-7")

    settings = KeyokuSettings(_env_file=None)

    assert settings.api_key == "env-key"
    assert settings.base_url == "https://env.example.test"
    assert settings.timeout_seconds == 5.0
    assert settings.entity_id == "tenant-7"


def test_blank_values_become_none(monkeypatch):
    monkeypatch.setenv("KEYOKU_ENTITY_ID", "   ")
    settings = KeyokuSettings(_env_file=None, api_key="")
    assert settings.api_key is None
    assert settings.entity_id is None


def test_timeout_must_be_positive():
    with pytest.raises(ValidationError):
        KeyokuSettings(_env_file=None, timeout_seconds=0)


def test_settings_are_frozen():
    settings = KeyokuSettings(_env_file=None, api_key="k")
    with pytest.raises(ValidationError):
        settings.api_key = "other"


def test_client_arguments_override_environment(monkeypatch):
    monkeypatch.setenv("KEYOKU_API_KEY", "env-key")
    monkeypatch.setenv("KEYOKU_BASE_URL", "https://env.example.test")

    client = Keyoku(
        api_key="arg-key",
        base_url="https://arg.example.test/",
        timeout=2,
        http_transport=httpx.MockTransport(lambda request: httpx.Response(200)),
    )

    assert client.settings.api_key == "arg-key"
    assert client.settings.base_url == "https://arg.example.test"
    assert client.settings.timeout_seconds == 2.0


def test_client_arguments_override_explicit_settings():
    base = KeyokuSettings(_env_file=None, api_key="settings-key", entity_id="tenant-1")

    client = Keyoku(
        entity_id="tenant-2",
        settings=base,
        http_transport=httpx.MockTransport(lambda request: httpx.Response(200)),
    )

    assert client.settings.api_key == "settings-key"
    assert client.settings.entity_id == "tenant-2"
    assert base.entity_id == "tenant-1"


def test_client_requires_api_key():
    with pytest.raises(ValueError, match="api_key"):
        Keyoku(settings=KeyokuSettings(_env_file=None))


def test_write_user_env_vars_merges(monkeypatch, tmp_path):
    monkeypatch.setattr(config, "get_user_config_dir", lambda: tmp_path / "keyoku")

    write_user_env_vars({"KEYOKU_API_KEY": "first", "KEYOKU_BASE_URL": "https://a.test"})
    env_path = write_user_env_vars({"KEYOKU_API_KEY": "second", "KEYOKU_ENTITY_ID": None})

    assert env_path == tmp_path / "keyoku" / ".env"
    lines = env_path.read_text(encoding="utf-8").splitlines()
    assert lines[0].startswith("#")
    assert lines[1:] == ["KEYOKU_API_KEY=second", "KEYOKU_BASE_URL=https://a.test"]


def test_user_env_file_is_read(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("KEYOKU_API_KEY=from-file\nKEYOKU_ENTITY_ID=tenant-9\n", encoding="utf-8")

    settings = KeyokuSettings(_env_file=str(env_file))

    assert settings.api_key == "from-file"
    assert settings.entity_id == "tenant-9"


def test_parse_env_lines_skips_comments_and_quotes():
    parsed = config._parse_env_lines('# comment\n\nKEY="value"\nOTHER = \'x=y\'\nbroken line\n')
    assert parsed == {"KEY": "value", "OTHER": "x=y"}


def test_write_user_env_vars_none_removes_key(monkeypatch, tmp_path):
    monkeypatch.setattr(config, "get_user_config_dir", lambda: tmp_path)
    write_user_env_vars({"KEYOKU_API_KEY": "k", "KEYOKU_ENTITY_ID": "tenant-1"})

    write_user_env_vars({"KEYOKU_ENTITY_ID": None})

    assert config.read_user_env_vars() == {"KEYOKU_API_KEY": "k"}


def test_parse_env_lines_accepts_export_prefix():
    assert config._parse_env_lines("export KEYOKU_API_KEY=abc\n") == {"KEYOKU_API_KEY": "abc"}

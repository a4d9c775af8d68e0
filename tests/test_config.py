"""Tests for settings loading and the user .env writer."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

from core import __version__
from core.config import ARPIO_URL, ArpioSettings, get_user_config_dir, write_user_env_vars


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.upper().startswith("ARPIO_"):
            monkeypatch.delenv(key)


def test_defaults() -> None:
    settings = ArpioSettings(_env_file=None)

    assert settings.api_url == ARPIO_URL
    assert settings.account_id is None
    assert settings.tls_insecure_skip_verify is False
    assert settings.http_timeout_seconds == 60
    assert settings.app_poll_seconds == 5
    assert settings.recovery_point_poll_seconds == 5
    assert settings.user_agent == f"arpio-client-python/{__version__}/unknown"


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ARPIO_ACCOUNT_ID", "acct-9")
    monkeypatch.setenv("ARPIO_TLS_INSECURE_SKIP_VERIFY", "true")
    monkeypatch.setenv("ARPIO_CLIENT_COMMIT", "deadbeef")

    settings = ArpioSettings(_env_file=None)

    assert settings.account_id == "acct-9"
    assert settings.tls_insecure_skip_verify is True
    assert settings.user_agent.endswith("/deadbeef")


def test_reads_env_file(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("ARPIO_API_KEY_ID=key\nARPIO_APP_POLL_SECONDS=1.5\n", encoding="utf-8")

    settings = ArpioSettings(_env_file=env_file)

    assert settings.api_key_id == "key"
    assert settings.app_poll_seconds == 1.5


def test_write_user_env_vars_merges(tmp_path: Path) -> None:
    env_file = tmp_path / "arpio" / ".env"
    write_user_env_vars({"ARPIO_ACCOUNT_ID": "old", "ARPIO_API_KEY_ID": "key"}, env_path=env_file)

    write_user_env_vars({"ARPIO_ACCOUNT_ID": "new"}, env_path=env_file)

    lines = env_file.read_text(encoding="utf-8").splitlines()
    assert lines[0].startswith("#")
    assert lines[1:] == ["ARPIO_ACCOUNT_ID=new", "ARPIO_API_KEY_ID=key"]


@pytest.mark.skipif(not sys.platform.startswith("linux"), reason="XDG layout")
def test_user_config_dir_follows_xdg(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

    assert get_user_config_dir() == tmp_path / "arpio"


def test_secrets_with_quotes_survive_round_trip(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    secret = "it's a \"secret\" # with \\ chars"

    write_user_env_vars({"ARPIO_API_KEY_SECRET": secret, "ARPIO_API_KEY_ID": "key"}, env_path=env_file)
    write_user_env_vars({"ARPIO_ACCOUNT_ID": "acct-1"}, env_path=env_file)

    settings = ArpioSettings(_env_file=env_file)
    assert settings.api_key_secret == secret
    assert settings.api_key_id == "key"
    assert settings.account_id == "acct-1"


def test_reads_quoted_and_exported_entries(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("export ARPIO_ACCOUNT_ID='acct-2'\nARPIO_API_KEY_ID=\"k\"\n", encoding="utf-8")

    write_user_env_vars({"ARPIO_API_KEY_SECRET": "s"}, env_path=env_file)

    lines = env_file.read_text(encoding="utf-8").splitlines()
    assert lines[1:] == ["ARPIO_ACCOUNT_ID=acct-2", "ARPIO_API_KEY_ID=k", "ARPIO_API_KEY_SECRET=s"]

"""Tests for settings loading and the user .env writer."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from core.config import (
    DEFAULT_API_VERSION,
    PRODUCTION_BASE_URL,
    SANDBOX_BASE_URL,
    ClientSettings,
    get_user_env_file,
    write_user_env_vars,
)
from core.domain.credentials import AccessTokenType


def test_defaults():
    settings = ClientSettings(_env_file=None)

    assert settings.access_token is None
    assert settings.token_type is AccessTokenType.CLIENT
    assert settings.api_version == DEFAULT_API_VERSION
    assert settings.http_timeout_seconds is None
    assert settings.resolved_base_url() == PRODUCTION_BASE_URL


def test_reads_prefixed_environment(monkeypatch):
    monkeypatch.setenv("RIDESHARE_ACCESS_TOKEN", "env-token")
    monkeypatch.setenv("RIDESHARE_TOKEN_TYPE", "server")
    monkeypatch.setenv("RIDESHARE_API_VERSION", "v1")

    settings = ClientSettings(_env_file=None)

    assert settings.access_token == "env-token"
    assert settings.token_type is AccessTokenType.SERVER
    assert settings.api_version == "v1"


def test_reads_project_env_file(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("RIDESHARE_ACCESS_TOKEN=file-token\nRIDESHARE_SANDBOX=true\n", encoding="utf-8")

    settings = ClientSettings(_env_file=env_file)

    assert settings.access_token == "file-token"
    assert settings.resolved_base_url() == SANDBOX_BASE_URL


def test_sandbox_does_not_override_custom_base_url():
    settings = ClientSettings(_env_file=None, sandbox=True, base_url="https://proxy.internal/")

    assert settings.resolved_base_url() == "https://proxy.internal"


def test_write_user_env_vars_merges_existing(tmp_path):
    env_path = tmp_path / "cfg" / ".env"
    env_path.parent.mkdir()
    env_path.write_text("# comment\nRIDESHARE_SANDBOX=true\nRIDESHARE_ACCESS_TOKEN='old'\n", encoding="utf-8")

    written = write_user_env_vars({"RIDESHARE_ACCESS_TOKEN": "new"}, env_path=env_path)

    assert written == env_path
    lines = env_path.read_text(encoding="utf-8").splitlines()
    assert lines[0].startswith("#")
    assert lines[1:] == ["RIDESHARE_ACCESS_TOKEN=new", "RIDESHARE_SANDBOX=true"]


def test_user_env_file_is_not_read_during_tests(tmp_path):
    (tmp_path / ".env").write_text("RIDESHARE_API_VERSION=v9\n", encoding="utf-8")

    settings = ClientSettings()

    assert str(get_user_env_file()) not in ClientSettings.model_config["env_file"]
    assert settings.api_version == "v9"
    assert settings.access_token is None


def test_log_level_is_case_insensitive(monkeypatch):
    monkeypatch.setenv("RIDESHARE_LOG_LEVEL", "debug")

    assert ClientSettings(_env_file=None).log_level == "DEBUG"


@pytest.mark.parametrize("level", ["verbose", "", "10"])
def test_unknown_log_level_is_rejected(level):
    with pytest.raises(ValidationError, match="log_level"):
        ClientSettings(_env_file=None, log_level=level)

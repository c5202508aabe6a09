"""Shared pytest fixtures.

Async tests run through the anyio plugin on the asyncio backend; HTTP is
mocked with respx, so no test touches the network.
"""

from __future__ import annotations

import os

import pytest

from core.config import ClientSettings
from core.domain.credentials import AccessTokenType, Credential


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Keep developer `.env` files and RIDESHARE_* variables out of tests."""

    for key in list(os.environ):
        if key.upper().startswith("RIDESHARE_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setitem(ClientSettings.model_config, "env_file", (".env",))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings() -> ClientSettings:
    return ClientSettings(_env_file=None, user_agent="rideshare-sdk-tests/1.0")


@pytest.fixture
def client_credential() -> Credential:
    return Credential(token="client-token-123", token_type=AccessTokenType.CLIENT)


@pytest.fixture
def server_credential() -> Credential:
    return Credential(token="server-token-456", token_type=AccessTokenType.SERVER)

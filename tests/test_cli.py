"""Tests for the `rideshare` command-line front end."""

from __future__ import annotations

import json

import httpx
import pytest
import respx
from typer.testing import CliRunner

from cli.main import app
from core.config import PRODUCTION_BASE_URL, SANDBOX_BASE_URL
from tests.fixtures.sample_data import (
    NOT_FOUND_ERROR,
    REQUEST_PAYLOAD,
    USER_ACTIVITY_PAYLOAD,
    USER_PROFILE_PAYLOAD,
)

runner = CliRunner()


@pytest.fixture(autouse=True)
def cli_env(monkeypatch):
    monkeypatch.setenv("RIDESHARE_ACCESS_TOKEN", "cli-token")
    monkeypatch.setenv("RIDESHARE_LOG_LEVEL", "CRITICAL")


@pytest.fixture
def api():
    with respx.mock(base_url=PRODUCTION_BASE_URL) as router:
        yield router


def test_profile_renders_table(api):
    route = api.get("/v1.2/me").respond(200, json=USER_PROFILE_PAYLOAD)

    result = runner.invoke(app, ["profile"])

    assert result.exit_code == 0, result.output
    assert "Rider Profile" in result.output
    assert "Uber Developer" in result.output
    assert route.calls.last.request.headers["Authorization"] == "Bearer cli-token"


def test_json_output(api):
    api.get("/v1.2/me").respond(200, json=USER_PROFILE_PAYLOAD)

    result = runner.invoke(app, ["--json", "profile"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["ok"] is True
    assert payload["value"]["uuid"] == USER_PROFILE_PAYLOAD["uuid"]


def test_api_failure_exits_with_one(api):
    api.get("/v1.2/requests/missing").respond(404, json=NOT_FOUND_ERROR)

    result = runner.invoke(app, ["request-details", "missing"])

    assert result.exit_code == 1
    assert "Request not found." in result.output


def test_api_failure_json(api):
    api.delete("/v1.2/requests/missing").respond(404)

    result = runner.invoke(app, ["--json", "cancel", "missing"])

    assert result.exit_code == 1
    payload = json.loads(result.stdout)
    assert payload == {
        "ok": False,
        "error": {
            "kind": "api_error",
            "status_code": 404,
            "message": "HTTP 404 Not Found",
            "code": None,
            "fields": {},
        },
    }


def test_cancel_success(api):
    api.delete("/v1.2/requests/abc").respond(204)

    result = runner.invoke(app, ["cancel", "abc"])

    assert result.exit_code == 0, result.output
    assert "Request abc cancelled." in result.output


def test_history_passes_paging(api):
    route = api.get("/v1.2/history").respond(200, json=USER_ACTIVITY_PAYLOAD)

    result = runner.invoke(app, ["history", "--offset", "10", "--limit", "5"])

    assert result.exit_code == 0, result.output
    assert str(route.calls.last.request.url) == f"{PRODUCTION_BASE_URL}/v1.2/history?offset=10&limit=5"
    assert "Ride History (10-12 of 12)" in result.output


def test_request_ride_with_negative_coordinates(api):
    route = api.post("/v1.2/requests").respond(202, json=REQUEST_PAYLOAD)

    result = runner.invoke(
        app,
        ["request-ride", "--surge-confirmation-id", "e100", "--", "prod-1", "37.775", "-122.418", "37.7", "-122.4"],
    )

    assert result.exit_code == 0, result.output
    body = json.loads(route.calls.last.request.content.decode("utf-8"))
    assert body["start_longitude"] == "-122.41800"
    assert body["surge_confirmation_id"] == "e100"


def test_sandbox_flag_switches_host():
    with respx.mock(base_url=SANDBOX_BASE_URL) as router:
        route = router.get("/v1.2/me").respond(200, json=USER_PROFILE_PAYLOAD)

        result = runner.invoke(app, ["--sandbox", "profile"])

    assert result.exit_code == 0, result.output
    assert route.called


def test_transport_failure_exits_with_two(api):
    api.get("/v1.2/me").mock(side_effect=httpx.ConnectError)

    result = runner.invoke(app, ["profile"])

    assert result.exit_code == 2


def test_missing_token_is_configuration_error(monkeypatch):
    monkeypatch.setenv("RIDESHARE_ACCESS_TOKEN", "")

    result = runner.invoke(app, ["profile"])

    assert result.exit_code == 2


def test_unknown_log_level_is_configuration_error(monkeypatch):
    monkeypatch.setenv("RIDESHARE_LOG_LEVEL", "verbose")

    result = runner.invoke(app, ["profile"])

    assert result.exit_code == 2
    assert not isinstance(result.exception, ValueError)

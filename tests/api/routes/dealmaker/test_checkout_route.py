"""Testes do endpoint POST /api/start-checkout."""

from __future__ import annotations

import json

import pytest
from starlette.requests import Request

from api.routes.dealmaker import checkout
from app.domain.checkout import CheckoutMode
from app.use_cases.checkout import CheckoutConfig, CheckoutOrchestrator
from tests.fakes.fake_dealmaker import FakeDealmakerClient, FakeTokenProvider
from utils.errors import ConfigError


def _build_request(body: bytes) -> Request:
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "POST",
        "path": "/api/start-checkout",
        "raw_path": b"/api/start-checkout",
        "query_string": b"",
        "headers": [(b"content-type", b"application/json")],
    }
    sent = False

    async def _receive() -> dict[str, object]:
        nonlocal sent
        if sent:
            return {"type": "http.request", "body": b"", "more_body": False}
        sent = True
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, _receive)


def _use_orchestrator(
    monkeypatch: pytest.MonkeyPatch,
    client: FakeDealmakerClient,
    mode: CheckoutMode = CheckoutMode.INVESTMENT_FIRST,
) -> None:
    orchestrator = CheckoutOrchestrator(
        CheckoutConfig(deal_id="4127", mode=mode, app_base_url="https://app.example.test"),
        FakeTokenProvider(),
        client,
    )
    monkeypatch.setattr(checkout, "create_checkout_orchestrator", lambda: orchestrator)


def _payload(response) -> dict:
    return json.loads(response.body.decode("utf-8"))


@pytest.mark.asyncio
async def test_start_checkout_success(monkeypatch: pytest.MonkeyPatch) -> None:
    _use_orchestrator(monkeypatch, FakeDealmakerClient())
    body = json.dumps({"email": "sam@example.com", "investment_value": "1000"}).encode()

    response = await checkout.start_checkout(_build_request(body))

    assert response.status_code == 200
    assert _payload(response) == {
        "redirect_url": "https://app.example.test/otp/xyz",
        "deal_investor_id": "inv-1",
        "investor_profile_id": None,
        "profile_created": False,
        "profile_linked": False,
    }


@pytest.mark.asyncio
async def test_start_checkout_missing_field_is_400(monkeypatch: pytest.MonkeyPatch) -> None:
    client = FakeDealmakerClient()
    _use_orchestrator(monkeypatch, client)

    response = await checkout.start_checkout(_build_request(b'{"investment_value": 10}'))

    payload = _payload(response)
    assert response.status_code == 400
    assert payload["ok"] is False
    assert payload["field"] == "email"
    assert client.calls == []


@pytest.mark.asyncio
async def test_start_checkout_invalid_json_is_400(monkeypatch: pytest.MonkeyPatch) -> None:
    _use_orchestrator(monkeypatch, FakeDealmakerClient())

    response = await checkout.start_checkout(_build_request(b"{not json"))

    assert response.status_code == 400
    assert _payload(response)["field"] == "body"


@pytest.mark.asyncio
async def test_start_checkout_proxies_provider_status(monkeypatch: pytest.MonkeyPatch) -> None:
    client = FakeDealmakerClient(failures={"investor": (422, {"errors": ["email taken"]})})
    _use_orchestrator(monkeypatch, client)
    body = json.dumps({"email": "sam@example.com", "investment_value": 10}).encode()

    response = await checkout.start_checkout(_build_request(body))

    payload = _payload(response)
    assert response.status_code == 422
    assert payload["step"] == "investor"
    assert payload["details"] == {"errors": ["email taken"]}


@pytest.mark.asyncio
async def test_start_checkout_config_error_lists_names_only(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def _raise() -> CheckoutOrchestrator:
        raise ConfigError(["DEALMAKER_CLIENT_SECRET"])

    monkeypatch.setattr(checkout, "create_checkout_orchestrator", _raise)

    response = await checkout.start_checkout(_build_request(b"{}"))

    payload = _payload(response)
    assert response.status_code == 500
    assert payload["error"] == "config_error"
    assert payload["missing"] == ["DEALMAKER_CLIENT_SECRET"]


@pytest.mark.asyncio
async def test_start_checkout_unexpected_error_is_generic_500(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def _raise() -> CheckoutOrchestrator:
        raise RuntimeError("client-secret leaked?")

    monkeypatch.setattr(checkout, "create_checkout_orchestrator", _raise)

    response = await checkout.start_checkout(_build_request(b"{}"))

    assert response.status_code == 500
    assert _payload(response) == {
        "ok": False,
        "error": "server_error",
        "message": "Unexpected server error",
    }

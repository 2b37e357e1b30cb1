"""Testes do composition root."""

from __future__ import annotations

import logging

import pytest

from app.bootstrap import (
    create_checkout_orchestrator,
    get_token_provider,
    initialize_app,
    validate_runtime_settings,
)
from app.domain.checkout import CheckoutMode
from utils.errors import ConfigError


def test_token_provider_is_process_singleton(dealmaker_env: dict[str, str]) -> None:
    assert get_token_provider() is get_token_provider()


def test_orchestrator_uses_configured_mode(
    dealmaker_env: dict[str, str], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("CHECKOUT_MODE", "investment_first")

    orchestrator = create_checkout_orchestrator()

    assert orchestrator.mode is CheckoutMode.INVESTMENT_FIRST


def test_orchestrator_rejects_unknown_mode(
    dealmaker_env: dict[str, str], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("CHECKOUT_MODE", "fastest")

    with pytest.raises(ConfigError) as exc_info:
        create_checkout_orchestrator()

    assert exc_info.value.missing == ["CHECKOUT_MODE"]


def test_orchestrator_requires_deal_id(
    dealmaker_env: dict[str, str], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.delenv("DEALMAKER_DEAL_ID")

    with pytest.raises(ConfigError) as exc_info:
        create_checkout_orchestrator()

    assert exc_info.value.missing == ["DEALMAKER_DEAL_ID"]


def test_validation_fails_fast_in_production(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "production")
    for name in ("DEALMAKER_TOKEN_URL", "DEALMAKER_WEBHOOK_SECRET"):
        monkeypatch.delenv(name, raising=False)

    with pytest.raises(RuntimeError, match="production"):
        validate_runtime_settings()


def test_validation_only_warns_in_development(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "development")
    monkeypatch.delenv("DEALMAKER_TOKEN_URL", raising=False)

    validate_runtime_settings()


def test_initialize_app_tags_logs_with_service_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SERVICE_NAME", "gateway-test")
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level

    try:
        initialize_app()
        record = logging.LogRecord("x", logging.INFO, "", 0, "msg", (), None)
        for log_filter in root.handlers[0].filters:
            log_filter.filter(record)
    finally:
        root.handlers = handlers
        root.setLevel(level)

    assert record.service == "gateway-test"

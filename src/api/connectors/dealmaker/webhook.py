"""Parse e validação inicial do webhook DealMaker (sem PII)."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from utils.errors import PayloadError, SignatureError

from .signature import SIGNATURE_HEADER, verify_signature

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True, slots=True)
class WebhookEventSummary:
    """Identificadores do evento, apenas para observabilidade."""

    event_type: str | None
    event_id: str | None
    deal_id: str | None

    def as_log_extra(self) -> dict[str, Any]:
        return {
            "event_type": self.event_type,
            "event_id": self.event_id,
            "deal_id": self.deal_id,
        }


def _header(headers: Mapping[str, str], name: str) -> str | None:
    for key, value in headers.items():
        if key.lower() == name:
            return value
    return None


def _as_str(value: Any) -> str | None:
    if value is None or isinstance(value, (dict, list)):
        return None
    return str(value)


def summarize_event(payload: dict[str, Any]) -> WebhookEventSummary:
    """Extrai tipo, id e deal id do evento, tolerando formatos variados."""
    event_type = payload.get("event") or payload.get("event_type")
    event_id = payload.get("event_id") or payload.get("id")

    deal_id = payload.get("deal_id")
    for container_key, field in (("deal", "id"), ("investor", "deal_id"), ("data", "deal_id")):
        if deal_id is not None:
            break
        container = payload.get(container_key)
        if isinstance(container, dict):
            deal_id = container.get(field)

    return WebhookEventSummary(
        event_type=_as_str(event_type),
        event_id=_as_str(event_id),
        deal_id=_as_str(deal_id),
    )


def parse_webhook_request(
    raw_body: bytes,
    headers: Mapping[str, str],
    secret: str,
) -> dict[str, Any]:
    """Valida assinatura e só então parseia o JSON do webhook.

    Raises:
        SignatureError: Se a assinatura for inválida ou ausente
        PayloadError: Se o JSON for inválido ou não for objeto

    Returns:
        Payload do evento
    """
    if not verify_signature(raw_body, _header(headers, SIGNATURE_HEADER), secret):
        raise SignatureError("Webhook signature verification failed")

    try:
        payload = json.loads(raw_body or b"{}")
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise PayloadError("Webhook body is not valid JSON") from exc

    if not isinstance(payload, dict):
        raise PayloadError("Webhook body must be a JSON object")

    return payload

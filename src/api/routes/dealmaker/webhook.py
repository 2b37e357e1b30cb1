"""Endpoint de webhook da DealMaker.

POST /api/webhook:
1. Lê o body bruto e valida X-Dealmaker-Signature (HMAC-SHA1)
2. Só então parseia o JSON
3. Loga tipo/id/deal do evento e responde 200

Assinatura aceita sempre resulta em 200 (ou 400 para JSON inválido),
mesmo que o processamento interno falhe, para evitar retry do provedor.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Request, Response

from api.connectors.dealmaker import parse_webhook_request, summarize_event
from api.routes.dealmaker._responses import error_response
from config.settings import get_dealmaker_settings
from utils.errors import ConfigError, PayloadError, SignatureError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/webhook", response_model=None)
async def receive_webhook(request: Request) -> Response | dict[str, Any]:
    """Recebe evento do provedor.

    Returns:
        200 `{ok: true}`, 401 assinatura inválida, 400 JSON inválido,
        500 se o secret não estiver configurado.
    """
    settings = get_dealmaker_settings()
    missing = settings.missing("webhook")
    if missing:
        logger.error("webhook_secret_not_configured")
        return error_response(ConfigError(missing))

    raw_body = await request.body()

    try:
        payload = parse_webhook_request(
            raw_body=raw_body,
            headers=dict(request.headers),
            secret=settings.webhook_secret,
        )
    except SignatureError as exc:
        logger.warning("webhook_signature_invalid", extra={"payload_size": len(raw_body)})
        return error_response(exc)
    except PayloadError as exc:
        logger.warning("webhook_json_invalid", extra={"error": str(exc)})
        return error_response(exc)

    try:
        summary = summarize_event(payload)
        logger.info(
            "webhook_received",
            extra={**summary.as_log_extra(), "payload_size": len(raw_body)},
        )
    except Exception:
        logger.exception("webhook_processing_failed")

    return {"ok": True}

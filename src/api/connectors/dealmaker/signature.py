"""Validação de assinatura HMAC-SHA1 dos webhooks DealMaker."""

from __future__ import annotations

import hashlib
import hmac
import logging

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "x-dealmaker-signature"
SIGNATURE_PREFIX = "sha1="


def compute_signature(raw_body: bytes, secret: str) -> str:
    """HMAC-SHA1 hex do body bruto."""
    return hmac.new(secret.encode("utf-8"), raw_body, hashlib.sha1).hexdigest()


def verify_signature(raw_body: bytes, signature_header: str | None, secret: str) -> bool:
    """Valida a assinatura recebida contra o body bruto (fail-closed).

    A comparação é feita sobre os bytes decodificados, em tempo constante.
    Header ausente, hex malformado ou tamanho divergente retornam False.

    Args:
        raw_body: Corpo exato da requisição, antes de qualquer parse
        signature_header: Valor de X-Dealmaker-Signature ("sha1=<hex>" ou "<hex>")
        secret: Secret compartilhado com o provedor

    Returns:
        True se assinatura válida
    """
    if not signature_header or not secret:
        return False

    received_hex = signature_header.strip()
    if received_hex.lower().startswith(SIGNATURE_PREFIX):
        received_hex = received_hex[len(SIGNATURE_PREFIX):]

    try:
        received = bytes.fromhex(received_hex)
    except ValueError:
        logger.debug("webhook_signature_malformed")
        return False

    expected = bytes.fromhex(compute_signature(raw_body, secret))
    if len(received) != len(expected):
        return False

    return hmac.compare_digest(received, expected)

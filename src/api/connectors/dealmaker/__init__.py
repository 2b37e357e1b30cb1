"""Conector DealMaker: único ponto de IO com a API do provedor.

Responsabilidades:
- Token OAuth2 client credentials com cache (auth)
- Chamadas REST de perfil, investidor, link OTP e deals (http_client)
- Assinatura HMAC e parse de webhooks (signature, webhook)
"""

from .auth import SAFETY_MARGIN_MS, CachedToken, TokenCache, TokenProvider
from .http_client import DealmakerHttpClient, to_form_fields
from .signature import SIGNATURE_HEADER, compute_signature, verify_signature
from .webhook import WebhookEventSummary, parse_webhook_request, summarize_event

__all__ = [
    "SAFETY_MARGIN_MS",
    "SIGNATURE_HEADER",
    "CachedToken",
    "DealmakerHttpClient",
    "TokenCache",
    "TokenProvider",
    "WebhookEventSummary",
    "compute_signature",
    "parse_webhook_request",
    "summarize_event",
    "to_form_fields",
    "verify_signature",
]

"""Formatter JSON dos logs do gateway.

Todo record sai com os campos de REQUIRED_LOG_FIELDS, renomeados
conforme FIELD_RENAME_MAP.
"""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

REQUIRED_LOG_FIELDS: tuple[str, ...] = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

FIELD_RENAME_MAP = {
    "asctime": "timestamp",
    "levelname": "level",
    "name": "logger",
}


def create_json_formatter() -> JsonFormatter:
    """Cria o JsonFormatter com timestamps ISO-8601.

    Exemplo de output:
        {"timestamp": "2026-10-19T10:30:00", "level": "INFO",
         "logger": "app.use_cases.checkout.orchestrator",
         "message": "checkout_completed", "correlation_id": "abc-123",
         "service": "dealmaker-gateway", "deal_investor_id": "42"}
    """
    format_string = " ".join(f"%({name})s" for name in REQUIRED_LOG_FIELDS)
    return JsonFormatter(
        format_string,
        rename_fields=FIELD_RENAME_MAP,
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )

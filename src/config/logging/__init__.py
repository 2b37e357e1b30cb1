"""Configuração de logging estruturado (JSON).

Campos obrigatórios em todo log: timestamp, level, logger, message,
correlation_id e service. Nunca logar tokens, secrets ou PII.
"""

from config.logging.config import configure_logging, get_logger, log_degraded_step
from config.logging.filters import CorrelationIdFilter, SecretRedactionFilter
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
)

__all__ = [
    "FIELD_RENAME_MAP",
    "REQUIRED_LOG_FIELDS",
    "CorrelationIdFilter",
    "SecretRedactionFilter",
    "configure_logging",
    "create_json_formatter",
    "get_logger",
    "log_degraded_step",
]

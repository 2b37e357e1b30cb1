"""Configuração centralizada de logging.

Uso:
    from config.logging import configure_logging, get_logger

    configure_logging(level="INFO", service_name="dealmaker-gateway")

    logger = get_logger(__name__)
    logger.info("checkout_completed", extra={"deal_investor_id": "42"})
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config.logging.filters import CorrelationIdFilter, SecretRedactionFilter
from config.logging.formatters import create_json_formatter

if TYPE_CHECKING:
    from collections.abc import Callable

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "dealmaker-gateway"


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
) -> None:
    """Configura logging JSON no root logger.

    Chamada uma vez no bootstrap; chamadas seguintes substituem o handler.

    Args:
        level: Nível de log (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        service_name: Nome do serviço gravado em todo record.
        correlation_id_getter: Função que devolve o correlation_id corrente.

    Raises:
        ValueError: Se o nível de log for inválido.
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    handler = logging.StreamHandler()
    handler.setLevel(level_upper)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(CorrelationIdFilter(service_name, correlation_id_getter))
    handler.addFilter(SecretRedactionFilter())

    root = logging.getLogger()
    root.setLevel(level_upper)
    root.handlers = [handler]

    # httpx loga URLs com query string em INFO
    logging.getLogger("httpx").setLevel(max(logging.WARNING, root.level))


def get_logger(name: str) -> logging.Logger:
    """Retorna logger para o módulo (geralmente __name__)."""
    return logging.getLogger(name)


def log_degraded_step(
    logger: logging.Logger,
    step: str,
    reason: str | None = None,
    status_code: int | None = None,
) -> None:
    """Log observável de etapa best-effort que falhou sem abortar o fluxo.

    Args:
        logger: Logger instance.
        step: Etapa do checkout (ex: "profile", "patch").
        reason: Razão curta, sem PII.
        status_code: Status HTTP devolvido pelo provedor, quando houver.
    """
    extra: dict[str, object] = {"degraded": True, "step": step}
    if reason:
        extra["reason"] = reason
    if status_code is not None:
        extra["status_code"] = status_code

    logger.warning("checkout_step_degraded", extra=extra)

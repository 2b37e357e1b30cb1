"""Bootstrap da aplicação: inicialização e wiring.

Este módulo é o composition root: configura logging, valida settings
e expõe as factories da integração DealMaker.

Uso:
    from app.bootstrap import initialize_app, create_checkout_orchestrator

    initialize_app()
    orchestrator = create_checkout_orchestrator()
"""

from __future__ import annotations

import logging

from app.bootstrap.dependencies import (
    create_checkout_orchestrator,
    create_dealmaker_client,
    get_token_provider,
)
from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import get_base_settings, get_dealmaker_settings

logger = logging.getLogger(__name__)

__all__ = [
    "create_checkout_orchestrator",
    "create_dealmaker_client",
    "get_token_provider",
    "initialize_app",
    "validate_runtime_settings",
]


def initialize_app() -> None:
    """Configura logging JSON com correlation_id. Chamar uma vez no boot."""
    base = get_base_settings()
    configure_logging(
        level=base.log_level,
        service_name=base.service_name,
        correlation_id_getter=get_correlation_id,
    )


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir boot inválido.
    Em `development` mantém alerta sem bloquear execução local; as rotas
    ainda recusam requisições com ConfigError.

    Raises:
        RuntimeError: Configuração inválida em ambiente estrito.
    """
    base = get_base_settings()
    errors = [f"base: {error}" for error in base.validate()]
    errors.extend(f"dealmaker: {error}" for error in get_dealmaker_settings().validate())

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "environment": base.environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "environment": base.environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if base.is_strict:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {base.environment}:\n{details}")

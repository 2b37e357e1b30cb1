"""Factories da integração DealMaker (composition root).

O TokenProvider (e seu TokenCache) é o único estado compartilhado do
processo: uma instância por processo, válida até o token expirar ou o
processo reiniciar.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from api.connectors.dealmaker import DealmakerHttpClient, TokenCache, TokenProvider
from app.domain.checkout import CheckoutMode
from app.use_cases.checkout import CheckoutConfig, CheckoutOrchestrator
from config.settings import get_dealmaker_settings
from utils.errors import ConfigError

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_token_provider() -> TokenProvider:
    """TokenProvider do processo (singleton, dono do cache de token)."""
    return TokenProvider(get_dealmaker_settings(), TokenCache())


def create_dealmaker_client() -> DealmakerHttpClient:
    """Cria cliente HTTP da API DealMaker."""
    return DealmakerHttpClient(get_dealmaker_settings())


def create_checkout_orchestrator() -> CheckoutOrchestrator:
    """Cria o orquestrador de checkout conforme CHECKOUT_MODE.

    Raises:
        ConfigError: Se faltar configuração de checkout ou o modo for inválido.
    """
    settings = get_dealmaker_settings()
    missing = settings.missing("checkout")
    if missing:
        raise ConfigError(missing)

    if settings.checkout_mode not in {mode.value for mode in CheckoutMode}:
        raise ConfigError(["CHECKOUT_MODE"])

    return CheckoutOrchestrator(
        CheckoutConfig.from_settings(settings),
        token_provider=get_token_provider(),
        client=create_dealmaker_client(),
    )

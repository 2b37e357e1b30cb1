"""Settings da integração com a API DealMaker.

Credenciais OAuth2 (client credentials), URLs da API, deal alvo,
secret do webhook e o modo de operação do checkout.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache

DEFAULT_APP_BASE_URL: str = "https://app.dealmaker.tech"
DEFAULT_PLACEHOLDER_LAST_NAME: str = "Investor"

# Variáveis de ambiente exigidas por cada capacidade do serviço
TOKEN_ENV_VARS: tuple[str, ...] = (
    "DEALMAKER_TOKEN_URL",
    "DEALMAKER_CLIENT_ID",
    "DEALMAKER_CLIENT_SECRET",
    "DEALMAKER_SCOPE",
)
CAPABILITY_ENV_VARS: dict[str, tuple[str, ...]] = {
    "token": TOKEN_ENV_VARS,
    "api": (*TOKEN_ENV_VARS, "DEALMAKER_BASE_URL"),
    "checkout": (*TOKEN_ENV_VARS, "DEALMAKER_BASE_URL", "DEALMAKER_DEAL_ID"),
    "webhook": ("DEALMAKER_WEBHOOK_SECRET",),
}


@dataclass(frozen=True)
class DealmakerSettings:
    """Configurações da integração DealMaker.

    Attributes:
        token_url: Endpoint OAuth2 de token
        client_id: Client id (client credentials)
        client_secret: Client secret (nunca logar)
        scope: Escopo solicitado no grant
        api_base_url: URL base da API REST
        deal_id: ID do deal usado no checkout
        webhook_secret: Secret compartilhado para HMAC dos webhooks
        app_base_url: URL base do app web (fallback do link OTP)
        request_timeout_seconds: Timeout de cada chamada HTTP
        checkout_mode: strict | investment_first
        checkout_tagging: Anexa tags UTM ao investidor
        checkout_fetch_otp_link: Busca link OTP após criar o investidor
        placeholder_last_name: Sobrenome padrão no modo investment_first
        allowed_origins: Origens CORS permitidas
    """

    # Credenciais
    token_url: str = ""
    client_id: str = ""
    client_secret: str = field(default="", repr=False)
    scope: str = ""

    # API
    api_base_url: str = ""
    deal_id: str = ""
    app_base_url: str = DEFAULT_APP_BASE_URL
    request_timeout_seconds: float = 20.0

    # Webhook
    webhook_secret: str = field(default="", repr=False)

    # Checkout
    checkout_mode: str = "strict"
    checkout_tagging: bool = True
    checkout_fetch_otp_link: bool = True
    placeholder_last_name: str = DEFAULT_PLACEHOLDER_LAST_NAME

    # CORS
    allowed_origins: tuple[str, ...] = ("*",)

    def _env_values(self) -> dict[str, str]:
        return {
            "DEALMAKER_TOKEN_URL": self.token_url,
            "DEALMAKER_CLIENT_ID": self.client_id,
            "DEALMAKER_CLIENT_SECRET": self.client_secret,
            "DEALMAKER_SCOPE": self.scope,
            "DEALMAKER_BASE_URL": self.api_base_url,
            "DEALMAKER_DEAL_ID": self.deal_id,
            "DEALMAKER_WEBHOOK_SECRET": self.webhook_secret,
        }

    def missing(self, *capabilities: str) -> list[str]:
        """Retorna as variáveis ausentes para as capacidades pedidas.

        Sem argumentos, considera todas as capacidades.

        Raises:
            KeyError: Se a capacidade não existir.
        """
        names: list[str] = []
        for capability in capabilities or tuple(CAPABILITY_ENV_VARS):
            for name in CAPABILITY_ENV_VARS[capability]:
                if name not in names:
                    names.append(name)
        values = self._env_values()
        return [name for name in names if not values[name].strip()]

    def validate(self) -> list[str]:
        """Valida configurações da integração.

        Returns:
            Lista de erros (vazia = OK).
        """
        errors = [f"{name} não configurado" for name in self.missing()]

        if self.request_timeout_seconds <= 0:
            errors.append("DEALMAKER_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        if self.checkout_mode not in ("strict", "investment_first"):
            errors.append("CHECKOUT_MODE deve ser 'strict' ou 'investment_first'")

        return errors


def _parse_bool(value: str | None, default: bool) -> bool:
    if value is None or not value.strip():
        return default
    return value.strip().lower() in ("true", "1", "yes", "on")


def _parse_origins(raw: str) -> tuple[str, ...]:
    origins = tuple(item.strip() for item in raw.split(",") if item.strip())
    return origins or ("*",)


def _load_from_env() -> DealmakerSettings:
    """Carrega DealmakerSettings a partir de variáveis de ambiente."""
    return DealmakerSettings(
        token_url=os.getenv("DEALMAKER_TOKEN_URL", ""),
        client_id=os.getenv("DEALMAKER_CLIENT_ID", ""),
        client_secret=os.getenv("DEALMAKER_CLIENT_SECRET", ""),
        scope=os.getenv("DEALMAKER_SCOPE", ""),
        api_base_url=os.getenv("DEALMAKER_BASE_URL", "").rstrip("/"),
        deal_id=os.getenv("DEALMAKER_DEAL_ID", ""),
        app_base_url=os.getenv("DEALMAKER_APP_BASE_URL", DEFAULT_APP_BASE_URL).rstrip("/"),
        request_timeout_seconds=float(os.getenv("DEALMAKER_REQUEST_TIMEOUT_SECONDS", "20")),
        webhook_secret=os.getenv("DEALMAKER_WEBHOOK_SECRET", ""),
        checkout_mode=os.getenv("CHECKOUT_MODE", "strict").strip().lower(),
        checkout_tagging=_parse_bool(os.getenv("CHECKOUT_TAGGING"), True),
        checkout_fetch_otp_link=_parse_bool(os.getenv("CHECKOUT_FETCH_OTP_LINK"), True),
        placeholder_last_name=os.getenv(
            "CHECKOUT_PLACEHOLDER_LAST_NAME", DEFAULT_PLACEHOLDER_LAST_NAME
        ),
        allowed_origins=_parse_origins(os.getenv("ALLOWED_ORIGINS", "*")),
    )


@lru_cache(maxsize=1)
def get_dealmaker_settings() -> DealmakerSettings:
    """Retorna instância cacheada de DealmakerSettings."""
    return _load_from_env()

"""Token OAuth2 (client credentials) da API DealMaker, com cache.

O cache é um slot único com expiração explícita, injetado no provider
para que testes controlem o relógio e não compartilhem estado.
Chamadas concorrentes com cache frio podem buscar o token mais de uma
vez; o grant é idempotente do lado do provedor, então não há lock.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import httpx

from app.observability import record_latency
from utils.errors import ConfigError, UpstreamAuthError

if TYPE_CHECKING:
    from collections.abc import Callable

    from config.settings import DealmakerSettings

logger = logging.getLogger(__name__)

# Token é considerado vencido este tanto antes do expires_in real
SAFETY_MARGIN_MS: int = 10_000


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True, slots=True)
class CachedToken:
    """Token em cache. `value` nunca sai do processo."""

    value: str
    expires_at_ms: int
    token_type: str | None = None
    scope: str | None = None
    expires_in: int | None = None
    created_at: int | None = None

    def is_fresh(self, now_ms: int, margin_ms: int = SAFETY_MARGIN_MS) -> bool:
        return now_ms < self.expires_at_ms - margin_ms

    def describe(self) -> dict[str, Any]:
        """Metadados públicos do token (sem o access token)."""
        return {
            "token_type": self.token_type,
            "expires_in": self.expires_in,
            "scope": self.scope,
            "created_at": self.created_at,
        }


class TokenCache:
    """Cache de slot único para o token de acesso."""

    def __init__(self, margin_ms: int = SAFETY_MARGIN_MS) -> None:
        self._token: CachedToken | None = None
        self._margin_ms = margin_ms

    def get(self, now_ms: int) -> CachedToken | None:
        """Retorna o token se ainda fresco, senão None."""
        token = self._token
        if token is not None and token.is_fresh(now_ms, self._margin_ms):
            return token
        return None

    def store(self, token: CachedToken) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = None


class TokenProvider:
    """Obtém e mantém em cache o bearer token da DealMaker."""

    def __init__(
        self,
        settings: DealmakerSettings,
        cache: TokenCache | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        clock: Callable[[], int] = _now_ms,
    ) -> None:
        self._settings = settings
        self._cache = cache or TokenCache()
        self._http_client = http_client
        self._clock = clock

    async def get_token(self) -> str:
        """Retorna um access token válido, buscando um novo se necessário.

        Raises:
            ConfigError: Se token URL, client id, client secret ou scope faltarem.
            UpstreamAuthError: Se o endpoint de token falhar ou não devolver token.
        """
        token = await self._get_cached_token()
        return token.value

    async def get_token_info(self) -> dict[str, Any]:
        """Metadados do token corrente, para diagnóstico."""
        token = await self._get_cached_token()
        return token.describe()

    async def _get_cached_token(self) -> CachedToken:
        missing = self._settings.missing("token")
        if missing:
            raise ConfigError(missing)

        now_ms = self._clock()
        cached = self._cache.get(now_ms)
        if cached is not None:
            return cached

        token = await self._fetch_token(now_ms)
        self._cache.store(token)
        return token

    async def _fetch_token(self, now_ms: int) -> CachedToken:
        form = {
            "grant_type": "client_credentials",
            "client_id": self._settings.client_id,
            "client_secret": self._settings.client_secret,
            "scope": self._settings.scope,
        }
        started_at = time.perf_counter()
        response = await self._post_form(form)
        record_latency(
            "dealmaker_token",
            "client_credentials",
            (time.perf_counter() - started_at) * 1000,
            status_code=response.status_code,
        )

        try:
            data = response.json()
        except ValueError as exc:
            raise UpstreamAuthError(
                "Token response was not JSON",
                status_code=response.status_code,
                body=response.text,
            ) from exc

        if not response.is_success:
            logger.warning(
                "dealmaker_token_request_failed",
                extra={"status_code": response.status_code},
            )
            raise UpstreamAuthError(
                f"Token request failed ({response.status_code})",
                status_code=response.status_code,
                body=data,
            )

        if not isinstance(data, dict) or not data.get("access_token"):
            raise UpstreamAuthError(
                "Token response missing access_token",
                status_code=response.status_code,
            )

        expires_in = _as_int(data.get("expires_in")) or 0
        logger.info("dealmaker_token_refreshed", extra={"expires_in": expires_in})
        return CachedToken(
            value=str(data["access_token"]),
            expires_at_ms=now_ms + expires_in * 1000,
            token_type=data.get("token_type"),
            scope=data.get("scope"),
            expires_in=expires_in,
            created_at=_as_int(data.get("created_at")),
        )

    async def _post_form(self, form: dict[str, str]) -> httpx.Response:
        headers = {"Accept": "application/json"}
        timeout = self._settings.request_timeout_seconds
        try:
            if self._http_client is not None:
                return await self._http_client.post(
                    self._settings.token_url, data=form, headers=headers, timeout=timeout
                )
            async with httpx.AsyncClient(timeout=timeout) as client:
                return await client.post(self._settings.token_url, data=form, headers=headers)
        except httpx.TimeoutException as exc:
            logger.warning("dealmaker_token_timeout", extra={"timeout_seconds": timeout})
            raise UpstreamAuthError("Token request timed out") from exc
        except httpx.HTTPError as exc:
            logger.warning(
                "dealmaker_token_transport_error",
                extra={"error_type": type(exc).__name__},
            )
            raise UpstreamAuthError("Token request could not be sent") from exc


def _as_int(value: Any) -> int | None:
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return None

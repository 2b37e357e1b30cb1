"""Use case de checkout: sequência de chamadas ao provedor.

Fluxos:
- strict: perfil → investidor (com investor_profile_id) → link de acesso
- investment_first: investidor → [perfil → patch do investidor] → link de acesso

As chamadas são estritamente sequenciais: cada etapa depende do id
devolvido pela anterior. A política de falha de cada etapa vem de
STEP_POLICIES.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from app.domain.checkout import (
    MINIMAL_REQUIRED_FIELDS,
    STRICT_REQUIRED_FIELDS,
    CheckoutMode,
    CheckoutResult,
    CheckoutStep,
    InvestorFormInput,
)
from app.use_cases.checkout._payloads import (
    build_investor_payload,
    build_profile_payload,
    parse_investment_value,
)
from app.use_cases.checkout.policy import is_best_effort
from config.logging import log_degraded_step
from config.settings.dealmaker import DEFAULT_APP_BASE_URL, DEFAULT_PLACEHOLDER_LAST_NAME
from utils.errors import UpstreamError, ValidationError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from app.protocols.dealmaker import DealmakerClientProtocol, TokenProviderProtocol
    from config.settings import DealmakerSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckoutConfig:
    """Parâmetros do checkout (modo, deal e comportamento opcional)."""

    deal_id: str
    mode: CheckoutMode = CheckoutMode.STRICT
    tagging: bool = True
    fetch_otp_link: bool = True
    app_base_url: str = DEFAULT_APP_BASE_URL
    placeholder_last_name: str = DEFAULT_PLACEHOLDER_LAST_NAME

    @classmethod
    def from_settings(cls, settings: DealmakerSettings) -> CheckoutConfig:
        return cls(
            deal_id=settings.deal_id,
            mode=CheckoutMode(settings.checkout_mode),
            tagging=settings.checkout_tagging,
            fetch_otp_link=settings.checkout_fetch_otp_link,
            app_base_url=settings.app_base_url,
            placeholder_last_name=settings.placeholder_last_name,
        )

    def fallback_redirect_url(self, investor_id: str) -> str:
        """URL determinística de acesso quando não há link emitido."""
        base = self.app_base_url.rstrip("/")
        return f"{base}/deals/{self.deal_id}/investors/{investor_id}/otp_access"


class CheckoutOrchestrator:
    """Orquestra perfil, investidor, patch e link de acesso na DealMaker."""

    def __init__(
        self,
        config: CheckoutConfig,
        token_provider: TokenProviderProtocol,
        client: DealmakerClientProtocol,
    ) -> None:
        self._config = config
        self._token_provider = token_provider
        self._client = client

    @property
    def mode(self) -> CheckoutMode:
        return self._config.mode

    async def run(self, form: InvestorFormInput) -> CheckoutResult:
        """Executa o checkout completo.

        Raises:
            ValidationError: Campo obrigatório ausente/inválido (antes de qualquer IO).
            ConfigError: Credenciais do provedor ausentes.
            UpstreamAuthError: Falha ao obter token.
            UpstreamError: Falha de etapa fatal no provedor.
        """
        investment_value = self._validate(form)
        access_token = await self._token_provider.get_token()
        logger.info("checkout_started", extra={"mode": self._config.mode.value})

        if self._config.mode is CheckoutMode.STRICT:
            result = await self._run_strict(form, access_token, investment_value)
        else:
            result = await self._run_investment_first(form, access_token, investment_value)

        logger.info(
            "checkout_completed",
            extra={
                "mode": self._config.mode.value,
                "deal_investor_id": result.deal_investor_id,
                "profile_created": result.profile_created,
                "profile_linked": result.profile_linked,
            },
        )
        return result

    def _validate(self, form: InvestorFormInput) -> int | float:
        required = (
            STRICT_REQUIRED_FIELDS
            if self._config.mode is CheckoutMode.STRICT
            else MINIMAL_REQUIRED_FIELDS
        )
        missing = form.first_missing(required)
        if missing is not None:
            raise ValidationError(missing)
        return parse_investment_value(form)

    async def _run_strict(
        self,
        form: InvestorFormInput,
        access_token: str,
        investment_value: int | float,
    ) -> CheckoutResult:
        profile = await self._run_step(
            CheckoutStep.PROFILE,
            lambda: self._client.create_profile(access_token, build_profile_payload(form)),
        )
        profile_id = str(profile["id"])

        investor = await self._run_step(
            CheckoutStep.INVESTOR,
            lambda: self._client.create_investor(
                access_token,
                self._config.deal_id,
                build_investor_payload(
                    form,
                    investment_value=investment_value,
                    investor_profile_id=profile_id,
                    tagging=self._config.tagging,
                ),
            ),
            context={"investor_profile_id": profile_id},
        )
        investor_id = str(investor["id"])

        redirect_url = await self._resolve_redirect(access_token, investor_id, investor)
        return CheckoutResult(
            redirect_url=redirect_url,
            deal_investor_id=investor_id,
            investor_profile_id=profile_id,
            profile_created=True,
            profile_linked=True,
        )

    async def _run_investment_first(
        self,
        form: InvestorFormInput,
        access_token: str,
        investment_value: int | float,
    ) -> CheckoutResult:
        investor = await self._run_step(
            CheckoutStep.INVESTOR,
            lambda: self._client.create_investor(
                access_token,
                self._config.deal_id,
                build_investor_payload(
                    form,
                    investment_value=investment_value,
                    placeholder_last_name=self._config.placeholder_last_name,
                    tagging=self._config.tagging,
                ),
            ),
        )
        investor_id = str(investor["id"])

        profile_id: str | None = None
        profile_linked = False
        if form.has_full_profile:
            profile = await self._run_step(
                CheckoutStep.PROFILE,
                lambda: self._client.create_profile(access_token, build_profile_payload(form)),
            )
            if profile is not None:
                profile_id = str(profile["id"])
                patched = await self._run_step(
                    CheckoutStep.PATCH,
                    lambda: self._client.patch_investor(
                        access_token,
                        self._config.deal_id,
                        investor_id,
                        {"investor_profile_id": profile_id},
                    ),
                    required_key=None,
                )
                profile_linked = patched is not None
        else:
            logger.info("checkout_profile_skipped", extra={"deal_investor_id": investor_id})

        redirect_url = await self._resolve_redirect(access_token, investor_id, investor)
        return CheckoutResult(
            redirect_url=redirect_url,
            deal_investor_id=investor_id,
            investor_profile_id=profile_id,
            profile_created=profile_id is not None,
            profile_linked=profile_linked,
        )

    async def _resolve_redirect(
        self,
        access_token: str,
        investor_id: str,
        investor: dict[str, Any],
    ) -> str:
        access_link = investor.get("access_link")
        if access_link:
            return str(access_link)

        if self._config.fetch_otp_link:
            otp = await self._run_step(
                CheckoutStep.OTP_LINK,
                lambda: self._client.get_otp_link(access_token, self._config.deal_id, investor_id),
                required_key="access_link",
                context={"deal_investor_id": investor_id},
            )
            if otp is not None:
                return str(otp["access_link"])

        return self._config.fallback_redirect_url(investor_id)

    async def _run_step(
        self,
        step: CheckoutStep,
        call: Callable[[], Awaitable[dict[str, Any]]],
        *,
        required_key: str | None = "id",
        context: dict[str, Any] | None = None,
    ) -> dict[str, Any] | None:
        """Executa uma etapa aplicando a política do modo.

        Retorna None apenas quando a etapa é best-effort e falhou.
        """
        try:
            response = await call()
            if required_key and response.get(required_key) in (None, ""):
                raise UpstreamError(
                    step.value,
                    None,
                    response,
                    message=f"Provider response missing '{required_key}' at step '{step.value}'",
                )
            return response
        except UpstreamError as exc:
            if is_best_effort(self._config.mode, step):
                log_degraded_step(
                    logger,
                    step.value,
                    reason=str(exc),
                    status_code=exc.status_code,
                )
                return None
            if context:
                exc.context.update(context)
            logger.warning(
                "checkout_step_failed",
                extra={"step": step.value, "status_code": exc.status_code},
            )
            raise

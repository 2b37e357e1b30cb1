"""Cliente HTTP da API REST DealMaker.

Uma função por endpoint documentado. Cada chamada recebe o bearer token
do chamador e, em falha, levanta UpstreamError com a etapa, o status do
provedor e o body devolvido. Não há retry; timeouts são marcados como
retentáveis para o chamador decidir.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

import httpx

from app.observability import record_latency
from utils.errors import UpstreamError

if TYPE_CHECKING:
    from config.settings import DealmakerSettings

logger = logging.getLogger(__name__)


def to_form_fields(payload: dict[str, Any]) -> dict[str, str]:
    """Converte payload para campos form-encoded.

    Valores None ou vazios são omitidos; booleanos viram "true"/"false".
    """
    fields: dict[str, str] = {}
    for key, value in payload.items():
        if value is None or value == "":
            continue
        if isinstance(value, bool):
            fields[key] = "true" if value else "false"
        else:
            fields[key] = str(value)
    return fields


def _segment(value: object) -> str:
    return quote(str(value), safe="")


def _response_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


def _is_retryable_status(status_code: int) -> bool:
    return status_code == 429 or status_code >= 500


class DealmakerHttpClient:
    """Chamadas à API DealMaker (perfis, investidores, links OTP, deals)."""

    def __init__(
        self,
        settings: DealmakerSettings,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings
        self._http_client = http_client

    async def create_profile(self, access_token: str, payload: dict[str, Any]) -> dict[str, Any]:
        """POST /investor_profiles/individuals (form-encoded)."""
        return await self._request(
            "profile",
            "POST",
            "/investor_profiles/individuals",
            access_token,
            data=to_form_fields(payload),
        )

    async def create_investor(
        self,
        access_token: str,
        deal_id: str,
        payload: dict[str, Any],
    ) -> dict[str, Any]:
        """POST /deals/{deal_id}/investors (JSON)."""
        return await self._request(
            "investor",
            "POST",
            f"/deals/{_segment(deal_id)}/investors",
            access_token,
            json=payload,
        )

    async def patch_investor(
        self,
        access_token: str,
        deal_id: str,
        investor_id: str,
        payload: dict[str, Any],
    ) -> dict[str, Any]:
        """PATCH /deals/{deal_id}/investors/{investor_id} (JSON).

        Qualquer 2xx conta como sucesso, seja qual for o body.
        """
        return await self._request(
            "patch",
            "PATCH",
            f"/deals/{_segment(deal_id)}/investors/{_segment(investor_id)}",
            access_token,
            json=payload,
            require_object=False,
        )

    async def get_otp_link(
        self,
        access_token: str,
        deal_id: str,
        investor_id: str,
    ) -> dict[str, Any]:
        """GET /deals/{deal_id}/investors/{investor_id}/otp_access_link."""
        return await self._request(
            "otp_link",
            "GET",
            f"/deals/{_segment(deal_id)}/investors/{_segment(investor_id)}/otp_access_link",
            access_token,
        )

    async def get_deal(self, access_token: str, deal_id: str) -> dict[str, Any]:
        """GET /deals/{deal_id}."""
        return await self._request("deal", "GET", f"/deals/{_segment(deal_id)}", access_token)

    async def get_funding_gap_status(self, access_token: str, deal_id: str) -> dict[str, Any]:
        """GET /deals/{deal_id}/funding_gap_status."""
        return await self._request(
            "funding_gap",
            "GET",
            f"/deals/{_segment(deal_id)}/funding_gap_status",
            access_token,
        )

    async def _request(
        self,
        step: str,
        method: str,
        path: str,
        access_token: str,
        *,
        json: dict[str, Any] | None = None,
        data: dict[str, str] | None = None,
        require_object: bool = True,
    ) -> dict[str, Any]:
        url = f"{self._settings.api_base_url}{path}"
        headers = {
            "Authorization": f"Bearer {access_token}",
            "Accept": "application/json",
        }
        started_at = time.perf_counter()
        response = await self._send(step, method, url, headers, json=json, data=data)
        record_latency(
            "dealmaker_api",
            step,
            (time.perf_counter() - started_at) * 1000,
            status_code=response.status_code,
        )

        if not response.is_success:
            logger.warning(
                "dealmaker_api_error",
                extra={"step": step, "method": method, "status_code": response.status_code},
            )
            raise UpstreamError(
                step,
                response.status_code,
                _response_body(response),
                is_retryable=_is_retryable_status(response.status_code),
            )

        if not response.content:
            return {}

        body = _response_body(response)
        if not isinstance(body, dict):
            if not require_object:
                return {}
            raise UpstreamError(
                step,
                None,
                message=f"Provider returned a non-object body at step '{step}'",
                context={"provider_status": response.status_code},
            )
        return body

    async def _send(
        self,
        step: str,
        method: str,
        url: str,
        headers: dict[str, str],
        *,
        json: dict[str, Any] | None,
        data: dict[str, str] | None,
    ) -> httpx.Response:
        timeout = self._settings.request_timeout_seconds
        try:
            if self._http_client is not None:
                return await self._http_client.request(
                    method, url, headers=headers, json=json, data=data, timeout=timeout
                )
            async with httpx.AsyncClient(timeout=timeout) as client:
                return await client.request(method, url, headers=headers, json=json, data=data)
        except httpx.TimeoutException as exc:
            logger.warning("dealmaker_api_timeout", extra={"step": step, "timeout_seconds": timeout})
            raise UpstreamError(
                step,
                None,
                message=f"Provider call timed out at step '{step}'",
                is_retryable=True,
                is_timeout=True,
            ) from exc
        except httpx.HTTPError as exc:
            logger.warning(
                "dealmaker_api_transport_error",
                extra={"step": step, "error_type": type(exc).__name__},
            )
            raise UpstreamError(
                step,
                None,
                message=f"Provider call could not be sent at step '{step}'",
                is_retryable=True,
            ) from exc

"""Protocolos da integração DealMaker usados pelo app.

Evita dependência direta da camada api.
"""

from __future__ import annotations

from typing import Any, Protocol


class TokenProviderProtocol(Protocol):
    """Contrato mínimo do provedor de bearer token."""

    async def get_token(self) -> str: ...


class DealmakerClientProtocol(Protocol):
    """Contrato das chamadas ao provedor feitas pelo checkout."""

    async def create_profile(
        self, access_token: str, payload: dict[str, Any]
    ) -> dict[str, Any]: ...

    async def create_investor(
        self, access_token: str, deal_id: str, payload: dict[str, Any]
    ) -> dict[str, Any]: ...

    async def patch_investor(
        self,
        access_token: str,
        deal_id: str,
        investor_id: str,
        payload: dict[str, Any],
    ) -> dict[str, Any]: ...

    async def get_otp_link(
        self, access_token: str, deal_id: str, investor_id: str
    ) -> dict[str, Any]: ...

"""Consultas somente-leitura de deals (pass-through do provedor)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from api.routes.dealmaker._responses import error_response, server_error_response
from app.bootstrap import create_dealmaker_client, get_token_provider
from config.settings import get_dealmaker_settings
from utils.errors import ConfigError, IntegrationError, UpstreamError, ValidationError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from api.connectors.dealmaker import DealmakerHttpClient

logger = logging.getLogger(__name__)

router = APIRouter()


async def _lookup(
    request: Request,
    fetch: Callable[[DealmakerHttpClient, str, str], Awaitable[dict[str, Any]]],
) -> tuple[str, dict[str, Any]] | JSONResponse:
    deal_id = (request.query_params.get("id") or "").strip()
    if not deal_id:
        return error_response(ValidationError("id", "Missing ?id=DEAL_ID"))

    try:
        missing = get_dealmaker_settings().missing("api")
        if missing:
            raise ConfigError(missing)
        access_token = await get_token_provider().get_token()
        data = await fetch(create_dealmaker_client(), access_token, deal_id)
    except UpstreamError as exc:
        if exc.status_code is None:
            return error_response(exc)
        # Erro do provedor repassado como veio
        return JSONResponse(
            content={"ok": False, "status": exc.status_code, "error": exc.body},
            status_code=exc.status_code,
        )
    except IntegrationError as exc:
        return error_response(exc)
    except Exception:
        logger.exception("deal_lookup_unexpected_error")
        return server_error_response()

    return deal_id, data


@router.get("/deal")
async def get_deal(request: Request) -> JSONResponse:
    """GET /api/deal?id=DEAL_ID."""
    outcome = await _lookup(
        request,
        lambda client, token, deal_id: client.get_deal(token, deal_id),
    )
    if isinstance(outcome, JSONResponse):
        return outcome
    _, data = outcome
    return JSONResponse(content={"ok": True, "data": data})


@router.get("/funding-gap")
async def get_funding_gap(request: Request) -> JSONResponse:
    """GET /api/funding-gap?id=DEAL_ID."""
    outcome = await _lookup(
        request,
        lambda client, token, deal_id: client.get_funding_gap_status(token, deal_id),
    )
    if isinstance(outcome, JSONResponse):
        return outcome
    deal_id, data = outcome
    return JSONResponse(content={"ok": True, "deal_id": deal_id, "data": data})

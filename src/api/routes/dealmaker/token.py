"""Diagnóstico do token OAuth2 (nunca expõe o access token)."""

from __future__ import annotations

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from api.routes.dealmaker._responses import error_response, server_error_response
from app.bootstrap import get_token_provider
from utils.errors import IntegrationError, UpstreamAuthError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/token")
async def token_status() -> JSONResponse:
    """Metadados do token corrente: token_type, expires_in, scope, created_at."""
    try:
        info = await get_token_provider().get_token_info()
    except UpstreamAuthError as exc:
        # Só repassa status de falha; 2xx sem token vira 500
        failed_status = exc.status_code if (exc.status_code or 0) >= 400 else None
        return error_response(
            exc,
            status_code=failed_status or status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    except IntegrationError as exc:
        return error_response(exc)
    except Exception:
        logger.exception("token_status_unexpected_error")
        return server_error_response()

    return JSONResponse(content={"ok": True, **info})

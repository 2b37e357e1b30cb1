"""Respostas JSON de erro das rotas DealMaker."""

from __future__ import annotations

from fastapi import status
from fastapi.responses import JSONResponse

from utils.errors import IntegrationError


def error_response(exc: IntegrationError, *, status_code: int | None = None) -> JSONResponse:
    """Renderiza um IntegrationError como `{ok: false, error, message, ...}`."""
    return JSONResponse(
        content={"ok": False, **exc.to_dict()},
        status_code=status_code or exc.http_status,
    )


def server_error_response() -> JSONResponse:
    """Falha inesperada; detalhes ficam apenas no log."""
    return JSONResponse(
        content={"ok": False, "error": "server_error", "message": "Unexpected server error"},
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )

"""Endpoint de início de checkout.

POST /api/start-checkout recebe o formulário do site (JSON), executa o
CheckoutOrchestrator e devolve a URL de redirecionamento.
"""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from api.routes.dealmaker._responses import error_response, server_error_response
from app.bootstrap import create_checkout_orchestrator
from app.domain.checkout import InvestorFormInput
from utils.errors import IntegrationError, ValidationError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/start-checkout")
async def start_checkout(request: Request) -> JSONResponse:
    """Cria investidor (e perfil) na DealMaker e devolve o redirect.

    Returns:
        200 com redirect_url e ids, ou erro estruturado com o status
        proxied do provedor.
    """
    raw_body = await request.body()
    try:
        body = json.loads(raw_body or b"{}")
    except (json.JSONDecodeError, UnicodeDecodeError):
        return error_response(ValidationError("body", "Request body must be valid JSON"))

    if not isinstance(body, dict):
        return error_response(ValidationError("body", "Request body must be a JSON object"))

    try:
        orchestrator = create_checkout_orchestrator()
        result = await orchestrator.run(InvestorFormInput.from_mapping(body))
    except IntegrationError as exc:
        logger.warning("checkout_failed", extra={"reason": exc.reason})
        return error_response(exc)
    except Exception:
        logger.exception("checkout_unexpected_error")
        return server_error_response()

    return JSONResponse(content=result.to_dict())

"""Agregador de rotas: registra health e os endpoints DealMaker.

Uso:
    from api.routes import create_api_router

    app = FastAPI()
    app.include_router(create_api_router())
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.dealmaker.router import router as dealmaker_router
from api.routes.health.router import router as health_router


def create_api_router() -> APIRouter:
    """Cria router principal com todos os sub-routers registrados."""
    api_router = APIRouter()

    # Health checks na raiz (/health, /ready)
    api_router.include_router(health_router, tags=["health"])

    # Caminhos /api/... consumidos pelo site
    api_router.include_router(dealmaker_router, prefix="/api", tags=["dealmaker"])

    return api_router

"""Rotas HTTP da API.

- routes/dealmaker/: checkout, consultas de deal, token e webhook
- routes/health/: liveness e readiness
- router.py: registra todos os routers no app principal
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]

"""Router DealMaker: agrega checkout, consultas, token e webhook."""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.dealmaker.checkout import router as checkout_router
from api.routes.dealmaker.deals import router as deals_router
from api.routes.dealmaker.token import router as token_router
from api.routes.dealmaker.webhook import router as webhook_router

router = APIRouter()

router.include_router(checkout_router)
router.include_router(deals_router)
router.include_router(token_router)
router.include_router(webhook_router)

"""
Route aggregator — mounts the grid, pricing and sync routers under /api.

Health is exported separately for main.py to mount at root.
"""
from fastapi import APIRouter

from precifica.routes.products import router as products_router
from precifica.routes.pricing import router as pricing_router
from precifica.routes.sync import router as sync_router
from precifica.routes.health import router as health_router

api_router = APIRouter(prefix="/api")

api_router.include_router(products_router)
api_router.include_router(pricing_router)
api_router.include_router(sync_router)

__all__ = ["api_router", "health_router"]

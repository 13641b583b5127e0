"""
Pricing routes — gold price, plating factor and the summary widgets.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException

from precifica.container import get_price_feed, get_pricing_service
from precifica.core.exceptions import StorageError
from precifica.schemas.pricing import PlatingFactorUpdate, PricingSummary
from precifica.services.price_feed_service import GoldPriceFeed
from precifica.services.pricing_service import PricingService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/pricing", tags=["pricing"])


@router.get("", response_model=PricingSummary)
async def get_pricing_summary(pricing: PricingService = Depends(get_pricing_service)):
    return pricing.summary()


@router.put("/factor", response_model=PricingSummary)
async def update_plating_factor(
    body: PlatingFactorUpdate,
    pricing: PricingService = Depends(get_pricing_service),
):
    """Change the plating factor; every product is repriced."""
    if body.plating_factor < 0:
        raise HTTPException(status_code=422, detail="plating_factor must not be negative")
    try:
        pricing.set_plating_factor(body.plating_factor)
    except StorageError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return pricing.summary()


@router.post("/gold/refresh", response_model=PricingSummary)
async def refresh_gold_price(
    feed: GoldPriceFeed = Depends(get_price_feed),
    pricing: PricingService = Depends(get_pricing_service),
):
    """Fetch the gold price now instead of waiting for the next tick."""
    price = await feed.refresh()
    if price is None:
        raise HTTPException(
            status_code=503,
            detail="Gold price feed unavailable; the previous price is still in use",
        )
    return pricing.summary()

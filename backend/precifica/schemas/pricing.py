"""
Pricing schemas — the pricing context and the pricing summary widget.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict

from precifica.core.constants.pricing import DEFAULT_PLATING_FACTOR


class PricingContext(BaseModel):
    """Process-wide pricing inputs shared by every recompute."""
    model_config = ConfigDict(frozen=True)

    gold_price_per_gram: float = 0.0
    plating_factor: float = DEFAULT_PLATING_FACTOR


class GoldQuote(BaseModel):
    bid_per_ounce: float
    price_per_gram: float
    created_at: Optional[str] = None


class PlatingFactorUpdate(BaseModel):
    plating_factor: float


class PricingSummary(BaseModel):
    gold_price_per_gram: float
    plating_factor: float
    average_plating_cost: float
    total_products: int
    quote_created_at: Optional[str] = None
    last_updated: Optional[str] = None

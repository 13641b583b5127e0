"""
Pricing service — owns the pricing context and keeps the grid priced.

The context is immutable; every change builds a new one and recomputes
every product against it.
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from precifica.core.exceptions import StorageError
from precifica.db.product_store import ProductStore
from precifica.db.settings_store import SettingsStore
from precifica.schemas.pricing import PricingContext, PricingSummary
from precifica.utils import pricing_engine

logger = logging.getLogger(__name__)


class PricingService:
    def __init__(self, product_store: ProductStore, settings_store: SettingsStore) -> None:
        self._products = product_store
        self._settings_store = settings_store
        self._context = PricingContext(plating_factor=settings_store.get_plating_factor())
        self._quote_created_at: Optional[str] = None
        self._last_updated: Optional[str] = None

    @property
    def context(self) -> PricingContext:
        return self._context

    def set_gold_price(self, price_per_gram: float, quote_created_at: Optional[str] = None) -> PricingContext:
        """
        Apply a new gold price per gram and reprice every product.

        The context only changes once the repriced grid has been written;
        on StorageError the previous price stays in effect.
        """
        context = self._context.model_copy(update={"gold_price_per_gram": price_per_gram})
        self._products.recompute_all(context)
        self._context = context
        self._quote_created_at = quote_created_at
        self._last_updated = datetime.now(timezone.utc).isoformat()
        logger.info("gold price updated price_per_gram=%.4f products=%s", price_per_gram, self._products.count())
        return self._context

    def set_plating_factor(self, factor: float) -> PricingContext:
        """Persist a new plating factor and reprice every product."""
        previous = self._context.plating_factor
        context = self._context.model_copy(update={"plating_factor": factor})
        self._settings_store.set_plating_factor(factor)
        try:
            self._products.recompute_all(context)
        except StorageError:
            self._settings_store.set_plating_factor(previous)
            raise
        self._context = context
        logger.info("plating factor updated factor=%s", factor)
        return self._context

    def summary(self) -> PricingSummary:
        return PricingSummary(
            gold_price_per_gram=self._context.gold_price_per_gram,
            plating_factor=self._context.plating_factor,
            average_plating_cost=pricing_engine.average_plating_cost(self._context),
            total_products=self._products.count(),
            quote_created_at=self._quote_created_at,
            last_updated=self._last_updated,
        )

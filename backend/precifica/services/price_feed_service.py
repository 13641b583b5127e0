"""
Gold price feed — periodic spot price refresh.

A failed refresh is logged and otherwise ignored: the previous price stays
in effect and the grid keeps working with it.
"""
import asyncio
import logging
from typing import Optional

from precifica.clients.gold_client import GoldPriceClient
from precifica.core.exceptions import PrecificaException
from precifica.services.pricing_service import PricingService

logger = logging.getLogger(__name__)


class GoldPriceFeed:
    def __init__(self, client: GoldPriceClient, pricing: PricingService) -> None:
        self._client = client
        self._pricing = pricing

    async def refresh(self) -> Optional[float]:
        """Fetch the spot price and reprice the grid; None when the feed failed."""
        try:
            quote = await self._client.fetch_quote()
            self._pricing.set_gold_price(quote.price_per_gram, quote_created_at=quote.created_at)
        except PrecificaException as exc:
            logger.warning("gold price refresh failed, keeping previous price error=%s", exc)
            return None
        return quote.price_per_gram

    async def run(self, interval_seconds: float) -> None:
        """Refresh now and then every interval until cancelled."""
        logger.info("gold price feed started interval=%ss", interval_seconds)
        while True:
            try:
                await self.refresh()
            except Exception:
                logger.exception("gold price feed tick failed")
            await asyncio.sleep(interval_seconds)

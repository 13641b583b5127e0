"""
Gold HTTP client — spot price quote from the exchange-rate API.

The feed quotes gold (XAU) per troy ounce in local currency:

    {"XAUBRL": {"bid": "12439.5", "create_date": "2026-10-19 14:05:03", ...}}
"""
import logging

import httpx

from precifica.core.config import Settings
from precifica.core.constants.pricing import TROY_OUNCE_GRAMS
from precifica.core.exceptions import ParseError, RemoteError
from precifica.schemas.pricing import GoldQuote
from precifica.utils.type_converters import to_float

logger = logging.getLogger("gold_client")

SERVICE_NAME = "Gold feed"


class GoldPriceClient:
    def __init__(self, settings: Settings) -> None:
        self._url = settings.gold_api_url
        self._quote_key = settings.gold_quote_key
        self._timeout = settings.http_timeout_seconds

    async def fetch_quote(self) -> GoldQuote:
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.get(self._url)
        except httpx.HTTPError as exc:
            raise RemoteError(SERVICE_NAME, f"request failed: {exc}") from exc

        if resp.status_code != 200:
            raise RemoteError(SERVICE_NAME, resp.text[:200], status_code=resp.status_code)

        try:
            body = resp.json()
        except ValueError as exc:
            raise ParseError(f"{SERVICE_NAME} returned a non-JSON body") from exc

        return self.parse_quote(body)

    def parse_quote(self, body) -> GoldQuote:
        """Extract the bid from the nested quote object and convert to price per gram."""
        quote = body.get(self._quote_key) if isinstance(body, dict) else None
        if not isinstance(quote, dict) or quote.get("bid") in (None, ""):
            raise ParseError(f"{SERVICE_NAME} response has no '{self._quote_key}.bid' quote")

        bid = to_float(quote.get("bid"), default=-1.0)
        if bid <= 0:
            raise ParseError(f"{SERVICE_NAME} bid is not a positive number: {quote.get('bid')!r}")

        return GoldQuote(
            bid_per_ounce=bid,
            price_per_gram=bid / TROY_OUNCE_GRAMS,
            created_at=quote.get("create_date"),
        )

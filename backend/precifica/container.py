"""
Lazy DI container — singleton access to clients, stores, and services.

Import individual getters to avoid circular imports. Route handlers
receive these through FastAPI Depends, so tests can swap them with
app.dependency_overrides.
"""

from functools import lru_cache

from precifica.core.config import settings
from precifica.clients.github_client import GithubContentsClient
from precifica.clients.gold_client import GoldPriceClient
from precifica.db.product_store import ProductStore
from precifica.db.settings_store import SettingsStore
from precifica.services.price_feed_service import GoldPriceFeed
from precifica.services.pricing_service import PricingService
from precifica.services.products_service import ProductsService
from precifica.services.sync_service import SyncService


# -- Clients ---------------------------------------------------------------

@lru_cache(maxsize=1)
def get_gold_client():
    return GoldPriceClient(settings)


@lru_cache(maxsize=1)
def get_github_client():
    return GithubContentsClient(settings)


# -- Local Stores ----------------------------------------------------------

@lru_cache(maxsize=1)
def get_product_store():
    return ProductStore(settings)


@lru_cache(maxsize=1)
def get_settings_store():
    return SettingsStore(settings)


# -- Services --------------------------------------------------------------

@lru_cache(maxsize=1)
def get_pricing_service():
    return PricingService(get_product_store(), get_settings_store())


@lru_cache(maxsize=1)
def get_products_service():
    return ProductsService(get_product_store(), get_pricing_service())


@lru_cache(maxsize=1)
def get_price_feed():
    return GoldPriceFeed(get_gold_client(), get_pricing_service())


@lru_cache(maxsize=1)
def get_sync_service():
    return SyncService(
        get_github_client(),
        get_product_store(),
        get_settings_store(),
        get_pricing_service(),
    )

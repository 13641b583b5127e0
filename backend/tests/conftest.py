"""
Pytest configuration and shared fixtures for Precifica tests.

Provides settings pointed at a temporary data directory, real local
stores and services wired to it, mocked HTTP clients, and an API test
client whose dependencies are overridden with those instances.
"""
import os

os.environ.setdefault("AUTO_START_PRICE_FEED", "false")

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from fastapi.testclient import TestClient

from precifica.core.config import Settings
from precifica.core.exceptions import StorageError
from precifica.db.product_store import ProductStore
from precifica.db.settings_store import SettingsStore
from precifica.schemas.pricing import PricingContext
from precifica.services.price_feed_service import GoldPriceFeed
from precifica.services.pricing_service import PricingService
from precifica.services.products_service import ProductsService
from precifica.services.sync_service import SyncService


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

@pytest.fixture
def test_settings(tmp_path):
    """Settings object with a throwaway data dir and no real credentials."""
    return Settings(
        data_dir=str(tmp_path / "data"),
        gold_api_url="https://gold.test/last/XAU-BRL",
        gold_quote_key="XAUBRL",
        auto_start_price_feed=False,
        http_timeout_seconds=5,
        github_api_url="https://api.github.test",
        github_owner="",
        github_repo="",
        github_path="precifica_db.json",
        github_token="",
        default_plating_factor=0.02,
    )


@pytest.fixture
def context():
    """Gold at R$400/oz, factor 0.02."""
    return PricingContext(gold_price_per_gram=400 / 31.1035, plating_factor=0.02)


# ---------------------------------------------------------------------------
# Stores and services (real, on tmp_path)
# ---------------------------------------------------------------------------

@pytest.fixture
def product_store(test_settings):
    return ProductStore(test_settings)


@pytest.fixture
def disk_full(product_store):
    """Factory for a patch that makes every write of the products file fail."""
    return lambda: patch.object(product_store, "_write_json", side_effect=StorageError("disk full"))


@pytest.fixture
def settings_store(test_settings):
    return SettingsStore(test_settings)


@pytest.fixture
def configured_settings_store(settings_store):
    settings_store.update_remote_descriptor(
        owner="acme", repository="precos", path="precifica_db.json", token="ghp_test"
    )
    return settings_store


@pytest.fixture
def pricing_service(product_store, settings_store):
    return PricingService(product_store, settings_store)


@pytest.fixture
def products_service(product_store, pricing_service):
    return ProductsService(product_store, pricing_service)


# ---------------------------------------------------------------------------
# Clients (mocked)
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_github_client():
    """Mocked GithubContentsClient."""
    client = MagicMock()
    client.get_file = AsyncMock()
    client.put_file = AsyncMock(return_value="sha-new")
    return client


@pytest.fixture
def mock_gold_client():
    """Mocked GoldPriceClient."""
    client = MagicMock()
    client.fetch_quote = AsyncMock()
    return client


@pytest.fixture
def sync_service(mock_github_client, product_store, configured_settings_store, pricing_service):
    return SyncService(mock_github_client, product_store, configured_settings_store, pricing_service)


@pytest.fixture
def price_feed(mock_gold_client, pricing_service):
    return GoldPriceFeed(mock_gold_client, pricing_service)


# ---------------------------------------------------------------------------
# HTTP mocking helpers
# ---------------------------------------------------------------------------

def _make_response(status_code=200, json_data=None, text=""):
    resp = MagicMock()
    resp.status_code = status_code
    resp.text = text
    if isinstance(json_data, Exception):
        resp.json.side_effect = json_data
    else:
        resp.json.return_value = json_data
    return resp


def _make_async_client(mock_http):
    ctx = AsyncMock()
    ctx.__aenter__.return_value = mock_http
    return ctx


@pytest.fixture
def make_response():
    """Factory for MagicMocks shaped like an httpx.Response."""
    return _make_response


@pytest.fixture
def make_async_client():
    """Factory wrapping a mock HTTP object so `async with httpx.AsyncClient()` yields it."""
    return _make_async_client


# ---------------------------------------------------------------------------
# FastAPI test client
# ---------------------------------------------------------------------------

@pytest.fixture
def api_client(
    product_store,
    configured_settings_store,
    pricing_service,
    products_service,
    sync_service,
    price_feed,
):
    """TestClient with every container getter pointed at the tmp_path services."""
    from precifica import container
    from precifica.main import app

    overrides = {
        container.get_product_store: lambda: product_store,
        container.get_settings_store: lambda: configured_settings_store,
        container.get_pricing_service: lambda: pricing_service,
        container.get_products_service: lambda: products_service,
        container.get_sync_service: lambda: sync_service,
        container.get_price_feed: lambda: price_feed,
    }
    app.dependency_overrides.update(overrides)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()

import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from precifica.container import get_price_feed, get_pricing_service, get_product_store
from precifica.core.config import settings
from precifica.routes import api_router, health_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan event handler.

    On startup:
    - Load the product grid from the local data directory
    - Start the gold price feed (fetches now, then every GOLD_REFRESH_SECONDS)

    On shutdown:
    - Cancel the price feed task
    """
    logger.info("=== Precifica Starting ===")

    pricing = get_pricing_service()
    count = get_product_store().load(pricing.context)
    logger.info(f"Loaded {count} products from {settings.data_dir}")

    feed_task = None
    if settings.auto_start_price_feed:
        feed_task = asyncio.create_task(get_price_feed().run(settings.gold_refresh_seconds))
    else:
        logger.info("Gold price feed disabled (AUTO_START_PRICE_FEED=false)")

    logger.info("=== Precifica Ready ===")

    yield

    logger.info("=== Precifica Shutting Down ===")
    if feed_task is not None:
        feed_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await feed_task
    logger.info("Shutdown complete")


app = FastAPI(title="Precifica Backend", lifespan=lifespan)
logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(name)s:%(message)s")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(api_router)

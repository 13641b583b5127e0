"""
Pull or push the product grid from the command line.

Uses the same data directory and remote settings as the API server, so
it can be run next to it or instead of it (e.g. from cron).

Usage:
    # Replace the local grid with the remote file
    python -m scripts.sync_remote pull

    # Write the local grid to the remote file
    python -m scripts.sync_remote push

    # Fetch the gold price and reprice the local grid
    python -m scripts.sync_remote refresh-gold

    # Show sync status
    python -m scripts.sync_remote status
"""

import argparse
import asyncio
import logging
import sys

from precifica.container import (
    get_price_feed,
    get_pricing_service,
    get_product_store,
    get_sync_service,
)
from precifica.core.exceptions import ConflictError, PrecificaException

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


async def run(command: str) -> int:
    pricing = get_pricing_service()
    get_product_store().load(pricing.context)
    sync = get_sync_service()

    if command == "status":
        logger.info(f"Status: {sync.status().model_dump()}")
        return 0

    if command == "refresh-gold":
        price = await get_price_feed().refresh()
        if price is None:
            logger.error("Gold price feed unavailable")
            return 1
        logger.info(f"Gold price per gram: {price:.2f}")
        return 0

    try:
        if command == "pull":
            result = await sync.pull()
            for warning in result.warnings:
                logger.warning(warning)
        else:
            result = await sync.push()
    except ConflictError as e:
        logger.error(f"Remote file changed since the last pull; run 'pull' first ({e})")
        return 2
    except PrecificaException as e:
        logger.error(f"{command} failed: {e}")
        return 1

    logger.info(f"{command} done: {result.count} products, version {result.version_token}")
    return 0


def main():
    parser = argparse.ArgumentParser(
        description="Sync the Precifica product grid with its remote JSON file"
    )
    parser.add_argument(
        "command",
        choices=["pull", "push", "refresh-gold", "status"],
        help="Action to run"
    )

    args = parser.parse_args()
    sys.exit(asyncio.run(run(args.command)))


if __name__ == "__main__":
    main()

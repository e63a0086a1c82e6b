#!/usr/bin/env python3
"""
Meal Catalog Browser
Runs the list view's default search and the gallery aggregation once
"""

import asyncio
import logging
import sys
from pathlib import Path

# Add src and project root to Python path
sys.path.insert(0, str(Path(__file__).parent))
sys.path.insert(0, str(Path(__file__).parent.parent))

from catalog.aggregation import AggregationPipeline
from catalog.query import configure_collation
from catalog.views import GalleryView, ListView
from config.settings import Settings
from mealdb.client import MealDBClient
from utils.helpers import format_results_heading, summarize_record

logger = logging.getLogger(__name__)


def configure_logging(level: str):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler('meal_catalog.log')
        ]
    )


async def main():
    """Main entry point for the meal catalog browser"""
    # Load settings
    settings = Settings()
    configure_logging(settings.log_level)
    logger.info(f"Sorting with collation locale {configure_collation(settings.collation_locale)}")

    try:
        async with MealDBClient(settings) as client:
            list_view = ListView(client, settings)
            state = await list_view.load()
            if state.error:
                logger.warning(state.error)
            logger.info(format_results_heading(len(state.display)))
            for record in state.display:
                logger.info("\n" + summarize_record(record))

            gallery = GalleryView(AggregationPipeline(client, settings))
            state = await gallery.load()
            if state.error:
                logger.warning(state.error)
            else:
                logger.info(
                    f"Gallery holds {len(state.display)} meals across {len(gallery.categories)} categories"
                    + (" (partial)" if gallery.partial else "")
                )

    except KeyboardInterrupt:
        logger.info("Shutdown requested by user")
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        raise


if __name__ == "__main__":
    asyncio.run(main())

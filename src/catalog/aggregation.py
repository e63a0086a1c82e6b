"""Multi-category aggregation for the gallery view"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from config.settings import Settings
from mealdb.client import MealDBClient
from mealdb.errors import CatalogError, NotFound
from mealdb.models import Record

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AggregationResult:
    """Flat collection built across categories"""
    records: List[Record]
    categories: List[str]
    skipped_categories: List[str] = field(default_factory=list)
    dropped_ids: List[str] = field(default_factory=list)

    @property
    def partial(self) -> bool:
        """True when some category or record could not be resolved"""
        return bool(self.skipped_categories or self.dropped_ids)


class AggregationPipeline:
    """Fan out categories -> members -> details into one collection.

    Only a failure to fetch the category list reaches the caller. A category
    whose member fetch or any detail fetch fails contributes nothing, and a
    detail lookup that finds no meal is dropped; neither aborts the others.
    """

    def __init__(self, client: MealDBClient, settings: Settings):
        self.client = client
        self.max_categories = settings.aggregate_max_categories
        self._semaphore = asyncio.Semaphore(settings.aggregate_max_concurrency)

    async def aggregate(self) -> AggregationResult:
        """
        Build the gallery collection

        Returns:
            AggregationResult with records in category-processing order

        Raises:
            RemoteUnavailable: If the category list cannot be fetched
        """
        all_categories = await self.client.list_categories()
        categories = all_categories[:self.max_categories]
        logger.info(f"Aggregating {len(categories)} of {len(all_categories)} categories")

        outcomes = await asyncio.gather(
            *(self._resolve_category(category) for category in categories)
        )

        records: List[Record] = []
        skipped: List[str] = []
        dropped: List[str] = []
        for category, outcome in zip(categories, outcomes):
            if outcome is None:
                skipped.append(category)
                continue
            resolved, missing = outcome
            records.extend(resolved)
            dropped.extend(missing)

        logger.info(
            f"Aggregated {len(records)} meals "
            f"({len(skipped)} categories skipped, {len(dropped)} meals missing)"
        )
        return AggregationResult(
            records=records,
            categories=categories,
            skipped_categories=skipped,
            dropped_ids=dropped,
        )

    async def _resolve_category(self, category: str) -> Optional[Tuple[List[Record], List[str]]]:
        """Resolve one category fully, or return None if it must be skipped"""
        try:
            members = await self.client.filter_by_category(category)
        except CatalogError as e:
            logger.warning(f"Skipping category '{category}': {e}")
            return None

        # Let every lookup settle before deciding, so none is left running
        details = await asyncio.gather(
            *(self._lookup(member.id) for member in members),
            return_exceptions=True
        )
        for outcome in details:
            if isinstance(outcome, CatalogError):
                logger.warning(f"Skipping category '{category}': {outcome}")
                return None
            if isinstance(outcome, BaseException):
                raise outcome

        resolved = [record for record in details if record is not None]
        missing = [member.id for member, record in zip(members, details) if record is None]
        for record_id in missing:
            logger.warning(f"Meal {record_id} in category '{category}' returned no details, dropping it")
        return resolved, missing

    async def _lookup(self, record_id: str) -> Optional[Record]:
        async with self._semaphore:
            try:
                return await self.client.lookup_by_id(record_id)
            except NotFound:
                return None

"""MealDB API client for meal lookups"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

import aiohttp
from pydantic import ValidationError

from config.settings import Settings
from mealdb.errors import EmptyInput, NotFound, RemoteUnavailable
from mealdb.models import Record

logger = logging.getLogger(__name__)


class MealDBClient:
    """Client for the read-only MealDB catalog API.

    Every endpoint answers with ``{"meals": [...] | null}``; a null or
    missing ``meals`` means "no results", never a failure. No retries are
    performed, callers decide what to do with ``RemoteUnavailable``.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.base_url = settings.mealdb_base_url
        self.member_limit = settings.category_member_limit
        self.session: Optional[aiohttp.ClientSession] = None

        # Headers for API requests
        self.headers = {
            'Accept': 'application/json'
        }

        self.timeout = aiohttp.ClientTimeout(total=settings.mealdb_timeout)

    async def __aenter__(self):
        """Async context manager entry"""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        await self.disconnect()

    async def connect(self):
        """Initialize HTTP session"""
        if self.session is None:
            self.session = aiohttp.ClientSession(headers=self.headers, timeout=self.timeout)

    async def disconnect(self):
        """Close HTTP session"""
        if self.session:
            await self.session.close()
            self.session = None

    async def search_by_term(self, term: str) -> List[Record]:
        """
        Search meals whose name matches a free-text term

        Args:
            term: Search text, must not be blank

        Returns:
            Matching records, empty when the catalog reports none

        Raises:
            EmptyInput: If term is blank after trimming
            RemoteUnavailable: If the API request fails
        """
        term = (term or '').strip()
        if not term:
            raise EmptyInput("Please enter a search term")

        meals = await self._get_meals('search.php', {'s': term})
        records = self._parse_records('search.php', meals)
        logger.info(f"Search for '{term}' returned {len(records)} meals")
        return records

    async def list_categories(self) -> List[str]:
        """
        Get the ordered list of category names

        Raises:
            RemoteUnavailable: If the API request fails
        """
        meals = await self._get_meals('list.php', {'c': 'list'})

        categories = []
        for entry in meals:
            name = str(entry.get('strCategory') or '').strip()
            if name:
                categories.append(name)
        return categories

    async def filter_by_category(self, category: str) -> List[Record]:
        """
        Get summary records belonging to a category

        Only the first ``category_member_limit`` entries are returned, which
        bounds how many detail lookups a caller fans out per category.

        Args:
            category: Category name as returned by list_categories

        Returns:
            Summary records (id, name, thumbnail)

        Raises:
            EmptyInput: If category is blank
            RemoteUnavailable: If the API request fails
        """
        category = (category or '').strip()
        if not category:
            raise EmptyInput("Category must not be blank")

        meals = await self._get_meals('filter.php', {'c': category})
        return self._parse_records('filter.php', meals[:self.member_limit])

    async def lookup_by_id(self, record_id: str) -> Record:
        """
        Get full meal details by ID

        Args:
            record_id: MealDB meal ID

        Returns:
            Record with every field populated

        Raises:
            EmptyInput: If record_id is blank
            NotFound: If the catalog has no meal with that ID
            RemoteUnavailable: If the API request fails
        """
        record_id = str(record_id or '').strip()
        if not record_id:
            raise EmptyInput("Meal ID must not be blank")

        meals = await self._get_meals('lookup.php', {'i': record_id})
        records = self._parse_records('lookup.php', meals)
        if not records:
            raise NotFound(record_id)
        return records[0]

    async def _get_meals(self, path: str, params: Dict[str, str]) -> List[Dict[str, Any]]:
        """Issue one GET and return the ``meals`` array, empty for null"""
        if not self.session:
            await self.connect()

        endpoint = f"{self.base_url}/{path}"

        try:
            async with self.session.get(endpoint, params=params) as response:
                if response.status != 200:
                    error_text = await response.text()
                    logger.error(f"Catalog request failed. Status: {response.status}, URL: {endpoint}, Params: {params}")
                    raise RemoteUnavailable(endpoint, f"HTTP {response.status}: {error_text[:200]}")

                payload = await response.json(content_type=None)

        except aiohttp.ClientError as e:
            logger.error(f"Network error while requesting {endpoint}: {e}")
            raise RemoteUnavailable(endpoint, str(e), e) from e
        except asyncio.TimeoutError as e:
            logger.error(f"Timed out requesting {endpoint}")
            raise RemoteUnavailable(endpoint, "request timed out", e) from e
        except ValueError as e:
            logger.error(f"Invalid JSON from {endpoint}: {e}")
            raise RemoteUnavailable(endpoint, "response is not valid JSON", e) from e

        if not isinstance(payload, dict):
            raise RemoteUnavailable(endpoint, "response is not a JSON object")

        meals = payload.get('meals')
        if meals is None:
            return []
        if not isinstance(meals, list):
            raise RemoteUnavailable(endpoint, "'meals' is neither a list nor null")
        return [entry for entry in meals if isinstance(entry, dict)]

    def _parse_records(self, path: str, meals: List[Dict[str, Any]]) -> List[Record]:
        """Validate raw meal dicts into records"""
        try:
            return [Record.model_validate(entry) for entry in meals]
        except ValidationError as e:
            logger.error(f"Malformed meal payload from {path}: {e}")
            raise RemoteUnavailable(f"{self.base_url}/{path}", "malformed meal payload", e) from e

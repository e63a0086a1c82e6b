"""View controllers for the list, gallery and detail views.

Each controller owns its state explicitly and re-derives the display
collection synchronously after every change. Requests are tagged with a
sequence number; a result is applied only when no newer request was issued
after it, so a slow stale response never overwrites a newer one. A failure
clears the data it replaces, so an error and stale records are never shown
together.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from catalog.aggregation import AggregationPipeline
from catalog.navigation import NavigationCursor
from catalog.query import QueryEngine, QueryState, SortKey
from config.settings import Settings
from mealdb.client import MealDBClient
from mealdb.errors import EmptyInput, NotFound, RemoteUnavailable
from mealdb.models import Record

logger = logging.getLogger(__name__)

EMPTY_SEARCH_MESSAGE = "Please enter a search term"
NO_RESULTS_MESSAGE = "No meals found for your search"
FETCH_FAILED_MESSAGE = "Failed to fetch data. Please try again."
NOT_FOUND_MESSAGE = "Meal not found"


@dataclass
class ViewState:
    """What a collection view currently shows"""
    loading: bool = False
    error: Optional[str] = None
    base: List[Record] = field(default_factory=list)
    display: List[Record] = field(default_factory=list)


class RequestSequence:
    """Issue increasing request tokens and tell whether one is still the latest"""

    def __init__(self):
        self._latest = 0

    def issue(self) -> int:
        self._latest += 1
        return self._latest

    def is_current(self, token: int) -> bool:
        return token == self._latest


class CollectionView:
    """Shared state handling for views that show a filtered, sorted collection"""

    def __init__(self, engine: Optional[QueryEngine] = None):
        self.engine = engine or QueryEngine()
        self.state = ViewState()
        self.query_state = QueryState()
        self.requests = RequestSequence()

    def set_query(self, query_state: QueryState) -> List[Record]:
        self.query_state = query_state
        return self.refresh()

    def set_search_text(self, text: str) -> List[Record]:
        return self.set_query(self.query_state.with_search_text(text))

    def toggle_category(self, category: str) -> List[Record]:
        return self.set_query(self.query_state.toggle_category(category))

    def toggle_sort(self, key: SortKey) -> List[Record]:
        return self.set_query(self.query_state.toggle_sort(key))

    def refresh(self) -> List[Record]:
        """Re-derive the display collection from base and query state"""
        self.state.display = self.engine.query(self.state.base, self.query_state)
        return self.state.display

    def _begin(self) -> int:
        token = self.requests.issue()
        self.state.loading = True
        self.state.error = None
        return token

    def _is_stale(self, token: int) -> bool:
        if self.requests.is_current(token):
            return False
        logger.debug(f"Dropping result of superseded request #{token}")
        return True

    def _apply(self, records: Sequence[Record], error: Optional[str] = None):
        self.state.loading = False
        self.state.error = error
        self.state.base = list(records)
        self.refresh()

    def _fail(self, message: str):
        self._apply([], message)


class ListView(CollectionView):
    """Search-driven list of meals"""

    def __init__(self, client: MealDBClient, settings: Settings, engine: Optional[QueryEngine] = None):
        super().__init__(engine)
        self.client = client
        self.settings = settings

    async def load(self) -> ViewState:
        """Run the initial search"""
        return await self.search(self.settings.default_search_term)

    async def search(self, term: str) -> ViewState:
        """
        Replace the base collection with the results for term

        Returns:
            The view state after this search (unchanged if it was superseded)
        """
        token = self._begin()

        try:
            records = await self.client.search_by_term(term)
        except EmptyInput:
            if not self._is_stale(token):
                self._fail(EMPTY_SEARCH_MESSAGE)
            return self.state
        except RemoteUnavailable as e:
            logger.error(f"Search for '{term}' failed: {e}")
            if not self._is_stale(token):
                self._fail(FETCH_FAILED_MESSAGE)
            return self.state

        if self._is_stale(token):
            return self.state

        self._apply(records, None if records else NO_RESULTS_MESSAGE)
        return self.state


class GalleryView(CollectionView):
    """Category-spanning gallery built by the aggregation pipeline"""

    def __init__(self, pipeline: AggregationPipeline, engine: Optional[QueryEngine] = None):
        super().__init__(engine)
        self.pipeline = pipeline
        self.categories: List[str] = []
        self.partial = False

    async def load(self) -> ViewState:
        token = self._begin()

        try:
            result = await self.pipeline.aggregate()
        except RemoteUnavailable as e:
            logger.error(f"Gallery aggregation failed: {e}")
            if not self._is_stale(token):
                self.categories = []
                self.partial = False
                self._fail(FETCH_FAILED_MESSAGE)
            return self.state

        if self._is_stale(token):
            return self.state

        self.categories = list(result.categories)
        self.partial = result.partial
        # Selections for categories no longer offered would hide every record
        self.query_state = self.query_state.with_categories(
            category for category in self.query_state.selected_categories
            if category in self.categories
        )
        self._apply(result.records)
        return self.state


@dataclass
class DetailState:
    """What the detail view currently shows"""
    loading: bool = False
    error: Optional[str] = None
    record: Optional[Record] = None


class DetailView:
    """Single-meal view with wraparound previous/next browsing"""

    def __init__(self, client: MealDBClient, cursor: Optional[NavigationCursor] = None):
        self.client = client
        self.cursor = cursor or NavigationCursor()
        self.collection: List[Record] = []
        self.state = DetailState()
        self.requests = RequestSequence()

    def set_collection(self, collection: Sequence[Record]):
        """Follow a new ordering held by the caller, keeping the current meal"""
        self.collection = list(collection)
        self.cursor.resync(self.collection, self.cursor.current_id)

    async def open(self, record_id: str, collection: Optional[Sequence[Record]] = None) -> DetailState:
        """Show the meal with record_id, optionally switching collection first"""
        if collection is not None:
            self.collection = list(collection)
        self.cursor.resync(self.collection, record_id)

        token = self.requests.issue()
        self.state.loading = True
        self.state.error = None

        error = None
        record = None
        try:
            record = await self.client.lookup_by_id(record_id)
        except NotFound:
            error = NOT_FOUND_MESSAGE
        except EmptyInput as e:
            error = str(e)
        except RemoteUnavailable as e:
            logger.error(f"Lookup of meal {record_id} failed: {e}")
            error = FETCH_FAILED_MESSAGE

        if not self.requests.is_current(token):
            logger.debug(f"Dropping result of superseded lookup for meal {record_id}")
            return self.state

        self.state = DetailState(loading=False, error=error, record=record)
        return self.state

    async def show_previous(self) -> Optional[str]:
        """Open the previous meal in the held collection"""
        target = self.cursor.previous(self.collection)
        if target is not None:
            await self.open(target)
        return target

    async def show_next(self) -> Optional[str]:
        """Open the next meal in the held collection"""
        target = self.cursor.next(self.collection)
        if target is not None:
            await self.open(target)
        return target

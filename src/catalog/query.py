"""Search, category filtering and sorting over an in-memory collection"""

import locale
import logging
import unicodedata
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import FrozenSet, Iterable, List, Sequence, Tuple

from mealdb.models import Record

logger = logging.getLogger(__name__)


class SortKey(Enum):
    """Record field used for ordering"""
    NAME = "name"
    CATEGORY = "category"
    AREA = "area"


class SortDirection(Enum):
    """Ordering direction"""
    ASCENDING = "ascending"
    DESCENDING = "descending"


@dataclass(frozen=True)
class QueryState:
    """View-owned query inputs.

    Instances are immutable; every change returns a new state so callers can
    re-derive the display collection from ``(base, state)`` alone.
    """
    search_text: str = ""
    selected_categories: FrozenSet[str] = field(default_factory=frozenset)
    sort_key: SortKey = SortKey.NAME
    sort_direction: SortDirection = SortDirection.ASCENDING

    def with_search_text(self, text: str) -> "QueryState":
        return replace(self, search_text=text or "")

    def with_categories(self, categories: Iterable[str]) -> "QueryState":
        return replace(self, selected_categories=frozenset(categories))

    def toggle_category(self, category: str) -> "QueryState":
        """Add the category to the selection, or remove it if already selected"""
        return replace(self, selected_categories=self.selected_categories ^ {category})

    def toggle_sort(self, key: SortKey) -> "QueryState":
        """Flip direction for the active key; a new key starts ascending"""
        if key != self.sort_key:
            return replace(self, sort_key=key, sort_direction=SortDirection.ASCENDING)
        if self.sort_direction == SortDirection.ASCENDING:
            return replace(self, sort_direction=SortDirection.DESCENDING)
        return replace(self, sort_direction=SortDirection.ASCENDING)


def configure_collation(locale_name: str = "") -> str:
    """
    Set LC_COLLATE used for sorting

    Args:
        locale_name: Locale such as "fr_FR.UTF-8"; empty means the one from the environment

    Returns:
        The collation locale in effect, "C" when the requested one is unavailable
    """
    try:
        return locale.setlocale(locale.LC_COLLATE, locale_name)
    except locale.Error as e:
        logger.warning(f"Collation locale '{locale_name}' unavailable ({e}), falling back to C")
        return locale.setlocale(locale.LC_COLLATE, "C")


def _base_letters(text: str) -> str:
    """Drop combining marks so accented letters rank with their base letter"""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(char for char in decomposed if not unicodedata.combining(char))


def _sort_value(record: Record, key: SortKey) -> Tuple[str, str]:
    value = (getattr(record, key.value) or "").casefold()
    return locale.strxfrm(_base_letters(value)), locale.strxfrm(value)


def matches_text(record: Record, search_text: str) -> bool:
    """Case-insensitive substring match on name, category or area"""
    if not search_text.strip():
        return True
    needle = search_text.casefold()
    return any(
        needle in (value or "").casefold()
        for value in (record.name, record.category, record.area)
    )


def matches_categories(record: Record, categories: FrozenSet[str]) -> bool:
    return not categories or record.category in categories


class QueryEngine:
    """Derive the display collection from a base collection and a QueryState.

    ``query`` is pure: it never mutates ``base`` or the records in it, and
    the same inputs always give the same ordered output. Filters compose by
    conjunction, then a stable sort is applied.
    """

    def query(self, base: Sequence[Record], state: QueryState) -> List[Record]:
        filtered = [
            record for record in base
            if matches_text(record, state.search_text)
            and matches_categories(record, state.selected_categories)
        ]
        # sorted() is stable in both directions, ties keep their base order
        return sorted(
            filtered,
            key=lambda record: _sort_value(record, state.sort_key),
            reverse=state.sort_direction == SortDirection.DESCENDING,
        )


def query(base: Sequence[Record], state: QueryState) -> List[Record]:
    """Module-level shortcut for QueryEngine().query"""
    return QueryEngine().query(base, state)

"""Wraparound previous/next browsing over an ordered collection"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from mealdb.models import Record

logger = logging.getLogger(__name__)


@dataclass
class NavigationState:
    """Current position within a collection"""
    current_id: Optional[str] = None
    current_index: int = 0


class NavigationCursor:
    """Position tracker keyed by record identity.

    The cursor never owns the collection. Every call takes whatever ordering
    the caller holds right now, so moves are always relative to the present
    ordering rather than the one in effect when the record was opened.
    """

    def __init__(self, state: Optional[NavigationState] = None):
        self.state = state or NavigationState()

    @property
    def current_index(self) -> int:
        return self.state.current_index

    @property
    def current_id(self) -> Optional[str]:
        return self.state.current_id

    def resync(self, collection: Sequence[Record], current_id: Optional[str]) -> int:
        """
        Point the cursor at current_id within collection

        Returns:
            The new current index, 0 when current_id is not in collection
        """
        index = 0
        for position, record in enumerate(collection):
            if record.id == current_id:
                index = position
                break
        else:
            if current_id is not None and collection:
                logger.debug(f"Meal {current_id} not in current collection, resetting cursor to 0")

        self.state = NavigationState(current_id=current_id, current_index=index)
        return index

    def previous(self, collection: Sequence[Record]) -> Optional[str]:
        """Step back one record, wrapping to the end; None for an empty collection"""
        return self._step(collection, -1)

    def next(self, collection: Sequence[Record]) -> Optional[str]:
        """Step forward one record, wrapping to the start; None for an empty collection"""
        return self._step(collection, 1)

    def _step(self, collection: Sequence[Record], offset: int) -> Optional[str]:
        if not collection:
            return None

        length = len(collection)
        current = self.state.current_index % length
        for position, record in enumerate(collection):
            if record.id == self.state.current_id:
                current = position
                break

        index = (current + offset + length) % length
        target = collection[index].id
        self.state = NavigationState(current_id=target, current_index=index)
        return target

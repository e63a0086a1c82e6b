"""Failures raised by the MealDB client"""

from typing import Optional


class CatalogError(Exception):
    """Base class for catalog lookup failures"""


class EmptyInput(CatalogError, ValueError):
    """Caller supplied blank text where a value is required"""


class NotFound(CatalogError, ValueError):
    """No record exists for the requested identifier"""

    def __init__(self, record_id: str):
        super().__init__(f"Meal {record_id} not found")
        self.record_id = record_id


class RemoteUnavailable(CatalogError):
    """Transport or protocol failure talking to the catalog API"""

    def __init__(self, endpoint: str, reason: str, cause: Optional[BaseException] = None):
        super().__init__(f"Catalog request to {endpoint} failed: {reason}")
        self.endpoint = endpoint
        self.reason = reason
        self.cause = cause

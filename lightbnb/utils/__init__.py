"""
Utility modules for the LightBnB data-access layer.
"""

from .exceptions import (
    StoreError,
    StoreNotOpenError,
    StoreUnavailableError,
    QueryExecutionError,
    ConstraintViolationError,
    DuplicateRecordError,
)
from .query_builder import (
    ListingQuery,
    ListingQueryBuilder,
    build_listing_query,
    to_minor_units,
)

__all__ = [
    # Exceptions
    "StoreError",
    "StoreNotOpenError",
    "StoreUnavailableError",
    "QueryExecutionError",
    "ConstraintViolationError",
    "DuplicateRecordError",

    # Listing query
    "ListingQuery",
    "ListingQueryBuilder",
    "build_listing_query",
    "to_minor_units",
]

"""
Service layer for the LightBnB data-access operations.
"""

from .listing import ListingService

__all__ = [
    "ListingService",
]

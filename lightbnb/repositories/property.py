"""
Property repository for listing search and property creation.
"""

from lightbnb.repositories.base import BaseRepository
from lightbnb.schemas.property import PropertyCreate, PropertyFilter
from lightbnb.database import StoreHandle
from lightbnb.utils.exceptions import StoreError
from lightbnb.utils.query_builder import build_listing_query
from typing import Any, Dict, List, Mapping, Optional, Union
import logging

logger = logging.getLogger(__name__)

PROPERTY_COLUMNS = (
    "owner_id",
    "title",
    "description",
    "thumbnail_photo_url",
    "cover_photo_url",
    "cost_per_night",
    "street",
    "city",
    "province",
    "post_code",
    "country",
    "parking_spaces",
    "number_of_bathrooms",
    "number_of_bedrooms",
)

INSERT_PROPERTY_SQL = (
    f"INSERT INTO properties ({', '.join(PROPERTY_COLUMNS)})\n"
    f"VALUES ({', '.join(':' + column for column in PROPERTY_COLUMNS)})\n"
    "RETURNING *"
)


class PropertyRepository(BaseRepository):
    """Repository for properties and their aggregated review ratings."""

    def __init__(self, store: StoreHandle):
        super().__init__(store)

    async def list_properties(
        self,
        filters: Optional[Union[PropertyFilter, Mapping[str, Any]]] = None,
        limit: int = 10
    ) -> List[Dict[str, Any]]:
        """
        List reviewed properties matching the filters, cheapest first.

        Properties without any review are not returned.

        Args:
            filters: Optional city, owner, price and rating criteria
            limit: Maximum number of properties to return

        Returns:
            Property rows, each with an ``average_rating`` column
        """
        filters = self.coerce(filters or {}, PropertyFilter)
        query = build_listing_query(filters, limit)
        logger.debug(f"Listing query:\n{query.text}\nparameters={list(query.parameters)} limit={query.limit}")
        try:
            return await self.fetch_all(query.text, query.bind_params())
        except StoreError as e:
            logger.error(f"Failed to list properties: {e}")
            raise

    async def create_property(self, property_data: Union[PropertyCreate, Mapping[str, Any]]) -> List[Dict[str, Any]]:
        """
        Insert a property and read back the created row.

        Args:
            property_data: The 14 property columns

        Returns:
            ``[created row]``

        Raises:
            ConstraintViolationError: If the owner does not exist or a column constraint fails
            StoreError: If the insert fails for any other reason
        """
        property_obj = self.coerce(property_data, PropertyCreate)
        try:
            rows = await self.fetch_all(INSERT_PROPERTY_SQL, property_obj.model_dump(include=set(PROPERTY_COLUMNS)))
            logger.info(f"Created property: {property_obj.title} (ID: {rows[0]['id']})")
            return rows
        except StoreError as e:
            logger.error(f"Failed to create property: {e}")
            raise

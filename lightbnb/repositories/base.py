"""
Base repository class shared by the LightBnB repositories.
Each operation issues a single hand-written statement through the store handle.
"""

from pydantic import BaseModel
from lightbnb.database import StoreHandle
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar, Union
import logging

logger = logging.getLogger(__name__)

SchemaType = TypeVar("SchemaType", bound=BaseModel)


class BaseRepository:
    """
    Base repository holding the injected store handle.
    Store errors are logged and re-raised, never turned into empty results.
    """

    def __init__(self, store: StoreHandle):
        """
        Initialize repository with the shared store handle.

        Args:
            store: Open store handle
        """
        self.store = store

    async def fetch_all(self, sql: str, params: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
        rows = await self.store.fetch_all(sql, params)
        logger.debug(f"{self.__class__.__name__} statement returned {len(rows)} rows")
        return rows

    @staticmethod
    def coerce(record: Union[SchemaType, Mapping[str, Any]], schema: Type[SchemaType]) -> SchemaType:
        """
        Accept either a schema instance or a plain mapping.

        Raises:
            pydantic.ValidationError: If the mapping does not fit the schema
        """
        if isinstance(record, schema):
            return record
        return schema.model_validate(record)

"""
Reservation repository.
Only read access (listing by guest) is provided.
"""

from lightbnb.repositories.base import BaseRepository
from lightbnb.database import StoreHandle
from lightbnb.utils.exceptions import StoreError
from typing import Any, Dict, List, Union
import logging

logger = logging.getLogger(__name__)


class ReservationRepository(BaseRepository):
    """Repository for the reservations table."""

    def __init__(self, store: StoreHandle):
        super().__init__(store)

    async def list_reservations_for_guest(self, guest_id: Union[int, str], limit: int = 10) -> List[Dict[str, Any]]:
        """
        Get a guest's reservations, earliest stay first.

        Args:
            guest_id: ID of the guest user
            limit: Maximum number of reservations to return

        Returns:
            List of reservation rows
        """
        limit = int(limit)
        if limit < 0:
            raise ValueError("limit cannot be negative")
        try:
            return await self.fetch_all(
                "SELECT * FROM reservations\n"
                "WHERE guest_id = :guest_id\n"
                "ORDER BY start_date, id\n"
                "LIMIT :limit",
                {"guest_id": int(guest_id), "limit": limit}
            )
        except StoreError as e:
            logger.error(f"Failed to list reservations for guest {guest_id}: {e}")
            raise

"""
Listing query service.
Exposes the data-access operations used by the web application's routes,
delegating to the repositories over one injected store handle.
"""

from lightbnb.database import StoreHandle
from lightbnb.config import Settings, get_settings
from lightbnb.repositories.user import UserRepository
from lightbnb.repositories.reservation import ReservationRepository
from lightbnb.repositories.property import PropertyRepository
from lightbnb.schemas.user import UserCreate
from lightbnb.schemas.property import PropertyCreate, PropertyFilter
from typing import Any, Dict, List, Mapping, Optional, Union


class ListingService:
    """
    Function-call surface of the data-access layer.
    Not-found is an empty result; store failures propagate as StoreError subclasses.
    """

    def __init__(self, store: StoreHandle, settings: Optional[Settings] = None):
        self.store = store
        self.settings = settings or get_settings()
        self.users = UserRepository(store)
        self.reservations = ReservationRepository(store)
        self.properties = PropertyRepository(store)

    # Users

    async def lookup_user_by_email(self, email: str) -> List[Dict[str, Any]]:
        return await self.users.lookup_user_by_email(email)

    async def lookup_user_by_id(self, user_id: Union[int, str]) -> List[Dict[str, Any]]:
        return await self.users.lookup_user_by_id(user_id)

    async def get_user_with_email(self, email: str) -> Optional[Dict[str, Any]]:
        return await self.users.get_user_with_email(email)

    async def get_user_with_id(self, user_id: Union[int, str]) -> Optional[Dict[str, Any]]:
        return await self.users.get_user_with_id(user_id)

    async def create_user(self, user: Union[UserCreate, Mapping[str, Any]]) -> List[Dict[str, Any]]:
        return await self.users.create_user(user)

    # Reservations

    async def list_reservations_for_guest(
        self,
        guest_id: Union[int, str],
        limit: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        return await self.reservations.list_reservations_for_guest(
            guest_id, limit if limit is not None else self.settings.default_result_limit
        )

    # Properties

    async def list_properties(
        self,
        filters: Optional[Union[PropertyFilter, Mapping[str, Any]]] = None,
        limit: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        return await self.properties.list_properties(
            filters, limit if limit is not None else self.settings.default_result_limit
        )

    async def create_property(self, property_data: Union[PropertyCreate, Mapping[str, Any]]) -> List[Dict[str, Any]]:
        return await self.properties.create_property(property_data)

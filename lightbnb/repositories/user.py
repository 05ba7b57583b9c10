"""
User repository for lookups and registration.
"""

from lightbnb.repositories.base import BaseRepository
from lightbnb.schemas.user import UserCreate
from lightbnb.database import StoreHandle
from lightbnb.utils.exceptions import StoreError, DuplicateRecordError
from typing import Any, Dict, List, Mapping, Optional, Union
import logging

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository):
    """Repository for the users table."""

    def __init__(self, store: StoreHandle):
        super().__init__(store)

    async def lookup_user_by_email(self, email: str) -> List[Dict[str, Any]]:
        """
        Match a user by email, returning only the email column.

        Args:
            email: Email address to search for

        Returns:
            ``[{"email": ...}]`` on a match, ``[]`` otherwise
        """
        try:
            return await self.fetch_all(
                "SELECT email FROM users WHERE email = :email",
                {"email": email}
            )
        except StoreError as e:
            logger.error(f"Failed to look up user by email {email}: {e}")
            raise

    async def lookup_user_by_id(self, user_id: Union[int, str]) -> List[Dict[str, Any]]:
        """
        Match a user by id, returning only the id column.

        Returns:
            ``[{"id": ...}]`` on a match, ``[]`` otherwise
        """
        try:
            return await self.fetch_all(
                "SELECT id FROM users WHERE id = :id",
                {"id": int(user_id)}
            )
        except StoreError as e:
            logger.error(f"Failed to look up user by id {user_id}: {e}")
            raise

    async def get_user_with_email(self, email: str) -> Optional[Dict[str, Any]]:
        """
        Get the full user record for an email address.

        Returns:
            User row with id, name, email and password, or None
        """
        try:
            rows = await self.fetch_all(
                "SELECT id, name, email, password FROM users WHERE email = :email",
                {"email": email}
            )
            return rows[0] if rows else None
        except StoreError as e:
            logger.error(f"Failed to get user with email {email}: {e}")
            raise

    async def get_user_with_id(self, user_id: Union[int, str]) -> Optional[Dict[str, Any]]:
        """Get the full user record for an id, or None."""
        try:
            rows = await self.fetch_all(
                "SELECT id, name, email, password FROM users WHERE id = :id",
                {"id": int(user_id)}
            )
            return rows[0] if rows else None
        except StoreError as e:
            logger.error(f"Failed to get user with id {user_id}: {e}")
            raise

    async def create_user(self, user: Union[UserCreate, Mapping[str, Any]]) -> List[Dict[str, Any]]:
        """
        Insert a user and read back the created row.

        No uniqueness pre-check is made; the store's unique constraint decides.

        Args:
            user: Name, email and (hashed) password

        Returns:
            ``[created row]``

        Raises:
            DuplicateRecordError: If the email is already registered
            StoreError: If the insert fails for any other reason
        """
        user = self.coerce(user, UserCreate)
        try:
            rows = await self.fetch_all(
                "INSERT INTO users (name, email, password)\n"
                "VALUES (:name, :email, :password)\n"
                "RETURNING *",
                user.model_dump()
            )
            logger.info(f"Created user: {user.email} (ID: {rows[0]['id']})")
            return rows
        except DuplicateRecordError:
            logger.error(f"User with email {user.email} already exists")
            raise
        except StoreError as e:
            logger.error(f"Failed to create user: {e}")
            raise

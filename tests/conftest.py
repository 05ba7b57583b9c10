"""
Test configuration and fixtures for the LightBnB data-access layer.
Provides a store handle on a fresh database per test, test data factories, and repository fixtures.
"""

import pytest
import uuid
from datetime import date
from typing import Any, AsyncGenerator, Dict, Optional
from sqlalchemy import event, insert
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool
import os

from lightbnb.config import Settings
from lightbnb.database import StoreHandle
from lightbnb.models import Reservation, PropertyReview
from lightbnb.repositories.user import UserRepository
from lightbnb.repositories.property import PropertyRepository
from lightbnb.repositories.reservation import ReservationRepository
from lightbnb.services.listing import ListingService


# Test database configuration
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite://")


def make_test_engine(url: str = TEST_DATABASE_URL):
    """Create an engine for tests. In-memory SQLite shares one connection."""
    if "sqlite" not in url:
        return create_async_engine(url, echo=False)

    engine = create_async_engine(
        url,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False}
    )

    @event.listens_for(engine.sync_engine, "connect")
    def enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


@pytest.fixture
def test_settings() -> Settings:
    """Settings for the testing environment."""
    return Settings(_env_file=None, environment="testing", database_url=TEST_DATABASE_URL)


@pytest.fixture
async def store(test_settings: Settings) -> AsyncGenerator[StoreHandle, None]:
    """Open store handle with the schema created."""
    handle = StoreHandle(make_test_engine(), settings=test_settings)
    await handle.create_schema()
    await handle.open()
    try:
        yield handle
    finally:
        await handle.drop_schema()
        await handle.close()


# Repository fixtures
@pytest.fixture
def user_repository(store: StoreHandle) -> UserRepository:
    return UserRepository(store)


@pytest.fixture
def property_repository(store: StoreHandle) -> PropertyRepository:
    return PropertyRepository(store)


@pytest.fixture
def reservation_repository(store: StoreHandle) -> ReservationRepository:
    return ReservationRepository(store)


@pytest.fixture
def listing_service(store: StoreHandle, test_settings: Settings) -> ListingService:
    return ListingService(store, settings=test_settings)


# Test data factories
class UserFactory:
    """Factory for creating test users."""

    @staticmethod
    def create_user_data(
        name: str = "Test User",
        email: Optional[str] = None,
        password: str = "$2a$10$FB/BOAVhpuLvpOREQVmvmezD4ED/.JBIDRh70tGevYzYzQgFId2u."
    ) -> Dict[str, Any]:
        return {
            "name": name,
            "email": email or f"test{uuid.uuid4().hex[:8]}@example.com",
            "password": password,
        }

    @staticmethod
    async def create_user(user_repo: UserRepository, **kwargs) -> Dict[str, Any]:
        """Create a test user in the database and return its row."""
        rows = await user_repo.create_user(UserFactory.create_user_data(**kwargs))
        return rows[0]


class PropertyFactory:
    """Factory for creating test properties."""

    @staticmethod
    def create_property_data(
        owner_id: int,
        title: str = "Speed lamp",
        cost_per_night: int = 10000,
        city: str = "Vancouver",
        **overrides
    ) -> Dict[str, Any]:
        data = {
            "owner_id": owner_id,
            "title": title,
            "description": "description",
            "thumbnail_photo_url": "https://images.pexels.com/photos/2086676/pexels-photo-2086676.jpeg?auto=compress&cs=tinysrgb&h=350",
            "cover_photo_url": "https://images.pexels.com/photos/2086676/pexels-photo-2086676.jpeg",
            "cost_per_night": cost_per_night,
            "street": "536 Namsub Highway",
            "city": city,
            "province": "British Columbia",
            "post_code": "28142",
            "country": "Canada",
            "parking_spaces": 2,
            "number_of_bathrooms": 1,
            "number_of_bedrooms": 3,
        }
        data.update(overrides)
        return data

    @staticmethod
    async def create_property(property_repo: PropertyRepository, owner_id: int, **kwargs) -> Dict[str, Any]:
        """Create a test property in the database and return its row."""
        rows = await property_repo.create_property(PropertyFactory.create_property_data(owner_id, **kwargs))
        return rows[0]


async def insert_row(store: StoreHandle, table, values: Dict[str, Any]) -> Dict[str, Any]:
    """Insert through the table definition so dates are converted for the dialect."""
    async with store.engine.begin() as conn:
        result = await conn.execute(insert(table).values(**values).returning(*table.c))
        return dict(result.mappings().one())


class ReservationFactory:
    """Factory for reservations. The data-access layer has no insert for these."""

    @staticmethod
    async def create_reservation(
        store: StoreHandle,
        guest_id: int,
        property_id: int,
        start_date: date = date(2018, 9, 11),
        end_date: date = date(2018, 9, 26)
    ) -> Dict[str, Any]:
        return await insert_row(store, Reservation.__table__, {
            "guest_id": guest_id,
            "property_id": property_id,
            "start_date": start_date,
            "end_date": end_date,
        })


class ReviewFactory:
    """Factory for property reviews, each backed by its own reservation."""

    @staticmethod
    async def create_review(
        store: StoreHandle,
        guest_id: int,
        property_id: int,
        rating: int,
        message: str = "messages"
    ) -> Dict[str, Any]:
        reservation = await ReservationFactory.create_reservation(store, guest_id, property_id)
        return await insert_row(store, PropertyReview.__table__, {
            "guest_id": guest_id,
            "property_id": property_id,
            "reservation_id": reservation["id"],
            "rating": rating,
            "message": message,
        })


# Common test fixtures
@pytest.fixture
async def test_owner(user_repository: UserRepository) -> Dict[str, Any]:
    return await UserFactory.create_user(user_repository, name="Devin Sanders", email="owner@test.com")


@pytest.fixture
async def test_guest(user_repository: UserRepository) -> Dict[str, Any]:
    return await UserFactory.create_user(user_repository, name="Eliza Wilson", email="guest@test.com")


@pytest.fixture
async def listed_properties(
    store: StoreHandle,
    property_repository: PropertyRepository,
    test_owner: Dict[str, Any],
    test_guest: Dict[str, Any]
) -> Dict[str, Dict[str, Any]]:
    """
    Three reviewed properties and one without reviews.

    cheap:    Toronto,   $50.00,  ratings 2        (owner)
    mid:      Vancouver, $100.00, ratings 4, 5     (owner)
    pricey:   Vancouver, $250.00, ratings 3, 3, 3  (second owner)
    unrated:  Vancouver, $10.00,  no reviews       (owner)
    """
    second_owner = await UserFactory.create_user(UserRepository(store), name="Second Owner", email="second@test.com")

    cheap = await PropertyFactory.create_property(property_repository, test_owner["id"], title="Cheap", cost_per_night=5000, city="Toronto")
    mid = await PropertyFactory.create_property(property_repository, test_owner["id"], title="Mid", cost_per_night=10000, city="Vancouver")
    pricey = await PropertyFactory.create_property(property_repository, second_owner["id"], title="Pricey", cost_per_night=25000, city="North Vancouver")
    unrated = await PropertyFactory.create_property(property_repository, test_owner["id"], title="Unrated", cost_per_night=1000, city="Vancouver")

    for property_row, ratings in ((cheap, [2]), (mid, [4, 5]), (pricey, [3, 3, 3])):
        for rating in ratings:
            await ReviewFactory.create_review(store, test_guest["id"], property_row["id"], rating)

    return {"cheap": cheap, "mid": mid, "pricey": pricey, "unrated": unrated, "second_owner": second_owner}

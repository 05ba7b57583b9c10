"""
Pydantic schemas for property records and listing filters.
Filters accept the snake_case form field names as well as camelCase keys.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional
from decimal import Decimal


class PropertyCreate(BaseModel):
    """
    Schema for inserting a property.
    Carries the 14 columns written by the insert; bounds are left to the store.
    """

    owner_id: int = Field(..., description="ID of the owning user")
    title: str
    description: Optional[str] = None
    thumbnail_photo_url: str
    cover_photo_url: str
    cost_per_night: int = Field(..., description="Nightly price in minor currency units")
    street: str
    city: str
    province: str
    post_code: str
    country: str
    parking_spaces: int = 0
    number_of_bathrooms: int = 0
    number_of_bedrooms: int = 0

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "owner_id": 1,
                "title": "Speed lamp",
                "description": "description",
                "thumbnail_photo_url": "https://images.pexels.com/photos/2086676/pexels-photo-2086676.jpeg",
                "cover_photo_url": "https://images.pexels.com/photos/2086676/pexels-photo-2086676.jpeg",
                "cost_per_night": 93061,
                "street": "536 Namsub Highway",
                "city": "Sotboske",
                "province": "Quebec",
                "post_code": "28142",
                "country": "Canada",
                "parking_spaces": 6,
                "number_of_bathrooms": 4,
                "number_of_bedrooms": 8,
            }
        }
    )


class PropertyFilter(BaseModel):
    """Optional criteria for listing properties, combined with AND."""

    city: Optional[str] = Field(None, description="Substring of the city name")
    owner_id: Optional[int] = Field(None, description="Exact owning user ID")
    minimum_price_per_night: Optional[Decimal] = Field(None, description="Inclusive lower bound, major units")
    maximum_price_per_night: Optional[Decimal] = Field(None, description="Inclusive upper bound, major units")
    minimum_rating: Optional[float] = Field(None, description="Inclusive lower bound on the average rating")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        """Unfilled form fields arrive as empty strings."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def is_empty(self) -> bool:
        return all(value is None for value in self.model_dump().values())

"""
Property and property review table definitions.
Prices are stored in minor currency units (cents).
"""

from sqlalchemy import String, Text, Integer, SmallInteger, Boolean, ForeignKey, Index, text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from lightbnb.database import Base
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from lightbnb.models.user import User
    from lightbnb.models.reservation import Reservation


class Property(Base):
    """
    A rentable unit owned by a user.
    Includes descriptive fields, nightly price, address and capacity attributes.
    """

    __tablename__ = "properties"

    owner_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="ID of the user who owns this property"
    )

    # Descriptive fields
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    thumbnail_photo_url: Mapped[str] = mapped_column(String(255), nullable=False)
    cover_photo_url: Mapped[str] = mapped_column(String(255), nullable=False)

    cost_per_night: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        server_default=text("0"),
        index=True,
        comment="Nightly price in minor currency units"
    )

    # Capacity attributes
    parking_spaces: Mapped[int] = mapped_column(Integer, nullable=False, server_default=text("0"))
    number_of_bathrooms: Mapped[int] = mapped_column(Integer, nullable=False, server_default=text("0"))
    number_of_bedrooms: Mapped[int] = mapped_column(Integer, nullable=False, server_default=text("0"))

    # Address fields
    country: Mapped[str] = mapped_column(String(255), nullable=False)
    street: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    province: Mapped[str] = mapped_column(String(255), nullable=False)
    post_code: Mapped[str] = mapped_column(String(255), nullable=False)

    active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        server_default=text("true"),
        comment="Whether the listing is active"
    )

    # Relationships
    owner: Mapped["User"] = relationship("User", back_populates="properties")

    reviews: Mapped[List["PropertyReview"]] = relationship(
        "PropertyReview",
        back_populates="property_rel",
        cascade="all, delete-orphan"
    )

    reservations: Mapped[List["Reservation"]] = relationship(
        "Reservation",
        back_populates="property_rel",
        cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Property(id={self.id}, title={self.title[:30]}, cost_per_night={self.cost_per_night})>"


class PropertyReview(Base):
    """A guest's rating of a property, tied to the reservation it came from."""

    __tablename__ = "property_reviews"

    guest_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False
    )

    property_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    reservation_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("reservations.id", ondelete="CASCADE"),
        nullable=False
    )

    rating: Mapped[int] = mapped_column(SmallInteger, nullable=False, server_default=text("0"))
    message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    property_rel: Mapped["Property"] = relationship("Property", back_populates="reviews")


# Composite index for the listing filters
Index("idx_properties_city_cost", Property.city, Property.cost_per_night)

"""
Reservation table definition.
Links a guest user to a property for a stay.
"""

from sqlalchemy import Date, Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from lightbnb.database import Base
from datetime import date
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lightbnb.models.user import User
    from lightbnb.models.property import Property


class Reservation(Base):
    __tablename__ = "reservations"

    start_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)

    property_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False
    )

    guest_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    guest: Mapped["User"] = relationship("User", back_populates="reservations")
    property_rel: Mapped["Property"] = relationship("Property", back_populates="reservations")

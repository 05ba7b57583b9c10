"""
Table definitions for the LightBnB schema.
Includes User, Property, PropertyReview, and Reservation.
"""

from lightbnb.models.user import User
from lightbnb.models.property import Property, PropertyReview
from lightbnb.models.reservation import Reservation

__all__ = [
    "User",
    "Property",
    "PropertyReview",
    "Reservation",
]

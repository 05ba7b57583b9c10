"""
Pydantic schemas for record and filter validation.
"""

from .user import UserCreate
from .property import PropertyCreate, PropertyFilter

__all__ = [
    "UserCreate",
    "PropertyCreate",
    "PropertyFilter",
]

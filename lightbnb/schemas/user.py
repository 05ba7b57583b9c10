"""
Pydantic schemas for user records.
"""

from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    """Schema for inserting a user. The password arrives already hashed."""

    name: str = Field(..., description="User's display name", examples=["Devin Sanders"])
    email: str = Field(..., description="User's email address", examples=["sebastianguerra@ymail.com"])
    password: str = Field(..., description="Hashed password")

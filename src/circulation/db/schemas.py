"""Pydantic schemas for data validation.

These schemas describe catalog items and registered users as they cross the
boundary between the database layer and the rest of the application.
"""

from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator


class ItemCategory(str, Enum):
    """Kind of circulating item."""

    BOOK = "book"
    AUDIO_VIDEO = "audio_video"
    REFERENCE = "reference"


# ============================================================================
# Item Schemas
# ============================================================================


class ItemBase(BaseModel):
    """Base item fields."""

    id: str = Field(..., min_length=1, max_length=50)
    title: str = Field(..., min_length=1, max_length=500)
    creator: str = Field(..., min_length=1, max_length=500)
    category: ItemCategory = ItemCategory.BOOK
    value: float = Field(..., ge=0)


class ItemCreate(ItemBase):
    """Schema for adding an item to the catalog.

    Only books carry their own renewal policy. Audio/video items and
    reference books are never renewable.
    """

    renewable: bool = False

    @model_validator(mode="after")
    def apply_category_policy(self) -> "ItemCreate":
        """Force the renewal flag for categories with a fixed policy."""
        if self.category != ItemCategory.BOOK:
            self.renewable = False
        return self


class ItemResponse(ItemBase):
    """Schema for item responses."""

    renewable: bool
    available: bool
    due_date: Optional[date] = None
    holder_card: Optional[str] = None

    model_config = {"from_attributes": True}


# ============================================================================
# User Schemas
# ============================================================================


class UserBase(BaseModel):
    """Base user fields."""

    name: str = Field(..., min_length=1, max_length=200)
    address: str = Field(..., min_length=1, max_length=500)
    phone_number: str = Field(..., min_length=1, max_length=50)


class UserCreate(UserBase):
    """Schema for registering a user."""

    pass


class UserResponse(UserBase):
    """Schema for user responses."""

    card_number: str
    user_id: str
    checked_out_items: list[ItemResponse] = []
    created_at: datetime

    model_config = {"from_attributes": True}

"""Database module for in-memory circulation storage."""

from .models import Base, Item, User
from .schemas import (
    ItemCategory,
    ItemCreate,
    ItemResponse,
    UserCreate,
    UserResponse,
)
from .sqlite import Database

__all__ = [
    "Base",
    "Item",
    "User",
    "ItemCategory",
    "ItemCreate",
    "ItemResponse",
    "UserCreate",
    "UserResponse",
    "Database",
]

"""Catalog and user registry module."""

from .registry import SEED_ITEMS, Catalog

__all__ = [
    "Catalog",
    "SEED_ITEMS",
]

"""Pytest configuration and shared fixtures.

This module provides fixtures for testing the circulation desk, including a
fresh in-memory library per test and sample users and items.
"""

from decimal import Decimal
from typing import Generator

import pytest

from circulation.config import Config, reset_config
from circulation.db.schemas import ItemCategory, ItemCreate, ItemResponse, UserCreate, UserResponse
from circulation.library import Library, reset_library


# ============================================================================
# Library Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def reset_globals() -> Generator[None, None, None]:
    """Reset module-level singletons around each test."""
    reset_config()
    reset_library()
    yield
    reset_config()
    reset_library()


@pytest.fixture
def config() -> Config:
    """Lending policy used by the tests."""
    return Config(
        loan_period_days=14,
        checkout_limit=3,
        fine_per_day=Decimal("0.10"),
        starting_card_number=1000,
        log_level="WARNING",
    )


@pytest.fixture
def library(config: Config) -> Library:
    """Create an empty in-memory library."""
    return Library(config=config)


@pytest.fixture
def catalog(library: Library):
    """Catalog of the test library."""
    return library.catalog


@pytest.fixture
def queue(library: Library):
    """Reservation queue of the test library."""
    return library.queue


@pytest.fixture
def lending(library: Library):
    """Lending service of the test library."""
    return library.lending


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def alice(catalog) -> UserResponse:
    """Register a sample user."""
    return catalog.register_user(
        UserCreate(name="Alice Smith", address="1 Elm St", phone_number="555-0101")
    )


@pytest.fixture
def bob(catalog) -> UserResponse:
    """Register a second sample user."""
    return catalog.register_user(
        UserCreate(name="Bob Jones", address="2 Oak Ave", phone_number="555-0102")
    )


@pytest.fixture
def book(catalog) -> ItemResponse:
    """Add a renewable book."""
    return catalog.add_item(
        ItemCreate(
            id="BK001",
            title="Dune",
            creator="Frank Herbert",
            category=ItemCategory.BOOK,
            renewable=True,
            value=5.00,
        )
    )


@pytest.fixture
def fixed_book(catalog) -> ItemResponse:
    """Add a book that cannot be renewed."""
    return catalog.add_item(
        ItemCreate(
            id="BK002",
            title="Emma",
            creator="Jane Austen",
            category=ItemCategory.BOOK,
            renewable=False,
            value=2.00,
        )
    )


@pytest.fixture
def many_books(catalog) -> list[ItemResponse]:
    """Add several renewable books."""
    return [
        catalog.add_item(
            ItemCreate(
                id=f"BK1{i:02d}",
                title=f"Book {i}",
                creator=f"Author {i}",
                renewable=True,
                value=10.00,
            )
        )
        for i in range(5)
    ]

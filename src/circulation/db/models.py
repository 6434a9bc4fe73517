"""SQLAlchemy ORM models for the in-memory circulation database.

Tables:
- items: Circulating catalog items and their loan state
- users: Registered borrowers
"""

from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Float,
    ForeignKey,
    String,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from .schemas import ItemCategory


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


def utc_now() -> str:
    """Current UTC timestamp as an ISO string."""
    return datetime.now(timezone.utc).isoformat()


class Item(Base):
    """Item model - a loanable unit and its availability state."""

    __tablename__ = "items"
    __table_args__ = (
        CheckConstraint(
            "(available = 1 AND due_date IS NULL AND holder_card IS NULL)"
            " OR (available = 0 AND due_date IS NOT NULL)",
            name="ck_items_available_due_date",
        ),
        CheckConstraint("value >= 0", name="ck_items_value_non_negative"),
    )

    id: Mapped[str] = mapped_column(String(50), primary_key=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False, index=True)
    creator: Mapped[str] = mapped_column(String(500), nullable=False)
    category: Mapped[str] = mapped_column(
        String(20), default=ItemCategory.BOOK.value, nullable=False
    )
    renewable: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    value: Mapped[float] = mapped_column(Float, nullable=False)

    # Loan state
    available: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    due_date: Mapped[Optional[str]] = mapped_column(String(10))  # ISO date
    holder_card: Mapped[Optional[str]] = mapped_column(
        String(20),
        ForeignKey("users.card_number"),
        index=True,
    )

    # Timestamps
    created_at: Mapped[str] = mapped_column(String(32), default=utc_now)
    updated_at: Mapped[str] = mapped_column(String(32), default=utc_now, onupdate=utc_now)

    # Relationships
    holder: Mapped[Optional["User"]] = relationship(
        "User", back_populates="checked_out_items"
    )

    def __repr__(self) -> str:
        return f"<Item(id='{self.id}', title='{self.title}', available={self.available})>"

    @property
    def due(self) -> Optional[date]:
        """Due date as a date object."""
        if not self.due_date:
            return None
        return date.fromisoformat(self.due_date)

    def check_out(self, holder: "User", due: date) -> None:
        """Hand the item to a holder until the given date."""
        self.available = False
        self.due_date = due.isoformat()
        self.holder = holder

    def check_in(self) -> None:
        """Put the item back on the shelf."""
        self.available = True
        self.due_date = None
        self.holder = None

    def extend(self, due: date) -> None:
        """Move the due date of an item that is on loan."""
        self.due_date = due.isoformat()


class User(Base):
    """User model - a borrower holding a bounded set of items."""

    __tablename__ = "users"

    card_number: Mapped[str] = mapped_column(String(20), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(10), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    address: Mapped[str] = mapped_column(String(500), nullable=False)
    phone_number: Mapped[str] = mapped_column(String(50), nullable=False)

    # Timestamps
    created_at: Mapped[str] = mapped_column(String(32), default=utc_now)

    # Relationships
    checked_out_items: Mapped[list["Item"]] = relationship(
        "Item", back_populates="holder", order_by="Item.id"
    )

    def __repr__(self) -> str:
        return f"<User(card_number='{self.card_number}', name='{self.name}')>"

    def can_check_out(self, limit: int) -> bool:
        """Check whether the user is under the checkout limit."""
        return len(self.checked_out_items) < limit

    def holds(self, item: Item) -> bool:
        """Check whether the user currently holds the item."""
        return item.holder is self

"""Pydantic schemas for fine assessments."""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel


class ItemFine(BaseModel):
    """Fine owed for one overdue item."""

    item_id: str
    title: str
    due_date: date
    overdue_days: int
    amount: Decimal
    capped: bool  # Fine reached the item's replacement value


class FineAssessment(BaseModel):
    """Fines owed by one user on a given day.

    ``found`` is False when the card number did not resolve, which keeps an
    unknown user apart from a user who simply owes nothing.
    """

    card_number: str
    found: bool = True
    assessed_on: date
    total: Decimal = Decimal("0.00")
    items: list[ItemFine] = []
    message: Optional[str] = None

    @property
    def owes(self) -> bool:
        """Check whether anything is owed."""
        return self.total > 0

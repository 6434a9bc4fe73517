"""Pydantic schemas for lending operations."""

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel


class LendingOperation(str, Enum):
    """Operation performed at the desk."""

    CHECKOUT = "checkout"
    RETURN = "return"
    RENEW = "renew"
    REQUEST = "request"


class LendingOutcome(str, Enum):
    """Result of a lending operation."""

    OK = "ok"
    ENTITY_NOT_FOUND = "entity_not_found"
    ITEM_UNAVAILABLE = "item_unavailable"
    CHECKOUT_LIMIT_REACHED = "checkout_limit_reached"
    OUTSTANDING_REQUEST_EXISTS = "outstanding_request_exists"
    NOT_RENEWABLE = "not_renewable"
    REQUEST_UNNECESSARY = "request_unnecessary"


OUTCOME_MESSAGES: dict[LendingOutcome, str] = {
    LendingOutcome.ENTITY_NOT_FOUND: "Item or user not found.",
    LendingOutcome.ITEM_UNAVAILABLE: "Item is not available.",
    LendingOutcome.CHECKOUT_LIMIT_REACHED: "User has reached their checkout limit.",
    LendingOutcome.OUTSTANDING_REQUEST_EXISTS: (
        "Item has an outstanding request and cannot be checked out or renewed."
    ),
    LendingOutcome.NOT_RENEWABLE: "Item cannot be renewed.",
    LendingOutcome.REQUEST_UNNECESSARY: (
        "Item is available and does not need to be requested."
    ),
}

SUCCESS_MESSAGES: dict[LendingOperation, str] = {
    LendingOperation.CHECKOUT: "Item checked out successfully.",
    LendingOperation.RETURN: "Item returned successfully.",
    LendingOperation.RENEW: "Item renewed successfully.",
    LendingOperation.REQUEST: "Item requested successfully.",
}


class LendingResult(BaseModel):
    """Outcome of one checkout, return, renewal or request."""

    operation: LendingOperation
    outcome: LendingOutcome
    card_number: str
    item_id: str
    due_date: Optional[date] = None
    message: str

    @property
    def ok(self) -> bool:
        """Check whether the operation went through."""
        return self.outcome == LendingOutcome.OK

    @classmethod
    def success(
        cls,
        operation: LendingOperation,
        card_number: str,
        item_id: str,
        due_date: Optional[date] = None,
    ) -> "LendingResult":
        """Build a successful result."""
        return cls(
            operation=operation,
            outcome=LendingOutcome.OK,
            card_number=card_number,
            item_id=item_id,
            due_date=due_date,
            message=SUCCESS_MESSAGES[operation],
        )

    @classmethod
    def refused(
        cls,
        operation: LendingOperation,
        outcome: LendingOutcome,
        card_number: str,
        item_id: str,
    ) -> "LendingResult":
        """Build a result for a refused operation."""
        return cls(
            operation=operation,
            outcome=outcome,
            card_number=card_number,
            item_id=item_id,
            message=OUTCOME_MESSAGES[outcome],
        )

"""Overdue fine computation.

Fines are derived from due dates alone. Nothing here reads or writes the
database.
"""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from ..db.schemas import UserResponse
from ..exceptions import InconsistentStateError
from .schemas import FineAssessment, ItemFine

CENTS = Decimal("0.01")
DEFAULT_FINE_PER_DAY = Decimal("0.10")


def to_money(amount: Decimal) -> Decimal:
    """Round an amount to whole cents."""
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def calculate_fines(
    user: UserResponse,
    today: date,
    fine_per_day: Decimal = DEFAULT_FINE_PER_DAY,
) -> FineAssessment:
    """Compute what a user owes for overdue items.

    Each item overdue by N whole days costs ``fine_per_day * N``, capped at
    the item's replacement value. The per-item fines are summed with no cap
    on the total. Items not yet past due contribute nothing.

    Args:
        user: User with the items they currently hold
        today: Day the fines are assessed on
        fine_per_day: Charge per overdue day

    Returns:
        Assessment with a per-item breakdown

    Raises:
        InconsistentStateError: If a held item has no due date
    """
    fines: list[ItemFine] = []
    total = Decimal("0")

    for item in user.checked_out_items:
        if item.due_date is None:
            raise InconsistentStateError(
                f"Item {item.id} is held by {user.card_number} but has no due date"
            )
        if item.due_date >= today:
            continue

        overdue_days = (today - item.due_date).days
        value = Decimal(str(item.value))
        amount = min(fine_per_day * overdue_days, value)
        fines.append(
            ItemFine(
                item_id=item.id,
                title=item.title,
                due_date=item.due_date,
                overdue_days=overdue_days,
                amount=to_money(amount),
                capped=amount == value,
            )
        )
        total += amount

    return FineAssessment(
        card_number=user.card_number,
        assessed_on=today,
        total=to_money(total),
        items=fines,
    )

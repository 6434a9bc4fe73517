"""Tests for fine calculation."""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from circulation.db.schemas import ItemResponse, UserResponse
from circulation.exceptions import InconsistentStateError
from circulation.fines.calculator import calculate_fines, to_money


TODAY = date(2025, 3, 10)


def make_item(item_id: str, due_days_ago: int, value: float) -> ItemResponse:
    """Build a held item due the given number of days ago."""
    return ItemResponse(
        id=item_id,
        title=f"Title {item_id}",
        creator="Author",
        value=value,
        renewable=True,
        available=False,
        due_date=TODAY - timedelta(days=due_days_ago),
        holder_card="1000",
    )


def make_user(*items: ItemResponse) -> UserResponse:
    """Build a user holding the given items."""
    return UserResponse(
        card_number="1000",
        user_id="0001",
        name="Alice",
        address="1 Elm St",
        phone_number="555-0101",
        checked_out_items=list(items),
        created_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
    )


class TestCalculateFines:
    """Tests for the pure fine calculation."""

    def test_five_days_overdue(self):
        """Test ten cents per overdue day."""
        result = calculate_fines(make_user(make_item("RB001", 5, 2.00)), TODAY)

        assert result.total == Decimal("0.50")
        assert result.items[0].overdue_days == 5
        assert result.items[0].capped is False

    def test_fine_capped_at_value(self):
        """Test an item's fine never exceeds its value."""
        result = calculate_fines(make_user(make_item("RB001", 25, 2.00)), TODAY)

        assert result.total == Decimal("2.00")
        assert result.items[0].capped is True

    def test_due_today_not_overdue(self):
        """Test an item due today costs nothing."""
        result = calculate_fines(make_user(make_item("BK001", 0, 5.00)), TODAY)

        assert result.total == Decimal("0")
        assert result.items == []

    def test_not_yet_due(self):
        """Test an item due in the future costs nothing."""
        result = calculate_fines(make_user(make_item("BK001", -3, 5.00)), TODAY)
        assert result.total == Decimal("0")

    def test_total_sums_items_without_cap(self):
        """Test the total is the sum of per-item fines."""
        user = make_user(
            make_item("RB001", 25, 2.00),  # capped at 2.00
            make_item("BK001", 3, 5.00),  # 0.30
            make_item("BK002", -1, 5.00),  # not overdue
            make_item("AV001", 200, 15.00),  # capped at 15.00
        )

        result = calculate_fines(user, TODAY)

        assert result.total == Decimal("17.30")
        assert [f.item_id for f in result.items] == ["RB001", "BK001", "AV001"]

    def test_no_items(self):
        """Test a user holding nothing owes nothing."""
        result = calculate_fines(make_user(), TODAY)

        assert result.found is True
        assert result.total == Decimal("0")
        assert not result.owes

    def test_custom_rate(self):
        """Test a different daily rate."""
        result = calculate_fines(
            make_user(make_item("BK001", 4, 10.00)), TODAY, fine_per_day=Decimal("0.25")
        )
        assert result.total == Decimal("1.00")

    def test_does_not_mutate_user(self):
        """Test the calculation leaves its input untouched."""
        user = make_user(make_item("RB001", 25, 2.00))
        before = user.model_copy(deep=True)

        calculate_fines(user, TODAY)

        assert user == before

    def test_held_item_without_due_date(self):
        """Test a held item with no due date is an inconsistency."""
        item = make_item("BK001", 1, 5.00).model_copy(update={"due_date": None})

        with pytest.raises(InconsistentStateError):
            calculate_fines(make_user(item), TODAY)


class TestToMoney:
    """Tests for cent rounding."""

    def test_rounds_half_up(self):
        """Test half a cent rounds up."""
        assert to_money(Decimal("0.125")) == Decimal("0.13")


class TestServiceFines:
    """Tests for fines through the lending service."""

    def test_unknown_user_is_distinguishable(self, lending):
        """Test an unknown card reports not found with a zero total."""
        result = lending.calculate_fines("9999", today=TODAY)

        assert result.found is False
        assert result.total == Decimal("0")
        assert result.message == "User not found."

    def test_known_user_with_no_fines(self, lending, alice):
        """Test a registered user with nothing overdue."""
        result = lending.calculate_fines(alice.card_number, today=TODAY)

        assert result.found is True
        assert result.total == Decimal("0")

    def test_overdue_checkout(self, lending, alice, fixed_book):
        """Test fines accrue on items checked out through the desk."""
        lending.checkout(alice.card_number, fixed_book.id, today=TODAY)
        later = TODAY + timedelta(days=14 + 5)

        result = lending.calculate_fines(alice.card_number, today=later)

        assert result.total == Decimal("0.50")

        much_later = TODAY + timedelta(days=14 + 25)
        assert lending.calculate_fines(alice.card_number, today=much_later).total == Decimal("2.00")

    def test_returned_item_owes_nothing(self, lending, alice, fixed_book):
        """Test only held items are fined."""
        lending.checkout(alice.card_number, fixed_book.id, today=TODAY)
        lending.return_item(alice.card_number, fixed_book.id)

        result = lending.calculate_fines(alice.card_number, today=TODAY + timedelta(days=40))

        assert result.total == Decimal("0")

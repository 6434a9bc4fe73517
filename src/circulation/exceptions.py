"""Exceptions raised by the circulation package.

Expected lending refusals are reported as LendingOutcome values, not raised.
These exceptions cover catalog maintenance mistakes and state that should
never occur.
"""


class CirculationError(Exception):
    """Base exception for circulation errors."""

    pass


class DuplicateUserError(CirculationError, ValueError):
    """A user with the same name, address and phone is already registered."""

    pass


class DuplicateItemError(CirculationError, ValueError):
    """An item with the same id is already in the catalog."""

    def __init__(self, item_id: str):
        self.item_id = item_id
        super().__init__(f"Item already exists: {item_id}")


class InconsistentStateError(CirculationError):
    """Stored loan state violates an invariant."""

    pass

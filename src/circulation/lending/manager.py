"""Lending service for checkout, return, renewal and request operations."""

from datetime import date, timedelta
from typing import Optional

from ..app_logger import get_logger
from ..catalog.registry import Catalog
from ..config import Config, get_config
from ..db.sqlite import Database
from ..fines.calculator import calculate_fines
from ..fines.schemas import FineAssessment
from ..reservations.queue import ReservationQueue
from .schemas import LendingOperation, LendingOutcome, LendingResult

logger = get_logger(__name__)


class LendingService:
    """Applies the item lending state machine.

    An item is either available or checked out with a due date. Every
    operation resolves the user and item, checks its gates against the
    reservation queue, and applies the transition inside a single session,
    so each operation is one transaction.
    """

    def __init__(
        self,
        db: Database,
        catalog: Catalog,
        queue: ReservationQueue,
        config: Optional[Config] = None,
    ):
        """Initialize lending service.

        Args:
            db: Database instance
            catalog: Item and user lookup
            queue: Reservation queue shared with the rest of the library
            config: Lending policy, defaults to the global config
        """
        self.db = db
        self.catalog = catalog
        self.queue = queue
        self.config = config or get_config()

    @property
    def loan_period(self) -> timedelta:
        """Length of a loan or renewal."""
        return timedelta(days=self.config.loan_period_days)

    def _refuse(
        self,
        operation: LendingOperation,
        outcome: LendingOutcome,
        card_number: str,
        item_id: str,
    ) -> LendingResult:
        logger.info(
            "%s of %s by %s refused: %s",
            operation.value,
            item_id,
            card_number,
            outcome.value,
        )
        return LendingResult.refused(operation, outcome, card_number, item_id)

    # -------------------------------------------------------------------------
    # State transitions
    # -------------------------------------------------------------------------

    def checkout(
        self,
        card_number: str,
        item_id: str,
        today: Optional[date] = None,
    ) -> LendingResult:
        """Check an item out to a user.

        Refused when either entity is missing, when any request is
        outstanding on the item (even one placed by this same user), when
        the item is already out, or when the user is at the checkout limit.

        Args:
            card_number: Borrower's card number
            item_id: Item to check out
            today: Day of the checkout, defaults to today

        Returns:
            Result carrying the new due date on success
        """
        op = LendingOperation.CHECKOUT
        today = today or date.today()

        with self.db.get_session() as session:
            user = self.catalog.find_user(session, card_number)
            item = self.catalog.find_item(session, item_id)

            if user is None or item is None:
                return self._refuse(op, LendingOutcome.ENTITY_NOT_FOUND, card_number, item_id)
            if self.queue.has_outstanding(item_id, session=session):
                return self._refuse(
                    op, LendingOutcome.OUTSTANDING_REQUEST_EXISTS, card_number, item_id
                )
            if not item.available:
                return self._refuse(op, LendingOutcome.ITEM_UNAVAILABLE, card_number, item_id)
            if not user.can_check_out(self.config.checkout_limit):
                return self._refuse(
                    op, LendingOutcome.CHECKOUT_LIMIT_REACHED, card_number, item_id
                )

            due = today + self.loan_period
            item.check_out(user, due)

        logger.info("%s checked out to %s, due %s", item_id, card_number, due)
        return LendingResult.success(op, card_number, item_id, due_date=due)

    def return_item(self, card_number: str, item_id: str) -> LendingResult:
        """Return an item to the shelf.

        The return is not checked against the item's holder. Returning an
        item that is already available is accepted and changes nothing, so
        repeating a return is harmless.

        Args:
            card_number: Card number of the user returning the item
            item_id: Item being returned

        Returns:
            Result of the return
        """
        op = LendingOperation.RETURN

        with self.db.get_session() as session:
            user = self.catalog.find_user(session, card_number)
            item = self.catalog.find_item(session, item_id)

            if user is None or item is None:
                return self._refuse(op, LendingOutcome.ENTITY_NOT_FOUND, card_number, item_id)

            if item.available:
                logger.debug("%s returned by %s while already available", item_id, card_number)
            else:
                if not user.holds(item):
                    logger.warning(
                        "%s returned by %s but held by %s",
                        item_id,
                        card_number,
                        item.holder_card,
                    )
                item.check_in()

        logger.info("%s returned by %s", item_id, card_number)
        return LendingResult.success(op, card_number, item_id)

    def renew(
        self,
        card_number: str,
        item_id: str,
        today: Optional[date] = None,
    ) -> LendingResult:
        """Renew an item for another loan period starting today.

        The new due date counts from today, not from the old due date.
        Renewal is not checked against the item's holder. Renewing an item
        that is not checked out is accepted and changes nothing.

        Args:
            card_number: Card number of the user renewing
            item_id: Item to renew
            today: Day of the renewal, defaults to today

        Returns:
            Result carrying the new due date when one was set
        """
        op = LendingOperation.RENEW
        today = today or date.today()
        due: Optional[date] = None

        with self.db.get_session() as session:
            user = self.catalog.find_user(session, card_number)
            item = self.catalog.find_item(session, item_id)

            if user is None or item is None:
                return self._refuse(op, LendingOutcome.ENTITY_NOT_FOUND, card_number, item_id)
            if not item.renewable:
                return self._refuse(op, LendingOutcome.NOT_RENEWABLE, card_number, item_id)
            if self.queue.has_outstanding(item_id, session=session):
                return self._refuse(
                    op, LendingOutcome.OUTSTANDING_REQUEST_EXISTS, card_number, item_id
                )

            if item.available:
                logger.warning("%s renewed by %s but is not checked out", item_id, card_number)
            else:
                if not user.holds(item):
                    logger.warning(
                        "%s renewed by %s but held by %s",
                        item_id,
                        card_number,
                        item.holder_card,
                    )
                due = today + self.loan_period
                item.extend(due)

        logger.info("%s renewed by %s, due %s", item_id, card_number, due)
        return LendingResult.success(op, card_number, item_id, due_date=due)

    def request_item(self, card_number: str, item_id: str) -> LendingResult:
        """Place a hold on an item that is checked out.

        Duplicate requests are allowed.

        Args:
            card_number: Card number of the requesting user
            item_id: Item to request

        Returns:
            Result of the request
        """
        op = LendingOperation.REQUEST

        with self.db.get_session() as session:
            user = self.catalog.find_user(session, card_number)
            item = self.catalog.find_item(session, item_id)

            if user is None or item is None:
                return self._refuse(op, LendingOutcome.ENTITY_NOT_FOUND, card_number, item_id)
            if item.available:
                return self._refuse(op, LendingOutcome.REQUEST_UNNECESSARY, card_number, item_id)

            self.queue.submit(item_id, card_number, session=session)

        logger.info("%s requested by %s", item_id, card_number)
        return LendingResult.success(op, card_number, item_id)

    # -------------------------------------------------------------------------
    # Requests
    # -------------------------------------------------------------------------

    def fulfill_requests(self, item_id: str) -> int:
        """Clear every outstanding request for an item.

        Returns:
            Number of requests cleared
        """
        return self.queue.fulfill_all(item_id)

    def list_requests(self, card_number: str) -> list[str]:
        """Item ids the user is waiting on, oldest first."""
        return self.queue.list_for_user(card_number)

    # -------------------------------------------------------------------------
    # Fines
    # -------------------------------------------------------------------------

    def calculate_fines(
        self,
        card_number: str,
        today: Optional[date] = None,
    ) -> FineAssessment:
        """Assess overdue fines for a user.

        Args:
            card_number: User's card number
            today: Day of assessment, defaults to today

        Returns:
            Assessment; ``found`` is False and the total zero when the card
            does not resolve
        """
        today = today or date.today()
        user = self.catalog.get_user(card_number)
        if user is None:
            logger.info("Fine lookup for unknown card %s", card_number)
            return FineAssessment(
                card_number=card_number,
                found=False,
                assessed_on=today,
                message="User not found.",
            )
        return calculate_fines(user, today, self.config.fine_per_day)

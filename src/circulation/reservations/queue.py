"""Reservation queue for holds on unavailable items."""

from typing import Optional

from sqlalchemy import delete, exists, select
from sqlalchemy.orm import Session

from ..app_logger import get_logger
from ..db.sqlite import Database
from .models import Request
from .schemas import RequestResponse

logger = get_logger(__name__)


class ReservationQueue:
    """Records and queries outstanding holds.

    The queue only answers whether an item has any hold at all. It does not
    track whose turn it is, and fulfilling an item clears every hold on it
    at once.

    Every method takes an optional session so a caller can run it inside
    its own transaction.
    """

    def __init__(self, db: Database):
        """Initialize reservation queue.

        Args:
            db: Database instance owned by the composition root
        """
        self.db = db

    def submit(
        self,
        item_id: str,
        card_number: str,
        session: Optional[Session] = None,
    ) -> RequestResponse:
        """Append a hold for an item.

        No existence check and no de-duplication: the same user may hold the
        same item more than once.

        Args:
            item_id: Item being requested
            card_number: Card number of the requesting user
            session: Optional session to join

        Returns:
            The recorded request
        """

        def _submit(s: Session) -> RequestResponse:
            request = Request(item_id=item_id, card_number=card_number)
            s.add(request)
            s.flush()
            logger.debug("Request %s recorded for %s by %s", request.id, item_id, card_number)
            return RequestResponse.model_validate(request)

        if session:
            return _submit(session)
        with self.db.get_session() as s:
            return _submit(s)

    def has_outstanding(self, item_id: str, session: Optional[Session] = None) -> bool:
        """Check whether any hold exists for an item."""

        def _has(s: Session) -> bool:
            stmt = select(exists().where(Request.item_id == item_id))
            return bool(s.execute(stmt).scalar())

        if session:
            return _has(session)
        with self.db.get_session() as s:
            return _has(s)

    def fulfill_all(self, item_id: str, session: Optional[Session] = None) -> int:
        """Remove every hold for an item.

        Args:
            item_id: Item whose holds are cleared
            session: Optional session to join

        Returns:
            Number of holds removed
        """

        def _fulfill(s: Session) -> int:
            result = s.execute(delete(Request).where(Request.item_id == item_id))
            return result.rowcount or 0

        if session:
            removed = _fulfill(session)
        else:
            with self.db.get_session() as s:
                removed = _fulfill(s)

        if removed:
            logger.info("Cleared %d request(s) for %s", removed, item_id)
        return removed

    def list_for_user(self, card_number: str, session: Optional[Session] = None) -> list[str]:
        """Item ids a user has requested, oldest first."""

        def _list(s: Session) -> list[str]:
            stmt = (
                select(Request.item_id)
                .where(Request.card_number == card_number)
                .order_by(Request.id)
            )
            return list(s.execute(stmt).scalars().all())

        if session:
            return _list(session)
        with self.db.get_session() as s:
            return _list(s)

    def list_for_item(
        self, item_id: str, session: Optional[Session] = None
    ) -> list[RequestResponse]:
        """Holds waiting on an item, oldest first."""

        def _list(s: Session) -> list[RequestResponse]:
            stmt = select(Request).where(Request.item_id == item_id).order_by(Request.id)
            return [RequestResponse.model_validate(r) for r in s.execute(stmt).scalars()]

        if session:
            return _list(session)
        with self.db.get_session() as s:
            return _list(s)

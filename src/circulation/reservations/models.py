"""SQLAlchemy models for item reservations.

Tables:
- requests: Outstanding holds placed against unavailable items
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from ..db.models import Base, utc_now


class Request(Base):
    """Request model - one outstanding hold on an item.

    Item and user ids are stored as plain keys with no foreign keys; nothing
    on Item or User points back here.
    """

    __tablename__ = "requests"

    # Autoincrement id doubles as insertion order
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    item_id: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    card_number: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    created_at: Mapped[str] = mapped_column(String(32), default=utc_now)

    def __repr__(self) -> str:
        return f"<Request(id={self.id}, item_id='{self.item_id}', card_number='{self.card_number}')>"

"""Catalog and user registry.

Stores items and users, hands out card numbers, and seeds the demo catalog.
"""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from ..app_logger import get_logger
from ..db.models import Item, User
from ..db.schemas import (
    ItemCategory,
    ItemCreate,
    ItemResponse,
    UserCreate,
    UserResponse,
)
from ..db.sqlite import Database
from ..exceptions import DuplicateItemError, DuplicateUserError
from ..reservations.models import Request

logger = get_logger(__name__)


# (id, title, creator, category, renewable, value)
SEED_ITEMS: list[tuple[str, str, str, ItemCategory, bool, float]] = [
    ("BK001", "Book1", "John Doe", ItemCategory.BOOK, True, 5.00),
    ("BK002", "Book2", "John Doe", ItemCategory.BOOK, False, 20.00),
    ("BK003", "Book3", "John Doe", ItemCategory.BOOK, True, 5.00),
    ("BK004", "Book4", "Jane Doe", ItemCategory.BOOK, False, 8.00),
    ("BK005", "Book5", "Jane Doe", ItemCategory.BOOK, True, 9.50),
    ("AV001", "AV1", "John Doe", ItemCategory.AUDIO_VIDEO, False, 15.00),
    ("AV002", "AV2", "John Doe", ItemCategory.AUDIO_VIDEO, False, 15.00),
    ("AV003", "AV3", "John Doe", ItemCategory.AUDIO_VIDEO, False, 15.00),
    ("AV004", "AV4", "Jane Doe", ItemCategory.AUDIO_VIDEO, False, 15.00),
    ("AV005", "AV5", "Jane Doe", ItemCategory.AUDIO_VIDEO, False, 15.00),
    ("RB001", "Ref1", "John Doe", ItemCategory.REFERENCE, False, 2.00),
    ("RB002", "Ref2", "John Doe", ItemCategory.REFERENCE, False, 2.00),
    ("RB003", "Ref3", "John Doe", ItemCategory.REFERENCE, False, 2.00),
    ("RB004", "Ref4", "John Doe", ItemCategory.REFERENCE, False, 2.00),
    ("RB005", "Ref5", "John Doe", ItemCategory.REFERENCE, False, 2.00),
]


class Catalog:
    """Manages catalog items and registered users."""

    def __init__(self, db: Database, starting_card_number: int = 1000):
        """Initialize catalog.

        Args:
            db: Database instance
            starting_card_number: First card number handed out
        """
        self.db = db
        self.starting_card_number = starting_card_number
        self._next_card_number = starting_card_number

    # -------------------------------------------------------------------------
    # Items
    # -------------------------------------------------------------------------

    def add_item(self, data: ItemCreate) -> ItemResponse:
        """Add an item to the catalog.

        Args:
            data: Item creation data

        Returns:
            Created item

        Raises:
            DuplicateItemError: If the id is already taken
        """
        with self.db.get_session() as session:
            if session.get(Item, data.id) is not None:
                raise DuplicateItemError(data.id)

            item = Item(
                id=data.id,
                title=data.title,
                creator=data.creator,
                category=data.category.value,
                renewable=data.renewable,
                value=data.value,
                available=True,
            )
            session.add(item)
            session.flush()
            return ItemResponse.model_validate(item)

    def find_item(self, session: Session, item_id: str) -> Optional[Item]:
        """Look up an item inside an existing session."""
        return session.get(Item, item_id)

    def get_item(self, item_id: str) -> Optional[ItemResponse]:
        """Get an item by id.

        Args:
            item_id: Exact, case-sensitive item id

        Returns:
            Item or None
        """
        with self.db.get_session() as session:
            item = self.find_item(session, item_id)
            return ItemResponse.model_validate(item) if item else None

    def list_items(self) -> list[ItemResponse]:
        """List every item ordered by id."""
        with self.db.get_session() as session:
            items = session.execute(select(Item).order_by(Item.id)).scalars().all()
            return [ItemResponse.model_validate(i) for i in items]

    def list_available_items(self) -> list[ItemResponse]:
        """List items on the shelf with no outstanding request."""
        with self.db.get_session() as session:
            requested = select(Request.item_id)
            stmt = (
                select(Item)
                .where(Item.available.is_(True), Item.id.not_in(requested))
                .order_by(Item.id)
            )
            items = session.execute(stmt).scalars().all()
            return [ItemResponse.model_validate(i) for i in items]

    def populate(self) -> int:
        """Add the seed catalog, skipping ids already present.

        Returns:
            Number of items added
        """
        added = 0
        for item_id, title, creator, category, renewable, value in SEED_ITEMS:
            try:
                self.add_item(
                    ItemCreate(
                        id=item_id,
                        title=title,
                        creator=creator,
                        category=category,
                        renewable=renewable,
                        value=value,
                    )
                )
                added += 1
            except DuplicateItemError:
                continue
        logger.info("Seeded %d catalog item(s)", added)
        return added

    # -------------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------------

    def generate_card_number(self) -> str:
        """Hand out the next sequential card number."""
        card_number = str(self._next_card_number)
        self._next_card_number += 1
        return card_number

    def generate_user_id(self, card_number: str) -> str:
        """Zero-padded display id for a card number."""
        return f"{int(card_number) - self.starting_card_number + 1:04d}"

    def user_exists(self, name: str, address: str, phone_number: str) -> bool:
        """Check for a user with the same details.

        Name and address compare case-insensitively, phone number exactly.
        """
        with self.db.get_session() as session:
            stmt = select(User.card_number).where(
                func.lower(User.name) == name.lower(),
                func.lower(User.address) == address.lower(),
                User.phone_number == phone_number,
            )
            return session.execute(stmt).first() is not None

    def register_user(self, data: UserCreate) -> UserResponse:
        """Register a new user.

        Args:
            data: User registration data

        Returns:
            Registered user with card number and display id

        Raises:
            DuplicateUserError: If the same person is already registered
        """
        if self.user_exists(data.name, data.address, data.phone_number):
            raise DuplicateUserError(f"User already registered: {data.name}")

        card_number = self.generate_card_number()
        with self.db.get_session() as session:
            user = User(
                card_number=card_number,
                user_id=self.generate_user_id(card_number),
                name=data.name,
                address=data.address,
                phone_number=data.phone_number,
            )
            session.add(user)
            session.flush()
            logger.info("Registered %s with card %s", user.name, card_number)
            return UserResponse.model_validate(user)

    def find_user(self, session: Session, card_number: str) -> Optional[User]:
        """Look up a user inside an existing session."""
        return session.get(User, card_number)

    def get_user(self, card_number: str) -> Optional[UserResponse]:
        """Get a user and the items they hold.

        Args:
            card_number: Exact card number

        Returns:
            User or None
        """
        with self.db.get_session() as session:
            stmt = (
                select(User)
                .options(selectinload(User.checked_out_items))
                .where(User.card_number == card_number)
            )
            user = session.execute(stmt).scalar_one_or_none()
            return UserResponse.model_validate(user) if user else None

    def list_users(self) -> list[UserResponse]:
        """List every registered user ordered by card number."""
        with self.db.get_session() as session:
            stmt = (
                select(User)
                .options(selectinload(User.checked_out_items))
                .order_by(User.card_number)
            )
            users = session.execute(stmt).scalars().all()
            return [UserResponse.model_validate(u) for u in users]

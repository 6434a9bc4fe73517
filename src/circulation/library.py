"""Composition root wiring the circulation components together."""

from typing import Optional

from .app_logger import get_logger
from .catalog.registry import Catalog
from .config import Config, get_config
from .db.sqlite import Database
from .lending.manager import LendingService
from .reservations.queue import ReservationQueue

logger = get_logger(__name__)


class Library:
    """One lending facility with its own in-memory state.

    The reservation queue belongs to the library instance and is handed to
    the lending service, so two libraries never share holds.
    """

    def __init__(self, config: Optional[Config] = None, populate: bool = False):
        """Build an empty library.

        Args:
            config: Lending policy, defaults to the global config
            populate: Load the seed catalog
        """
        self.config = config or get_config()
        errors = self.config.validate()
        if errors:
            raise ValueError("Invalid configuration: " + "; ".join(errors))

        self.db = Database()
        self.db.create_tables()
        self.catalog = Catalog(self.db, self.config.starting_card_number)
        self.queue = ReservationQueue(self.db)
        self.lending = LendingService(self.db, self.catalog, self.queue, self.config)

        if populate:
            self.catalog.populate()
        logger.debug("Library ready")


# Global library instance
_library: Optional[Library] = None


def get_library(populate: bool = True) -> Library:
    """Get or create the per-process library instance."""
    global _library
    if _library is None:
        _library = Library(populate=populate)
    return _library


def reset_library() -> None:
    """Reset the per-process library instance. Used for testing."""
    global _library
    _library = None

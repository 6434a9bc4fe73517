"""Reservation queue module.

Provides functionality for:
- Recording holds on unavailable items
- Gating checkout and renewal while holds are outstanding
- Bulk-clearing holds once an item is handed over
"""

from .models import Request
from .queue import ReservationQueue
from .schemas import RequestResponse

__all__ = [
    "Request",
    "ReservationQueue",
    "RequestResponse",
]

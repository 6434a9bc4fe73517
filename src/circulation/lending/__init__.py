"""Lending module.

Provides functionality for:
- Checking items out and back in
- Renewing loans
- Requesting items that are checked out
- Assessing overdue fines
"""

from .manager import LendingService
from .schemas import (
    LendingOperation,
    LendingOutcome,
    LendingResult,
)

__all__ = [
    "LendingService",
    "LendingOperation",
    "LendingOutcome",
    "LendingResult",
]

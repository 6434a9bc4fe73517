"""Overdue fine module."""

from .calculator import DEFAULT_FINE_PER_DAY, calculate_fines, to_money
from .schemas import FineAssessment, ItemFine

__all__ = [
    "DEFAULT_FINE_PER_DAY",
    "calculate_fines",
    "to_money",
    "FineAssessment",
    "ItemFine",
]

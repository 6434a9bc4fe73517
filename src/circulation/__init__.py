"""Circulation desk for a lending facility.

Tracks who holds which item, when it is due, who is waiting for it, and what
is owed for lateness.
"""

__version__ = "0.1.0"

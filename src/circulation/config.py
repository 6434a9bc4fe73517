"""Configuration management for the circulation desk.

Loads lending policy from environment variables and provides defaults.
"""

import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Optional

from dotenv import load_dotenv

# Load .env file if present
load_dotenv()


@dataclass
class Config:
    """Application configuration."""

    # Lending policy
    loan_period_days: int
    checkout_limit: int
    fine_per_day: Decimal

    # Registration
    starting_card_number: int

    # Logging
    log_level: str

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        fine_str = os.environ.get("CIRCULATION_FINE_PER_DAY", "0.10")
        try:
            fine_per_day = Decimal(fine_str)
        except InvalidOperation:
            raise ValueError(f"Invalid CIRCULATION_FINE_PER_DAY: {fine_str}")

        return cls(
            loan_period_days=int(os.environ.get("CIRCULATION_LOAN_PERIOD_DAYS", "14")),
            checkout_limit=int(os.environ.get("CIRCULATION_CHECKOUT_LIMIT", "5")),
            fine_per_day=fine_per_day,
            starting_card_number=int(
                os.environ.get("CIRCULATION_STARTING_CARD_NUMBER", "1000")
            ),
            log_level=os.environ.get("CIRCULATION_LOG_LEVEL", "WARNING").upper(),
        )

    def validate(self) -> list[str]:
        """Validate configuration, return list of errors."""
        errors = []

        if self.loan_period_days <= 0:
            errors.append(f"Loan period must be positive: {self.loan_period_days}")
        if self.checkout_limit <= 0:
            errors.append(f"Checkout limit must be positive: {self.checkout_limit}")
        if self.fine_per_day < 0:
            errors.append(f"Fine per day cannot be negative: {self.fine_per_day}")
        if self.starting_card_number < 0:
            errors.append(
                f"Starting card number cannot be negative: {self.starting_card_number}"
            )

        return errors


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the global config instance."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def reset_config() -> None:
    """Reset the global config instance. Used for testing."""
    global _config
    _config = None

"""
Utility functions for the dashboard.
Money is stored in minor units (cents) and shown in major units.
"""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Optional, Union

from django.utils import timezone


class CurrencyHelper:
    """Currency and decimal formatting utilities."""

    CURRENCY_SYMBOLS: Dict[str, str] = {
        "USD": "$",
        "EUR": "€",
        "GBP": "£",
    }

    @staticmethod
    def to_minor_units(amount: Union[Decimal, int, str]) -> int:
        """Convert a major-unit amount to integer cents, rounding half up."""
        return int((Decimal(str(amount)) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    @staticmethod
    def from_minor_units(cents: int) -> Decimal:
        """Convert integer cents back to a two-place major-unit amount."""
        return (Decimal(cents) / 100).quantize(Decimal("0.01"))

    @staticmethod
    def format_amount(cents: Optional[int], currency: str = "USD") -> str:
        """Format an amount in cents with currency symbol."""
        symbol = CurrencyHelper.CURRENCY_SYMBOLS.get(currency, currency)
        return f"{symbol}{CurrencyHelper.from_minor_units(cents or 0):,.2f}"


class DateHelper:
    @staticmethod
    def today() -> date:
        """Current calendar date in UTC."""
        return timezone.now().date()

"""Display formatting for money amounts and dates."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from kirjanpito.domain.models import Money

NOT_A_NUMBER = "NaN"


@dataclass(frozen=True)
class MoneyFormat:
    """How a cents amount is turned into text."""

    decimal_separator: str = "."
    suffix: str = ""


PLAIN = MoneyFormat()
FINNISH = MoneyFormat(decimal_separator=",", suffix=" €")


def to_euros(cents: Money | None, fmt: MoneyFormat = PLAIN) -> str:
    """Format cents as euros with two decimals.

    Args:
        cents: Amount in cents, or None for an unparsed amount.
        fmt: Separator and suffix to use.

    Returns:
        Formatted string (e.g., "123.45" or "123,45 €").
    """
    if cents is None:
        return f"{NOT_A_NUMBER}{fmt.suffix}"
    euros = f"{Decimal(cents) / 100:.2f}"
    return euros.replace(".", fmt.decimal_separator) + fmt.suffix


def format_date(value: date | None) -> str:
    """Format a date as D.M.YYYY, without zero padding."""
    if value is None:
        return f"{NOT_A_NUMBER}.{NOT_A_NUMBER}.{NOT_A_NUMBER}"
    return f"{value.day}.{value.month}.{value.year}"

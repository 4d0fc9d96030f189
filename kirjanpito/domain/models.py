"""Domain type definitions for kirjanpito.

- Money: Amount in cents (minor units)
- Record: One bookkeeping record parsed from a PDF filename
"""

from dataclasses import dataclass
from datetime import date
from typing import NewType

# Money amounts are stored as cents (minor units) to avoid floating point errors
Money = NewType("Money", int)


@dataclass(frozen=True)
class Record:
    """Immutable record parsed from a single filename.

    An amount of None means the filename segment could not be parsed as a
    number. It behaves like NaN: it poisons every sum it takes part in.
    """

    date: date | None
    file_name: str
    name: str
    price: Money | None
    tax: Money | None
    is_eu: bool = False

    @property
    def parsed(self) -> bool:
        """True when both price and tax were parsed."""
        return self.price is not None and self.tax is not None

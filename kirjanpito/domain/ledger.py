"""Pure functions for classifying records and aggregating ledger totals.

This module contains the functional core for the ledger:
- No I/O operations
- No side effects
- Pure data transformations

All monetary amounts are in cents (Money type). A None amount is a value
that failed to parse; any sum it takes part in is None as well.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from kirjanpito.domain.models import Money, Record


@dataclass(frozen=True)
class GroupTotals:
    """Immutable totals for one group of records (income, expenses, EU)."""

    total_no_vat: Money | None
    vat: Money | None
    total: Money | None
    rows: list[Record] = field(default_factory=list)


@dataclass(frozen=True)
class LedgerTotals:
    """Immutable totals for the whole ledger."""

    income: GroupTotals
    expenses: GroupTotals
    expenses_eu: GroupTotals
    total_no_vat: Money | None
    vat: Money | None
    total: Money | None
    unparsed: list[Record] = field(default_factory=list)


def add(*amounts: Money | None) -> Money | None:
    """Sum amounts, returning None if any of them is None."""
    if any(amount is None for amount in amounts):
        return None
    return Money(sum(amounts))  # type: ignore[arg-type]


def negate(amount: Money | None) -> Money | None:
    """Flip the sign of an amount, keeping None as None."""
    return None if amount is None else Money(-amount)


def split_income_and_expense(records: Iterable[Record]) -> tuple[list[Record], list[Record]]:
    """Partition records by the sign of their price.

    Args:
        records: Parsed records.

    Returns:
        Tuple of (income, expense). Records with a zero or unparsed price
        belong to neither group.
    """
    income: list[Record] = []
    expense: list[Record] = []
    for record in records:
        if record.price is None:
            continue
        if record.price > 0:
            income.append(record)
        elif record.price < 0:
            expense.append(record)
    return income, expense


def eu_expenses(expense: Iterable[Record]) -> list[Record]:
    """Select expense records flagged as EU service purchases."""
    return [record for record in expense if record.is_eu]


def sum_records(records: Sequence[Record]) -> tuple[Money | None, Money | None]:
    """Sum prices and taxes of a group.

    Returns:
        Tuple of (price_sum, tax_sum); (0, 0) for an empty group.
    """
    price = add(Money(0), *(record.price for record in records))
    tax = add(Money(0), *(record.tax for record in records))
    return price, tax


def income_totals(records: Sequence[Record]) -> GroupTotals:
    """Totals for income: total is price plus tax."""
    price, tax = sum_records(records)
    return GroupTotals(total_no_vat=price, vat=tax, total=add(price, tax), rows=list(records))


def expense_totals(records: Sequence[Record]) -> GroupTotals:
    """Totals for expenses: total is price minus tax.

    Expense prices are negative, so these totals are negative too.
    """
    price, tax = sum_records(records)
    return GroupTotals(total_no_vat=price, vat=tax, total=add(price, negate(tax)), rows=list(records))


def calculate_totals(records: Sequence[Record]) -> LedgerTotals:
    """Classify records and aggregate every figure the reports need.

    Args:
        records: Parsed records, in display order.

    Returns:
        LedgerTotals with group totals and combined figures.
    """
    income, expense = split_income_and_expense(records)

    income_group = income_totals(income)
    expense_group = expense_totals(expense)
    eu_group = expense_totals(eu_expenses(expense))

    total_no_vat = add(income_group.total_no_vat, expense_group.total_no_vat)
    vat = add(income_group.vat, negate(expense_group.vat))
    total = add(
        income_group.total_no_vat,
        income_group.vat,
        expense_group.total_no_vat,
        negate(expense_group.vat),
    )

    return LedgerTotals(
        income=income_group,
        expenses=expense_group,
        expenses_eu=eu_group,
        total_no_vat=total_no_vat,
        vat=vat,
        total=total,
        unparsed=[record for record in records if not record.parsed],
    )

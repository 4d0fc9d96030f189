"""Pure functions rendering ledger totals to HTML or plain data.

Renderers only build strings and dictionaries; writing them anywhere is up
to the caller.
"""

from html import escape
from typing import Any, Literal
from urllib.parse import quote

from kirjanpito.domain.formatting import FINNISH, PLAIN, MoneyFormat, format_date, to_euros
from kirjanpito.domain.ledger import GroupTotals, LedgerTotals, negate
from kirjanpito.domain.models import Money, Record

Variant = Literal["basic", "vat"]
VARIANTS: tuple[Variant, ...] = ("basic", "vat")

DEFAULT_MONEY_FORMATS: dict[Variant, MoneyFormat] = {
    "basic": PLAIN,
    "vat": FINNISH,
}

STYLE = """ * {
   font-family: sans-serif;
 }
 table {
  border-collapse: collapse;
 }
 th {
   text-align: left;
   background-color: rgb(242,242,242);
   margin: 0;
   padding: 4px 8px;
 }
 td {
  margin: 0;
  padding: 2px 8px;
 }
 th:nth-child(1), th:nth-child(3), th:nth-child(4), th:nth-child(5),
 td:nth-child(1), td:nth-child(3), td:nth-child(4), td:nth-child(5) {
   text-align: right;
 }
 section p {
   margin: 2px 0;
 }"""

HEADERS: dict[Variant, tuple[str, ...]] = {
    "basic": ("Pvm", "Aihe", "Veroton", "ALV"),
    "vat": ("Pvm", "Kuvaus", "Tulot", "Menot", "ALV"),
}


def encode_uri_component(value: str) -> str:
    """Percent-encode a filename for use as a relative link."""
    return quote(value, safe="!*'()")


def default_title(records: list[Record]) -> str:
    """Build a title from the year of the earliest dated record."""
    years = [record.date.year for record in records if record.date is not None]
    if not years:
        return "Kirjanpito"
    return f"Kirjanpito {min(years)}"


def link_cell(record: Record) -> str:
    return f'<td><a href="{encode_uri_component(record.file_name)}" target="_blank">{escape(record.name)}</a></td>'


def basic_row(record: Record, fmt: MoneyFormat) -> str:
    """Row with untaxed amount and tax, signed as in the filename.

    The euro glyph is added only when the money format carries no suffix.
    """
    glyph = "" if fmt.suffix else " €"
    return (
        f"<tr><td>{format_date(record.date)}</td>{link_cell(record)}"
        f"<td>{to_euros(record.price, fmt)}{glyph}</td><td>{to_euros(record.tax, fmt)}{glyph}</td></tr>"
    )


def vat_row(record: Record, fmt: MoneyFormat) -> str:
    """Row with separate income and expense columns, expenses shown positive."""
    is_income = record.price is not None and record.price > 0
    income = to_euros(record.price, fmt) if is_income else ""
    expense = "" if is_income else to_euros(negate(record.price), fmt)
    tax = to_euros(record.tax if is_income else negate(record.tax), fmt)
    return (
        f"<tr><td>{format_date(record.date)}</td>{link_cell(record)}"
        f"<td>{income}</td><td>{expense}</td><td>{tax}</td></tr>"
    )


def rows_html(group: GroupTotals, variant: Variant, fmt: MoneyFormat) -> str:
    render_row = vat_row if variant == "vat" else basic_row
    return "\n".join(render_row(record, fmt) for record in group.rows)


def summary_line(label: str, amount: Money | None, fmt: MoneyFormat) -> str:
    return f"<p>{label}: {to_euros(amount, fmt)}</p>"


def summary_html(totals: LedgerTotals, fmt: MoneyFormat) -> str:
    """Narrative VAT declaration and tax return figures."""
    vat_lines = [
        summary_line("Vero kotimaan myynnistä", totals.income.vat, fmt),
        summary_line("Palveluostot muista EU-maista", negate(totals.expenses_eu.total_no_vat), fmt),
        summary_line("Vero palveluostoista muista EU-maista", negate(totals.expenses_eu.vat), fmt),
        summary_line("Vähennettävä vero", negate(totals.expenses.vat), fmt),
        summary_line("Maksettava vero", totals.vat, fmt),
    ]
    tax_return_lines = [
        summary_line("Liikevaihto", totals.income.total_no_vat, fmt),
        summary_line("Myynti yhteensä (sis. ALV)", totals.income.total, fmt),
        summary_line("Kulut", negate(totals.expenses.total_no_vat), fmt),
        summary_line("Tulos", totals.total_no_vat, fmt),
    ]
    return "\n".join(
        [
            "<section>",
            "<h2>Arvonlisäveroilmoitus</h2>",
            *vat_lines,
            "</section>",
            "<section>",
            "<h2>Veroilmoitus</h2>",
            *tax_return_lines,
            "</section>",
        ]
    )


def to_html(
    totals: LedgerTotals,
    variant: Variant = "vat",
    fmt: MoneyFormat | None = None,
    title: str | None = None,
) -> str:
    """Render the ledger as a standalone HTML document.

    Args:
        totals: Aggregated ledger.
        variant: "basic" for the four column table, "vat" for the five
            column table followed by VAT and tax return summaries.
        fmt: Money format; defaults to the variant's own format.
        title: Document title; defaults to "Kirjanpito <year>".

    Returns:
        HTML document as a string.
    """
    if variant not in VARIANTS:
        raise ValueError(f"Unknown report variant: {variant}")
    if fmt is None:
        fmt = DEFAULT_MONEY_FORMATS[variant]
    if title is None:
        title = default_title(totals.income.rows + totals.expenses.rows)

    header = "".join(f"<th>{label}</th>" for label in HEADERS[variant])
    parts = [
        "<!doctype html>",
        '<html lang="fi">',
        "<head>",
        f" <title>{escape(title)}</title>",
        ' <meta charset="utf-8">',
        ' <meta http-equiv="x-ua-compatible" content="IE=edge">',
        " <style>",
        STYLE,
        " </style>",
        "</head>",
        "<body>",
        "<table>",
        f"<tr>{header}</tr>",
        rows_html(totals.income, variant, fmt),
        rows_html(totals.expenses, variant, fmt),
        "</table>",
    ]
    if variant == "vat":
        parts.append(summary_html(totals, fmt))
    parts += ["</body>", "</html>", ""]
    return "\n".join(parts)


def record_to_dict(record: Record) -> dict[str, Any]:
    return {
        "date": record.date.isoformat() if record.date else None,
        "file_name": record.file_name,
        "name": record.name,
        "price": record.price,
        "tax": record.tax,
        "is_eu": record.is_eu,
    }


def group_to_dict(group: GroupTotals) -> dict[str, Any]:
    return {
        "total_no_vat": group.total_no_vat,
        "vat": group.vat,
        "total": group.total,
        "rows": [record_to_dict(record) for record in group.rows],
    }


def to_dump(totals: LedgerTotals) -> dict[str, Any]:
    """Convert totals to a JSON serialisable structure of raw cents.

    Unparsed amounts come out as null.
    """
    return {
        "income": group_to_dict(totals.income),
        "expenses": group_to_dict(totals.expenses),
        "expenses_eu": group_to_dict(totals.expenses_eu),
        "total_no_vat": totals.total_no_vat,
        "vat": totals.vat,
        "total": totals.total,
        "unparsed": [record.file_name for record in totals.unparsed],
    }

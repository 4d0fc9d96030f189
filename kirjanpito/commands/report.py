"""Report command: scan a directory and render the ledger."""

import logging
import sys

from rich.console import Console
from rich.table import Table

from kirjanpito.config import ReportConfig
from kirjanpito.domain.formatting import MoneyFormat, to_euros
from kirjanpito.domain.ledger import LedgerTotals, calculate_totals
from kirjanpito.domain.parser import parse_filenames
from kirjanpito.domain.render import to_dump, to_html
from kirjanpito.scanner import list_filenames, write_output

console = Console()
logger = logging.getLogger(__name__)


def build_summary_table(totals: LedgerTotals, fmt: MoneyFormat) -> Table:
    """Build a console table of group and combined totals."""
    table = Table(title="Kirjanpito")
    table.add_column("", style="bold")
    table.add_column("Rows", justify="right", style="dim")
    table.add_column("Veroton", justify="right")
    table.add_column("ALV", justify="right")
    table.add_column("Yhteensä", justify="right")

    groups = [
        ("Tulot", totals.income, "green"),
        ("Menot", totals.expenses, "red"),
        ("EU-palveluostot", totals.expenses_eu, "yellow"),
    ]
    for label, group, style in groups:
        table.add_row(
            f"[{style}]{label}[/{style}]",
            str(len(group.rows)),
            to_euros(group.total_no_vat, fmt),
            to_euros(group.vat, fmt),
            to_euros(group.total, fmt),
        )

    table.add_section()
    table.add_row(
        "[cyan]Yhteensä[/cyan]",
        "",
        to_euros(totals.total_no_vat, fmt),
        to_euros(totals.vat, fmt),
        to_euros(totals.total, fmt),
    )
    return table


def report_unparsed(totals: LedgerTotals) -> None:
    """Log every record whose amounts could not be parsed."""
    if not totals.unparsed:
        return
    logger.warning("%d file(s) with unparsed amounts; totals involving them are NaN", len(totals.unparsed))
    for record in totals.unparsed:
        logger.warning("  %s", record.file_name)


def report_command(config: ReportConfig) -> None:
    """Scan the configured directory and render the ledger report."""
    try:
        file_names = list_filenames(config.path)
    except OSError as e:
        console.print(f"[red]Cannot read directory: {e}[/red]", style="bold")
        sys.exit(1)

    logger.debug("Found %d matching file(s) in %s", len(file_names), config.path)

    records = parse_filenames(file_names)
    totals = calculate_totals(records)
    fmt = config.resolved_money_format

    if config.output_format == "dump":
        console.print_json(data=to_dump(totals))
    elif config.output_format == "summary":
        console.print(build_summary_table(totals, fmt))
    else:
        html = to_html(totals, variant=config.variant, fmt=fmt, title=config.title)
        output_path = config.output_path
        try:
            write_output(output_path, html)
        except OSError as e:
            console.print(f"[red]Cannot write report: {e}[/red]", style="bold")
            sys.exit(1)
        console.print(f"[green]✓[/green] Report written to: {output_path}")

    report_unparsed(totals)

    if config.strict and totals.unparsed:
        console.print("[red]Strict mode: unparsed records found[/red]", style="bold")
        sys.exit(1)

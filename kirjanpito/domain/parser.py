"""Pure functions for parsing bookkeeping records out of PDF filenames.

Filenames follow the convention::

    YYYY-MM-DD<free text>|<name>|<price>€|ALV<tax>€.pdf

Four ``|``-delimited segments: date, description, price and tax. Amounts are
converted to cents right away; formatting back to euros happens only at
render time.
"""

import logging
import re
from collections.abc import Iterable
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, DecimalException, InvalidOperation

from kirjanpito.domain.models import Money, Record

logger = logging.getLogger(__name__)

FILENAME_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}.*\.pdf")
DATE_PREFIX = re.compile(r"^(\d{4}-\d{2}-\d{2})")

DELIMITER = "|"
SEGMENT_COUNT = 4
EU_MARKER = "(EU)"


def matches_filename(file_name: str) -> bool:
    """Check if a filename follows the dated PDF naming convention.

    Args:
        file_name: Bare filename (no directory part).

    Returns:
        True if the name starts with YYYY-MM-DD and ends with .pdf.
    """
    return FILENAME_PATTERN.fullmatch(file_name) is not None


def filter_filenames(file_names: Iterable[str]) -> list[str]:
    """Keep only filenames that follow the naming convention, in input order."""
    return [name for name in file_names if matches_filename(name)]


def parse_date(segment: str) -> date | None:
    """Parse the leading YYYY-MM-DD of a date segment.

    Args:
        segment: First filename segment, e.g. "2018-01-01 Client A".

    Returns:
        Calendar date, or None if there is no valid date prefix.
    """
    match = DATE_PREFIX.match(segment.strip())
    if not match:
        return None
    try:
        return datetime.strptime(match.group(1), "%Y-%m-%d").date()
    except ValueError:
        return None


def parse_decimal(text: str) -> Decimal | None:
    """Parse a decimal number the way the legacy numeric coercion did.

    Surrounding whitespace is ignored and an empty string counts as zero.
    Anything else that is not a finite number gives None.
    """
    text = text.strip()
    if not text:
        return Decimal(0)
    if "_" in text:
        return None
    try:
        value = Decimal(text)
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    return value


def to_cents(euros: Decimal | None) -> Money | None:
    """Convert a euro amount to whole cents, rounding half away from zero.

    Amounts too large for the decimal context give None.
    """
    if euros is None:
        return None
    try:
        return Money(int((euros * 100).quantize(Decimal(1), rounding=ROUND_HALF_UP)))
    except DecimalException:
        return None


def parse_price(segment: str) -> Money | None:
    """Parse a price segment such as " -50.00€"."""
    return to_cents(parse_decimal(segment.strip().replace("€", "")))


def parse_tax(segment: str) -> Money | None:
    """Parse a tax segment such as "ALV24.00€.pdf"."""
    cleaned = segment.strip().replace("ALV", "").replace("€.pdf", "")
    return to_cents(parse_decimal(cleaned))


def is_eu_purchase(text: str) -> bool:
    """Check whether a description carries the (EU) marker.

    The marker may sit in the free text after the date or in the name
    segment, so callers check both.
    """
    return EU_MARKER in text


def split_filename(file_name: str) -> Record:
    """Parse one filename into a Record.

    A segment that does not parse leaves the corresponding amount as None.
    The failure is logged and the record is still returned so that one bad
    filename never stops a run.

    Args:
        file_name: Filename following the naming convention.

    Returns:
        Parsed Record.
    """
    segments = file_name.split(DELIMITER)
    date_part = segments[0]
    name = segments[1].strip() if len(segments) > 1 else ""

    if len(segments) != SEGMENT_COUNT:
        logger.warning(
            "Expected %d segments but found %d in %s",
            SEGMENT_COUNT,
            len(segments),
            file_name,
        )
        price = tax = None
    else:
        price = parse_price(segments[2])
        tax = parse_tax(segments[3])
        if price is None or tax is None:
            logger.warning("Failed to parse price or tax from %s", file_name)

    record_date = parse_date(date_part)
    if record_date is None:
        logger.debug("No valid date in %s", file_name)

    return Record(
        date=record_date,
        file_name=file_name,
        name=name,
        price=price,
        tax=tax,
        is_eu=is_eu_purchase(date_part) or is_eu_purchase(name),
    )


def parse_filenames(file_names: Iterable[str]) -> list[Record]:
    """Filter filenames by the naming convention and parse the remainder."""
    return [split_filename(name) for name in filter_filenames(file_names)]

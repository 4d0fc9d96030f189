"""Tests for kirjanpito.domain.parser pure functions."""

import logging
from datetime import date
from decimal import Decimal

import pytest

from kirjanpito.domain.models import Money
from kirjanpito.domain.parser import (
    filter_filenames,
    matches_filename,
    parse_date,
    parse_decimal,
    parse_filenames,
    split_filename,
    to_cents,
)

INCOME = "2018-01-01 Client A|Consulting|100.00€|ALV24.00€.pdf"
EU_EXPENSE = "2018-01-05 Vendor B (EU)|Supplies|-50.00€|ALV-5.00€.pdf"


class TestMatchesFilename:
    """Tests for matches_filename and filter_filenames."""

    @pytest.mark.parametrize("name", [INCOME, "2018-01-01.pdf", "2019-12-31 anything at all.pdf"])
    def test_accepts_dated_pdfs(self, name: str) -> None:
        """Should accept names starting with YYYY-MM-DD and ending with .pdf."""
        assert matches_filename(name)

    @pytest.mark.parametrize(
        "name",
        ["notes.pdf", "2018-01-01 receipt.txt", "2018-1-01 receipt.pdf", "x2018-01-01.pdf", "2018-01-01.PDF"],
    )
    def test_rejects_other_names(self, name: str) -> None:
        """Should reject anything not following the convention."""
        assert not matches_filename(name)

    def test_rejects_trailing_newline(self) -> None:
        """Should not accept a newline after the .pdf extension."""
        assert not matches_filename("2018-01-01 a.pdf\n")

    def test_filter_keeps_input_order(self) -> None:
        """Should drop non-matching names and keep order of the rest."""
        names = [EU_EXPENSE, "index.html", INCOME, "readme.pdf"]
        assert filter_filenames(names) == [EU_EXPENSE, INCOME]


class TestParseDecimal:
    """Tests for parse_decimal and to_cents."""

    def test_parses_plain_number(self) -> None:
        assert parse_decimal(" 12.50 ") == Decimal("12.50")

    def test_empty_string_is_zero(self) -> None:
        """Should treat an empty segment as zero."""
        assert parse_decimal("   ") == Decimal(0)

    @pytest.mark.parametrize("text", ["oops", "12,50", "NaN", "Infinity", "1_000", "12.5.1"])
    def test_rejects_non_numbers(self, text: str) -> None:
        """Should return None for anything that isn't a finite number."""
        assert parse_decimal(text) is None

    def test_to_cents_rounds_half_up(self) -> None:
        assert to_cents(Decimal("0.005")) == Money(1)
        assert to_cents(Decimal("-0.005")) == Money(-1)
        assert to_cents(Decimal("19.999")) == Money(2000)

    def test_to_cents_keeps_none(self) -> None:
        assert to_cents(None) is None

    @pytest.mark.parametrize("text", ["1e30", "1e999999999", "-1e40"])
    def test_to_cents_out_of_range_is_none(self, text: str) -> None:
        """Should return None for amounts the decimal context can't hold in cents."""
        assert to_cents(parse_decimal(text)) is None


class TestParseDate:
    """Tests for parse_date."""

    def test_reads_leading_date(self) -> None:
        assert parse_date("2018-01-05 Vendor B (EU)") == date(2018, 1, 5)

    def test_impossible_date_is_none(self) -> None:
        """Should return None rather than raising for an invalid calendar date."""
        assert parse_date("2018-13-45 Vendor") is None

    def test_missing_date_is_none(self) -> None:
        assert parse_date("Vendor") is None


class TestSplitFilename:
    """Tests for split_filename."""

    def test_parses_income_record(self) -> None:
        """Should parse all four segments of an income filename."""
        record = split_filename(INCOME)

        assert record.date == date(2018, 1, 1)
        assert record.file_name == INCOME
        assert record.name == "Consulting"
        assert record.price == Money(10000)
        assert record.tax == Money(2400)
        assert record.is_eu is False
        assert record.parsed

    def test_parses_eu_expense_record(self) -> None:
        """Should parse negative amounts and detect the (EU) marker."""
        record = split_filename(EU_EXPENSE)

        assert record.price == Money(-5000)
        assert record.tax == Money(-500)
        assert record.is_eu is True

    def test_eu_marker_in_name_segment(self) -> None:
        record = split_filename("2018-02-01 Host|Hosting (EU)|-10.00€|ALV-2.40€.pdf")
        assert record.is_eu is True

    def test_trims_whitespace_around_segments(self) -> None:
        record = split_filename("2018-03-01 Shop|  Paper  | -12.5 € | ALV -3.00 €.pdf")

        assert record.name == "Paper"
        assert record.price == Money(-1250)
        assert record.tax == Money(-300)

    def test_empty_tax_is_zero(self) -> None:
        """Should read a bare 'ALV€.pdf' tax segment as zero tax."""
        record = split_filename("2018-03-02 Bank|Fees|-4.00€|ALV€.pdf")
        assert record.tax == Money(0)

    def test_bad_price_is_kept_as_not_a_number(self, caplog: pytest.LogCaptureFixture) -> None:
        """Should log the failure and still return the record."""
        name = "2018-04-01 Client|Work|oops€|ALV24.00€.pdf"

        with caplog.at_level(logging.WARNING):
            record = split_filename(name)

        assert record.price is None
        assert record.tax == Money(2400)
        assert not record.parsed
        assert f"Failed to parse price or tax from {name}" in caplog.text

    def test_huge_exponent_price_is_not_a_number(self, caplog: pytest.LogCaptureFixture) -> None:
        """Should keep an out-of-range price as unparsed instead of raising."""
        name = "2018-01-01 A|X|1e30€|ALV0€.pdf"

        with caplog.at_level(logging.WARNING):
            record = split_filename(name)

        assert record.price is None
        assert record.tax == Money(0)
        assert f"Failed to parse price or tax from {name}" in caplog.text

    def test_overflowing_tax_is_not_a_number(self) -> None:
        record = split_filename("2018-01-01 A|X|1.00€|ALV1e999999999€.pdf")

        assert record.price == Money(100)
        assert record.tax is None

    def test_wrong_segment_count(self, caplog: pytest.LogCaptureFixture) -> None:
        """Should not raise for a filename without the expected delimiters."""
        with caplog.at_level(logging.WARNING):
            record = split_filename("2018-05-01 scanned receipt.pdf")

        assert record.name == ""
        assert record.price is None
        assert record.tax is None
        assert record.date == date(2018, 5, 1)
        assert "Expected 4 segments" in caplog.text


class TestParseFilenames:
    """Tests for parse_filenames."""

    def test_skips_non_matching_and_keeps_bad_records(self) -> None:
        """A bad filename shouldn't stop the others being parsed."""
        names = [INCOME, "summary.xlsx", "2018-04-01 Client|Work|oops€|ALV0€.pdf", EU_EXPENSE]

        records = parse_filenames(names)

        assert [r.name for r in records] == ["Consulting", "Work", "Supplies"]
        assert records[0].price == Money(10000)
        assert records[1].price is None
        assert records[2].price == Money(-5000)

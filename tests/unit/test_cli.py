"""
test_cli.py - Unit tests for the console parsing and formatting helpers
"""

import pytest
from datetime import date, datetime
from decimal import Decimal

from warehouse import TransactionKind, TransactionRecord
from warehouse.cli import (
    ACTIONS, EXIT_OPTION,
    parse_decimal, parse_date, parse_positive_int,
    format_money, format_record, sorted_for_display,
)


class TestParseDecimal:
    """Tests for parse_decimal."""

    @pytest.mark.parametrize("text,expected", [
        ("100", "100"),
        ("100.00", "100.00"),
        ("100,00", "100.00"),
        ("  12,5 ", "12.5"),
        ("1.234,56", "1234.56"),
        ("1,234.56", "1234.56"),
        ("-3,10", "-3.10"),
    ])
    def test_accepts(self, text, expected):
        assert parse_decimal(text) == Decimal(expected)

    @pytest.mark.parametrize("text", ["", "   ", "abc", "12,3a", "NaN", "Infinity"])
    def test_rejects(self, text):
        with pytest.raises(ValueError):
            parse_decimal(text)


class TestParseDate:
    """Tests for parse_date."""

    def test_accepts_day_month_year(self):
        assert parse_date("25/12/2025") == date(2025, 12, 25)

    def test_strips_whitespace(self):
        assert parse_date(" 01/02/2025\n") == date(2025, 2, 1)

    @pytest.mark.parametrize("text", [
        "2025-12-25",
        "1/2/2025",
        "25/12/25",
        "31/02/2025",
        "25/13/2025",
        "",
    ])
    def test_rejects(self, text):
        with pytest.raises(ValueError):
            parse_date(text)


class TestParsePositiveInt:
    """Tests for parse_positive_int."""

    def test_accepts(self):
        assert parse_positive_int(" 4 ") == 4

    @pytest.mark.parametrize("text", ["0", "-2", "1.5", "four", ""])
    def test_rejects(self, text):
        with pytest.raises(ValueError):
            parse_positive_int(text)


class TestFormatting:
    """Tests for format_money, format_record and sorted_for_display."""

    def test_format_money_two_places(self):
        assert format_money(Decimal("-100")) == "-100.00"
        assert format_money(Decimal("0.125")) == "0.13"

    def test_format_record(self):
        record = TransactionRecord(
            timestamp=datetime(2025, 1, 15, 9, 5, 7),
            kind=TransactionKind.SALE,
            quantity=4,
            amount=Decimal("48"),
        )
        assert format_record(record) == "[15/01/2025 09:05:07] - SALE: 4 baskets, amount: 48.00"

    def test_sorted_for_display_most_recent_first(self):
        t0 = datetime(2025, 1, 15, 9, 0)
        t1 = datetime(2025, 1, 16, 9, 0)
        a = TransactionRecord(t0, TransactionKind.RECEIVE, 1, Decimal("-1"), sequence_number=0)
        b = TransactionRecord(t1, TransactionKind.SALE, 1, Decimal("2"), sequence_number=1)
        assert sorted_for_display([a, b]) == [b, a]

    def test_sorted_for_display_same_timestamp_uses_sequence(self):
        t = datetime(2025, 1, 15, 9, 0)
        records = [
            TransactionRecord(t, TransactionKind.RECEIVE, 1, Decimal("-1"), sequence_number=i)
            for i in range(3)
        ]
        assert [r.sequence_number for r in sorted_for_display(records)] == [2, 1, 0]


class TestActions:
    """Tests for the menu action table."""

    def test_options_before_exit(self):
        assert sorted(ACTIONS) == list(range(1, EXIT_OPTION))

    @pytest.mark.parametrize("option", [1, 2])
    def test_read_only_actions_ignore_input(self, stocked_warehouse, option):
        def no_input(prompt):
            raise AssertionError(f"unexpected prompt {prompt!r}")

        lines = []
        ACTIONS[option](stocked_warehouse, no_input, lines.append)
        assert len(lines) == 1

    def test_check_stock_and_cash_messages(self, stocked_warehouse):
        lines = []
        ACTIONS[1](stocked_warehouse, input, lines.append)
        ACTIONS[2](stocked_warehouse, input, lines.append)
        assert lines == [
            "There are 15 baskets in stock. Of those, 2 are past their expiry date.",
            "Cash is currently -145.00.",
        ]

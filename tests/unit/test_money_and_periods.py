"""Tests for money coercion/rounding and monthly period helpers."""

from __future__ import annotations

from decimal import Decimal

import pytest

from shiftpay.payroll.money import round_money, to_decimal
from shiftpay.payroll.periods import month_name, month_range


class TestRoundMoney:
    def test_rounds_half_up(self):
        assert round_money(Decimal("2.345")) == Decimal("2.35")
        assert round_money(Decimal("2.344")) == Decimal("2.34")

    def test_rounds_negative_half_away_from_zero(self):
        assert round_money(Decimal("-2.345")) == Decimal("-2.35")

    def test_integers_get_two_places(self):
        assert str(round_money(5)) == "5.00"


class TestToDecimal:
    @pytest.mark.parametrize("raw", [None, "", "abc", True, "NaN", "Infinity"])
    def test_unusable_values_are_zero(self, raw):
        assert to_decimal(raw) == Decimal("0")

    def test_parses_strings_and_numbers(self):
        assert to_decimal("1500.50") == Decimal("1500.50")
        assert to_decimal(" 42 ") == Decimal("42")
        assert to_decimal(0.1) == Decimal("0.1")


class TestMonthRange:
    def test_february_non_leap(self):
        assert month_range(2, 2023) == ("20230201", "20230228")

    def test_february_leap(self):
        assert month_range(2, 2024) == ("20240201", "20240229")

    def test_thirty_one_day_month(self):
        assert month_range(12, 2024) == ("20241201", "20241231")


class TestMonthName:
    def test_known_month(self):
        assert month_name(1) == "January"
        assert month_name(12) == "December"

    def test_out_of_range(self):
        assert month_name(13) == "Unknown month"

"""Tests for shaping raw Poster records into aggregates."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from shiftpay.payroll.aggregation import (
    aggregate_revenue_by_employee,
    compute_inventory_loss,
    employee_stats,
    normalize_employees,
)


def _by_id(aggregates):
    return {a.employee_id: a for a in aggregates}


class TestNormalizeEmployees:
    def test_reads_user_id_or_id(self):
        employees = normalize_employees([
            {"user_id": "1", "name": "Anna"},
            {"id": 2, "name": "Boris"},
        ])
        assert [(e.id, e.name) for e in employees] == [(1, "Anna"), (2, "Boris")]

    def test_missing_name_defaults_to_unknown(self):
        [employee] = normalize_employees([{"user_id": 7}])
        assert employee.name == "Unknown"

    def test_falls_back_to_user_name(self):
        [employee] = normalize_employees([{"user_id": 7, "user_name": "Vera"}])
        assert employee.name == "Vera"

    def test_skips_records_without_usable_id(self):
        employees = normalize_employees([{"name": "Ghost"}, {"user_id": "abc"}, {"user_id": 3}])
        assert [e.id for e in employees] == [3]


class TestAggregateRevenue:
    def test_same_day_transactions_count_as_one_shift(self):
        aggregates = aggregate_revenue_by_employee([
            {"user_id": "1", "total": "100.50", "date_close": "2024-03-01 10:00:00"},
            {"user_id": "1", "total": "200", "date_close": "2024-03-01 21:30:00"},
            {"user_id": "1", "total": "50", "date_close": "2024-03-02 09:00:00"},
        ])
        agg = _by_id(aggregates)[1]
        assert agg.revenue == Decimal("350.50")
        assert agg.shifts_count == 2

    def test_staff_id_and_date_fallbacks(self):
        aggregates = aggregate_revenue_by_employee([
            {"staff_id": 4, "total": 10, "date": "2024-03-05 12:00:00"},
            {"staff_id": 4, "total": 10, "date": datetime(2024, 3, 6, 8, 0)},
        ])
        agg = _by_id(aggregates)[4]
        assert agg.revenue == Decimal("20")
        assert agg.shifts_count == 2

    def test_transaction_without_employee_is_skipped(self):
        aggregates = aggregate_revenue_by_employee([
            {"total": "999", "date_close": "2024-03-01 10:00:00"},
            {"user_id": "", "total": "999", "date_close": "2024-03-01 10:00:00"},
        ])
        assert aggregates == []

    def test_invalid_total_counts_as_zero(self):
        aggregates = aggregate_revenue_by_employee([
            {"user_id": 1, "total": "n/a", "date_close": "2024-03-01 10:00:00"},
        ])
        agg = _by_id(aggregates)[1]
        assert agg.revenue == Decimal("0")
        assert agg.shifts_count == 1

    def test_missing_timestamp_adds_revenue_only(self):
        aggregates = aggregate_revenue_by_employee([{"user_id": 1, "total": "75"}])
        agg = _by_id(aggregates)[1]
        assert agg.revenue == Decimal("75")
        assert agg.shifts_count == 0


class TestEmployeeStats:
    def test_matches_user_or_staff_id(self):
        stats = employee_stats([
            {"user_id": "5", "total": "100", "date_close": "2024-03-01 10:00:00"},
            {"staff_id": 5, "total": "50", "date_close": "2024-03-01 18:00:00"},
            {"user_id": "6", "total": "500", "date_close": "2024-03-01 18:00:00"},
        ], 5)
        assert stats.revenue == Decimal("150")
        assert stats.shifts_count == 1
        assert stats.transactions_count == 2

    def test_no_transactions(self):
        stats = employee_stats([], 5)
        assert stats.revenue == Decimal("0")
        assert stats.shifts_count == 0


class TestInventoryLoss:
    def test_sums_signed_differences(self):
        result = compute_inventory_loss(
            [{"difference": "-1500"}, {"difference": "500.25"}, {"difference": None}],
            month=3, year=2024,
        )
        assert result.total_loss == Decimal("-999.75")
        assert result.revisions_count == 3
        assert result.is_shortage

    def test_no_revisions(self):
        result = compute_inventory_loss([], month=3, year=2024)
        assert result.total_loss == Decimal("0")
        assert result.revisions_count == 0
        assert not result.is_shortage

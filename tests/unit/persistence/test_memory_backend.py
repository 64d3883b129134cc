"""Unit tests for the in-memory payroll store and counters."""

from __future__ import annotations

from decimal import Decimal

import pytest

from shiftpay.core.exceptions import (
    LocationNotFoundError,
    ReportConflictError,
    ReportNotFoundError,
)
from shiftpay.models.payroll import Employee, InventoryResult, RevenueAggregate
from shiftpay.payroll.calculator import compute_payroll
from shiftpay.persistence.memory_backend import MemoryCounterBackend, MemoryPayrollStore


def _report(month: int = 3, loss: str = "-1000"):
    return compute_payroll(
        [Employee(id=1, name="Anna"), Employee(id=2, name="Boris")],
        [
            RevenueAggregate(employee_id=1, revenue=Decimal("20000"), shifts_count=5),
            RevenueAggregate(employee_id=2, revenue=Decimal("5000"), shifts_count=2),
        ],
        InventoryResult(month=month, year=2024, total_loss=Decimal(loss), revisions_count=1),
        Decimal("1000"),
        Decimal("5"),
        month=month,
        year=2024,
    )


@pytest.fixture
def store():
    store = MemoryPayrollStore()
    store.upsert_location("mycafe", "My Cafe", "123:abc")
    return store


class TestLocations:
    def test_upsert_refreshes_token(self, store):
        store.upsert_location("mycafe", "My Cafe", "456:def")
        assert store.get_location("mycafe").access_token == "456:def"
        assert len(store.list_locations()) == 1

    def test_unknown_location(self, store):
        assert store.get_location("nowhere") is None


class TestSaveReport:
    def test_round_trip_preserves_report(self, store):
        report = _report()
        report_id = store.save_report("mycafe", report)
        assert report_id == "mycafe:2024-03"
        assert store.load_report(report_id) == report

    def test_unknown_location_raises(self, store):
        with pytest.raises(LocationNotFoundError):
            store.save_report("nowhere", _report())

    def test_second_save_for_period_conflicts_and_writes_nothing(self, store):
        store.save_report("mycafe", _report())
        with pytest.raises(ReportConflictError):
            store.save_report("mycafe", _report(loss="-5"))
        assert len(store.list_history("mycafe")) == 1
        assert store.inventory_result("mycafe", 3, 2024)["loss_amount"] == Decimal("-1000.00")

    def test_inventory_recorded_once_per_period(self, store):
        store.save_report("mycafe", _report())
        record = store.inventory_result("mycafe", 3, 2024)
        assert record["revisions_count"] == 1


class TestHistory:
    def test_newest_first_and_limited(self, store):
        for month in (1, 2, 3):
            store.save_report("mycafe", _report(month=month))
        history = store.list_history("mycafe", limit=2)
        assert [h.period_month for h in history] == [3, 2]
        assert history[0].employees_count == 2

    def test_other_locations_excluded(self, store):
        store.upsert_location("other", "Other", "t")
        store.save_report("other", _report())
        assert store.list_history("mycafe") == []


class TestLoadReport:
    def test_missing_report_is_none(self, store):
        assert store.load_report("mycafe:2024-03") is None

    def test_malformed_id_raises(self, store):
        with pytest.raises(ReportNotFoundError):
            store.load_report("garbage")


class TestCounters:
    def test_incr_counts_per_key(self):
        counters = MemoryCounterBackend()
        assert counters.incr("a", 60) == 1
        assert counters.incr("a", 60) == 2
        assert counters.incr("b", 60) == 1

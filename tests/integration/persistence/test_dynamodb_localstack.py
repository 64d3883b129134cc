"""Integration tests for DynamoDBPayrollStore against LocalStack."""

from __future__ import annotations

import uuid
from decimal import Decimal

import pytest

from shiftpay.core.exceptions import ReportConflictError
from shiftpay.models.payroll import Employee, InventoryResult, RevenueAggregate
from shiftpay.payroll.calculator import compute_payroll
from shiftpay.persistence.dynamodb_backend import DynamoDBPayrollStore


class TestDynamoDBIntegration:
    @pytest.fixture
    def store(self, seeded_tables, localstack_ddb):
        return DynamoDBPayrollStore(
            table_suffix=seeded_tables,
            region="eu-central-1",
            endpoint_url=localstack_ddb.meta.client.meta.endpoint_url,
        )

    @pytest.fixture
    def location_id(self, store):
        account = f"it-{uuid.uuid4().hex[:8]}"
        store.upsert_location(account, "Integration Cafe", "123:abc")
        return account

    @pytest.fixture
    def report(self):
        return compute_payroll(
            [Employee(id=1, name="Anna")],
            [RevenueAggregate(employee_id=1, revenue=Decimal("20000"), shifts_count=5)],
            InventoryResult(month=3, year=2024, total_loss=Decimal("-1000"), revisions_count=1),
            Decimal("1000"),
            Decimal("5"),
            month=3,
            year=2024,
        )

    def test_save_and_load(self, store, location_id, report):
        report_id = store.save_report(location_id, report)
        assert store.load_report(report_id) == report
        assert store.list_history(location_id)[0].report_id == report_id

    def test_second_save_conflicts(self, store, location_id, report):
        store.save_report(location_id, report)
        with pytest.raises(ReportConflictError):
            store.save_report(location_id, report)

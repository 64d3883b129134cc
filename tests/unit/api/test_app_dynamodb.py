"""API tests backed by DynamoDBPayrollStore under moto."""

from __future__ import annotations

import sys
from pathlib import Path

import boto3
import pytest
from fastapi.testclient import TestClient
from moto import mock_aws

from shiftpay.api.app import create_app
from shiftpay.core.config import AppSettings
from shiftpay.persistence.dynamodb_backend import DynamoDBPayrollStore
from shiftpay.persistence.memory_backend import MemoryCounterBackend
from shiftpay.pos.memory_client import MemoryPosClient

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "scripts"))

from seed_dynamodb import create_tables  # noqa: E402

TABLE_SUFFIX = "-apitest"
REGION = "eu-central-1"

EMPLOYEES = [{"user_id": "1", "name": "Anna"}, {"user_id": "2", "name": "Boris"}]
TRANSACTIONS = [
    {"user_id": "1", "total": str(total), "date_close": f"2024-03-0{day} 12:00:00"}
    for day, total in ((1, 15000), (2, 5000), (3, 0), (4, 0), (5, 0))
]
REVISIONS = [{"difference": "-1000"}]

BODY = {"locationId": "mycafe", "month": 3, "year": 2024, "shiftRate": 1000, "revenuePercent": 5}


@pytest.fixture
def store():
    with mock_aws():
        create_tables(boto3.resource("dynamodb", region_name=REGION), suffix=TABLE_SUFFIX)
        store = DynamoDBPayrollStore(table_suffix=TABLE_SUFFIX, region=REGION)
        store.upsert_location("mycafe", "My Cafe", "123:abc")
        yield store


@pytest.fixture
def client(store):
    pos = MemoryPosClient(employees=EMPLOYEES, transactions=TRANSACTIONS, revisions=REVISIONS)
    app = create_app(
        AppSettings(),
        store=store,
        counters=MemoryCounterBackend(),
        pos_factory=pos.factory,
    )
    return TestClient(app)


class TestSavedReports:
    def test_calculate_saves_and_exports(self, client):
        resp = client.post("/api/salary/calculate", json=BODY)
        assert resp.status_code == 200
        assert resp.json()["saved"] is True
        assert resp.json()["reportId"] == "mycafe:2024-03"

        history = client.get("/api/salary/history/mycafe").json()["history"]
        assert [h["reportId"] for h in history] == ["mycafe:2024-03"]

        csv_text = client.get("/api/salary/export/mycafe:2024-03").text
        assert csv_text.splitlines()[1] == "Anna,5,20000.00,5000.00,1000.00,1000.00,5000.00"

    def test_second_calculation_for_month_is_not_saved(self, client):
        client.post("/api/salary/calculate", json=BODY)
        resp = client.post("/api/salary/calculate", json=BODY)
        assert resp.status_code == 200
        assert resp.json()["saved"] is False
        assert len(client.get("/api/salary/history/mycafe").json()["history"]) == 1

    def test_unstorable_rate_returns_report_unsaved(self, client):
        body = {**BODY, "shiftRate": "1000.1234567890123456789012345678901234567891"}
        resp = client.post("/api/salary/calculate", json=body)
        assert resp.status_code == 200
        assert resp.json()["saved"] is False
        assert resp.json()["report"]["employees"][0]["employeeName"] == "Anna"
        assert client.get("/api/salary/history/mycafe").json()["history"] == []

"""DynamoDB backend implementing IPayrollStore.

Tables (each with PK/SK string keys, suffixed per environment):

    shiftpay-locations          PK=LOCATION#{id}  SK=PROFILE
    shiftpay-salary-reports     PK=LOCATION#{id}  SK=REPORT#{yyyy-mm}
                                PK=LOCATION#{id}  SK=LINE#{yyyy-mm}#EMPLOYEE#{employee_id}
    shiftpay-inventory-results  PK=LOCATION#{id}  SK=PERIOD#{yyyy-mm}

A report is saved with a single TransactWriteItems call, so either every
line and the inventory result land or nothing does.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from decimal import DecimalException
from typing import Any

import boto3
from boto3.dynamodb.conditions import Key
from botocore.exceptions import ClientError

from shiftpay.core.exceptions import (
    LocationNotFoundError,
    PersistenceError,
    ReportConflictError,
)
from shiftpay.models.locations import Location, ReportHistoryEntry
from shiftpay.models.payroll import PayrollReport
from shiftpay.persistence.records import (
    history_entry,
    inventory_record,
    parse_report_id,
    period_key,
    report_from_records,
    report_header,
    salary_rows,
)

logger = logging.getLogger(__name__)

LOCATIONS_TABLE = "shiftpay-locations"
REPORTS_TABLE = "shiftpay-salary-reports"
INVENTORY_TABLE = "shiftpay-inventory-results"

_PROFILE = "PROFILE"


def _location_pk(location_id: str) -> str:
    return f"LOCATION#{location_id}"


def _location_from_item(item: dict[str, Any]) -> Location:
    return Location(
        location_id=item["location_id"],
        name=item["name"],
        poster_account=item["poster_account"],
        access_token=item.get("access_token", ""),
        is_active=bool(item.get("is_active", True)),
    )


class DynamoDBPayrollStore:
    """Production IPayrollStore backed by DynamoDB."""

    MAX_TRANSACTION_ITEMS = 100  # DynamoDB TransactWriteItems limit

    def __init__(self, table_suffix: str = "", region: str = "eu-central-1",
                 endpoint_url: str | None = None) -> None:
        self._table_suffix = table_suffix
        self._region = region
        self._endpoint_url = endpoint_url
        kwargs: dict = {"region_name": region}
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        self._ddb = boto3.resource("dynamodb", **kwargs)

    def _table_name(self, base: str) -> str:
        return f"{base}{self._table_suffix}"

    def _table(self, base: str):
        return self._ddb.Table(self._table_name(base))

    def _get_item(self, table_base: str, pk: str, sk: str) -> dict[str, Any] | None:
        try:
            resp = self._table(table_base).get_item(Key={"PK": pk, "SK": sk})
        except ClientError as exc:
            raise PersistenceError(f"DynamoDB get failed for {pk}/{sk}: {exc}") from exc
        return resp.get("Item")

    def _query_prefix(self, table_base: str, pk: str, sk_prefix: str) -> list[dict[str, Any]]:
        """All items under a partition key whose sort key starts with a prefix."""
        tbl = self._table(table_base)
        kwargs: dict[str, Any] = {
            "KeyConditionExpression": Key("PK").eq(pk) & Key("SK").begins_with(sk_prefix),
        }
        items: list[dict[str, Any]] = []
        try:
            while True:
                resp = tbl.query(**kwargs)
                items.extend(resp.get("Items", []))
                if "LastEvaluatedKey" not in resp:
                    return items
                kwargs["ExclusiveStartKey"] = resp["LastEvaluatedKey"]
        except ClientError as exc:
            raise PersistenceError(f"DynamoDB query failed for {pk}: {exc}") from exc

    # ---- locations ----

    def upsert_location(self, account: str, name: str, access_token: str) -> Location:
        try:
            resp = self._table(LOCATIONS_TABLE).update_item(
                Key={"PK": _location_pk(account), "SK": _PROFILE},
                UpdateExpression=(
                    "SET location_id = :id, poster_account = :account, #n = :name, "
                    "access_token = :token, is_active = if_not_exists(is_active, :active)"
                ),
                ExpressionAttributeNames={"#n": "name"},
                ExpressionAttributeValues={
                    ":id": account,
                    ":account": account,
                    ":name": name or account,
                    ":token": access_token,
                    ":active": True,
                },
                ReturnValues="ALL_NEW",
            )
        except ClientError as exc:
            raise PersistenceError(f"Failed to save location {account!r}: {exc}") from exc
        return _location_from_item(resp["Attributes"])

    def get_location(self, location_id: str) -> Location | None:
        item = self._get_item(LOCATIONS_TABLE, _location_pk(location_id), _PROFILE)
        return _location_from_item(item) if item else None

    def list_locations(self) -> list[Location]:
        tbl = self._table(LOCATIONS_TABLE)
        kwargs: dict[str, Any] = {}
        items: list[dict[str, Any]] = []
        try:
            while True:
                resp = tbl.scan(**kwargs)
                items.extend(resp.get("Items", []))
                if "LastEvaluatedKey" not in resp:
                    break
                kwargs["ExclusiveStartKey"] = resp["LastEvaluatedKey"]
        except ClientError as exc:
            raise PersistenceError(f"Failed to list locations: {exc}") from exc
        locations = [_location_from_item(i) for i in items if i.get("SK") == _PROFILE]
        return sorted(locations, key=lambda loc: loc.name)

    # ---- salary reports ----

    def save_report(self, location_id: str, report: PayrollReport) -> str:
        """Write header, lines and inventory in one transaction."""
        if self.get_location(location_id) is None:
            raise LocationNotFoundError(f"Location {location_id!r} not found")

        employee_ids = [line.employee_id for line in report.employees]
        if len(employee_ids) != len(set(employee_ids)):
            raise ReportConflictError("Report lists the same employee more than once")

        pk = _location_pk(location_id)
        period = period_key(report.period.month, report.period.year)
        header = report_header(location_id, report, datetime.now(UTC))
        reports_table = self._table_name(REPORTS_TABLE)

        items: list[dict[str, Any]] = [
            {"ConditionCheck": {
                "TableName": self._table_name(LOCATIONS_TABLE),
                "Key": {"PK": pk, "SK": _PROFILE},
                "ConditionExpression": "attribute_exists(PK)",
            }},
            {"Put": {
                "TableName": reports_table,
                "Item": {"PK": pk, "SK": f"REPORT#{period}", **header},
                "ConditionExpression": "attribute_not_exists(PK)",
            }},
        ]
        for row in salary_rows(report):
            items.append({"Put": {
                "TableName": reports_table,
                "Item": {
                    "PK": pk,
                    "SK": f"LINE#{period}#EMPLOYEE#{row['employee_id']}",
                    **row,
                },
                "ConditionExpression": "attribute_not_exists(PK)",
            }})

        # One inventory result per location and period; an existing one is kept
        inventory = report.inventory
        inventory_sk = f"PERIOD#{period_key(inventory.month, inventory.year)}"
        if self._get_item(INVENTORY_TABLE, pk, inventory_sk) is None:
            items.append({"Put": {
                "TableName": self._table_name(INVENTORY_TABLE),
                "Item": {
                    "PK": pk, "SK": inventory_sk, **inventory_record(location_id, inventory),
                },
                "ConditionExpression": "attribute_not_exists(PK)",
            }})

        if len(items) > self.MAX_TRANSACTION_ITEMS:
            raise PersistenceError(
                f"Report has {len(report.employees)} lines, too many for a single transaction"
            )

        try:
            self._ddb.meta.client.transact_write_items(TransactItems=items)
        except DecimalException as exc:
            # Numbers beyond DynamoDB's 38-digit precision fail client-side
            raise PersistenceError(
                f"Salary report {header['report_id']} has a value DynamoDB cannot store: {exc!r}"
            ) from exc
        except ClientError as exc:
            logger.error("Rolled back salary report %s: %s", header["report_id"], exc)
            if exc.response.get("Error", {}).get("Code") == "TransactionCanceledException":
                reasons = [r.get("Code") for r in exc.response.get("CancellationReasons", [])]
                if reasons and reasons[0] == "ConditionalCheckFailed":
                    raise LocationNotFoundError(f"Location {location_id!r} not found") from exc
                if "ConditionalCheckFailed" in reasons or "ConditionalCheckFailed" in str(exc):
                    raise ReportConflictError(
                        f"Salary report for {location_id!r} {period} already exists"
                    ) from exc
            raise PersistenceError(f"Failed to save salary report: {exc}") from exc

        return header["report_id"]

    def list_history(self, location_id: str, limit: int = 10) -> list[ReportHistoryEntry]:
        headers = self._query_prefix(REPORTS_TABLE, _location_pk(location_id), "REPORT#")
        entries = [history_entry(h) for h in headers]
        entries.sort(key=lambda e: (e.created_at, e.period_year, e.period_month), reverse=True)
        return entries[:limit]

    def load_report(self, report_id: str) -> PayrollReport | None:
        location_id, month, year = parse_report_id(report_id)
        pk = _location_pk(location_id)
        period = period_key(month, year)
        header = self._get_item(REPORTS_TABLE, pk, f"REPORT#{period}")
        if header is None:
            return None
        rows = self._query_prefix(REPORTS_TABLE, pk, f"LINE#{period}#")
        return report_from_records(header, rows)

"""Shape raw Poster records into per-employee aggregates.

Poster is loose about field names and types: employees carry `user_id` or
`id`, transactions carry `user_id` or `staff_id` and close time in
`date_close` or `date`, and money arrives as strings. These helpers absorb
that and never raise on malformed records.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Iterable

from shiftpay.models.payroll import (
    Employee,
    EmployeeStats,
    InventoryResult,
    RevenueAggregate,
)
from shiftpay.payroll.money import ZERO, to_decimal

logger = logging.getLogger(__name__)

UNKNOWN_EMPLOYEE = "Unknown"


def _as_int(value: Any) -> int | None:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def _transaction_employee(record: dict[str, Any]) -> int | None:
    return _as_int(record.get("user_id") or record.get("staff_id"))


def _shift_date(record: dict[str, Any]) -> str | None:
    """Calendar date of a transaction; the time part is discarded."""
    stamp = record.get("date_close") or record.get("date")
    if isinstance(stamp, datetime):
        return stamp.date().isoformat()
    if isinstance(stamp, date):
        return stamp.isoformat()
    if stamp is None:
        return None
    text = str(stamp).strip()
    return text.split(" ")[0] if text else None


def normalize_employees(raw: Iterable[dict[str, Any]]) -> list[Employee]:
    """Build Employee models; duplicates are kept in input order."""
    employees: list[Employee] = []
    for record in raw:
        employee_id = _as_int(record.get("user_id") or record.get("id"))
        if employee_id is None:
            logger.debug("Skipping employee record without id: %r", record)
            continue
        name = record.get("name") or record.get("user_name") or UNKNOWN_EMPLOYEE
        employees.append(Employee(id=employee_id, name=str(name)))
    return employees


def aggregate_revenue_by_employee(transactions: Iterable[dict[str, Any]]) -> list[RevenueAggregate]:
    """Sum revenue and count distinct working days per employee.

    Two sales on the same calendar date are one shift. Records without an
    employee id are skipped; records without a timestamp add revenue only.
    """
    revenue: dict[int, Decimal] = {}
    shift_dates: dict[int, set[str]] = {}

    for record in transactions:
        employee_id = _transaction_employee(record)
        if employee_id is None:
            continue
        revenue[employee_id] = revenue.get(employee_id, ZERO) + to_decimal(record.get("total"))
        dates = shift_dates.setdefault(employee_id, set())
        day = _shift_date(record)
        if day is not None:
            dates.add(day)

    return [
        RevenueAggregate(
            employee_id=employee_id,
            revenue=total,
            shifts_count=len(shift_dates[employee_id]),
        )
        for employee_id, total in revenue.items()
    ]


def employee_stats(transactions: Iterable[dict[str, Any]], employee_id: int) -> EmployeeStats:
    """Revenue, shifts and transaction count for a single employee."""
    matched = [
        t for t in transactions
        if employee_id in (_as_int(t.get("user_id")), _as_int(t.get("staff_id")))
    ]
    days = {d for d in (_shift_date(t) for t in matched) if d is not None}
    return EmployeeStats(
        employee_id=employee_id,
        revenue=sum((to_decimal(t.get("total")) for t in matched), ZERO),
        shifts_count=len(days),
        transactions_count=len(matched),
    )


def compute_inventory_loss(
    revisions: Iterable[dict[str, Any]], *, month: int, year: int
) -> InventoryResult:
    """Net signed difference across the period's inventory revisions."""
    items = list(revisions)
    return InventoryResult(
        month=month,
        year=year,
        total_loss=sum((to_decimal(r.get("difference")) for r in items), ZERO),
        revisions_count=len(items),
    )

"""Flat storage records for saved salary reports, shared by all backends.

A saved report is one header record (period, rates, summary, inventory)
plus one line record per employee, mirroring the relational layout of
`salary_reports` / `inventory_results`.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any

from shiftpay.core.exceptions import ReportNotFoundError
from shiftpay.models.locations import ReportHistoryEntry
from shiftpay.models.payroll import (
    InventoryResult,
    PayrollReport,
    PayrollSummary,
    Period,
    RateParameters,
    SalaryLine,
)
from shiftpay.payroll.money import round_money
from shiftpay.payroll.periods import month_name


def period_key(month: int, year: int) -> str:
    return f"{year:04d}-{month:02d}"


def report_id_for(location_id: str, month: int, year: int) -> str:
    return f"{location_id}:{period_key(month, year)}"


def parse_report_id(report_id: str) -> tuple[str, int, int]:
    """Split a report id into (location_id, month, year)."""
    location_id, _, period = report_id.rpartition(":")
    try:
        year, month = (int(part) for part in period.split("-"))
    except ValueError as exc:
        raise ReportNotFoundError(f"Malformed report id {report_id!r}") from exc
    if not location_id:
        raise ReportNotFoundError(f"Malformed report id {report_id!r}")
    return location_id, month, year


def report_header(location_id: str, report: PayrollReport, created_at: datetime) -> dict[str, Any]:
    period, summary, inventory = report.period, report.summary, report.inventory
    return {
        "report_id": report_id_for(location_id, period.month, period.year),
        "location_id": location_id,
        "period_month": period.month,
        "period_year": period.year,
        "shift_rate": report.parameters.shift_rate,
        "revenue_percent": report.parameters.revenue_percent,
        "employees_count": summary.employees_count,
        "total_revenue": summary.total_revenue,
        "total_base_salary": summary.total_base_salary,
        "total_revenue_bonus": summary.total_revenue_bonus,
        "total_inventory_deduction": summary.total_inventory_deduction,
        "total_salary": summary.total_salary,
        "inventory_month": inventory.month,
        "inventory_year": inventory.year,
        "inventory_loss": inventory.total_loss,
        "revisions_count": inventory.revisions_count,
        "created_at": created_at.isoformat(),
    }


def salary_rows(report: PayrollReport) -> list[dict[str, Any]]:
    """One record per employee; `position` keeps the report's sort order."""
    params = report.parameters
    return [
        {
            "employee_id": line.employee_id,
            "employee_name": line.employee_name,
            "position": index,
            "shifts_count": line.shifts_count,
            "shift_rate": params.shift_rate,
            "revenue": line.revenue,
            "revenue_percent": params.revenue_percent,
            "base_salary": line.base_salary,
            "revenue_bonus": line.revenue_bonus,
            "inventory_loss": line.inventory_deduction,
            "total_salary": line.total_salary,
        }
        for index, line in enumerate(report.employees)
    ]


def inventory_record(location_id: str, inventory: InventoryResult) -> dict[str, Any]:
    return {
        "location_id": location_id,
        "month": inventory.month,
        "year": inventory.year,
        "loss_amount": inventory.total_loss,
        "revisions_count": inventory.revisions_count,
    }


def _money(value: Any) -> Decimal:
    return round_money(Decimal(value))


def report_from_records(header: dict[str, Any], rows: list[dict[str, Any]]) -> PayrollReport:
    """Rebuild the report exactly as it was priced."""
    month, year = int(header["period_month"]), int(header["period_year"])
    ordered = sorted(rows, key=lambda row: int(row["position"]))
    return PayrollReport(
        period=Period(month=month, year=year, month_name=month_name(month)),
        parameters=RateParameters(
            shift_rate=Decimal(header["shift_rate"]),
            revenue_percent=Decimal(header["revenue_percent"]),
        ),
        inventory=InventoryResult(
            month=int(header["inventory_month"]),
            year=int(header["inventory_year"]),
            total_loss=_money(header["inventory_loss"]),
            revisions_count=int(header["revisions_count"]),
        ),
        summary=PayrollSummary(
            employees_count=int(header["employees_count"]),
            total_revenue=_money(header["total_revenue"]),
            total_base_salary=_money(header["total_base_salary"]),
            total_revenue_bonus=_money(header["total_revenue_bonus"]),
            total_inventory_deduction=_money(header["total_inventory_deduction"]),
            total_salary=_money(header["total_salary"]),
        ),
        employees=tuple(
            SalaryLine(
                employee_id=int(row["employee_id"]),
                employee_name=row["employee_name"],
                shifts_count=int(row["shifts_count"]),
                revenue=_money(row["revenue"]),
                base_salary=_money(row["base_salary"]),
                revenue_bonus=_money(row["revenue_bonus"]),
                inventory_deduction=_money(row["inventory_loss"]),
                total_salary=_money(row["total_salary"]),
            )
            for row in ordered
        ),
    )


def history_entry(header: dict[str, Any]) -> ReportHistoryEntry:
    return ReportHistoryEntry(
        report_id=header["report_id"],
        location_id=header["location_id"],
        period_month=int(header["period_month"]),
        period_year=int(header["period_year"]),
        shift_rate=Decimal(header["shift_rate"]),
        revenue_percent=Decimal(header["revenue_percent"]),
        employees_count=int(header["employees_count"]),
        total_salary=_money(header["total_salary"]),
        created_at=datetime.fromisoformat(header["created_at"]),
    )

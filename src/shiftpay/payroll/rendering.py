"""CSV and plain-text renderings of a PayrollReport.

Both functions only format values already on the report; nothing is
recomputed.
"""

from __future__ import annotations

import csv
import io
from decimal import Decimal

from shiftpay.models.payroll import PayrollReport
from shiftpay.payroll.periods import month_name

CSV_HEADER = (
    "Employee",
    "Shifts",
    "Revenue",
    "Base Salary",
    "Revenue Bonus",
    "Inventory Deduction",
    "Total",
)

_RULE = "=" * 59
_THIN_RULE = "-" * 59
_LINE_RULE = "-" * 37


def _money(value: Decimal) -> str:
    return f"{value:.2f}"


def render_csv(report: PayrollReport) -> str:
    """Header row plus one row per salary line, money to 2 decimals."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for line in report.employees:
        writer.writerow([
            line.employee_name,
            line.shifts_count,
            _money(line.revenue),
            _money(line.base_salary),
            _money(line.revenue_bonus),
            _money(line.inventory_deduction),
            _money(line.total_salary),
        ])
    return buffer.getvalue()


def render_narrative(report: PayrollReport) -> str:
    period, params = report.period, report.parameters
    inventory, summary = report.inventory, report.summary
    sign = "+" if inventory.total_loss >= 0 else ""

    parts = [
        _RULE,
        "                  SALARY CALCULATION REPORT",
        _RULE,
        "",
        f"PERIOD: {period.month_name} {period.year}",
        "",
        "PARAMETERS:",
        f"  * Shift rate: {params.shift_rate}",
        f"  * Revenue percent: {params.revenue_percent}%",
        "",
        f"INVENTORY ({month_name(inventory.month)} {inventory.year}):",
        f"  * Result: {sign}{_money(inventory.total_loss)}",
        f"  * Revisions: {inventory.revisions_count}",
        "",
        "SUMMARY:",
        f"  * Working employees: {summary.employees_count}",
        f"  * Total revenue: {_money(summary.total_revenue)}",
        f"  * Base salaries: {_money(summary.total_base_salary)}",
        f"  * Revenue bonuses: {_money(summary.total_revenue_bonus)}",
        f"  * Inventory deductions: {_money(summary.total_inventory_deduction)}",
        f"  * TOTAL PAYROLL: {_money(summary.total_salary)}",
        "",
        _THIN_RULE,
        "EMPLOYEES:",
        _THIN_RULE,
    ]

    for index, line in enumerate(report.employees, start=1):
        parts.extend([
            "",
            f"{index}. {line.employee_name}",
            f"   Shifts: {line.shifts_count}",
            f"   Revenue: {_money(line.revenue)}",
            f"   Base salary: {_money(line.base_salary)}",
            f"   Bonus ({params.revenue_percent}%): {_money(line.revenue_bonus)}",
            f"   Deduction: -{_money(line.inventory_deduction)}",
            f"   {_LINE_RULE}",
            f"   TOTAL: {_money(line.total_salary)}",
        ])

    parts.extend(["", _RULE, ""])
    return "\n".join(parts)

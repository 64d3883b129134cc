"""Salary pricing: shift rate + revenue percent − share of inventory shortage.

Per employee:
    base_salary         = shifts_count × shift_rate
    revenue_bonus       = revenue × revenue_percent / 100
    inventory_deduction = |total_loss| × revenue / total_revenue   (shortage only)
    total_salary        = base_salary + revenue_bonus − inventory_deduction

`total_revenue` spans every revenue aggregate, including employees with no
shifts who are dropped from the report afterwards, so their share of the
shortage does not reach the summary. Every monetary field is rounded on its
own from unrounded inputs.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from shiftpay.models.payroll import (
    Employee,
    EmployeeSalary,
    EmployeeStats,
    InventoryResult,
    PayrollReport,
    PayrollSummary,
    Period,
    RateParameters,
    RevenueAggregate,
    SalaryLine,
)
from shiftpay.payroll.money import ZERO, round_money, to_decimal
from shiftpay.payroll.periods import month_name

HUNDRED = Decimal("100")


def _price_line(
    employee: Employee,
    *,
    shifts_count: int,
    revenue: Decimal,
    total_revenue: Decimal,
    shortage: Decimal,
    shift_rate: Decimal,
    revenue_percent: Decimal,
) -> SalaryLine:
    base_salary = shifts_count * shift_rate
    revenue_bonus = revenue * revenue_percent / HUNDRED

    inventory_deduction = ZERO
    if shortage > 0 and total_revenue > 0:
        inventory_deduction = shortage * revenue / total_revenue

    total_salary = base_salary + revenue_bonus - inventory_deduction

    return SalaryLine(
        employee_id=employee.id,
        employee_name=employee.name,
        shifts_count=shifts_count,
        revenue=round_money(revenue),
        base_salary=round_money(base_salary),
        revenue_bonus=round_money(revenue_bonus),
        inventory_deduction=round_money(inventory_deduction),
        total_salary=round_money(total_salary),
    )


def compute_payroll(
    employees: Iterable[Employee],
    revenue_aggregates: Iterable[RevenueAggregate],
    inventory: InventoryResult,
    shift_rate: Decimal,
    revenue_percent: Decimal,
    *,
    month: int,
    year: int,
) -> PayrollReport:
    """Price every employee and assemble the sorted payroll report."""
    shift_rate = to_decimal(shift_rate)
    revenue_percent = to_decimal(revenue_percent)

    revenue_by_id: dict[int, Decimal] = {}
    shifts_by_id: dict[int, int] = {}
    total_revenue = ZERO
    for aggregate in revenue_aggregates:
        revenue_by_id[aggregate.employee_id] = aggregate.revenue
        shifts_by_id[aggregate.employee_id] = aggregate.shifts_count
        total_revenue += aggregate.revenue

    shortage = abs(inventory.total_loss) if inventory.is_shortage else ZERO
    lines = [
        _price_line(
            employee,
            shifts_count=shifts_by_id.get(employee.id, 0),
            revenue=revenue_by_id.get(employee.id, ZERO),
            total_revenue=total_revenue,
            shortage=shortage,
            shift_rate=shift_rate,
            revenue_percent=revenue_percent,
        )
        for employee in employees
    ]

    working = [line for line in lines if line.shifts_count > 0]
    # sorted() is stable with reverse=True: equal totals keep input order
    working = sorted(working, key=lambda line: line.total_salary, reverse=True)

    summary = PayrollSummary(
        employees_count=len(working),
        total_revenue=round_money(total_revenue),
        total_base_salary=round_money(sum((l.base_salary for l in working), ZERO)),
        total_revenue_bonus=round_money(sum((l.revenue_bonus for l in working), ZERO)),
        total_inventory_deduction=round_money(sum((l.inventory_deduction for l in working), ZERO)),
        total_salary=round_money(sum((l.total_salary for l in working), ZERO)),
    )

    return PayrollReport(
        period=Period(month=month, year=year, month_name=month_name(month)),
        parameters=RateParameters(shift_rate=shift_rate, revenue_percent=revenue_percent),
        inventory=inventory.model_copy(update={"total_loss": round_money(inventory.total_loss)}),
        summary=summary,
        employees=tuple(working),
    )


def compute_employee_salary(
    stats: EmployeeStats, shift_rate: Decimal, revenue_percent: Decimal
) -> EmployeeSalary:
    """Single-employee salary: base pay and revenue bonus only."""
    base_salary = stats.shifts_count * to_decimal(shift_rate)
    revenue_bonus = stats.revenue * to_decimal(revenue_percent) / HUNDRED
    return EmployeeSalary(
        employee_id=stats.employee_id,
        shifts_count=stats.shifts_count,
        revenue=round_money(stats.revenue),
        base_salary=round_money(base_salary),
        revenue_bonus=round_money(revenue_bonus),
        total_salary=round_money(base_salary + revenue_bonus),
    )

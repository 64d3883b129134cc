"""Payroll entities — POS aggregates in, priced salary report out.

Everything here is built fresh per calculation from Poster responses and
discarded once the report has been returned or saved. Money is always
`Decimal`; JSON output renders it as a number.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, Field, PlainSerializer
from pydantic.alias_generators import to_camel

Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

_CAMEL = {"alias_generator": to_camel, "populate_by_name": True}


# ---------------------------------------------------------------------------
# Inputs (shaped from Poster data)
# ---------------------------------------------------------------------------

class Employee(BaseModel):
    """Employee as listed by Poster."""

    model_config = {**_CAMEL, "frozen": True}

    id: int
    name: str = "Unknown"


class RevenueAggregate(BaseModel):
    """Per-employee revenue and distinct working days within a period."""

    model_config = {**_CAMEL, "frozen": True}

    employee_id: int
    revenue: Money = Decimal("0")
    shifts_count: int = Field(default=0, ge=0)


class EmployeeStats(BaseModel):
    """Single-employee view of a period's transactions."""

    model_config = {**_CAMEL, "frozen": True}

    employee_id: int
    revenue: Money = Decimal("0")
    shifts_count: int = 0
    transactions_count: int = 0


class InventoryResult(BaseModel):
    """Net inventory difference for a period (negative = shortage)."""

    model_config = {**_CAMEL, "frozen": True}

    month: int
    year: int
    total_loss: Money = Decimal("0")
    revisions_count: int = 0

    @classmethod
    def empty(cls, month: int, year: int) -> InventoryResult:
        """Neutral result used when inventory data is unavailable."""
        return cls(month=month, year=year)

    @property
    def is_shortage(self) -> bool:
        return self.total_loss < 0


# ---------------------------------------------------------------------------
# Outputs
# ---------------------------------------------------------------------------

class SalaryLine(BaseModel):
    """Priced payroll line for one working employee."""

    model_config = {**_CAMEL, "frozen": True}

    employee_id: int
    employee_name: str
    shifts_count: int
    revenue: Money
    base_salary: Money
    revenue_bonus: Money
    inventory_deduction: Money
    total_salary: Money


class EmployeeSalary(BaseModel):
    """Single-employee salary; carries no inventory deduction."""

    model_config = {**_CAMEL, "frozen": True}

    employee_id: int
    shifts_count: int
    revenue: Money
    base_salary: Money
    revenue_bonus: Money
    total_salary: Money


class Period(BaseModel):
    model_config = {**_CAMEL, "frozen": True}

    month: int
    year: int
    month_name: str


class RateParameters(BaseModel):
    model_config = {**_CAMEL, "frozen": True}

    shift_rate: Money
    revenue_percent: Money


class PayrollSummary(BaseModel):
    """Totals across the employees included in the report."""

    model_config = {**_CAMEL, "frozen": True}

    employees_count: int = 0
    total_revenue: Money = Decimal("0")
    total_base_salary: Money = Decimal("0")
    total_revenue_bonus: Money = Decimal("0")
    total_inventory_deduction: Money = Decimal("0")
    total_salary: Money = Decimal("0")


class PayrollReport(BaseModel):
    """Complete salary calculation for one location and month."""

    model_config = {**_CAMEL, "frozen": True}

    period: Period
    parameters: RateParameters
    inventory: InventoryResult
    summary: PayrollSummary
    employees: tuple[SalaryLine, ...] = ()

"""PayrollService — fetches a location's POS data and prices the payroll.

The three Poster reads are independent and run concurrently in worker
threads; pricing starts only once all three are in. Employee or revenue
failures abort the calculation. Inventory failures fall back to a zero-loss
result so a missing stock count never blocks salaries.
"""

from __future__ import annotations

import asyncio
import logging

from shiftpay.core.exceptions import PayrollCalculationError
from shiftpay.core.protocols import IPosClient, PosClientFactory
from shiftpay.models.params import CalculationParams
from shiftpay.models.payroll import (
    Employee,
    EmployeeSalary,
    InventoryResult,
    PayrollReport,
    RevenueAggregate,
)
from shiftpay.payroll.aggregation import (
    aggregate_revenue_by_employee,
    compute_inventory_loss,
    employee_stats,
    normalize_employees,
)
from shiftpay.payroll.calculator import compute_employee_salary, compute_payroll
from shiftpay.payroll.periods import month_range

logger = logging.getLogger(__name__)


class PayrollService:
    """Stateless calculation entry point; POS clients come from the factory."""

    def __init__(self, *, pos_factory: PosClientFactory) -> None:
        self._pos_factory = pos_factory

    # ---- fetch steps (run in worker threads) ----

    @staticmethod
    def _fetch_employees(pos: IPosClient) -> list[Employee]:
        return normalize_employees(pos.get_employees())

    @staticmethod
    def _fetch_revenue(pos: IPosClient, date_from: str, date_to: str) -> list[RevenueAggregate]:
        return aggregate_revenue_by_employee(pos.get_transactions(date_from, date_to))

    @staticmethod
    def _fetch_inventory(pos: IPosClient, month: int, year: int) -> InventoryResult:
        date_from, date_to = month_range(month, year)
        try:
            revisions = pos.get_inventory_revisions(date_from, date_to)
        except Exception:
            logger.warning(
                "Inventory unavailable for %02d/%d, using zero loss", month, year, exc_info=True,
            )
            return InventoryResult.empty(month, year)
        return compute_inventory_loss(revisions, month=month, year=year)

    # ---- public API ----

    async def check_token(self, account: str, access_token: str) -> bool:
        pos = self._pos_factory(account, access_token)
        return await asyncio.to_thread(pos.validate_token)

    async def calculate(self, params: CalculationParams) -> PayrollReport:
        """Fetch employees, revenue and inventory concurrently, then price."""
        pos = self._pos_factory(params.account, params.access_token)
        date_from, date_to = month_range(params.month, params.year)
        logger.info(
            "Calculating salaries for %s %s..%s", params.account, date_from, date_to,
        )

        try:
            employees, aggregates, inventory = await asyncio.gather(
                asyncio.to_thread(self._fetch_employees, pos),
                asyncio.to_thread(self._fetch_revenue, pos, date_from, date_to),
                asyncio.to_thread(
                    self._fetch_inventory, pos, params.inventory_month, params.inventory_year,
                ),
            )
        except Exception as exc:
            logger.error("Salary calculation failed for %s: %s", params.account, exc)
            raise PayrollCalculationError(f"Failed to calculate salaries: {exc}") from exc

        report = compute_payroll(
            employees,
            aggregates,
            inventory,
            params.shift_rate,
            params.revenue_percent,
            month=params.month,
            year=params.year,
        )
        logger.info(
            "Calculated %d salary lines for %s, total %s",
            report.summary.employees_count, params.account, report.summary.total_salary,
        )
        return report

    async def calculate_employee(self, params: CalculationParams, employee_id: int) -> EmployeeSalary:
        """Base pay and revenue bonus for one employee, without inventory."""
        pos = self._pos_factory(params.account, params.access_token)
        date_from, date_to = month_range(params.month, params.year)
        try:
            transactions = await asyncio.to_thread(pos.get_transactions, date_from, date_to)
        except Exception as exc:
            raise PayrollCalculationError(f"Failed to calculate salary: {exc}") from exc
        stats = employee_stats(transactions, employee_id)
        return compute_employee_salary(stats, params.shift_rate, params.revenue_percent)

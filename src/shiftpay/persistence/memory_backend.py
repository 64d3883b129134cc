"""In-memory backends for unit tests — dict-backed fakes."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from shiftpay.core.exceptions import LocationNotFoundError, ReportConflictError
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


class MemoryPayrollStore:
    """Dict-backed IPayrollStore; saves are staged and committed at once."""

    def __init__(self) -> None:
        self._locations: dict[str, Location] = {}
        self._headers: dict[str, dict[str, Any]] = {}
        self._lines: dict[tuple[str, str, int], dict[str, Any]] = {}
        self._inventory: dict[tuple[str, str], dict[str, Any]] = {}

    def upsert_location(self, account: str, name: str, access_token: str) -> Location:
        existing = self._locations.get(account)
        location = Location(
            location_id=account,
            name=name or account,
            poster_account=account,
            access_token=access_token,
            is_active=existing.is_active if existing else True,
        )
        self._locations[account] = location
        return location

    def get_location(self, location_id: str) -> Location | None:
        return self._locations.get(location_id)

    def list_locations(self) -> list[Location]:
        return sorted(self._locations.values(), key=lambda loc: loc.name)

    def save_report(self, location_id: str, report: PayrollReport) -> str:
        if location_id not in self._locations:
            raise LocationNotFoundError(f"Location {location_id!r} not found")

        period = period_key(report.period.month, report.period.year)
        header = report_header(location_id, report, datetime.now(UTC))
        rows = salary_rows(report)

        staged_lines: dict[tuple[str, str, int], dict[str, Any]] = {}
        for row in rows:
            key = (location_id, period, row["employee_id"])
            if key in self._lines or key in staged_lines:
                raise ReportConflictError(
                    f"Salary report for employee {row['employee_id']} in {period} already exists"
                )
            staged_lines[key] = row
        if header["report_id"] in self._headers:
            raise ReportConflictError(f"Salary report {header['report_id']} already exists")

        inventory_key = (location_id, period_key(report.inventory.month, report.inventory.year))

        # Commit
        self._headers[header["report_id"]] = header
        self._lines.update(staged_lines)
        self._inventory.setdefault(inventory_key, inventory_record(location_id, report.inventory))
        return header["report_id"]

    def list_history(self, location_id: str, limit: int = 10) -> list[ReportHistoryEntry]:
        entries = [
            history_entry(h) for h in self._headers.values() if h["location_id"] == location_id
        ]
        entries.sort(key=lambda e: (e.created_at, e.period_year, e.period_month), reverse=True)
        return entries[:limit]

    def load_report(self, report_id: str) -> PayrollReport | None:
        location_id, month, year = parse_report_id(report_id)
        header = self._headers.get(report_id)
        if header is None:
            return None
        period = period_key(month, year)
        rows = [
            row for (loc, per, _), row in self._lines.items()
            if loc == location_id and per == period
        ]
        return report_from_records(header, rows)

    def inventory_result(self, location_id: str, month: int, year: int) -> dict[str, Any] | None:
        return self._inventory.get((location_id, period_key(month, year)))


class MemoryCounterBackend:
    """Dict-backed ICounterBackend for unit tests; TTL is ignored."""

    def __init__(self) -> None:
        self._counts: dict[str, int] = {}

    def incr(self, key: str, ttl: int) -> int:
        self._counts[key] = self._counts.get(key, 0) + 1
        return self._counts[key]

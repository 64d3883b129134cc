"""Protocol interfaces for all ShiftPay abstractions.

All inter-layer communication uses these Protocols — structural typing,
no inheritance required, easy to swap for in-memory doubles in tests.
"""

from __future__ import annotations

from typing import Callable, Protocol, runtime_checkable

from shiftpay.core.types import JsonDict, LocationId, PosterDate, ReportId
from shiftpay.models.locations import Location, ReportHistoryEntry
from shiftpay.models.payroll import PayrollReport


# ---------------------------------------------------------------------------
# POS data source
# ---------------------------------------------------------------------------

@runtime_checkable
class IPosClient(Protocol):
    """Read-only view of one location's Poster account."""

    def get_employees(self) -> list[JsonDict]: ...

    def get_transactions(self, date_from: PosterDate, date_to: PosterDate) -> list[JsonDict]: ...

    def get_inventory_revisions(self, date_from: PosterDate, date_to: PosterDate) -> list[JsonDict]: ...

    def validate_token(self) -> bool: ...


PosClientFactory = Callable[[str, str], IPosClient]


# ---------------------------------------------------------------------------
# Persistence: Payroll Store
# ---------------------------------------------------------------------------

@runtime_checkable
class IPayrollStore(Protocol):
    """Locations, saved salary reports and inventory results."""

    def upsert_location(self, account: str, name: str, access_token: str) -> Location: ...

    def get_location(self, location_id: LocationId) -> Location | None: ...

    def list_locations(self) -> list[Location]: ...

    def save_report(self, location_id: LocationId, report: PayrollReport) -> ReportId: ...

    def list_history(self, location_id: LocationId, limit: int = 10) -> list[ReportHistoryEntry]: ...

    def load_report(self, report_id: ReportId) -> PayrollReport | None: ...


# ---------------------------------------------------------------------------
# Persistence: Counter Backend
# ---------------------------------------------------------------------------

@runtime_checkable
class ICounterBackend(Protocol):
    """Redis-compatible expiring counter used by the rate limiter."""

    def incr(self, key: str, ttl: int) -> int: ...

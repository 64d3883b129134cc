"""Connected locations and saved-report history."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from shiftpay.models.payroll import Money


class Location(BaseModel):
    """A Poster account connected through OAuth."""

    location_id: str
    name: str
    poster_account: str
    access_token: str = Field(default="", repr=False)
    is_active: bool = True

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class ReportHistoryEntry(BaseModel):
    """One saved salary report, summarised for listing."""

    report_id: str
    location_id: str
    period_month: int
    period_year: int
    shift_rate: Money
    revenue_percent: Money
    employees_count: int = 0
    total_salary: Money = Decimal("0")
    created_at: datetime

    model_config = {"alias_generator": to_camel, "populate_by_name": True}

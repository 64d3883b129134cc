"""Request bodies for the REST API.

Calculation fields are left loosely typed so every problem is reported by
`validate_params` in one response instead of failing on the first bad type.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CalculateRequest(BaseModel):
    """POST /api/salary/calculate and /api/salary/employee/{id}."""

    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    location_id: str | None = None
    month: Any = None
    year: Any = None
    inventory_month: Any = None
    inventory_year: Any = None
    shift_rate: Any = None
    revenue_percent: Any = None

    def to_raw_params(self, account: str, access_token: str) -> dict[str, Any]:
        return {
            "account": account,
            "access_token": access_token,
            "month": self.month,
            "year": self.year,
            "inventory_month": self.inventory_month,
            "inventory_year": self.inventory_year,
            "shift_rate": self.shift_rate,
            "revenue_percent": self.revenue_percent,
        }


class ConnectLocationRequest(BaseModel):
    """POST /api/locations/connect — OAuth callback payload."""

    code: str | None = None
    account: str | None = None
    name: str | None = None

"""Calculation request parameters and their validation outcome."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field, model_validator


class CalculationParams(BaseModel):
    """Validated inputs for one salary calculation.

    The inventory period defaults to the calculation period.
    """

    account: str
    access_token: str
    month: int = Field(ge=1, le=12)
    year: int = Field(ge=2000)
    shift_rate: Decimal = Field(ge=0)
    revenue_percent: Decimal = Field(ge=0, le=100)
    inventory_month: int | None = Field(default=None, ge=1, le=12)
    inventory_year: int | None = Field(default=None, ge=2000)

    model_config = {"str_strip_whitespace": True}

    @model_validator(mode="after")
    def _default_inventory_period(self) -> CalculationParams:
        if self.inventory_month is None:
            self.inventory_month = self.month
        if self.inventory_year is None:
            self.inventory_year = self.year
        return self


class ValidationResult(BaseModel):
    """All validation messages for a parameter set, not just the first."""

    valid: bool
    errors: list[str] = Field(default_factory=list)

"""Calculation parameter checks; all violations are reported together."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

from shiftpay.core.exceptions import ParamsValidationError
from shiftpay.models.params import CalculationParams, ValidationResult

MIN_YEAR = 2000


def _number(value: Any) -> Decimal | None:
    if value is None or isinstance(value, bool) or value == "":
        return None
    try:
        result = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    return result if result.is_finite() else None


def _integer(value: Any) -> int | None:
    number = _number(value)
    if number is None or number != number.to_integral_value():
        return None
    return int(number)


def _month_ok(value: Any) -> bool:
    month = _integer(value)
    return month is not None and 1 <= month <= 12


def _year_ok(value: Any) -> bool:
    year = _integer(value)
    return year is not None and year >= MIN_YEAR


def _optional(params: Mapping[str, Any], key: str) -> Any:
    """Optional field value; blank strings count as absent."""
    value = params.get(key)
    if isinstance(value, str) and not value.strip():
        return None
    return value


def validate_params(params: Mapping[str, Any]) -> ValidationResult:
    """Check a raw parameter mapping (snake_case keys) before any I/O."""
    errors: list[str] = []

    if not str(params.get("account") or "").strip():
        errors.append("Account is required")
    if not str(params.get("access_token") or "").strip():
        errors.append("Access token is required")
    if not _month_ok(params.get("month")):
        errors.append("Invalid month (must be 1-12)")
    if not _year_ok(params.get("year")):
        errors.append("Invalid year (must be 2000 or later)")

    shift_rate = _number(params.get("shift_rate"))
    if shift_rate is None or shift_rate < 0:
        errors.append("Invalid shift rate (must be zero or positive)")

    revenue_percent = _number(params.get("revenue_percent"))
    if revenue_percent is None or not 0 <= revenue_percent <= 100:
        errors.append("Invalid revenue percent (must be 0-100)")

    # Inventory period is optional and defaults to the calculation period
    inventory_month = _optional(params, "inventory_month")
    if inventory_month is not None and not _month_ok(inventory_month):
        errors.append("Invalid inventory month (must be 1-12)")
    inventory_year = _optional(params, "inventory_year")
    if inventory_year is not None and not _year_ok(inventory_year):
        errors.append("Invalid inventory year (must be 2000 or later)")

    return ValidationResult(valid=not errors, errors=errors)


def to_params(params: Mapping[str, Any]) -> CalculationParams:
    """Validate and build CalculationParams, raising with every error found."""
    result = validate_params(params)
    if not result.valid:
        raise ParamsValidationError(result.errors)

    inventory_month = _optional(params, "inventory_month")
    inventory_year = _optional(params, "inventory_year")
    return CalculationParams(
        account=str(params["account"]),
        access_token=str(params["access_token"]),
        month=_integer(params["month"]),
        year=_integer(params["year"]),
        shift_rate=_number(params["shift_rate"]),
        revenue_percent=_number(params["revenue_percent"]),
        inventory_month=_integer(inventory_month) if inventory_month is not None else None,
        inventory_year=_integer(inventory_year) if inventory_year is not None else None,
    )

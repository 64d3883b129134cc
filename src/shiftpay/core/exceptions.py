"""ShiftPay exception hierarchy."""

from __future__ import annotations


class ShiftPayError(Exception):
    """Base exception for all ShiftPay errors."""


class ParamsValidationError(ShiftPayError):
    """Calculation parameters failed validation."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__("Invalid calculation parameters: " + "; ".join(self.errors))


class PosApiError(ShiftPayError):
    """A Poster API request failed."""

    def __init__(self, method: str, message: str) -> None:
        self.method = method
        super().__init__(f"Failed to fetch data from Poster API: {method} ({message})")


class PosterAuthError(ShiftPayError):
    """Poster OAuth code exchange failed."""


class PayrollCalculationError(ShiftPayError):
    """Salary calculation could not be completed."""


class PersistenceError(ShiftPayError):
    """Payroll store operation failed; nothing was written."""


class ReportConflictError(PersistenceError):
    """A salary report already exists for this employee and period."""


class LocationNotFoundError(ShiftPayError):
    """No location registered under the given id."""


class ReportNotFoundError(ShiftPayError):
    """No stored salary report under the given id."""


class CacheError(ShiftPayError):
    """Redis counter operation failed."""

"""In-memory POS double for unit tests — canned Poster payloads."""

from __future__ import annotations

from typing import Any

from shiftpay.core.exceptions import PosApiError


class MemoryPosClient:
    """Canned-response IPosClient; methods listed in `fail_on` raise."""

    def __init__(
        self,
        *,
        employees: list[dict[str, Any]] | None = None,
        transactions: list[dict[str, Any]] | None = None,
        revisions: list[dict[str, Any]] | None = None,
        fail_on: set[str] | None = None,
        token_valid: bool = True,
    ) -> None:
        self.employees = employees or []
        self.transactions = transactions or []
        self.revisions = revisions or []
        self.fail_on = fail_on or set()
        self.token_valid = token_valid
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    def _record(self, method: str, *args: Any) -> None:
        self.calls.append((method, args))
        if method in self.fail_on:
            raise PosApiError(method, "simulated failure")

    def get_employees(self) -> list[dict[str, Any]]:
        self._record("get_employees")
        return list(self.employees)

    def get_transactions(self, date_from: str, date_to: str) -> list[dict[str, Any]]:
        self._record("get_transactions", date_from, date_to)
        return list(self.transactions)

    def get_inventory_revisions(self, date_from: str, date_to: str) -> list[dict[str, Any]]:
        self._record("get_inventory_revisions", date_from, date_to)
        return list(self.revisions)

    def validate_token(self) -> bool:
        self.calls.append(("validate_token", ()))
        return self.token_valid

    def factory(self, account: str, access_token: str) -> MemoryPosClient:
        """PosClientFactory that always hands back this instance."""
        return self

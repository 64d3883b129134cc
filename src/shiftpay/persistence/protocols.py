"""Re-export persistence protocols from core for convenience."""

from __future__ import annotations

from shiftpay.core.protocols import ICounterBackend, IPayrollStore

__all__ = ["ICounterBackend", "IPayrollStore"]

"""Health check endpoints."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from shiftpay.api.dependencies import get_store
from shiftpay.persistence.protocols import IPayrollStore

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


@router.get("/ready")
async def ready(store: IPayrollStore = Depends(get_store)) -> dict[str, str]:
    # Listing locations is enough to prove the store answers
    await asyncio.to_thread(store.list_locations)
    return {"status": "ready"}

"""Pluggable persistence backends behind Protocol interfaces."""

from __future__ import annotations

from shiftpay.core.config import AppSettings
from shiftpay.persistence.dynamodb_backend import DynamoDBPayrollStore
from shiftpay.persistence.redis_backend import RedisCounterBackend


def create_persistence(settings: AppSettings | None = None):
    """Create wired-up persistence backends from application settings.

    Returns:
        Tuple of (payroll_store, counters).
    """
    if settings is None:
        settings = AppSettings()

    store = DynamoDBPayrollStore(
        table_suffix=settings.dynamodb.table_suffix,
        region=settings.dynamodb.region,
        endpoint_url=settings.dynamodb.endpoint_url,
    )

    counters = RedisCounterBackend(
        host=settings.redis.host,
        port=settings.redis.port,
        db=settings.redis.db,
    )

    return store, counters

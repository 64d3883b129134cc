"""FastAPI application with lifespan, middleware and router mounting."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shiftpay.api import middleware
from shiftpay.api.routes import health, locations, salary
from shiftpay.core.config import AppSettings
from shiftpay.core.exceptions import (
    LocationNotFoundError,
    ParamsValidationError,
    PayrollCalculationError,
    PersistenceError,
    PosApiError,
    PosterAuthError,
    ReportConflictError,
    ReportNotFoundError,
    ShiftPayError,
)
from shiftpay.core.logging_config import configure_logging
from shiftpay.core.protocols import ICounterBackend, IPayrollStore, PosClientFactory
from shiftpay.payroll.service import PayrollService
from shiftpay.persistence import create_persistence
from shiftpay.pos.poster_client import PosterAuth, poster_client_factory

_STATUS_BY_ERROR: list[tuple[type[ShiftPayError], int]] = [
    (LocationNotFoundError, 404),
    (ReportNotFoundError, 404),
    (ReportConflictError, 409),
    (PayrollCalculationError, 502),
    (PosApiError, 502),
    (PosterAuthError, 502),
    (PersistenceError, 500),
    (ShiftPayError, 500),
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Initialize and tear down application resources."""
    configure_logging(app.state.settings.log_level)
    yield


async def _validation_error(request: Request, exc: ParamsValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"success": False, "errors": exc.errors})


def _error_handler(status_code: int):
    async def handler(request: Request, exc: ShiftPayError) -> JSONResponse:
        return JSONResponse(status_code=status_code, content={"success": False, "error": str(exc)})

    return handler


def create_app(
    settings: AppSettings | None = None,
    *,
    store: IPayrollStore | None = None,
    counters: ICounterBackend | None = None,
    pos_factory: PosClientFactory | None = None,
    auth: PosterAuth | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Collaborators not passed in are built from settings.
    """
    settings = settings or AppSettings()
    if store is None or counters is None:
        default_store, default_counters = create_persistence(settings)
        store = store or default_store
        counters = counters or default_counters

    app = FastAPI(
        title="ShiftPay Salary Calculator",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store
    app.state.counters = counters
    app.state.payroll_service = PayrollService(
        pos_factory=pos_factory or poster_client_factory(
            api_domain=settings.poster.api_domain, timeout=settings.poster.timeout,
        ),
    )
    app.state.auth = auth or PosterAuth(
        settings.poster.app_id,
        settings.poster.app_secret,
        settings.poster.redirect_uri,
        base_url=settings.poster.base_url,
        timeout=settings.poster.timeout,
    )

    # Registered inner to outer: CORS wraps everything
    app.middleware("http")(middleware.rate_limit)
    app.middleware("http")(middleware.security_headers)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ParamsValidationError, _validation_error)
    for error_type, status_code in _STATUS_BY_ERROR:
        app.add_exception_handler(error_type, _error_handler(status_code))

    app.include_router(health.router)
    app.include_router(salary.router, prefix="/api")
    app.include_router(locations.router, prefix="/api")
    return app

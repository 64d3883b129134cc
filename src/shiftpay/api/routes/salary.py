"""Salary calculation, history and export endpoints."""

from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from shiftpay.api.dependencies import get_payroll_service, get_store
from shiftpay.api.schemas import CalculateRequest
from shiftpay.core.exceptions import (
    LocationNotFoundError,
    ParamsValidationError,
    PersistenceError,
    ReportNotFoundError,
)
from shiftpay.models.locations import Location
from shiftpay.payroll.rendering import render_csv, render_narrative
from shiftpay.payroll.service import PayrollService
from shiftpay.payroll.validation import to_params
from shiftpay.persistence.protocols import IPayrollStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["salary"])


def _expired_token() -> JSONResponse:
    return JSONResponse(
        status_code=401,
        content={
            "success": False,
            "error": "Invalid or expired Poster access token. Please re-authenticate.",
        },
    )


async def _load_location(store: IPayrollStore, location_id: str | None) -> Location:
    if not location_id:
        raise ParamsValidationError(["Location is required"])
    location = await asyncio.to_thread(store.get_location, location_id)
    if location is None:
        raise LocationNotFoundError(f"Location {location_id!r} not found")
    return location


@router.post("/salary/calculate")
async def calculate_salary(
    body: CalculateRequest,
    store: IPayrollStore = Depends(get_store),
    service: PayrollService = Depends(get_payroll_service),
):
    """Calculate and save the month's payroll for a location."""
    location = await _load_location(store, body.location_id)
    params = to_params(body.to_raw_params(location.poster_account, location.access_token))

    if not await service.check_token(params.account, params.access_token):
        return _expired_token()

    report = await service.calculate(params)

    report_id: str | None = None
    try:
        report_id = await asyncio.to_thread(store.save_report, location.location_id, report)
    except PersistenceError as exc:
        logger.error("Salary report for %s not saved: %s", location.location_id, exc)

    return {
        "success": True,
        "saved": report_id is not None,
        "reportId": report_id,
        "report": report.model_dump(mode="json", by_alias=True),
    }


@router.post("/salary/employee/{employee_id}")
async def calculate_employee_salary(
    employee_id: int,
    body: CalculateRequest,
    store: IPayrollStore = Depends(get_store),
    service: PayrollService = Depends(get_payroll_service),
):
    """Single-employee salary without inventory deduction; not saved."""
    location = await _load_location(store, body.location_id)
    params = to_params(body.to_raw_params(location.poster_account, location.access_token))
    salary = await service.calculate_employee(params, employee_id)
    return {"success": True, "salary": salary.model_dump(mode="json", by_alias=True)}


@router.get("/salary/history/{location_id}")
async def get_salary_history(
    location_id: str,
    limit: int = Query(10, ge=1, le=100),
    store: IPayrollStore = Depends(get_store),
) -> dict:
    history = await asyncio.to_thread(store.list_history, location_id, limit)
    return {
        "success": True,
        "history": [entry.model_dump(mode="json", by_alias=True) for entry in history],
    }


@router.get("/salary/export/{report_id}")
async def export_report(
    report_id: str,
    format: str = Query("csv", pattern="^(csv|text)$"),
    store: IPayrollStore = Depends(get_store),
) -> Response:
    """Saved report as a CSV attachment or the narrative text report."""
    report = await asyncio.to_thread(store.load_report, report_id)
    if report is None:
        raise ReportNotFoundError(f"Report {report_id!r} not found")

    if format == "text":
        return PlainTextResponse(render_narrative(report))

    filename = "salary_report_" + report_id.replace(":", "_") + ".csv"
    return Response(
        content=render_csv(report),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )

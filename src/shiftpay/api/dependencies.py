"""FastAPI dependencies resolving the collaborators stored on app.state."""

from __future__ import annotations

from fastapi import Request

from shiftpay.core.config import AppSettings
from shiftpay.payroll.service import PayrollService
from shiftpay.persistence.protocols import IPayrollStore
from shiftpay.pos.poster_client import PosterAuth


def get_settings(request: Request) -> AppSettings:
    return request.app.state.settings


def get_store(request: Request) -> IPayrollStore:
    return request.app.state.store


def get_payroll_service(request: Request) -> PayrollService:
    return request.app.state.payroll_service


def get_auth(request: Request) -> PosterAuth:
    return request.app.state.auth

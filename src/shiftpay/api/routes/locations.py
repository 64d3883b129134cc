"""Location listing and Poster OAuth connection endpoints."""

from __future__ import annotations

import asyncio

from fastapi import APIRouter, Depends, Request

from shiftpay.api.dependencies import get_auth, get_settings, get_store
from shiftpay.api.schemas import ConnectLocationRequest
from shiftpay.core.config import AppSettings
from shiftpay.core.exceptions import ParamsValidationError
from shiftpay.persistence.protocols import IPayrollStore
from shiftpay.pos.poster_client import PosterAuth

router = APIRouter(tags=["locations"])


@router.get("/locations")
async def list_locations(store: IPayrollStore = Depends(get_store)) -> dict:
    locations = await asyncio.to_thread(store.list_locations)
    return {
        "success": True,
        "locations": [{"id": loc.location_id, "name": loc.name} for loc in locations],
    }


@router.post("/locations/connect")
async def connect_location(
    body: ConnectLocationRequest,
    store: IPayrollStore = Depends(get_store),
    auth: PosterAuth = Depends(get_auth),
) -> dict:
    """Exchange the OAuth code and register (or refresh) the location."""
    if not body.code or not body.account:
        raise ParamsValidationError(["Missing required parameters: code and account"])

    access_token = await asyncio.to_thread(auth.exchange_code, body.account, body.code)
    location = await asyncio.to_thread(
        store.upsert_location, body.account, body.name or body.account, access_token,
    )
    return {"success": True, "location": {"id": location.location_id, "name": location.name}}


@router.get("/auth/poster")
async def get_auth_url(
    request: Request,
    settings: AppSettings = Depends(get_settings),
    auth: PosterAuth = Depends(get_auth),
) -> dict:
    redirect_uri = settings.poster.redirect_uri or str(
        request.url_for("get_auth_url")
    ) + "/callback"
    return {"success": True, "authUrl": auth.auth_url(redirect_uri)}

"""Poster POS REST client implementing IPosClient, plus the OAuth helper."""

from __future__ import annotations

from typing import Any
from urllib.parse import urlencode

import requests

from shiftpay.core.exceptions import PosApiError, PosterAuthError


class PosterClient:
    """Production IPosClient bound to one Poster account."""

    def __init__(
        self,
        account: str,
        access_token: str,
        *,
        api_domain: str = "joinposter.com",
        timeout: int = 30,
        session: requests.Session | None = None,
    ) -> None:
        self._account = account
        self._access_token = access_token
        self._api_domain = api_domain
        self._timeout = timeout
        self._session = session or requests.Session()

    def _request(self, method: str, params: dict[str, Any] | None = None) -> Any:
        """GET an API method and return its `response` payload."""
        url = f"https://{self._account}.{self._api_domain}/api/{method}"
        try:
            resp = self._session.get(
                url,
                headers={"Authorization": f"Bearer {self._access_token}"},
                params=params or {},
                timeout=self._timeout,
            )
            resp.raise_for_status()
            payload = resp.json()
        except (requests.RequestException, ValueError) as exc:
            raise PosApiError(method, str(exc)) from exc

        if not isinstance(payload, dict):
            raise PosApiError(method, "unexpected payload")
        if "error" in payload:
            raise PosApiError(method, str(payload["error"]))
        return payload.get("response")

    def _request_list(self, method: str, params: dict[str, Any] | None = None) -> list[dict[str, Any]]:
        data = self._request(method, params)
        return data if isinstance(data, list) else []

    # ---- IPosClient methods ----

    def get_employees(self) -> list[dict[str, Any]]:
        return self._request_list("access.getEmployees")

    def get_transactions(self, date_from: str, date_to: str) -> list[dict[str, Any]]:
        return self._request_list(
            "dash.getTransactions",
            {"dateFrom": date_from, "dateTo": date_to, "type": "sale"},
        )

    def get_inventory_revisions(self, date_from: str, date_to: str) -> list[dict[str, Any]]:
        return self._request_list(
            "storage.getInventoryRevisions",
            {"dateFrom": date_from, "dateTo": date_to},
        )

    def validate_token(self) -> bool:
        try:
            self._request("settings.getAllSettings")
        except PosApiError:
            return False
        return True


class PosterAuth:
    """OAuth authorization-code flow for connecting a Poster account."""

    def __init__(
        self,
        app_id: str,
        app_secret: str,
        redirect_uri: str = "",
        *,
        base_url: str = "https://joinposter.com",
        timeout: int = 30,
        session: requests.Session | None = None,
    ) -> None:
        self._app_id = app_id
        self._app_secret = app_secret
        self._redirect_uri = redirect_uri
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()

    def auth_url(self, redirect_uri: str | None = None) -> str:
        query = urlencode({
            "application_id": self._app_id,
            "redirect_uri": redirect_uri or self._redirect_uri,
            "response_type": "code",
        })
        return f"{self._base_url}/api/auth?{query}"

    def exchange_code(self, account: str, code: str) -> str:
        """Trade an authorization code for the account's access token."""
        try:
            resp = self._session.post(
                f"{self._base_url}/api/auth",
                json={
                    "application_id": self._app_id,
                    "application_secret": self._app_secret,
                    "grant_type": "authorization_code",
                    "code": code,
                    "redirect_uri": self._redirect_uri,
                },
                timeout=self._timeout,
            )
            resp.raise_for_status()
            payload = resp.json()
        except (requests.RequestException, ValueError) as exc:
            raise PosterAuthError(f"Poster auth failed for {account!r}: {exc}") from exc

        token = payload.get("access_token") if isinstance(payload, dict) else None
        if not token:
            raise PosterAuthError(f"Poster auth returned no access token for {account!r}")
        return str(token)


def poster_client_factory(*, api_domain: str = "joinposter.com", timeout: int = 30):
    """PosClientFactory building a PosterClient per (account, access_token)."""

    def factory(account: str, access_token: str) -> PosterClient:
        return PosterClient(account, access_token, api_domain=api_domain, timeout=timeout)

    return factory

"""Async HTTP transport for the dashboard API with token management."""

from __future__ import annotations

from typing import Any, Callable

import httpx
from loguru import logger
from pydantic import ValidationError

from ..models.outcome import (
    Failure,
    RequestOutcome,
    Success,
    extract_error_message,
)
from ..models.user import UserSummary
from ..storage.session import CredentialStore, get_credential_store
from . import routes
from .refresh import RefreshCoordinator


class TaskdashClient:
    """Low-level HTTP client that never raises for HTTP outcomes.

    The client wraps :class:`httpx.AsyncClient` and:

    * attaches ``Authorization: Bearer <token>`` from the credential store,
    * normalises every response (and every transport error) into a
      :class:`~taskdash.models.outcome.Success` or
      :class:`~taskdash.models.outcome.Failure`,
    * hands ``401`` responses to the :class:`RefreshCoordinator` and
      retries the request once with the renewed token,
    * stores the session returned by the login and admin registration
      endpoints.

    Example::

        async with TaskdashClient("http://localhost:8080/api/v1") as client:
            outcome = await client.get("/tasks", params={"limit": 10})
    """

    def __init__(
        self,
        base_url: str,
        credentials: CredentialStore | None = None,
        coordinator: RefreshCoordinator | None = None,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
        on_session_expired: Callable[[], None] | None = None,
    ) -> None:
        self._credentials = credentials if credentials is not None else get_credential_store()
        if coordinator is None:
            coordinator = RefreshCoordinator(self._credentials, on_session_expired)
        self._coordinator = coordinator
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    @property
    def credentials(self) -> CredentialStore:
        return self._credentials

    @property
    def coordinator(self) -> RefreshCoordinator:
        return self._coordinator

    def _auth_headers(self, token: str | None) -> dict[str, str]:
        if not token:
            return {}
        return {"Authorization": f"Bearer {token}"}

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> RequestOutcome[Any]:
        """Send a request and return its normalised outcome."""
        method = method.upper()
        token = self._credentials.access_token
        outcome = await self._send(method, path, params=params, json=json, token=token)

        if isinstance(outcome, Failure):
            if outcome.status_code == 401 and path not in routes.NO_REFRESH_ROUTES:
                return await self._recover(method, path, params, json, token, outcome)
            return outcome

        if method == "POST" and path in routes.SESSION_ISSUING_ROUTES:
            self._store_session(outcome.data)
        return outcome

    async def get(self, path: str, params: dict[str, Any] | None = None) -> RequestOutcome[Any]:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json: Any = None) -> RequestOutcome[Any]:
        return await self.request("POST", path, json=json)

    async def put(self, path: str, json: Any = None) -> RequestOutcome[Any]:
        return await self.request("PUT", path, json=json)

    async def delete(self, path: str) -> RequestOutcome[Any]:
        return await self.request("DELETE", path)

    async def _recover(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None,
        json: Any,
        sent_token: str | None,
        unauthorized: Failure,
    ) -> RequestOutcome[Any]:
        """Renew the access token and replay the request at most once."""
        current = self._credentials.access_token
        if sent_token and not current:
            # The session was wiped while this request was in flight.
            logger.debug(f"{method} {path} unauthorized after session expired; not recovering")
            return unauthorized
        if current and current != sent_token:
            # Another request already renewed the token while this one was in flight.
            token = current
        else:
            token = await self._coordinator.recover(self._exchange_refresh_token)
        if not token:
            return unauthorized

        logger.debug(f"Retrying {method} {path} with renewed token")
        retried = await self._send(method, path, params=params, json=json, token=token)
        if isinstance(retried, Failure) and retried.status_code == 401:
            logger.warning(f"{method} {path} rejected again after token refresh")
            # Counts as a new trigger for the coordinator, never as another retry.
            await self._coordinator.recover(self._exchange_refresh_token)
        return retried

    async def _exchange_refresh_token(self, refresh_token: str) -> RequestOutcome[Any]:
        return await self._send(
            "POST",
            routes.REFRESH_TOKEN,
            json={"refreshToken": refresh_token},
            token=None,
        )

    async def _send(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        token: str | None = None,
    ) -> RequestOutcome[Any]:
        try:
            resp = await self._http.request(
                method,
                path,
                params=params,
                json=json,
                headers=self._auth_headers(token),
            )
        except httpx.HTTPError as exc:
            logger.error(f"{method} {path} failed: {exc}")
            return Failure.internal(str(exc))

        payload = self._decode(resp)
        logger.debug(f"{method} {path} -> HTTP {resp.status_code}")
        if resp.is_success:
            return Success(payload, resp.status_code)
        return Failure.from_status(resp.status_code, extract_error_message(payload))

    @staticmethod
    def _decode(resp: httpx.Response) -> Any:
        if not resp.content:
            return {}
        try:
            return resp.json()
        except ValueError:
            return {"raw": resp.text}

    def _store_session(self, payload: Any) -> None:
        if not isinstance(payload, dict) or not payload.get("accessToken"):
            return
        user = None
        raw_user = payload.get("user")
        if isinstance(raw_user, dict):
            try:
                user = UserSummary.model_validate(raw_user)
            except ValidationError as exc:
                logger.warning(f"Session user could not be parsed: {exc}")
        self._credentials.set_session(payload["accessToken"], payload.get("refreshToken"), user)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def close(self) -> None:
        """Close the underlying HTTP transport."""
        await self._http.aclose()

    @property
    def is_closed(self) -> bool:
        return self._http.is_closed

    async def __aenter__(self) -> TaskdashClient:
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()

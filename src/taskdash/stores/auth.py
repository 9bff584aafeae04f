"""Login state: wraps the session endpoints and the credential store."""

from __future__ import annotations

from typing import Any, Callable

from loguru import logger

from ..api import auth
from ..api.client import TaskdashClient
from ..models.outcome import ErrorKind, Failure, RequestOutcome
from ..models.user import UserSummary


class AuthStore:
    """Request status for login, registration and logout.

    The session itself lives in the client's credential store, which the
    client fills in when a login or registration succeeds.
    """

    def __init__(self, client: TaskdashClient, on_logout: Callable[[], None] | None = None) -> None:
        self._client = client
        self._on_logout = on_logout
        self.loading = False
        self.last_error: ErrorKind | None = None
        self.last_status_code: int | None = None

    @property
    def is_logged_in(self) -> bool:
        return self._client.credentials.is_logged_in

    @property
    def user(self) -> UserSummary | None:
        return self._client.credentials.user

    async def log_in(self, email: str, password: str) -> int:
        """Log in; returns the status code (``409`` means bad credentials)."""
        return await self._track(auth.login(self._client, email, password))

    async def register_admin(self, username: str, email: str, password: str) -> int:
        return await self._track(auth.register_admin(self._client, username, email, password))

    async def log_out(self) -> None:
        """Revoke the session server side and always wipe it locally."""
        try:
            outcome = await auth.logout(self._client)
            if isinstance(outcome, Failure):
                logger.warning(f"Server logout failed (HTTP {outcome.status_code}); clearing local session anyway")
        finally:
            self.clear_state()

    async def _track(self, request) -> int:
        self.loading = True
        try:
            outcome: RequestOutcome[Any] = await request
        finally:
            self.loading = False
        self.last_status_code = outcome.status_code
        self.last_error = outcome.error_kind if isinstance(outcome, Failure) else None
        return outcome.status_code

    def clear_request_state(self) -> None:
        self.loading = False
        self.last_error = None
        self.last_status_code = None

    def clear_state(self) -> None:
        """Drop the request status and the stored session."""
        self.clear_request_state()
        self._client.credentials.clear()
        if self._on_logout is not None:
            self._on_logout()

"""Single-flight recovery from expired access tokens.

Any number of requests may hit ``401`` while an access token is stale.
The first one starts a refresh-token exchange; every other one arriving
before it resolves awaits the same exchange, so one burst of ``401``
responses costs exactly one call to the refresh endpoint.
"""

from __future__ import annotations

import asyncio
from enum import Enum
from typing import Any, Awaitable, Callable

from loguru import logger

from ..models.outcome import RequestOutcome, Success
from ..storage.session import CredentialStore

RefreshExchange = Callable[[str], Awaitable[RequestOutcome[Any]]]


class RefreshState(str, Enum):
    IDLE = "idle"
    REFRESHING = "refreshing"


class RefreshCoordinator:
    """Owns the refresh state machine for one credential store.

    *on_session_expired* is invoked after the credentials have been wiped
    because the session could not be renewed (no refresh token, or the
    refresh endpoint refused it).
    """

    def __init__(
        self,
        credentials: CredentialStore,
        on_session_expired: Callable[[], None] | None = None,
    ) -> None:
        self._credentials = credentials
        self._on_session_expired = on_session_expired
        self._pending: asyncio.Future[str | None] | None = None

    @property
    def state(self) -> RefreshState:
        if self._pending is None:
            return RefreshState.IDLE
        return RefreshState.REFRESHING

    async def recover(self, exchange: RefreshExchange) -> str | None:
        """Return a renewed access token, or ``None`` if the session is gone.

        The pending exchange is checked and installed without yielding to
        the event loop, so concurrent callers always join a single exchange.
        """
        if self._pending is None:
            refresh_token = self._credentials.refresh_token
            if not refresh_token:
                logger.warning("Access token rejected and no refresh token stored")
                self._expire()
                return None
            self._pending = asyncio.ensure_future(self._exchange(exchange, refresh_token))
        return await asyncio.shield(self._pending)

    async def _exchange(self, exchange: RefreshExchange, refresh_token: str) -> str | None:
        try:
            logger.debug("Refreshing access token")
            outcome = await exchange(refresh_token)
            access_token = None
            if isinstance(outcome, Success) and isinstance(outcome.data, dict):
                access_token = outcome.data.get("accessToken")
            if not access_token:
                logger.warning(f"Token refresh refused (HTTP {outcome.status_code})")
                self._expire()
                return None
            self._credentials.set_access_token(access_token)
            logger.debug("Access token refreshed")
            return access_token
        finally:
            self._pending = None

    def _expire(self) -> None:
        self._credentials.clear()
        if self._on_session_expired is not None:
            self._on_session_expired()

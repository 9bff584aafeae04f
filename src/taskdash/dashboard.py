"""Wiring for a dashboard session and the policies that sit above the stores.

The stores never refetch after a mutation and never show messages; this
module does both, and reacts to the session expiring by wiping every
store.
"""

from __future__ import annotations

from typing import Any, Awaitable

import httpx
from loguru import logger

from .api.client import TaskdashClient
from .api.projects import ProjectService
from .api.tasks import TaskService
from .api.teams import TeamService
from .api.users import UserService
from .models.page import ProjectFilters, TaskFilters, UserFilters
from .models.project import Project, Task
from .models.user import User
from .storage.config import AppSettings
from .storage.session import CredentialStore, get_credential_store
from .stores import messages
from .stores.auth import AuthStore
from .stores.banner import DEFAULT_TIMEOUT_SECONDS, Banner
from .stores.collection import PagedCollectionStore
from .stores.messages import MessageTable


class Dashboard:
    """One API client plus the stores a dashboard screen reads from."""

    def __init__(
        self,
        base_url: str,
        credentials: CredentialStore | None = None,
        *,
        page_limit: int = 10,
        timeout: float = 30.0,
        banner_timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.credentials = credentials if credentials is not None else get_credential_store()
        self.session_expired = False
        self.client = TaskdashClient(
            base_url,
            self.credentials,
            timeout=timeout,
            transport=transport,
            on_session_expired=self._handle_session_expired,
        )
        self.auth = AuthStore(self.client, on_logout=self._reset_stores)
        self.teams = TeamService(self.client)
        self.users_api = UserService(self.client)
        self.projects: PagedCollectionStore[Project, ProjectFilters] = PagedCollectionStore(
            ProjectService(self.client), ProjectFilters(limit=page_limit)
        )
        self.tasks: PagedCollectionStore[Task, TaskFilters] = PagedCollectionStore(
            TaskService(self.client), TaskFilters(limit=page_limit)
        )
        self.users: PagedCollectionStore[User, UserFilters] = PagedCollectionStore(
            self.users_api, UserFilters(limit=page_limit)
        )
        self.banner = Banner(banner_timeout, on_dismiss=self.clear_request_state)

    @classmethod
    def from_settings(cls, settings: dict[str, Any] | None = None, **kwargs: Any) -> Dashboard:
        """Build a dashboard from :class:`AppSettings` values."""
        if settings is None:
            settings = AppSettings.load()
        return cls(
            settings["api_url"],
            page_limit=int(settings["page_limit"]),
            timeout=float(settings["timeout_seconds"]),
            banner_timeout=float(settings["banner_timeout_seconds"]),
            **kwargs,
        )

    @property
    def stores(self) -> tuple[PagedCollectionStore[Any, Any], ...]:
        return (self.projects, self.tasks, self.users)

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    async def log_in(self, email: str, password: str) -> int:
        status = await self.auth.log_in(email, password)
        if self.auth.is_logged_in and status < 300:
            self.session_expired = False
        else:
            self.banner.show_status(messages.LOGIN, status)
        return status

    async def register_admin(self, username: str, email: str, password: str) -> int:
        status = await self.auth.register_admin(username, email, password)
        if status < 300:
            self.session_expired = False
        else:
            self.banner.show_status(messages.REGISTER_ADMIN, status)
        return status

    async def log_out(self) -> None:
        await self.auth.log_out()

    def _handle_session_expired(self) -> None:
        logger.warning("Session expired; login required")
        self.session_expired = True
        self.auth.clear_request_state()
        self._reset_stores()

    def _reset_stores(self) -> None:
        for store in self.stores:
            store.reset()

    # ------------------------------------------------------------------
    # Store orchestration
    # ------------------------------------------------------------------

    async def fetch(self, store: PagedCollectionStore[Any, Any], filters: Any = None) -> None:
        await store.fetch(filters)
        if store.error:
            self.banner.show_status(messages.FETCH, store.last_status_code)

    async def mutate(
        self,
        store: PagedCollectionStore[Any, Any],
        operation: Awaitable[int],
        table: MessageTable | None = None,
    ) -> int:
        """Await a store mutation and refetch the current page if it succeeded.

        Example::

            await dashboard.mutate(
                dashboard.tasks, dashboard.tasks.create(body), messages.CREATE_TASK
            )
        """
        status = await operation
        if 200 <= status < 300:
            await store.refetch()
        elif table is not None:
            self.banner.show_status(table, status)
        return status

    def clear_request_state(self) -> None:
        self.auth.clear_request_state()
        for store in self.stores:
            store.clear_request_state()

    async def close(self) -> None:
        await self.client.close()

    async def __aenter__(self) -> Dashboard:
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()

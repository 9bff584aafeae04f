"""Tests for the dashboard wiring: login flow, expiry, and refetch after mutations."""

import json

import httpx
import pytest

from taskdash.dashboard import Dashboard
from taskdash.models.project import TaskCreate
from taskdash.stores import messages

from .conftest import BASE_URL
from .fakes import make_tasks


class FakeBackend:
    """Minimal API: login, logout, refresh and a task list."""

    def __init__(self, user_payload):
        self.user_payload = user_payload
        self.tasks = make_tasks(2)
        self.logout_status = 204
        self.refresh_status = 200
        self.create_status = 201
        self.valid_token = "access-1"
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path.removeprefix("/api/v1")
        self.requests.append((request.method, path))

        if path == "/auth/login":
            body = json.loads(request.content)
            if body["password"] != "secret":
                return httpx.Response(409, json={"errors": {"body": "invalid credentials"}})
            return httpx.Response(
                200,
                json={"accessToken": "access-1", "refreshToken": "refresh-1", "user": self.user_payload},
            )
        if path == "/auth/logout":
            return httpx.Response(self.logout_status)
        if path == "/auth/refresh-token":
            if self.refresh_status != 200:
                return httpx.Response(self.refresh_status, json={"errors": {"body": "invalid token"}})
            return httpx.Response(200, json={"accessToken": self.valid_token})

        if request.headers.get("Authorization") != f"Bearer {self.valid_token}":
            return httpx.Response(401, json={"errors": {"body": "unauthorized"}})
        if path == "/tasks" and request.method == "GET":
            return httpx.Response(
                200, json={"data": self.tasks, "pagination": {"next_cursor": "", "prev_cursor": ""}}
            )
        if path == "/tasks" and request.method == "POST":
            if self.create_status >= 300:
                return httpx.Response(self.create_status, json={"errors": {"body": "nope"}})
            task = {"id": f"t-{len(self.tasks) + 1}", **json.loads(request.content)}
            self.tasks.append(task)
            return httpx.Response(201, json=task)
        return httpx.Response(404)


@pytest.fixture()
def backend(user_payload):
    return FakeBackend(user_payload)


@pytest.fixture()
def make_dashboard(credentials, backend):
    def factory(**kwargs):
        return Dashboard(BASE_URL, credentials, transport=httpx.MockTransport(backend), **kwargs)

    return factory


# =========================================================================
# Login / logout
# =========================================================================


class TestSession:
    @pytest.mark.asyncio
    async def test_login_success(self, make_dashboard, credentials):
        async with make_dashboard() as dash:
            status = await dash.log_in("ana@example.com", "secret")

        assert status == 200
        assert dash.auth.is_logged_in
        assert credentials.access_token == "access-1"
        assert credentials.team_id == "team-1"
        assert not dash.banner.visible

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, make_dashboard, credentials):
        async with make_dashboard() as dash:
            status = await dash.log_in("ana@example.com", "wrong")
            assert dash.banner.message == "Invalid email or password."
            dash.banner.dismiss()

        assert status == 409
        assert not credentials.is_logged_in
        assert dash.auth.last_error is None

    @pytest.mark.asyncio
    async def test_logout_clears_session_even_if_server_fails(self, make_dashboard, backend, credentials):
        backend.logout_status = 500
        async with make_dashboard() as dash:
            await dash.log_in("ana@example.com", "secret")
            await dash.fetch(dash.tasks)
            assert len(dash.tasks.page.items) == 2

            await dash.log_out()

        assert ("DELETE", "/auth/logout") in backend.requests
        assert not credentials.is_logged_in
        assert credentials.access_token is None
        assert dash.tasks.page.items == []

    @pytest.mark.asyncio
    async def test_session_expiry_resets_stores(self, make_dashboard, backend, credentials):
        async with make_dashboard() as dash:
            await dash.log_in("ana@example.com", "secret")
            await dash.fetch(dash.tasks)

            backend.valid_token = "rotated"
            backend.refresh_status = 401
            await dash.tasks.refetch()

        assert dash.session_expired
        assert not credentials.is_logged_in
        assert dash.tasks.page.items == []

    def test_from_settings(self, credentials):
        settings = {
            "api_url": BASE_URL,
            "page_limit": 25,
            "timeout_seconds": 5,
            "banner_timeout_seconds": 1,
        }
        dash = Dashboard.from_settings(settings, credentials=credentials)
        assert dash.tasks.filters.limit == 25
        assert dash.projects.filters.limit == 25


# =========================================================================
# Orchestration
# =========================================================================


class TestOrchestration:
    @pytest.mark.asyncio
    async def test_mutate_refetches_on_success(self, make_dashboard, backend):
        async with make_dashboard() as dash:
            await dash.log_in("ana@example.com", "secret")
            await dash.fetch(dash.tasks)

            status = await dash.mutate(
                dash.tasks,
                dash.tasks.create(TaskCreate(title="Task 3", projectId="p-1")),
                messages.CREATE_TASK,
            )

        assert status == 201
        assert [t.title for t in dash.tasks.page.items] == ["Task 1", "Task 2", "Task 3"]
        assert backend.requests.count(("GET", "/tasks")) == 2

    @pytest.mark.asyncio
    async def test_mutate_failure_shows_banner(self, make_dashboard, backend):
        backend.create_status = 404
        async with make_dashboard() as dash:
            await dash.log_in("ana@example.com", "secret")
            await dash.fetch(dash.tasks)

            status = await dash.mutate(
                dash.tasks,
                dash.tasks.create(TaskCreate(title="Task 3", projectId="missing")),
                messages.CREATE_TASK,
            )
            assert dash.banner.message == "Invalid project."
            assert dash.tasks.error

            dash.banner.dismiss()
            assert not dash.tasks.error

        assert status == 404
        assert backend.requests.count(("GET", "/tasks")) == 1

    @pytest.mark.asyncio
    async def test_fetch_failure_shows_banner(self, make_dashboard):
        async with make_dashboard() as dash:
            await dash.fetch(dash.tasks)
            assert dash.banner.message == messages.FETCH.default
            dash.banner.dismiss()

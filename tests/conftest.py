"""Shared fixtures: an isolated credential store and mock-transport clients."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import httpx
import pytest

from taskdash.api.client import TaskdashClient
from taskdash.models.user import UserSummary
from taskdash.storage.session import CredentialStore

BASE_URL = "http://api.test/api/v1"


@pytest.fixture()
def session_file(tmp_path: Path) -> Path:
    return tmp_path / "session.json"


@pytest.fixture()
def credentials(session_file: Path) -> CredentialStore:
    return CredentialStore(session_file)


@pytest.fixture()
def user_payload() -> dict:
    return {
        "id": "u-1",
        "username": "ana",
        "email": "ana@example.com",
        "role": "Admin",
        "teamId": "team-1",
        "createdAt": "2024-01-01T00:00:00Z",
        "updatedAt": "2024-01-01T00:00:00Z",
    }


@pytest.fixture()
def logged_in(credentials: CredentialStore, user_payload: dict) -> CredentialStore:
    """Credential store holding an (expired) access token and a refresh token."""
    credentials.set_session("old", "refresh-1", UserSummary.model_validate(user_payload))
    return credentials


@pytest.fixture()
def make_client(credentials: CredentialStore) -> Callable[..., TaskdashClient]:
    """Build a client whose requests are answered by *handler*."""

    def factory(handler, **kwargs) -> TaskdashClient:
        return TaskdashClient(
            BASE_URL,
            credentials,
            transport=httpx.MockTransport(handler),
            **kwargs,
        )

    return factory

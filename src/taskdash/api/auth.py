"""Session endpoints: login, admin registration and logout.

The client stores the session returned by a successful login or
registration itself; these functions only build the requests.  A wrong
e-mail or password is answered with ``409 Conflict`` by the API.
"""

from __future__ import annotations

from typing import Any

from ..models.outcome import RequestOutcome
from . import routes
from .client import TaskdashClient


async def login(client: TaskdashClient, email: str, password: str) -> RequestOutcome[Any]:
    return await client.post(routes.LOGIN, json={"email": email, "password": password})


async def register_admin(
    client: TaskdashClient,
    username: str,
    email: str,
    password: str,
) -> RequestOutcome[Any]:
    """Create an admin account; the response carries a new session."""
    return await client.post(
        routes.REGISTER_ADMIN,
        json={"username": username, "email": email, "password": password},
    )


async def logout(client: TaskdashClient) -> RequestOutcome[Any]:
    """Revoke the refresh tokens of the current user on the server."""
    return await client.delete(routes.LOGOUT)

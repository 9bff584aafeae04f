"""Endpoint paths, relative to the configured API base URL."""

from __future__ import annotations

LOGIN = "/auth/login"
LOGOUT = "/auth/logout"
REFRESH_TOKEN = "/auth/refresh-token"
REGISTER_ADMIN = "/auth/register-admin"

PROJECTS = "/projects"
TASKS = "/tasks"
USERS = "/users"
USERS_EXISTS_BY_EMAIL = "/users/exists-by-email"
TEAMS = "/teams"
TEAMS_OWNER = "/teams/owner"

# Successful POSTs to these return a fresh session that the client stores.
SESSION_ISSUING_ROUTES = frozenset({LOGIN, REGISTER_ADMIN})

# A 401 from these is final; it never triggers a token refresh.
NO_REFRESH_ROUTES = frozenset({LOGIN, REGISTER_ADMIN, REFRESH_TOKEN})


def item_route(collection: str, item_id: str) -> str:
    return f"{collection}/{item_id}"

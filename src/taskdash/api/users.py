"""User endpoints, including the pre-submit e-mail uniqueness check."""

from __future__ import annotations

from typing import Any

from ..models.outcome import RequestOutcome
from ..models.user import User
from . import routes
from .resources import ResourceService


class UserService(ResourceService[User]):
    path = routes.USERS
    item_model = User

    async def email_exists(self, email: str) -> RequestOutcome[Any]:
        """Ask the API whether *email* is taken; the payload is ``{"exists": bool}``."""
        return await self._client.get(routes.USERS_EXISTS_BY_EMAIL, params={"email": email})

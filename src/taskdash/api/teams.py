"""Team endpoints.

Teams are looked up and created but never edited from the client, so
this is not a full :class:`~taskdash.api.resources.ResourceService`.
"""

from __future__ import annotations

from typing import Any

from ..models.outcome import RequestOutcome
from ..models.page import TeamFilters
from ..models.project import Team, TeamCreate
from . import routes
from .client import TaskdashClient


class TeamService:
    path = routes.TEAMS
    item_model = Team

    def __init__(self, client: TaskdashClient) -> None:
        self._client = client

    async def list(self, filters: TeamFilters) -> RequestOutcome[Any]:
        return await self._client.get(self.path, params=filters.to_params())

    async def get_by_owner(self) -> RequestOutcome[Any]:
        """Return the team owned by the logged in admin."""
        return await self._client.get(routes.TEAMS_OWNER)

    async def create(self, body: TeamCreate) -> RequestOutcome[Any]:
        return await self._client.post(self.path, json=body.model_dump(mode="json"))

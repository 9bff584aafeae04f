"""API client layer -- re-exports the transport and the resource services."""

from taskdash.api.client import TaskdashClient
from taskdash.api.projects import ProjectService
from taskdash.api.refresh import RefreshCoordinator, RefreshState
from taskdash.api.tasks import TaskService
from taskdash.api.teams import TeamService
from taskdash.api.users import UserService

__all__ = [
    "ProjectService",
    "RefreshCoordinator",
    "RefreshState",
    "TaskService",
    "TaskdashClient",
    "TeamService",
    "UserService",
]

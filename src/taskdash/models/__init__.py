"""Re-export all taskdash data models for convenient access."""

from taskdash.models.outcome import (
    ErrorKind,
    Failure,
    RequestOutcome,
    Success,
    clamp_status,
    error_kind_for_status,
)
from taskdash.models.page import (
    ListFilters,
    Page,
    ProjectFilters,
    TaskFilters,
    TeamFilters,
    UserFilters,
    page_from_envelope,
)
from taskdash.models.project import (
    Project,
    ProjectCreate,
    ProjectStatus,
    ProjectUpdate,
    Task,
    TaskCreate,
    TaskStatus,
    TaskUpdate,
    Team,
    TeamCreate,
)
from taskdash.models.user import (
    Credential,
    User,
    UserCreate,
    UserRole,
    UserSummary,
    UserUpdate,
)

__all__ = [
    # Outcomes
    "ErrorKind",
    "Failure",
    "RequestOutcome",
    "Success",
    "clamp_status",
    "error_kind_for_status",
    # Pagination
    "ListFilters",
    "Page",
    "ProjectFilters",
    "TaskFilters",
    "TeamFilters",
    "UserFilters",
    "page_from_envelope",
    # Projects, tasks, teams
    "Project",
    "ProjectCreate",
    "ProjectStatus",
    "ProjectUpdate",
    "Task",
    "TaskCreate",
    "TaskStatus",
    "TaskUpdate",
    "Team",
    "TeamCreate",
    # Users and session
    "Credential",
    "User",
    "UserCreate",
    "UserRole",
    "UserSummary",
    "UserUpdate",
]

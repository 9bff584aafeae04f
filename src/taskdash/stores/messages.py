"""User-facing messages for request outcomes, keyed by status code.

Each operation has its own table because the same status means different
things per endpoint: ``409`` is "invalid credentials" for login but
"already exists" for user creation.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class MessageTable:
    default: str
    by_status: dict[int, str] = field(default_factory=dict)

    def message_for(self, status_code: int | None) -> str | None:
        """Return the message for *status_code*, or ``None`` for success."""
        if status_code is not None and 200 <= status_code < 300:
            return None
        if status_code is None:
            return self.default
        return self.by_status.get(status_code, self.default)


INVALID_DATA = "Invalid data."

LOGIN = MessageTable(
    "Could not log in. Please try again.",
    {409: "Invalid email or password."},
)

REGISTER_ADMIN = MessageTable(
    "Could not register the user. Please try again.",
    {400: INVALID_DATA, 409: "An account with that email already exists."},
)

FETCH = MessageTable(
    "Could not load the list. Please try again.",
    {400: "Invalid filters.", 403: "You do not have access to this list."},
)

CREATE_PROJECT = MessageTable(
    "Could not create the project. Please try again.",
    {400: INVALID_DATA, 401: "Could not create the project.", 403: "Could not create the project."},
)

UPDATE_PROJECT = MessageTable(
    "Could not update the project. Please try again.",
    {
        400: INVALID_DATA,
        401: "Could not update the project.",
        403: "Could not update the project.",
        404: "Could not update the project.",
    },
)

DELETE_PROJECT = MessageTable(
    "Could not delete the project. Please try again.",
    {400: "The project does not exist or was already deleted.", 404: "The project does not exist or was already deleted."},
)

CREATE_TASK = MessageTable(
    "Could not create the task. Please try again.",
    {400: INVALID_DATA, 401: "Could not create the task.", 403: "Could not create the task.", 404: "Invalid project."},
)

UPDATE_TASK = MessageTable(
    "Could not update the task. Please try again.",
    {400: INVALID_DATA, 401: "Could not update the task.", 403: "Could not update the task.", 404: "Task not found."},
)

DELETE_TASK = MessageTable(
    "Could not delete the task. Please try again.",
    {401: "Could not delete the task."},
)

CREATE_USER = MessageTable(
    "Could not create the user. Please try again.",
    {400: INVALID_DATA, 401: "Could not create the user.", 409: "A user with that email already exists."},
)

UPDATE_USER = MessageTable(
    "Could not update the user. Please try again.",
    {400: INVALID_DATA, 401: "Could not update the user.", 404: "User not found.", 409: "A user with that email already exists."},
)

DELETE_USER = MessageTable(
    "Could not delete the user. Please try again.",
    {400: "The user does not exist or was already deleted.", 404: "The user does not exist or was already deleted."},
)

CREATE_TEAM = MessageTable(
    "Could not create the team. Please try again.",
    {
        400: INVALID_DATA,
        401: "Could not create the team.",
        404: "Could not create the team.",
        409: "You already own a team with that name.",
    },
)

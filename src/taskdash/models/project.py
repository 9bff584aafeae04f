"""Pydantic v2 models for projects, tasks and teams."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class ProjectStatus(str, Enum):
    ON_HOLD = "OnHold"
    IN_PROGRESS = "InProgress"
    COMPLETED = "Completed"


class TaskStatus(str, Enum):
    TODO = "ToDo"
    IN_PROGRESS = "InProgress"
    DONE = "Done"


class Team(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    ownerId: str | None = None
    createdAt: str | None = None
    updatedAt: str | None = None


class TeamCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str


class Project(BaseModel):
    """A project owned by a team.

    The task counters are only populated when the list was requested with
    ``withStats=true``.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    teamId: str | None = None
    managerId: str | None = None
    status: ProjectStatus = ProjectStatus.IN_PROGRESS
    createdAt: str | None = None
    updatedAt: str | None = None
    toDoTasks: int | None = None
    inProgressTasks: int | None = None
    doneTasks: int | None = None


class ProjectCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str


class ProjectUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    status: ProjectStatus


class Task(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    description: str | None = None
    status: TaskStatus = TaskStatus.TODO
    projectId: str | None = None
    userId: str | None = None
    projectName: str | None = None
    userName: str | None = None
    createdAt: str | None = None
    updatedAt: str | None = None


class TaskCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str
    projectId: str
    description: str | None = None


class TaskUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    status: TaskStatus
    userId: str | None = None
    description: str | None = None

"""Pydantic v2 models for users and the persisted session credential."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class UserRole(str, Enum):
    ADMIN = "Admin"
    MANAGER = "Manager"
    MEMBER = "Member"


class UserSummary(BaseModel):
    """Identity snapshot stored alongside the tokens of a session."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    username: str
    email: str
    role: UserRole
    teamId: str | None = None
    createdAt: str | None = None
    updatedAt: str | None = None


class User(UserSummary):
    """A team member as returned by ``GET /users``."""


class UserCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    username: str
    email: str
    password: str
    role: UserRole
    teamId: str | None = None


class UserUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    username: str
    email: str


class Credential(BaseModel):
    """Access/refresh token pair plus the identity of the logged in user.

    Field aliases are the fixed keys the session document is persisted
    under, so a dump with ``by_alias=True`` is the on-disk format.
    """

    model_config = ConfigDict(populate_by_name=True)

    access_token: str | None = Field(default=None, alias="token")
    refresh_token: str | None = Field(default=None, alias="refreshToken")
    user: UserSummary | None = None
    is_logged_in: bool = Field(default=False, alias="isLoggedIn")
    team_id: str | None = Field(default=None, alias="teamId")

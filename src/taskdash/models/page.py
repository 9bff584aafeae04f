"""Cursor-paginated list pages and the filter models that request them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from loguru import logger
from pydantic import BaseModel, ConfigDict, ValidationError

from .user import UserRole

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    """One page of a list endpoint.

    Empty cursors mean there is no page in that direction.
    """

    items: list[T] = field(default_factory=list)
    prev_cursor: str = ""
    next_cursor: str = ""

    @classmethod
    def empty(cls) -> Page[T]:
        return cls()

    @property
    def has_next(self) -> bool:
        return bool(self.next_cursor)

    @property
    def has_prev(self) -> bool:
        return bool(self.prev_cursor)


class ListFilters(BaseModel):
    """Pagination controls shared by every list endpoint.

    Subclasses add the resource specific filter keys.  Changing any key
    other than ``cursor`` through :meth:`with_changes` resets the cursor,
    since a cursor is only meaningful for the filter set that produced it.
    """

    model_config = ConfigDict(populate_by_name=True)

    limit: int = 10
    cursor: str = ""

    def with_cursor(self, cursor: str):
        return self.with_changes(cursor=cursor)

    def with_changes(self, **changes: Any):
        """Return a validated copy with *changes* applied."""
        if "cursor" not in changes:
            changes["cursor"] = ""
        return type(self).model_validate({**self.model_dump(), **changes})

    def to_params(self) -> dict[str, Any]:
        """Return query parameters, omitting unset and empty values."""
        params = self.model_dump(mode="json", exclude_none=True)
        return {key: value for key, value in params.items() if value != ""}


class ProjectFilters(ListFilters):
    teamId: str | None = None
    managerId: str | None = None
    name: str | None = None
    withStats: bool | None = None


class TaskFilters(ListFilters):
    projectId: str | None = None
    title: str | None = None


class UserFilters(ListFilters):
    email: str | None = None
    teamId: str | None = None
    role: UserRole | None = None


class TeamFilters(ListFilters):
    name: str | None = None


def page_from_envelope(payload: Any, model: type[BaseModel]) -> Page[Any]:
    """Parse a ``{"data": [...], "pagination": {...}}`` list response.

    Items that fail validation are logged and skipped; a missing or null
    ``data`` list yields an empty page.
    """
    if not isinstance(payload, dict):
        return Page.empty()
    raw_items = payload.get("data") or []
    pagination = payload.get("pagination") or {}

    items: list[Any] = []
    for raw in raw_items:
        try:
            items.append(model.model_validate(raw))
        except ValidationError as exc:
            item_id = raw.get("id", "<unknown>") if isinstance(raw, dict) else "<unknown>"
            logger.warning(f"Skipping unparseable {model.__name__} {item_id}: {exc}")
    return Page(
        items=items,
        prev_cursor=pagination.get("prev_cursor") or "",
        next_cursor=pagination.get("next_cursor") or "",
    )

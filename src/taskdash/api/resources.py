"""Generic CRUD request builders for the paginated resources.

A service holds no state besides its client: each method builds one
request and returns the client's outcome unchanged.  Parsing list
envelopes into pages is left to the caller (see
:func:`taskdash.models.page.page_from_envelope`).
"""

from __future__ import annotations

from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel

from ..models.outcome import RequestOutcome
from ..models.page import ListFilters
from .client import TaskdashClient
from .routes import item_route

ItemT = TypeVar("ItemT", bound=BaseModel)


class ResourceService(Generic[ItemT]):
    """``list`` / ``create`` / ``update`` / ``delete`` for one collection.

    Subclasses set :attr:`path` and :attr:`item_model`.  Update bodies
    carry the item ``id``, which goes into the URL rather than the body.
    """

    path: ClassVar[str]
    item_model: ClassVar[type[BaseModel]]

    def __init__(self, client: TaskdashClient) -> None:
        self._client = client

    async def list(self, filters: ListFilters) -> RequestOutcome[Any]:
        return await self._client.get(self.path, params=filters.to_params())

    async def create(self, body: BaseModel) -> RequestOutcome[Any]:
        return await self._client.post(self.path, json=_dump(body))

    async def update(self, body: BaseModel) -> RequestOutcome[Any]:
        item_id = getattr(body, "id")
        return await self._client.put(
            item_route(self.path, item_id), json=_dump(body, exclude={"id"})
        )

    async def delete(self, item_id: str) -> RequestOutcome[Any]:
        return await self._client.delete(item_route(self.path, item_id))


def _dump(body: BaseModel, exclude: set[str] | None = None) -> dict[str, Any]:
    return body.model_dump(mode="json", exclude=exclude, exclude_none=True)

"""State container for one cursor-paginated resource list.

One :class:`PagedCollectionStore` exists per resource (projects, tasks,
users).  It keeps the page currently shown, the filters that produced it
and the status of the last request.  Concurrent fetches are not
coalesced: whichever response lands last determines the page, so callers
should debounce rapid filter changes.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Generic, Protocol, TypeVar

from loguru import logger
from pydantic import BaseModel

from ..models.outcome import ErrorKind, Failure, RequestOutcome
from ..models.page import ListFilters, Page, page_from_envelope

ItemT = TypeVar("ItemT", bound=BaseModel)
FiltersT = TypeVar("FiltersT", bound=ListFilters)


class CollectionService(Protocol):
    """What a store needs from a resource service."""

    item_model: type[BaseModel]

    async def list(self, filters: Any) -> RequestOutcome[Any]: ...

    async def create(self, body: Any) -> RequestOutcome[Any]: ...

    async def update(self, body: Any) -> RequestOutcome[Any]: ...

    async def delete(self, item_id: str) -> RequestOutcome[Any]: ...


class PagedCollectionStore(Generic[ItemT, FiltersT]):
    """Current page, filters and request status for one resource.

    Mutations (:meth:`create`, :meth:`update`, :meth:`delete`) only report
    their status code; they never refetch.  Whether an edited item still
    belongs on the page is decided by the caller re-running :meth:`fetch`.
    """

    def __init__(self, service: CollectionService, filters: FiltersT) -> None:
        self._service = service
        self._initial_filters = filters
        self._listeners: list[Callable[[], None]] = []
        self.loading = False
        self.last_error: ErrorKind | None = None
        self.last_status_code: int | None = None
        self.page: Page[ItemT] = Page.empty()
        self.filters: FiltersT = filters

    @property
    def error(self) -> bool:
        return self.last_error is not None

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def subscribe(self, listener: Callable[[], None]) -> Callable[[], None]:
        """Call *listener* after every state change; returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()

    def _set_loading(self) -> None:
        self.loading = True
        self._notify()

    def _record(self, outcome: RequestOutcome[Any]) -> None:
        self.loading = False
        self.last_status_code = outcome.status_code
        self.last_error = outcome.error_kind if isinstance(outcome, Failure) else None

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    async def fetch(self, filters: FiltersT | None = None) -> None:
        """Load the page for *filters* (default: the current filters).

        On failure the page is emptied rather than left stale, while the
        requested filters are kept so the caller can retry.
        """
        if filters is None:
            filters = self.filters
        self._set_loading()
        try:
            outcome = await self._service.list(filters)
        finally:
            self.loading = False

        self.filters = filters
        self._record(outcome)
        if isinstance(outcome, Failure):
            self.page = Page.empty()
        else:
            self.page = page_from_envelope(outcome.data, self._service.item_model)
        self._notify()

    async def refetch(self) -> None:
        await self.fetch(self.filters)

    async def update_filters(self, **changes: Any) -> None:
        """Fetch with some filter keys changed; the cursor resets unless given."""
        await self.fetch(self.filters.with_changes(**changes))

    async def next_page(self) -> bool:
        """Fetch the following page; returns ``False`` without a request on the last page."""
        return await self._goto(self.page.next_cursor, "next")

    async def prev_page(self) -> bool:
        """Fetch the preceding page; returns ``False`` without a request on the first page."""
        return await self._goto(self.page.prev_cursor, "previous")

    async def _goto(self, cursor: str, direction: str) -> bool:
        if not cursor:
            logger.debug(f"No {direction} page for {self._service.item_model.__name__}")
            return False
        await self.fetch(self.filters.with_cursor(cursor))
        return True

    async def load_more(self) -> bool:
        """Append the next page to the items already shown.

        A failure keeps the accumulated items and records the error.
        Returns ``False`` without a request when there is no next page.
        """
        cursor = self.page.next_cursor
        if not cursor:
            return False
        filters = self.filters.with_cursor(cursor)
        self._set_loading()
        try:
            outcome = await self._service.list(filters)
        finally:
            self.loading = False

        self._record(outcome)
        if not isinstance(outcome, Failure):
            more = page_from_envelope(outcome.data, self._service.item_model)
            self.filters = filters
            self.page = Page(
                items=[*self.page.items, *more.items],
                prev_cursor=self.page.prev_cursor,
                next_cursor=more.next_cursor,
            )
        self._notify()
        return True

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def create(self, body: BaseModel) -> int:
        return await self._mutate(lambda: self._service.create(body))

    async def update(self, body: BaseModel) -> int:
        return await self._mutate(lambda: self._service.update(body))

    async def delete(self, item_id: str) -> int:
        return await self._mutate(lambda: self._service.delete(item_id))

    async def _mutate(self, send: Callable[[], Awaitable[RequestOutcome[Any]]]) -> int:
        self._set_loading()
        try:
            outcome = await send()
        finally:
            self.loading = False
        self._record(outcome)
        self._notify()
        return outcome.status_code

    # ------------------------------------------------------------------
    # Resetting
    # ------------------------------------------------------------------

    def clear_request_state(self) -> None:
        """Forget the last error and status; page and filters are untouched."""
        self.loading = False
        self.last_error = None
        self.last_status_code = None
        self._notify()

    def reset(self) -> None:
        """Return to the initial empty state, e.g. after logout."""
        self.loading = False
        self.last_error = None
        self.last_status_code = None
        self.page = Page.empty()
        self.filters = self._initial_filters
        self._notify()

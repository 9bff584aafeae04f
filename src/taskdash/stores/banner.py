"""Transient error banner with automatic dismissal."""

from __future__ import annotations

import asyncio
from typing import Callable

from .messages import MessageTable

DEFAULT_TIMEOUT_SECONDS = 7.0


class Banner:
    """Holds at most one message and hides it after *timeout* seconds.

    Showing a new message re-arms the timer.  *on_dismiss* runs whenever
    the banner is cleared, by timeout or explicitly; stores pass their
    ``clear_request_state`` here.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        on_dismiss: Callable[[], None] | None = None,
    ) -> None:
        self.message: str | None = None
        self._timeout = timeout
        self._on_dismiss = on_dismiss
        self._timer: asyncio.TimerHandle | None = None

    @property
    def visible(self) -> bool:
        return self.message is not None

    def show(self, message: str) -> None:
        """Display *message*; must be called from a running event loop."""
        self._cancel_timer()
        self.message = message
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self._timeout, self.dismiss)

    def show_status(self, table: MessageTable, status_code: int | None) -> str | None:
        """Show the message *table* has for *status_code*, if any."""
        message = table.message_for(status_code)
        if message is not None:
            self.show(message)
        return message

    def dismiss(self) -> None:
        self._cancel_timer()
        self.message = None
        if self._on_dismiss is not None:
            self._on_dismiss()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

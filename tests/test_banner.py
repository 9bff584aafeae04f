"""Tests for the status message tables and the auto-dismissing banner."""

import asyncio

import pytest

from taskdash.stores import messages
from taskdash.stores.banner import DEFAULT_TIMEOUT_SECONDS, Banner
from taskdash.stores.messages import MessageTable


class TestMessageTables:
    def test_success_has_no_message(self):
        assert messages.LOGIN.message_for(200) is None
        assert messages.CREATE_TASK.message_for(201) is None

    def test_same_status_differs_per_operation(self):
        assert messages.LOGIN.message_for(409) == "Invalid email or password."
        assert messages.CREATE_USER.message_for(409) == "A user with that email already exists."

    def test_unknown_status_uses_default(self):
        table = MessageTable("Something went wrong.", {404: "Missing."})
        assert table.message_for(404) == "Missing."
        assert table.message_for(500) == "Something went wrong."
        assert table.message_for(None) == "Something went wrong."


class TestBanner:
    def test_default_timeout(self):
        assert DEFAULT_TIMEOUT_SECONDS == 7.0

    @pytest.mark.asyncio
    async def test_auto_dismiss(self):
        dismissed = []
        banner = Banner(timeout=0.01, on_dismiss=lambda: dismissed.append(True))

        banner.show("Could not load the list.")
        assert banner.visible
        await asyncio.sleep(0.05)

        assert not banner.visible
        assert banner.message is None
        assert dismissed == [True]

    @pytest.mark.asyncio
    async def test_show_rearms_timer(self):
        banner = Banner(timeout=0.05)
        banner.show("first")
        await asyncio.sleep(0.03)
        banner.show("second")
        await asyncio.sleep(0.03)

        assert banner.message == "second"
        await asyncio.sleep(0.05)
        assert not banner.visible

    @pytest.mark.asyncio
    async def test_explicit_dismiss_cancels_timer(self):
        calls = []
        banner = Banner(timeout=0.01, on_dismiss=lambda: calls.append(True))
        banner.show("boom")
        banner.dismiss()
        await asyncio.sleep(0.03)
        assert calls == [True]

    @pytest.mark.asyncio
    async def test_show_status(self):
        banner = Banner()
        assert banner.show_status(messages.LOGIN, 200) is None
        assert not banner.visible

        assert banner.show_status(messages.LOGIN, 409) == "Invalid email or password."
        assert banner.message == "Invalid email or password."
        banner.dismiss()

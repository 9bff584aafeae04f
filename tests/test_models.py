"""Tests for outcomes, filters and page parsing."""

import pytest
from pydantic import ValidationError

from taskdash.models.outcome import (
    ErrorKind,
    Failure,
    Success,
    clamp_status,
    error_kind_for_status,
    extract_error_message,
)
from taskdash.models.page import (
    Page,
    ProjectFilters,
    TaskFilters,
    UserFilters,
    page_from_envelope,
)
from taskdash.models.project import Project, Task
from taskdash.models.user import Credential, UserRole


# =========================================================================
# Outcomes
# =========================================================================


class TestOutcome:
    @pytest.mark.parametrize(
        "status,kind",
        [
            (400, ErrorKind.VALIDATION),
            (401, ErrorKind.AUTH),
            (403, ErrorKind.FORBIDDEN),
            (404, ErrorKind.NOT_FOUND),
            (409, ErrorKind.CONFLICT),
            (500, ErrorKind.INTERNAL),
            (418, ErrorKind.INTERNAL),
        ],
    )
    def test_error_kind_for_status(self, status, kind):
        assert error_kind_for_status(status) is kind

    def test_gateway_codes_are_clamped(self):
        """Anything above 500 is reported as a plain internal error."""
        for status in (501, 502, 503, 504, 599):
            failure = Failure.from_status(status)
            assert failure.status_code == 500
            assert failure.error_kind is ErrorKind.INTERNAL

    def test_clamp_keeps_client_errors(self):
        assert clamp_status(404) == 404
        assert clamp_status(500) == 500

    def test_success_and_failure_flags(self):
        assert Success({"a": 1}).ok is True
        assert Success({"a": 1}).status_code == 200
        assert Failure.internal().ok is False
        assert Failure.internal().status_code == 500

    def test_extract_error_message_body(self):
        assert extract_error_message({"errors": {"body": "user not found"}}) == "user not found"

    def test_extract_error_message_validation_fields(self):
        message = extract_error_message({"errors": {"Email": "required", "Password": "required"}})
        assert message == "Email: required, Password: required"

    def test_extract_error_message_other_shapes(self):
        assert extract_error_message(None) is None
        assert extract_error_message({"data": []}) is None
        assert extract_error_message({"errors": {}}) is None


# =========================================================================
# Filters
# =========================================================================


class TestFilters:
    def test_defaults(self):
        filters = TaskFilters()
        assert filters.limit == 10
        assert filters.cursor == ""

    def test_with_changes_resets_cursor(self):
        filters = TaskFilters(title="a", cursor="abc")
        changed = filters.with_changes(title="ab")
        assert changed.title == "ab"
        assert changed.cursor == ""
        # Original is untouched.
        assert filters.cursor == "abc"

    def test_with_changes_keeps_explicit_cursor(self):
        changed = TaskFilters(cursor="abc").with_changes(title="x", cursor="def")
        assert changed.cursor == "def"

    def test_with_cursor_keeps_other_keys(self):
        filters = ProjectFilters(name="web", teamId="team-1").with_cursor("next-1")
        assert filters.cursor == "next-1"
        assert filters.name == "web"
        assert filters.teamId == "team-1"

    def test_with_changes_validates_values(self):
        filters = UserFilters(teamId="team-1").with_changes(role="Admin")
        assert filters.role is UserRole.ADMIN
        assert filters.to_params()["role"] == "Admin"

        with pytest.raises(ValidationError):
            UserFilters().with_changes(role="Owner")

    def test_to_params_drops_unset_and_empty(self):
        params = TaskFilters(projectId="p-1", limit=5).to_params()
        assert params == {"projectId": "p-1", "limit": 5}

    def test_to_params_encodes_enums_and_bools(self):
        params = UserFilters(role=UserRole.MANAGER, teamId="t").to_params()
        assert params["role"] == "Manager"
        params = ProjectFilters(withStats=True).to_params()
        assert params["withStats"] is True


# =========================================================================
# Page parsing
# =========================================================================


class TestPageFromEnvelope:
    def test_parses_items_and_cursors(self):
        payload = {
            "data": [
                {"id": "t-1", "title": "One", "status": "ToDo"},
                {"id": "t-2", "title": "Two", "status": "Done"},
            ],
            "pagination": {"prev_cursor": "p", "next_cursor": "n"},
        }
        page = page_from_envelope(payload, Task)
        assert [t.id for t in page.items] == ["t-1", "t-2"]
        assert all(isinstance(t, Task) for t in page.items)
        assert page.prev_cursor == "p"
        assert page.next_cursor == "n"

    def test_null_data_is_empty(self):
        page = page_from_envelope({"data": None, "pagination": {"prev_cursor": "", "next_cursor": ""}}, Task)
        assert page.items == []
        assert not page.has_next
        assert not page.has_prev

    def test_invalid_items_are_skipped(self):
        payload = {"data": [{"id": "p-1", "name": "ok"}, {"id": "p-2"}], "pagination": {}}
        page = page_from_envelope(payload, Project)
        assert [p.id for p in page.items] == ["p-1"]

    def test_non_dict_payload(self):
        assert page_from_envelope(["x"], Task) == Page.empty()


class TestCredential:
    def test_dump_uses_persisted_keys(self):
        cred = Credential(access_token="a", refresh_token="r", is_logged_in=True, team_id="t")
        dumped = cred.model_dump(by_alias=True)
        assert dumped["token"] == "a"
        assert dumped["refreshToken"] == "r"
        assert dumped["isLoggedIn"] is True
        assert dumped["teamId"] == "t"
        assert dumped["user"] is None

"""Unit tests for event filter validation and matching."""

from __future__ import annotations

import msgspec
import pytest

from ghetl.events.errors import InvalidFilterError
from ghetl.events.filters import (
    EventFilter,
    compile_event_filter,
    is_valid_event_type,
    matches_actor_filter,
    validate_actor_filter,
    validate_event_type_filter,
)
from ghetl.events.models import EventType, GitHubEvent
from tests.helpers.github_events import event_line


def _event(event_type: str = "PushEvent", login: str = "octocat") -> GitHubEvent:
    return msgspec.json.decode(event_line(event_type, login=login), type=GitHubEvent)


class TestEventTypeValidation:
    """Validation of the ``--event-type`` value."""

    @pytest.mark.parametrize("name", EventType.names())
    def test_every_recognised_name_is_valid(self, name: str) -> None:
        """All sixteen names are accepted exactly as written."""
        assert is_valid_event_type(name)
        assert validate_event_type_filter(name) is EventType(name)

    @pytest.mark.parametrize(
        "value", ["pushevent", "PUSHEVENT", "Push", " PushEvent", "", "Unknown"]
    )
    def test_inexact_names_are_invalid(self, value: str) -> None:
        """Matching is exact and case-sensitive."""
        assert not is_valid_event_type(value)

    def test_error_lists_valid_types(self) -> None:
        """The error names the rejected value and every valid type."""
        with pytest.raises(InvalidFilterError) as excinfo:
            validate_event_type_filter("Unknown")

        message = str(excinfo.value)
        assert message.startswith("Invalid event type: 'Unknown'. Valid types are: ")
        for name in EventType.names():
            assert name in message


class TestActorValidation:
    """Validation and matching of the ``--actor`` value."""

    @pytest.mark.parametrize("value", ["", "   ", "\t"])
    def test_blank_actor_is_rejected(self, value: str) -> None:
        """An actor filter must name someone."""
        with pytest.raises(InvalidFilterError, match="actor filter"):
            validate_actor_filter(value)

    def test_actor_is_trimmed(self) -> None:
        """Surrounding whitespace is not part of the login."""
        assert validate_actor_filter("  octocat ") == "octocat"

    @pytest.mark.parametrize(
        ("login", "actor_filter", "expected"),
        [
            ("octocat", "octocat", True),
            ("OctoCat", "octocat", True),
            ("octocat", "OCTOCAT", True),
            ("octocat", "octo", False),
            ("octocat-bot", "octocat", False),
        ],
    )
    def test_actor_match_ignores_case(
        self, login: str, actor_filter: str, *, expected: bool
    ) -> None:
        """Logins are compared whole, without regard to case."""
        assert matches_actor_filter(login, actor_filter) is expected


class TestEventFilter:
    """Tests for the compiled ``EventFilter``."""

    def test_empty_filter_accepts_everything(self) -> None:
        """With no gates configured every event passes."""
        event_filter = EventFilter()

        assert event_filter.is_empty
        assert event_filter.should_include(_event("WatchEvent"))

    def test_type_gate(self) -> None:
        """Only the configured type passes the type gate."""
        event_filter = EventFilter(event_type=EventType.PUSH)

        assert event_filter.should_include(_event("PushEvent"))
        assert not event_filter.should_include(_event("WatchEvent"))

    def test_gates_combine(self) -> None:
        """Events must pass both the type and the actor gates."""
        event_filter = EventFilter(event_type=EventType.ISSUES, actor="alice")

        assert event_filter.should_include(_event("IssuesEvent", "Alice"))
        assert not event_filter.should_include(_event("IssuesEvent", "bob"))
        assert not event_filter.should_include(_event("PushEvent", "alice"))


class TestCompileEventFilter:
    """Tests for ``compile_event_filter``."""

    def test_no_values_compile_to_empty_filter(self) -> None:
        """Absent values leave the filter empty."""
        assert compile_event_filter() == EventFilter()

    def test_values_are_resolved(self) -> None:
        """Raw strings become a typed filter."""
        event_filter = compile_event_filter(event_type="ForkEvent", actor=" Bob ")

        assert event_filter == EventFilter(event_type=EventType.FORK, actor="Bob")

    def test_invalid_type_fails_even_with_valid_actor(self) -> None:
        """Every value is validated before the filter is returned."""
        with pytest.raises(InvalidFilterError, match="Invalid event type"):
            compile_event_filter(event_type="pushevent", actor="bob")

    def test_blank_actor_fails_even_with_valid_type(self) -> None:
        """A blank actor is rejected alongside a valid type."""
        with pytest.raises(InvalidFilterError):
            compile_event_filter(event_type="PushEvent", actor="")

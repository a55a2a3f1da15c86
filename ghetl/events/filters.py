"""Event filters applied while files are decoded.

Filters are compiled once, before any file is read. Compilation validates
every configured value so a filter that could never match fails the whole
run up front instead of silently producing an empty result.
"""

from __future__ import annotations

import dataclasses
import typing as typ

from .errors import InvalidFilterError
from .models import EventType

if typ.TYPE_CHECKING:
    from .models import GitHubEvent


def is_valid_event_type(value: str) -> bool:
    """Return True when ``value`` is exactly one of the recognised type names."""
    return value in EventType.names()


def validate_event_type_filter(value: str) -> EventType:
    """Return the ``EventType`` named by ``value``.

    Raises
    ------
    InvalidFilterError
        If ``value`` is not an exact, case-sensitive type name.

    """
    if not is_valid_event_type(value):
        raise InvalidFilterError.unknown_event_type(value)
    return EventType(value)


def validate_actor_filter(value: str) -> str:
    """Return the actor login to match, rejecting blank values."""
    if not value.strip():
        raise InvalidFilterError.blank_actor()
    return value.strip()


def matches_actor_filter(actor_login: str, actor_filter: str) -> bool:
    """Compare an actor login with a filter, ignoring case."""
    return actor_login.casefold() == actor_filter.casefold()


@dataclasses.dataclass(frozen=True, slots=True)
class EventFilter:
    """Compiled predicate deciding which decoded events are retained."""

    event_type: EventType | None = None
    actor: str | None = None

    @property
    def is_empty(self) -> bool:
        """Return True when no gate is configured and every event passes."""
        return self.event_type is None and self.actor is None

    def should_include(self, event: GitHubEvent) -> bool:
        """Return True when ``event`` passes every configured gate."""
        if self.event_type is not None and event.event_type is not self.event_type:
            return False
        if self.actor is not None and not matches_actor_filter(
            event.actor.login, self.actor
        ):
            return False
        return True


def compile_event_filter(
    *,
    event_type: str | None = None,
    actor: str | None = None,
) -> EventFilter:
    """Validate raw filter values and build an ``EventFilter``.

    All values are validated before the filter is returned, so either every
    configured gate is usable or ``InvalidFilterError`` is raised.
    """
    resolved_type = (
        None if event_type is None else validate_event_type_filter(event_type)
    )
    resolved_actor = None if actor is None else validate_actor_filter(actor)
    return EventFilter(event_type=resolved_type, actor=resolved_actor)

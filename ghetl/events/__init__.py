"""GitHub event model, line decoding, and filtering."""

from __future__ import annotations

from .decoder import DecodedLines, LineDecoder, decode_line
from .errors import EventDecodeError, EventDecodeReason, InvalidFilterError
from .filters import (
    EventFilter,
    compile_event_filter,
    is_valid_event_type,
    matches_actor_filter,
    validate_actor_filter,
    validate_event_type_filter,
)
from .models import EVENT_VARIANTS, BaseGitHubEvent, EventType, GitHubEvent

__all__ = [
    "EVENT_VARIANTS",
    "BaseGitHubEvent",
    "DecodedLines",
    "EventDecodeError",
    "EventDecodeReason",
    "EventFilter",
    "EventType",
    "GitHubEvent",
    "InvalidFilterError",
    "LineDecoder",
    "compile_event_filter",
    "decode_line",
    "is_valid_event_type",
    "matches_actor_filter",
    "validate_actor_filter",
    "validate_event_type_filter",
]

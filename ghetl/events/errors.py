"""Event decoding and filtering errors."""

from __future__ import annotations

import enum

from .models import EventType


class EventDecodeReason(enum.StrEnum):
    """Machine-readable reasons for a rejected input line."""

    INVALID_JSON = "invalid_json"
    SHAPE_MISMATCH = "shape_mismatch"


class EventDecodeError(ValueError):
    """Raised when one input line cannot be decoded into an event.

    The error is line-scoped: callers log it and move on to the next line.
    """

    def __init__(
        self,
        line_number: int,
        message: str,
        reason: EventDecodeReason | None = None,
    ) -> None:
        """Record the 1-based line number alongside the decoder message."""
        super().__init__(f"line {line_number}: {message}")
        self.line_number = line_number
        self.message = message
        self.reason = reason

    @classmethod
    def invalid_json(cls, line_number: int, exc: Exception) -> EventDecodeError:
        """Create an error for text that is not well-formed JSON."""
        return cls(line_number, str(exc), reason=EventDecodeReason.INVALID_JSON)

    @classmethod
    def shape_mismatch(cls, line_number: int, exc: Exception) -> EventDecodeError:
        """Create an error for JSON that does not match any event variant."""
        return cls(line_number, str(exc), reason=EventDecodeReason.SHAPE_MISMATCH)


class InvalidFilterError(ValueError):
    """Raised before any I/O when a configured filter cannot match anything."""

    @classmethod
    def unknown_event_type(cls, value: str) -> InvalidFilterError:
        """Create an error naming every valid event type."""
        valid = ", ".join(EventType.names())
        return cls(f"Invalid event type: '{value}'. Valid types are: {valid}")

    @classmethod
    def blank_actor(cls) -> InvalidFilterError:
        """Create an error for an empty actor-login filter."""
        return cls("Invalid actor filter: login must be non-empty")

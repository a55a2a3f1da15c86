"""Aggregation and output of retained events."""

from __future__ import annotations

from .aggregate import EventTypeCount, count_events, render_stats
from .errors import OutputPathError
from .sink import NdjsonEventSink, SinkWriteResult

__all__ = [
    "EventTypeCount",
    "NdjsonEventSink",
    "OutputPathError",
    "SinkWriteResult",
    "count_events",
    "render_stats",
]

"""File discovery, parallel decoding, and the pipeline entry point."""

from __future__ import annotations

from .errors import PathError
from .locator import file_sort_key, locate_event_files
from .observability import (
    ErrorScope,
    PipelineEventLogger,
    PipelineEventType,
    categorize_error,
)
from .orchestrator import (
    FileOutcome,
    FileStatus,
    concatenate_events,
    count_files,
    decode_file,
    decode_files,
)
from .service import RunResult, run, run_async

__all__ = [
    "ErrorScope",
    "FileOutcome",
    "FileStatus",
    "PathError",
    "PipelineEventLogger",
    "PipelineEventType",
    "RunResult",
    "categorize_error",
    "concatenate_events",
    "count_files",
    "decode_file",
    "decode_files",
    "file_sort_key",
    "locate_event_files",
    "run",
    "run_async",
]

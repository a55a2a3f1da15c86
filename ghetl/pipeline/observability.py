"""Structured log events for pipeline runs.

Progress records (run start and completion, and each file moving from queued
to started to completed) are emitted at INFO and are suppressed in quiet
mode. Absorbed failures (unreadable files and rejected lines) are emitted at
WARNING regardless of quiet mode so operators always see what was skipped.
A fatal error is logged at ERROR; one that matches no known scope is logged
with its traceback. Output failures are logged by the sink itself.
"""

from __future__ import annotations

import enum
import typing as typ

from ghetl.events.errors import EventDecodeError, InvalidFilterError
from ghetl.logging import (
    format_log_message,
    get_logger,
    log_error,
    log_exception,
    log_info,
    log_warning,
)
from ghetl.reporting.errors import OutputPathError

from .errors import PathError

if typ.TYPE_CHECKING:
    import datetime as dt
    from pathlib import Path

logger = get_logger(__name__)


class PipelineEventType(enum.StrEnum):
    """Structured log event identifiers."""

    RUN_STARTED = "pipeline.run.started"
    RUN_COMPLETED = "pipeline.run.completed"
    RUN_FAILED = "pipeline.run.failed"
    FILE_QUEUED = "pipeline.file.queued"
    FILE_STARTED = "pipeline.file.started"
    FILE_COMPLETED = "pipeline.file.completed"
    FILE_COUNTED = "pipeline.file.counted"
    FILE_FAILED = "pipeline.file.failed"
    LINE_SKIPPED = "pipeline.line.skipped"


class ErrorScope(enum.StrEnum):
    """How far the effect of an error reaches."""

    RUN = "run"
    FILE = "file"
    LINE = "line"
    OUTPUT = "output"
    UNKNOWN = "unknown"


_EXCEPTION_SCOPE_MAP: tuple[tuple[type[BaseException], ErrorScope], ...] = (
    (PathError, ErrorScope.RUN),
    (InvalidFilterError, ErrorScope.RUN),
    (OutputPathError, ErrorScope.OUTPUT),
    (EventDecodeError, ErrorScope.LINE),
    (OSError, ErrorScope.FILE),
)


def categorize_error(exc: BaseException) -> ErrorScope:
    """Return the scope an exception affects."""
    for exc_type, scope in _EXCEPTION_SCOPE_MAP:
        if isinstance(exc, exc_type):
            return scope
    return ErrorScope.UNKNOWN


class PipelineEventLogger:
    """Emit pipeline events via femtologging.

    Parameters
    ----------
    quiet
        When True, INFO progress events are dropped. Warnings and errors are
        always emitted.

    """

    def __init__(self, *, quiet: bool = False) -> None:
        """Remember whether progress events are wanted."""
        self._quiet = quiet

    def log_run_started(self, *, path: Path, files: int, dry_run: bool) -> None:
        """Log the start of a run once the input files are known."""
        if self._quiet:
            return
        log_info(
            logger,
            "[%s] path=%s files=%d dry_run=%s",
            PipelineEventType.RUN_STARTED,
            path,
            files,
            dry_run,
        )

    def log_file_queued(self, *, path: Path, state: str) -> None:
        """Log a file handed to the worker pool."""
        if self._quiet:
            return
        log_info(
            logger,
            "[%s] file=%s state=%s",
            PipelineEventType.FILE_QUEUED,
            path.name,
            state,
        )

    def log_file_started(self, *, path: Path, state: str) -> None:
        """Log a worker picking up a file."""
        if self._quiet:
            return
        log_info(
            logger,
            "[%s] file=%s state=%s",
            PipelineEventType.FILE_STARTED,
            path.name,
            state,
        )

    def log_file_completed(self, *, path: Path, events: int, skipped: int) -> None:
        """Log a decoded file with its retained and rejected line counts."""
        if self._quiet:
            return
        log_info(
            logger,
            "[%s] file=%s events=%d skipped_lines=%d",
            PipelineEventType.FILE_COMPLETED,
            path.name,
            events,
            skipped,
        )

    def log_file_counted(self, *, path: Path, lines: int) -> None:
        """Log the line count of a file inspected in dry-run mode."""
        if self._quiet:
            return
        log_info(
            logger,
            "[%s] file=%s lines=%d",
            PipelineEventType.FILE_COUNTED,
            path.name,
            lines,
        )

    def log_file_failed(self, *, path: Path, error: BaseException) -> None:
        """Log a file that could not be read; it contributes no events."""
        log_warning(
            logger,
            "[%s] file=%s error_type=%s error_message=%s",
            PipelineEventType.FILE_FAILED,
            path.name,
            type(error).__name__,
            str(error),
        )

    def log_line_skipped(self, *, path: Path, error: EventDecodeError) -> None:
        """Log a rejected line."""
        log_warning(
            logger,
            "[%s] file=%s line=%d reason=%s error_message=%s",
            PipelineEventType.LINE_SKIPPED,
            path.name,
            error.line_number,
            error.reason,
            error.message,
        )

    def log_run_completed(
        self,
        *,
        files: int,
        failed_files: int,
        events: int,
        decode_errors: int,
        duration: dt.timedelta,
    ) -> None:
        """Log run totals."""
        if self._quiet:
            return
        log_info(
            logger,
            "[%s] files=%d failed_files=%d events=%d decode_errors=%d "
            "duration_seconds=%.3f",
            PipelineEventType.RUN_COMPLETED,
            files,
            failed_files,
            events,
            decode_errors,
            duration.total_seconds(),
        )

    def log_run_failed(
        self,
        *,
        path: Path,
        error: BaseException,
        duration: dt.timedelta,
    ) -> None:
        """Log a fatal error that aborted the run.

        Errors outside the known scopes are logged with their traceback.
        """
        scope = categorize_error(error)
        template = (
            "[%s] path=%s duration_seconds=%.3f error_type=%s error_scope=%s "
            "error_message=%s"
        )
        args = (
            PipelineEventType.RUN_FAILED,
            path,
            duration.total_seconds(),
            type(error).__name__,
            scope,
            str(error),
        )
        if scope is ErrorScope.UNKNOWN:
            log_exception(logger, format_log_message(template, *args), error)
            return
        log_error(logger, template, *args)

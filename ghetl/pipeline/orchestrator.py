"""Parallel per-file decoding.

Every archive is decoded as an independent task: the task reads its file,
decodes and filters each line, and returns a local batch. Tasks are bounded
by a semaphore sized to the available CPU parallelism and hand the blocking
work to a worker thread. ``asyncio.gather`` is the barrier; it returns the
batches in dispatch order, so the concatenated result follows the locator
order no matter which file finishes first.

Usage
-----
>>> import asyncio
>>> outcomes = asyncio.run(decode_files(paths, EventFilter()))
>>> events = concatenate_events(outcomes)

"""

from __future__ import annotations

import asyncio
import dataclasses
import enum
import os
import typing as typ

from ghetl.events.decoder import LineDecoder

from .observability import PipelineEventLogger

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from ghetl.events.errors import EventDecodeError
    from ghetl.events.filters import EventFilter
    from ghetl.events.models import GitHubEvent


class FileStatus(enum.StrEnum):
    """Lifecycle of a single input file.

    A file is ``PENDING`` once queued on the worker pool and ``DECODING`` while
    a worker holds it. The outcome records the terminal state.
    """

    PENDING = "pending"
    DECODING = "decoding"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclasses.dataclass(frozen=True, slots=True)
class FileOutcome:
    """Result of processing one input file.

    Attributes
    ----------
    path
        The input file.
    status
        ``SUCCEEDED`` or ``FAILED`` once the task has finished.
    events
        Retained events in line order; empty for failed files and dry runs.
    decode_errors
        Lines rejected by the decoder.
    lines
        Lines counted in dry-run mode; zero otherwise.
    error
        The read error for failed files.

    """

    path: Path
    status: FileStatus
    events: tuple[GitHubEvent, ...] = ()
    decode_errors: tuple[EventDecodeError, ...] = ()
    lines: int = 0
    error: OSError | None = None

    @property
    def failed(self) -> bool:
        """Return True when the file could not be read."""
        return self.status is FileStatus.FAILED


def worker_count() -> int:
    """Return the worker pool size: the CPUs available to this process."""
    return os.process_cpu_count() or 1


def decode_file(
    path: Path,
    event_filter: EventFilter,
    *,
    event_logger: PipelineEventLogger | None = None,
) -> FileOutcome:
    """Decode and filter one NDJSON file.

    The file is read as bytes so that a line with invalid UTF-8 is rejected
    by itself instead of failing the whole file. Rejected lines are logged
    and recorded; an unreadable file yields a ``FAILED`` outcome.
    """
    log = event_logger or PipelineEventLogger()
    log.log_file_started(path=path, state=FileStatus.DECODING)
    include = None if event_filter.is_empty else event_filter.should_include
    try:
        with path.open("rb") as handle:
            decoded = LineDecoder().decode_lines(handle, include=include)
    except OSError as exc:
        log.log_file_failed(path=path, error=exc)
        return FileOutcome(path=path, status=FileStatus.FAILED, error=exc)

    for error in decoded.errors:
        log.log_line_skipped(path=path, error=error)
    log.log_file_completed(
        path=path, events=len(decoded.events), skipped=len(decoded.errors)
    )
    return FileOutcome(
        path=path,
        status=FileStatus.SUCCEEDED,
        events=decoded.events,
        decode_errors=decoded.errors,
    )


def count_file_lines(
    path: Path,
    *,
    event_logger: PipelineEventLogger | None = None,
) -> FileOutcome:
    """Count the text lines of one file without decoding them.

    Blank lines count; a trailing newline does not start an extra line.
    """
    log = event_logger or PipelineEventLogger()
    log.log_file_started(path=path, state=FileStatus.DECODING)
    try:
        with path.open("rb") as handle:
            lines = sum(1 for _ in handle)
    except OSError as exc:
        log.log_file_failed(path=path, error=exc)
        return FileOutcome(path=path, status=FileStatus.FAILED, error=exc)

    log.log_file_counted(path=path, lines=lines)
    return FileOutcome(path=path, status=FileStatus.SUCCEEDED, lines=lines)


async def _run_bounded(
    paths: cabc.Sequence[Path],
    task: typ.Callable[[Path], FileOutcome],
    *,
    event_logger: PipelineEventLogger,
) -> list[FileOutcome]:
    semaphore = asyncio.Semaphore(worker_count())
    for path in paths:
        event_logger.log_file_queued(path=path, state=FileStatus.PENDING)

    async def bounded(path: Path) -> FileOutcome:
        async with semaphore:
            return await asyncio.to_thread(task, path)

    return await asyncio.gather(*(bounded(path) for path in paths))


async def decode_files(
    paths: cabc.Sequence[Path],
    event_filter: EventFilter,
    *,
    event_logger: PipelineEventLogger | None = None,
) -> list[FileOutcome]:
    """Decode every file in parallel and return outcomes in ``paths`` order."""
    log = event_logger or PipelineEventLogger()

    def task(path: Path) -> FileOutcome:
        return decode_file(path, event_filter, event_logger=log)

    return await _run_bounded(paths, task, event_logger=log)


async def count_files(
    paths: cabc.Sequence[Path],
    *,
    event_logger: PipelineEventLogger | None = None,
) -> list[FileOutcome]:
    """Count lines of every file in parallel for a dry run."""
    log = event_logger or PipelineEventLogger()

    def task(path: Path) -> FileOutcome:
        return count_file_lines(path, event_logger=log)

    return await _run_bounded(paths, task, event_logger=log)


def concatenate_events(outcomes: cabc.Iterable[FileOutcome]) -> list[GitHubEvent]:
    """Join per-file batches in outcome order, keeping each file's line order."""
    return [event for outcome in outcomes for event in outcome.events]

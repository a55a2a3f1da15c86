"""Pipeline entry point.

A run is a fixed sequence of stages:

1. compile and validate filters (no I/O yet);
2. list and order the input files;
3. truncate the output destination, also in dry-run mode;
4. decode every file in parallel, or count lines for a dry run;
5. after the barrier, aggregate and write the concatenated events.

Steps 1, 2, and 3 raise on failure and abort the run; step 3 only warns
when lenient output is configured. Everything after that absorbs
file-, line-, and output-scoped failures.

Usage
-----
>>> from pathlib import Path
>>> from ghetl.config import RunConfig
>>> result = run(RunConfig(path=Path("data"), stats=True))
>>> result.events_retained
42

"""

from __future__ import annotations

import asyncio
import dataclasses
import datetime as dt
import time
import typing as typ

from ghetl.events.filters import compile_event_filter
from ghetl.reporting.aggregate import count_events
from ghetl.reporting.sink import NdjsonEventSink, SinkWriteResult

from .locator import locate_event_files
from .observability import PipelineEventLogger
from .orchestrator import concatenate_events, count_files, decode_files

if typ.TYPE_CHECKING:
    from pathlib import Path

    from ghetl.config import RunConfig
    from ghetl.events.models import GitHubEvent
    from ghetl.reporting.aggregate import EventTypeCount

    from .orchestrator import FileOutcome


@dataclasses.dataclass(frozen=True, slots=True)
class RunResult:
    """Summary of a completed run.

    Attributes
    ----------
    files
        Per-file outcomes in processing order.
    events
        Retained events in final order; empty for dry runs.
    counts
        Per-type counts when stats were requested and events were retained.
    dry_run
        Whether the run only counted lines.
    output
        Configured destination, if any.
    output_ready
        Whether the destination was created successfully.
    events_written
        Lines appended to the destination.
    write_failures
        Events that could not be serialised or written.
    elapsed
        Wall-clock duration of the run.

    """

    files: tuple[FileOutcome, ...] = ()
    events: tuple[GitHubEvent, ...] = ()
    counts: EventTypeCount | None = None
    dry_run: bool = False
    output: Path | None = None
    output_ready: bool = False
    events_written: int = 0
    write_failures: int = 0
    elapsed: dt.timedelta = dt.timedelta()

    @property
    def total_files(self) -> int:
        """Return the number of input files found."""
        return len(self.files)

    @property
    def failed_files(self) -> int:
        """Return the number of files that could not be read."""
        return sum(1 for outcome in self.files if outcome.failed)

    @property
    def lines_counted(self) -> int:
        """Return the total line count of a dry run."""
        return sum(outcome.lines for outcome in self.files)

    @property
    def decode_errors(self) -> int:
        """Return the number of rejected lines across all files."""
        return sum(len(outcome.decode_errors) for outcome in self.files)

    @property
    def events_retained(self) -> int:
        """Return the number of events that passed decoding and filtering."""
        return len(self.events)


def _elapsed_since(started: float) -> dt.timedelta:
    return dt.timedelta(seconds=time.perf_counter() - started)


def _prepare_sink(config: RunConfig) -> NdjsonEventSink | None:
    if config.output is None:
        return None
    sink = NdjsonEventSink(config.output, lenient=config.lenient_output)
    sink.prepare()
    return sink


async def _run_inner(
    config: RunConfig,
    event_logger: PipelineEventLogger,
    started: float,
) -> RunResult:
    event_filter = compile_event_filter(
        event_type=config.event_type, actor=config.actor
    )
    paths = locate_event_files(config.path)
    sink = _prepare_sink(config)
    output_ready = sink is not None and sink.ready
    event_logger.log_run_started(
        path=config.path, files=len(paths), dry_run=config.dry_run
    )

    if config.dry_run:
        outcomes = await count_files(paths, event_logger=event_logger)
        return RunResult(
            files=tuple(outcomes),
            dry_run=True,
            output=config.output,
            output_ready=output_ready,
            elapsed=_elapsed_since(started),
        )

    outcomes = await decode_files(paths, event_filter, event_logger=event_logger)
    events = concatenate_events(outcomes)

    counts = count_events(events) if config.stats and events else None
    written = SinkWriteResult()
    if sink is not None and sink.ready:
        written = sink.write_events(events)

    return RunResult(
        files=tuple(outcomes),
        events=tuple(events),
        counts=counts,
        output=config.output,
        output_ready=output_ready,
        events_written=written.written,
        write_failures=written.failed,
        elapsed=_elapsed_since(started),
    )


async def run_async(
    config: RunConfig,
    *,
    event_logger: PipelineEventLogger | None = None,
) -> RunResult:
    """Run the pipeline described by ``config``.

    Raises
    ------
    InvalidFilterError
        If a configured filter is not usable; raised before any I/O.
    PathError
        If the input directory cannot be listed.
    OutputPathError
        If the output destination cannot be created and lenient output is
        not configured.

    """
    log = event_logger or PipelineEventLogger(quiet=config.quiet)
    started = time.perf_counter()
    try:
        result = await _run_inner(config, log, started)
    except BaseException as exc:
        log.log_run_failed(
            path=config.path, error=exc, duration=_elapsed_since(started)
        )
        raise

    log.log_run_completed(
        files=result.total_files,
        failed_files=result.failed_files,
        events=result.events_retained,
        decode_errors=result.decode_errors,
        duration=result.elapsed,
    )
    return result


def run(config: RunConfig) -> RunResult:
    """Run the pipeline to completion from synchronous code."""
    return asyncio.run(run_async(config))

"""Command-line interface for the ingestion pipeline.

Usage:
    ghetl --path data/                       # decode every archive
    ghetl -p data/ --event-type PushEvent --stats
    ghetl -p data/ --dry-run                 # count lines only
    ghetl -p data/ -o retained.ndjson -q     # write retained events quietly

Environment variables:
    GHETL_LOG_LEVEL      - femtologging level (default: INFO)
    GHETL_LENIENT_OUTPUT - warn instead of failing on an unusable output path
"""

from __future__ import annotations

import sys
import typing as typ
from pathlib import Path

from cyclopts import App, Parameter

from ghetl import __version__
from ghetl.config import RunConfig
from ghetl.events.errors import InvalidFilterError
from ghetl.logging import configure_logging, get_logger, log_warning
from ghetl.pipeline import PathError, run
from ghetl.reporting import OutputPathError, render_stats

if typ.TYPE_CHECKING:
    from ghetl.pipeline import RunResult

logger = get_logger(__name__)

app = App(
    name="ghetl",
    help="Decode, filter, and count GitHub event archives",
    version=__version__,
)

_SEPARATOR = "-" * 49


def _print_files(result: RunResult) -> None:
    for outcome in result.files:
        name = outcome.path.name
        if outcome.failed:
            print(f" -> Error in file {name}: {outcome.error}")
        elif result.dry_run:
            print(f"[Dry-run]: Would process file: {name}, {outcome.lines} lines")
        else:
            print(f"File processed: {name} -> {len(outcome.events)} events")


def _print_summary(config: RunConfig, result: RunResult) -> None:
    total = result.lines_counted if result.dry_run else result.events_retained
    print(_SEPARATOR)
    print("Summary:")
    print(f"Total files: {result.total_files}")
    print(f"Total lines/events: {total}")
    if result.failed_files:
        print(f"Failed files: {result.failed_files}")
    if result.decode_errors:
        print(f"Decode errors: {result.decode_errors}")
    if config.event_type is not None:
        print(f"Filter applied: {config.event_type}")
    if config.actor is not None:
        print(f"Actor filter: {config.actor}")
    if config.output is not None:
        if result.output_ready:
            print(f"Output saved to: {config.output}")
        else:
            print(f"Output not written: {config.output}")
    print(f"Total time: {result.elapsed.total_seconds():.2f}s")


@app.default
def ingest(  # noqa: PLR0913
    *,
    path: typ.Annotated[Path, Parameter(name=["--path", "-p"])],
    dry_run: bool = False,
    stats: bool = False,
    event_type: str | None = None,
    actor: str | None = None,
    output: typ.Annotated[Path | None, Parameter(name=["--output", "-o"])] = None,
    quiet: typ.Annotated[bool, Parameter(name=["--quiet", "-q"])] = False,
    show_time: typ.Annotated[bool, Parameter(name=["--show-time", "-s"])] = False,
    lenient_output: typ.Annotated[
        bool, Parameter(env_var="GHETL_LENIENT_OUTPUT")
    ] = False,
    log_level: typ.Annotated[str, Parameter(env_var="GHETL_LOG_LEVEL")] = "INFO",
) -> int:
    """Process a directory of NDJSON GitHub event archives.

    Args:
        path: Directory containing the ``*.json`` archives.
        dry_run: Count lines per file without decoding events.
        stats: Print per-type event counts after the run.
        event_type: Keep only events of this exact type (e.g. PushEvent).
        actor: Keep only events by this actor login (case-insensitive).
        output: Write retained events to this NDJSON file.
        quiet: Suppress per-file progress and the summary.
        show_time: Print the total elapsed time.
        lenient_output: Continue without output when the output file cannot
            be created.
        log_level: Log level for diagnostic records.

    Returns:
        Exit code (0 for success, 1 for fatal errors).

    """
    normalized_level, invalid_level = configure_logging(log_level)
    if invalid_level:
        log_warning(
            logger,
            "Invalid GHETL_LOG_LEVEL %r, falling back to %s",
            log_level,
            normalized_level,
        )

    config = RunConfig(
        path=path,
        dry_run=dry_run,
        stats=stats,
        event_type=event_type,
        actor=actor,
        output=output,
        quiet=quiet,
        lenient_output=lenient_output,
    )
    try:
        result = run(config)
    except (InvalidFilterError, PathError, OutputPathError) as exc:
        print(f"Fatal error: {exc}", file=sys.stderr)
        return 1

    if not quiet:
        _print_files(result)
    if result.counts is not None:
        print(render_stats(result.counts))
    if not quiet:
        _print_summary(config, result)
    if show_time:
        print(f"Time: {result.elapsed.total_seconds():.2f}s")
    return 0


def main() -> int:
    """Entry point for the ``ghetl`` console script."""
    return app()


if __name__ == "__main__":
    sys.exit(main())

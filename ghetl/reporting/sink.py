r"""NDJSON output for retained events.

The destination is truncated exactly once per run, before any input file is
processed, and then opened in append mode for writing. Each event becomes
one compact JSON line::

    {"type":"PushEvent","id":"123","actor":{...},...,"payload":{...}}

A destination that cannot be created is fatal unless the sink is
``lenient``. Once created, a failure to open it for appending, or to
serialise or write one event, is logged and the remaining work continues.

Usage
-----
>>> from pathlib import Path
>>> sink = NdjsonEventSink(Path("out/events.ndjson"))
>>> if sink.prepare():
...     result = sink.write_events(events)

"""

from __future__ import annotations

import dataclasses
import typing as typ

import msgspec

from ghetl.logging import get_logger, log_warning

from .errors import OutputPathError

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from ghetl.events.models import GitHubEvent

logger = get_logger(__name__)

OUTPUT_FAILED_EVENT = "sink.output.failed"
_WRITE_BUFFER_SIZE = 64 * 1024


@dataclasses.dataclass(frozen=True, slots=True)
class SinkWriteResult:
    """Outcome of writing a batch of events."""

    written: int = 0
    failed: int = 0


class NdjsonEventSink:
    """Write events to a newline-delimited JSON file.

    Parameters
    ----------
    path
        Destination file.
    lenient
        Log a warning instead of raising ``OutputPathError`` when the
        destination cannot be created.

    """

    def __init__(self, path: Path, *, lenient: bool = False) -> None:
        """Bind the sink to its destination; nothing is touched yet."""
        self._path = path
        self._lenient = lenient
        self._encoder = msgspec.json.Encoder()
        self._ready = False

    @property
    def path(self) -> Path:
        """Return the destination path."""
        return self._path

    @property
    def ready(self) -> bool:
        """Return True once ``prepare`` has created the destination."""
        return self._ready

    def prepare(self) -> bool:
        """Create the destination, discarding any previous contents.

        Returns
        -------
        bool
            True when the destination is ready for appending.

        Raises
        ------
        OutputPathError
            If the destination cannot be created and the sink is not
            lenient.

        """
        try:
            self._path.open("wb").close()
        except OSError as exc:
            self._ready = False
            error = OutputPathError.cannot_create(self._path, exc)
            if not self._lenient:
                raise error from exc
            self._warn(error)
            return False
        self._ready = True
        return True

    def write_events(self, events: cabc.Iterable[GitHubEvent]) -> SinkWriteResult:
        """Append one JSON line per event, in iteration order.

        A destination that cannot be opened is logged and nothing is written.
        """
        try:
            handle = self._path.open("ab", buffering=_WRITE_BUFFER_SIZE)
        except OSError as exc:
            self._warn(OutputPathError.cannot_append(self._path, exc))
            return SinkWriteResult()

        written = 0
        failed = 0
        try:
            for event in events:
                try:
                    handle.write(self._encode(event))
                except (msgspec.EncodeError, OSError) as exc:
                    failed += 1
                    self._warn(exc)
                    continue
                written += 1
        finally:
            try:
                handle.close()
            except OSError as exc:
                # Lines lost in the final flush were already counted as written.
                self._warn(exc)
        return SinkWriteResult(written=written, failed=failed)

    def _encode(self, event: GitHubEvent) -> bytes:
        return self._encoder.encode(event) + b"\n"

    def _warn(self, error: BaseException) -> None:
        log_warning(
            logger,
            "[%s] output=%s error_type=%s error_message=%s",
            OUTPUT_FAILED_EVENT,
            self._path,
            type(error).__name__,
            str(error),
        )

"""Run configuration for the ingestion pipeline.

``RunConfig`` is the only state a pipeline run depends on. It is built by
the command-line layer (or directly in tests) and passed explicitly to
``ghetl.pipeline.run``; nothing is read from process-wide state.

Usage
-----
>>> from pathlib import Path
>>> config = RunConfig(path=Path("data"), event_type="PushEvent", stats=True)
>>> config.has_filters
True

"""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path


@dc.dataclass(frozen=True, slots=True)
class RunConfig:
    """Options for a single pipeline run.

    Attributes
    ----------
    path
        Directory holding the ``*.json`` NDJSON archives.
    dry_run
        Count lines per file without decoding, filtering, aggregating, or
        writing events. The output file is still truncated.
    stats
        Build the ranked per-type report after a normal run.
    event_type
        Optional exact event type name; only matching events are retained.
    actor
        Optional actor login; only events by that actor (ignoring case) are
        retained.
    output
        Optional NDJSON destination, truncated once at the start of the run.
    quiet
        Suppress progress records. Warnings are still emitted.
    lenient_output
        Log a warning and continue without output when the destination
        cannot be created, instead of failing the run.

    """

    path: Path
    dry_run: bool = False
    stats: bool = False
    event_type: str | None = None
    actor: str | None = None
    output: Path | None = None
    quiet: bool = False
    lenient_output: bool = False

    def __post_init__(self) -> None:
        """Coerce string paths so callers may pass either form."""
        if not isinstance(self.path, Path):
            object.__setattr__(self, "path", Path(self.path))
        if self.output is not None and not isinstance(self.output, Path):
            object.__setattr__(self, "output", Path(self.output))

    @property
    def has_filters(self) -> bool:
        """Return True when any retention filter is configured."""
        return self.event_type is not None or self.actor is not None

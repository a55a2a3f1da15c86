"""Per-type event counting and the ranked analytics report.

Counting is a read-only fold over the retained events after every file has
been decoded; it never re-reads input and never affects filtering.

Usage
-----
>>> counts = count_events(events)
>>> print(render_stats(counts))

"""

from __future__ import annotations

import dataclasses
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from ghetl.events.models import GitHubEvent

_REPORT_WIDTH = 40
_NAME_WIDTH = 30
_COUNT_WIDTH = 7
_TITLE = " EVENT ANALYTICS "
_TOTAL_LABEL = "TOTAL"


@dataclasses.dataclass(slots=True)
class EventTypeCount:
    """Number of retained events per event-type name."""

    counts: dict[str, int] = dataclasses.field(default_factory=dict)

    def add(self, type_name: str, amount: int = 1) -> None:
        """Increment the counter for ``type_name``."""
        self.counts[type_name] = self.counts.get(type_name, 0) + amount

    @property
    def total(self) -> int:
        """Return the sum of all counters."""
        return sum(self.counts.values())

    def ranked(self) -> list[tuple[str, int]]:
        """Return ``(name, count)`` pairs, highest count first.

        Equal counts are ordered by type name so the report is stable.
        """
        return sorted(self.counts.items(), key=lambda item: (-item[1], item[0]))

    def __len__(self) -> int:
        """Return the number of distinct event types counted."""
        return len(self.counts)

    def __getitem__(self, type_name: str) -> int:
        """Return the count for ``type_name``, zero when never seen."""
        return self.counts.get(type_name, 0)


def count_events(events: cabc.Iterable[GitHubEvent]) -> EventTypeCount:
    """Fold events into per-type counts."""
    counts = EventTypeCount()
    for event in events:
        counts.add(event.event_type.value)
    return counts


def _row(label: str, value: int) -> str:
    return f"{label:<{_NAME_WIDTH}} | {value:>{_COUNT_WIDTH}}"


def render_stats(counts: EventTypeCount) -> str:
    """Render the fixed-width ``name | count`` table with a total row."""
    lines = ["", f"{_TITLE:=^{_REPORT_WIDTH}}"]
    lines.extend(_row(name, count) for name, count in counts.ranked())
    lines.append("-" * _REPORT_WIDTH)
    lines.append(_row(_TOTAL_LABEL, counts.total))
    lines.append("=" * _REPORT_WIDTH)
    lines.append("")
    return "\n".join(lines)

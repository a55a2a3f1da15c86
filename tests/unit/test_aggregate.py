"""Unit tests for per-type counting and the analytics report."""

from __future__ import annotations

import msgspec

from ghetl.events.models import GitHubEvent
from ghetl.reporting.aggregate import EventTypeCount, count_events, render_stats
from tests.helpers.github_events import event_lines


def _events(*event_types: str) -> list[GitHubEvent]:
    decoder = msgspec.json.Decoder(GitHubEvent)
    return [decoder.decode(line) for line in event_lines(*event_types)]


class TestCountEvents:
    """Tests for ``count_events``."""

    def test_counts_per_type(self) -> None:
        """Each event increments the counter of its own type."""
        counts = count_events(_events("PushEvent", "WatchEvent", "PushEvent"))

        assert counts["PushEvent"] == 2
        assert counts["WatchEvent"] == 1
        assert counts["ForkEvent"] == 0
        assert counts.total == 3
        assert len(counts) == 2

    def test_empty_input(self) -> None:
        """No events means no counters."""
        counts = count_events([])

        assert counts.total == 0
        assert counts.ranked() == []


class TestEventTypeCount:
    """Tests for ``EventTypeCount``."""

    def test_accumulates_across_batches(self) -> None:
        """Counts from several batches add up."""
        counts = EventTypeCount()
        counts.add("A", 3)
        counts.add("B", 1)
        counts.add("A", 1)

        assert counts.total == 5
        assert counts.ranked() == [("A", 4), ("B", 1)]

    def test_ties_are_ordered_by_name(self) -> None:
        """Equal counts rank alphabetically."""
        counts = EventTypeCount({"WatchEvent": 2, "ForkEvent": 2, "PushEvent": 5})

        assert counts.ranked() == [
            ("PushEvent", 5),
            ("ForkEvent", 2),
            ("WatchEvent", 2),
        ]


def test_render_stats_layout() -> None:
    """The report is a fixed-width table with a total row."""
    counts = EventTypeCount({"WatchEvent": 1, "PushEvent": 12})

    expected = "\n".join(
        [
            "",
            "=========== EVENT ANALYTICS ============",
            "PushEvent                      |      12",
            "WatchEvent                     |       1",
            "----------------------------------------",
            "TOTAL                          |      13",
            "========================================",
            "",
        ]
    )

    assert render_stats(counts) == expected


def test_render_stats_widens_for_long_values() -> None:
    """Names and counts longer than their columns are not truncated."""
    counts = EventTypeCount({"PullRequestReviewCommentEvent": 123456789})

    report = render_stats(counts)

    assert "PullRequestReviewCommentEvent  | 123456789" in report

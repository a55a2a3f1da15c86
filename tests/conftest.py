"""Shared fixtures for unit and feature tests."""

from __future__ import annotations

import typing as typ

import pytest

from tests.helpers.github_events import write_event_file

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path


class WriteEventsFn(typ.Protocol):
    """Callable fixture writing an NDJSON archive into the event directory."""

    def __call__(self, name: str, lines: cabc.Iterable[str]) -> Path: ...


@pytest.fixture
def event_dir(tmp_path: Path) -> Path:
    """Return an empty directory for input archives."""
    directory = tmp_path / "events"
    directory.mkdir()
    return directory


@pytest.fixture
def write_events(event_dir: Path) -> WriteEventsFn:
    """Return a function that writes an archive into ``event_dir``."""

    def _write(name: str, lines: cabc.Iterable[str]) -> Path:
        return write_event_file(event_dir / name, lines)

    return _write


@pytest.fixture
def output_path(tmp_path: Path) -> Path:
    """Return a destination path outside the input directory."""
    return tmp_path / "retained.ndjson"

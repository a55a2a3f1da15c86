"""Builders for NDJSON GitHub event lines used across tests.

Examples
--------
>>> from tests.helpers.github_events import event_line
>>> line = event_line("WatchEvent", event_id="7", payload={"action": "started"})
>>> '"type":"WatchEvent"' in line
True

"""

from __future__ import annotations

import dataclasses
import typing as typ

import msgspec

if typ.TYPE_CHECKING:
    from pathlib import Path


@dataclasses.dataclass(frozen=True, slots=True)
class EventSpec:
    """Fields for one synthetic event line."""

    event_type: str = "PushEvent"
    event_id: str = "1"
    login: str = "octocat"
    repo_name: str = "octo/reef"
    payload: dict[str, typ.Any] = dataclasses.field(default_factory=dict)
    created_at: str = "2024-01-01T00:00:00Z"
    public: bool = True
    org: dict[str, typ.Any] | None = None

    def to_dict(self) -> dict[str, typ.Any]:
        """Return the event as a JSON-compatible mapping."""
        data: dict[str, typ.Any] = {
            "id": self.event_id,
            "type": self.event_type,
            "actor": {
                "id": 1,
                "login": self.login,
                "display_login": self.login,
                "gravatar_id": "",
                "url": f"https://api.github.com/users/{self.login}",
                "avatar_url": f"https://avatars.githubusercontent.com/u/1?{self.login}",
            },
            "repo": {
                "id": 42,
                "name": self.repo_name,
                "url": f"https://api.github.com/repos/{self.repo_name}",
            },
            "payload": self.payload,
            "public": self.public,
            "created_at": self.created_at,
        }
        if self.org is not None:
            data["org"] = self.org
        return data

    def to_line(self) -> str:
        """Return the event as one compact JSON line without a newline."""
        return msgspec.json.encode(self.to_dict()).decode()


def event_line(event_type: str = "PushEvent", **fields: typ.Any) -> str:  # noqa: ANN401
    """Build a single event line; ``fields`` override ``EventSpec`` defaults."""
    return EventSpec(event_type=event_type, **fields).to_line()


def event_lines(*event_types: str, prefix: str = "e") -> list[str]:
    """Build one line per type with ids ``{prefix}1``, ``{prefix}2``, ..."""
    return [
        event_line(event_type, event_id=f"{prefix}{index}")
        for index, event_type in enumerate(event_types, start=1)
    ]


def write_event_file(path: Path, lines: typ.Iterable[str]) -> Path:
    """Write ``lines`` joined by newlines, with no trailing newline."""
    path.write_text("\n".join(lines), encoding="utf-8")
    return path

"""Line-level decoding of NDJSON event archives.

Each non-blank line is decoded independently into one of the
``GitHubEvent`` variants. Failures are isolated to the line that caused
them: they are collected as ``EventDecodeError`` values and never abort the
surrounding file.
"""

from __future__ import annotations

import dataclasses
import typing as typ

import msgspec

from .errors import EventDecodeError
from .models import GitHubEvent

if typ.TYPE_CHECKING:
    import collections.abc as cabc

type EventPredicate = typ.Callable[[GitHubEvent], bool]


@dataclasses.dataclass(frozen=True, slots=True)
class DecodedLines:
    """Events accepted from a sequence of lines, plus the rejected lines."""

    events: tuple[GitHubEvent, ...] = ()
    errors: tuple[EventDecodeError, ...] = ()


class LineDecoder:
    """Decode raw NDJSON lines into typed events.

    Each instance owns its msgspec decoder, so a worker decoding one file
    never shares decoder state with another.
    """

    def __init__(self) -> None:
        """Build the tagged-union decoder."""
        self._decoder = msgspec.json.Decoder(GitHubEvent)

    def decode(self, raw: bytes | str, *, line_number: int) -> GitHubEvent | None:
        """Decode one line.

        Parameters
        ----------
        raw
            Line content, with or without its trailing newline.
        line_number
            1-based position of the line in its file, used in errors.

        Returns
        -------
        GitHubEvent | None
            The decoded event, or ``None`` for blank and whitespace-only
            lines.

        Raises
        ------
        EventDecodeError
            If the line is not valid JSON, does not match the event shape,
            or names an unrecognised event type.

        """
        if not raw.strip():
            return None
        try:
            return self._decoder.decode(raw)
        except msgspec.ValidationError as exc:
            raise EventDecodeError.shape_mismatch(line_number, exc) from exc
        except (msgspec.DecodeError, UnicodeDecodeError) as exc:
            raise EventDecodeError.invalid_json(line_number, exc) from exc

    def decode_lines(
        self,
        lines: cabc.Iterable[bytes | str],
        *,
        include: EventPredicate | None = None,
    ) -> DecodedLines:
        """Decode every line, keeping events that satisfy ``include``.

        Line order is preserved in the returned events.
        """
        events: list[GitHubEvent] = []
        errors: list[EventDecodeError] = []
        for line_number, raw in enumerate(lines, start=1):
            try:
                event = self.decode(raw, line_number=line_number)
            except EventDecodeError as exc:
                errors.append(exc)
                continue
            if event is None:
                continue
            if include is None or include(event):
                events.append(event)
        return DecodedLines(events=tuple(events), errors=tuple(errors))


def decode_line(raw: bytes | str, *, line_number: int = 1) -> GitHubEvent | None:
    """Decode a single line with a throwaway ``LineDecoder``."""
    return LineDecoder().decode(raw, line_number=line_number)

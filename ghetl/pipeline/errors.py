"""Run-level pipeline errors."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from pathlib import Path


class PathError(RuntimeError):
    """Raised when the input directory cannot be listed.

    This is fatal: no file is processed when it is raised.
    """

    def __init__(self, message: str, *, path: Path) -> None:
        """Keep the offending path for diagnostics."""
        super().__init__(message)
        self.path = path

    @classmethod
    def unreadable(cls, path: Path, exc: OSError) -> PathError:
        """Create an error for a directory that could not be enumerated."""
        reason = exc.strerror or str(exc)
        return cls(f"Unable to read folder {path}: {reason}", path=path)

"""Output errors."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from pathlib import Path


class OutputPathError(RuntimeError):
    """Raised when the output destination cannot be created."""

    def __init__(self, message: str, *, path: Path) -> None:
        """Keep the offending path for diagnostics."""
        super().__init__(message)
        self.path = path

    @classmethod
    def cannot_create(cls, path: Path, exc: OSError) -> OutputPathError:
        """Create an error for a destination that could not be truncated."""
        return cls(f"Failed to create output file {path}: {exc}", path=path)

    @classmethod
    def cannot_append(cls, path: Path, exc: OSError) -> OutputPathError:
        """Create an error for a destination that could not be opened."""
        return cls(f"Failed to open output file {path}: {exc}", path=path)

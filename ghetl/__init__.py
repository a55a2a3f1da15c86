"""Ingest GitHub event archives: decode, filter, count, and re-export."""

from __future__ import annotations

from .config import RunConfig
from .pipeline import RunResult, run, run_async

__version__ = "0.1.0"

__all__ = ["RunConfig", "RunResult", "__version__", "run", "run_async"]

"""Custom exception hierarchy for reinmap."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional


class ReinmapError(Exception):
    """Base error for the reinmap package."""


class ConfigurationError(ReinmapError):
    """Raised when region, style or popup configuration is malformed."""

    def __init__(self, message: str, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else None
        self.message = message
        if self.path is not None:
            super().__init__(f"{self.path.name}: {self.message}")
        else:
            super().__init__(self.message)


class ProjectionError(ReinmapError):
    """Raised when a single record cannot be transformed between CRSs."""

    def __init__(self, index: int, record: Any, message: str):
        self.index = index
        self.record = record
        self.message = message
        row = getattr(record, "row_number", None)
        location = f"record {index}" if row is None else f"record {index} (row {row})"
        super().__init__(f"{location}: {self.message}")


class RenderError(ReinmapError):
    """Raised when a rendering surface cannot be produced or saved."""

"""Observation loading errors."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..exceptions import ReinmapError


class ObservationError(ReinmapError):
    """Base class for observation table issues."""


@dataclass
class ObservationFormatError(ObservationError):
    path: Path
    message: str

    def __post_init__(self) -> None:
        super().__init__(f"{self.message} ({self.path})")

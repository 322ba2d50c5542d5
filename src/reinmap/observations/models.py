"""Data models for observation tables."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass(frozen=True)
class ObservationRecord:
    row_number: int
    easting: Optional[float]
    northing: Optional[float]
    date: Optional[str] = None
    sex: Optional[str] = None
    age: Optional[str] = None
    raw: Dict[str, str] = field(default_factory=dict, compare=False, hash=False)

    def has_coordinates(self) -> bool:
        return self.easting is not None and self.northing is not None

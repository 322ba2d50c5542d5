"""Shared validation issue types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


ValidationSeverity = Literal["error", "warning"]


@dataclass(frozen=True)
class ValidationIssue:
    code: str
    severity: ValidationSeverity
    message: str
    location: str

    def is_error(self) -> bool:
        return self.severity == "error"

    def as_dict(self) -> dict:
        return {
            "code": self.code,
            "severity": self.severity,
            "message": self.message,
            "location": self.location,
        }


def row_location(row_number: int, column: str, source: str = "observations.csv") -> str:
    return f"{source}:row {row_number},col {column}"

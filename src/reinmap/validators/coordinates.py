"""Coordinate range validation for observation records."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, List, Optional

from ..config.models import RegionConfig
from ..exceptions import ConfigurationError
from ..observations.models import ObservationRecord
from .issues import ValidationIssue, row_location


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidRange:
    """Inclusive easting/northing bounds for one region."""

    easting_min: float
    easting_max: float
    northing_min: float
    northing_max: float

    def __post_init__(self) -> None:
        self.check()

    @classmethod
    def from_config(cls, region: RegionConfig) -> "ValidRange":
        return cls(
            easting_min=region.easting.min,
            easting_max=region.easting.max,
            northing_min=region.northing.min,
            northing_max=region.northing.max,
        )

    def check(self) -> None:
        for axis, low, high in (
            ("easting", self.easting_min, self.easting_max),
            ("northing", self.northing_min, self.northing_max),
        ):
            if not (_is_number(low) and _is_number(high)):
                raise ConfigurationError(f"{axis} bounds must be numbers")
            if low > high:
                raise ConfigurationError(
                    f"{axis} bounds are inverted (min {low} > max {high})"
                )

    def contains(self, easting: float, northing: float) -> bool:
        return (
            self.easting_min <= easting <= self.easting_max
            and self.northing_min <= northing <= self.northing_max
        )


def validate(
    records: Iterable[ObservationRecord], valid_range: ValidRange
) -> List[ObservationRecord]:
    """Return the records whose coordinates are present and within *valid_range*."""

    valid_range.check()
    records = list(records)
    kept = [record for record in records if _rejection(record, valid_range) is None]
    logger.debug("validated %d of %d records", len(kept), len(records))
    return kept


def screen_coordinates(
    records: Iterable[ObservationRecord], valid_range: ValidRange
) -> List[ValidationIssue]:
    """Describe every record that :func:`validate` would drop."""

    valid_range.check()
    issues: List[ValidationIssue] = []
    for record in records:
        issue = _rejection(record, valid_range)
        if issue is not None:
            issues.append(issue)
    return issues


def _rejection(
    record: ObservationRecord, valid_range: ValidRange
) -> Optional[ValidationIssue]:
    easting = _present(record.easting)
    northing = _present(record.northing)

    if easting is None or northing is None:
        column = "easting" if easting is None else "northing"
        return ValidationIssue(
            code="W_COORD_MISSING",
            severity="warning",
            message=f"{column} is missing or not numeric",
            location=row_location(record.row_number, column),
        )

    if not valid_range.contains(easting, northing):
        outside = []
        if not valid_range.easting_min <= easting <= valid_range.easting_max:
            outside.append("easting")
        if not valid_range.northing_min <= northing <= valid_range.northing_max:
            outside.append("northing")
        return ValidationIssue(
            code="W_COORD_OUT_OF_RANGE",
            severity="warning",
            message="({}, {}) outside configured bounds on {}".format(
                easting, northing, " and ".join(outside)
            ),
            location=row_location(record.row_number, outside[0]),
        )

    return None


def _present(value: Optional[float]) -> Optional[float]:
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number):
        return None
    return number


def _is_number(value: float) -> bool:
    return isinstance(value, (int, float)) and not math.isnan(value)

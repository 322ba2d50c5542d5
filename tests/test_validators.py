"""Tests for coordinate validation."""

from __future__ import annotations

import pytest

from reinmap.exceptions import ConfigurationError
from reinmap.observations import ObservationRecord
from reinmap.validators import ValidRange, screen_coordinates, validate

from conftest import OBSERVATIONS_CSV

RANGE = ValidRange(
    easting_min=400000,
    easting_max=900000,
    northing_min=6500000,
    northing_max=9500000,
)


def record(row: int, easting, northing, sex=None) -> ObservationRecord:
    return ObservationRecord(row_number=row, easting=easting, northing=northing, sex=sex)


def test_validate_keeps_in_range_records_in_order():
    records = [
        record(2, 450000, 8700000),
        record(3, 999999, 8700000),
        record(4, 460000, 8700000),
    ]
    kept = validate(records, RANGE)
    assert [r.row_number for r in kept] == [2, 4]


def test_bounds_are_inclusive():
    records = [
        record(2, 400000, 6500000),
        record(3, 900000, 9500000),
        record(4, 399999.999, 6500000),
    ]
    kept = validate(records, RANGE)
    assert [r.row_number for r in kept] == [2, 3]


@pytest.mark.parametrize(
    "easting,northing",
    [
        (None, 8700000),
        (450000, None),
        (float("nan"), 8700000),
        (450000, float("nan")),
        (None, None),
    ],
)
def test_missing_coordinate_rejects_record(easting, northing):
    assert validate([record(2, easting, northing)], RANGE) == []


def test_validated_records_satisfy_bounds():
    from reinmap.observations import load_observations

    records = load_observations(OBSERVATIONS_CSV)
    kept = validate(records, RANGE)
    assert all(r in records for r in kept)
    assert all(RANGE.contains(r.easting, r.northing) for r in kept)
    assert [r.row_number for r in kept] == [2, 4, 6, 8, 9]


def test_inverted_range_is_configuration_error():
    with pytest.raises(ConfigurationError):
        ValidRange(easting_min=10, easting_max=1, northing_min=0, northing_max=1)


def test_screen_coordinates_reports_rejections():
    records = [
        record(2, 450000, 8700000),
        record(3, 999999, 8700000),
        record(4, None, 8700000),
    ]
    issues = screen_coordinates(records, RANGE)
    codes = {(issue.code, issue.location) for issue in issues}
    assert ("W_COORD_OUT_OF_RANGE", "observations.csv:row 3,col easting") in codes
    assert ("W_COORD_MISSING", "observations.csv:row 4,col easting") in codes
    assert all(not issue.is_error() for issue in issues)
    assert len(issues) == 2

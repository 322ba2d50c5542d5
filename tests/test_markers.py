"""Tests for marker descriptor building."""

from __future__ import annotations

import dataclasses

import pytest

from reinmap.config import StylesConfig
from reinmap.exceptions import ConfigurationError
from reinmap.observations import ObservationRecord
from reinmap.pipeline import GeoPoint, PopupTemplate, StyleRule, build, reproject
from reinmap.validators import ValidRange, validate

STYLES = StyleRule.from_config(
    StylesConfig(colors={"male": "#1f77b4", "female": "#d62728"}, default="#808080")
)
TEMPLATE = PopupTemplate("Date: {date}; Sex: {sex}; Age: {age}; At: {latitude},{longitude}")


def pair(row: int, sex=None, date=None, age=None, lon=15.123456789, lat=78.987654321):
    record = ObservationRecord(
        row_number=row, easting=1.0, northing=1.0, date=date, sex=sex, age=age
    )
    return record, GeoPoint(longitude=lon, latitude=lat)


def test_descriptor_fields():
    record, point = pair(2, sex="female", date="2021-05-03", age="calf")
    (descriptor,) = build([(record, point)], STYLES, TEMPLATE)

    assert descriptor.position is point
    assert descriptor.style.color == "#d62728"
    assert descriptor.label == "Observation 1"
    assert descriptor.popup_content == (
        "Date: 2021-05-03; Sex: female; Age: calf; At: 78.9877,15.1235"
    )


def test_missing_attributes_render_placeholder():
    (descriptor,) = build([pair(2)], STYLES, TEMPLATE)
    assert descriptor.popup_content.startswith("Date: unknown; Sex: unknown; Age: unknown;")
    assert descriptor.style.color == "#808080"


def test_custom_placeholder_and_precision():
    template = PopupTemplate("{sex} {longitude}", placeholder="n/a", precision=2)
    (descriptor,) = build([pair(2)], STYLES, template)
    assert descriptor.popup_content == "n/a 15.12"


def test_attribute_values_are_html_escaped():
    (descriptor,) = build([pair(2, age="<1 yr>")], STYLES, TEMPLATE)
    assert "&lt;1 yr&gt;" in descriptor.popup_content


def test_labels_are_dense_and_ordered():
    pairs = [pair(2, sex="male"), pair(7, sex="female"), pair(40)]
    descriptors = build(pairs, STYLES, TEMPLATE)
    assert [d.label for d in descriptors] == [
        "Observation 1",
        "Observation 2",
        "Observation 3",
    ]
    assert [d.style.color for d in descriptors] == ["#1f77b4", "#d62728", "#808080"]


def test_descriptors_are_immutable():
    (descriptor,) = build([pair(2)], STYLES, TEMPLATE)
    with pytest.raises(dataclasses.FrozenInstanceError):
        descriptor.label = "changed"  # type: ignore[misc]


def test_template_rejects_unknown_field():
    with pytest.raises(ConfigurationError):
        PopupTemplate("{herd}")


def test_template_rejects_format_spec():
    with pytest.raises(ConfigurationError):
        PopupTemplate("{latitude:.2f}")


def test_three_record_scenario():
    records = [
        ObservationRecord(row_number=2, easting=450000, northing=8700000, sex="male"),
        ObservationRecord(row_number=3, easting=999999, northing=8700000, sex="female"),
        ObservationRecord(row_number=4, easting=460000, northing=8700000, sex=None),
    ]
    valid_range = ValidRange(
        easting_min=400000,
        easting_max=900000,
        northing_min=6500000,
        northing_max=9500000,
    )

    validated = validate(records, valid_range)
    assert validated == [records[0], records[2]]

    pairs = reproject(validated, "EPSG:32633", "EPSG:4326")
    descriptors = build(pairs, STYLES, TEMPLATE)

    assert len(descriptors) == 2
    assert descriptors[0].style.color == "#1f77b4"
    assert descriptors[1].style == STYLES.lookup("definitely-not-a-category")
    assert [d.label for d in descriptors] == ["Observation 1", "Observation 2"]

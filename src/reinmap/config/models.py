"""Pydantic models describing configuration files."""

from __future__ import annotations

import re
from string import Formatter
from typing import Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, Field, field_validator, model_validator
from pyproj import CRS
from pyproj.exceptions import CRSError


SEX_CATEGORIES = ("male", "female")
POPUP_FIELDS = ("date", "sex", "age", "longitude", "latitude", "label")

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def _check_crs(value: str) -> str:
    try:
        CRS.from_user_input(value)
    except CRSError as exc:
        raise ValueError(f"unknown CRS {value!r}") from exc
    return value


def check_template_fields(text: str) -> None:
    """Raise :class:`ValueError` unless *text* only uses plain popup fields."""

    try:
        parsed = list(Formatter().parse(text))
    except ValueError as exc:
        raise ValueError(f"malformed template: {exc}") from exc
    for _, field_name, format_spec, conversion in parsed:
        if field_name is None:
            continue
        if field_name not in POPUP_FIELDS:
            raise ValueError(
                f"template field {{{field_name}}} is not one of {', '.join(POPUP_FIELDS)}"
            )
        if format_spec or conversion:
            raise ValueError(f"template field {{{field_name}}} must not carry a format spec")


def _check_color(value: str) -> str:
    if not _HEX_COLOR.match(value):
        raise ValueError(f"colour {value!r} must be a #rgb or #rrggbb hex string")
    return value


class AxisBounds(BaseModel):
    min: float
    max: float

    @model_validator(mode="after")
    def ensure_order(self) -> "AxisBounds":
        if self.max < self.min:
            raise ValueError("max must not be less than min")
        return self


class RegionConfig(BaseModel):
    name: str
    source_crs: str
    target_crs: str = "EPSG:4326"
    easting: AxisBounds
    northing: AxisBounds
    projection_errors: Literal["abort", "skip"] = "abort"

    @field_validator("source_crs", "target_crs")
    @classmethod
    def ensure_known_crs(cls, value: str) -> str:
        return _check_crs(value)


class StylesConfig(BaseModel):
    colors: Dict[str, str]
    default: str
    missing: Optional[str] = None
    opacity: float = 0.8
    radius: float = 6.0

    @field_validator("default", "missing")
    @classmethod
    def ensure_hex(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return _check_color(value)

    @model_validator(mode="after")
    def check_categories(self) -> "StylesConfig":
        for key, color in self.colors.items():
            if key not in SEX_CATEGORIES:
                raise ValueError(
                    f"colors.{key} is not a known category ({', '.join(SEX_CATEGORIES)})"
                )
            _check_color(color)
        if not 0 <= self.opacity <= 1:
            raise ValueError("opacity must be within 0..1")
        if self.radius <= 0:
            raise ValueError("radius must be positive")
        return self


class PopupConfig(BaseModel):
    template: str = (
        "<b>{label}</b><br>Date: {date}<br>Sex: {sex}<br>Age: {age}"
        "<br>Lon/Lat: {longitude}, {latitude}"
    )
    placeholder: str = "unknown"
    precision: int = 4

    @field_validator("template")
    @classmethod
    def ensure_known_fields(cls, value: str) -> str:
        check_template_fields(value)
        return value

    @field_validator("precision")
    @classmethod
    def ensure_precision(cls, value: int) -> int:
        if value < 0:
            raise ValueError("precision must be >= 0")
        return value


class ColumnsConfig(BaseModel):
    easting: str = "utm_easting"
    northing: str = "utm_northing"
    date: str = "date"
    sex: str = "sex"
    age: str = "age"

    def required(self) -> List[str]:
        return [self.easting, self.northing]


class RenderConfig(BaseModel):
    tiles: str = "OpenStreetMap"
    zoom_start: int = 8
    fallback_center: Tuple[float, float] = (69.0, 25.0)
    figure_size: Tuple[float, float] = (8.0, 8.0)
    dpi: int = 150
    terrain_elevation_url: Optional[str] = (
        "https://s3.amazonaws.com/elevation-tiles-prod/terrarium/{z}/{x}/{y}.png"
    )
    terrain_texture_url: Optional[str] = (
        "https://tile.openstreetmap.org/{z}/{x}/{y}.png"
    )
    pitch: float = Field(default=45.0, ge=0, le=85)
    # metres above sea level; markers are drawn above the terrain mesh at this height
    marker_height: float = Field(default=2500.0, gt=0)

    @model_validator(mode="after")
    def check_values(self) -> "RenderConfig":
        lat, lon = self.fallback_center
        if not (-90 <= lat <= 90 and -180 <= lon <= 180):
            raise ValueError("fallback_center must be (latitude, longitude) in degrees")
        if self.zoom_start < 0:
            raise ValueError("zoom_start must be >= 0")
        if self.dpi <= 0:
            raise ValueError("dpi must be positive")
        return self


class ConfigBundle(BaseModel):
    region: RegionConfig
    styles: StylesConfig
    popup: PopupConfig = Field(default_factory=PopupConfig)
    columns: ColumnsConfig = Field(default_factory=ColumnsConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)

"""Reprojection and marker descriptor stages."""

from .markers import LABEL_FORMAT, MarkerDescriptor, PopupTemplate, build
from .reproject import GeoPoint, ProjectionErrorHandler, Reprojector, reproject, reproject_with
from .styles import SexCategory, Style, StyleRule

__all__ = [
    "GeoPoint",
    "LABEL_FORMAT",
    "MarkerDescriptor",
    "PopupTemplate",
    "ProjectionErrorHandler",
    "Reprojector",
    "SexCategory",
    "Style",
    "StyleRule",
    "build",
    "reproject",
    "reproject_with",
]

"""Shared types for rendering adapters."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, List, Optional, Protocol, Sequence, Tuple

from ..exceptions import RenderError
from ..pipeline.markers import MarkerDescriptor


logger = logging.getLogger(__name__)

Bounds = Tuple[float, float, float, float]


@dataclass
class RenderHandle:
    """Result of rendering descriptors onto one surface."""

    target: str
    surface: Any
    marker_count: int
    saver: Callable[[Path], None] = field(repr=False)

    def save(self, path: Path) -> Path:
        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            self.saver(path)
        except OSError as exc:
            raise RenderError(f"failed to write {path}: {exc}") from exc
        logger.info("wrote %s output with %d markers to %s", self.target, self.marker_count, path)
        return path


class RenderTarget(Protocol):
    name: str

    def render(self, descriptors: Sequence[MarkerDescriptor]) -> RenderHandle:
        ...


def render(descriptors: Sequence[MarkerDescriptor], target: RenderTarget) -> RenderHandle:
    """Hand the ordered descriptors to *target* and return its handle."""

    descriptors = list(descriptors)
    logger.debug("rendering %d markers with %s", len(descriptors), target.name)
    return target.render(descriptors)


def hex_to_rgba(hex_color: str, opacity: float = 1.0) -> List[int]:
    """
    Convert hex color to RGBA list.

    Args:
        hex_color: Hex color string (e.g., "#FF0000")
        opacity: Opacity value (0-1)

    Returns:
        List of [R, G, B, A] values (0-255)
    """
    hex_color = hex_color.lstrip("#")
    if len(hex_color) == 3:
        hex_color = "".join([c * 2 for c in hex_color])

    r = int(hex_color[0:2], 16)
    g = int(hex_color[2:4], 16)
    b = int(hex_color[4:6], 16)
    a = int(opacity * 255)

    return [r, g, b, a]


def descriptor_bounds(descriptors: Sequence[MarkerDescriptor]) -> Optional[Bounds]:
    """Return ``(min_lon, min_lat, max_lon, max_lat)`` or ``None`` when empty."""

    if not descriptors:
        return None
    longitudes = [d.position.longitude for d in descriptors]
    latitudes = [d.position.latitude for d in descriptors]
    return min(longitudes), min(latitudes), max(longitudes), max(latitudes)


def zoom_for_bounds(bounds: Bounds) -> float:
    """Rough web-mercator zoom that fits *bounds* in a typical viewport."""

    min_lon, min_lat, max_lon, max_lat = bounds
    max_range = max(max_lat - min_lat, max_lon - min_lon)
    for threshold, zoom in (
        (180, 1.0),
        (90, 1.2),
        (45, 2),
        (22, 3),
        (11, 4),
        (5, 5),
        (2.5, 6),
        (1, 7),
        (0.5, 8),
        (0.1, 10),
    ):
        if max_range > threshold:
            return zoom
    return 12

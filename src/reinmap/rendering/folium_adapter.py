"""Interactive Leaflet map output via folium."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

import folium

from ..config.models import RenderConfig
from ..pipeline.markers import MarkerDescriptor
from .base import RenderHandle, descriptor_bounds


POPUP_MAX_WIDTH = 300


class FoliumTarget:
    name = "interactive"

    def __init__(self, config: Optional[RenderConfig] = None):
        self.config = config or RenderConfig()

    def render(self, descriptors: Sequence[MarkerDescriptor]) -> RenderHandle:
        bounds = descriptor_bounds(descriptors)
        if bounds is None:
            center = list(self.config.fallback_center)
        else:
            min_lon, min_lat, max_lon, max_lat = bounds
            center = [(min_lat + max_lat) / 2, (min_lon + max_lon) / 2]

        fmap = folium.Map(
            location=center,
            zoom_start=self.config.zoom_start,
            tiles=self.config.tiles,
        )
        for descriptor in descriptors:
            folium.CircleMarker(
                location=[descriptor.position.latitude, descriptor.position.longitude],
                radius=descriptor.style.radius,
                color=descriptor.style.color,
                fill=True,
                fill_color=descriptor.style.color,
                fill_opacity=descriptor.style.opacity,
                popup=folium.Popup(descriptor.popup_content, max_width=POPUP_MAX_WIDTH),
                tooltip=descriptor.label,
            ).add_to(fmap)

        if bounds is not None and len(descriptors) > 1:
            min_lon, min_lat, max_lon, max_lat = bounds
            fmap.fit_bounds([[min_lat, min_lon], [max_lat, max_lon]])

        def save(path: Path) -> None:
            fmap.save(str(path))

        return RenderHandle(
            target=self.name,
            surface=fmap,
            marker_count=len(descriptors),
            saver=save,
        )

"""3D point overlay on a terrain mesh via pydeck."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import pydeck as pdk

from ..config.models import RenderConfig
from ..pipeline.markers import MarkerDescriptor
from .base import RenderHandle, descriptor_bounds, hex_to_rgba, zoom_for_bounds


# Terrarium encoding: height = (red * 256 + green + blue / 256) - 32768
TERRARIUM_DECODER = {
    "rScaler": 256,
    "gScaler": 1,
    "bScaler": 1 / 256,
    "offset": -32768,
}

TOOLTIP = {"html": "{popup}", "style": {"backgroundColor": "white", "color": "black"}}


class PydeckTarget:
    name = "terrain"

    def __init__(self, config: Optional[RenderConfig] = None):
        self.config = config or RenderConfig()

    def render(self, descriptors: Sequence[MarkerDescriptor]) -> RenderHandle:
        layers: List[pdk.Layer] = []
        terrain = self._terrain_layer()
        if terrain is not None:
            layers.append(terrain)
        layers.append(
            pdk.Layer(
                "ScatterplotLayer",
                id="observations",
                data=self._points(descriptors, use_3d=terrain is not None),
                get_position="position",
                get_fill_color="color",
                get_radius="radius",
                radius_units="pixels",
                stroked=True,
                get_line_color=[0, 0, 0, 200],
                line_width_min_pixels=1,
                pickable=True,
            )
        )

        deck = pdk.Deck(
            layers=layers,
            initial_view_state=self._view_state(descriptors),
            map_style=None if terrain is not None else "light",
            tooltip=TOOLTIP,
        )

        def save(path: Path) -> None:
            deck.to_html(str(path), open_browser=False, notebook_display=False)

        return RenderHandle(
            target=self.name,
            surface=deck,
            marker_count=len(descriptors),
            saver=save,
        )

    def _points(
        self, descriptors: Sequence[MarkerDescriptor], use_3d: bool
    ) -> List[Dict[str, Any]]:
        z = self._marker_z(use_3d)
        return [
            {
                "position": [
                    d.position.longitude,
                    d.position.latitude,
                    z,
                ],
                "color": hex_to_rgba(d.style.color, d.style.opacity),
                "radius": d.style.radius,
                "label": d.label,
                "popup": d.popup_content,
            }
            for d in descriptors
        ]

    def _marker_z(self, use_3d: bool) -> float:
        if use_3d:
            return self.config.marker_height
        return 0.0

    def _terrain_layer(self) -> pdk.Layer | None:
        if not self.config.terrain_elevation_url:
            return None
        return pdk.Layer(
            "TerrainLayer",
            id="terrain",
            elevation_decoder=TERRARIUM_DECODER,
            elevation_data=self.config.terrain_elevation_url,
            texture=self.config.terrain_texture_url,
            wireframe=False,
            mesh_max_error=4.0,
            max_zoom=15,
        )

    def _view_state(self, descriptors: Sequence[MarkerDescriptor]) -> pdk.ViewState:
        bounds = descriptor_bounds(descriptors)
        if bounds is None:
            latitude, longitude = self.config.fallback_center
            zoom = float(self.config.zoom_start)
        else:
            min_lon, min_lat, max_lon, max_lat = bounds
            latitude = (min_lat + max_lat) / 2
            longitude = (min_lon + max_lon) / 2
            zoom = zoom_for_bounds(bounds)
        return pdk.ViewState(
            latitude=latitude,
            longitude=longitude,
            zoom=zoom,
            pitch=self.config.pitch,
            bearing=0,
        )

"""Static scatter plot output via matplotlib."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from matplotlib.figure import Figure

from ..config.models import RenderConfig
from ..pipeline.markers import MarkerDescriptor
from ..pipeline.styles import Style
from .base import RenderHandle


class MatplotlibTarget:
    """Plots descriptors as one scatter collection per colour.

    Uses :class:`matplotlib.figure.Figure` directly so no pyplot state or
    interactive backend is involved.
    """

    name = "static"

    def __init__(
        self,
        config: Optional[RenderConfig] = None,
        legend: Optional[Sequence[Tuple[str, Style]]] = None,
        title: Optional[str] = None,
    ):
        self.config = config or RenderConfig()
        self.legend = list(legend or [])
        self.title = title

    def render(self, descriptors: Sequence[MarkerDescriptor]) -> RenderHandle:
        fig = Figure(figsize=self.config.figure_size, dpi=self.config.dpi)
        ax = fig.add_subplot(1, 1, 1)

        groups: Dict[Style, List[MarkerDescriptor]] = {}
        for descriptor in descriptors:
            groups.setdefault(descriptor.style, []).append(descriptor)

        labels = {style: label for label, style in self.legend}
        for style, members in groups.items():
            ax.scatter(
                [d.position.longitude for d in members],
                [d.position.latitude for d in members],
                s=style.radius ** 2,
                c=style.color,
                alpha=style.opacity,
                edgecolors="black",
                linewidths=0.3,
                label=labels.get(style, style.color),
            )

        if not descriptors:
            lat, lon = self.config.fallback_center
            ax.set_xlim(lon - 1, lon + 1)
            ax.set_ylim(lat - 1, lat + 1)

        ax.set_xlabel("Longitude")
        ax.set_ylabel("Latitude")
        if self.title:
            ax.set_title(self.title)
        if groups and self.legend:
            ax.legend(loc="best", fontsize="small")
        ax.grid(True, linewidth=0.3, alpha=0.5)

        def save(path: Path) -> None:
            fig.savefig(path, dpi=self.config.dpi, bbox_inches="tight")

        return RenderHandle(
            target=self.name,
            surface=fig,
            marker_count=len(descriptors),
            saver=save,
        )

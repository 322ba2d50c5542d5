"""Rendering adapters: the only place external map/plot state is mutated."""

from .base import RenderHandle, RenderTarget, render
from .folium_adapter import FoliumTarget
from .matplotlib_adapter import MatplotlibTarget
from .pydeck_adapter import PydeckTarget

__all__ = [
    "FoliumTarget",
    "MatplotlibTarget",
    "PydeckTarget",
    "RenderHandle",
    "RenderTarget",
    "render",
]

"""Public configuration API."""

from .loader import ConfigFiles, load_config_bundle
from .models import (
    AxisBounds,
    ColumnsConfig,
    ConfigBundle,
    PopupConfig,
    RegionConfig,
    RenderConfig,
    StylesConfig,
)

__all__ = [
    "AxisBounds",
    "ColumnsConfig",
    "ConfigBundle",
    "ConfigFiles",
    "PopupConfig",
    "RegionConfig",
    "RenderConfig",
    "StylesConfig",
    "load_config_bundle",
]

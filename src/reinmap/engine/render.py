"""Select a rendering surface and hand it the marker descriptors."""

from __future__ import annotations

from enum import Enum
from typing import Sequence

from ..config import ConfigBundle
from ..exceptions import RenderError
from ..pipeline import MarkerDescriptor, StyleRule
from ..rendering import (
    FoliumTarget,
    MatplotlibTarget,
    PydeckTarget,
    RenderHandle,
    RenderTarget,
    render,
)


class TargetName(str, Enum):
    INTERACTIVE = "interactive"
    STATIC = "static"
    TERRAIN = "terrain"


def make_target(name: str, config: ConfigBundle) -> RenderTarget:
    try:
        target = TargetName(name)
    except ValueError:
        choices = ", ".join(member.value for member in TargetName)
        raise RenderError(f"unknown render target {name!r} (expected one of {choices})") from None

    if target is TargetName.INTERACTIVE:
        return FoliumTarget(config.render)
    if target is TargetName.STATIC:
        return MatplotlibTarget(
            config.render,
            legend=StyleRule.from_config(config.styles).legend(),
            title=config.region.name,
        )
    return PydeckTarget(config.render)


def render_markers(
    descriptors: Sequence[MarkerDescriptor], target_name: str, config: ConfigBundle
) -> RenderHandle:
    return render(descriptors, make_target(target_name, config))

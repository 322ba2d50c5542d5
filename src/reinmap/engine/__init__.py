"""Pipeline orchestration."""

from .markers import MarkerReport, build_markers, run_pipeline
from .render import TargetName, make_target, render_markers

__all__ = [
    "MarkerReport",
    "TargetName",
    "build_markers",
    "make_target",
    "render_markers",
    "run_pipeline",
]

"""Marker pipeline: observations table to marker descriptors."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from ..config import ConfigBundle, load_config_bundle
from ..exceptions import ProjectionError
from ..observations import ObservationRecord, load_observations
from ..pipeline import (
    MarkerDescriptor,
    PopupTemplate,
    ProjectionErrorHandler,
    Reprojector,
    StyleRule,
    build,
    reproject_with,
)
from ..validators import ValidationIssue, ValidRange, screen_coordinates, validate
from ..validators.issues import row_location


logger = logging.getLogger(__name__)


@dataclass
class MarkerReport:
    """Summary of one run of the marker pipeline."""

    observations_path: Optional[Path]
    region: str
    input_count: int
    validated_count: int
    reprojected_count: int
    descriptors: List[MarkerDescriptor] = field(default_factory=list)
    issues: List[ValidationIssue] = field(default_factory=list)

    @property
    def marker_count(self) -> int:
        return len(self.descriptors)

    @property
    def warning_count(self) -> int:
        return sum(1 for issue in self.issues if not issue.is_error())

    def as_dict(self) -> dict:
        return {
            "observations_path": (
                str(self.observations_path) if self.observations_path else None
            ),
            "region": self.region,
            "summary": {
                "input": self.input_count,
                "validated": self.validated_count,
                "reprojected": self.reprojected_count,
                "markers": self.marker_count,
                "warnings": self.warning_count,
            },
            "issues": [issue.as_dict() for issue in self.issues],
            "markers": [descriptor.as_dict() for descriptor in self.descriptors],
        }


def build_markers(observations_path: Path, config_dir: Path) -> MarkerReport:
    """Load configuration and observations and run the full pipeline."""

    config = load_config_bundle(Path(config_dir))
    observations_path = Path(observations_path)
    records = load_observations(observations_path, config.columns)
    report = run_pipeline(records, config)
    report.observations_path = observations_path
    return report


def run_pipeline(records: Sequence[ObservationRecord], config: ConfigBundle) -> MarkerReport:
    """Validate, reproject and describe *records* under *config*.

    When the region's ``projection_errors`` policy is ``"abort"`` the first
    :class:`ProjectionError` propagates; with ``"skip"`` each failure is
    logged and reported as a warning issue.
    """

    valid_range = ValidRange.from_config(config.region)
    reprojector = Reprojector(config.region.source_crs, config.region.target_crs)
    style_rule = StyleRule.from_config(config.styles)
    template = PopupTemplate.from_config(config.popup)

    issues: List[ValidationIssue] = list(screen_coordinates(records, valid_range))
    validated = validate(records, valid_range)

    def skip_projection(error: ProjectionError) -> None:
        logger.warning("skipping observation: %s", error)
        row = getattr(error.record, "row_number", 0)
        issues.append(
            ValidationIssue(
                code="W_PROJECTION_FAILED",
                severity="warning",
                message=error.message,
                location=row_location(row, "easting"),
            )
        )

    on_error: Optional[ProjectionErrorHandler] = None
    if config.region.projection_errors == "skip":
        on_error = skip_projection

    pairs = reproject_with(reprojector, validated, on_error=on_error)
    descriptors = build(pairs, style_rule, template)

    logger.info(
        "%s: %d rows, %d validated, %d reprojected, %d markers",
        config.region.name,
        len(records),
        len(validated),
        len(pairs),
        len(descriptors),
    )
    return MarkerReport(
        observations_path=None,
        region=config.region.name,
        input_count=len(records),
        validated_count=len(validated),
        reprojected_count=len(pairs),
        descriptors=descriptors,
        issues=sorted(issues, key=lambda issue: (issue.severity, issue.code, issue.location)),
    )

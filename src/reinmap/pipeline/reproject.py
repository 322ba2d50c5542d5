"""Coordinate reprojection from a projected CRS to geographic degrees."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Tuple

from pyproj import CRS, Transformer
from pyproj.enums import TransformDirection
from pyproj.exceptions import CRSError, ProjError

from ..exceptions import ConfigurationError, ProjectionError
from ..observations.models import ObservationRecord


logger = logging.getLogger(__name__)

ProjectionErrorHandler = Callable[[ProjectionError], None]


@dataclass(frozen=True)
class GeoPoint:
    longitude: float
    latitude: float

    def rounded(self, precision: int) -> Tuple[float, float]:
        return round(self.longitude, precision), round(self.latitude, precision)


class Reprojector:
    """Wraps a pyproj transformer between a source CRS and a geographic target."""

    def __init__(self, source_crs: str, target_crs: str = "EPSG:4326"):
        try:
            source = CRS.from_user_input(source_crs)
            target = CRS.from_user_input(target_crs)
        except CRSError as exc:
            raise ConfigurationError(f"unknown CRS: {exc}") from exc
        if not target.is_geographic:
            raise ConfigurationError(
                f"target CRS {target_crs} must be geographic (longitude/latitude)"
            )
        self.source_crs = source_crs
        self.target_crs = target_crs
        self._transformer = Transformer.from_crs(source, target, always_xy=True)

    def forward(self, easting: float, northing: float) -> GeoPoint:
        """Transform one projected coordinate pair.

        Raises :class:`ValueError` when pyproj fails or yields a point outside
        the geographic domain.
        """

        try:
            longitude, latitude = self._transformer.transform(
                easting, northing, errcheck=True
            )
        except ProjError as exc:
            raise ValueError(str(exc)) from exc
        if not (math.isfinite(longitude) and math.isfinite(latitude)):
            raise ValueError("transform produced non-finite coordinates")
        if not (-180.0 <= longitude <= 180.0 and -90.0 <= latitude <= 90.0):
            raise ValueError(
                f"transform produced out-of-range point ({longitude}, {latitude})"
            )
        return GeoPoint(longitude=float(longitude), latitude=float(latitude))

    def inverse(self, point: GeoPoint) -> Tuple[float, float]:
        try:
            easting, northing = self._transformer.transform(
                point.longitude,
                point.latitude,
                direction=TransformDirection.INVERSE,
                errcheck=True,
            )
        except ProjError as exc:
            raise ValueError(str(exc)) from exc
        return float(easting), float(northing)


def reproject(
    records: Iterable[ObservationRecord],
    source_crs: str,
    target_crs: str = "EPSG:4326",
    *,
    on_error: Optional[ProjectionErrorHandler] = None,
) -> List[Tuple[ObservationRecord, GeoPoint]]:
    """Pair each record with its geographic position.

    Records are expected to have passed the coordinate validator already.
    With ``on_error=None`` the first failing record aborts the batch by
    raising :class:`ProjectionError`; otherwise the handler receives the error
    and the record is left out of the result.
    """

    reprojector = Reprojector(source_crs, target_crs)
    return reproject_with(reprojector, records, on_error=on_error)


def reproject_with(
    reprojector: Reprojector,
    records: Iterable[ObservationRecord],
    *,
    on_error: Optional[ProjectionErrorHandler] = None,
) -> List[Tuple[ObservationRecord, GeoPoint]]:
    pairs: List[Tuple[ObservationRecord, GeoPoint]] = []
    skipped = 0
    for index, record in enumerate(records):
        try:
            point = reprojector.forward(record.easting, record.northing)
        except (TypeError, ValueError) as exc:
            error = ProjectionError(index, record, str(exc))
            if on_error is None:
                raise error from exc
            on_error(error)
            skipped += 1
            continue
        pairs.append((record, point))

    logger.debug(
        "reprojected %d records from %s to %s (%d skipped)",
        len(pairs),
        reprojector.source_crs,
        reprojector.target_crs,
        skipped,
    )
    return pairs

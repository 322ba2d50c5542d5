"""Load observation tables into structured records."""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from ..config.models import ColumnsConfig
from .exceptions import ObservationFormatError
from .models import ObservationRecord


logger = logging.getLogger(__name__)


def load_observations(
    path: Path, columns: Optional[ColumnsConfig] = None
) -> List[ObservationRecord]:
    """Load observation rows from the CSV at *path*.

    Coordinates that are blank or not numeric become ``None``; the validator
    decides what to do with them. Attribute columns that are absent from the
    file are treated as missing for every row.
    """

    columns = columns or ColumnsConfig()
    path = Path(path)
    if not path.is_file():
        raise ObservationFormatError(path=path, message="observation table not found")

    try:
        df = pd.read_csv(path, dtype=str, skipinitialspace=True)
    except pd.errors.EmptyDataError as exc:
        raise ObservationFormatError(path=path, message="missing header row") from exc
    except (pd.errors.ParserError, UnicodeDecodeError, OSError) as exc:
        raise ObservationFormatError(path=path, message=f"failed to read CSV: {exc}") from exc

    df.columns = [str(column).strip() for column in df.columns]
    missing = [column for column in columns.required() if column not in df.columns]
    if missing:
        raise ObservationFormatError(
            path=path,
            message=f"missing required columns: {', '.join(missing)}",
        )

    eastings = pd.to_numeric(df[columns.easting], errors="coerce")
    northings = pd.to_numeric(df[columns.northing], errors="coerce")

    records: List[ObservationRecord] = []
    for offset, raw in enumerate(df.to_dict(orient="records")):
        records.append(
            ObservationRecord(
                row_number=offset + 2,  # row numbers include header
                easting=_coordinate(eastings.iloc[offset]),
                northing=_coordinate(northings.iloc[offset]),
                date=_attribute(raw, columns.date),
                sex=_attribute(raw, columns.sex),
                age=_attribute(raw, columns.age),
                raw=_raw_strings(raw),
            )
        )

    logger.debug("loaded %d observation rows from %s", len(records), path)
    return records


def _coordinate(value: Any) -> Optional[float]:
    if value is None or pd.isna(value):
        return None
    number = float(value)
    if not math.isfinite(number):
        return None
    return number


def _attribute(raw: Dict[str, Any], column: str) -> Optional[str]:
    value = raw.get(column)
    if value is None or pd.isna(value):
        return None
    text = str(value).strip()
    return text or None


def _raw_strings(raw: Dict[str, Any]) -> Dict[str, str]:
    return {
        str(key): "" if value is None or pd.isna(value) else str(value)
        for key, value in raw.items()
    }

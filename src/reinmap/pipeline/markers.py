"""Build renderer-agnostic marker descriptors from reprojected records."""

from __future__ import annotations

import html
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from ..config.models import PopupConfig, check_template_fields
from ..exceptions import ConfigurationError
from ..observations.models import ObservationRecord
from .reproject import GeoPoint
from .styles import Style, StyleRule


logger = logging.getLogger(__name__)

LABEL_FORMAT = "Observation {index}"


@dataclass(frozen=True)
class MarkerDescriptor:
    position: GeoPoint
    style: Style
    popup_content: str
    label: str

    def as_dict(self) -> dict:
        return {
            "label": self.label,
            "longitude": self.position.longitude,
            "latitude": self.position.latitude,
            "color": self.style.color,
            "popup": self.popup_content,
        }


class PopupTemplate:
    """HTML popup template with ``str.format`` style fields."""

    def __init__(self, text: str, placeholder: str = "unknown", precision: int = 4):
        self._check_fields(text)
        if precision < 0:
            raise ConfigurationError("popup precision must be >= 0")
        self.text = text
        self.placeholder = placeholder
        self.precision = precision

    @classmethod
    def from_config(cls, config: PopupConfig) -> "PopupTemplate":
        return cls(config.template, config.placeholder, config.precision)

    def render(self, record: ObservationRecord, position: GeoPoint, label: str) -> str:
        longitude, latitude = position.rounded(self.precision)
        values = {
            "date": self._text(record.date),
            "sex": self._text(record.sex),
            "age": self._text(record.age),
            "longitude": f"{longitude:.{self.precision}f}",
            "latitude": f"{latitude:.{self.precision}f}",
            "label": html.escape(label),
        }
        return self.text.format(**values)

    def _text(self, value: Optional[str]) -> str:
        if value is None or not str(value).strip():
            return html.escape(self.placeholder)
        return html.escape(str(value).strip())

    @staticmethod
    def _check_fields(text: str) -> None:
        try:
            check_template_fields(text)
        except ValueError as exc:
            raise ConfigurationError(f"popup template: {exc}") from exc


def build(
    pairs: Iterable[Tuple[ObservationRecord, GeoPoint]],
    style_rule: StyleRule,
    popup_template: PopupTemplate,
) -> List[MarkerDescriptor]:
    """Produce one descriptor per pair, labelled densely from 1 in output order."""

    descriptors: List[MarkerDescriptor] = []
    for index, (record, position) in enumerate(pairs, start=1):
        label = LABEL_FORMAT.format(index=index)
        descriptors.append(
            MarkerDescriptor(
                position=position,
                style=style_rule.lookup(record.sex),
                popup_content=popup_template.render(record, position, label),
                label=label,
            )
        )
    logger.debug("built %d marker descriptors", len(descriptors))
    return descriptors

"""Category to style lookup for observation markers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..config.models import StylesConfig
from ..exceptions import ConfigurationError


class SexCategory(str, Enum):
    MALE = "male"
    FEMALE = "female"
    UNKNOWN = "unknown"
    MISSING = "missing"

    @classmethod
    def parse(cls, value: Optional[Any]) -> "SexCategory":
        if value is None:
            return cls.MISSING
        text = str(value).strip().lower()
        if not text or text in {"na", "nan", "none"}:
            return cls.MISSING
        if text == cls.MALE.value:
            return cls.MALE
        if text == cls.FEMALE.value:
            return cls.FEMALE
        return cls.UNKNOWN


@dataclass(frozen=True)
class Style:
    color: str
    opacity: float = 0.8
    radius: float = 6.0


class StyleRule:
    """Total mapping from every :class:`SexCategory` to a :class:`Style`."""

    def __init__(self, styles: Mapping[SexCategory, Style]):
        missing = [category.value for category in SexCategory if category not in styles]
        if missing:
            raise ConfigurationError(
                f"no style configured for categories: {', '.join(missing)}"
            )
        self._styles: Dict[SexCategory, Style] = {
            category: styles[category] for category in SexCategory
        }

    @classmethod
    def from_config(cls, config: StylesConfig) -> "StyleRule":
        def style(color: str) -> Style:
            return Style(color=color, opacity=config.opacity, radius=config.radius)

        default = style(config.default)
        styles = {
            SexCategory.MALE: style(config.colors.get("male", config.default)),
            SexCategory.FEMALE: style(config.colors.get("female", config.default)),
            SexCategory.UNKNOWN: default,
            SexCategory.MISSING: style(config.missing) if config.missing else default,
        }
        return cls(styles)

    def lookup(self, value: Optional[Any]) -> Style:
        return self._styles[SexCategory.parse(value)]

    def legend(self) -> List[Tuple[str, Style]]:
        """Legend entries, merging categories that share a style."""

        entries: List[Tuple[str, Style]] = []
        for category in SexCategory:
            style = self._styles[category]
            for index, (label, existing) in enumerate(entries):
                if existing == style:
                    entries[index] = (f"{label}/{category.value}", existing)
                    break
            else:
                entries.append((category.value, style))
        return entries

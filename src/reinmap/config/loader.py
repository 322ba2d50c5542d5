"""Functions for reading and validating configuration files."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Type, TypeVar

try:  # Python 3.11+
    import tomllib
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore

from pydantic import BaseModel, ValidationError

from ..exceptions import ConfigurationError
from .models import (
    ColumnsConfig,
    ConfigBundle,
    PopupConfig,
    RegionConfig,
    RenderConfig,
    StylesConfig,
)


ModelT = TypeVar("ModelT", bound=BaseModel)


class ConfigFiles:
    """Canonical configuration filenames."""

    REGION = "region.toml"
    STYLES = "styles.toml"
    POPUP = "popup.toml"
    COLUMNS = "columns.toml"
    RENDER = "render.toml"


def load_config_bundle(root: Path) -> ConfigBundle:
    """Load all configuration files from *root* directory.

    ``region.toml`` and ``styles.toml`` are required; the popup, column and
    render files fall back to defaults when absent.
    """

    root = Path(root)
    if not root.is_dir():
        raise ConfigurationError("configuration directory not found", path=root)

    region = _load_toml(root / ConfigFiles.REGION, RegionConfig)
    styles = _load_toml(root / ConfigFiles.STYLES, StylesConfig)
    popup = _load_optional(root / ConfigFiles.POPUP, PopupConfig)
    columns = _load_optional(root / ConfigFiles.COLUMNS, ColumnsConfig)
    render = _load_optional(root / ConfigFiles.RENDER, RenderConfig)
    return ConfigBundle(
        region=region,
        styles=styles,
        popup=popup or PopupConfig(),
        columns=columns or ColumnsConfig(),
        render=render or RenderConfig(),
    )


def _load_optional(path: Path, model: Type[ModelT]) -> Optional[ModelT]:
    if not path.exists():
        return None
    return _load_toml(path, model)


def _load_toml(path: Path, model: Type[ModelT]) -> ModelT:
    try:
        with path.open("rb") as fh:
            data = tomllib.load(fh)
    except FileNotFoundError as exc:
        raise ConfigurationError("file not found", path=path) from exc
    except (tomllib.TOMLDecodeError, OSError) as exc:
        raise ConfigurationError(f"failed to read TOML: {exc}", path=path) from exc

    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(_format_validation_errors(exc), path=path) from exc


def _format_validation_errors(error: ValidationError) -> str:
    messages = []
    for err in error.errors(include_context=False):
        loc = _format_location(err.get("loc", ()))
        msg = err.get("msg", "invalid value")
        if loc:
            messages.append(f"{loc}: {msg}")
        else:
            messages.append(msg)
    return "; ".join(messages)


def _format_location(loc: tuple[Any, ...]) -> str:
    if not loc:
        return ""

    parts: list[str] = []
    for entry in loc:
        if isinstance(entry, int):
            if not parts:
                parts.append(f"[{entry}]")
            else:
                parts[-1] = parts[-1] + f"[{entry}]"
        else:
            parts.append(str(entry))
    return ".".join(parts)

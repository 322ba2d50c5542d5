"""Unit tests for configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from reinmap.config import ConfigBundle, load_config_bundle
from reinmap.exceptions import ConfigurationError

from conftest import CONFIG_DIR


def test_load_config_bundle_success() -> None:
    bundle = load_config_bundle(CONFIG_DIR)
    assert isinstance(bundle, ConfigBundle)
    assert bundle.region.name == "Finnmark"
    assert bundle.region.source_crs == "EPSG:32633"
    assert bundle.region.easting.min == 400000
    assert bundle.styles.colors["male"] == "#1f77b4"
    assert bundle.popup.precision == 4
    assert bundle.columns.easting == "utm_easting"
    assert bundle.render.dpi == 72


def test_optional_files_fall_back_to_defaults(config_copy: Path) -> None:
    (config_copy / "popup.toml").unlink()
    (config_copy / "render.toml").unlink()

    bundle = load_config_bundle(config_copy)
    assert bundle.popup.placeholder == "unknown"
    assert "{label}" in bundle.popup.template
    assert bundle.render.tiles == "OpenStreetMap"


def test_inverted_bounds_rejected(config_copy: Path) -> None:
    (config_copy / "region.toml").write_text(
        """
name = "Broken"
source_crs = "EPSG:32633"

[easting]
min = 900000
max = 400000

[northing]
min = 6500000
max = 9500000
""".strip()
    )

    with pytest.raises(ConfigurationError) as exc:
        load_config_bundle(config_copy)

    message = str(exc.value)
    assert "region.toml" in message
    assert "easting" in message


def test_unknown_crs_rejected(config_copy: Path) -> None:
    (config_copy / "region.toml").write_text(
        """
name = "Nowhere"
source_crs = "EPSG:99999999"

[easting]
min = 0
max = 1

[northing]
min = 0
max = 1
""".strip()
    )

    with pytest.raises(ConfigurationError) as exc:
        load_config_bundle(config_copy)

    assert "source_crs" in str(exc.value)


def test_unknown_style_category_rejected(config_copy: Path) -> None:
    (config_copy / "styles.toml").write_text(
        """
default = "#808080"

[colors]
male = "#1f77b4"
calf = "#00ff00"
""".strip()
    )

    with pytest.raises(ConfigurationError) as exc:
        load_config_bundle(config_copy)

    assert "calf" in str(exc.value)


def test_popup_template_unknown_field_rejected(config_copy: Path) -> None:
    (config_copy / "popup.toml").write_text('template = "Herd: {herd}"\n')

    with pytest.raises(ConfigurationError) as exc:
        load_config_bundle(config_copy)

    assert "popup.toml" in str(exc.value)
    assert "herd" in str(exc.value)


def test_missing_required_file(config_copy: Path) -> None:
    (config_copy / "styles.toml").unlink()

    with pytest.raises(ConfigurationError) as exc:
        load_config_bundle(config_copy)

    assert "styles.toml" in str(exc.value)


def test_invalid_toml(config_copy: Path) -> None:
    (config_copy / "region.toml").write_text("name = \n")

    with pytest.raises(ConfigurationError) as exc:
        load_config_bundle(config_copy)

    assert "failed to read TOML" in str(exc.value)


def test_marker_height_must_be_positive(config_copy: Path) -> None:
    (config_copy / "render.toml").write_text("marker_height = 0\n")

    with pytest.raises(ConfigurationError) as exc:
        load_config_bundle(config_copy)

    assert "marker_height" in str(exc.value)


def test_default_marker_height_clears_terrain() -> None:
    bundle = load_config_bundle(CONFIG_DIR)
    assert bundle.render.marker_height > 0

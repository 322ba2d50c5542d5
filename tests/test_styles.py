"""Tests for the sex to style lookup."""

from __future__ import annotations

import pytest

from reinmap.config import StylesConfig
from reinmap.exceptions import ConfigurationError
from reinmap.pipeline import SexCategory, Style, StyleRule

CONFIG = StylesConfig(colors={"male": "#1f77b4", "female": "#d62728"}, default="#808080")


def test_known_categories():
    rule = StyleRule.from_config(CONFIG)
    assert rule.lookup("male").color == "#1f77b4"
    assert rule.lookup("female").color == "#d62728"
    assert rule.lookup(" Female ").color == "#d62728"


@pytest.mark.parametrize("value", [None, "", "   ", "NA", "castrate", "hunn", 3, "males"])
def test_lookup_is_total(value):
    rule = StyleRule.from_config(CONFIG)
    assert rule.lookup(value) == Style(color="#808080", opacity=0.8, radius=6.0)


def test_missing_can_be_styled_separately():
    config = StylesConfig(
        colors={"male": "#1f77b4", "female": "#d62728"},
        default="#808080",
        missing="#000000",
    )
    rule = StyleRule.from_config(config)
    assert rule.lookup(None).color == "#000000"
    assert rule.lookup("").color == "#000000"
    assert rule.lookup("castrate").color == "#808080"


def test_unconfigured_known_category_uses_default():
    rule = StyleRule.from_config(StylesConfig(colors={"male": "#1f77b4"}, default="#808080"))
    assert rule.lookup("female").color == "#808080"


def test_incomplete_mapping_rejected_at_construction():
    with pytest.raises(ConfigurationError) as exc:
        StyleRule({SexCategory.MALE: Style("#000000")})
    assert "female" in str(exc.value)


def test_parse_categories():
    assert SexCategory.parse("MALE") is SexCategory.MALE
    assert SexCategory.parse(None) is SexCategory.MISSING
    assert SexCategory.parse("x") is SexCategory.UNKNOWN


def test_legend_merges_shared_styles():
    rule = StyleRule.from_config(CONFIG)
    labels = [label for label, _ in rule.legend()]
    assert labels == ["male", "female", "unknown/missing"]

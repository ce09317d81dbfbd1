"""Tests for PipelineConfig validation and label tables."""

from __future__ import annotations

import json

import pytest

from eyebot.engine.config import PipelineConfig
from eyebot.engine.label_tables import AVOID_LABELS, DEFAULT_VERTICAL_ANCHOR


def test_defaults():
    config = PipelineConfig()
    assert config.avoid_labels == AVOID_LABELS
    assert config.max_attempts == 5
    assert config.overlay_proportion_min == 0.3
    assert config.overlay_proportion_max == 0.5
    assert config.default_vertical_anchor == DEFAULT_VERTICAL_ANCHOR


@pytest.mark.parametrize(
    "kwargs",
    [
        {"overlay_proportion_min": 0.6, "overlay_proportion_max": 0.5},
        {"overlay_proportion_min": 0.0},
        {"overlay_proportion_max": 1.5},
        {"use_all_probability": -0.1},
        {"vertical_anchors": {"Cat": 1.2}},
        {"default_vertical_anchor": -0.5},
        {"max_attempts": 0},
    ],
)
def test_invalid_values_rejected(kwargs):
    with pytest.raises(ValueError):
        PipelineConfig(**kwargs)


def test_vertical_anchor_lookup():
    config = PipelineConfig(vertical_anchors={"Cat": 0.2}, default_vertical_anchor=0.6)
    assert config.vertical_anchor_for("Cat") == 0.2
    assert config.vertical_anchor_for("cat") == 0.6


def test_avoid_labels_coerced_to_frozenset():
    config = PipelineConfig(avoid_labels=["Font", "Text"])
    assert config.avoid_labels == frozenset({"Font", "Text"})


def test_from_label_tables(tmp_path):
    path = tmp_path / "labels.json"
    path.write_text(json.dumps({
        "avoid_labels": ["Tree"],
        "vertical_anchors": {"Cat": 0.25},
        "default_vertical_anchor": 0.4,
    }), encoding="utf-8")
    config = PipelineConfig.from_label_tables(path, max_attempts=3)
    assert config.avoid_labels == frozenset({"Tree"})
    assert config.vertical_anchors == {"Cat": 0.25}
    assert config.default_vertical_anchor == 0.4
    assert config.max_attempts == 3


def test_from_partial_label_tables_keeps_defaults(tmp_path):
    path = tmp_path / "labels.json"
    path.write_text(json.dumps({"avoid_labels": []}), encoding="utf-8")
    config = PipelineConfig.from_label_tables(path)
    assert config.avoid_labels == frozenset()
    assert config.vertical_anchor_for("Cat") == PipelineConfig().vertical_anchor_for("Cat")

"""Selection and placement tunables."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

from eyebot.engine.label_tables import (
    AVOID_LABELS,
    DEFAULT_VERTICAL_ANCHOR,
    VERTICAL_ANCHORS,
)


@dataclass
class PipelineConfig:
    """Controls how regions are picked and how the overlays are sized."""

    # Annotation filter
    avoid_labels: frozenset[str] = AVOID_LABELS
    min_label_length: int = 2

    # Region selection
    use_all_probability: float = 0.1

    # Overlay size as a fraction of the contain-fitted size
    overlay_proportion_min: float = 0.3
    overlay_proportion_max: float = 0.5

    # Vertical anchor: fraction of region height from its top
    vertical_anchors: dict[str, float] = field(default_factory=lambda: dict(VERTICAL_ANCHORS))
    default_vertical_anchor: float = DEFAULT_VERTICAL_ANCHOR

    # Retry loop
    max_attempts: int = 5

    # Output
    comment_text: str = "\U0001f440"
    jpeg_quality: int = 90

    def __post_init__(self) -> None:
        self.avoid_labels = frozenset(self.avoid_labels)
        if not 0.0 < self.overlay_proportion_min <= self.overlay_proportion_max <= 1.0:
            raise ValueError(
                "Overlay proportions must satisfy 0 < min <= max <= 1, got "
                f"{self.overlay_proportion_min}..{self.overlay_proportion_max}"
            )
        if not 0.0 <= self.use_all_probability <= 1.0:
            raise ValueError(f"use_all_probability out of range: {self.use_all_probability}")
        anchors = [*self.vertical_anchors.values(), self.default_vertical_anchor]
        if any(not 0.0 <= a <= 1.0 for a in anchors):
            raise ValueError("Vertical anchors must lie in [0, 1]")
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts}")

    def vertical_anchor_for(self, label: str) -> float:
        return self.vertical_anchors.get(label, self.default_vertical_anchor)

    @classmethod
    def from_label_tables(cls, path: str | Path, **overrides) -> PipelineConfig:
        """Build a config whose label tables come from a JSON file."""
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        kwargs = dict(overrides)
        if "avoid_labels" in data:
            kwargs["avoid_labels"] = frozenset(data["avoid_labels"])
        if "vertical_anchors" in data:
            kwargs["vertical_anchors"] = {str(k): float(v) for k, v in data["vertical_anchors"].items()}
        if "default_vertical_anchor" in data:
            kwargs["default_vertical_anchor"] = float(data["default_vertical_anchor"])
        return cls(**kwargs)

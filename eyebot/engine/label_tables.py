"""Label-keyed configuration tables.

Bump ``LABEL_TABLES_VERSION`` when either table changes so the logged
version matches what produced a given post. A JSON file with the same
keys (``avoid_labels``, ``vertical_anchors``, ``default_vertical_anchor``)
can replace these at runtime, see ``PipelineConfig.from_label_tables``.
"""

from __future__ import annotations

LABEL_TABLES_VERSION = 3

# Exact, case-sensitive matches. Text regions make for bad eye targets and
# people already have eyes.
AVOID_LABELS: frozenset[str] = frozenset({
    "font",
    "text",
    "Font",
    "Text",
    "Person",
    "Man",
    "Woman",
    "Boy",
    "Girl",
})

# Fraction of the box height, from its top, where the top edge of the eyes
# goes. Animals get them near the head; tall objects near the upper third.
VERTICAL_ANCHORS: dict[str, float] = {
    "Animal": 0.15,
    "Bird": 0.1,
    "Cat": 0.15,
    "Dog": 0.15,
    "Horse": 0.1,
    "Building": 0.3,
    "House": 0.3,
    "Tower": 0.2,
    "Tree": 0.25,
    "Bottle": 0.2,
    "Lamp": 0.2,
    "Chair": 0.1,
    "Car": 0.35,
    "Wheel": 0.25,
    "Tire": 0.25,
}

# Mid-box.
DEFAULT_VERTICAL_ANCHOR = 0.5

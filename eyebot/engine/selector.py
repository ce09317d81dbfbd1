"""Which eligible annotations get captioned and decorated.

Two independent draws: the caption names every drawn annotation, but only
an order-preserving subsample of them becomes placement candidates. So a
caption can mention objects that end up without eyes.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from eyebot.engine.context import Region
from eyebot.errors import NoAnnotationsError
from eyebot.models.annotations import Annotation


@dataclass(frozen=True)
class Selection:
    drawn: list[Annotation]
    caption_text: str
    candidates: list[Region]


def choose_count(n: int, rng: np.random.Generator, use_all_probability: float) -> int:
    """Number of annotations to use: all of them sometimes, else 1..n."""
    if rng.random() < use_all_probability:
        return n
    return int(rng.integers(1, n + 1))


def build_caption(annotations: list[Annotation]) -> str:
    return ", ".join(a.label for a in annotations)


def select_regions(
    eligible: list[Annotation],
    rng: np.random.Generator,
    use_all_probability: float = 0.1,
) -> Selection:
    n = len(eligible)
    if n == 0:
        raise NoAnnotationsError("No valid names in localizedObjectAnnotations.")

    count = choose_count(n, rng, use_all_probability)
    drawn = [eligible[int(i)] for i in rng.choice(n, size=count, replace=False)]

    placed_count = int(rng.integers(1, count + 1))
    keep = sorted(int(i) for i in rng.choice(count, size=placed_count, replace=False))
    candidates = [Region.from_annotation(drawn[i]) for i in keep]

    return Selection(drawn=drawn, caption_text=build_caption(drawn), candidates=candidates)

"""Annotation eligibility."""

from __future__ import annotations

from collections.abc import Callable, Collection, Iterable

from eyebot.models.annotations import Annotation

OffensivenessCheck = Callable[[str], bool]


def is_eligible(
    annotation: Annotation,
    avoid_labels: Collection[str],
    is_offensive: OffensivenessCheck,
    min_label_length: int = 2,
) -> bool:
    """True if the annotation may be captioned and decorated.

    The avoid list is matched exactly against the raw label, case included.
    """
    label = annotation.name
    return (
        len(label) >= min_label_length
        and label not in avoid_labels
        and not is_offensive(label)
    )


def filter_eligible(
    annotations: Iterable[Annotation],
    avoid_labels: Collection[str],
    is_offensive: OffensivenessCheck,
    min_label_length: int = 2,
) -> list[Annotation]:
    return [
        a for a in annotations
        if is_eligible(a, avoid_labels, is_offensive, min_label_length)
    ]

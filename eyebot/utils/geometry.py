"""Leaf-node geometry helpers. No engine imports.

All coordinates here are normalized to the 0.0-1.0 range of the source
image, with y growing downward.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol


class VertexLike(Protocol):
    x: float | None
    y: float | None


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned box in normalized image coordinates."""

    top: float
    bottom: float
    left: float
    right: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def center_x(self) -> float:
        return self.left + self.width / 2


def vertices_to_bounds(vertices: Iterable[VertexLike]) -> BoundingBox:
    """Fold polygon vertices into their bounding box.

    A vertex with no ``x`` means the detector gave up on that axis: the box
    then spans the full width no matter what the other vertices say. Same
    for a missing ``y`` and the height.
    """
    left: float | None = None
    right: float | None = None
    top: float | None = None
    bottom: float | None = None
    full_width = False
    full_height = False

    for vertex in vertices:
        if vertex.x is None:
            full_width = True
        else:
            left = vertex.x if left is None else min(left, vertex.x)
            right = vertex.x if right is None else max(right, vertex.x)

        if vertex.y is None:
            full_height = True
        else:
            top = vertex.y if top is None else min(top, vertex.y)
            bottom = vertex.y if bottom is None else max(bottom, vertex.y)

    if left is None and not full_width and top is None and not full_height:
        raise ValueError("Cannot compute bounds of an empty polygon")

    if full_width or left is None or right is None:
        left, right = 0.0, 1.0
    if full_height or top is None or bottom is None:
        top, bottom = 0.0, 1.0

    return BoundingBox(top=float(top), bottom=float(bottom), left=float(left), right=float(right))


def overlaps(a: BoundingBox, b: BoundingBox) -> bool:
    """Check if two boxes intersect. Touching edges count as overlap."""
    return not (a.right < b.left or b.right < a.left or a.bottom < b.top or b.bottom < a.top)

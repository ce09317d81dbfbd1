"""AttemptContext — the single mutable state object flowing through one attempt.

Regions and placements are plain frozen records; the context collects what
each stage produced so a failed attempt can be logged with what it got to.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from eyebot.models.annotations import Annotation
from eyebot.utils.geometry import BoundingBox, vertices_to_bounds


class Stage(enum.Enum):
    OBTAINING = "obtaining"
    ANNOTATING = "annotating"
    SELECTING = "selecting"
    PLACING = "placing"
    COMPOSITING = "compositing"
    PUBLISHING = "publishing"


@dataclass(frozen=True)
class Region:
    """Placement target derived from one accepted annotation."""

    label: str
    bounds: BoundingBox

    @classmethod
    def from_annotation(cls, annotation: Annotation) -> Region:
        return cls(
            label=annotation.label,
            bounds=vertices_to_bounds(annotation.bounding_poly.normalized_vertices),
        )


@dataclass(frozen=True)
class Placement:
    region: Region
    overlay_index: int
    overlay_scale: float
    # Final overlay size in pixels
    width: int
    height: int
    # Top-left destination in base image pixels
    dest_x: float
    dest_y: float


@dataclass(frozen=True)
class AttemptResult:
    comment_text: str
    caption_text: str
    image_buffer: bytes


@dataclass
class RunOutcome:
    """Summary of the retry loop."""

    succeeded: bool = False
    attempts: int = 0
    result: AttemptResult | None = None
    errors: list[str] = field(default_factory=list)


@dataclass
class AttemptContext:
    """Shared state for one attempt."""

    attempt: int = 1
    stage: Stage = Stage.OBTAINING

    source_buffer: bytes = b""
    annotations: list[Annotation] = field(default_factory=list)
    eligible: list[Annotation] = field(default_factory=list)

    caption_text: str = ""
    candidates: list[Region] = field(default_factory=list)
    accepted: list[Region] = field(default_factory=list)
    placements: list[Placement] = field(default_factory=list)

    image_size: tuple[int, int] = (0, 0)
    output_buffer: bytes = b""

    # Stage name -> elapsed ms
    timings: dict[str, float] = field(default_factory=dict)

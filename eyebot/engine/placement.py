"""Where each overlay goes and how big it is.

Pure arithmetic on sizes: no pixels are touched here, the compositor does
the resizing. Given the same random source state the output is identical.
"""

from __future__ import annotations

import logging

import numpy as np

from eyebot.engine.assets import OverlayPool
from eyebot.engine.config import PipelineConfig
from eyebot.engine.context import Placement, Region

logger = logging.getLogger(__name__)


def contain_size(src_w: int, src_h: int, max_w: float, max_h: float) -> tuple[int, int]:
    """Largest size with the source aspect ratio that fits inside max_w x max_h.

    Floors, so the result never pokes out of the box. A box under 1px on
    either side gives 0 on that side.
    """
    ratio = min(max_w / src_w, max_h / src_h)
    return int(src_w * ratio), int(src_h * ratio)


def compute_placement(
    region: Region,
    image_size: tuple[int, int],
    pool: OverlayPool,
    rng: np.random.Generator,
    config: PipelineConfig,
) -> Placement | None:
    """Size and position one overlay, or None if the region is too small to hold one."""
    image_w, image_h = image_size
    bounds = region.bounds
    region_w = bounds.width * image_w
    region_h = bounds.height * image_h

    overlay_index = int(rng.integers(len(pool)))
    fit_w, fit_h = contain_size(*pool.size_of(overlay_index), region_w, region_h)

    scale = float(rng.uniform(config.overlay_proportion_min, config.overlay_proportion_max))
    width = int(fit_w * scale)
    height = int(fit_h * scale)
    if width < 1 or height < 1:
        logger.debug(
            "Skipping %r: region %.1fx%.1fpx too small for an overlay", region.label, region_w, region_h
        )
        return None

    dest_x = bounds.center_x * image_w - width / 2
    anchor = config.vertical_anchor_for(region.label)
    dest_y = (bounds.top + bounds.height * anchor) * image_h

    logger.debug(
        "Placement %r: overlay=%d scale=%.3f size=%dx%d at (%.1f, %.1f)",
        region.label,
        overlay_index,
        scale,
        width,
        height,
        dest_x,
        dest_y,
    )
    return Placement(
        region=region,
        overlay_index=overlay_index,
        overlay_scale=scale,
        width=width,
        height=height,
        dest_x=dest_x,
        dest_y=dest_y,
    )


def compute_placements(
    regions: list[Region],
    image_size: tuple[int, int],
    pool: OverlayPool,
    rng: np.random.Generator,
    config: PipelineConfig,
) -> list[Placement]:
    placements = []
    for region in regions:
        placement = compute_placement(region, image_size, pool, rng, config)
        if placement is not None:
            placements.append(placement)
    return placements

"""Greedy overlap resolution: first accepted wins."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from eyebot.engine.context import Region
from eyebot.utils.geometry import overlaps

logger = logging.getLogger(__name__)


def resolve(candidates: Iterable[Region]) -> list[Region]:
    """Keep each candidate that does not overlap one already kept.

    Dropped candidates are never reconsidered.
    """
    accepted: list[Region] = []
    for region in candidates:
        clash = next((a for a in accepted if overlaps(region.bounds, a.bounds)), None)
        if clash is not None:
            logger.debug("Dropping %r: overlaps %r", region.label, clash.label)
            continue
        accepted.append(region)
    return accepted

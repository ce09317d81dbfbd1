"""Overlay asset pool, decoded once at startup and shared read-only."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from PIL import Image

from eyebot.errors import AssetLoadError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OverlayPool:
    """Immutable handle on the overlay images. Use ``clone`` before editing."""

    images: tuple[Image.Image, ...]
    names: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.images:
            raise AssetLoadError("Overlay pool is empty")

    def __len__(self) -> int:
        return len(self.images)

    def size_of(self, index: int) -> tuple[int, int]:
        return self.images[index].size

    def clone(self, index: int) -> Image.Image:
        return self.images[index].copy()


def load_overlay_pool(paths: Iterable[str | Path]) -> OverlayPool:
    """Decode every overlay file. Any failure is fatal."""
    images: list[Image.Image] = []
    names: list[str] = []
    for path in paths:
        path = Path(path)
        try:
            with Image.open(path) as im:
                images.append(im.convert("RGBA"))
        except (OSError, Image.DecompressionBombError) as e:
            raise AssetLoadError(f"Could not load overlay {path}: {e}") from e
        names.append(path.name)
        logger.debug("Loaded overlay %s (%dx%d)", path.name, *images[-1].size)

    pool = OverlayPool(images=tuple(images), names=tuple(names))
    logger.info("Overlay pool ready: %d image(s)", len(pool))
    return pool

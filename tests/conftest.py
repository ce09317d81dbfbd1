"""Shared test fixtures."""

from __future__ import annotations

import io

import numpy as np
import pytest
from PIL import Image

from eyebot.engine.assets import OverlayPool
from eyebot.engine.context import AttemptResult
from eyebot.errors import PublishError
from eyebot.models.annotations import Annotation


BASE_SIZE = (400, 300)
OVERLAY_SIZE = (64, 32)


def make_annotation(
    name: str,
    left: float,
    top: float,
    right: float,
    bottom: float,
    score: float = 0.9,
) -> Annotation:
    """Annotation with a rectangular polygon, as the service returns them."""
    return Annotation.model_validate({
        "mid": "/m/test",
        "name": name,
        "score": score,
        "boundingPoly": {
            "normalizedVertices": [
                {"x": left, "y": top},
                {"x": right, "y": top},
                {"x": right, "y": bottom},
                {"x": left, "y": bottom},
            ]
        },
    })


def make_jpeg(size: tuple[int, int] = BASE_SIZE, color: tuple[int, int, int] = (255, 255, 255)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, format="JPEG")
    return buf.getvalue()


def make_overlay(size: tuple[int, int] = OVERLAY_SIZE, color=(255, 0, 0, 255)) -> Image.Image:
    return Image.new("RGBA", size, color)


def make_pool(*sizes: tuple[int, int]) -> OverlayPool:
    sizes = sizes or (OVERLAY_SIZE,)
    return OverlayPool(images=tuple(make_overlay(s) for s in sizes))


CAT = make_annotation("Cat", 0.1, 0.1, 0.4, 0.6)
FONT = make_annotation("Font", 0.5, 0.5, 0.9, 0.9)
# Overlaps CAT
BIRD = make_annotation("Bird", 0.3, 0.2, 0.6, 0.5)
# Clear of CAT and BIRD
DOG = make_annotation("Dog", 0.7, 0.7, 0.95, 0.95)


class FakeSource:
    """Returns (or raises) its items in order, repeating the last one."""

    def __init__(self, *items: bytes | Exception) -> None:
        self._items = list(items)
        self.calls = 0

    async def fetch_random_image_buffer(self) -> bytes:
        item = self._items[min(self.calls, len(self._items) - 1)]
        self.calls += 1
        if isinstance(item, Exception):
            raise item
        return item


class FakeAnnotator:
    def __init__(self, *items: list[Annotation] | Exception) -> None:
        self._items = list(items)
        self.calls = 0
        self.images: list[bytes] = []

    async def annotate(self, image: bytes) -> list[Annotation]:
        item = self._items[min(self.calls, len(self._items) - 1)]
        self.calls += 1
        self.images.append(image)
        if isinstance(item, Exception):
            raise item
        return list(item)


class RecordingPublisher:
    def __init__(self, fail_times: int = 0) -> None:
        self.results: list[AttemptResult] = []
        self._fail_times = fail_times
        self.calls = 0

    async def publish(self, result: AttemptResult) -> str:
        self.calls += 1
        if self.calls <= self._fail_times:
            raise PublishError("target said no")
        self.results.append(result)
        return f"post-{len(self.results)}"


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def pool() -> OverlayPool:
    return make_pool()


@pytest.fixture
def base_jpeg() -> bytes:
    return make_jpeg()

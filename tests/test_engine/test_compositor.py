"""Tests for decoding, compositing and encoding."""

from __future__ import annotations

import io

import pytest
from PIL import Image

from eyebot.engine.compositor import composite, decode_image, encode_jpeg
from eyebot.engine.context import Placement, Region
from eyebot.errors import DecodeError
from eyebot.utils.geometry import BoundingBox
from tests.conftest import BASE_SIZE, make_jpeg, make_pool

_REGION = Region(label="Thing", bounds=BoundingBox(top=0.0, bottom=0.5, left=0.0, right=0.5))


def _placement(x, y, w=20, h=10, index=0) -> Placement:
    return Placement(region=_REGION, overlay_index=index, overlay_scale=0.4, width=w, height=h, dest_x=x, dest_y=y)


def test_decode_valid_jpeg():
    image = decode_image(make_jpeg((120, 80)))
    assert image.size == (120, 80)
    assert image.mode == "RGB"


def test_decode_garbage_raises():
    with pytest.raises(DecodeError):
        decode_image(b"definitely not an image")


def test_overlay_drawn_at_rounded_offset():
    base = Image.new("RGB", BASE_SIZE, (255, 255, 255))
    out = composite(base, [_placement(10.4, 20.6)], make_pool())
    assert out.getpixel((10, 21)) == (255, 0, 0)
    assert out.getpixel((29, 30)) == (255, 0, 0)
    assert out.getpixel((9, 21)) == (255, 255, 255)
    assert out.getpixel((30, 21)) == (255, 255, 255)


def test_transparent_overlay_pixels_keep_base():
    pool = make_pool()
    pool.images[0].putpixel((0, 0), (0, 0, 0, 0))
    base = Image.new("RGB", BASE_SIZE, (0, 0, 255))
    out = composite(base, [_placement(0, 0, w=64, h=32)], pool)
    assert out.getpixel((0, 0)) == (0, 0, 255)
    assert out.getpixel((5, 5)) == (255, 0, 0)


def test_later_placements_on_top():
    pool = make_pool((10, 10), (10, 10))
    pool.images[1].paste((0, 255, 0, 255), (0, 0, 10, 10))
    base = Image.new("RGB", BASE_SIZE, (255, 255, 255))
    out = composite(base, [_placement(0, 0, index=0), _placement(5, 0, index=1)], pool)
    assert out.getpixel((2, 2)) == (255, 0, 0)
    assert out.getpixel((7, 2)) == (0, 255, 0)


def test_base_and_pool_untouched():
    pool = make_pool()
    base = Image.new("RGB", BASE_SIZE, (255, 255, 255))
    composite(base, [_placement(0, 0)], pool)
    assert base.getpixel((5, 5)) == (255, 255, 255)
    assert pool.images[0].size == (64, 32)


def test_overlay_past_edge_is_clipped():
    base = Image.new("RGB", (50, 50), (255, 255, 255))
    out = composite(base, [_placement(40, 45)], make_pool())
    assert out.size == (50, 50)
    assert out.getpixel((49, 49)) == (255, 0, 0)


def test_encode_jpeg_roundtrips_size():
    data = encode_jpeg(Image.new("RGBA", (30, 20), (10, 20, 30, 255)))
    with Image.open(io.BytesIO(data)) as im:
        assert im.format == "JPEG"
        assert im.size == (30, 20)

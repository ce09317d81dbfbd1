"""Decode, draw overlays, encode."""

from __future__ import annotations

import io

from PIL import Image

from eyebot.engine.assets import OverlayPool
from eyebot.engine.context import Placement
from eyebot.errors import DecodeError


def decode_image(buffer: bytes) -> Image.Image:
    try:
        with Image.open(io.BytesIO(buffer)) as im:
            return im.convert("RGB")
    except (OSError, Image.DecompressionBombError) as e:
        raise DecodeError(f"Could not decode base image ({len(buffer)} bytes): {e}") from e


def composite(base: Image.Image, placements: list[Placement], pool: OverlayPool) -> Image.Image:
    """Draw overlays in list order; later ones land on top.

    ``base`` is left untouched.
    """
    out = base.copy()
    for p in placements:
        overlay = pool.clone(p.overlay_index).resize((p.width, p.height), Image.Resampling.LANCZOS)
        out.paste(overlay, (round(p.dest_x), round(p.dest_y)), overlay)
    return out


def encode_jpeg(image: Image.Image, quality: int = 90) -> bytes:
    buf = io.BytesIO()
    image.convert("RGB").save(buf, format="JPEG", quality=quality)
    return buf.getvalue()

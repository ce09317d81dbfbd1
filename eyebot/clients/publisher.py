"""Publish targets: note-taker endpoints, or a scratch directory for dry runs."""

from __future__ import annotations

import base64
import logging
import uuid
from dataclasses import dataclass
from pathlib import Path

import httpx

from eyebot.engine.context import AttemptResult
from eyebot.errors import PublishError

logger = logging.getLogger(__name__)

ID_PREFIX = "eyes-"


@dataclass(frozen=True)
class PostRequest:
    id: str
    text: str
    alt_text: str
    media_filename: str
    buffer: bytes
    targets: tuple[str, ...]

    def to_json(self) -> dict[str, str]:
        return {
            "id": self.id,
            "caption": self.text,
            "altText": self.alt_text,
            "mediaFilename": self.media_filename,
            "buffer": base64.b64encode(self.buffer).decode("ascii"),
        }


def random_id(length: int = 8) -> str:
    return uuid.uuid4().hex[:length]


class NoteTakerPublisher:
    def __init__(self, client: httpx.AsyncClient, targets: list[str], token: str = "") -> None:
        self._client = client
        self._targets = tuple(targets)
        self._token = token

    def make_request(self, result: AttemptResult) -> PostRequest:
        post_id = ID_PREFIX + random_id(8)
        return PostRequest(
            id=post_id,
            text=result.comment_text,
            alt_text=result.caption_text,
            media_filename=post_id + ".jpg",
            buffer=result.image_buffer,
            targets=self._targets,
        )

    async def publish(self, result: AttemptResult) -> str:
        if not self._targets:
            raise PublishError("No publish targets configured - set NOTE_TAKER_TARGETS")

        request = self.make_request(result)
        headers = {"Authorization": f"Bearer {self._token}"} if self._token else {}
        body = request.to_json()
        for url in request.targets:
            try:
                response = await self._client.post(url, json=body, headers=headers)
                response.raise_for_status()
            except httpx.HTTPError as e:
                raise PublishError(f"Publishing {request.id} to {url} failed: {e}") from e
            logger.info("Posted %s to %s", request.id, url)
        return request.id


class DryRunPublisher:
    """Writes the image to ``<scratch_dir>/<caption>.jpg`` instead of posting."""

    def __init__(self, scratch_dir: Path) -> None:
        self._scratch_dir = Path(scratch_dir)

    def path_for(self, caption: str) -> Path:
        name = caption.replace("/", "-").replace("\\", "-") or "untitled"
        return self._scratch_dir / f"{name}.jpg"

    async def publish(self, result: AttemptResult) -> str:
        logger.info("Would have posted: %s", result.comment_text)
        path = self.path_for(result.caption_text)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(result.image_buffer)
        except OSError as e:
            raise PublishError(f"Could not write {path}: {e}") from e
        logger.info("Wrote %s", path)
        return str(path)

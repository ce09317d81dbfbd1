"""Object localization via the Cloud Vision ``images:annotate`` endpoint."""

from __future__ import annotations

import base64
import logging
from typing import Any

import httpx
from pydantic import ValidationError

from eyebot.errors import AnnotationError, NoAnnotationsError
from eyebot.models.annotations import Annotation, BatchAnnotateResponse

logger = logging.getLogger(__name__)

MAX_RESULTS = 100


def build_request_body(image: bytes, max_results: int = MAX_RESULTS) -> dict[str, Any]:
    return {
        "requests": [
            {
                "image": {"content": base64.b64encode(image).decode("ascii")},
                "features": [{"type": "OBJECT_LOCALIZATION", "maxResults": max_results}],
            }
        ]
    }


def parse_annotations(payload: Any) -> list[Annotation]:
    """Pull ``responses[0].localizedObjectAnnotations`` out of a response body."""
    try:
        batch = BatchAnnotateResponse.model_validate(payload)
    except ValidationError as e:
        raise AnnotationError(f"Malformed annotation response: {e}") from e

    if not batch.responses:
        raise NoAnnotationsError("No localizedObjectAnnotations in response.")
    first = batch.responses[0]
    if first.error is not None and first.error.message:
        raise AnnotationError(
            f"Annotation service error {first.error.code}: {first.error.message}"
        )
    if first.localized_object_annotations is None:
        raise NoAnnotationsError("No localizedObjectAnnotations in response.")
    return list(first.localized_object_annotations)


class VisionAnnotator:
    def __init__(self, client: httpx.AsyncClient, api_url: str, api_key: str) -> None:
        self._client = client
        self._api_url = api_url
        self._api_key = api_key

    async def annotate(self, image: bytes) -> list[Annotation]:
        if not self._api_key:
            raise AnnotationError("Annotation service not configured - set GOOGLE_VISION_API_KEY in .env")
        try:
            response = await self._client.post(
                self._api_url,
                params={"key": self._api_key},
                json=build_request_body(image),
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as e:
            raise AnnotationError(f"Annotation request failed: {e}") from e
        except ValueError as e:
            raise AnnotationError(f"Annotation response is not JSON: {e}") from e

        annotations = parse_annotations(payload)
        logger.info(
            "Annotations: %s",
            ", ".join(f"{a.label} ({a.score:.2f})" for a in annotations) or "none",
        )
        return annotations

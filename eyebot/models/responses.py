"""API response models."""

from __future__ import annotations

import base64

from pydantic import BaseModel, Field

from eyebot.engine.context import RunOutcome


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    overlays_loaded: int = 0
    label_tables_version: int = 0


class AttemptsResponse(BaseModel):
    succeeded: bool
    attempts: int = Field(..., description="Attempts used, including the successful one")
    comment_text: str = ""
    caption_text: str = ""
    image_base64: str = Field(default="", description="JPEG output, base64 encoded")
    errors: list[str] = Field(default_factory=list)

    @classmethod
    def from_outcome(cls, outcome: RunOutcome) -> AttemptsResponse:
        result = outcome.result
        return cls(
            succeeded=outcome.succeeded,
            attempts=outcome.attempts,
            comment_text=result.comment_text if result else "",
            caption_text=result.caption_text if result else "",
            image_base64=base64.b64encode(result.image_buffer).decode("ascii") if result else "",
            errors=list(outcome.errors),
        )

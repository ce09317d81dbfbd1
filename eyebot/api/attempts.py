"""POST /api/attempts — run the retry loop once (dry run unless told otherwise)."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from eyebot.dependencies import get_pipeline
from eyebot.engine.pipeline import AttemptPipeline
from eyebot.models.responses import AttemptsResponse

router = APIRouter()


@router.post("/attempts", response_model=AttemptsResponse)
async def run_attempts(pipeline: AttemptPipeline = Depends(get_pipeline)) -> AttemptsResponse:
    outcome = await pipeline.run()
    return AttemptsResponse.from_outcome(outcome)

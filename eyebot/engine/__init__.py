"""eyebot region selection and overlay placement engine."""

from eyebot.engine.config import PipelineConfig
from eyebot.engine.context import AttemptContext, AttemptResult, Placement, Region, RunOutcome
from eyebot.engine.pipeline import AttemptPipeline

__all__ = [
    "PipelineConfig",
    "AttemptContext",
    "AttemptResult",
    "Placement",
    "Region",
    "RunOutcome",
    "AttemptPipeline",
]

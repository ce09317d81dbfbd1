"""Attempt orchestrator: runs every stage in order, retries failed attempts from the top."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Protocol

import numpy as np
from PIL import Image

from eyebot.engine.assets import OverlayPool
from eyebot.engine.compositor import composite, decode_image, encode_jpeg
from eyebot.engine.config import PipelineConfig
from eyebot.engine.context import AttemptContext, AttemptResult, Placement, RunOutcome, Stage
from eyebot.engine.filter import OffensivenessCheck, filter_eligible
from eyebot.engine.label_tables import LABEL_TABLES_VERSION
from eyebot.engine.overlap import resolve
from eyebot.engine.placement import compute_placements
from eyebot.engine.propriety import WordListCheck
from eyebot.engine.selector import select_regions
from eyebot.errors import EyebotError, NoAnnotationsError
from eyebot.models.annotations import Annotation

logger = logging.getLogger(__name__)


class ImageSource(Protocol):
    async def fetch_random_image_buffer(self) -> bytes: ...


class Annotator(Protocol):
    async def annotate(self, image: bytes) -> list[Annotation]: ...


class Publisher(Protocol):
    async def publish(self, result: AttemptResult) -> str: ...


class AttemptPipeline:
    """Runs attempts until one publishes or ``max_attempts`` is used up."""

    def __init__(
        self,
        source: ImageSource,
        annotator: Annotator,
        publisher: Publisher,
        pool: OverlayPool,
        rng: np.random.Generator,
        config: PipelineConfig | None = None,
        is_offensive: OffensivenessCheck | None = None,
    ) -> None:
        self.source = source
        self.annotator = annotator
        self.publisher = publisher
        self.pool = pool
        self.rng = rng
        self.config = config or PipelineConfig()
        self.is_offensive = is_offensive if is_offensive is not None else WordListCheck()

    async def run(self) -> RunOutcome:
        """Run the retry loop."""
        outcome = RunOutcome()
        max_attempts = self.config.max_attempts
        logger.info("Starting run: max %d attempts, label tables v%d", max_attempts, LABEL_TABLES_VERSION)

        while outcome.attempts < max_attempts:
            outcome.attempts += 1
            ctx = AttemptContext(attempt=outcome.attempts)
            try:
                result = await self.run_attempt(ctx)
            except EyebotError as e:
                outcome.errors.append(f"{type(e).__name__}: {e}")
                logger.warning(
                    "Attempt %d failed while %s: %s",
                    ctx.attempt,
                    ctx.stage.value,
                    e,
                    exc_info=True,
                )
                if ctx.caption_text:
                    logger.info("Attempt %d caption was %r", ctx.attempt, ctx.caption_text)
                if outcome.attempts < max_attempts:
                    logger.info("Have tried %d times. Retrying!", outcome.attempts)
                continue

            outcome.succeeded = True
            outcome.result = result
            logger.info("Completed successfully after %d attempt(s).", outcome.attempts)
            return outcome

        logger.error("Giving up after %d attempts", outcome.attempts)
        return outcome

    async def run_attempt(self, ctx: AttemptContext) -> AttemptResult:
        """One pass: obtain, annotate, select, place, composite, publish."""
        loop = asyncio.get_running_loop()
        cfg = self.config

        with self._stage(ctx, Stage.OBTAINING):
            ctx.source_buffer = await self.source.fetch_random_image_buffer()

        with self._stage(ctx, Stage.ANNOTATING):
            ctx.annotations = await self.annotator.annotate(ctx.source_buffer)

        with self._stage(ctx, Stage.SELECTING):
            ctx.eligible = filter_eligible(
                ctx.annotations, cfg.avoid_labels, self.is_offensive, cfg.min_label_length
            )
            if not ctx.eligible:
                raise NoAnnotationsError("No valid names in localizedObjectAnnotations.")
            selection = select_regions(ctx.eligible, self.rng, cfg.use_all_probability)
            ctx.caption_text = selection.caption_text
            ctx.candidates = selection.candidates
            ctx.accepted = resolve(selection.candidates)
            logger.info(
                "Caption %r; %d candidate region(s), %d accepted",
                ctx.caption_text,
                len(ctx.candidates),
                len(ctx.accepted),
            )

        with self._stage(ctx, Stage.PLACING):
            base = await loop.run_in_executor(None, decode_image, ctx.source_buffer)
            ctx.image_size = base.size
            ctx.placements = compute_placements(ctx.accepted, base.size, self.pool, self.rng, cfg)

        with self._stage(ctx, Stage.COMPOSITING):
            ctx.output_buffer = await loop.run_in_executor(None, self._render, base, ctx.placements)

        result = AttemptResult(
            comment_text=cfg.comment_text,
            caption_text=ctx.caption_text,
            image_buffer=ctx.output_buffer,
        )

        with self._stage(ctx, Stage.PUBLISHING):
            where = await self.publisher.publish(result)
            logger.info("Published attempt %d: %s", ctx.attempt, where)

        return result

    def _render(self, base: Image.Image, placements: list[Placement]) -> bytes:
        return encode_jpeg(composite(base, placements, self.pool), self.config.jpeg_quality)

    @contextmanager
    def _stage(self, ctx: AttemptContext, stage: Stage) -> Iterator[None]:
        ctx.stage = stage
        t0 = time.perf_counter()
        yield
        elapsed = (time.perf_counter() - t0) * 1000
        ctx.timings[stage.value] = elapsed
        logger.debug("  %s completed in %.1fms", stage.value, elapsed)

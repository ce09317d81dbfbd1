"""Builds pipelines and shared handles from settings."""

from __future__ import annotations

import httpx
import numpy as np
from fastapi import Depends, HTTPException, Request

from eyebot.clients.publisher import DryRunPublisher, NoteTakerPublisher
from eyebot.clients.source import CommonsImageSource
from eyebot.clients.vision import VisionAnnotator
from eyebot.config import Settings, settings
from eyebot.engine.assets import OverlayPool, load_overlay_pool
from eyebot.engine.config import PipelineConfig
from eyebot.engine.pipeline import AttemptPipeline
from eyebot.engine.propriety import WordListCheck
from eyebot.errors import ConfigError


def get_settings() -> Settings:
    return settings


def build_http_client(cfg: Settings) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=cfg.http_timeout_s,
        headers={"User-Agent": cfg.user_agent},
    )


def build_config(cfg: Settings) -> PipelineConfig:
    if not cfg.label_tables_file:
        return PipelineConfig()
    try:
        return PipelineConfig.from_label_tables(cfg.label_tables_file)
    except (OSError, ValueError, TypeError, AttributeError) as e:
        raise ConfigError(f"Bad label tables file {cfg.label_tables_file}: {e}") from e


def build_offensiveness_check(cfg: Settings) -> WordListCheck:
    try:
        return WordListCheck.with_file(cfg.blocklist_file)
    except (OSError, ValueError) as e:
        raise ConfigError(f"Bad blocklist file {cfg.blocklist_file}: {e}") from e


def load_pool(cfg: Settings) -> OverlayPool:
    return load_overlay_pool(cfg.asset_paths)


def build_pipeline(
    cfg: Settings,
    client: httpx.AsyncClient,
    pool: OverlayPool,
    dry_run: bool,
    rng: np.random.Generator | None = None,
    config: PipelineConfig | None = None,
    is_offensive: WordListCheck | None = None,
) -> AttemptPipeline:
    """Wire a pipeline. Pass ``rng``, ``config`` and ``is_offensive`` to share them across runs."""
    if dry_run:
        publisher = DryRunPublisher(cfg.scratch_dir)
    else:
        publisher = NoteTakerPublisher(client, cfg.note_taker_targets, cfg.note_taker_token)
    return AttemptPipeline(
        source=CommonsImageSource(client, cfg.source_page_url),
        annotator=VisionAnnotator(client, cfg.vision_api_url, cfg.google_vision_api_key),
        publisher=publisher,
        pool=pool,
        rng=rng if rng is not None else np.random.default_rng(cfg.seed),
        config=config if config is not None else build_config(cfg),
        is_offensive=is_offensive if is_offensive is not None else build_offensiveness_check(cfg),
    )


def get_pipeline(
    request: Request,
    dry_run: bool = True,
    cfg: Settings = Depends(get_settings),
) -> AttemptPipeline:
    """FastAPI dependency: a pipeline over the app's shared pool, client and random source."""
    state = request.app.state
    pool = getattr(state, "pool", None)
    client = getattr(state, "http_client", None)
    if pool is None or client is None:
        raise HTTPException(status_code=503, detail="Overlay assets not loaded")
    return build_pipeline(
        cfg,
        client,
        pool,
        dry_run=dry_run,
        rng=getattr(state, "rng", None),
        config=getattr(state, "pipeline_config", None),
        is_offensive=getattr(state, "is_offensive", None),
    )

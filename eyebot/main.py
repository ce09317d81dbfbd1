"""FastAPI app factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import numpy as np
from dotenv import load_dotenv
from fastapi import FastAPI

from eyebot import __version__
from eyebot.config import LOG_FORMAT, settings
from eyebot.dependencies import build_config, build_http_client, build_offensiveness_check, load_pool

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.eyebot_log_level.upper(), logging.INFO),
    format=LOG_FORMAT,
)
logger = logging.getLogger("eyebot")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup failures propagate: the service does not start without overlays or tables.
    app.state.pipeline_config = build_config(settings)
    app.state.is_offensive = build_offensiveness_check(settings)
    app.state.rng = np.random.default_rng(settings.seed)
    app.state.pool = load_pool(settings)
    async with build_http_client(settings) as client:
        app.state.http_client = client
        logger.info("eyebot service ready (%d overlay(s))", len(app.state.pool))
        yield
    logger.info("eyebot service shutting down")


def create_app() -> FastAPI:
    app = FastAPI(
        title="eyebot",
        description="Puts eyes on objects detected in random Commons images",
        version=__version__,
        lifespan=lifespan,
    )

    from eyebot.api.router import api_router

    app.include_router(api_router)

    return app


app = create_app()

"""Command-line entry point: ``eyebot [--dry]``.

Exits 0 when a post went out, 1 when every attempt failed, 2 when the
overlay assets, label tables or blocklist could not be loaded.
"""

from __future__ import annotations

import argparse
import asyncio
import logging

from dotenv import load_dotenv

from eyebot.config import LOG_FORMAT, Settings
from eyebot.dependencies import (
    build_config,
    build_http_client,
    build_offensiveness_check,
    build_pipeline,
    load_pool,
)
from eyebot.engine.context import RunOutcome
from eyebot.errors import AssetLoadError, ConfigError

logger = logging.getLogger("eyebot")


async def run(cfg: Settings, dry_run: bool) -> RunOutcome:
    config = build_config(cfg)
    is_offensive = build_offensiveness_check(cfg)
    pool = load_pool(cfg)
    async with build_http_client(cfg) as client:
        pipeline = build_pipeline(cfg, client, pool, dry_run=dry_run, config=config, is_offensive=is_offensive)
        return await pipeline.run()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Put eyes on a random Commons image and post it")
    parser.add_argument("--dry", action="store_true", help="Write to the scratch dir instead of posting")
    args = parser.parse_args(argv)

    load_dotenv()
    cfg = Settings()
    logging.basicConfig(
        level=getattr(logging, cfg.eyebot_log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )

    try:
        outcome = asyncio.run(run(cfg, dry_run=args.dry))
    except (AssetLoadError, ConfigError) as e:
        logger.error("Startup failed: %s", e)
        return 2

    if not outcome.succeeded:
        logger.error("No post after %d attempts: %s", outcome.attempts, "; ".join(outcome.errors))
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

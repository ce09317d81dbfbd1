"""Application configuration from environment variables."""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


class Settings(BaseSettings):
    google_vision_api_key: str = ""
    eyebot_env: str = "development"
    eyebot_log_level: str = "info"

    # Source + annotation endpoints
    source_page_url: str = "https://commons.wikimedia.org/wiki/Special:Random/File"
    vision_api_url: str = "https://vision.googleapis.com/v1/images:annotate"
    http_timeout_s: float = 30.0
    user_agent: str = "eyebot/0.1 (+https://commons.wikimedia.org)"

    # Overlay assets, loaded once at startup. Relative paths resolve against the working directory.
    asset_dir: Path = Path("eyes")
    asset_files: list[str] = ["eyes-293957_640.png"]

    # Dry-run output
    scratch_dir: Path = Path("scratch")

    # Publish targets (note-taker endpoints)
    note_taker_targets: list[str] = []
    note_taker_token: str = ""

    # Optional data overrides
    blocklist_file: Path | None = None
    label_tables_file: Path | None = None

    # Seed for the random source; unset = fresh entropy each run
    seed: int | None = None

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def asset_paths(self) -> list[Path]:
        return [self.asset_dir / name for name in self.asset_files]


settings = Settings()

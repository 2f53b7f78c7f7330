"""Runtime configuration.

Values come from ``JOB_BROWSER_*`` environment variables or a local ``.env``
file; the command line script overrides them per run.
"""

from __future__ import annotations

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="JOB_BROWSER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_base: str = "https://www.arbeitnow.com/api/job-board-api"
    cache_namespace: str = "arbeitnow"
    cache_file: Optional[str] = None

    request_timeout_s: float = 10.0
    max_retries: int = 0
    backoff_s: float = 2.0

    log_level: str = "INFO"


settings = Settings()

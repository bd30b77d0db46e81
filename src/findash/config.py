"""Application settings, loaded from ``FINDASH_*`` environment variables or ``.env``."""
from __future__ import annotations
from typing import Literal
from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="FINDASH_", env_file=".env", extra="ignore")

    # Dataset generator
    MAX_ROWS: int = 500
    DEFAULT_ROWS: int = 100
    METRIC_WORK_UNITS: int = 20_000_000
    METRIC_EXECUTOR: Literal["process", "thread"] = "process"
    METRIC_WORKERS: int = 4
    METRIC_CACHE_TTL: float = 0.0
    DATA_SEED: int = 7

    # Transport
    CACHE_CONTROL: str = "no-store"
    GZIP_MIN_SIZE: int = 1000

    # Dashboard client
    API_URL: str = "http://127.0.0.1:8000"
    PAGE_SIZE: int = 100
    REQUEST_TIMEOUT: float = 30.0

    LOG_LEVEL: str = "INFO"

    @model_validator(mode="after")
    def check_bounds(self) -> "Settings":
        if self.MAX_ROWS < 0:
            raise ValueError("MAX_ROWS must be >= 0")
        if self.PAGE_SIZE < 1:
            raise ValueError("PAGE_SIZE must be >= 1")
        if not 0 <= self.DEFAULT_ROWS <= self.PAGE_SIZE:
            raise ValueError("DEFAULT_ROWS must be between 0 and PAGE_SIZE")
        if self.METRIC_WORKERS < 1:
            raise ValueError("METRIC_WORKERS must be >= 1")
        return self


settings = Settings()

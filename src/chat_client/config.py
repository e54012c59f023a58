from __future__ import annotations

from typing import Literal

from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    API_BASE_URL: str = "http://127.0.0.1:8000/api"
    API_TOKEN: str = ""
    REQUEST_TIMEOUT: float = 30.0

    PAGE_SIZE: int = 10
    SCROLL_TRIGGER_THRESHOLD: float = 50.0
    BACKFILL_DEBOUNCE_MS: int = 2000
    INITIAL_SCROLL_DELAY_MS: int = 200
    # Server does not always report last_page; assume more pages after a full one.
    HAS_MORE_FALLBACK: bool = True

    REPLY_PREVIEW_CHARS: int = 100

    MAX_FILE_SIZE: int = 10 * 1024 * 1024
    MAX_IMAGE_SIZE: int = 5 * 1024 * 1024

    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    @property
    def api_root(self) -> str:
        """Base URL without the ``/api`` suffix, used for media paths."""
        base = self.API_BASE_URL.rstrip("/")
        return base[: -len("/api")] if base.endswith("/api") else base

    model_config = ConfigDict(
        env_file=".env",
        extra="ignore",
    )


settings = Settings()

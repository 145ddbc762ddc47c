from __future__ import annotations

import os
from functools import lru_cache
from typing import Literal, Optional

from pydantic import BaseModel, Field


DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"
DEFAULT_GEMINI_TIMEOUT_SECONDS = 30.0


class Settings(BaseModel):
    """Runtime configuration resolved from environment variables."""

    gemini_api_key: Optional[str] = Field(
        default=None, alias="GEMINI_API_KEY", description="Google Gemini API key"
    )
    gemini_model: str = Field(
        default=DEFAULT_GEMINI_MODEL,
        alias="GEMINI_MODEL",
        description="Generative model used to answer chat messages.",
    )
    gemini_timeout_seconds: float = Field(
        default=DEFAULT_GEMINI_TIMEOUT_SECONDS,
        gt=0,
        alias="GEMINI_TIMEOUT_SECONDS",
        description="Upper bound on a single Gemini call before it counts as failed.",
    )
    chat_mode: Literal["gemini", "echo"] = Field(
        default="gemini",
        alias="CHAT_MODE",
        description="'gemini' relays to the provider, 'echo' answers locally.",
    )
    port: int = Field(default=3001, alias="PORT", description="HTTP port for app_main.")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_env(cls) -> "Settings":
        return cls.model_validate(os.environ)

    @property
    def api_key(self) -> Optional[str]:
        key = (self.gemini_api_key or "").strip()
        return key or None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance built from environment variables."""
    return Settings.from_env()

"""
Central runtime configuration, read from environment variables.
"""
from __future__ import annotations

import os
from typing import List

from pydantic import BaseModel


DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_MODEL = "gpt-4"


class LlmSettings(BaseModel):
    api_key: str = ""
    base_url: str = DEFAULT_BASE_URL
    model: str = DEFAULT_MODEL

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key.strip())


def get_llm_settings() -> LlmSettings:
    return LlmSettings(
        api_key=os.getenv("OPENAI_API_KEY", ""),
        base_url=os.getenv("OPENAI_BASE_URL", DEFAULT_BASE_URL),
        model=os.getenv("LLM_MODEL", DEFAULT_MODEL),
    )


def get_feedback_concurrency() -> int:
    try:
        value = int(os.getenv("FEEDBACK_CONCURRENCY", "3"))
    except ValueError:
        value = 3
    return max(1, value)


def get_log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()


def get_allowed_origins() -> List[str]:
    default_origins = ["http://localhost:3000"]
    configured_origins = os.getenv("CORS_ORIGINS", "")
    origins = [
        origin.strip()
        for origin in configured_origins.split(",")
        if origin.strip()
    ]
    for origin in default_origins:
        if origin not in origins:
            origins.append(origin)
    return origins

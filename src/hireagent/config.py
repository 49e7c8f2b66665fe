from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"


def repo_root() -> Path:
    """
    Description: Resolve repository root from within src/ package.
    Input: None
    Output: Absolute Path to repo root
    """
    # src/hireagent/config.py -> src/hireagent -> src -> repo root
    return Path(__file__).resolve().parents[2]


class Settings(BaseSettings):
    """
    Description: Central configuration for the candidate scoring pipeline.
    Input: .env in repo root + environment variables
    Output: Strongly typed settings object
    """

    model_config = SettingsConfigDict(
        env_file=str(repo_root() / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Scoring provider
    SCORING_PROVIDER: Literal["openai", "gemini"] = "openai"
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_BASE_URL: str = "https://api.openai.com/v1"
    OPENAI_MODEL: str = "gpt-4o-mini"
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-1.5-flash"

    # Panel behaviour
    AI_SCORING_ENABLED: bool = True
    AGENT_TIMEOUT_SECONDS: float = 30.0
    PIPELINE_TIMEOUT_SECONDS: float = 120.0
    AGENT_TEMPERATURE: float = 0.2
    AGENT_MAX_TOKENS: int = 800
    SUMMARY_TEMPERATURE: float = 0.3
    SUMMARY_MAX_TOKENS: int = 200

    # Reviewer notification
    COMPANY_NAME: str = "Alliance Chemical"
    POSITION_TITLE: str = "Customer Service Specialist"
    REVIEWER_EMAIL: str = "hiring@example.com"
    REVIEWER_CC_EMAIL: Optional[str] = None

    # LangSmith
    LANGSMITH_API_KEY: Optional[str] = None
    LANGSMITH_PROJECT: str = "hireagent-scoring"

    # Runtime
    LOG_LEVEL: str = "INFO"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Description: Cached settings accessor.
    Input: None
    Output: Settings
    """
    return Settings()


def configure_logging(level: Optional[str] = None) -> None:
    """Install the root handler once; repeated calls only adjust the level."""
    lvl = (level or get_settings().LOG_LEVEL or "INFO").upper()
    logging.basicConfig(level=lvl, format=LOG_FORMAT)
    logging.getLogger().setLevel(lvl)
    # httpx logs every request line at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def bootstrap_langsmith(s: Settings) -> None:
    """Description: Enable LangSmith tracing via env.
    Input: Settings
    Output: environment flags
    """
    if s.LANGSMITH_API_KEY:
        os.environ.setdefault("LANGSMITH_API_KEY", s.LANGSMITH_API_KEY)
        os.environ.setdefault("LANGSMITH_TRACING", "true")
        os.environ.setdefault("LANGSMITH_PROJECT", s.LANGSMITH_PROJECT)

# Copyright (c) 2026 Heureum AI. All rights reserved.

"""
Application configuration using pydantic-settings.
"""

import logging
from typing import Any, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings.

    Attributes:
        APP_NAME (str): Display name of the application.
        OPENAI_API_KEY (str): OpenAI API key for summarization calls.
        GOOGLE_API_KEY (str): Google AI Studio key (Gemini models).
        SUMMARY_MODEL (str): Model identifier for the summarization LLM.
        SUMMARY_TEMPERATURE (float): Sampling temperature for summaries.
        SUMMARY_MAX_TOKENS (int): Output-token cap for a single summary.
        SUMMARY_TIMEOUT_SECONDS (float): Upper bound on one summarizer call.
        CONTEXT_MAX_TOKENS (int): Default context window size in tokens.
        CONTEXT_PRESERVE_RECENT_MESSAGES (int): Recent messages never
            summarized.
        CONTEXT_AUTO_COMPACT_THRESHOLD (Optional[float]): Override for the
            auto-compact threshold. ``None`` means no override.
        PROJECT_INSTRUCTIONS_MARKER (str): Heading that starts the project
            instructions section of the system prompt.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )

    APP_NAME: str = "Context Governor"
    OPENAI_API_KEY: str = ""

    # Google Gemini
    GOOGLE_API_KEY: str = ""  # Google AI Studio (simple)

    # Google Cloud / Vertex AI (alternative to GOOGLE_API_KEY)
    GOOGLE_CLOUD_PROJECT: str = ""
    GOOGLE_CLOUD_LOCATION: str = ""
    GOOGLE_APPLICATION_CREDENTIALS: str = ""

    # Summarizer
    SUMMARY_MODEL: str = "gpt-4o-mini"
    SUMMARY_TEMPERATURE: float = 0.2
    SUMMARY_MAX_TOKENS: int = 2048
    SUMMARY_TIMEOUT_SECONDS: float = 60.0

    # Context budget
    CONTEXT_MAX_TOKENS: int = 200_000
    CONTEXT_PRESERVE_RECENT_MESSAGES: int = 5
    CONTEXT_AUTO_COMPACT_THRESHOLD: Optional[float] = None
    PROJECT_INSTRUCTIONS_MARKER: str = "# PROJECT.md"

    @field_validator("CONTEXT_AUTO_COMPACT_THRESHOLD", mode="before")
    @classmethod
    def _lenient_threshold(cls, value: Any) -> Optional[float]:
        """Treat an unparseable threshold override as unset.

        Range checks happen in the budget tracker, which falls back to the
        default threshold for anything outside (0, 1].
        """
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        try:
            return float(value)
        except (TypeError, ValueError):
            logger.warning("Ignoring unparseable CONTEXT_AUTO_COMPACT_THRESHOLD: %r", value)
            return None


settings = Settings()

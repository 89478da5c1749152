# Copyright (c) 2026 Heureum AI. All rights reserved.

"""Summarization LLM factory."""

import os
from typing import Optional

from context_governor.config import settings
from langchain_core.language_models import BaseChatModel
from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_openai import ChatOpenAI
from pydantic import SecretStr


def create_summary_llm(
    model: Optional[str] = None,
    max_tokens: Optional[int] = None,
) -> BaseChatModel:
    """Create the LLM used for compaction summaries.

    The model identifier and output-token cap are fixed at construction.

    Gemini routing:
      - GOOGLE_API_KEY set → Google AI Studio (simple API key auth)
      - Otherwise → Vertex AI (GCP service account / ADC)

    Args:
        model (Optional[str]): Model identifier. Defaults to
            ``settings.SUMMARY_MODEL``.
        max_tokens (Optional[int]): Output-token cap. Defaults to
            ``settings.SUMMARY_MAX_TOKENS``.

    Returns:
        BaseChatModel: A LangChain chat model.
    """
    model = model or settings.SUMMARY_MODEL
    max_tokens = max_tokens or settings.SUMMARY_MAX_TOKENS

    if model.startswith("gemini"):
        if settings.GOOGLE_API_KEY:
            return ChatGoogleGenerativeAI(
                model=model,
                google_api_key=settings.GOOGLE_API_KEY,
                temperature=settings.SUMMARY_TEMPERATURE,
                max_output_tokens=max_tokens,
            )
        # pydantic-settings reads .env into its own fields but does not
        # export them to os.environ, where google.auth.default() looks.
        if settings.GOOGLE_APPLICATION_CREDENTIALS:
            os.environ.setdefault(
                "GOOGLE_APPLICATION_CREDENTIALS",
                settings.GOOGLE_APPLICATION_CREDENTIALS,
            )
        return ChatGoogleGenerativeAI(
            model=model,
            vertexai=True,
            project=settings.GOOGLE_CLOUD_PROJECT,
            location=settings.GOOGLE_CLOUD_LOCATION,
            temperature=settings.SUMMARY_TEMPERATURE,
            max_output_tokens=max_tokens,
        )

    return ChatOpenAI(
        api_key=SecretStr(settings.OPENAI_API_KEY),
        model=model,
        temperature=settings.SUMMARY_TEMPERATURE,
        max_completion_tokens=max_tokens,
    )

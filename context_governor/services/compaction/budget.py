# Copyright (c) 2026 Heureum AI. All rights reserved.

"""
Context budget tracking.

Estimates how much of the model's context window the system prompt,
conversation and tool schemas consume, and decides when compaction should
run. One tracker per agent session; it holds configuration only, never
conversation state.

Configuration precedence (per field):
  1. explicit constructor argument
  2. config store override (``context.auto_compact_threshold`` only)
  3. built-in default
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import Any, List, Optional, Tuple

from context_governor.config import Settings
from context_governor.config import settings as app_settings
from context_governor.models import Message
from context_governor.services.compaction.selection import select_preserved_messages
from context_governor.services.compaction.settings import (
    AUTO_COMPACT_THRESHOLD_KEY,
    DEFAULT_AUTO_COMPACT_THRESHOLD,
    DEFAULT_MAX_CONTEXT_TOKENS,
    DEFAULT_PRESERVE_RECENT_MESSAGES,
    BudgetConfig,
    ConfigStore,
    SettingsConfigStore,
    is_valid_threshold,
    read_config_safe,
)
from context_governor.services.compaction.tokens import estimate_messages_tokens, estimate_tokens
from context_governor.services.prompts.base import DEFAULT_INSTRUCTIONS_MARKER

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContextBreakdown:
    """How the context budget is being consumed.

    ``system_prompt_tokens`` is the base prompt only; the project
    instructions slice is reported separately, so the four categories add
    up to ``total``.

    Attributes:
        system_prompt_tokens (int): Base system prompt tokens.
        custom_instruction_tokens (int): Project instructions tokens.
        message_tokens (int): Conversation message tokens.
        tool_definition_tokens (int): Tool schema tokens.
        total (int): Sum of all categories.
        budget (int): Context window size.
        usage_percent (int): ``total / budget`` as a rounded percentage,
            0 when the budget is not positive.
    """

    system_prompt_tokens: int
    custom_instruction_tokens: int
    message_tokens: int
    tool_definition_tokens: int
    total: int
    budget: int
    usage_percent: int


def usage_percent(total: int, budget: int) -> int:
    """Percentage of *budget* used by *total*, rounded half-up.

    Args:
        total (int): Tokens in use.
        budget (int): Available tokens.

    Returns:
        int: Rounded percentage, or 0 when *budget* <= 0.
    """
    if budget <= 0:
        return 0
    return math.floor(total * 100 / budget + 0.5)


class ContextBudgetTracker:
    """Tracks context usage against a model's window for one session."""

    def __init__(
        self,
        max_context_tokens: Optional[int] = None,
        auto_compact_threshold: Optional[float] = None,
        preserve_recent_messages: Optional[int] = None,
        config_store: Optional[ConfigStore] = None,
        instructions_marker: str = DEFAULT_INSTRUCTIONS_MARKER,
    ) -> None:
        """Initialize the tracker.

        Args:
            max_context_tokens (Optional[int]): Context window size.
                Defaults to 200 000.
            auto_compact_threshold (Optional[float]): Usage ratio in (0, 1]
                that triggers compaction. Falls back to the config store,
                then to 0.85.
            preserve_recent_messages (Optional[int]): Trailing messages that
                are never summarized. Defaults to 5.
            config_store (Optional[ConfigStore]): Optional read-only store
                consulted for the threshold. Failures are ignored.
            instructions_marker (str): Substring that starts the project
                instructions section of the system prompt.

        Raises:
            ValueError: If an explicit argument is out of range.
        """
        if auto_compact_threshold is None:
            auto_compact_threshold = self._threshold_from_store(config_store)

        self._config = BudgetConfig(
            max_context_tokens=(
                DEFAULT_MAX_CONTEXT_TOKENS if max_context_tokens is None else max_context_tokens
            ),
            auto_compact_threshold=auto_compact_threshold,
            preserve_recent_messages=(
                DEFAULT_PRESERVE_RECENT_MESSAGES
                if preserve_recent_messages is None
                else preserve_recent_messages
            ),
        )
        self.instructions_marker = instructions_marker

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, **overrides: Any) -> "ContextBudgetTracker":
        """Build a tracker whose defaults come from application settings.

        Args:
            settings (Optional[Settings]): Settings to read. Defaults to the
                module-level singleton.
            **overrides: Explicit constructor arguments; these win over
                settings.

        Returns:
            ContextBudgetTracker: The configured tracker.
        """
        if settings is None:
            settings = app_settings

        kwargs: dict[str, Any] = {
            "max_context_tokens": settings.CONTEXT_MAX_TOKENS,
            "preserve_recent_messages": settings.CONTEXT_PRESERVE_RECENT_MESSAGES,
            "config_store": SettingsConfigStore(settings),
            "instructions_marker": settings.PROJECT_INSTRUCTIONS_MARKER,
        }
        kwargs.update(overrides)
        return cls(**kwargs)

    @staticmethod
    def _threshold_from_store(config_store: Optional[ConfigStore]) -> float:
        value = read_config_safe(config_store, AUTO_COMPACT_THRESHOLD_KEY)
        if value is None:
            return DEFAULT_AUTO_COMPACT_THRESHOLD
        if isinstance(value, str):
            try:
                value = float(value)
            except ValueError:
                pass
        if not is_valid_threshold(value):
            logger.warning(
                "Ignoring invalid %s override: %r", AUTO_COMPACT_THRESHOLD_KEY, value
            )
            return DEFAULT_AUTO_COMPACT_THRESHOLD
        return float(value)

    @property
    def max_context_tokens(self) -> int:
        return self._config.max_context_tokens

    @property
    def auto_compact_threshold(self) -> float:
        return self._config.auto_compact_threshold

    @property
    def preserve_recent_messages(self) -> int:
        return self._config.preserve_recent_messages

    def get_config(self) -> BudgetConfig:
        """Snapshot of the current configuration.

        Returns:
            BudgetConfig: A copy; mutating it does not affect the tracker.
        """
        return replace(self._config)

    def set_max_context_tokens(self, tokens: int) -> None:
        """Update the context window size, e.g. after a model switch.

        Callers must recompute usage afterwards.

        Args:
            tokens (int): The new context window size.
        """
        self._config.max_context_tokens = tokens

    def calculate_usage(
        self,
        system_prompt: str,
        messages: List[Message],
        tool_definition_tokens: int,
    ) -> ContextBreakdown:
        """Calculate a detailed context usage breakdown.

        Args:
            system_prompt (str): The full system prompt.
            messages (List[Message]): Current conversation messages.
            tool_definition_tokens (int): Pre-computed tool schema tokens.

        Returns:
            ContextBreakdown: Per-category token counts and usage.
        """
        system_tokens = estimate_tokens(system_prompt)

        custom_tokens = 0
        base_tokens = system_tokens
        marker_idx = system_prompt.find(self.instructions_marker) if self.instructions_marker else -1
        if marker_idx >= 0:
            custom_tokens = estimate_tokens(system_prompt[marker_idx:])
            base_tokens = system_tokens - custom_tokens

        message_tokens = estimate_messages_tokens(messages)
        total = system_tokens + message_tokens + tool_definition_tokens
        budget = self._config.max_context_tokens

        return ContextBreakdown(
            system_prompt_tokens=base_tokens,
            custom_instruction_tokens=custom_tokens,
            message_tokens=message_tokens,
            tool_definition_tokens=tool_definition_tokens,
            total=total,
            budget=budget,
            usage_percent=usage_percent(total, budget),
        )

    def should_compact(
        self,
        system_prompt: str,
        messages: List[Message],
        tool_definition_tokens: int,
    ) -> bool:
        """Whether usage is at or above the auto-compact threshold.

        Args:
            system_prompt (str): The full system prompt.
            messages (List[Message]): Current conversation messages.
            tool_definition_tokens (int): Pre-computed tool schema tokens.

        Returns:
            bool: ``True`` if compaction should run before the next call.
        """
        return self.exceeds_threshold(
            self.calculate_usage(system_prompt, messages, tool_definition_tokens)
        )

    def exceeds_threshold(self, breakdown: ContextBreakdown) -> bool:
        """Whether an already computed *breakdown* is at or above the threshold."""
        # Compare as ratios: 0.85 * 100 is not guaranteed to equal 85.0.
        return breakdown.usage_percent / 100 >= self._config.auto_compact_threshold

    def select_preserved_messages(
        self, messages: List[Message]
    ) -> Tuple[List[Message], List[Message]]:
        """Partition *messages* using this tracker's preservation window."""
        return select_preserved_messages(messages, self._config.preserve_recent_messages)

# Copyright (c) 2026 Heureum AI. All rights reserved.

"""
Context compaction module.

Keeps a conversation inside the model's context window:

  Token estimation  (tokens.py)
      ~4 chars/token heuristic plus fixed per-message and per-tool-call
      overheads.

  Budget tracking  (budget.py, settings.py)
      Usage breakdown against the context window and the auto-compact
      trigger.

  Preservation selection  (selection.py)
      Stable partition into messages kept verbatim and messages to
      summarize.

  LLM compaction  (summarizer.py, reassembly.py)
      Summarize the older span, falling back to an extractive summary, and
      splice a ``[Context Summary]`` message into the kept messages.

Usage (inside the agent loop):

    tracker = ContextBudgetTracker.from_settings()

    if tracker.should_compact(system_prompt, messages, tool_tokens):
        messages, result = await run_compaction(messages, tracker, llm)
"""

from context_governor.services.compaction.budget import ContextBreakdown, ContextBudgetTracker
from context_governor.services.compaction.display import (
    format_compaction_notice,
    format_context_breakdown,
)
from context_governor.services.compaction.reassembly import build_compacted_messages
from context_governor.services.compaction.selection import (
    is_summary_message,
    select_preserved_messages,
)
from context_governor.services.compaction.settings import (
    BudgetConfig,
    ConfigStore,
    SettingsConfigStore,
)
from context_governor.services.compaction.summarizer import (
    CompactionResult,
    auto_compact,
    run_compaction,
    run_manual_compaction,
    summarize_with_fallback,
)
from context_governor.services.compaction.tokens import (
    estimate_message_tokens,
    estimate_messages_tokens,
    estimate_tokens,
    estimate_tool_definitions_tokens,
)

__all__ = [
    "BudgetConfig",
    "ConfigStore",
    "SettingsConfigStore",
    "ContextBreakdown",
    "ContextBudgetTracker",
    "CompactionResult",
    "estimate_tokens",
    "estimate_message_tokens",
    "estimate_messages_tokens",
    "estimate_tool_definitions_tokens",
    "select_preserved_messages",
    "is_summary_message",
    "build_compacted_messages",
    "run_compaction",
    "run_manual_compaction",
    "auto_compact",
    "summarize_with_fallback",
    "format_context_breakdown",
    "format_compaction_notice",
]

# Copyright (c) 2026 Heureum AI. All rights reserved.

"""Human-readable rendering of budget and compaction results."""

from __future__ import annotations

from context_governor.services.compaction.budget import ContextBreakdown
from context_governor.services.compaction.summarizer import CompactionResult

_RULE = "─" * 29


def format_context_breakdown(breakdown: ContextBreakdown) -> str:
    """Render the ``/context`` usage block.

    Args:
        breakdown (ContextBreakdown): Usage to render.

    Returns:
        str: Multi-line text with one line per category and a total line.
    """
    lines = [
        "Context Usage Breakdown:",
        f"  System prompt:        {breakdown.system_prompt_tokens:,} tokens",
        f"  Project instructions: {breakdown.custom_instruction_tokens:,} tokens",
        f"  Messages:             {breakdown.message_tokens:,} tokens",
        f"  Tool definitions:     {breakdown.tool_definition_tokens:,} tokens",
        f"  {_RULE}",
        f"  Total:                {breakdown.total:,} / {breakdown.budget:,} tokens "
        f"({breakdown.usage_percent}%)",
    ]
    return "\n".join(lines)


def format_compaction_notice(result: CompactionResult) -> str:
    """One-line notice shown after compaction ran.

    Args:
        result (CompactionResult): Outcome of the compaction.

    Returns:
        str: The notice text.
    """
    notice = f"Context auto-compacted: saved {result.saved_tokens:,} tokens."
    if not result.summary_generated:
        notice += " (Summarizer unavailable; a basic fallback summary was used.)"
    return notice

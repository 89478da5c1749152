# Copyright (c) 2026 Heureum AI. All rights reserved.

"""Rebuild a conversation from preserved messages and a summary."""

from __future__ import annotations

from typing import List

from context_governor.models import Message, MessageRole
from context_governor.services.prompts.base import CONTEXT_SUMMARY_TEMPLATE


def wrap_summary(summary_text: str) -> Message:
    """Wrap *summary_text* in the marked user message.

    Args:
        summary_text (str): LLM-generated or fallback summary.

    Returns:
        Message: A user message whose content starts with the summary prefix.
    """
    return Message(
        role=MessageRole.USER,
        content=CONTEXT_SUMMARY_TEMPLATE.format(summary=summary_text),
    )


def build_compacted_messages(preserved: List[Message], summary_text: str) -> List[Message]:
    """Insert the summary right after the first preserved message.

    Preserved messages are passed through as-is; only the summarized span
    is replaced by the single summary message.

    Args:
        preserved (List[Message]): Messages kept verbatim, in order.
        summary_text (str): Summary of the removed messages.

    Returns:
        List[Message]: ``[preserved[0], summary, *preserved[1:]]``, or just
            ``[summary]`` when nothing was preserved.
    """
    summary_msg = wrap_summary(summary_text)
    if not preserved:
        return [summary_msg]
    return [preserved[0], summary_msg, *preserved[1:]]

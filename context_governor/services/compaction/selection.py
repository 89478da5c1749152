# Copyright (c) 2026 Heureum AI. All rights reserved.

"""
Preservation selection.

Splits a conversation into messages kept verbatim and messages handed to
the summarizer. The split is a stable partition: every input message lands
in exactly one of the two lists, and relative order is kept in both.

Kept verbatim:
  - the first message (the user's original goal)
  - the last N messages
  - tool results within two messages before the recent window, so a kept
    assistant turn never points at a summarized-away tool result
  - earlier compaction summaries (``[Context Summary]`` prefix)
"""

from __future__ import annotations

from typing import List, Tuple

from context_governor.models import Message, MessageRole
from context_governor.services.prompts.base import CONTEXT_SUMMARY_PREFIX

TOOL_LOOKBACK_MESSAGES = 2


def is_summary_message(msg: Message) -> bool:
    """Whether *msg* is a summary inserted by an earlier compaction.

    Args:
        msg (Message): Message to check.

    Returns:
        bool: ``True`` if the text content starts with the summary prefix.
    """
    return isinstance(msg.content, str) and msg.content.startswith(CONTEXT_SUMMARY_PREFIX)


def select_preserved_messages(
    messages: List[Message],
    preserve_recent_messages: int,
) -> Tuple[List[Message], List[Message]]:
    """Partition *messages* into ``(preserved, to_summarize)``.

    Args:
        messages (List[Message]): Full conversation message list.
        preserve_recent_messages (int): Number of trailing messages that are
            always kept.

    Returns:
        Tuple[List[Message], List[Message]]: Preserved messages and messages
            to summarize, each in original order.
    """
    n = len(messages)
    if n <= preserve_recent_messages + 1:
        return list(messages), []

    recent_start = n - preserve_recent_messages
    tool_start = recent_start - TOOL_LOOKBACK_MESSAGES

    preserved: List[Message] = []
    to_summarize: List[Message] = []

    for i, msg in enumerate(messages):
        if (
            i == 0
            or i >= recent_start
            or (msg.role == MessageRole.TOOL and i >= tool_start)
            or is_summary_message(msg)
        ):
            preserved.append(msg)
        else:
            to_summarize.append(msg)

    return preserved, to_summarize

# Copyright (c) 2026 Heureum AI. All rights reserved.

"""
Token estimation utilities.

Uses a deliberately crude ~4 chars/token heuristic. Callers rely on the
estimate being deterministic and monotone (more text or more tool calls
never lowers it), not on matching any vendor tokenizer.
"""

from __future__ import annotations

import json
import logging
import math
from typing import Any, Dict, List

from context_governor.models import Message

CHARS_PER_TOKEN = 4
MESSAGE_OVERHEAD_TOKENS = 4
TOOL_CALL_OVERHEAD_TOKENS = 10

logger = logging.getLogger(__name__)


def estimate_tokens(text: str) -> int:
    """Estimate token count using the character heuristic.

    Args:
        text (str): Text to estimate tokens for.

    Returns:
        int: ``ceil(len(text) / 4)``; 0 for an empty string.
    """
    return math.ceil(len(text) / CHARS_PER_TOKEN)


def estimate_message_tokens(msg: Message) -> int:
    """Estimate token count for a single message.

    Content (text only), a fixed role/framing overhead, and for every tool
    call its name, its serialized arguments and a fixed structural overhead.

    Args:
        msg (Message): Message to estimate tokens for.

    Returns:
        int: Estimated token count.
    """
    tokens = estimate_tokens(msg.content) if isinstance(msg.content, str) else 0
    tokens += MESSAGE_OVERHEAD_TOKENS

    for tc in msg.tool_calls or []:
        tokens += estimate_tokens(tc.function_name)
        tokens += estimate_tokens(tc.function_arguments)
        tokens += TOOL_CALL_OVERHEAD_TOKENS

    return tokens


def estimate_messages_tokens(messages: List[Message]) -> int:
    """Estimate total token count for a list of messages.

    Args:
        messages (List[Message]): Messages to estimate tokens for.

    Returns:
        int: Sum of estimated token counts across all messages.
    """
    return sum(estimate_message_tokens(m) for m in messages)


def estimate_tool_definitions_tokens(tools: List[Dict[str, Any]]) -> int:
    """Estimate the tokens consumed by tool definition schemas.

    Each schema is serialised as compact JSON and estimated separately.

    Args:
        tools (List[Dict[str, Any]]): Tool schemas as sent to the model.

    Returns:
        int: Sum of estimated token counts across all schemas. Schemas that
            cannot be serialised contribute 0.
    """
    total = 0
    for tool in tools:
        try:
            total += estimate_tokens(json.dumps(tool, ensure_ascii=False, separators=(",", ":")))
        except (TypeError, ValueError):
            logger.debug("Skipping non-serialisable tool schema in estimate")
    return total

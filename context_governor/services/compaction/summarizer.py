# Copyright (c) 2026 Heureum AI. All rights reserved.

"""
LLM-based compaction.

Replaces older conversation turns with one summary message:

  1. Partition via the preservation selector.
  2. Format the messages to summarize into a bounded, lossy transcript.
  3. Ask the summarization LLM for a structured summary.
  4. On any failure, fall back to a deterministic extractive summary.
  5. Reassemble: first message, summary, remaining preserved messages.

The new message list is only built at the very end, so cancelling the
coroutine while the LLM call is in flight leaves the caller's list
untouched. Compaction is not locked per session; the agent loop must not
run two compactions over the same conversation at once.
"""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from context_governor.config import settings
from context_governor.models import Message, MessageRole
from context_governor.services.compaction.budget import ContextBudgetTracker
from context_governor.services.compaction.reassembly import build_compacted_messages
from context_governor.services.compaction.tokens import estimate_messages_tokens, estimate_tokens
from context_governor.services.prompts.base import (
    COMPACTION_SYSTEM_PROMPT,
    FALLBACK_SUMMARY_HEADER,
    TRUNCATION_MARKER,
    build_compaction_prompt,
)
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage

logger = logging.getLogger(__name__)

MAX_CHARS_PER_MESSAGE = 2_000
MAX_TOOL_ARGUMENT_CHARS = 200
FALLBACK_MAX_USER_MESSAGES = 5
FALLBACK_MAX_EXCERPT_CHARS = 150
MANUAL_PRESERVE_RECENT_MESSAGES = 5

_ROLE_LABELS = {
    MessageRole.USER: "User",
    MessageRole.ASSISTANT: "Assistant",
    MessageRole.SYSTEM: "System",
    MessageRole.TOOL: "Tool",
}


class SummaryUnavailableError(Exception):
    """The summarizer returned no usable text."""


@dataclass(frozen=True)
class CompactionResult:
    """Outcome of one compaction run.

    Attributes:
        original_tokens (int): Estimated tokens of the messages that were
            summarized.
        compacted_tokens (int): Estimated tokens of the new message list.
        saved_tokens (int): ``original_tokens`` minus the summary's tokens.
        summary_generated (bool): ``True`` when the LLM produced the summary,
            ``False`` for the fallback summary or a no-op.
    """

    original_tokens: int
    compacted_tokens: int
    saved_tokens: int
    summary_generated: bool


def _content_to_text(content: Any) -> str:
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    try:
        return json.dumps(content, ensure_ascii=False)
    except (TypeError, ValueError):
        return str(content)


def _messages_to_text(
    messages: List[Message],
    max_chars_per_message: int = MAX_CHARS_PER_MESSAGE,
    max_argument_chars: int = MAX_TOOL_ARGUMENT_CHARS,
) -> str:
    """Serialize messages to a transcript for summarization.

    Format:
        [User]: ...
        [Assistant]: ...
          [Tool Call: name(arguments)]
        [Tool]: ...

    Entries are separated by double newlines. The output is lossy and only
    ever sent to the summarizer.

    Args:
        messages (List[Message]): Messages to convert.
        max_chars_per_message (int): Content longer than this is cut and
            marked as truncated. Defaults to 2000.
        max_argument_chars (int): Maximum characters of tool call
            arguments to show. Defaults to 200.

    Returns:
        str: Double-newline-joined string of role-prefixed entries.
    """
    parts: List[str] = []
    for msg in messages:
        content = _content_to_text(msg.content)
        if len(content) > max_chars_per_message:
            content = content[:max_chars_per_message] + TRUNCATION_MARKER

        parts.append(f"[{_ROLE_LABELS.get(msg.role, 'Tool')}]: {content}")

        for tc in msg.tool_calls or []:
            args = tc.function_arguments[:max_argument_chars]
            parts.append(f"  [Tool Call: {tc.function_name}({args})]")

    return "\n\n".join(parts)


def _fallback_summary(messages: List[Message]) -> str:
    """Extractive summary used when the LLM is unavailable.

    Args:
        messages (List[Message]): Messages that were meant to be summarized.

    Returns:
        str: Message counts plus excerpts of the first few user messages.
    """
    user_messages = [m for m in messages if m.role == MessageRole.USER]
    assistant_count = sum(1 for m in messages if m.role == MessageRole.ASSISTANT)

    parts: List[str] = [FALLBACK_SUMMARY_HEADER]
    parts.append(
        f"- {len(user_messages)} user messages and {assistant_count} assistant responses"
    )

    for msg in user_messages[:FALLBACK_MAX_USER_MESSAGES]:
        content = msg.text
        if content:
            excerpt = content[:FALLBACK_MAX_EXCERPT_CHARS]
            ellipsis = "..." if len(content) > FALLBACK_MAX_EXCERPT_CHARS else ""
            parts.append(f'- User asked: "{excerpt}{ellipsis}"')

    return "\n".join(parts)


def _response_text(content: Any) -> str:
    """Extract text from a chat model response's ``content``."""
    if isinstance(content, str):
        return content.strip()
    if isinstance(content, list):
        chunks: List[str] = []
        for block in content:
            if isinstance(block, str):
                chunks.append(block)
            elif isinstance(block, dict) and isinstance(block.get("text"), str):
                chunks.append(block["text"])
        return "".join(chunks).strip()
    return ""


async def _generate_summary(
    messages: List[Message],
    llm: BaseChatModel,
    focus_area: Optional[str] = None,
) -> str:
    """Generate an LLM summary of the given messages.

    Args:
        messages (List[Message]): Messages to summarize.
        llm (BaseChatModel): Language model used to produce the summary.
        focus_area (Optional[str]): Optional hint for what to emphasise.

    Returns:
        str: The generated summary text.

    Raises:
        SummaryUnavailableError: If the model returned no text.
    """
    prompt = build_compaction_prompt(_messages_to_text(messages), focus_area)
    response = await llm.ainvoke(
        [
            SystemMessage(content=COMPACTION_SYSTEM_PROMPT),
            HumanMessage(content=prompt),
        ]
    )
    text = _response_text(getattr(response, "content", None))
    if not text:
        raise SummaryUnavailableError("summarizer returned an empty response")
    return text


async def summarize_with_fallback(
    messages: List[Message],
    llm: BaseChatModel,
    focus_area: Optional[str] = None,
    *,
    timeout: Optional[float] = None,
) -> Tuple[str, bool]:
    """Summarize *messages*, degrading to the extractive summary on failure.

    Args:
        messages (List[Message]): Messages to summarize.
        llm (BaseChatModel): Language model used to produce the summary.
        focus_area (Optional[str]): Optional hint for what to emphasise.
        timeout (Optional[float]): Seconds to wait for the LLM. Defaults to
            ``settings.SUMMARY_TIMEOUT_SECONDS``. The output-token cap is
            whatever *llm* was built with.

    Returns:
        Tuple[str, bool]: The summary text and whether the LLM produced it.
    """
    if timeout is None:
        timeout = settings.SUMMARY_TIMEOUT_SECONDS

    try:
        summary = await asyncio.wait_for(_generate_summary(messages, llm, focus_area), timeout)
        return summary, True
    except asyncio.TimeoutError:
        logger.warning("Summarization timed out after %.1fs, using fallback summary", timeout)
    except Exception as e:
        logger.warning("Summarization failed, using fallback summary: %s", e)

    return _fallback_summary(messages), False


async def run_compaction(
    messages: List[Message],
    tracker: ContextBudgetTracker,
    llm: BaseChatModel,
    focus_area: Optional[str] = None,
    *,
    timeout: Optional[float] = None,
) -> Tuple[List[Message], CompactionResult]:
    """Compact conversation history by summarizing older messages.

    Never raises for summarizer problems; ``summary_generated`` tells the
    caller which summary path was used.

    The output-token cap is not applied per call. *llm* must already have
    it bound, as :func:`context_governor.services.llm.create_summary_llm`
    does with ``settings.SUMMARY_MAX_TOKENS``.

    Args:
        messages (List[Message]): Full conversation message list.
        tracker (ContextBudgetTracker): Supplies the preservation window.
        llm (BaseChatModel): Summarization model.
        focus_area (Optional[str]): Optional hint for what to emphasise.
        timeout (Optional[float]): Seconds to wait for the LLM.

    Returns:
        Tuple[List[Message], CompactionResult]: The new message list (the
            input list itself when there is nothing to summarize) and the
            compaction statistics.
    """
    preserved, to_summarize = tracker.select_preserved_messages(messages)

    if not to_summarize:
        total = estimate_messages_tokens(messages)
        logger.debug("Nothing to summarize in %d messages", len(messages))
        return messages, CompactionResult(
            original_tokens=total,
            compacted_tokens=total,
            saved_tokens=0,
            summary_generated=False,
        )

    original_tokens = estimate_messages_tokens(to_summarize)
    summary, generated = await summarize_with_fallback(to_summarize, llm, focus_area, timeout=timeout)

    compacted = build_compacted_messages(preserved, summary)
    result = CompactionResult(
        original_tokens=original_tokens,
        compacted_tokens=estimate_messages_tokens(compacted),
        saved_tokens=original_tokens - estimate_tokens(summary),
        summary_generated=generated,
    )

    logger.info(
        "Compacted %d messages -> %d (summarized %d, saved ~%d tokens, llm=%s)",
        len(messages),
        len(compacted),
        len(to_summarize),
        result.saved_tokens,
        generated,
    )
    return compacted, result


async def run_manual_compaction(
    messages: List[Message],
    llm: BaseChatModel,
    focus_area: Optional[str] = None,
    max_context_tokens: Optional[int] = None,
    *,
    timeout: Optional[float] = None,
) -> Tuple[List[Message], CompactionResult]:
    """Compaction for an explicit ``/compact`` request.

    Uses a throw-away tracker with the default preservation window.

    Args:
        messages (List[Message]): Full conversation message list.
        llm (BaseChatModel): Summarization model.
        focus_area (Optional[str]): Optional hint, e.g. ``"terraform changes"``.
        max_context_tokens (Optional[int]): Context window of the active model.
        timeout (Optional[float]): Seconds to wait for the LLM.

    Returns:
        Tuple[List[Message], CompactionResult]: See :func:`run_compaction`.
    """
    tracker = ContextBudgetTracker(
        max_context_tokens=max_context_tokens,
        preserve_recent_messages=MANUAL_PRESERVE_RECENT_MESSAGES,
    )
    return await run_compaction(messages, tracker, llm, focus_area, timeout=timeout)


async def auto_compact(
    system_prompt: str,
    messages: List[Message],
    tool_definition_tokens: int,
    tracker: ContextBudgetTracker,
    llm: BaseChatModel,
    *,
    timeout: Optional[float] = None,
) -> Optional[Tuple[List[Message], CompactionResult]]:
    """Compact only when usage has reached the tracker's threshold.

    Args:
        system_prompt (str): The full system prompt.
        messages (List[Message]): Full conversation message list.
        tool_definition_tokens (int): Pre-computed tool schema tokens.
        tracker (ContextBudgetTracker): Budget and preservation settings.
        llm (BaseChatModel): Summarization model.
        timeout (Optional[float]): Seconds to wait for the LLM.

    Returns:
        Optional[Tuple[List[Message], CompactionResult]]: ``None`` when
            usage is below the threshold, otherwise the compaction output.
    """
    usage = tracker.calculate_usage(system_prompt, messages, tool_definition_tokens)
    if not tracker.exceeds_threshold(usage):
        return None

    logger.info(
        "Context usage %d%% >= %d%% threshold, compacting",
        usage.usage_percent,
        round(tracker.auto_compact_threshold * 100),
    )
    return await run_compaction(messages, tracker, llm, timeout=timeout)

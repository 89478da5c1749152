# Copyright (c) 2026 Heureum AI. All rights reserved.

"""
Prompt and marker constants for context compaction.

``CONTEXT_SUMMARY_PREFIX`` is the only convention that survives inside
ordinary message content: any message starting with it is a previous
compaction artifact and is never summarized again.
"""

from typing import Optional

CONTEXT_SUMMARY_PREFIX = "[Context Summary]"

CONTEXT_SUMMARY_TEMPLATE = (
    CONTEXT_SUMMARY_PREFIX
    + " The following is a summary of the earlier conversation:\n\n"
    "{summary}\n\n---\nThe conversation continues below."
)

DEFAULT_INSTRUCTIONS_MARKER = "# PROJECT.md"

TRUNCATION_MARKER = "... [truncated]"

COMPACTION_SYSTEM_PROMPT = """You are a conversation summarizer for an AI agent. Your job is to create a concise summary of a conversation between a user and an AI assistant that helps with software, cloud infrastructure and DevOps tasks.

Rules:
1. Preserve ALL important technical details: file paths, resource names, configuration values, error messages, decisions made.
2. Preserve the user's original intent and any requirements they specified.
3. Preserve the current state of any ongoing work (what was done, what remains).
4. Remove conversational filler, repeated information, and verbose tool outputs.
5. Use bullet points for clarity.
6. Keep the summary under 2000 tokens.
7. Structure the summary as:
   - **User's Goal**: What the user is trying to accomplish
   - **Key Decisions**: Important choices that were made
   - **Work Completed**: What actions were taken and their results
   - **Current State**: Where things stand now
   - **Pending Items**: What still needs to be done (if any)"""

COMPACTION_PROMPT = (
    "Please summarize the following conversation between a user and the AI assistant:"
    "\n\n{conversation}"
)

FOCUS_AREA_SUFFIX = "\n\nPay special attention to: {focus_area}"

FALLBACK_SUMMARY_HEADER = "**Conversation Summary (auto-generated)**\n"


def build_compaction_prompt(conversation: str, focus_area: Optional[str] = None) -> str:
    """Build the user turn sent to the summarizer.

    Args:
        conversation (str): Formatted transcript of the messages to summarize.
        focus_area (Optional[str]): Optional free-text hint appended to the
            prompt. Defaults to ``None``.

    Returns:
        str: The complete user prompt.
    """
    prompt = COMPACTION_PROMPT.format(conversation=conversation)
    if focus_area:
        prompt += FOCUS_AREA_SUFFIX.format(focus_area=focus_area)
    return prompt

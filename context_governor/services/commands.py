# Copyright (c) 2026 Heureum AI. All rights reserved.

"""
Slash command detection for context management.

Recognises ``/compact [focus area]`` and ``/context``. Anything else,
including ``/compaction`` or a command embedded mid-sentence, is not a
command.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class SlashCommandType(str, Enum):
    """Context management commands.

    Attributes:
        COMPACT (str): Summarize older history now.
        CONTEXT (str): Show the context usage breakdown.
    """

    COMPACT = "compact"
    CONTEXT = "context"

    @property
    def trigger(self) -> str:
        """Literal text that invokes the command (e.g. ``"/compact"``)."""
        return f"/{self.value}"


class SlashCommand(BaseModel):
    """Parsed slash command.

    Attributes:
        command (Optional[SlashCommandType]): Detected command, or ``None``
            for ordinary text.
        args (Optional[str]): Trailing arguments (the focus area for
            ``/compact``), if any.
    """

    command: Optional[SlashCommandType] = None
    args: Optional[str] = None


def parse_slash_command(text: str) -> SlashCommand:
    """Detect a context management command in user input.

    Args:
        text (str): Raw user input.

    Returns:
        SlashCommand: The detected command, or one with ``command=None``.
    """
    trimmed = text.strip()
    compact = SlashCommandType.COMPACT.trigger

    if trimmed == compact:
        return SlashCommand(command=SlashCommandType.COMPACT)
    if trimmed.startswith(compact + " "):
        args = trimmed[len(compact) + 1 :].strip()
        return SlashCommand(command=SlashCommandType.COMPACT, args=args or None)
    if trimmed == SlashCommandType.CONTEXT.trigger:
        return SlashCommand(command=SlashCommandType.CONTEXT)
    return SlashCommand()

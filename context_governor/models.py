# Copyright (c) 2026 Heureum AI. All rights reserved.

"""Shared models for the application."""

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel


class MessageRole(str, Enum):
    """Message role enumeration.

    Attributes:
        USER (str): User role.
        ASSISTANT (str): Assistant role.
        SYSTEM (str): System role.
        TOOL (str): Tool result role.
    """

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"
    TOOL = "tool"


class ToolCall(BaseModel):
    """Single tool call emitted by the assistant.

    Attributes:
        id (str): Unique identifier correlating call and result.
        function_name (str): Name of the tool function to invoke.
        function_arguments (str): Serialized (JSON text) arguments.
    """

    id: str
    function_name: str
    function_arguments: str = ""


class Message(BaseModel):
    """Message model.

    Attributes:
        role (MessageRole): The role of the message sender.
        content (Union[str, List[Dict[str, Any]], None]): Text content, or
            structured content parts, or ``None`` when empty.
        tool_calls (Optional[List[ToolCall]]): Tool calls emitted by the
            model, if any.
        tool_call_id (Optional[str]): Identifier linking a tool-role message
            to the call that produced it.
        name (Optional[str]): Name of the tool that produced this result
            (tool-role messages only).
    """

    role: MessageRole
    content: Union[str, List[Dict[str, Any]], None] = None
    tool_calls: Optional[List[ToolCall]] = None
    tool_call_id: Optional[str] = None
    name: Optional[str] = None

    @property
    def text(self) -> str:
        """Text content, or an empty string for empty/structured content."""
        return self.content if isinstance(self.content, str) else ""

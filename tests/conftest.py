# Copyright (c) 2026 Heureum AI. All rights reserved.

"""Shared test fixtures for context-governor test suite."""

from typing import Any, Dict, List, Optional, Union
from unittest.mock import AsyncMock, MagicMock

import pytest
from context_governor.models import Message, MessageRole, ToolCall


# ---------------------------------------------------------------------------
# Message factories
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_message():
    """Factory fixture for creating Message instances."""

    def _factory(
        role: MessageRole = MessageRole.USER,
        content: Union[str, List[Dict[str, Any]], None] = "hello",
        tool_calls: Optional[List[ToolCall]] = None,
        tool_call_id: Optional[str] = None,
        name: Optional[str] = None,
    ) -> Message:
        return Message(
            role=role,
            content=content,
            tool_calls=tool_calls,
            tool_call_id=tool_call_id,
            name=name,
        )

    return _factory


@pytest.fixture
def conversation():
    """Factory fixture for alternating user/assistant conversations.

    Every message has distinct content (``"m0"``, ``"m1"``, ...).
    """

    def _factory(count: int) -> List[Message]:
        return [
            Message(
                role=MessageRole.USER if i % 2 == 0 else MessageRole.ASSISTANT,
                content=f"m{i}",
            )
            for i in range(count)
        ]

    return _factory


# ---------------------------------------------------------------------------
# LLM mocking helpers
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_llm():
    """Factory fixture for a mock async chat model returning fixed content."""

    def _factory(content: Any = "Summary of conversation.") -> AsyncMock:
        llm = AsyncMock()
        result = MagicMock()
        result.content = content
        llm.ainvoke.return_value = result
        return llm

    return _factory


@pytest.fixture
def failing_llm():
    """Mock async chat model whose every call raises."""
    llm = AsyncMock()
    llm.ainvoke.side_effect = Exception("LLM down")
    return llm

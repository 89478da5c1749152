# Copyright (c) 2026 Heureum AI. All rights reserved.

"""
Budget settings and the optional configuration store.

The store is a read-only lookup keyed by namespaced setting names such as
``context.auto_compact_threshold``. A missing key, a failing store and an
invalid value all resolve to "no override".
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

from context_governor.config import Settings

AUTO_COMPACT_THRESHOLD_KEY = "context.auto_compact_threshold"

DEFAULT_MAX_CONTEXT_TOKENS = 200_000
DEFAULT_AUTO_COMPACT_THRESHOLD = 0.85
DEFAULT_PRESERVE_RECENT_MESSAGES = 5

logger = logging.getLogger(__name__)


class ConfigStore(Protocol):
    """Read-only configuration lookup."""

    def get(self, key: str) -> Optional[Any]:
        """Return the value stored under *key*, or ``None``."""
        ...


class SettingsConfigStore:
    """Expose :class:`Settings` fields under namespaced keys.

    Attributes:
        KEY_MAP (Dict[str, str]): Namespaced key to settings attribute.
    """

    KEY_MAP: Dict[str, str] = {
        AUTO_COMPACT_THRESHOLD_KEY: "CONTEXT_AUTO_COMPACT_THRESHOLD",
    }

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    def get(self, key: str) -> Optional[Any]:
        attr = self.KEY_MAP.get(key)
        if attr is None:
            return None
        return getattr(self._settings, attr, None)


def read_config_safe(store: Optional[ConfigStore], key: str) -> Optional[Any]:
    """Read *key* from *store* without ever raising.

    Args:
        store (Optional[ConfigStore]): Store to read from, or ``None``.
        key (str): Namespaced setting name.

    Returns:
        Optional[Any]: The stored value, or ``None`` when the store is absent,
            has no value, or fails.
    """
    if store is None:
        return None
    try:
        return store.get(key)
    except Exception as e:
        logger.debug("Config store read failed for %s: %s", key, e)
        return None


def is_valid_threshold(value: Any) -> bool:
    """Whether *value* is a usable auto-compact threshold in (0, 1]."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return 0 < value <= 1


@dataclass
class BudgetConfig:
    """Context budget configuration for one agent session.

    Attributes:
        max_context_tokens (int): Model context window size in tokens.
            May change mid-session when the model is switched.
        auto_compact_threshold (float): Usage ratio in (0, 1] at which
            compaction is triggered.
        preserve_recent_messages (int): Number of trailing messages that are
            never summarized.
    """

    max_context_tokens: int = DEFAULT_MAX_CONTEXT_TOKENS
    auto_compact_threshold: float = DEFAULT_AUTO_COMPACT_THRESHOLD
    preserve_recent_messages: int = DEFAULT_PRESERVE_RECENT_MESSAGES

    def __post_init__(self) -> None:
        if not is_valid_threshold(self.auto_compact_threshold):
            raise ValueError(
                f"auto_compact_threshold must be in (0, 1], got {self.auto_compact_threshold!r}"
            )
        if self.preserve_recent_messages < 0:
            raise ValueError(
                f"preserve_recent_messages must be >= 0, got {self.preserve_recent_messages!r}"
            )

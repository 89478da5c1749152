# Copyright (c) 2026 Heureum AI. All rights reserved.

"""
Context Governor - context-window budgeting and conversation compaction
for LLM agents.
"""

__version__ = "0.1.0"

# Copyright (c) 2026 Heureum AI. All rights reserved.

"""Unit tests for context_governor.services.commands module."""

import pytest

from context_governor.services.commands import SlashCommandType, parse_slash_command


class TestCompactCommand:
    """Tests for /compact detection."""

    def test_bare(self):
        result = parse_slash_command("/compact")
        assert result.command == SlashCommandType.COMPACT
        assert result.args is None

    def test_with_focus_area(self):
        result = parse_slash_command("/compact terraform changes")
        assert result.command == SlashCommandType.COMPACT
        assert result.args == "terraform changes"

    def test_surrounding_whitespace(self):
        result = parse_slash_command("  /compact  ")
        assert result.command == SlashCommandType.COMPACT
        assert result.args is None

    def test_focus_area_whitespace_trimmed(self):
        assert parse_slash_command("/compact    iam roles  ").args == "iam roles"

    def test_longer_word_not_matched(self):
        assert parse_slash_command("/compaction").command is None

    def test_embedded_not_matched(self):
        assert parse_slash_command("please /compact this").command is None


class TestContextCommand:
    """Tests for /context detection."""

    def test_bare(self):
        assert parse_slash_command("/context").command == SlashCommandType.CONTEXT

    def test_surrounding_whitespace(self):
        assert parse_slash_command("  /context  ").command == SlashCommandType.CONTEXT

    def test_longer_word_not_matched(self):
        assert parse_slash_command("/contextual").command is None


class TestNonCommands:
    """Tests for ordinary input."""

    @pytest.mark.parametrize("text", ["hello world", "fix the CORS issue", "/unknown", "/help", ""])
    def test_not_detected(self, text):
        result = parse_slash_command(text)
        assert result.command is None
        assert result.args is None

    def test_trigger(self):
        assert SlashCommandType.COMPACT.trigger == "/compact"
        assert SlashCommandType.CONTEXT.trigger == "/context"

"""Tests for shared text helpers."""

import pytest

from content_safety.text_utils import count_emoji, grapheme_length


class TestGraphemeLength:
    """Test cases for user-perceived character counting."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("", 0),
            ("Jane", 4),
            ("\u2764\ufe0f", 1),
            ("\U0001F44D\U0001F3FD", 1),
            ("\U0001F468\u200d\U0001F469\u200d\U0001F467", 1),
            ("\U0001F1FA\U0001F1F8\U0001F1EB\U0001F1F7", 2),
            ("cafe\u0301", 4),
        ],
    )
    def test_grapheme_length(self, text, expected):
        """Test that joiners, selectors and modifiers add no length."""
        assert grapheme_length(text) == expected

    def test_emoji_count_unaffected_by_selectors(self):
        """Test that variation selectors are not counted as emoji."""
        assert count_emoji("\u2764\ufe0f" * 3) == 3

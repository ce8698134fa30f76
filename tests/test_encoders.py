"""Tests for context-specific output encoders."""

import pytest

from content_safety.encoders import (
    encode,
    html_attribute_encode,
    html_encode,
    javascript_encode,
    url_encode,
)
from content_safety.models import EncodingContext


class TestHtmlEncoding:
    """Test cases for HTML body and attribute encoding."""

    def test_html_encode_markup(self):
        """Test encoding of tags and slashes."""
        assert html_encode("<b>hi</b>") == "&lt;b&gt;hi&lt;&#x2F;b&gt;"

    def test_html_encode_ampersand_first(self):
        """Test that ampersands are not double encoded."""
        assert html_encode("a & b < c") == "a &amp; b &lt; c"
        assert html_encode("&lt;") == "&amp;lt;"

    def test_html_encode_quotes(self):
        """Test encoding of both quote styles."""
        assert html_encode("\"x\" 'y'") == "&quot;x&quot; &#39;y&#39;"

    def test_html_encode_removes_no_characters(self):
        """Test that an attack is escaped, not stripped."""
        encoded = html_encode("<img onerror=alert(1)>")
        assert "<" not in encoded and ">" not in encoded
        assert "onerror=alert(1)" in encoded

    def test_html_encode_plain_text(self):
        """Test that plain text is unchanged."""
        assert html_encode("Hello world") == "Hello world"
        assert html_encode("") == ""

    def test_attribute_encode_whitespace(self):
        """Test encoding of spaces and line breaks in attributes."""
        assert html_attribute_encode("a b") == "a&nbsp;b"
        assert html_attribute_encode("x\ny\rz\tw") == "x&#10;y&#13;z&#9;w"

    def test_attribute_encode_includes_html_encoding(self):
        """Test that attribute encoding also escapes markup."""
        assert html_attribute_encode('"><script>') == "&quot;&gt;&lt;script&gt;"


class TestJavascriptEncoding:
    """Test cases for JavaScript string literal encoding."""

    def test_quotes_escaped(self):
        """Test escaping of quotes."""
        assert javascript_encode('say "hi"') == 'say \\"hi\\"'
        assert javascript_encode("it's") == "it\\'s"

    def test_backslash_escaped_once(self):
        """Test that backslashes are escaped before other escapes are added."""
        assert javascript_encode("a\\b") == "a\\\\b"
        assert javascript_encode("\\'") == "\\\\\\'"

    def test_control_whitespace_escaped(self):
        """Test escaping of newlines, returns and tabs."""
        assert javascript_encode("a\nb\rc\td") == "a\\nb\\rc\\td"

    def test_script_breakout_escaped(self):
        """Test that a closing script tag cannot be formed."""
        assert javascript_encode("</script>&") == "\\x3C/script\\x3E\\x26"


class TestUrlEncoding:
    """Test cases for URL query encoding."""

    def test_space_encoded(self):
        """Test percent-encoding of spaces."""
        assert url_encode("hello world") == "hello%20world"

    def test_query_punctuation_kept(self):
        """Test that query-allowed punctuation is not encoded."""
        assert url_encode("a+b=c&d/e?f") == "a+b=c&d/e?f"

    def test_reserved_and_unicode_encoded(self):
        """Test encoding of fragment marker and non-ASCII text."""
        assert url_encode("#top") == "%23top"
        assert url_encode("café") == "caf%C3%A9"


class TestEncodeDispatch:
    """Test cases for the context dispatcher."""

    @pytest.mark.parametrize(
        "context,expected",
        [
            (EncodingContext.HTML, "&lt;a b&gt;"),
            (EncodingContext.HTML_ATTRIBUTE, "&lt;a&nbsp;b&gt;"),
            (EncodingContext.JAVASCRIPT_STRING, "\\x3Ca b\\x3E"),
            (EncodingContext.URL_QUERY, "%3Ca%20b%3E"),
        ],
    )
    def test_encode_by_context(self, context, expected):
        """Test dispatch to each encoder."""
        assert encode("<a b>", context) == expected

    def test_encode_by_name(self):
        """Test dispatch by context name."""
        assert encode("<", "html") == "&lt;"
        assert encode(" ", "url") == "%20"

    def test_unknown_context_rejected(self):
        """Test that an unknown context name raises."""
        with pytest.raises(ValueError):
            encode("x", "css")

"""
Output encoders applied right before text is embedded in a rendering context.

These are not the inverse of sanitization. They never drop characters; they
escape them for one context, and should be applied to any text (sanitized or
not) at render time.
"""

from typing import Union
from urllib.parse import quote

from .constants import URL_QUERY_SAFE_CHARS
from .models import EncodingContext

# Order matters: "&" goes first so later entities are not double-encoded
_HTML_REPLACEMENTS = [
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#39;"),
    ("/", "&#x2F;"),
]

_ATTRIBUTE_REPLACEMENTS = [
    (" ", "&nbsp;"),
    ("\n", "&#10;"),
    ("\r", "&#13;"),
    ("\t", "&#9;"),
]

# Backslash first so the escapes added below are not escaped again
_JAVASCRIPT_REPLACEMENTS = [
    ("\\", "\\\\"),
    ('"', '\\"'),
    ("'", "\\'"),
    ("\n", "\\n"),
    ("\r", "\\r"),
    ("\t", "\\t"),
    ("<", "\\x3C"),
    (">", "\\x3E"),
    ("&", "\\x26"),
]


def _replace_in_order(text: str, replacements) -> str:
    for old, new in replacements:
        text = text.replace(old, new)
    return text


def html_encode(text: str) -> str:
    """
    Encode text for an HTML body context.

    Example:
        >>> html_encode("<b>hi</b>")
        '&lt;b&gt;hi&lt;&#x2F;b&gt;'
    """
    return _replace_in_order(text or "", _HTML_REPLACEMENTS)


def html_attribute_encode(text: str) -> str:
    """Encode text for an HTML attribute value."""
    return _replace_in_order(html_encode(text), _ATTRIBUTE_REPLACEMENTS)


def javascript_encode(text: str) -> str:
    """Escape text for use inside a quoted JavaScript string literal."""
    return _replace_in_order(text or "", _JAVASCRIPT_REPLACEMENTS)


def url_encode(text: str) -> str:
    """Percent-encode text for a URL query component."""
    return quote(text or "", safe=URL_QUERY_SAFE_CHARS)


_ENCODERS = {
    EncodingContext.HTML: html_encode,
    EncodingContext.HTML_ATTRIBUTE: html_attribute_encode,
    EncodingContext.JAVASCRIPT_STRING: javascript_encode,
    EncodingContext.URL_QUERY: url_encode,
}


def encode(text: str, context: Union[EncodingContext, str]) -> str:
    """Encode text for the given rendering context."""
    return _ENCODERS[EncodingContext(context)](text)

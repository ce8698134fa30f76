"""
Input sanitization for user-supplied text.

Standard sanitization applies these layers:

1. trim
2. strip control and format characters (Cc, Cf), tabs and newlines included
3. collapse whitespace runs to single spaces
4. decode a fixed HTML entity table (reveals ``&#60;script&#62;``)
5. remove dangerous tag fragments
6. remove inline event handler attributes
7. remove ``javascript:``, ``vbscript:`` and ``data:`` schemes
8. remove residual attack fragments (``eval(``, ``document.``, ``\\x``, ...)
9. trim

All layers run in one left-to-right scan that appends each character to an
output buffer and checks only the buffer tail. The buffer never holds a
fragment, an entity or a whitespace run, so a fragment re-formed by a removal
(``<scr<scriptipt>``, ``<scr\\nipt>``) is removed the moment its last
character arrives and the cost stays linear in the input length.

Removal is substring based on purpose. This is a pattern filter, not an HTML
parser, and it will strip harmless text that happens to match (``cookie``).
"""

import unicodedata
from typing import Dict, Iterable, List, Optional, Set, Tuple, Union
from urllib.parse import urlparse

from .constants import (
    ALLOWED_URL_SCHEMES,
    DANGEROUS_SCHEMES,
    DANGEROUS_TAGS,
    EVENT_HANDLERS,
    HTML_ENTITIES,
    RESIDUAL_ATTACK_FRAGMENTS,
    STRICT_FORBIDDEN_CHARS,
)
from .logging_config import get_logger
from .models import SanitizationLevel

logger = get_logger(__name__)

LevelLike = Union[SanitizationLevel, str]

# "&#" only counts once it can no longer grow into an entity
_UNFINISHED_ENTITY = "&#"

_ENTITY_PREFIXES = frozenset(
    entity[:end] for entity in HTML_ENTITIES for end in range(1, len(entity))
)
_ENTITY_CANDIDATES = _ENTITY_PREFIXES | frozenset(HTML_ENTITIES)
_ENTITY_LENGTHS = sorted({len(entity) for entity in HTML_ENTITIES})

FragmentIndex = Dict[str, List[Tuple[int, Set[str]]]]


def _index_fragments(fragments: Iterable[str]) -> FragmentIndex:
    """Group fragments by last character, longest first within each group."""
    grouped: Dict[str, Dict[int, Set[str]]] = {}
    for fragment in fragments:
        key = fragment.casefold()
        if key == _UNFINISHED_ENTITY:
            continue
        grouped.setdefault(key[-1], {}).setdefault(len(key), set()).add(key)
    return {
        last: sorted(by_length.items(), reverse=True)
        for last, by_length in grouped.items()
    }


class TextScrubber:
    """
    One-pass scrubber behind the standard and strict levels.

    Each incoming character is dropped, normalized or appended; an appended
    character that completes an entity is replaced by its decoded character,
    and one that completes a fragment rolls the buffer back over it. The
    buffer only ever grows and shrinks at its end, so every earlier state was
    already clean and a rollback never exposes anything new.
    """

    def __init__(self, fragments: Iterable[str], drop: str = ""):
        self.fragments = _index_fragments(fragments)
        self.drop = frozenset(drop)

    def scrub(self, text: str) -> str:
        out: List[str] = []
        for char in text:
            self._push(out, char)
        self._settle_entity(out, None)
        return "".join(out).strip()

    def _push(self, out: List[str], char: str) -> None:
        if char in self.drop or unicodedata.category(char) in ("Cc", "Cf"):
            return
        if char.isspace():
            char = " "

        self._settle_entity(out, char)
        if char == " " and (not out or out[-1] == " "):
            return

        out.append(char)
        if char == ";" and self._decode_entity(out):
            return
        self._remove_fragment(out)

    def _settle_entity(self, out: List[str], char: Optional[str]) -> None:
        """Remove a pending ``&#`` that ``char`` (or end of input) cannot complete."""
        start = _pending_entity_start(out)
        if start is None:
            return
        pending = "".join(out[start:]).casefold()
        if char is not None and pending + char.casefold() in _ENTITY_CANDIDATES:
            return
        if not pending.startswith(_UNFINISHED_ENTITY):
            return

        rest = out[start + len(_UNFINISHED_ENTITY):]
        del out[start:]
        for kept in rest:
            self._push(out, kept)

    def _decode_entity(self, out: List[str]) -> bool:
        for length in _ENTITY_LENGTHS:
            if length > len(out):
                break
            decoded = HTML_ENTITIES.get("".join(out[-length:]).casefold())
            if decoded is not None:
                del out[-length:]
                self._push(out, decoded)
                return True
        return False

    def _remove_fragment(self, out: List[str]) -> None:
        candidates = self.fragments.get(out[-1].casefold())
        if not candidates:
            return
        for length, fragments in candidates:
            if length <= len(out) and "".join(out[-length:]).casefold() in fragments:
                del out[-length:]
                return


def _pending_entity_start(out: List[str]) -> Optional[int]:
    for back in range(1, min(len(out), _ENTITY_LENGTHS[-1] - 1) + 1):
        if out[-back] == "&":
            start = len(out) - back
            if "".join(out[start:]).casefold() in _ENTITY_PREFIXES:
                return start
            return None
    return None


_DANGEROUS_FRAGMENTS = (
    DANGEROUS_TAGS + EVENT_HANDLERS + DANGEROUS_SCHEMES + RESIDUAL_ATTACK_FRAGMENTS
)
_STANDARD_SCRUBBER = TextScrubber(_DANGEROUS_FRAGMENTS)
_STRICT_SCRUBBER = TextScrubber(_DANGEROUS_FRAGMENTS, drop=STRICT_FORBIDDEN_CHARS)


def basic(text: str) -> str:
    """Trim surrounding whitespace only. Use for trusted internal fields."""
    if not isinstance(text, str):
        return ""
    return text.strip()


def standard(text: str) -> str:
    """Remove dangerous markup and script patterns. Use for messages and bios."""
    if not isinstance(text, str):
        return ""
    return _STANDARD_SCRUBBER.scrub(text)


def strict(text: str) -> str:
    """Standard sanitization plus removal of ``<>{}[]|\\^`"'``.

    Use for display names, usernames and referral codes.
    """
    if not isinstance(text, str):
        return ""
    return _STRICT_SCRUBBER.scrub(_STANDARD_SCRUBBER.scrub(text))


_LEVEL_FUNCTIONS = {
    SanitizationLevel.BASIC: basic,
    SanitizationLevel.STANDARD: standard,
    SanitizationLevel.STRICT: strict,
}


def sanitize(text: str, level: LevelLike = SanitizationLevel.STANDARD) -> str:
    """
    Sanitize text at the given level.

    Args:
        text: Raw user input
        level: SanitizationLevel or its name ("basic", "standard", "strict")

    Returns:
        Sanitized text; empty or non-string input gives an empty string
    """
    level = SanitizationLevel(level)
    result = _LEVEL_FUNCTIONS[level](text)
    if isinstance(text, str) and len(result) != len(text):
        logger.debug(
            f"Sanitized text at {level.value} level: {len(text)} -> {len(result)} chars"
        )
    return result


def sanitize_email(email: str) -> str:
    """Trim and lowercase an email address."""
    return basic(email).lower()


def sanitize_referral_code(code: str) -> str:
    """Trim and uppercase a referral code."""
    return basic(code).upper()


def sanitize_url(url: str) -> Optional[str]:
    """Return the trimmed URL if it is an http(s) URL with a host, else None."""
    candidate = basic(url)
    if not candidate:
        return None
    try:
        parsed = urlparse(candidate)
    except ValueError:
        return None
    if parsed.scheme.lower() not in ALLOWED_URL_SCHEMES or not parsed.netloc:
        return None
    return candidate


def numeric_string(text: str) -> str:
    """Keep decimal digits only."""
    if not isinstance(text, str):
        return ""
    return "".join(c for c in text if c.isdecimal())


def alphanumeric(text: str, allow_spaces: bool = True) -> str:
    """Keep letters, digits and (optionally) spaces, then trim."""
    if not isinstance(text, str):
        return ""
    kept = "".join(c for c in text if c.isalnum() or (allow_spaces and c == " "))
    return kept.strip()


def is_empty(text: str, level: LevelLike = SanitizationLevel.BASIC) -> bool:
    """Check whether text is empty once sanitized at ``level``."""
    return not sanitize(text, level)


def sanitized_length(text: str, level: LevelLike = SanitizationLevel.BASIC) -> int:
    """Length of text once sanitized at ``level``."""
    return len(sanitize(text, level))

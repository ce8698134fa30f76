"""
Small text helpers shared by the moderator and the profile analyzer.
"""

import unicodedata
from typing import Tuple

from .constants import LEET_SUBSTITUTIONS

_LEET_TABLE = str.maketrans(LEET_SUBSTITUTIONS)

# Code point blocks treated as emoji
_EMOJI_RANGES = (
    (0x1F000, 0x1FAFF),  # pictographs, emoticons, transport, flags, supplemental
    (0x2600, 0x27BF),  # miscellaneous symbols and dingbats
    (0x2300, 0x23FF),  # miscellaneous technical (watch, hourglass, ...)
    (0x2B00, 0x2BFF),  # arrows and stars
    (0x3030, 0x3030),
    (0x303D, 0x303D),
    (0x3297, 0x3299),
)


def is_emoji(char: str) -> bool:
    """Return True if ``char`` is a pictographic emoji code point."""
    code = ord(char)
    return any(low <= code <= high for low, high in _EMOJI_RANGES)


def count_emoji(text: str) -> int:
    """Count emoji code points in ``text``."""
    return sum(1 for char in text if is_emoji(char))


# Code points that attach to the character before them on screen
_EXTENDERS = (
    (0xFE00, 0xFE0F),  # variation selectors
    (0x1F3FB, 0x1F3FF),  # skin tone modifiers
    (0xE0020, 0xE007F),  # tag characters (subdivision flags)
)
_ZWJ = "\u200d"
_REGIONAL_INDICATORS = (0x1F1E6, 0x1F1FF)


def _is_extender(char: str) -> bool:
    code = ord(char)
    if any(low <= code <= high for low, high in _EXTENDERS):
        return True
    return unicodedata.category(char) in ("Mn", "Me")


def grapheme_length(text: str) -> int:
    """
    Approximate count of user-perceived characters in ``text``.

    Variation selectors, skin tone modifiers, combining marks and tag
    characters add nothing, a zero width joiner fuses its neighbours into one
    character, and a pair of regional indicators is one flag. A red heart
    with its emoji variation selector has length 1 where ``len`` gives 2.
    """
    count = 0
    joined = False
    open_flag = False
    for char in text:
        if joined:
            joined = False
            continue
        if char == _ZWJ:
            joined = True
            continue
        if _is_extender(char):
            continue
        if _REGIONAL_INDICATORS[0] <= ord(char) <= _REGIONAL_INDICATORS[1]:
            open_flag = not open_flag
            if not open_flag:
                continue
        else:
            open_flag = False
        count += 1
    return count


def strip_punctuation(token: str) -> str:
    """Drop every Unicode punctuation character from ``token``."""
    return "".join(c for c in token if not unicodedata.category(c).startswith("P"))


def normalize_leet(token: str) -> str:
    """Undo the common digit/symbol-for-letter substitutions."""
    return token.translate(_LEET_TABLE)


def uppercase_ratio(text: str) -> Tuple[float, int]:
    """Return the share of uppercase letters and the letter count of ``text``."""
    letters = [c for c in text if c.isalpha()]
    if not letters:
        return 0.0, 0
    upper = sum(1 for c in letters if c.isupper())
    return upper / len(letters), len(letters)


def char_ratio(text: str, chars: str) -> float:
    """Fraction of ``text`` made of characters from ``chars``."""
    if not text:
        return 0.0
    return sum(1 for c in text if c in chars) / len(text)

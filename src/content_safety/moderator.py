"""
Content moderation: profanity, spam, personal information, shouting and
repetition checks, the 0-100 content score, and display name validation.

All functions are pure and accept any string, including the empty string.
"""

import re
from typing import Callable, List, Tuple

from .constants import (
    CAPS_MIN_LETTERS,
    CAPS_RATIO_THRESHOLD,
    INAPPROPRIATE_NAME_TERMS,
    MAX_CONTENT_SCORE,
    NAME_CONTACT_MARKERS,
    NAME_MAX_DIGITS,
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
    NAME_SPECIAL_CHAR_RATIO,
    PII_PATTERNS,
    PROFANITY_WORDS,
    REPETITION_PATTERN,
    SPAM_EMOJI_THRESHOLD,
    SPAM_PATTERNS,
    VIOLATION_DEDUCTIONS,
)
from .logging_config import get_logger
from .models import NameValidationResult, PolicyViolation
from .text_utils import count_emoji, normalize_leet, strip_punctuation, uppercase_ratio

logger = get_logger(__name__)

_PII_PATTERNS = {name: re.compile(pattern) for name, pattern in PII_PATTERNS.items()}
_REPETITION_RE = re.compile(REPETITION_PATTERN)
_TOKEN_SPLIT_RE = re.compile(r"(\s+)")


def _as_text(text) -> str:
    return text if isinstance(text, str) else ""


def _is_profane_token(token: str) -> bool:
    lowered = token.lower()
    cleaned = strip_punctuation(lowered)
    if cleaned in PROFANITY_WORDS:
        return True

    # Leet substitutions, e.g. "sh1t", "d@mn", "a55"
    return (
        normalize_leet(cleaned) in PROFANITY_WORDS
        or strip_punctuation(normalize_leet(lowered)) in PROFANITY_WORDS
    )


def contains_profanity(text: str) -> bool:
    """Check whether any whitespace-delimited word is on the profanity list."""
    return any(_is_profane_token(token) for token in _as_text(text).split())


def filter_profanity(text: str) -> str:
    """Replace each profane word with asterisks of the same length."""
    parts = _TOKEN_SPLIT_RE.split(_as_text(text))
    return "".join(
        "*" * len(part) if part and not part.isspace() and _is_profane_token(part) else part
        for part in parts
    )


def contains_spam(text: str) -> bool:
    """Check for links, social handles, payment apps, canned phrases or emoji floods."""
    text = _as_text(text)
    lower_text = text.lower()
    if any(pattern in lower_text for pattern in SPAM_PATTERNS):
        return True
    return count_emoji(text) > SPAM_EMOJI_THRESHOLD


def contains_personal_info(text: str) -> bool:
    """Check for a phone number, email address or street address."""
    text = _as_text(text)
    for kind, pattern in _PII_PATTERNS.items():
        if pattern.search(text):
            logger.debug(f"Personal info detected: {kind}")
            return True
    return False


def contains_excessive_caps(text: str) -> bool:
    """More than 70% uppercase letters over at least 10 letters."""
    ratio, letters = uppercase_ratio(_as_text(text))
    return ratio > CAPS_RATIO_THRESHOLD and letters >= CAPS_MIN_LETTERS


def contains_excessive_repetition(text: str) -> bool:
    """Any single character repeated five or more times in a row."""
    return _REPETITION_RE.search(_as_text(text)) is not None


_VIOLATION_CHECKS: List[Tuple[PolicyViolation, Callable[[str], bool]]] = [
    (PolicyViolation.PROFANITY, contains_profanity),
    (PolicyViolation.SPAM, contains_spam),
    (PolicyViolation.PERSONAL_INFO, contains_personal_info),
    (PolicyViolation.EXCESSIVE_CAPS, contains_excessive_caps),
    (PolicyViolation.EXCESSIVE_REPETITION, contains_excessive_repetition),
]


def get_violations(text: str) -> List[PolicyViolation]:
    """Return every policy violation found in text, in a fixed order."""
    violations = [violation for violation, check in _VIOLATION_CHECKS if check(text)]
    if violations:
        logger.debug(f"Violations: {[v.value for v in violations]}")
    return violations


def is_appropriate(text: str) -> bool:
    """True when text has no policy violation at all."""
    return not any(check(text) for _, check in _VIOLATION_CHECKS)


def content_score(text: str) -> int:
    """
    Calculate the 0-100 appropriateness score.

    Starts at 100 and subtracts a fixed deduction per violation
    (profanity 40, spam 30, personal info 20, caps 10, repetition 10),
    floored at 0.
    """
    deductions = sum(VIOLATION_DEDUCTIONS[v.value] for v in get_violations(text))
    return max(0, MAX_CONTENT_SCORE - deductions)


def _name_failures(name: str) -> List[str]:
    lower_name = name.lower().replace(" ", "")
    digits = sum(1 for c in name if c.isdigit())
    special = sum(1 for c in name if not c.isalpha() and not c.isspace())

    rules = [
        (contains_profanity(name), "Name contains inappropriate language"),
        (
            any(term in lower_name for term in INAPPROPRIATE_NAME_TERMS),
            "Name contains inappropriate content",
        ),
        (
            any(word in lower_name for word in PROFANITY_WORDS),
            "Name contains inappropriate language",
        ),
        (
            digits >= NAME_MAX_DIGITS,
            "Name cannot contain phone numbers or long number sequences",
        ),
        (
            any(marker in name for marker in NAME_CONTACT_MARKERS),
            "Name cannot contain email addresses or URLs",
        ),
        (
            special / max(len(name), 1) > NAME_SPECIAL_CHAR_RATIO,
            "Name contains too many special characters",
        ),
        (
            len(name.strip()) < NAME_MIN_LENGTH,
            f"Name must be at least {NAME_MIN_LENGTH} characters",
        ),
        (
            len(name) > NAME_MAX_LENGTH,
            f"Name must be {NAME_MAX_LENGTH} characters or less",
        ),
    ]
    return [message for failed, message in rules if failed]


def validate_name(name: str) -> NameValidationResult:
    """
    Validate a display name.

    Names are short identifiers, so this uses its own rule set rather than the
    content score. All rules are evaluated; the first failing one is reported.

    Args:
        name: Display name as entered

    Returns:
        NameValidationResult with the first failure reason, if any
    """
    failures = _name_failures(_as_text(name))
    if failures:
        logger.debug(f"Name rejected by {len(failures)} rule(s)")
        return NameValidationResult(is_valid=False, reason=failures[0])
    return NameValidationResult(is_valid=True)


def is_name_appropriate(name: str) -> bool:
    """Quick check if a display name passes validation."""
    return validate_name(name).is_valid

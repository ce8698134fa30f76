"""
Data models for sanitization, moderation and fake profile analysis.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from .constants import (
    DEFAULT_MIN_BIO_SCORE,
    DEFAULT_SANITIZATION_LEVEL,
    MAX_WORKERS,
    PLUGIN_TIMEOUT_SECONDS,
    SUSPICION_THRESHOLD,
)


class SanitizationLevel(Enum):
    """Aggressiveness tier for input sanitization."""

    BASIC = "basic"  # trim only
    STANDARD = "standard"  # remove dangerous patterns
    STRICT = "strict"  # standard plus forbidden characters


class EncodingContext(Enum):
    """Rendering context an output encoder targets."""

    HTML = "html"
    HTML_ATTRIBUTE = "attribute"
    JAVASCRIPT_STRING = "javascript"
    URL_QUERY = "url"


class PolicyViolation(Enum):
    """Content policy violations detected by the moderator."""

    PROFANITY = "profanity"
    SPAM = "spam"
    PERSONAL_INFO = "personal_info"
    EXCESSIVE_CAPS = "excessive_caps"
    EXCESSIVE_REPETITION = "excessive_repetition"

    @property
    def description(self) -> str:
        return _VIOLATION_DESCRIPTIONS[self]


_VIOLATION_DESCRIPTIONS = {
    PolicyViolation.PROFANITY: "Contains inappropriate language",
    PolicyViolation.SPAM: "Contains spam or promotional content",
    PolicyViolation.PERSONAL_INFO: "Contains personal contact information",
    PolicyViolation.EXCESSIVE_CAPS: "Excessive use of capital letters",
    PolicyViolation.EXCESSIVE_REPETITION: "Excessive character repetition",
}


@dataclass(frozen=True)
class NameValidationResult:
    """Outcome of display name validation."""

    is_valid: bool
    reason: Optional[str] = None

    def __bool__(self) -> bool:
        return self.is_valid


class FakeIndicatorKind(Enum):
    """Signals that contribute to a fake profile suspicion score."""

    NO_PHOTOS = "no_photos"
    SINGLE_PHOTO = "single_photo"
    STOCK_PHOTO = "stock_photo"
    PROFESSIONAL_PHOTO = "professional_photo"
    INCONSISTENT_FACES = "inconsistent_faces"
    SUSPICIOUSLY_HIGH_QUALITY = "suspiciously_high_quality"
    EMPTY_BIO = "empty_bio"
    SHORT_BIO = "short_bio"
    GENERIC_BIO = "generic_bio"
    CONTAINS_EXTERNAL_LINKS = "contains_external_links"
    CONTAINS_PAYMENT_INFO = "contains_payment_info"
    EXCESSIVE_EMOJIS = "excessive_emojis"
    BOT_LIKE_TEXT = "bot_like_text"
    SINGLE_NAME = "single_name"
    SUSPICIOUS_NAME = "suspicious_name"
    UNUSUAL_NAME_FORMAT = "unusual_name_format"
    NAME_CONTAINS_NUMBERS = "name_contains_numbers"
    SUSPICIOUS_KEYWORDS = "suspicious_keywords"
    INCOMPLETE_PROFILE = "incomplete_profile"


_INDICATOR_DESCRIPTIONS = {
    FakeIndicatorKind.NO_PHOTOS: "No profile photos",
    FakeIndicatorKind.SINGLE_PHOTO: "Only one profile photo",
    FakeIndicatorKind.STOCK_PHOTO: "Photo {number} appears to be a stock photo",
    FakeIndicatorKind.PROFESSIONAL_PHOTO: "Photo {number} appears professionally shot",
    FakeIndicatorKind.INCONSISTENT_FACES: "Photos show different people",
    FakeIndicatorKind.SUSPICIOUSLY_HIGH_QUALITY: "Unusually high photo quality",
    FakeIndicatorKind.EMPTY_BIO: "No bio provided",
    FakeIndicatorKind.SHORT_BIO: "Very short bio",
    FakeIndicatorKind.GENERIC_BIO: "Generic/template bio",
    FakeIndicatorKind.CONTAINS_EXTERNAL_LINKS: "Bio contains external social media links",
    FakeIndicatorKind.CONTAINS_PAYMENT_INFO: "Bio contains payment/donation info",
    FakeIndicatorKind.EXCESSIVE_EMOJIS: "Excessive emoji usage",
    FakeIndicatorKind.BOT_LIKE_TEXT: "Bio has bot-like patterns",
    FakeIndicatorKind.SINGLE_NAME: "Single name only",
    FakeIndicatorKind.SUSPICIOUS_NAME: "Suspicious name format",
    FakeIndicatorKind.UNUSUAL_NAME_FORMAT: "Unusual name formatting",
    FakeIndicatorKind.NAME_CONTAINS_NUMBERS: "Name contains numbers",
    FakeIndicatorKind.SUSPICIOUS_KEYWORDS: "Name contains suspicious keywords",
    FakeIndicatorKind.INCOMPLETE_PROFILE: "Incomplete profile information",
}

_PHOTO_INDICATORS = {FakeIndicatorKind.STOCK_PHOTO, FakeIndicatorKind.PROFESSIONAL_PHOTO}


@dataclass(frozen=True)
class FakeIndicator:
    """A fake profile signal; photo signals carry the zero-based photo index."""

    kind: FakeIndicatorKind
    photo_index: Optional[int] = None

    def __post_init__(self):
        if (self.kind in _PHOTO_INDICATORS) != (self.photo_index is not None):
            raise ValueError(
                f"photo_index is required for per-photo indicators only, got "
                f"{self.kind.value} with photo_index={self.photo_index}"
            )

    @classmethod
    def stock_photo(cls, index: int) -> "FakeIndicator":
        return cls(FakeIndicatorKind.STOCK_PHOTO, index)

    @classmethod
    def professional_photo(cls, index: int) -> "FakeIndicator":
        return cls(FakeIndicatorKind.PROFESSIONAL_PHOTO, index)

    @property
    def description(self) -> str:
        template = _INDICATOR_DESCRIPTIONS[self.kind]
        if self.photo_index is None:
            return template
        return template.format(number=self.photo_index + 1)

    def __str__(self) -> str:
        return self.description


class ProfileRecommendation(Enum):
    """Action suggested to the moderation queue."""

    ALLOW_PROFILE = "allow_profile"
    FLAG_FOR_REVIEW = "flag_for_review"
    # Declared for the moderation queue; no rule currently produces it
    AUTO_BLOCK = "auto_block"


@dataclass(frozen=True)
class FakeProfileAnalysis:
    """Result of analyzing a profile snapshot."""

    is_suspicious: bool
    suspicion_score: float
    indicators: Tuple[FakeIndicator, ...]
    recommendation: ProfileRecommendation

    def __str__(self) -> str:
        return (
            f"FakeProfileAnalysis(score={self.suspicion_score:.2f}, "
            f"indicators={len(self.indicators)}, "
            f"recommendation={self.recommendation.value})"
        )


class BehaviorIndicator(Enum):
    """Behavioural bot/scam signals derived from activity counters."""

    MASS_MESSAGING = "mass_messaging"
    NEW_ACCOUNT_HIGH_ACTIVITY = "new_account_high_activity"
    NO_ENGAGEMENT = "no_engagement"
    RAPID_MATCHING = "rapid_matching"

    @property
    def description(self) -> str:
        return _BEHAVIOR_DESCRIPTIONS[self]


_BEHAVIOR_DESCRIPTIONS = {
    BehaviorIndicator.MASS_MESSAGING: "Sending many messages with few matches",
    BehaviorIndicator.NEW_ACCOUNT_HIGH_ACTIVITY: "New account with unusually high activity",
    BehaviorIndicator.NO_ENGAGEMENT: "Sending messages but receiving none",
    BehaviorIndicator.RAPID_MATCHING: "Matching with many users very quickly",
}


@dataclass(frozen=True)
class BehaviorAnalysis:
    """Result of analyzing account activity counters."""

    suspicion_score: float
    indicators: Tuple[BehaviorIndicator, ...]

    @property
    def is_suspicious(self) -> bool:
        return self.suspicion_score >= SUSPICION_THRESHOLD


@dataclass(frozen=True)
class Photo:
    """A profile photo as seen by the analyzer.

    Only dimensions are known to the default checks; ``source`` is whatever
    a plugged-in check needs to find the image (path, URL, storage key).
    """

    width: Optional[int] = None
    height: Optional[int] = None
    source: Optional[str] = None

    @property
    def pixel_count(self) -> int:
        if self.width is None or self.height is None:
            return 0
        return self.width * self.height


@dataclass(frozen=True)
class BehaviorCounters:
    """Account activity counters used for behavioural analysis."""

    messages_sent: int = 0
    messages_received: int = 0
    matches_count: int = 0
    account_age_seconds: float = 0.0


@dataclass
class ProfileSnapshot:
    """Everything the analyzer looks at for one profile."""

    photos: List[Photo] = field(default_factory=list)
    bio: str = ""
    name: str = ""
    age: Optional[int] = None
    location: Optional[str] = None
    behavior: Optional[BehaviorCounters] = None


@dataclass
class SanitizerConfig:
    """Configuration for sanitization."""

    default_level: str = DEFAULT_SANITIZATION_LEVEL

    @property
    def level(self) -> SanitizationLevel:
        return SanitizationLevel(self.default_level)


@dataclass
class ModerationConfig:
    """Configuration for moderation acceptance decisions."""

    min_bio_score: int = DEFAULT_MIN_BIO_SCORE


@dataclass
class AnalyzerConfig:
    """Configuration for the fake profile analyzer."""

    max_workers: int = MAX_WORKERS
    plugin_timeout: float = PLUGIN_TIMEOUT_SECONDS

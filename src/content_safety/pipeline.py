"""
Composition of sanitizer, moderator and analyzer for the common flows:
sending a message, saving profile fields, and screening a profile for the
moderation queue.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .logging_config import get_logger
from .models import (
    BehaviorAnalysis,
    FakeProfileAnalysis,
    ModerationConfig,
    NameValidationResult,
    PolicyViolation,
    ProfileRecommendation,
    ProfileSnapshot,
    SanitizationLevel,
)
from .moderator import content_score, get_violations, validate_name
from .profile_analyzer import FakeProfileAnalyzer
from .sanitizer import sanitize, sanitize_email

logger = get_logger(__name__)

# Violations that block a message from being sent
BLOCKING_MESSAGE_VIOLATIONS = frozenset(
    {PolicyViolation.PROFANITY, PolicyViolation.PERSONAL_INFO}
)

REVIEW_RECOMMENDATIONS = frozenset(
    {ProfileRecommendation.FLAG_FOR_REVIEW, ProfileRecommendation.AUTO_BLOCK}
)


@dataclass
class MessageCheck:
    """Outcome of checking a chat message before sending."""

    sanitized_text: str
    violations: List[PolicyViolation]
    allowed: bool

    @property
    def reasons(self) -> List[str]:
        return [v.description for v in self.violations]


@dataclass
class ProfileFieldsCheck:
    """Outcome of checking profile form fields before saving."""

    name: str
    bio: str
    email: Optional[str]
    name_result: NameValidationResult
    bio_score: int
    accepted: bool
    reasons: List[str] = field(default_factory=list)


@dataclass
class ScreeningResult:
    """Outcome of screening a profile snapshot for the moderation queue."""

    profile: FakeProfileAnalysis
    behavior: Optional[BehaviorAnalysis] = None

    @property
    def queue_for_review(self) -> bool:
        return self.profile.recommendation in REVIEW_RECOMMENDATIONS


def check_message(text: str) -> MessageCheck:
    """
    Sanitize a message and decide whether it may be sent.

    Messages carrying profanity or personal contact information are blocked;
    every violation found is reported so the UI can explain why.
    """
    sanitized = sanitize(text, SanitizationLevel.STANDARD)
    violations = get_violations(sanitized)
    allowed = not any(v in BLOCKING_MESSAGE_VIOLATIONS for v in violations)
    if not allowed:
        logger.info(f"Message blocked: {[v.value for v in violations]}")
    return MessageCheck(sanitized_text=sanitized, violations=violations, allowed=allowed)


def check_profile_fields(
    name: str,
    bio: str,
    email: Optional[str] = None,
    config: Optional[ModerationConfig] = None,
) -> ProfileFieldsCheck:
    """
    Sanitize and validate the free-text fields of a profile form.

    Args:
        name: Display name (sanitized at strict level)
        bio: Bio text (sanitized at standard level)
        email: Optional email address (trimmed and lowercased)
        config: Acceptance floor for the bio content score

    Returns:
        ProfileFieldsCheck; ``accepted`` is False when the name fails
        validation or the bio scores below the configured floor
    """
    config = config or ModerationConfig()

    clean_name = sanitize(name, SanitizationLevel.STRICT)
    clean_bio = sanitize(bio, SanitizationLevel.STANDARD)
    clean_email = sanitize_email(email) if email is not None else None

    name_result = validate_name(clean_name)
    bio_score = content_score(clean_bio)

    reasons = []
    if not name_result.is_valid:
        reasons.append(name_result.reason)
    if bio_score < config.min_bio_score:
        reasons.append(
            f"Bio content score {bio_score} is below the minimum of {config.min_bio_score}"
        )
        reasons.extend(v.description for v in get_violations(clean_bio))

    accepted = not reasons
    if not accepted:
        logger.info(f"Profile fields rejected ({len(reasons)} reasons)")

    return ProfileFieldsCheck(
        name=clean_name,
        bio=clean_bio,
        email=clean_email,
        name_result=name_result,
        bio_score=bio_score,
        accepted=accepted,
        reasons=reasons,
    )


def screen_profile(
    snapshot: ProfileSnapshot, analyzer: Optional[FakeProfileAnalyzer] = None
) -> ScreeningResult:
    """Run fake profile (and, when counters are present, behaviour) analysis."""
    analyzer = analyzer or FakeProfileAnalyzer()
    profile = analyzer.analyze_snapshot(snapshot)

    behavior = None
    if snapshot.behavior is not None:
        counters = snapshot.behavior
        behavior = analyzer.analyze_behavior(
            counters.messages_sent,
            counters.messages_received,
            counters.matches_count,
            counters.account_age_seconds,
        )

    return ScreeningResult(profile=profile, behavior=behavior)

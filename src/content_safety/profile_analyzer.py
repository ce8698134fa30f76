"""
Fake profile detection.

A profile is scored on four sub-scores (photos, bio, name, completeness),
each the sum of fixed indicator weights. The total is divided by 4.0 and
clamped to [0, 1]; a profile at or above 0.7 is flagged for review.

Behavioural analysis scores activity counters the same way but with its own
signal set and without the divisor.
"""

import time
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence, Tuple

from .constants import (
    BEHAVIOR_WEIGHTS,
    BIO_LINK_PATTERNS,
    BIO_PAYMENT_KEYWORDS,
    BOT_SPECIAL_CHAR_RATIO,
    BOT_SPECIAL_CHARS,
    DEFAULT_FACE_CONSISTENCY,
    DEFAULT_IMAGE_QUALITY,
    FACE_CONSISTENCY_THRESHOLD,
    GENERIC_BIO_MIN_PHRASES,
    GENERIC_BIO_PHRASES,
    HIGH_QUALITY_THRESHOLD,
    INCOMPLETE_PROFILE_MIN_MISSING,
    INDICATOR_WEIGHTS,
    MASS_MESSAGING_MAX_MATCHES,
    MASS_MESSAGING_MIN_SENT,
    NAME_MIN_CHARS,
    NEW_ACCOUNT_MAX_DAYS,
    NEW_ACCOUNT_MIN_SENT,
    NO_ENGAGEMENT_MIN_SENT,
    RAPID_MATCHING_MAX_DAYS,
    RAPID_MATCHING_MIN_MATCHES,
    SCORE_NORMALIZER,
    SECONDS_PER_DAY,
    SHORT_BIO_LENGTH,
    SUSPICION_THRESHOLD,
    SUSPICIOUS_NAME_KEYWORDS,
)
from .logging_config import get_logger
from .models import (
    AnalyzerConfig,
    BehaviorAnalysis,
    BehaviorIndicator,
    FakeIndicator,
    FakeIndicatorKind,
    FakeProfileAnalysis,
    Photo,
    ProfileRecommendation,
    ProfileSnapshot,
)
from .photo_checks import (
    FaceConsistencyCheck,
    ImageQualityCheck,
    ProfessionalPhotoCheck,
    StockPhotoCheck,
)
from .text_utils import char_ratio, count_emoji, grapheme_length

logger = get_logger(__name__)

SubScore = Tuple[float, List[FakeIndicator]]


@dataclass
class _PhotoCheckResult:
    is_stock: bool
    is_professional: bool
    quality: float


def _flag(kind: FakeIndicatorKind) -> Tuple[float, FakeIndicator]:
    return INDICATOR_WEIGHTS[kind.value], FakeIndicator(kind)


class FakeProfileAnalyzer:
    """Scores profiles and activity counters for fake, bot or scam signals."""

    def __init__(
        self,
        stock_photo_check: Optional[StockPhotoCheck] = None,
        professional_photo_check: Optional[ProfessionalPhotoCheck] = None,
        face_consistency_check: Optional[FaceConsistencyCheck] = None,
        image_quality_check: Optional[ImageQualityCheck] = None,
        config: Optional[AnalyzerConfig] = None,
    ):
        """
        Initialize the analyzer with optional photo check plugins.

        Args:
            stock_photo_check: Reverse image search backend
            professional_photo_check: Professional photo heuristic
            face_consistency_check: Same-person check across photos
            image_quality_check: Per-photo quality scorer
            config: Worker pool size and plugin timeout
        """
        self.stock_photo_check = stock_photo_check or StockPhotoCheck()
        self.professional_photo_check = (
            professional_photo_check or ProfessionalPhotoCheck()
        )
        self.face_consistency_check = face_consistency_check or FaceConsistencyCheck()
        self.image_quality_check = image_quality_check or ImageQualityCheck()
        self.config = config or AnalyzerConfig()

    # ------------------------------------------------------------------
    # Profile analysis
    # ------------------------------------------------------------------

    def analyze_profile(
        self,
        photos: Sequence[Photo],
        bio: str,
        name: str,
        age: Optional[int] = None,
        location: Optional[str] = None,
    ) -> FakeProfileAnalysis:
        """
        Analyze a profile for fake/bot indicators.

        Args:
            photos: Profile photos in display order
            bio: Bio text
            name: Display name
            age: Stated age; accepted for callers, no current rule scores it
            location: Location, None when not set

        Returns:
            FakeProfileAnalysis with the normalized score and recommendation
        """
        photos = list(photos or [])
        bio = bio if isinstance(bio, str) else ""
        name = name if isinstance(name, str) else ""
        location = location if isinstance(location, str) else None

        logger.info(f"Analyzing profile for fake indicators ({len(photos)} photos)")

        total = 0.0
        indicators: List[FakeIndicator] = []
        for sub_score, sub_indicators in (
            self._analyze_photos(photos),
            self._analyze_bio(bio),
            self._analyze_name(name),
            self._analyze_completeness(photos, bio, location),
        ):
            total += sub_score
            indicators.extend(sub_indicators)

        # TODO: recalibrate against the checks that actually applied instead
        # of the fixed divisor once labelled review outcomes are available.
        normalized = min(1.0, max(0.0, total / SCORE_NORMALIZER))
        is_suspicious = normalized >= SUSPICION_THRESHOLD

        logger.info(f"Profile analysis completed. Suspicion score: {normalized:.2f}")
        if is_suspicious:
            logger.warning(
                f"Suspicious profile detected: {[i.kind.value for i in indicators]}"
            )

        return FakeProfileAnalysis(
            is_suspicious=is_suspicious,
            suspicion_score=normalized,
            indicators=tuple(indicators),
            recommendation=(
                ProfileRecommendation.FLAG_FOR_REVIEW
                if is_suspicious
                else ProfileRecommendation.ALLOW_PROFILE
            ),
        )

    def analyze_snapshot(self, snapshot: ProfileSnapshot) -> FakeProfileAnalysis:
        """Analyze a ProfileSnapshot."""
        return self.analyze_profile(
            snapshot.photos,
            snapshot.bio,
            snapshot.name,
            snapshot.age,
            snapshot.location,
        )

    def _analyze_photos(self, photos: List[Photo]) -> SubScore:
        score = 0.0
        indicators: List[FakeIndicator] = []

        if not photos:
            weight, indicator = _flag(FakeIndicatorKind.NO_PHOTOS)
            return weight, [indicator]

        if len(photos) == 1:
            weight, indicator = _flag(FakeIndicatorKind.SINGLE_PHOTO)
            score += weight
            indicators.append(indicator)

        results, face_consistency = self._run_photo_checks(photos)

        for index, result in enumerate(results):
            if result.is_stock:
                score += INDICATOR_WEIGHTS["stock_photo"]
                indicators.append(FakeIndicator.stock_photo(index))

        for index, result in enumerate(results):
            if result.is_professional:
                score += INDICATOR_WEIGHTS["professional_photo"]
                indicators.append(FakeIndicator.professional_photo(index))

        if face_consistency is not None and face_consistency < FACE_CONSISTENCY_THRESHOLD:
            weight, indicator = _flag(FakeIndicatorKind.INCONSISTENT_FACES)
            score += weight
            indicators.append(indicator)

        average_quality = sum(r.quality for r in results) / len(results)
        if average_quality > HIGH_QUALITY_THRESHOLD:
            weight, indicator = _flag(FakeIndicatorKind.SUSPICIOUSLY_HIGH_QUALITY)
            score += weight
            indicators.append(indicator)

        return score, indicators

    def _run_photo_checks(
        self, photos: List[Photo]
    ) -> Tuple[List[_PhotoCheckResult], Optional[float]]:
        """Fan the per-photo checks out to a thread pool and join them by index."""
        executor = ThreadPoolExecutor(
            max_workers=max(1, self.config.max_workers),
            thread_name_prefix="photo-check",
        )
        try:
            stock = [
                executor.submit(self.stock_photo_check.is_stock_photo, p) for p in photos
            ]
            professional = [
                executor.submit(self.professional_photo_check.is_professional, p)
                for p in photos
            ]
            quality = [
                executor.submit(self.image_quality_check.quality, p) for p in photos
            ]
            consistency = None
            if len(photos) >= 2:
                consistency = executor.submit(
                    self.face_consistency_check.consistency, list(photos)
                )

            deadline = time.monotonic() + self.config.plugin_timeout
            results = []
            for i in range(len(photos)):
                where = f"(photo {i + 1})"
                results.append(
                    _PhotoCheckResult(
                        is_stock=self._resolve(
                            stock[i], False, bool, f"Stock photo {where}", deadline
                        ),
                        is_professional=self._resolve(
                            professional[i],
                            False,
                            bool,
                            f"Professional photo {where}",
                            deadline,
                        ),
                        quality=self._resolve(
                            quality[i],
                            DEFAULT_IMAGE_QUALITY,
                            float,
                            f"Image quality {where}",
                            deadline,
                        ),
                    )
                )

            face_consistency = None
            if consistency is not None:
                face_consistency = self._resolve(
                    consistency,
                    DEFAULT_FACE_CONSISTENCY,
                    float,
                    "Face consistency",
                    deadline,
                )
        finally:
            # Never wait for a hung plugin
            executor.shutdown(wait=False, cancel_futures=True)

        return results, face_consistency

    @staticmethod
    def _resolve(
        future: Future,
        default: Any,
        convert: Callable[[Any], Any],
        label: str,
        deadline: float,
    ) -> Any:
        """Wait for a plugin result; failures and timeouts fall back to default."""
        try:
            return convert(future.result(timeout=max(0.0, deadline - time.monotonic())))
        except FuturesTimeoutError:
            logger.warning(f"{label} check timed out; treating as not flagged")
        except Exception as e:
            logger.warning(f"{label} check failed: {e}; treating as not flagged")
        return default

    def _analyze_bio(self, bio: str) -> SubScore:
        score = 0.0
        indicators: List[FakeIndicator] = []

        def add(kind: FakeIndicatorKind) -> None:
            nonlocal score
            weight, indicator = _flag(kind)
            score += weight
            indicators.append(indicator)

        if not bio:
            add(FakeIndicatorKind.EMPTY_BIO)
        elif len(bio) < SHORT_BIO_LENGTH:
            add(FakeIndicatorKind.SHORT_BIO)

        bio_lower = bio.lower()
        generic_count = sum(1 for phrase in GENERIC_BIO_PHRASES if phrase in bio_lower)
        if generic_count >= GENERIC_BIO_MIN_PHRASES:
            add(FakeIndicatorKind.GENERIC_BIO)

        if any(pattern in bio_lower for pattern in BIO_LINK_PATTERNS):
            add(FakeIndicatorKind.CONTAINS_EXTERNAL_LINKS)

        if any(keyword in bio_lower for keyword in BIO_PAYMENT_KEYWORDS):
            add(FakeIndicatorKind.CONTAINS_PAYMENT_INFO)

        if count_emoji(bio) > grapheme_length(bio) // 2:
            add(FakeIndicatorKind.EXCESSIVE_EMOJIS)

        if char_ratio(bio, BOT_SPECIAL_CHARS) > BOT_SPECIAL_CHAR_RATIO:
            add(FakeIndicatorKind.BOT_LIKE_TEXT)

        return score, indicators

    def _analyze_name(self, name: str) -> SubScore:
        checks = [
            (" " not in name, FakeIndicatorKind.SINGLE_NAME),
            (len(name) < NAME_MIN_CHARS, FakeIndicatorKind.SUSPICIOUS_NAME),
            (
                name == name.upper() or name == name.lower(),
                FakeIndicatorKind.UNUSUAL_NAME_FORMAT,
            ),
            (any(c.isdigit() for c in name), FakeIndicatorKind.NAME_CONTAINS_NUMBERS),
            (
                any(keyword in name.lower() for keyword in SUSPICIOUS_NAME_KEYWORDS),
                FakeIndicatorKind.SUSPICIOUS_KEYWORDS,
            ),
        ]

        score = 0.0
        indicators: List[FakeIndicator] = []
        for failed, kind in checks:
            if failed:
                weight, indicator = _flag(kind)
                score += weight
                indicators.append(indicator)
        return score, indicators

    def _analyze_completeness(
        self, photos: List[Photo], bio: str, location: Optional[str]
    ) -> SubScore:
        missing = sum(
            [
                not photos,
                not bio,
                location is None or not location.strip(),
            ]
        )
        if missing >= INCOMPLETE_PROFILE_MIN_MISSING:
            weight, indicator = _flag(FakeIndicatorKind.INCOMPLETE_PROFILE)
            return weight, [indicator]
        return 0.0, []

    # ------------------------------------------------------------------
    # Behavioural analysis
    # ------------------------------------------------------------------

    def analyze_behavior(
        self,
        messages_sent: int,
        messages_received: int,
        matches_count: int,
        account_age_seconds: float,
    ) -> BehaviorAnalysis:
        """
        Analyze account activity for bot/scammer patterns.

        Args:
            messages_sent: Messages sent by the account
            messages_received: Messages received by the account
            matches_count: Number of matches
            account_age_seconds: Time since account creation

        Returns:
            BehaviorAnalysis with a score clamped to [0, 1]
        """
        days = account_age_seconds / SECONDS_PER_DAY
        checks = [
            (
                messages_sent > MASS_MESSAGING_MIN_SENT
                and matches_count < MASS_MESSAGING_MAX_MATCHES,
                BehaviorIndicator.MASS_MESSAGING,
            ),
            (
                days < NEW_ACCOUNT_MAX_DAYS and messages_sent > NEW_ACCOUNT_MIN_SENT,
                BehaviorIndicator.NEW_ACCOUNT_HIGH_ACTIVITY,
            ),
            (
                messages_received == 0 and messages_sent > NO_ENGAGEMENT_MIN_SENT,
                BehaviorIndicator.NO_ENGAGEMENT,
            ),
            (
                matches_count > RAPID_MATCHING_MIN_MATCHES
                and days < RAPID_MATCHING_MAX_DAYS,
                BehaviorIndicator.RAPID_MATCHING,
            ),
        ]

        score = 0.0
        indicators: List[BehaviorIndicator] = []
        for matched, indicator in checks:
            if matched:
                score += BEHAVIOR_WEIGHTS[indicator.value]
                indicators.append(indicator)

        analysis = BehaviorAnalysis(
            suspicion_score=min(1.0, score), indicators=tuple(indicators)
        )
        logger.info(
            f"Behavior analysis completed. Suspicion score: {analysis.suspicion_score:.2f}"
        )
        return analysis


def analyze_profile(
    photos: Sequence[Photo],
    bio: str,
    name: str,
    age: Optional[int] = None,
    location: Optional[str] = None,
) -> FakeProfileAnalysis:
    """Analyze a profile with the default (neutral) photo checks."""
    return FakeProfileAnalyzer().analyze_profile(photos, bio, name, age, location)


def analyze_behavior(
    messages_sent: int,
    messages_received: int,
    matches_count: int,
    account_age_seconds: float,
) -> BehaviorAnalysis:
    """Analyze account activity counters."""
    return FakeProfileAnalyzer().analyze_behavior(
        messages_sent, messages_received, matches_count, account_age_seconds
    )

"""
Content Safety Pipeline - sanitize user text, moderate it against content
policy, and score profiles for fake/bot signals.
"""

__version__ = "1.0.0"

from .encoders import (
    encode,
    html_attribute_encode,
    html_encode,
    javascript_encode,
    url_encode,
)
from .exceptions import (
    ConfigurationError,
    ContentSafetyError,
    FileProcessingError,
    PhotoProcessingError,
    ValidationError,
)
from .logging_config import get_logger, setup_logging, setup_logging_from_config
from .models import (
    AnalyzerConfig,
    BehaviorAnalysis,
    BehaviorCounters,
    BehaviorIndicator,
    EncodingContext,
    FakeIndicator,
    FakeIndicatorKind,
    FakeProfileAnalysis,
    ModerationConfig,
    NameValidationResult,
    Photo,
    PolicyViolation,
    ProfileRecommendation,
    ProfileSnapshot,
    SanitizationLevel,
    SanitizerConfig,
)
from .moderator import (
    contains_personal_info,
    contains_profanity,
    contains_spam,
    content_score,
    filter_profanity,
    get_violations,
    is_appropriate,
    is_name_appropriate,
    validate_name,
)
from .photo_checks import (
    FaceConsistencyCheck,
    ImageQualityCheck,
    ProfessionalPhotoCheck,
    StockPhotoCheck,
    load_photo,
)
from .pipeline import check_message, check_profile_fields, screen_profile
from .profile_analyzer import FakeProfileAnalyzer, analyze_behavior, analyze_profile
from .sanitizer import sanitize, sanitize_email
from .utils import config_dict_to_objects, load_config_from_file, load_profile_from_file

__all__ = [
    # Sanitizer and encoders
    "sanitize",
    "sanitize_email",
    "encode",
    "html_encode",
    "html_attribute_encode",
    "javascript_encode",
    "url_encode",
    # Moderator
    "is_appropriate",
    "contains_profanity",
    "filter_profanity",
    "contains_spam",
    "contains_personal_info",
    "content_score",
    "get_violations",
    "validate_name",
    "is_name_appropriate",
    # Analyzer
    "FakeProfileAnalyzer",
    "analyze_profile",
    "analyze_behavior",
    "StockPhotoCheck",
    "ProfessionalPhotoCheck",
    "FaceConsistencyCheck",
    "ImageQualityCheck",
    "load_photo",
    # Pipeline
    "check_message",
    "check_profile_fields",
    "screen_profile",
    # Models
    "SanitizationLevel",
    "EncodingContext",
    "PolicyViolation",
    "NameValidationResult",
    "FakeIndicator",
    "FakeIndicatorKind",
    "FakeProfileAnalysis",
    "ProfileRecommendation",
    "BehaviorIndicator",
    "BehaviorAnalysis",
    "BehaviorCounters",
    "Photo",
    "ProfileSnapshot",
    "SanitizerConfig",
    "ModerationConfig",
    "AnalyzerConfig",
    # Configuration
    "load_config_from_file",
    "config_dict_to_objects",
    "load_profile_from_file",
    # Errors and logging
    "ContentSafetyError",
    "ConfigurationError",
    "ValidationError",
    "FileProcessingError",
    "PhotoProcessingError",
    "setup_logging",
    "setup_logging_from_config",
    "get_logger",
]

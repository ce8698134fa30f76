"""
Configuration and profile file utilities for content-safety-pipeline.
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml

from .constants import (
    CONFIG_FILE_NAMES,
    DEFAULT_MIN_BIO_SCORE,
    DEFAULT_SANITIZATION_LEVEL,
    MAX_WORKERS,
    PLUGIN_TIMEOUT_SECONDS,
    SUPPORTED_IMAGE_EXTENSIONS,
    SUPPORTED_PROFILE_EXTENSIONS,
)
from .exceptions import ConfigurationError, ValidationError
from .logging_config import get_logger
from .models import (
    AnalyzerConfig,
    BehaviorCounters,
    ModerationConfig,
    Photo,
    ProfileSnapshot,
    SanitizationLevel,
    SanitizerConfig,
)
from .photo_checks import load_photo
from .validation import (
    validate_config_value,
    validate_file_extension,
    validate_file_path,
    validate_file_size,
)

logger = get_logger(__name__)

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def load_config_from_file(filepath: str) -> Dict[str, Any]:
    """Load configuration from YAML file."""
    try:
        with open(filepath, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.error(f"Config file not found: {filepath}")
        return {}
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Error loading config file: {e}")
        return {}


def save_config_to_file(config: Dict[str, Any], filepath: str) -> None:
    """Save configuration to YAML file."""
    dir_path = os.path.dirname(filepath)
    if dir_path:
        os.makedirs(dir_path, exist_ok=True)

    with open(filepath, "w", encoding="utf-8") as f:
        yaml.dump(config, f, default_flow_style=False, indent=2)

    logger.info(f"Saved configuration to {filepath}")


def create_default_config() -> Dict[str, Any]:
    """Create default configuration dictionary."""
    return {
        "sanitizer": {
            "default_level": DEFAULT_SANITIZATION_LEVEL,
        },
        "moderation": {
            "min_bio_score": DEFAULT_MIN_BIO_SCORE,
        },
        "analyzer": {
            "max_workers": MAX_WORKERS,
            "plugin_timeout": PLUGIN_TIMEOUT_SECONDS,
        },
        "logging": {
            "level": "INFO",
            "file": None,
        },
    }


def config_dict_to_objects(
    config_dict: Dict[str, Any]
) -> Tuple[SanitizerConfig, ModerationConfig, AnalyzerConfig]:
    """Convert configuration dictionary to config objects."""
    config_dict = merge_configs(create_default_config(), config_dict or {})
    errors = validate_config(config_dict)
    if errors:
        raise ConfigurationError("Invalid configuration: " + "; ".join(errors))

    sanitizer_config = SanitizerConfig(
        default_level=config_dict["sanitizer"]["default_level"],
    )
    moderation_config = ModerationConfig(
        min_bio_score=config_dict["moderation"]["min_bio_score"],
    )
    analyzer_config = AnalyzerConfig(
        max_workers=config_dict["analyzer"]["max_workers"],
        plugin_timeout=float(config_dict["analyzer"]["plugin_timeout"]),
    )

    return sanitizer_config, moderation_config, analyzer_config


def validate_config(config_dict: Dict[str, Any]) -> List[str]:
    """Validate configuration and return list of errors."""
    errors = []

    rules = [
        (
            "sanitizer",
            "default_level",
            str,
            {level.value for level in SanitizationLevel},
        ),
        ("moderation", "min_bio_score", int, None),
        ("analyzer", "max_workers", int, None),
        ("analyzer", "plugin_timeout", (int, float), None),
        ("logging", "level", str, LOG_LEVELS),
    ]

    for section_name, key, expected_type, allowed in rules:
        section = config_dict.get(section_name, {})
        if not isinstance(section, dict):
            errors.append(f"{section_name} must be a mapping")
            continue
        if key not in section:
            continue
        try:
            validate_config_value(
                f"{section_name}.{key}", section[key], expected_type, allowed
            )
        except ValidationError as e:
            errors.append(str(e))

    moderation = config_dict.get("moderation", {})
    if isinstance(moderation, dict):
        score = moderation.get("min_bio_score")
        if isinstance(score, int) and not isinstance(score, bool) and not 0 <= score <= 100:
            errors.append("moderation.min_bio_score must be between 0 and 100")

    analyzer = config_dict.get("analyzer", {})
    if isinstance(analyzer, dict):
        if isinstance(analyzer.get("max_workers"), int) and analyzer["max_workers"] < 1:
            errors.append("analyzer.max_workers must be at least 1")
        timeout = analyzer.get("plugin_timeout")
        if isinstance(timeout, (int, float)) and timeout <= 0:
            errors.append("analyzer.plugin_timeout must be positive")

    logging_section = config_dict.get("logging", {})
    if isinstance(logging_section, dict):
        for key in ("file", "format"):
            value = logging_section.get(key)
            if value is not None and not isinstance(value, str):
                errors.append(f"logging.{key} must be a string")

    return errors


def find_config_file(start_path: str = ".") -> Optional[str]:
    """Find configuration file in current directory or parent directories."""
    path = Path(start_path).resolve()
    while True:
        for config_name in CONFIG_FILE_NAMES:
            config_path = path / config_name
            if config_path.exists():
                return str(config_path)
        if path == path.parent:
            return None
        path = path.parent


def merge_configs(*configs: Dict[str, Any]) -> Dict[str, Any]:
    """Merge multiple configuration dictionaries (later configs override earlier ones)."""
    result: Dict[str, Any] = {}

    for config in configs:
        for key, value in config.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = merge_configs(result[key], value)
            else:
                result[key] = value

    return result


def resolve_config(
    config_path: Optional[str] = None,
) -> Tuple[Dict[str, Any], Optional[str]]:
    """
    Load the given configuration file, or the nearest one found from the
    working directory, merged over the defaults.

    Returns:
        The merged configuration and the path it came from (None for defaults)
    """
    if not config_path:
        config_path = find_config_file()

    config_dict = load_config_from_file(config_path) if config_path else {}
    if not isinstance(config_dict, dict):
        logger.error(f"Config file {config_path} must contain a mapping")
        config_dict = {}

    return merge_configs(create_default_config(), config_dict), config_path


def _photo_from_entry(entry: Any, base_dir: Path) -> Photo:
    if isinstance(entry, dict):
        return Photo(
            width=entry.get("width"),
            height=entry.get("height"),
            source=entry.get("source"),
        )
    if isinstance(entry, str):
        image_path = Path(entry)
        if not image_path.is_absolute():
            image_path = base_dir / image_path
        validate_file_extension(image_path, SUPPORTED_IMAGE_EXTENSIONS)
        return load_photo(validate_file_path(image_path))
    raise ValidationError(f"Unsupported photo entry: {entry!r}")


def load_profile_from_file(filepath: Union[str, Path]) -> ProfileSnapshot:
    """
    Load a profile snapshot from a YAML file.

    Photos are either ``{width, height}`` mappings or image paths, resolved
    relative to the profile file and measured with Pillow.

    Raises:
        ValidationError: If the file or one of its entries is invalid
        PhotoProcessingError: If a referenced image cannot be read
    """
    path = validate_file_path(filepath)
    validate_file_size(path)
    validate_file_extension(path, SUPPORTED_PROFILE_EXTENSIONS)

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValidationError(f"Invalid profile file {path}: {e}")

    if not isinstance(data, dict):
        raise ValidationError(f"Profile file {path} must contain a mapping")

    photos = [_photo_from_entry(entry, path.parent) for entry in data.get("photos") or []]

    behavior = None
    if isinstance(data.get("behavior"), dict):
        counters = data["behavior"]
        try:
            behavior = BehaviorCounters(
                messages_sent=int(counters.get("messages_sent", 0)),
                messages_received=int(counters.get("messages_received", 0)),
                matches_count=int(counters.get("matches_count", 0)),
                account_age_seconds=float(counters.get("account_age_seconds", 0)),
            )
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Invalid behavior counters in {path}: {e}")

    location = data.get("location")
    snapshot = ProfileSnapshot(
        photos=photos,
        bio=str(data.get("bio") or ""),
        name=str(data.get("name") or ""),
        age=data.get("age"),
        location=str(location) if location is not None else None,
        behavior=behavior,
    )
    logger.info(f"Loaded profile from {path} ({len(photos)} photos)")
    return snapshot

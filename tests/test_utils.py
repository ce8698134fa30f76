"""Tests for configuration, file validation, profile loading and logging."""

import io
import logging
from pathlib import Path

import pytest
from PIL import Image

from content_safety.exceptions import (
    ConfigurationError,
    ContentSafetyError,
    FileProcessingError,
    PhotoProcessingError,
    ValidationError,
)
from content_safety.logging_config import (
    get_logger,
    setup_logging,
    setup_logging_from_config,
)
from content_safety.models import Photo, SanitizationLevel
from content_safety.photo_checks import load_photo
from content_safety.utils import (
    config_dict_to_objects,
    create_default_config,
    find_config_file,
    load_config_from_file,
    load_profile_from_file,
    merge_configs,
    resolve_config,
    save_config_to_file,
    validate_config,
)
from content_safety.validation import (
    safe_read_file,
    validate_config_value,
    validate_file_path,
    validate_file_size,
    validate_text_content,
)


class TestConfiguration:
    """Test cases for configuration handling."""

    def test_default_config_objects(self):
        """Test conversion of the defaults."""
        sanitizer, moderation, analyzer = config_dict_to_objects(create_default_config())

        assert sanitizer.level == SanitizationLevel.STANDARD
        assert moderation.min_bio_score == 70
        assert analyzer.max_workers == 4
        assert analyzer.plugin_timeout == 5.0

    def test_partial_config_merged_over_defaults(self):
        """Test that missing keys fall back to defaults."""
        sanitizer, moderation, analyzer = config_dict_to_objects(
            {"moderation": {"min_bio_score": 50}, "sanitizer": {"default_level": "strict"}}
        )
        assert moderation.min_bio_score == 50
        assert sanitizer.level == SanitizationLevel.STRICT
        assert analyzer.max_workers == 4

    @pytest.mark.parametrize(
        "config",
        [
            {"sanitizer": {"default_level": "extreme"}},
            {"moderation": {"min_bio_score": 150}},
            {"moderation": {"min_bio_score": "high"}},
            {"analyzer": {"max_workers": 0}},
            {"analyzer": {"max_workers": True}},
            {"analyzer": {"plugin_timeout": -1}},
            {"logging": {"level": "LOUD"}},
        ],
    )
    def test_invalid_config_rejected(self, config):
        """Test that invalid values raise ConfigurationError."""
        with pytest.raises(ConfigurationError):
            config_dict_to_objects(config)

    def test_section_must_be_mapping(self):
        """Test the error for a non-mapping section."""
        assert validate_config({"analyzer": "fast"}) == ["analyzer must be a mapping"]

    def test_default_config_is_valid(self):
        """Test that the defaults pass validation."""
        assert validate_config(create_default_config()) == []

    def test_save_and_load(self, temp_dir):
        """Test writing and reading a configuration file."""
        path = str(Path(temp_dir) / "nested" / "content-safety.yml")
        save_config_to_file(create_default_config(), path)

        assert load_config_from_file(path) == create_default_config()

    def test_load_missing_or_invalid_file(self, temp_dir):
        """Test that unreadable files give an empty config."""
        assert load_config_from_file(str(Path(temp_dir) / "missing.yml")) == {}

        bad = Path(temp_dir) / "bad.yml"
        bad.write_text("key: [unclosed", encoding="utf-8")
        assert load_config_from_file(str(bad)) == {}

    def test_find_config_file_in_parent(self, temp_dir):
        """Test discovery of a config file in a parent directory."""
        config_path = Path(temp_dir) / "content-safety.yml"
        config_path.write_text("moderation:\n  min_bio_score: 60\n", encoding="utf-8")
        child = Path(temp_dir) / "a" / "b"
        child.mkdir(parents=True)

        assert find_config_file(str(child)) == str(config_path.resolve())

    def test_merge_configs_nested(self):
        """Test that later configs override nested keys only."""
        merged = merge_configs(
            {"analyzer": {"max_workers": 4, "plugin_timeout": 5.0}},
            {"analyzer": {"max_workers": 8}},
        )
        assert merged == {"analyzer": {"max_workers": 8, "plugin_timeout": 5.0}}

    def test_resolve_config_with_path(self, temp_dir):
        """Test loading an explicit config file over the defaults."""
        path = Path(temp_dir) / "custom.yml"
        path.write_text("analyzer:\n  plugin_timeout: 1.5\n", encoding="utf-8")

        config, source = resolve_config(str(path))

        assert source == str(path)
        assert config["analyzer"]["plugin_timeout"] == 1.5
        assert config["moderation"]["min_bio_score"] == 70


class TestValidation:
    """Test cases for file and value validation."""

    def test_missing_path(self, temp_dir):
        """Test that a missing path is rejected."""
        with pytest.raises(ValidationError):
            validate_file_path(Path(temp_dir) / "nope.txt")

    def test_directory_path(self, temp_dir):
        """Test that a directory is rejected."""
        with pytest.raises(ValidationError):
            validate_file_path(temp_dir)

    def test_file_too_large(self, temp_dir):
        """Test the size limit."""
        path = Path(temp_dir) / "big.txt"
        path.write_text("x" * 100, encoding="utf-8")
        with pytest.raises(ValidationError):
            validate_file_size(path, max_size=10)

    def test_safe_read_file(self, temp_dir):
        """Test reading a supported text file."""
        path = Path(temp_dir) / "message.txt"
        path.write_text("hello", encoding="utf-8")
        assert safe_read_file(path) == "hello"

    def test_safe_read_file_rejects_extension(self, temp_dir):
        """Test that unsupported extensions are rejected."""
        path = Path(temp_dir) / "program.exe"
        path.write_text("hello", encoding="utf-8")
        with pytest.raises(ValidationError):
            safe_read_file(path)

    def test_binary_content_rejected(self):
        """Test detection of binary data."""
        with pytest.raises(ValidationError):
            validate_text_content("\x00\x01\x02" * 100)

    def test_text_too_long(self):
        """Test the text length limit."""
        with pytest.raises(ValidationError):
            validate_text_content("abc", max_length=2)

    def test_config_value_types(self):
        """Test type and allowed value checks."""
        validate_config_value("a", 1, int)
        validate_config_value("b", 1.5, (int, float))
        validate_config_value("c", "x", str, {"x", "y"})

        with pytest.raises(ValidationError):
            validate_config_value("a", "1", int)
        with pytest.raises(ValidationError):
            validate_config_value("a", False, int)
        with pytest.raises(ValidationError):
            validate_config_value("c", "z", str, {"x", "y"})

    def test_error_hierarchy(self):
        """Test that errors share a common base."""
        for error in (
            ConfigurationError,
            ValidationError,
            FileProcessingError,
            PhotoProcessingError,
        ):
            assert issubclass(error, ContentSafetyError)


class TestPhotoLoading:
    """Test cases for reading photo dimensions with Pillow."""

    def test_load_photo_from_path(self, temp_dir):
        """Test reading dimensions from an image file."""
        path = Path(temp_dir) / "photo.png"
        Image.new("RGB", (64, 48), "white").save(path)

        photo = load_photo(path)

        assert photo == Photo(width=64, height=48, source=str(path))
        assert photo.pixel_count == 64 * 48

    def test_load_photo_from_bytes(self):
        """Test reading dimensions from raw bytes."""
        buffer = io.BytesIO()
        Image.new("RGB", (10, 20)).save(buffer, format="JPEG")

        photo = load_photo(buffer.getvalue())

        assert (photo.width, photo.height, photo.source) == (10, 20, None)

    def test_load_photo_invalid(self, temp_dir):
        """Test that non-images raise PhotoProcessingError."""
        path = Path(temp_dir) / "fake.jpg"
        path.write_text("not an image", encoding="utf-8")

        with pytest.raises(PhotoProcessingError):
            load_photo(path)
        with pytest.raises(PhotoProcessingError):
            load_photo(b"not an image")


class TestProfileLoading:
    """Test cases for profile snapshot files."""

    def test_load_profile(self, profile_file):
        """Test loading names, photos and behaviour counters."""
        snapshot = load_profile_from_file(profile_file)

        assert snapshot.name == "a"
        assert snapshot.bio == ""
        assert snapshot.photos == []
        assert snapshot.location is None
        assert snapshot.behavior.messages_sent == 150
        assert snapshot.behavior.account_age_seconds == 3600.0

    def test_load_profile_with_dimensions(self, genuine_profile_file):
        """Test photo dimension mappings."""
        snapshot = load_profile_from_file(genuine_profile_file)

        assert snapshot.photos == [Photo(1080, 1350), Photo(1080, 1350)]
        assert snapshot.age == 29
        assert snapshot.location == "Denver"
        assert snapshot.behavior is None

    def test_load_profile_with_image_paths(self, temp_dir):
        """Test that image paths are resolved relative to the profile file."""
        photos_dir = Path(temp_dir) / "photos"
        photos_dir.mkdir()
        Image.new("RGB", (30, 40)).save(photos_dir / "one.png")

        path = Path(temp_dir) / "profile.yaml"
        path.write_text(
            "name: Jane Doe\nphotos:\n  - photos/one.png\n", encoding="utf-8"
        )

        snapshot = load_profile_from_file(path)

        assert len(snapshot.photos) == 1
        assert (snapshot.photos[0].width, snapshot.photos[0].height) == (30, 40)

    @pytest.mark.parametrize(
        "content",
        [
            "- just\n- a list\n",
            "photos:\n  - 42\n",
            "behavior:\n  messages_sent: lots\n",
            "name: [unclosed\n",
            "photos:\n  - missing.png\n",
            "photos:\n  - notes.txt\n",
        ],
    )
    def test_invalid_profile(self, temp_dir, content):
        """Test that malformed profiles raise ValidationError."""
        (Path(temp_dir) / "notes.txt").write_text("hi", encoding="utf-8")
        path = Path(temp_dir) / "profile.yml"
        path.write_text(content, encoding="utf-8")

        with pytest.raises(ValidationError):
            load_profile_from_file(path)

    def test_profile_extension_checked(self, temp_dir):
        """Test that profile files must be YAML."""
        path = Path(temp_dir) / "profile.txt"
        path.write_text("name: Jane\n", encoding="utf-8")

        with pytest.raises(ValidationError):
            load_profile_from_file(path)


class TestLogging:
    """Test cases for logging configuration."""

    def test_get_logger_prefixes_name(self):
        """Test that loggers live under the package logger."""
        assert get_logger("worker").name == "content_safety.worker"
        assert get_logger("content_safety.sanitizer").name == "content_safety.sanitizer"

    def test_setup_logging_level(self):
        """Test the console handler level."""
        logger = setup_logging("WARNING")
        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 1

    def test_setup_logging_file(self, temp_dir):
        """Test that a log file receives debug messages."""
        log_file = Path(temp_dir) / "logs" / "safety.log"
        logger = setup_logging("INFO", str(log_file))

        get_logger("test").debug("debug message")
        for handler in logger.handlers:
            handler.flush()

        assert "debug message" in log_file.read_text(encoding="utf-8")
        for handler in logger.handlers:
            handler.close()

    def test_setup_logging_from_config(self, temp_dir):
        """Test that level, file and format come from the logging section."""
        log_file = Path(temp_dir) / "safety.log"
        config_dict = {
            "logging": {
                "level": "ERROR",
                "file": str(log_file),
                "format": "%(levelname)s|%(message)s",
            }
        }
        logger = setup_logging_from_config(config_dict)

        console_handler, file_handler = logger.handlers
        assert console_handler.level == logging.ERROR
        assert file_handler.level == logging.DEBUG

        get_logger("test").info("from config")
        file_handler.flush()
        assert "INFO|from config" in log_file.read_text(encoding="utf-8")
        file_handler.close()

    def test_verbose_overrides_configured_level(self):
        """Test that verbose mode forces debug output on the console."""
        logger = setup_logging_from_config({"logging": {"level": "ERROR"}}, verbose=True)
        assert logger.level == logging.DEBUG

    def test_setup_logging_without_section(self):
        """Test defaults when the configuration has no logging section."""
        logger = setup_logging_from_config({})
        assert logger.level == logging.INFO
        assert len(logger.handlers) == 1

    def test_repeated_setup_replaces_handlers(self, temp_dir):
        """Test that reconfiguring closes the previous handlers."""
        log_file = Path(temp_dir) / "first.log"
        first = setup_logging("INFO", str(log_file))
        old_file_handler = first.handlers[1]

        second = setup_logging("INFO")

        assert len(second.handlers) == 1
        assert old_file_handler.stream is None

    def test_non_string_logging_file_rejected(self):
        """Test validation of the logging file and format keys."""
        errors = validate_config({"logging": {"file": 3, "format": ["x"]}})
        assert "logging.file must be a string" in errors
        assert "logging.format must be a string" in errors

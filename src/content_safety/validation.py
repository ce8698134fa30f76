"""
Input validation utilities for content-safety-pipeline.

These guard file input to the command line tools. The pipeline functions
themselves never raise.
"""

from pathlib import Path
from typing import Optional, Set, Union

from .constants import MAX_FILE_SIZE, MAX_TEXT_LENGTH, SUPPORTED_TEXT_EXTENSIONS
from .exceptions import FileProcessingError, ValidationError
from .logging_config import get_logger

logger = get_logger(__name__)


def validate_file_path(file_path: Union[str, Path]) -> Path:
    """
    Validate a file path.

    Args:
        file_path: Input file path

    Returns:
        Resolved Path object

    Raises:
        ValidationError: If the path does not exist or is not a file
    """
    path = Path(file_path).resolve()

    if not path.exists():
        raise ValidationError(f"Path does not exist: {file_path}")

    if not path.is_file():
        raise ValidationError(f"Path is not a file: {file_path}")

    return path


def validate_file_size(file_path: Path, max_size: int = MAX_FILE_SIZE) -> None:
    """
    Validate file size is within limits.

    Raises:
        ValidationError: If file is too large
        FileProcessingError: If the size cannot be read
    """
    try:
        size = file_path.stat().st_size
    except OSError as e:
        raise FileProcessingError(f"Cannot check file size: {e}")

    if size > max_size:
        size_mb = size / (1024 * 1024)
        max_mb = max_size / (1024 * 1024)
        raise ValidationError(f"File too large: {size_mb:.1f}MB > {max_mb:.1f}MB limit")


def validate_file_extension(
    file_path: Path, allowed_extensions: Optional[Set[str]] = None
) -> None:
    """
    Validate file has an allowed extension.

    Raises:
        ValidationError: If the extension is not allowed
    """
    if allowed_extensions is None:
        allowed_extensions = SUPPORTED_TEXT_EXTENSIONS

    extension = file_path.suffix.lower()
    if extension not in allowed_extensions:
        raise ValidationError(
            f"Unsupported file extension '{extension}'. "
            f"Allowed: {', '.join(sorted(allowed_extensions))}"
        )


def validate_text_content(content: str, max_length: int = MAX_TEXT_LENGTH) -> None:
    """
    Validate text content is reasonable.

    Raises:
        ValidationError: If content is not text or is too long
    """
    if not isinstance(content, str):
        raise ValidationError("Content must be a string")

    if len(content) > max_length:
        raise ValidationError(
            f"Text content too long: {len(content)} > {max_length} characters"
        )

    # High ratio of non-printable characters means binary data
    printable_chars = sum(1 for c in content if c.isprintable() or c.isspace())
    if len(content) > 100 and printable_chars / len(content) < 0.8:
        raise ValidationError("Content appears to be binary data")


def validate_config_value(key: str, value, expected_type, allowed_values=None):
    """
    Validate a configuration value.

    Args:
        key: Configuration key name
        value: Value to validate
        expected_type: Expected type or tuple of types
        allowed_values: Optional collection of allowed values

    Raises:
        ValidationError: If value is invalid
    """
    # bool is an int subclass; a flag is never a valid number here
    if isinstance(value, bool) and bool not in _as_tuple(expected_type):
        raise ValidationError(f"Config '{key}' must be {_type_name(expected_type)}, got bool")

    if not isinstance(value, expected_type):
        raise ValidationError(
            f"Config '{key}' must be {_type_name(expected_type)}, got {type(value).__name__}"
        )

    if allowed_values is not None and value not in allowed_values:
        raise ValidationError(
            f"Config '{key}' value '{value}' not in allowed values: {sorted(allowed_values)}"
        )


def _as_tuple(expected_type) -> tuple:
    return expected_type if isinstance(expected_type, tuple) else (expected_type,)


def _type_name(expected_type) -> str:
    return " or ".join(t.__name__ for t in _as_tuple(expected_type))


def safe_read_file(
    file_path: Union[str, Path],
    encoding: str = "utf-8",
    max_size: int = MAX_FILE_SIZE,
    allowed_extensions: Optional[Set[str]] = None,
) -> str:
    """
    Safely read a text file with validation and error handling.

    Returns:
        File content as string

    Raises:
        ValidationError: If file is invalid
        FileProcessingError: If reading fails
    """
    path = validate_file_path(file_path)
    validate_file_size(path, max_size)
    validate_file_extension(path, allowed_extensions)

    try:
        with open(path, "r", encoding=encoding, errors="replace") as f:
            content = f.read()
    except OSError as e:
        raise FileProcessingError(f"Cannot read file {path}: {e}")

    validate_text_content(content)
    logger.debug(f"Read {len(content)} characters from {path}")
    return content

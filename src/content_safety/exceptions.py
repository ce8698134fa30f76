"""
Custom exceptions for content-safety-pipeline.

The sanitizer, moderator and profile analyzer never raise; these are used by
the file, photo and configuration layers around them.
"""


class ContentSafetyError(Exception):
    """Base exception for all content-safety-pipeline errors."""

    pass


class ConfigurationError(ContentSafetyError):
    """Exception raised for configuration-related errors."""

    pass


class ValidationError(ContentSafetyError):
    """Exception raised for validation errors."""

    pass


class FileProcessingError(ContentSafetyError):
    """Exception raised during file processing."""

    pass


class PhotoProcessingError(ContentSafetyError):
    """Exception raised when a photo cannot be read."""

    pass

"""
Exceptions for storyfit.

Only contract violations surface as exceptions. Recoverable conditions
(malformed run sequences, unknown fit strategies, color resolution failures)
are handled where they occur and logged instead.
"""

from typing import Any, Dict, Optional


class StoryFitError(Exception):
    """
    Base exception for storyfit errors.

    Carries an optional causing exception, a short error code and free-form
    details for diagnostics.
    """

    def __init__(self, message: str, cause: Optional[Exception] = None,
                 error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        """
        Initialize storyfit error.

        Args:
            message: Error message
            cause: Causing exception
            error_code: Error code
            details: Additional details
        """
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.error_code = error_code
        self.details = details or {}

    def get_error_info(self) -> Dict[str, Any]:
        """
        Get error information.

        Returns:
            Dictionary with error information
        """
        return {
            'message': self.message,
            'cause': str(self.cause) if self.cause else None,
            'error_code': self.error_code,
            'details': self.details,
        }

    def __str__(self) -> str:
        """String representation of exception."""
        return f"{self.__class__.__name__}: {self.message}"


class MeasurementError(StoryFitError):
    """Raised when no usable measurement provider was supplied."""

    def __init__(self, message: str, provider: Any = None,
                 cause: Optional[Exception] = None, error_code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, cause, error_code or "measurement_unavailable", details)
        self.provider = provider

    def get_error_info(self) -> Dict[str, Any]:
        info = super().get_error_info()
        info['provider'] = type(self.provider).__name__ if self.provider is not None else None
        return info


class StyleError(StoryFitError):
    """Raised for explicitly invalid style input (e.g. a non-positive font size)."""

    def __init__(self, message: str, field_name: Optional[str] = None, value: Any = None,
                 cause: Optional[Exception] = None, error_code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, cause, error_code or "invalid_style", details)
        self.field_name = field_name
        self.value = value

    def get_error_info(self) -> Dict[str, Any]:
        info = super().get_error_info()
        info.update({
            'field_name': self.field_name,
            'value': repr(self.value),
        })
        return info


class StoryLoadError(StoryFitError):
    """
    Raised when a story document cannot be loaded.

    Used by the CLI and API when the input file is missing, is not valid JSON
    or does not have the shape of a story.
    """

    def __init__(self, message: str, source: Optional[str] = None,
                 cause: Optional[Exception] = None, error_code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, cause, error_code or "story_load_failed", details)
        self.source = source

    def get_error_info(self) -> Dict[str, Any]:
        info = super().get_error_info()
        info['source'] = self.source
        return info

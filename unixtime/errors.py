"""Exception hierarchy for timezone selection and time conversion."""
from __future__ import annotations


class ConversionError(ValueError):
    """Base exception for selection and conversion failures.

    Carries a short message that is safe to show in the UI and optional
    internal details for the logs.
    """

    def __init__(self, user_message: str, internal_details: str = "", wrapped: Exception | None = None) -> None:
        super().__init__(user_message)
        self.user_message = user_message
        self.internal_details = internal_details or user_message
        self.wrapped = wrapped

    def internal(self) -> str:
        return self.internal_details


class TimezoneSourceError(ConversionError):
    """Raised when the platform timezone database yields no identifiers."""


class IncompleteSelectionError(ConversionError):
    """Raised when a conversion runs before region (and city) are chosen."""


class UnknownTimezoneError(ConversionError):
    """Raised for a region, city or identifier missing from the catalog."""


class UnknownShortcutError(ConversionError):
    """Raised when a timezone shortcut label is not defined."""


class FormatTokenError(ConversionError):
    """Raised when a format string uses a token that cannot be parsed."""


class TextTimeParseError(ConversionError):
    """Raised when text does not match its format exactly."""


class InvalidUnixtimeError(ConversionError):
    """Raised when a typed unixtime is not an integer."""


class UnixtimeRangeError(ConversionError):
    """Raised when a unixtime falls outside the supported calendar range."""

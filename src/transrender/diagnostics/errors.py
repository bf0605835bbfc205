"""Translation exception hierarchy with structured diagnostics.

All exceptions store Diagnostic objects for rich error information.
None of them escape the public API: resolution collects them into result
tuples and falls back to visible output instead.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic


class TranslationError(Exception):
    """Base exception for all translation errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize TranslationError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class MissingTranslationError(TranslationError):
    """Message id not found in the catalog for the active locale.

    Fallback: the explicit default pattern, else the id itself.
    """


class MissingPlaceholderValueError(TranslationError):
    """Pattern references a name absent from the value map.

    Fallback: the placeholder name rendered literally.
    """


class PatternSyntaxError(TranslationError):
    """Malformed message pattern.

    Examples:
    - Unbalanced braces: ``Hello {name``
    - Plural or select without an ``other`` branch
    - Unknown placeholder type: ``{n, money}``

    Fallback: the raw pattern text, unmodified.
    """


# Name used throughout the error taxonomy for malformed patterns
FormatError = PatternSyntaxError


class NoActiveContextError(TranslationError):
    """Resolution attempted with no enclosing TranslationContext.

    Fallback: the literal id, no interpolation.
    """


class FormattingError(TranslationError):
    """Raised when locale-aware number or date formatting fails.

    The error carries a fallback_value that should be used in the output
    when the formatting fails, so output still contains usable content.

    Attributes:
        fallback_value: String to use in output when formatting fails
    """

    def __init__(self, message: str | Diagnostic, fallback_value: str) -> None:
        """Initialize FormattingError.

        Args:
            message: Error message string OR Diagnostic object
            fallback_value: Value to use in output when formatting fails
        """
        super().__init__(message)
        self.fallback_value = fallback_value

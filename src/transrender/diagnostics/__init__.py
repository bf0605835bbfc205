"""Diagnostic system for translation errors.

Provides structured error diagnostics with codes, spans and hints.
Inspired by Rust compiler diagnostics and Elm error messages.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan
from .errors import (
    FormatError,
    FormattingError,
    MissingPlaceholderValueError,
    MissingTranslationError,
    NoActiveContextError,
    PatternSyntaxError,
    TranslationError,
)
from .templates import ErrorTemplate

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "ErrorTemplate",
    "FormatError",
    "FormattingError",
    "MissingPlaceholderValueError",
    "MissingTranslationError",
    "NoActiveContextError",
    "PatternSyntaxError",
    "SourceSpan",
    "TranslationError",
]

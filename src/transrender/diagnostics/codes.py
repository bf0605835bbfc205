"""Diagnostic codes and data structures.

Defines error codes, source spans, and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "SourceSpan",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Lookup errors (missing translations, placeholder values)
        2000-2999: Formatting errors (locale-aware number/date styling)
        3000-3999: Syntax errors (malformed message patterns)
        4000-4999: Environment errors (missing translation context)
    """

    # Lookup errors (1000-1999)
    MISSING_TRANSLATION = 1001
    MISSING_PLACEHOLDER_VALUE = 1002
    INVALID_MESSAGE_ID = 1003

    # Formatting errors (2000-2999)
    FORMATTING_FAILED = 2001
    UNKNOWN_FORMAT_STYLE = 2002
    TYPE_MISMATCH = 2003

    # Syntax errors (3000-3999)
    UNEXPECTED_EOF = 3001
    UNBALANCED_BRACE = 3002
    INVALID_PLACEHOLDER = 3003
    MISSING_OTHER_BRANCH = 3004
    NESTING_DEPTH_EXCEEDED = 3005
    UNKNOWN_PLACEHOLDER_TYPE = 3006

    # Environment errors (4000-4999)
    NO_ACTIVE_CONTEXT = 4001


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Location inside a message pattern for error reporting.

    Attributes:
        start: Starting character offset (0-indexed)
        end: Ending character offset (exclusive)
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        """Validate SourceSpan invariants."""
        if self.start < 0:
            msg = f"SourceSpan.start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"SourceSpan.end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Carries enough context for a
    translator to find the broken message without a debugger.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        span: Location in the pattern (None for non-syntax errors)
        hint: Suggestion for fixing the error
        message_id: Message id being resolved when the error occurred
        locale_code: Active locale when the error occurred
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    span: SourceSpan | None = None
    hint: str | None = None
    message_id: str | None = None
    locale_code: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Example output:
            error[MISSING_PLACEHOLDER_VALUE]: Value for placeholder 'name' not provided
              --> position 6..12
              = message: Hello {name}
              = help: Pass 'name' in the values mapping

        Returns:
            Formatted error message
        """
        lines = [f"{self.severity}[{self.code.name}]: {_escape(self.message)}"]
        if self.span is not None:
            lines.append(f"  --> position {self.span.start}..{self.span.end}")
        if self.message_id is not None:
            lines.append(f"  = message: {_escape(self.message_id)}")
        if self.locale_code is not None:
            lines.append(f"  = locale: {_escape(self.locale_code)}")
        if self.hint:
            lines.append(f"  = help: {_escape(self.hint)}")
        return "\n".join(lines)


def _escape(text: str) -> str:
    """Escape control characters so diagnostics stay on their own lines."""
    return text.replace("\r", "\\r").replace("\n", "\\n").replace("\x1b", "\\x1b")

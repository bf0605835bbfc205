"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    Keeps every error case documented in one place and testable by code.
    """

    # =========================================================================
    # LOOKUP ERRORS (1000-1999)
    # =========================================================================

    @staticmethod
    def missing_translation(message_id: str, locale_code: str) -> Diagnostic:
        """Message id has no catalog entry for the active locale.

        Args:
            message_id: The message identifier that was not found
            locale_code: Locale that was searched

        Returns:
            Diagnostic for MISSING_TRANSLATION
        """
        msg = f"No translation for '{message_id}' in locale '{locale_code}'"
        return Diagnostic(
            code=DiagnosticCode.MISSING_TRANSLATION,
            message=msg,
            hint="Add the message to the catalog or pass a default pattern",
            message_id=message_id,
            locale_code=locale_code,
            severity="warning",
        )

    @staticmethod
    def missing_placeholder_value(name: str) -> Diagnostic:
        """Placeholder has no entry in the value map.

        Args:
            name: The placeholder name

        Returns:
            Diagnostic for MISSING_PLACEHOLDER_VALUE
        """
        msg = f"Value for placeholder '{name}' not provided"
        return Diagnostic(
            code=DiagnosticCode.MISSING_PLACEHOLDER_VALUE,
            message=msg,
            hint=f"Pass '{name}' in the values mapping",
        )

    @staticmethod
    def invalid_message_id() -> Diagnostic:
        """Message id is empty or not a string.

        Returns:
            Diagnostic for INVALID_MESSAGE_ID
        """
        return Diagnostic(
            code=DiagnosticCode.INVALID_MESSAGE_ID,
            message="Invalid message id: empty or non-string",
            hint="Message ids must be non-empty strings",
        )

    # =========================================================================
    # FORMATTING ERRORS (2000-2999)
    # =========================================================================

    @staticmethod
    def formatting_failed(kind: str, value: object, reason: str) -> Diagnostic:
        """Babel formatting raised for a value.

        Args:
            kind: Placeholder type (number, date, time)
            value: Value that failed to format
            reason: Underlying error text

        Returns:
            Diagnostic for FORMATTING_FAILED
        """
        msg = f"Formatting {kind} '{value}' failed: {reason}"
        return Diagnostic(code=DiagnosticCode.FORMATTING_FAILED, message=msg)

    @staticmethod
    def unknown_format_style(kind: str, style: str) -> Diagnostic:
        """Style id is neither built in nor supplied as a FormatSpec.

        Args:
            kind: Placeholder type (number, date, time)
            style: The unknown style id

        Returns:
            Diagnostic for UNKNOWN_FORMAT_STYLE
        """
        msg = f"Unknown {kind} style '{style}'; using locale default"
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_FORMAT_STYLE,
            message=msg,
            hint=f"Pass a format spec named '{style}' in formats",
            severity="warning",
        )

    @staticmethod
    def type_mismatch(name: str, kind: str, received: str) -> Diagnostic:
        """Value type cannot be formatted as the requested placeholder type.

        Args:
            name: Placeholder name
            kind: Expected kind (number, date, time)
            received: Type name actually received

        Returns:
            Diagnostic for TYPE_MISMATCH
        """
        msg = f"Placeholder '{name}' expects a {kind}, got {received}"
        return Diagnostic(code=DiagnosticCode.TYPE_MISMATCH, message=msg)

    # =========================================================================
    # SYNTAX ERRORS (3000-3999)
    # =========================================================================

    @staticmethod
    def unexpected_eof(position: int) -> Diagnostic:
        """Pattern ended inside a placeholder.

        Args:
            position: The position where the end of input was reached

        Returns:
            Diagnostic for UNEXPECTED_EOF
        """
        msg = f"Unexpected end of pattern at position {position}"
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_EOF,
            message=msg,
            span=SourceSpan(position, position),
            hint="Check for unclosed braces",
        )

    @staticmethod
    def unbalanced_brace(position: int) -> Diagnostic:
        """Closing brace without a matching opening brace.

        Args:
            position: Position of the stray brace

        Returns:
            Diagnostic for UNBALANCED_BRACE
        """
        msg = f"Unmatched '}}' at position {position}"
        return Diagnostic(
            code=DiagnosticCode.UNBALANCED_BRACE,
            message=msg,
            span=SourceSpan(position, position + 1),
            hint="Quote literal braces with apostrophes: '}'",
        )

    @staticmethod
    def invalid_placeholder(position: int, reason: str) -> Diagnostic:
        """Placeholder body could not be parsed.

        Args:
            position: Position where parsing failed
            reason: What was expected

        Returns:
            Diagnostic for INVALID_PLACEHOLDER
        """
        msg = f"Invalid placeholder at position {position}: {reason}"
        return Diagnostic(
            code=DiagnosticCode.INVALID_PLACEHOLDER,
            message=msg,
            span=SourceSpan(position, position),
        )

    @staticmethod
    def missing_other_branch(name: str, kind: str) -> Diagnostic:
        """Plural or select without the mandatory ``other`` branch.

        Args:
            name: Placeholder name
            kind: plural, selectordinal or select

        Returns:
            Diagnostic for MISSING_OTHER_BRANCH
        """
        msg = f"'{kind}' placeholder '{name}' has no 'other' branch"
        return Diagnostic(
            code=DiagnosticCode.MISSING_OTHER_BRANCH,
            message=msg,
            hint="Every plural and select form needs an other{...} branch",
        )

    @staticmethod
    def nesting_depth_exceeded(max_depth: int) -> Diagnostic:
        """Branch nesting exceeds the configured limit.

        Args:
            max_depth: The configured limit

        Returns:
            Diagnostic for NESTING_DEPTH_EXCEEDED
        """
        msg = f"Maximum nesting depth ({max_depth}) exceeded"
        return Diagnostic(code=DiagnosticCode.NESTING_DEPTH_EXCEEDED, message=msg)

    @staticmethod
    def unknown_placeholder_type(kind: str, name: str) -> Diagnostic:
        """Placeholder type keyword is not supported.

        Args:
            kind: The unknown type keyword
            name: Placeholder name

        Returns:
            Diagnostic for UNKNOWN_PLACEHOLDER_TYPE
        """
        msg = f"Unknown placeholder type '{kind}' for '{name}'"
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_PLACEHOLDER_TYPE,
            message=msg,
            hint="Supported types: number, date, time, plural, selectordinal, select",
        )

    # =========================================================================
    # ENVIRONMENT ERRORS (4000-4999)
    # =========================================================================

    @staticmethod
    def no_active_context(message_id: str) -> Diagnostic:
        """No TranslationContext encloses the call.

        Args:
            message_id: Message id that was rendered literally

        Returns:
            Diagnostic for NO_ACTIVE_CONTEXT
        """
        msg = f"No active translation context; rendering '{message_id}' literally"
        return Diagnostic(
            code=DiagnosticCode.NO_ACTIVE_CONTEXT,
            message=msg,
            hint="Wrap the call in translation_context(...) or pass context=",
            message_id=message_id,
            severity="warning",
        )

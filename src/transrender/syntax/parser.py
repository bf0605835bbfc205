"""ICU-style message pattern parser.

Parses message patterns into the tree defined in :mod:`transrender.syntax.ast`.

Grammar (informal):
    pattern      := (text | quoted | '#' | placeholder)*
    placeholder  := '{' ws name ws ( '}'
                                   | ',' ws fmt_kind ws [',' ws style ws] '}'
                                   | ',' ws branch_kind ws ',' ws [offset] branch+ '}' )
    fmt_kind     := 'number' | 'date' | 'time'
    branch_kind  := 'plural' | 'selectordinal' | 'select'
    offset       := 'offset:' digits ws
    branch       := key ws '{' pattern '}' ws

Quoting follows ICU MessageFormat apostrophe mode DOUBLE_OPTIONAL:
    ''          -> literal apostrophe
    '{...}'     -> quoted literal text (also '#' inside plural branches)
    other '     -> literal apostrophe

``#`` is a PoundElement only inside plural/selectordinal branches (including
select branches nested in them); elsewhere it is literal text.

Malformed input raises PatternSyntaxError. Callers that need fail-soft output
catch it at the formatting boundary.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass

from transrender.constants import MAX_DEPTH
from transrender.diagnostics import ErrorTemplate, PatternSyntaxError
from transrender.enums import BranchKind, FormatKind
from transrender.syntax.ast import (
    ArgumentElement,
    Branch,
    BranchElement,
    FormattedArgument,
    Pattern,
    PatternElement,
    PoundElement,
    TextElement,
)
from transrender.syntax.cursor import Cursor, ParseResult

__all__ = ["ParseContext", "PatternParser", "parse_pattern"]

# Characters that end a placeholder name, key or keyword
_SYNTAX_CHARS: frozenset[str] = frozenset("{},#' \t\n\r")

_FORMAT_KINDS: dict[str, FormatKind] = {kind.value: kind for kind in FormatKind}
_BRANCH_KINDS: dict[str, BranchKind] = {kind.value: kind for kind in BranchKind}

_OFFSET_PREFIX = "offset:"


def _is_name_char(ch: str) -> bool:
    return ch not in _SYNTAX_CHARS


def _is_style_char(ch: str) -> bool:
    return ch not in "{}"


@dataclass(slots=True)
class ParseContext:
    """Explicit context for parsing operations.

    Attributes:
        max_nesting_depth: Maximum allowed nesting of branch sub-patterns
        current_depth: Current nesting depth (0 = top level)
        in_plural: True inside a plural/selectordinal branch ('#' is special)
    """

    max_nesting_depth: int = MAX_DEPTH
    current_depth: int = 0
    in_plural: bool = False

    def enter_branch(self, *, plural: bool) -> "ParseContext":
        """Create context for a branch sub-pattern one level deeper."""
        if self.current_depth + 1 > self.max_nesting_depth:
            raise PatternSyntaxError(ErrorTemplate.nesting_depth_exceeded(self.max_nesting_depth))
        return ParseContext(
            max_nesting_depth=self.max_nesting_depth,
            current_depth=self.current_depth + 1,
            in_plural=plural or self.in_plural,
        )


class PatternParser:
    """Recursive-descent parser for ICU-style message patterns.

    Stateless apart from configuration; safe to share between threads.

    Example:
        >>> parser = PatternParser()
        >>> parser.parse("Hello {name}").elements
        (TextElement(value='Hello '), ArgumentElement(name='name'))
    """

    __slots__ = ("_max_nesting_depth",)

    def __init__(self, *, max_nesting_depth: int = MAX_DEPTH) -> None:
        """Initialize parser.

        Args:
            max_nesting_depth: Maximum branch nesting (keyword-only)
        """
        self._max_nesting_depth = max_nesting_depth

    @property
    def max_nesting_depth(self) -> int:
        """Maximum allowed branch nesting depth."""
        return self._max_nesting_depth

    def parse(self, source: str) -> Pattern:
        """Parse a complete message pattern.

        Args:
            source: Pattern text

        Returns:
            Parsed Pattern

        Raises:
            PatternSyntaxError: If the pattern is malformed
        """
        context = ParseContext(max_nesting_depth=self._max_nesting_depth)
        result = self._parse_pattern(Cursor(source, 0), context, nested=False)
        return result.value

    # ------------------------------------------------------------------
    # Pattern body
    # ------------------------------------------------------------------

    def _parse_pattern(
        self, cursor: Cursor, context: ParseContext, *, nested: bool
    ) -> ParseResult[Pattern]:
        """Parse literal text and placeholders up to EOF or a closing brace.

        A nested pattern stops AT its closing brace (the caller consumes it).
        """
        elements: list[PatternElement] = []
        text: list[str] = []

        def flush_text() -> None:
            if text:
                elements.append(TextElement("".join(text)))
                text.clear()

        while not cursor.is_eof:
            ch = cursor.current
            if ch == "}":
                if nested:
                    break
                raise PatternSyntaxError(ErrorTemplate.unbalanced_brace(cursor.pos))
            if ch == "{":
                flush_text()
                placeholder = self._parse_placeholder(cursor, context)
                elements.append(placeholder.value)
                cursor = placeholder.cursor
            elif ch == "#" and context.in_plural:
                flush_text()
                elements.append(PoundElement())
                cursor = cursor.advance()
            elif ch == "'":
                quoted = self._parse_apostrophe(cursor, context)
                text.append(quoted.value)
                cursor = quoted.cursor
            else:
                text.append(ch)
                cursor = cursor.advance()

        if nested and cursor.is_eof:
            raise PatternSyntaxError(ErrorTemplate.unexpected_eof(cursor.pos))

        flush_text()
        return ParseResult(Pattern(tuple(elements)), cursor)

    def _parse_apostrophe(self, cursor: Cursor, context: ParseContext) -> ParseResult[str]:
        """Parse an apostrophe: escaped quote, quoted literal or plain text."""
        nxt = cursor.peek(1)
        if nxt == "'":
            return ParseResult("'", cursor.advance(2))
        if nxt is None or not (nxt in "{}" or (nxt == "#" and context.in_plural)):
            return ParseResult("'", cursor.advance())

        # Quoted literal: runs to the next lone apostrophe (or end of input)
        cursor = cursor.advance()
        chars: list[str] = []
        while not cursor.is_eof:
            if cursor.current == "'":
                if cursor.peek(1) == "'":
                    chars.append("'")
                    cursor = cursor.advance(2)
                    continue
                cursor = cursor.advance()
                break
            chars.append(cursor.current)
            cursor = cursor.advance()
        return ParseResult("".join(chars), cursor)

    # ------------------------------------------------------------------
    # Placeholders
    # ------------------------------------------------------------------

    def _parse_placeholder(
        self, cursor: Cursor, context: ParseContext
    ) -> ParseResult[PatternElement]:
        """Parse ``{...}`` starting at the opening brace."""
        start = cursor.pos
        cursor = cursor.advance().skip_whitespace()

        name = cursor.take_while(_is_name_char)
        if not name.value:
            raise PatternSyntaxError(
                ErrorTemplate.invalid_placeholder(cursor.pos, "expected placeholder name")
            )
        cursor = self._require_more(name.cursor.skip_whitespace())

        if (closed := cursor.expect("}")) is not None:
            return ParseResult(ArgumentElement(name.value), closed)

        cursor = self._expect(cursor, ",", "expected ',' or '}' after name")
        cursor = self._require_more(cursor.skip_whitespace())
        keyword = cursor.take_while(_is_name_char)
        cursor = self._require_more(keyword.cursor.skip_whitespace())

        if keyword.value in _FORMAT_KINDS:
            return self._parse_formatted(name.value, _FORMAT_KINDS[keyword.value], cursor)
        if keyword.value in _BRANCH_KINDS:
            return self._parse_branching(
                name.value, _BRANCH_KINDS[keyword.value], cursor, context
            )
        if not keyword.value:
            raise PatternSyntaxError(
                ErrorTemplate.invalid_placeholder(start, "expected placeholder type")
            )
        raise PatternSyntaxError(ErrorTemplate.unknown_placeholder_type(keyword.value, name.value))

    def _parse_formatted(
        self, name: str, kind: FormatKind, cursor: Cursor
    ) -> ParseResult[PatternElement]:
        """Parse the tail of ``{name, number|date|time[, style]}``."""
        if (closed := cursor.expect("}")) is not None:
            return ParseResult(FormattedArgument(name, kind), closed)

        cursor = self._expect(cursor, ",", "expected ',' or '}' after type")
        style = cursor.take_while(_is_style_char)
        cursor = self._require_more(style.cursor)
        cursor = self._expect(cursor, "}", "style may not contain '{'")
        return ParseResult(FormattedArgument(name, kind, style.value.strip() or None), cursor)

    def _parse_branching(
        self, name: str, kind: BranchKind, cursor: Cursor, context: ParseContext
    ) -> ParseResult[PatternElement]:
        """Parse the tail of a plural, selectordinal or select placeholder."""
        cursor = self._expect(cursor, ",", f"expected ',' after '{kind}'")
        cursor = self._require_more(cursor.skip_whitespace())

        offset = 0
        if kind is not BranchKind.SELECT and cursor.slice_to(
            cursor.pos + len(_OFFSET_PREFIX)
        ) == _OFFSET_PREFIX:
            cursor = cursor.advance(len(_OFFSET_PREFIX)).skip_whitespace()
            digits = cursor.take_while(str.isdigit)
            if not digits.value:
                raise PatternSyntaxError(
                    ErrorTemplate.invalid_placeholder(cursor.pos, "expected offset value")
                )
            offset = int(digits.value)
            cursor = self._require_more(digits.cursor.skip_whitespace())

        branch_context = context.enter_branch(plural=kind is not BranchKind.SELECT)
        branches: list[Branch] = []
        seen: set[str] = set()
        while (closed := cursor.expect("}")) is None:
            key = cursor.take_while(_is_name_char)
            if not key.value:
                raise PatternSyntaxError(
                    ErrorTemplate.invalid_placeholder(cursor.pos, "expected branch key")
                )
            cursor = self._require_more(key.cursor.skip_whitespace())
            cursor = self._expect(cursor, "{", f"expected '{{' after key '{key.value}'")
            body = self._parse_pattern(cursor, branch_context, nested=True)
            cursor = self._require_more(body.cursor.advance().skip_whitespace())
            # First definition wins for duplicate keys
            if key.value not in seen:
                seen.add(key.value)
                branches.append(Branch(key.value, body.value))

        if "other" not in seen:
            raise PatternSyntaxError(ErrorTemplate.missing_other_branch(name, kind))
        return ParseResult(BranchElement(name, kind, tuple(branches), offset), closed)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _require_more(cursor: Cursor) -> Cursor:
        """Raise if the cursor reached the end inside a placeholder."""
        if cursor.is_eof:
            raise PatternSyntaxError(ErrorTemplate.unexpected_eof(cursor.pos))
        return cursor

    @staticmethod
    def _expect(cursor: Cursor, char: str, reason: str) -> Cursor:
        """Consume a required character and following whitespace."""
        advanced = cursor.expect(char)
        if advanced is None:
            raise PatternSyntaxError(ErrorTemplate.invalid_placeholder(cursor.pos, reason))
        return advanced.skip_whitespace()


_DEFAULT_PARSER = PatternParser()


def parse_pattern(source: str) -> Pattern:
    """Parse a message pattern with default limits.

    Example:
        >>> parse_pattern("{count, plural, one{# item} other{# items}}").elements[0].kind
        <BranchKind.PLURAL: 'plural'>

    Raises:
        PatternSyntaxError: If the pattern is malformed
    """
    return _DEFAULT_PARSER.parse(source)

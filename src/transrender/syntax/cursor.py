"""Immutable cursor infrastructure for message pattern parsing.

Implements the immutable cursor pattern: every advance() returns a NEW
cursor, so a parser loop that forgets to reassign cannot spin forever.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Callable
from dataclasses import dataclass

from transrender.diagnostics import ErrorTemplate

__all__ = ["Cursor", "ParseResult"]

# Whitespace accepted around placeholder syntax (ICU Pattern_White_Space subset)
_WHITESPACE: frozenset[str] = frozenset(" \t\n\r")


@dataclass(frozen=True, slots=True)
class Cursor:
    """Immutable source position tracker.

    Example:
        >>> cursor = Cursor("{name}", 0)
        >>> cursor.current
        '{'
        >>> cursor.advance().current
        'n'
        >>> cursor.current  # Original unchanged
        '{'
    """

    source: str
    pos: int

    @property
    def is_eof(self) -> bool:
        """Check if at end of input."""
        return self.pos >= len(self.source)

    @property
    def current(self) -> str:
        """Get current character.

        Raises:
            EOFError: If at end of input
        """
        if self.is_eof:
            diagnostic = ErrorTemplate.unexpected_eof(self.pos)
            raise EOFError(diagnostic.message)
        return self.source[self.pos]

    def peek(self, offset: int = 0) -> str | None:
        """Peek at character with offset without advancing.

        Returns:
            Character at position + offset, or None if beyond EOF
        """
        target_pos = self.pos + offset
        if target_pos >= len(self.source):
            return None
        return self.source[target_pos]

    def advance(self, count: int = 1) -> "Cursor":
        """Return new cursor advanced by count positions."""
        new_pos = min(self.pos + count, len(self.source))
        return Cursor(self.source, new_pos)

    def slice_to(self, end_pos: int) -> str:
        """Extract source slice from current position to end_pos."""
        return self.source[self.pos : end_pos]

    def expect(self, char: str) -> "Cursor | None":
        """Consume character if it matches expected, return None otherwise."""
        if not self.is_eof and self.current == char:
            return self.advance()
        return None

    def skip_whitespace(self) -> "Cursor":
        """Skip spaces, tabs and line breaks.

        Example:
            >>> Cursor("  \\n count", 0).skip_whitespace().pos
            4
        """
        c = self
        while not c.is_eof and c.current in _WHITESPACE:
            c = c.advance()
        return c

    def take_while(self, predicate: Callable[[str], bool]) -> "ParseResult[str]":
        """Consume characters while predicate holds.

        Returns:
            ParseResult with the consumed text and the cursor after it

        Example:
            >>> result = Cursor("count, plural", 0).take_while(str.isalnum)
            >>> result.value
            'count'
            >>> result.cursor.current
            ','
        """
        c = self
        while not c.is_eof and predicate(c.current):
            c = c.advance()
        return ParseResult(self.slice_to(c.pos), c)


@dataclass(frozen=True, slots=True)
class ParseResult[T]:
    """Parser result containing parsed value and new cursor position.

    Example:
        >>> cursor = Cursor("hello", 0)
        >>> result = ParseResult('h', cursor.advance())
        >>> result.value
        'h'
        >>> result.cursor.pos
        1
    """

    value: T
    cursor: Cursor

"""Core value types for the translation runtime.

Defines the fundamental types flowing between formatting and rendering:
    - Primitive: Values the formatter stringifies itself
    - Text / Fragment: Resolved tokens, the universal intermediate result
    - ResolvedToken: Union of the two token kinds

Anything that is not a Primitive is an opaque fragment: it is placed in the
token sequence untouched and never parsed as a pattern.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal

from transrender.constants import DEFAULT_FRAGMENT_TEXT

__all__ = [
    "Fragment",
    "FragmentStringifier",
    "Primitive",
    "ResolvedToken",
    "Text",
    "TranslationValue",
    "ValueMap",
    "default_fragment_stringifier",
    "flatten_tokens",
    "format_primitive",
    "is_primitive",
]

type Primitive = str | int | float | Decimal | bool | date | datetime | time | None

# Placeholder values: primitives or opaque renderable fragments
type TranslationValue = object

type ValueMap = Mapping[str, TranslationValue]

type FragmentStringifier = Callable[[object], str]

_PRIMITIVE_TYPES: tuple[type, ...] = (str, int, float, Decimal, bool, date, datetime, time)


@dataclass(frozen=True, slots=True)
class Text:
    """Literal or formatted text."""

    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Fragment:
    """Opaque caller-supplied value at a fixed position in the token sequence.

    Attributes:
        value: The fragment, passed through untouched
        position: Index of this token in the sequence it belongs to
    """

    value: object
    position: int


type ResolvedToken = Text | Fragment


def is_primitive(value: object) -> bool:
    """Check whether a placeholder value is formatted as text.

    Example:
        >>> is_primitive(42), is_primitive(None), is_primitive(object())
        (True, True, False)
    """
    return value is None or isinstance(value, _PRIMITIVE_TYPES)


def format_primitive(value: Primitive) -> str:
    """Stringify a primitive for plain ``{name}`` substitution.

    - str: returned as-is
    - bool: "true"/"false" (checked before int, bool subclasses int)
    - None: empty string
    - everything else: str()
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    return str(value)


def default_fragment_stringifier(value: object) -> str:  # noqa: ARG001
    """Render any fragment as the generic placeholder text."""
    return DEFAULT_FRAGMENT_TEXT


def flatten_tokens(
    tokens: Iterable[ResolvedToken],
    stringifier: FragmentStringifier = default_fragment_stringifier,
) -> str:
    """Join a token sequence into a plain string.

    Example:
        >>> flatten_tokens([Text("Hello "), Fragment(object(), 1)])
        'Hello [object]'
    """
    parts: list[str] = []
    for token in tokens:
        match token:
            case Text(value=value):
                parts.append(value)
            case Fragment(value=value):
                parts.append(stringifier(value))
    return "".join(parts)

"""Message formatter - expands a pattern and values into resolved tokens.

Walks the cached parse tree of a pattern, substituting placeholder values,
selecting plural/select branches and applying locale-aware number and date
formatting through Babel.

Error contract:
    - Returns (tokens, errors) tuples
    - Never raises: missing values, bad styles and malformed patterns all
      degrade to visible output and a collected error
    - A malformed pattern yields its raw text as a single Text token

Python 3.13+. Depends on Babel (via LocaleContext and plural_rules).
"""

import logging
import math
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from functools import partial

from transrender.constants import (
    BUILTIN_DATE_STYLES,
    FALLBACK_MISSING_PLACEHOLDER,
)
from transrender.diagnostics import (
    ErrorTemplate,
    FormattingError,
    MissingPlaceholderValueError,
    PatternSyntaxError,
    TranslationError,
)
from transrender.enums import BranchKind, FormatKind
from transrender.runtime.cache import PatternCache
from transrender.runtime.format_spec import FormatSpec, FormatSpecInput, coerce_format_spec
from transrender.runtime.locale_context import LocaleContext
from transrender.runtime.plural_rules import select_plural_category
from transrender.runtime.value_types import (
    Fragment,
    ResolvedToken,
    Text,
    ValueMap,
    format_primitive,
    is_primitive,
)
from transrender.syntax import (
    ArgumentElement,
    Branch,
    BranchElement,
    FormattedArgument,
    Pattern,
    PoundElement,
    TextElement,
)

__all__ = ["FormatResult", "MessageFormatter", "default_formatter", "format_message"]

logger = logging.getLogger(__name__)

type FormatResult = tuple[tuple[ResolvedToken, ...], tuple[TranslationError, ...]]

type _Number = int | float | Decimal
type _Temporal = date | datetime | time

_DEFAULT_DATE_STYLE = "medium"


class _TokenBuilder:
    """Accumulates tokens, merging adjacent text."""

    __slots__ = ("_tokens",)

    def __init__(self) -> None:
        self._tokens: list[ResolvedToken] = []

    def text(self, value: str) -> None:
        if not value:
            return
        if self._tokens and isinstance(self._tokens[-1], Text):
            self._tokens[-1] = Text(self._tokens[-1].value + value)
        else:
            self._tokens.append(Text(value))

    def fragment(self, value: object) -> None:
        self._tokens.append(Fragment(value, len(self._tokens)))

    def build(self) -> tuple[ResolvedToken, ...]:
        return tuple(self._tokens)


@dataclass(slots=True)
class _FormatState:
    """Per-call formatting state, passed explicitly down the walk.

    Attributes:
        values: Placeholder values
        locale: Locale code used for plural rules
        locale_context: Babel-backed formatter for the locale
        format_specs: Raw specs by style id (coerced lazily)
        errors: Collected errors
        pound_stack: Offset-adjusted numbers of enclosing plural branches;
            None when the plural value was missing
    """

    values: ValueMap
    locale: str
    locale_context: LocaleContext
    format_specs: Mapping[str, FormatSpecInput]
    errors: list[TranslationError] = field(default_factory=list)
    pound_stack: list[tuple[str, _Number | None]] = field(default_factory=list)
    _coerced: dict[str, FormatSpec | None] = field(default_factory=dict)

    def spec_for(self, style: str | None, kind: FormatKind) -> FormatSpec | None:
        """Look up and validate the FormatSpec named style, if supplied."""
        if style is None or style not in self.format_specs:
            return None
        if style not in self._coerced:
            try:
                self._coerced[style] = coerce_format_spec(self.format_specs[style])
            except (ValueError, TypeError) as e:
                logger.warning("Invalid format spec '%s': %s", style, e)
                self.errors.append(
                    FormattingError(
                        ErrorTemplate.formatting_failed(kind.value, style, str(e)),
                        fallback_value="",
                    )
                )
                self._coerced[style] = None
        return self._coerced[style]


def _to_number(value: object) -> _Number | None:
    """Coerce a placeholder value to a finite number, or None.

    Examples:
        >>> _to_number(3), _to_number("2.5"), _to_number("two"), _to_number(True)
        (3, Decimal('2.5'), None, None)
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    if isinstance(value, str):
        try:
            number = Decimal(value.strip())
        except InvalidOperation:
            return None
        return number if number.is_finite() else None
    return None


def _to_temporal(value: object, kind: FormatKind) -> _Temporal | None:
    """Coerce a placeholder value to a date/time object for the given kind."""
    if isinstance(value, str):
        parsers = (
            (time.fromisoformat, datetime.fromisoformat)
            if kind is FormatKind.TIME
            else (datetime.fromisoformat,)
        )
        for parse in parsers:
            try:
                return parse(value)
            except ValueError:
                continue
        return None
    if isinstance(value, datetime):
        return value
    if kind is FormatKind.DATE and isinstance(value, date):
        return value
    if kind is FormatKind.TIME and isinstance(value, time):
        return value
    return None


def _matches_exact(branch: Branch, number: _Number) -> bool:
    try:
        return Decimal(branch.key[1:]) == Decimal(str(number))
    except InvalidOperation:
        return False


class MessageFormatter:
    """Formats message patterns into resolved token sequences.

    Example:
        >>> formatter = MessageFormatter()
        >>> tokens, errors = formatter.format("Hello {name}", {"name": "Dave"})
        >>> tokens
        (Text(value='Hello Dave'),)

    Thread Safety:
        The formatter holds no per-call state; the shared PatternCache is
        protected by an RLock. Safe to share across threads.
    """

    __slots__ = ("_cache",)

    def __init__(self, *, cache: PatternCache | None = None) -> None:
        """Initialize formatter.

        Args:
            cache: Parsed pattern cache (keyword-only, default: private cache)
        """
        self._cache = cache if cache is not None else PatternCache()

    @property
    def cache(self) -> PatternCache:
        """Parsed pattern cache used by this formatter."""
        return self._cache

    def format(
        self,
        pattern: str | Pattern,
        values: ValueMap | None = None,
        locale: str = "en",
        format_specs: Mapping[str, FormatSpecInput] | None = None,
    ) -> FormatResult:
        """Expand a pattern with values into tokens, collecting errors.

        Args:
            pattern: Raw pattern text or an already parsed Pattern
            values: Placeholder values (default: none)
            locale: Locale code for plural rules and formatting
            format_specs: Named formatting options referenced by style id

        Returns:
            Tuple of (tokens, errors)
            - tokens: Text and Fragment tokens, adjacent text merged
            - errors: Errors encountered (immutable)
        """
        if isinstance(pattern, str):
            try:
                parsed = self._cache.parse(pattern)
            except PatternSyntaxError as e:
                logger.warning("Malformed message pattern %r: %s", pattern, e)
                tokens: tuple[ResolvedToken, ...] = (Text(pattern),) if pattern else ()
                return (tokens, (e,))
        else:
            parsed = pattern

        state = _FormatState(
            values=values or {},
            locale=locale,
            locale_context=LocaleContext.create(locale),
            format_specs=format_specs or {},
        )
        builder = _TokenBuilder()
        self._format_pattern(parsed, state, builder)
        return (builder.build(), tuple(state.errors))

    def _format_pattern(
        self, pattern: Pattern, state: _FormatState, builder: _TokenBuilder
    ) -> None:
        """Format pattern by walking elements."""
        for element in pattern.elements:
            match element:
                case TextElement(value=value):
                    builder.text(value)
                case ArgumentElement(name=name):
                    self._format_argument(name, state, builder)
                case FormattedArgument():
                    self._format_formatted(element, state, builder)
                case PoundElement():
                    self._format_pound(state, builder)
                case BranchElement():
                    branch = self._select_branch(element, state)
                    self._format_pattern(branch.value, state, builder)
                    if element.kind is not BranchKind.SELECT:
                        state.pound_stack.pop()

    def _missing_value(self, name: str, state: _FormatState) -> str:
        logger.debug("Placeholder '%s' has no value", name)
        state.errors.append(
            MissingPlaceholderValueError(ErrorTemplate.missing_placeholder_value(name))
        )
        return FALLBACK_MISSING_PLACEHOLDER.format(name=name)

    def _format_argument(self, name: str, state: _FormatState, builder: _TokenBuilder) -> None:
        if name not in state.values:
            builder.text(self._missing_value(name, state))
            return
        value = state.values[name]
        if is_primitive(value):
            builder.text(format_primitive(value))  # type: ignore[arg-type]
        else:
            builder.fragment(value)

    def _format_formatted(
        self, element: FormattedArgument, state: _FormatState, builder: _TokenBuilder
    ) -> None:
        name = element.name
        if name not in state.values:
            builder.text(self._missing_value(name, state))
            return
        value = state.values[name]
        if not is_primitive(value):
            # Fragments pass through untouched even where a number or date was expected
            state.errors.append(
                FormattingError(
                    ErrorTemplate.type_mismatch(name, element.kind.value, type(value).__name__),
                    fallback_value="",
                )
            )
            builder.fragment(value)
            return

        if element.kind is FormatKind.NUMBER:
            builder.text(self._format_number(name, value, element.style, state))
        else:
            builder.text(self._format_temporal(name, value, element.kind, element.style, state))

    def _format_pound(self, state: _FormatState, builder: _TokenBuilder) -> None:
        if not state.pound_stack:
            builder.text("#")
            return
        name, number = state.pound_stack[-1]
        if number is None:
            builder.text(FALLBACK_MISSING_PLACEHOLDER.format(name=name))
            return
        ctx = state.locale_context
        builder.text(
            self._safe_format(state, "number", number, lambda: ctx.format_number(number))
        )

    # ------------------------------------------------------------------
    # Branch selection
    # ------------------------------------------------------------------

    def _select_branch(self, element: BranchElement, state: _FormatState) -> Branch:
        """Pick the branch for a plural, selectordinal or select placeholder.

        Matching priority:
            1. select: exact string match
            1. plural: exact ``=N`` match on the raw value
            2. plural: CLDR category of (value - offset)
            3. ``other``

        Plural kinds push the offset-adjusted number for ``#``; the caller
        pops it once the branch is formatted.
        """
        other = element.find("other")
        if other is None:  # pragma: no cover - the parser rejects such patterns
            other = element.branches[-1]

        if element.name not in state.values:
            self._missing_value(element.name, state)
            if element.kind is not BranchKind.SELECT:
                state.pound_stack.append((element.name, None))
            return other

        value = state.values[element.name]

        if element.kind is BranchKind.SELECT:
            if not is_primitive(value):
                return other
            key = format_primitive(value)  # type: ignore[arg-type]
            branch = element.find(key)
            return branch if branch is not None and not branch.is_exact else other

        number = _to_number(value)
        if number is None:
            logger.debug("Non-numeric plural value for '%s': %r", element.name, value)
            state.errors.append(
                FormattingError(
                    ErrorTemplate.type_mismatch(
                        element.name, element.kind.value, type(value).__name__
                    ),
                    fallback_value=str(value),
                )
            )
            state.pound_stack.append((element.name, None))
            return other

        adjusted = number - element.offset
        state.pound_stack.append((element.name, adjusted))

        for branch in element.branches:
            if branch.is_exact and _matches_exact(branch, number):
                return branch

        category = select_plural_category(
            adjusted, state.locale, ordinal=element.kind is BranchKind.SELECTORDINAL
        )
        branch = element.find(category)
        return branch if branch is not None else other

    # ------------------------------------------------------------------
    # Numbers and dates
    # ------------------------------------------------------------------

    @staticmethod
    def _type_mismatch(name: str, kind: str, value: object, state: _FormatState) -> str:
        fallback = format_primitive(value)  # type: ignore[arg-type]
        state.errors.append(
            FormattingError(
                ErrorTemplate.type_mismatch(name, kind, type(value).__name__),
                fallback_value=fallback,
            )
        )
        return fallback

    @staticmethod
    def _unknown_style(kind: FormatKind, style: str, state: _FormatState) -> None:
        logger.warning("Unknown %s style '%s'; using locale default", kind.value, style)
        state.errors.append(
            FormattingError(
                ErrorTemplate.unknown_format_style(kind.value, style), fallback_value=""
            )
        )

    def _format_number(
        self, name: str, value: object, style: str | None, state: _FormatState
    ) -> str:
        """Format a number placeholder with a FormatSpec or a built-in style."""
        number = _to_number(value)
        if number is None:
            return self._type_mismatch(name, FormatKind.NUMBER.value, value, state)

        ctx = state.locale_context
        default = partial(ctx.format_number, number)
        spec = state.spec_for(style, FormatKind.NUMBER)

        primary: Callable[[], str] | None
        if spec is not None:
            primary = self._number_spec_call(spec, number, ctx)
        else:
            match style:
                case None:
                    primary = None
                case "integer":
                    primary = partial(ctx.format_number, number, maximum_fraction_digits=0)
                case "percent":
                    primary = partial(ctx.format_percent, number)
                case "currency" if (currency := ctx.default_currency) is not None:
                    primary = partial(ctx.format_currency, number, currency=currency)
                case _:
                    self._unknown_style(FormatKind.NUMBER, style, state)
                    primary = None

        if primary is None:
            return self._safe_format(state, "number", number, default)
        return self._safe_format(state, "number", number, primary, default)

    @staticmethod
    def _number_spec_call(
        spec: FormatSpec, number: _Number, ctx: LocaleContext
    ) -> Callable[[], str]:
        match spec.style:
            case "percent":
                return partial(
                    ctx.format_percent,
                    number,
                    minimum_fraction_digits=spec.minimum_fraction_digits,
                    maximum_fraction_digits=spec.maximum_fraction_digits,
                    pattern=spec.pattern,
                )
            case "currency":
                return partial(
                    ctx.format_currency,
                    number,
                    currency=spec.currency or "",
                    currency_display=spec.currency_display,
                    minimum_fraction_digits=spec.minimum_fraction_digits,
                    maximum_fraction_digits=spec.maximum_fraction_digits,
                    pattern=spec.pattern,
                )
            case _:
                low, high = spec.resolved_fraction_digits(0, 3)
                return partial(
                    ctx.format_number,
                    number,
                    minimum_fraction_digits=low,
                    maximum_fraction_digits=high,
                    use_grouping=spec.use_grouping,
                    pattern=spec.pattern,
                )

    def _format_temporal(
        self,
        name: str,
        value: object,
        kind: FormatKind,
        style: str | None,
        state: _FormatState,
    ) -> str:
        """Format a date or time placeholder with a FormatSpec or a built-in style."""
        temporal = _to_temporal(value, kind)
        if temporal is None:
            return self._type_mismatch(name, kind.value, value, state)

        ctx = state.locale_context
        fmt = ctx.format_time if kind is FormatKind.TIME else ctx.format_date
        default = partial(fmt, temporal)  # type: ignore[arg-type]
        spec = state.spec_for(style, kind)

        primary: Callable[[], str] | None = None
        if spec is not None:
            if spec.pattern:
                primary = partial(fmt, temporal, pattern=spec.pattern)  # type: ignore[arg-type]
            elif (
                kind is FormatKind.DATE
                and spec.date_style
                and spec.time_style
                and isinstance(temporal, datetime)
            ):
                primary = partial(
                    ctx.format_datetime,
                    temporal,
                    date_style=spec.date_style,
                    time_style=spec.time_style,
                )
            else:
                spec_style = spec.time_style if kind is FormatKind.TIME else spec.date_style
                primary = partial(
                    fmt, temporal, style=spec_style or _DEFAULT_DATE_STYLE  # type: ignore[arg-type]
                )
        elif style in BUILTIN_DATE_STYLES:
            primary = partial(fmt, temporal, style=style)  # type: ignore[arg-type]
        elif style is not None:
            self._unknown_style(kind, style, state)

        if primary is None:
            return self._safe_format(state, kind.value, temporal, default)
        return self._safe_format(state, kind.value, temporal, primary, default)

    @staticmethod
    def _safe_format(
        state: _FormatState,
        kind: str,
        value: object,
        primary: Callable[[], str],
        default: Callable[[], str] | None = None,
    ) -> str:
        """Run a formatter, falling back to the locale default, then to str(value).

        Args:
            state: Formatting state collecting errors
            kind: Placeholder type for log messages
            value: Value being formatted
            primary: Formatter for the requested style
            default: Formatter for the locale-default style (None if primary is it)
        """
        try:
            return primary()
        except FormattingError as e:
            logger.warning("Formatting %s %r failed: %s", kind, value, e)
            state.errors.append(e)
            if default is None:
                return e.fallback_value
        try:
            return default()
        except FormattingError as e:
            state.errors.append(e)
            return e.fallback_value


_DEFAULT_FORMATTER = MessageFormatter()


def format_message(
    pattern: str | Pattern,
    values: ValueMap | None = None,
    locale: str = "en",
    format_specs: Mapping[str, FormatSpecInput] | None = None,
) -> FormatResult:
    """Format a pattern with the shared default formatter.

    Example:
        >>> tokens, errors = format_message("{n, plural, one{# file} other{# files}}", {"n": 3})
        >>> tokens
        (Text(value='3 files'),)
    """
    return _DEFAULT_FORMATTER.format(pattern, values, locale, format_specs)


def default_formatter() -> MessageFormatter:
    """Shared formatter (and pattern cache) used when none is configured."""
    return _DEFAULT_FORMATTER

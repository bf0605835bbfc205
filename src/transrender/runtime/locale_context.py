"""Locale context for thread-safe, locale-scoped formatting.

This module provides locale-aware formatting without global state mutation.
Uses Babel for CLDR-compliant number, date, and currency formatting.

Architecture:
    - LocaleContext: Immutable locale configuration container
    - Formatters use Babel (thread-safe, CLDR-based)
    - No dependency on Python's locale module (avoids global state)

Error contract:
    Every format_* method either returns a string or raises FormattingError
    carrying a fallback_value. The message formatter collects the error and
    retries with the locale-default style.

Python 3.13+. Uses Babel for i18n.
"""

import logging
import re
from collections import OrderedDict
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from threading import RLock
from typing import ClassVar, Literal

from babel import Locale, UnknownLocaleError
from babel import dates as babel_dates
from babel import numbers as babel_numbers

from transrender.constants import MAX_LOCALE_CACHE_SIZE
from transrender.diagnostics import ErrorTemplate, FormattingError
from transrender.locale_utils import normalize_locale

__all__ = ["LocaleContext"]

logger = logging.getLogger(__name__)

type _Style = Literal["short", "medium", "long", "full"]

# Fraction part of a CLDR number pattern, right after the last integer digit
_FRACTION_RE = re.compile(r"(?<=0)(\.[0#]+)?(?=[^0#.,]|$)")

_NUMBER_ERRORS = (ValueError, TypeError, InvalidOperation, AttributeError, KeyError)
_DATE_ERRORS = (ValueError, TypeError, OverflowError, AttributeError, KeyError)


def _fraction_pattern(low: int, high: int) -> str:
    """Build the fraction part of a number pattern.

    Examples:
        >>> _fraction_pattern(2, 2)
        '.00'
        >>> _fraction_pattern(0, 3)
        '.###'
        >>> _fraction_pattern(0, 0)
        ''
    """
    if high == 0:
        return ""
    return "." + "0" * low + "#" * (high - low)


def _with_fraction_digits(pattern: str, low: int, high: int) -> str:
    """Replace the fraction digits of every sub-pattern of a CLDR pattern.

    Example:
        >>> _with_fraction_digits("#,##0.00\\xa0¤", 0, 0)
        '#,##0\\xa0¤'
    """
    fraction = _fraction_pattern(low, high)
    return ";".join(
        _FRACTION_RE.sub(fraction, part, count=1) for part in pattern.split(";")
    )


@dataclass(frozen=True, slots=True)
class LocaleContext:
    """Immutable locale configuration for formatting operations.

    Use LocaleContext.create() factory to construct instances with proper validation.

    Examples:
        >>> ctx = LocaleContext.create('en-US')
        >>> ctx.format_number(1234.5)
        '1,234.5'

        >>> ctx = LocaleContext.create('cs')
        >>> ctx.format_currency(1, currency='EUR')
        '1,00\\xa0€'

        >>> # Invalid locales fall back to en_US with warning logged
        >>> ctx = LocaleContext.create('invalid-locale')
        >>> ctx.is_fallback
        True

    Thread Safety:
        LocaleContext is immutable and thread-safe. Cache operations
        are protected by RLock.
    """

    _cache: ClassVar[OrderedDict[str, "LocaleContext"]] = OrderedDict()
    _cache_lock: ClassVar[RLock] = RLock()

    locale_code: str
    _babel_locale: Locale
    is_fallback: bool = False

    @classmethod
    def clear_cache(cls) -> None:
        """Clear the locale context cache."""
        with cls._cache_lock:
            cls._cache.clear()

    @classmethod
    def cache_size(cls) -> int:
        """Get current number of cached LocaleContext instances."""
        with cls._cache_lock:
            return len(cls._cache)

    @classmethod
    def create(cls, locale_code: str) -> "LocaleContext":
        """Create LocaleContext with graceful fallback for invalid locales.

        For unknown or invalid locales, logs a warning and falls back to en_US
        while preserving the original locale_code for debugging.

        Args:
            locale_code: BCP 47 locale identifier (e.g., 'en-US', 'cs', 'de-DE')

        Returns:
            Cached LocaleContext instance
        """
        cache_key = normalize_locale(locale_code)

        with cls._cache_lock:
            if cache_key in cls._cache:
                cls._cache.move_to_end(cache_key)
                return cls._cache[cache_key]

        used_fallback = False
        try:
            babel_locale = Locale.parse(cache_key)
        except UnknownLocaleError as e:
            logger.warning("Unknown locale '%s': %s. Falling back to en_US", locale_code, e)
            babel_locale = Locale.parse("en_US")
            used_fallback = True
        except (ValueError, TypeError) as e:
            logger.warning(
                "Invalid locale format '%s': %s. Falling back to en_US", locale_code, e
            )
            babel_locale = Locale.parse("en_US")
            used_fallback = True

        ctx = cls(locale_code=locale_code, _babel_locale=babel_locale, is_fallback=used_fallback)

        with cls._cache_lock:
            if cache_key in cls._cache:
                return cls._cache[cache_key]
            if len(cls._cache) >= MAX_LOCALE_CACHE_SIZE:
                cls._cache.popitem(last=False)
            cls._cache[cache_key] = ctx
            return ctx

    @property
    def babel_locale(self) -> Locale:
        """Pre-validated Babel Locale object for this context."""
        return self._babel_locale

    @property
    def default_currency(self) -> str | None:
        """Primary tender currency of the locale's territory, if it has one.

        Example:
            >>> LocaleContext.create('de-CH').default_currency
            'CHF'
        """
        territory = self._babel_locale.territory
        if not territory:
            return None
        currencies = babel_numbers.get_territory_currencies(territory, tender=True)
        return currencies[0] if currencies else None

    # ------------------------------------------------------------------
    # Numbers
    # ------------------------------------------------------------------

    def format_number(
        self,
        value: int | float | Decimal,
        *,
        minimum_fraction_digits: int = 0,
        maximum_fraction_digits: int = 3,
        use_grouping: bool = True,
        pattern: str | None = None,
    ) -> str:
        """Format number with locale-specific separators.

        Args:
            value: Number to format (int, float, or Decimal)
            minimum_fraction_digits: Minimum decimal places (default: 0)
            maximum_fraction_digits: Maximum decimal places (default: 3)
            use_grouping: Use thousands separator (default: True)
            pattern: Custom number pattern (overrides other parameters)

        Examples:
            >>> LocaleContext.create('de-DE').format_number(1234.5)
            '1.234,5'
            >>> LocaleContext.create('en-US').format_number(-1234.56, pattern="#,##0.00;(#,##0.00)")
            '(1,234.56)'
        """
        try:
            if pattern is None:
                integer_part = "#,##0" if use_grouping else "0"
                pattern = integer_part + _fraction_pattern(
                    minimum_fraction_digits, maximum_fraction_digits
                )
            return str(
                babel_numbers.format_decimal(value, format=pattern, locale=self._babel_locale)
            )
        except _NUMBER_ERRORS as e:
            raise FormattingError(
                ErrorTemplate.formatting_failed("number", value, str(e)), fallback_value=str(value)
            ) from e

    def format_percent(
        self,
        value: int | float | Decimal,
        *,
        minimum_fraction_digits: int | None = None,
        maximum_fraction_digits: int | None = None,
        pattern: str | None = None,
    ) -> str:
        """Format a ratio as a percentage (0.25 -> 25 %).

        Example:
            >>> LocaleContext.create('en-US').format_percent(0.25)
            '25%'
        """
        try:
            if pattern is None and (
                minimum_fraction_digits is not None or maximum_fraction_digits is not None
            ):
                low = minimum_fraction_digits or 0
                high = max(low, maximum_fraction_digits or 0)
                base = self._babel_locale.percent_formats[None].pattern
                pattern = _with_fraction_digits(base, low, high)
            return str(
                babel_numbers.format_percent(value, format=pattern, locale=self._babel_locale)
            )
        except _NUMBER_ERRORS as e:
            raise FormattingError(
                ErrorTemplate.formatting_failed("percent", value, str(e)), fallback_value=str(value)
            ) from e

    def format_currency(
        self,
        value: int | float | Decimal,
        *,
        currency: str,
        currency_display: Literal["symbol", "code", "name"] = "symbol",
        minimum_fraction_digits: int | None = None,
        maximum_fraction_digits: int | None = None,
        pattern: str | None = None,
    ) -> str:
        """Format currency with locale-specific rules.

        Args:
            value: Monetary amount (int, float, or Decimal)
            currency: ISO 4217 currency code (EUR, USD, JPY, ...)
            currency_display: "symbol" (default), "code" or "name"
            minimum_fraction_digits: Override the currency's decimal places
            maximum_fraction_digits: Override the currency's decimal places
            pattern: Custom currency pattern (overrides the options above)

        Examples:
            >>> LocaleContext.create('en-US').format_currency(123.45, currency='EUR')
            '€123.45'
            >>> LocaleContext.create('ja-JP').format_currency(12345, currency='JPY')
            '￥12,345'
        """
        try:
            if pattern is None and currency_display == "name":
                return str(
                    babel_numbers.format_currency(
                        value,
                        currency,
                        locale=self._babel_locale,
                        currency_digits=True,
                        format_type="name",
                    )
                )

            currency_digits = True
            if pattern is None:
                base = self._babel_locale.currency_formats["standard"].pattern
                if currency_display == "code" and "\xa4" in base:
                    # Double currency sign is the ISO code per CLDR
                    base = base.replace("\xa4", "\xa4\xa4")
                if minimum_fraction_digits is not None or maximum_fraction_digits is not None:
                    digits = babel_numbers.get_currency_precision(currency)
                    if minimum_fraction_digits is not None:
                        low = minimum_fraction_digits
                    elif maximum_fraction_digits is not None:
                        low = min(digits, maximum_fraction_digits)
                    else:
                        low = digits
                    high = max(
                        low, digits if maximum_fraction_digits is None else maximum_fraction_digits
                    )
                    base = _with_fraction_digits(base, low, high)
                    currency_digits = False
                pattern = base

            return str(
                babel_numbers.format_currency(
                    value,
                    currency,
                    format=pattern,
                    locale=self._babel_locale,
                    currency_digits=currency_digits,
                )
            )
        except (*_NUMBER_ERRORS, babel_numbers.UnknownCurrencyError) as e:
            raise FormattingError(
                ErrorTemplate.formatting_failed("currency", f"{currency} {value}", str(e)),
                fallback_value=f"{currency} {value}",
            ) from e

    # ------------------------------------------------------------------
    # Dates and times
    # ------------------------------------------------------------------

    def format_date(
        self, value: date | datetime, *, style: _Style = "medium", pattern: str | None = None
    ) -> str:
        """Format the date part of a value.

        Example:
            >>> from datetime import date
            >>> LocaleContext.create('de-DE').format_date(date(2025, 10, 27), style='short')
            '27.10.25'
        """
        try:
            return str(
                babel_dates.format_date(
                    value, format=pattern or style, locale=self._babel_locale
                )
            )
        except _DATE_ERRORS as e:
            raise FormattingError(
                ErrorTemplate.formatting_failed("date", value, str(e)),
                fallback_value=value.isoformat() if isinstance(value, date) else str(value),
            ) from e

    def format_time(
        self, value: time | datetime, *, style: _Style = "medium", pattern: str | None = None
    ) -> str:
        """Format the time part of a value.

        Example:
            >>> from datetime import time
            >>> LocaleContext.create('en-US').format_time(time(14, 30), style='short')
            '2:30\\u202fPM'
        """
        try:
            return str(
                babel_dates.format_time(
                    value, format=pattern or style, locale=self._babel_locale
                )
            )
        except _DATE_ERRORS as e:
            raise FormattingError(
                ErrorTemplate.formatting_failed("time", value, str(e)),
                fallback_value=value.isoformat() if isinstance(value, (time, date)) else str(value),
            ) from e

    def format_datetime(
        self,
        value: datetime,
        *,
        date_style: _Style = "medium",
        time_style: _Style = "medium",
    ) -> str:
        """Format date and time combined with the locale's dateTimeFormat.

        The CLDR pattern uses {0} for time and {1} for date.
        """
        date_str = self.format_date(value, style=date_style)
        time_str = self.format_time(value, style=time_style)
        datetime_pattern = (
            self._babel_locale.datetime_formats.get(date_style)
            or self._babel_locale.datetime_formats.get("medium")
            or "{1} {0}"
        )
        return str(datetime_pattern).format(time_str, date_str)

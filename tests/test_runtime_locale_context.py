"""Tests for LocaleContext - locale-aware formatting without global state.

Tests immutable locale configuration, thread-safe caching, and CLDR-compliant
formatting for numbers, percentages, currency, dates and times via Babel.
"""

from __future__ import annotations

import logging
import threading
from datetime import date, datetime, time
from decimal import Decimal

import pytest
from hypothesis import given
from hypothesis import strategies as st

from tests.helpers.text import normalize_spaces
from transrender.constants import MAX_LOCALE_CACHE_SIZE
from transrender.diagnostics import DiagnosticCode, FormattingError
from transrender.runtime.locale_context import LocaleContext

# ============================================================================
# Cache Management Tests
# ============================================================================


@pytest.mark.usefixtures("fresh_locale_cache")
class TestLocaleContextCache:
    """LocaleContext cache operations."""

    def test_cache_returns_same_instance(self) -> None:
        """Same locale returns the identical cached instance."""
        assert LocaleContext.create("en-US") is LocaleContext.create("en-US")

    def test_bcp47_and_posix_share_entry(self) -> None:
        """'en-US' and 'en_US' normalize to one cache key."""
        LocaleContext.create("en-US")
        LocaleContext.create("en_US")

        assert LocaleContext.cache_size() == 1

    def test_clear_cache(self) -> None:
        """clear_cache() empties the cache."""
        LocaleContext.create("de-DE")
        LocaleContext.clear_cache()

        assert LocaleContext.cache_size() == 0

    def test_cache_bounded(self) -> None:
        """Cache never exceeds MAX_LOCALE_CACHE_SIZE."""
        for i in range(MAX_LOCALE_CACHE_SIZE + 5):
            LocaleContext.create(f"en-{i:03d}")

        assert LocaleContext.cache_size() <= MAX_LOCALE_CACHE_SIZE

    def test_concurrent_create(self) -> None:
        """Concurrent create() calls agree on one instance."""
        results: list[LocaleContext] = []

        def worker() -> None:
            results.append(LocaleContext.create("fr-FR"))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len({id(ctx) for ctx in results}) == 1


# ============================================================================
# Fallback Tests
# ============================================================================


class TestLocaleContextFallback:
    """Unknown locales fall back to en_US with a warning."""

    @pytest.mark.usefixtures("fresh_locale_cache")
    def test_unknown_locale_falls_back(self, caplog: pytest.LogCaptureFixture) -> None:
        """Unknown locale yields an en_US context flagged as fallback."""
        with caplog.at_level(logging.WARNING):
            ctx = LocaleContext.create("xx-UNKNOWN")

        assert ctx.is_fallback
        assert ctx.locale_code == "xx-UNKNOWN"
        assert str(ctx.babel_locale) == "en_US"
        assert "Falling back to en_US" in caplog.text

    def test_malformed_locale_falls_back(self) -> None:
        """Malformed locale strings do not raise."""
        ctx = LocaleContext.create("!!not a locale!!")

        assert ctx.is_fallback

    def test_known_locale_not_fallback(self) -> None:
        """Known locales are used as-is."""
        assert not LocaleContext.create("cs").is_fallback

    def test_immutable(self) -> None:
        """LocaleContext is frozen."""
        ctx = LocaleContext.create("en-US")

        with pytest.raises(AttributeError):
            ctx.locale_code = "de"  # type: ignore[misc]


# ============================================================================
# Number Formatting
# ============================================================================


class TestFormatNumber:
    """format_number with locale separators and fraction bounds."""

    def test_en_us_grouping(self) -> None:
        """en-US uses comma grouping and dot decimals."""
        assert LocaleContext.create("en-US").format_number(1234.5) == "1,234.5"

    def test_de_de_grouping(self) -> None:
        """de-DE uses dot grouping and comma decimals."""
        assert LocaleContext.create("de-DE").format_number(1234.5) == "1.234,5"

    def test_maximum_fraction_digits_rounds(self) -> None:
        """Extra digits are rounded."""
        ctx = LocaleContext.create("en-US")

        assert ctx.format_number(1234.5678, maximum_fraction_digits=2) == "1,234.57"

    def test_minimum_fraction_digits_pads(self) -> None:
        """Missing digits are zero-padded."""
        ctx = LocaleContext.create("en-US")

        assert ctx.format_number(5, minimum_fraction_digits=2, maximum_fraction_digits=2) == "5.00"

    def test_no_grouping(self) -> None:
        """use_grouping=False drops separators."""
        assert LocaleContext.create("en-US").format_number(1234, use_grouping=False) == "1234"

    def test_custom_pattern(self) -> None:
        """An explicit CLDR pattern overrides other options."""
        ctx = LocaleContext.create("en-US")

        assert ctx.format_number(-1234.56, pattern="#,##0.00;(#,##0.00)") == "(1,234.56)"

    def test_invalid_value_raises_formatting_error(self) -> None:
        """Unformattable input raises FormattingError with a fallback."""
        ctx = LocaleContext.create("en-US")

        with pytest.raises(FormattingError) as exc_info:
            ctx.format_number("not a number")  # type: ignore[arg-type]

        assert exc_info.value.fallback_value == "not a number"
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.FORMATTING_FAILED

    @given(st.integers(min_value=-(10**12), max_value=10**12))
    def test_integers_round_trip_digits(self, n: int) -> None:
        """Formatted integers keep all their digits."""
        formatted = LocaleContext.create("en-US").format_number(n)

        assert formatted.replace(",", "") == str(n)


class TestFormatPercent:
    """format_percent."""

    def test_default(self) -> None:
        """Ratios are scaled by 100."""
        assert LocaleContext.create("en-US").format_percent(0.25) == "25%"

    def test_fraction_digits(self) -> None:
        """Fraction digits are applied to the locale pattern."""
        ctx = LocaleContext.create("en-US")

        assert ctx.format_percent(
            0.256, minimum_fraction_digits=1, maximum_fraction_digits=1
        ) == "25.6%"


class TestFormatCurrency:
    """format_currency with display modes and fraction overrides."""

    def test_symbol(self) -> None:
        """Default display is the currency symbol."""
        ctx = LocaleContext.create("en-US")

        assert ctx.format_currency(123.45, currency="EUR") == "€123.45"

    def test_currency_precision_jpy(self) -> None:
        """JPY has no fraction digits by default."""
        assert "12,345" in LocaleContext.create("en-US").format_currency(12345, currency="JPY")
        assert "." not in LocaleContext.create("en-US").format_currency(12345, currency="JPY")

    def test_czech_euro_two_digits(self) -> None:
        """cs formats EUR with comma decimals and a trailing symbol."""
        ctx = LocaleContext.create("cs")

        formatted = ctx.format_currency(1, currency="EUR", minimum_fraction_digits=2)

        assert normalize_spaces(formatted) == "1,00 €"

    def test_zero_fraction_digits(self) -> None:
        """maximum_fraction_digits=0 drops decimals even for EUR."""
        ctx = LocaleContext.create("en-US")

        assert ctx.format_currency(1234.4, currency="EUR", maximum_fraction_digits=0) == "€1,234"

    def test_code_display(self) -> None:
        """currency_display='code' shows the ISO code."""
        formatted = LocaleContext.create("en-US").format_currency(
            5, currency="EUR", currency_display="code"
        )

        assert "EUR" in formatted
        assert "€" not in formatted

    def test_name_display(self) -> None:
        """currency_display='name' spells the currency out."""
        formatted = LocaleContext.create("en-US").format_currency(
            5, currency="EUR", currency_display="name"
        )

        assert "euro" in formatted.lower()

    def test_default_currency(self) -> None:
        """Territory default currency comes from CLDR."""
        assert LocaleContext.create("de-CH").default_currency == "CHF"
        assert LocaleContext.create("en-US").default_currency == "USD"
        assert LocaleContext.create("cs").default_currency is None


# ============================================================================
# Date and Time Formatting
# ============================================================================


class TestFormatDates:
    """format_date, format_time and format_datetime."""

    def test_date_short_de(self) -> None:
        """German short date."""
        ctx = LocaleContext.create("de-DE")

        assert ctx.format_date(date(2025, 10, 27), style="short") == "27.10.25"

    def test_date_medium_en(self) -> None:
        """English medium date is the default."""
        assert LocaleContext.create("en-US").format_date(date(2025, 1, 5)) == "Jan 5, 2025"

    def test_date_pattern(self) -> None:
        """Custom CLDR date pattern."""
        ctx = LocaleContext.create("en-US")

        assert ctx.format_date(date(2025, 1, 5), pattern="yyyy-MM-dd") == "2025-01-05"

    def test_time_short_en(self) -> None:
        """English short time uses a 12-hour clock."""
        formatted = LocaleContext.create("en-US").format_time(time(14, 30), style="short")

        assert normalize_spaces(formatted) == "2:30 PM"

    def test_datetime_combines_parts(self) -> None:
        """format_datetime contains both the date and the time."""
        formatted = LocaleContext.create("en-US").format_datetime(
            datetime(2025, 1, 5, 14, 30), date_style="medium", time_style="short"
        )

        assert "Jan 5, 2025" in formatted
        assert "2:30" in formatted

    def test_invalid_date_raises_formatting_error(self) -> None:
        """Non-date input raises FormattingError."""
        with pytest.raises(FormattingError):
            LocaleContext.create("en-US").format_date(Decimal(5))  # type: ignore[arg-type]

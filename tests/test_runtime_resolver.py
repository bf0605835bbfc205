"""Tests for TranslationResolver - catalog -> defaults -> id resolution."""

from __future__ import annotations

import logging

import pytest

from tests.helpers.text import normalize_spaces
from tests.strategies import Opaque
from transrender import (
    Catalog,
    MissingPlaceholderValueError,
    MissingTranslationError,
    TranslationError,
    TranslationResolver,
)
from transrender.constants import FALLBACK_INVALID
from transrender.diagnostics import DiagnosticCode
from transrender.enums import ResolutionSource
from transrender.runtime import Fragment, MessageFormatter, Text
from transrender.runtime.cache import PatternCache


@pytest.fixture
def resolver() -> TranslationResolver:
    return TranslationResolver()


class TestResolutionOrder:
    """Catalog beats defaults beats the id."""

    def test_catalog_hit(self, resolver: TranslationResolver, cs_catalog: Catalog) -> None:
        """Catalog entry wins and records no errors."""
        result = resolver.resolve("Original", locale="cs", catalog=cs_catalog)

        assert result.translation == "Původní"
        assert result.source is ResolutionSource.CATALOG
        assert not result.is_fallback
        assert result.errors == ()

    def test_catalog_beats_defaults(
        self, resolver: TranslationResolver, cs_catalog: Catalog
    ) -> None:
        """Defaults are ignored when the catalog has the id."""
        result = resolver.resolve("ID", "Default", locale="cs", catalog=cs_catalog)

        assert result.translation == "Translation"

    def test_defaults_used(self, resolver: TranslationResolver, cs_catalog: Catalog) -> None:
        """Missing id formats the defaults pattern."""
        result = resolver.resolve(
            "msg.hello", "My name is {name}", {"name": "Dave"}, locale="en", catalog=cs_catalog
        )

        assert result.translation == "My name is Dave"
        assert result.source is ResolutionSource.DEFAULTS
        assert result.is_fallback
        assert isinstance(result.errors[0], MissingTranslationError)

    def test_id_used(self, resolver: TranslationResolver, cs_catalog: Catalog) -> None:
        """With no defaults, the id is the pattern."""
        result = resolver.resolve(
            "Hello {name}", values={"name": "Dave"}, locale="en", catalog=cs_catalog
        )

        assert result.translation == "Hello Dave"
        assert result.source is ResolutionSource.ID

    def test_empty_defaults_fall_through(
        self, resolver: TranslationResolver, cs_catalog: Catalog
    ) -> None:
        """Empty defaults are treated as absent."""
        result = resolver.resolve("unknown", "", locale="cs", catalog=cs_catalog)

        assert result.translation == "unknown"
        assert result.source is ResolutionSource.ID

    def test_unknown_locale(self, resolver: TranslationResolver, cs_catalog: Catalog) -> None:
        """Locale absent from the catalog behaves like a missing id."""
        result = resolver.resolve("Original", locale="de", catalog=cs_catalog)

        assert result.translation == "Original"
        assert result.is_fallback

    def test_translated_pattern_interpolated(
        self, resolver: TranslationResolver, cs_catalog: Catalog
    ) -> None:
        """Catalog patterns are formatted with the values."""
        result = resolver.resolve(
            "My name is {name}", values={"name": "Dave"}, locale="cs", catalog=cs_catalog
        )

        assert result.translation == "Jmenuji se Dave"

    def test_format_specs(
        self,
        resolver: TranslationResolver,
        cs_catalog: Catalog,
        currency_formats: dict[str, dict[str, object]],
    ) -> None:
        """Format specs reach the formatter."""
        result = resolver.resolve(
            "msg.currency",
            values={"value": 1},
            locale="cs",
            catalog=cs_catalog,
            format_specs=currency_formats,
        )

        assert normalize_spaces(result.translation) == "1,00 €"
        assert result.errors == ()


class TestInvalidIds:
    """Empty and non-string ids."""

    @pytest.mark.parametrize("message_id", ["", None, 42])
    def test_invalid_id(
        self, resolver: TranslationResolver, cs_catalog: Catalog, message_id: object
    ) -> None:
        """Invalid ids render the fallback marker with an error."""
        result = resolver.resolve(
            message_id,  # type: ignore[arg-type]
            locale="cs",
            catalog=cs_catalog,
        )

        assert result.translation == FALLBACK_INVALID
        assert result.tokens == (Text(FALLBACK_INVALID),)
        assert result.errors[0].diagnostic is not None
        assert result.errors[0].diagnostic.code == DiagnosticCode.INVALID_MESSAGE_ID


class TestTokensAndFlattening:
    """Fragments in the resolved output."""

    def test_tokens_keep_fragments(
        self, resolver: TranslationResolver, cs_catalog: Catalog
    ) -> None:
        """Tokens hold the fragment; translation uses the stringifier."""
        link = Opaque("link")

        result = resolver.resolve(
            "Click {link}", values={"link": link}, locale="cs", catalog=cs_catalog
        )

        assert result.tokens == (Text("Click "), Fragment(link, 1))
        assert result.translation == "Click [object]"

    def test_custom_stringifier(self, cs_catalog: Catalog) -> None:
        """fragment_stringifier controls fragment text in the translation."""
        resolver = TranslationResolver(fragment_stringifier=lambda v: f"<{v.label}>")

        result = resolver.resolve(
            "Click {link}", values={"link": Opaque("here")}, locale="en", catalog=cs_catalog
        )

        assert result.translation == "Click <here>"


class TestErrors:
    """Error collection and logging."""

    def test_missing_value_collected(
        self, resolver: TranslationResolver, cs_catalog: Catalog
    ) -> None:
        """Formatting errors follow lookup errors."""
        result = resolver.resolve("Hello {name}", locale="en", catalog=cs_catalog)

        assert [type(e) for e in result.errors] == [
            MissingTranslationError,
            MissingPlaceholderValueError,
        ]
        assert all(isinstance(e, TranslationError) for e in result.errors)

    def test_miss_logged_at_debug(
        self,
        resolver: TranslationResolver,
        cs_catalog: Catalog,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Catalog misses log at DEBUG only."""
        with caplog.at_level(logging.DEBUG, logger="transrender.runtime.resolver"):
            resolver.resolve("Welcome back", locale="cs", catalog=cs_catalog)

        records = [r for r in caplog.records if r.name == "transrender.runtime.resolver"]
        assert records
        assert all(r.levelno == logging.DEBUG for r in records)

    def test_malformed_catalog_pattern(self, cs_catalog: Catalog) -> None:
        """Malformed catalog patterns render raw with a syntax error."""
        catalog = cs_catalog.with_messages("cs", {"broken": "Ahoj {name"})

        result = TranslationResolver().resolve("broken", locale="cs", catalog=catalog)

        assert result.translation == "Ahoj {name"
        assert result.errors[0].diagnostic is not None
        assert result.errors[0].diagnostic.code == DiagnosticCode.UNEXPECTED_EOF

    def test_custom_formatter(self, cs_catalog: Catalog) -> None:
        """A resolver can use its own formatter and cache."""
        cache = PatternCache(maxsize=8)
        resolver = TranslationResolver(formatter=MessageFormatter(cache=cache))

        resolver.resolve("Original", locale="cs", catalog=cs_catalog)
        resolver.resolve("Original", locale="cs", catalog=cs_catalog)

        assert cache.hits == 1

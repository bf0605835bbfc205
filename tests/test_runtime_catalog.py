"""Tests for Catalog - immutable locale -> id -> pattern snapshots."""

from __future__ import annotations

import threading

import pytest
from hypothesis import given
from hypothesis import strategies as st

from tests.helpers.catalogs import CS_MESSAGES
from transrender import MISSING, Catalog
from transrender.runtime.catalog import Missing


class TestMissingSentinel:
    """The MISSING sentinel."""

    def test_repr_and_falsiness(self) -> None:
        """MISSING is falsy and has a short repr."""
        assert repr(MISSING) == "MISSING"
        assert not MISSING

    def test_singleton(self) -> None:
        """MISSING is the only member of Missing."""
        assert list(Missing) == [MISSING]


class TestConstruction:
    """from_mapping() shapes and validation."""

    def test_loader_shape(self, cs_catalog: Catalog) -> None:
        """``{"messages": {...}}`` entries are unwrapped."""
        assert cs_catalog.lookup("cs", "Original") == "Původní"
        assert cs_catalog.locales == ("cs", "en")

    def test_bare_shape(self) -> None:
        """Bare message mappings are accepted."""
        catalog = Catalog.from_mapping({"de": {"Welcome": "Willkommen"}})

        assert catalog.lookup("de", "Welcome") == "Willkommen"

    def test_input_copied(self) -> None:
        """Mutating the input afterwards does not change the catalog."""
        messages = {"a": "A"}
        catalog = Catalog.from_mapping({"en": messages})

        messages["a"] = "changed"
        messages["b"] = "B"

        assert catalog.lookup("en", "a") == "A"
        assert catalog.lookup("en", "b") is MISSING

    @pytest.mark.parametrize(
        "data",
        [
            {"en": {"a": 1}},
            {"en": {1: "a"}},
            {"en": "not a mapping"},
            {1: {"a": "b"}},
        ],
    )
    def test_invalid_entries(self, data: dict[object, object]) -> None:
        """Non-string ids, patterns or locales raise TypeError."""
        with pytest.raises(TypeError):
            Catalog.from_mapping(data)  # type: ignore[arg-type]

    def test_empty(self) -> None:
        """empty() has no locales."""
        catalog = Catalog.empty()

        assert len(catalog) == 0
        assert catalog.lookup("en", "anything") is MISSING

    def test_read_only(self, cs_catalog: Catalog) -> None:
        """Stored mappings cannot be mutated."""
        with pytest.raises(AttributeError):
            cs_catalog._locales = {}  # type: ignore[misc]
        with pytest.raises(TypeError):
            cs_catalog._locales["cs"]["Original"] = "x"  # type: ignore[index]


class TestLookup:
    """Exact lookups."""

    def test_hit(self, cs_catalog: Catalog) -> None:
        """Present id returns its pattern."""
        assert cs_catalog.lookup("cs", "My name is {name}") == "Jmenuji se {name}"

    def test_missing_id(self, cs_catalog: Catalog) -> None:
        """Absent id returns MISSING."""
        assert cs_catalog.lookup("cs", "unknown") is MISSING

    def test_missing_locale(self, cs_catalog: Catalog) -> None:
        """Absent locale returns MISSING."""
        assert cs_catalog.lookup("de", "Original") is MISSING

    def test_no_regional_fallback(self, cs_catalog: Catalog) -> None:
        """Locale matching is exact."""
        assert cs_catalog.lookup("cs-CZ", "Original") is MISSING

    def test_empty_string_pattern_is_a_hit(self) -> None:
        """An empty translation is still a translation."""
        catalog = Catalog.from_mapping({"en": {"blank": ""}})

        assert catalog.lookup("en", "blank") == ""

    @pytest.mark.parametrize(("locale", "message_id"), [(None, "a"), ("en", None), ([], {})])
    def test_never_raises(self, locale: object, message_id: object) -> None:
        """Garbage input yields MISSING."""
        catalog = Catalog.from_mapping({"en": {"a": "A"}})

        assert catalog.lookup(locale, message_id) is MISSING  # type: ignore[arg-type]

    @given(st.text(), st.text())
    def test_lookup_total(self, locale: str, message_id: str) -> None:
        """Any string pair yields a pattern or MISSING."""
        catalog = Catalog.from_mapping({"cs": CS_MESSAGES})

        result = catalog.lookup(locale, message_id)

        assert result is MISSING or result == CS_MESSAGES[message_id]


class TestQueries:
    """has_message, message_ids and container protocol."""

    def test_has_message(self, cs_catalog: Catalog) -> None:
        """has_message checks one locale or all of them."""
        assert cs_catalog.has_message("Original", "cs")
        assert not cs_catalog.has_message("Original", "en")
        assert cs_catalog.has_message("Original")
        assert not cs_catalog.has_message("nope")

    def test_message_ids(self, cs_catalog: Catalog) -> None:
        """message_ids lists a locale's ids."""
        assert cs_catalog.message_ids("cs") == frozenset(CS_MESSAGES)
        assert cs_catalog.message_ids("xx") == frozenset()

    def test_container_protocol(self, cs_catalog: Catalog) -> None:
        """in, iter and len operate on locales."""
        assert "cs" in cs_catalog
        assert "de" not in cs_catalog
        assert list(cs_catalog) == ["cs", "en"]
        assert len(cs_catalog) == 2

    def test_repr_counts(self, cs_catalog: Catalog) -> None:
        """repr shows message counts per locale."""
        assert repr(cs_catalog) == f"Catalog({{cs: {len(CS_MESSAGES)}, en: 0}})"


class TestWithMessages:
    """Derived snapshots."""

    def test_new_catalog_returned(self, cs_catalog: Catalog) -> None:
        """Receiver is unchanged; result has the added messages."""
        updated = cs_catalog.with_messages("cs", {"Goodbye": "Nashledanou"})

        assert updated.lookup("cs", "Goodbye") == "Nashledanou"
        assert updated.lookup("cs", "Original") == "Původní"
        assert cs_catalog.lookup("cs", "Goodbye") is MISSING

    def test_replaces_existing(self, cs_catalog: Catalog) -> None:
        """Same id in the update replaces the old pattern."""
        updated = cs_catalog.with_messages("cs", {"Original": "Originál"})

        assert updated.lookup("cs", "Original") == "Originál"

    def test_adds_locale(self) -> None:
        """Unknown locale is created."""
        updated = Catalog.empty().with_messages("fr", {"Hi": "Salut"})

        assert updated.locales == ("fr",)

    def test_concurrent_readers(self, cs_catalog: Catalog) -> None:
        """Readers see a consistent snapshot while new catalogs are derived."""
        seen: list[object] = []

        def reader() -> None:
            for _ in range(200):
                seen.append(cs_catalog.lookup("cs", "Original"))

        def writer() -> None:
            for i in range(200):
                cs_catalog.with_messages("cs", {"Original": str(i)})

        threads = [threading.Thread(target=reader) for _ in range(3)]
        threads.append(threading.Thread(target=writer))
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert set(seen) == {"Původní"}

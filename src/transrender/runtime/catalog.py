"""Immutable translation catalog: locale -> message id -> pattern.

The catalog is a snapshot built once by an external loader. It is never
mutated: swapping translations means building a new Catalog and installing
it in a new TranslationContext.

Lookups are exact. A missing locale or id yields the MISSING sentinel;
regional fallback (de-AT -> de) is the loader's job.

Input shapes accepted by Catalog.from_mapping():

    {"cs": {"messages": {"Original": "Původní"}}}   # loader output
    {"cs": {"Original": "Původní"}}                 # bare mapping

Python 3.13+. Zero external dependencies.
"""

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Final, Literal

__all__ = ["MISSING", "Catalog", "LocaleCode", "MessageId", "MessagePattern", "Missing"]

logger = logging.getLogger(__name__)

type MessageId = str
"""Opaque message identifier (e.g., 'msg.currency', 'Original')."""

type LocaleCode = str
"""Locale code exactly as the loader keyed it (e.g., 'cs', 'en-US')."""

type MessagePattern = str
"""ICU-style message pattern text."""

_MESSAGES_KEY: Final = "messages"


class Missing(Enum):
    """Sentinel type for catalog lookups that found nothing."""

    MISSING = "MISSING"

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> Literal[False]:
        return False


MISSING: Final = Missing.MISSING


def _freeze_messages(locale: LocaleCode, messages: Mapping[str, object]) -> Mapping[str, str]:
    """Validate and copy one locale's messages into a read-only mapping.

    Raises:
        TypeError: If an id or pattern is not a string
    """
    frozen: dict[str, str] = {}
    for message_id, pattern in messages.items():
        if not isinstance(message_id, str) or not isinstance(pattern, str):
            msg = (
                f"Catalog entries must map str to str; locale '{locale}' has "
                f"{type(message_id).__name__} -> {type(pattern).__name__}"
            )
            raise TypeError(msg)
        frozen[message_id] = pattern
    return MappingProxyType(frozen)


@dataclass(frozen=True, slots=True)
class Catalog:
    """Read-only mapping of locale to message id to pattern.

    Example:
        >>> catalog = Catalog.from_mapping({"cs": {"messages": {"Original": "Původní"}}})
        >>> catalog.lookup("cs", "Original")
        'Původní'
        >>> catalog.lookup("cs", "unknown")
        MISSING
        >>> catalog.lookup("en", "Original")
        MISSING

    Thread Safety:
        Immutable; safe to share across threads and async tasks.
    """

    _locales: Mapping[LocaleCode, Mapping[MessageId, MessagePattern]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @classmethod
    def from_mapping(cls, data: Mapping[LocaleCode, Mapping[str, object]]) -> "Catalog":
        """Build a catalog from loader output.

        Each locale value is either ``{"messages": {...}}`` or the message
        mapping itself. Inputs are copied; later changes to data do not
        affect the catalog.

        Raises:
            TypeError: If the structure is not str-keyed mappings of str patterns
        """
        locales: dict[LocaleCode, Mapping[MessageId, MessagePattern]] = {}
        for locale, entry in data.items():
            if not isinstance(locale, str) or not isinstance(entry, Mapping):
                msg = f"Catalog locale entries must map str to a mapping, got {locale!r}"
                raise TypeError(msg)
            nested = entry.get(_MESSAGES_KEY)
            messages = nested if isinstance(nested, Mapping) else entry
            locales[locale] = _freeze_messages(locale, messages)
        logger.debug("Built catalog for locales: %s", ", ".join(locales) or "(none)")
        return cls(MappingProxyType(locales))

    @classmethod
    def empty(cls) -> "Catalog":
        """Catalog with no locales; every lookup is MISSING."""
        return cls()

    def lookup(self, locale: LocaleCode, message_id: MessageId) -> MessagePattern | Missing:
        """Return the pattern for message_id in locale, or MISSING.

        Never raises, including for unhashable or non-string input.
        """
        if not isinstance(locale, str) or not isinstance(message_id, str):
            return MISSING
        messages = self._locales.get(locale)
        if messages is None:
            return MISSING
        return messages.get(message_id, MISSING)

    def has_message(self, message_id: MessageId, locale: LocaleCode | None = None) -> bool:
        """Check if a message exists in locale, or in any locale when locale is None."""
        if locale is not None:
            return self.lookup(locale, message_id) is not MISSING
        return any(message_id in messages for messages in self._locales.values())

    def message_ids(self, locale: LocaleCode) -> frozenset[MessageId]:
        """All message ids defined for a locale (empty for unknown locales)."""
        return frozenset(self._locales.get(locale, {}))

    def with_messages(
        self, locale: LocaleCode, messages: Mapping[MessageId, MessagePattern]
    ) -> "Catalog":
        """Return a new catalog with messages added to (or replacing those of) locale.

        The receiver is left unchanged.
        """
        merged = dict(self._locales.get(locale, {}))
        merged.update(messages)
        locales = dict(self._locales)
        locales[locale] = _freeze_messages(locale, merged)
        return Catalog(MappingProxyType(locales))

    @property
    def locales(self) -> tuple[LocaleCode, ...]:
        """Locales present in the catalog, in insertion order."""
        return tuple(self._locales)

    def __contains__(self, locale: object) -> bool:
        return locale in self._locales

    def __iter__(self) -> Iterator[LocaleCode]:
        return iter(self._locales)

    def __len__(self) -> int:
        return len(self._locales)

    def __repr__(self) -> str:
        counts = ", ".join(f"{loc}: {len(msgs)}" for loc, msgs in self._locales.items())
        return f"Catalog({{{counts}}})"

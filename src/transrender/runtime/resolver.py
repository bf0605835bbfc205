"""Translation resolver - picks the pattern for a message id and formats it.

Resolution order:
    1. Catalog entry for the active locale
    2. Explicit default pattern supplied by the caller
    3. The message id itself, used as the pattern

Mirrors the (result, errors) convention of the formatter: resolution never
raises for missing ids or values. Every fallback is visible in the output
and recorded in Resolution.errors.

Python 3.13+. Indirect dependency: Babel (via MessageFormatter).
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from transrender.constants import FALLBACK_INVALID
from transrender.diagnostics import ErrorTemplate, MissingTranslationError, TranslationError
from transrender.enums import ResolutionSource
from transrender.runtime.catalog import MISSING, Catalog, LocaleCode, MessageId
from transrender.runtime.format_spec import FormatSpecInput
from transrender.runtime.formatter import MessageFormatter, default_formatter
from transrender.runtime.value_types import (
    FragmentStringifier,
    ResolvedToken,
    Text,
    ValueMap,
    default_fragment_stringifier,
    flatten_tokens,
)

__all__ = ["Resolution", "TranslationResolver"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Resolution:
    """Outcome of resolving one message id.

    Attributes:
        translation: Flattened output; fragments rendered by the stringifier
        tokens: Resolved tokens, fragments kept in place
        source: Which pattern was formatted
        errors: Errors collected during lookup and formatting
    """

    translation: str
    tokens: tuple[ResolvedToken, ...]
    source: ResolutionSource
    errors: tuple[TranslationError, ...] = ()

    @property
    def is_fallback(self) -> bool:
        """True when the catalog had no entry for the id."""
        return self.source is not ResolutionSource.CATALOG


class TranslationResolver:
    """Resolves message ids against a catalog.

    Example:
        >>> catalog = Catalog.from_mapping({"cs": {"Original": "Původní"}})
        >>> resolver = TranslationResolver()
        >>> resolver.resolve("Original", locale="cs", catalog=catalog).translation
        'Původní'
        >>> resolver.resolve("Hi {name}", values={"name": "Dave"},
        ...                  locale="cs", catalog=catalog).translation
        'Hi Dave'

    Thread Safety:
        Stateless apart from the shared formatter; reentrant.
    """

    __slots__ = ("_formatter", "_fragment_stringifier")

    def __init__(
        self,
        *,
        formatter: MessageFormatter | None = None,
        fragment_stringifier: FragmentStringifier = default_fragment_stringifier,
    ) -> None:
        """Initialize resolver.

        Args:
            formatter: Message formatter (keyword-only, default: shared formatter)
            fragment_stringifier: Renders fragments in the flattened translation
        """
        self._formatter = formatter if formatter is not None else default_formatter()
        self._fragment_stringifier = fragment_stringifier

    def resolve(
        self,
        message_id: MessageId,
        defaults: str | None = None,
        values: ValueMap | None = None,
        *,
        locale: LocaleCode,
        catalog: Catalog,
        format_specs: Mapping[str, FormatSpecInput] | None = None,
    ) -> Resolution:
        """Resolve a message id to tokens and a flattened translation.

        Args:
            message_id: Message identifier (also the last-resort pattern)
            defaults: Pattern used when the catalog has no entry
            values: Placeholder values (default: none)
            locale: Active locale code
            catalog: Catalog snapshot to search
            format_specs: Named formatting options referenced by style id

        Returns:
            Resolution; never raises for missing ids or values
        """
        if not isinstance(message_id, str) or not message_id:
            logger.warning("Invalid message id %r", message_id)
            return Resolution(
                translation=FALLBACK_INVALID,
                tokens=(Text(FALLBACK_INVALID),),
                source=ResolutionSource.ID,
                errors=(TranslationError(ErrorTemplate.invalid_message_id()),),
            )

        errors: list[TranslationError] = []
        found = catalog.lookup(locale, message_id)
        if found is not MISSING:
            pattern = found
            source = ResolutionSource.CATALOG
        else:
            errors.append(
                MissingTranslationError(ErrorTemplate.missing_translation(message_id, locale))
            )
            if isinstance(defaults, str) and defaults:
                pattern = defaults
                source = ResolutionSource.DEFAULTS
            else:
                pattern = message_id
                source = ResolutionSource.ID
            logger.debug(
                "No translation for '%s' in '%s'; using %s", message_id, locale, source.value
            )

        tokens, format_errors = self._formatter.format(pattern, values or {}, locale, format_specs)
        errors.extend(format_errors)
        return Resolution(
            translation=flatten_tokens(tokens, self._fragment_stringifier),
            tokens=tokens,
            source=source,
            errors=tuple(errors),
        )

"""Translation context - the locale, catalog and rendering defaults in scope.

A TranslationContext is an immutable snapshot. Subtrees that need different
settings derive a child with merge(); the parent is never modified.

Scoping uses contextvars, so every thread and async task sees its own
nearest enclosing context:

    with translation_context(locale="cs", catalog=catalog):
        trans("Original")                 # resolved in "cs"
        with translation_context(default_render="span"):
            trans("Original")             # inherits "cs", wraps in <span>

There is no process-wide singleton; any number of contexts may coexist and
can also be passed explicitly with ``context=``.

Thread Safety:
    Contexts are frozen. The active-context ContextVar is per thread/task.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Generator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field, fields, replace
from types import MappingProxyType

from transrender.locale_utils import get_system_locale, match_locale
from transrender.runtime.catalog import Catalog, LocaleCode
from transrender.runtime.elements import DefaultElementFactory, ElementFactory
from transrender.runtime.format_spec import FormatSpecInput, merge_format_specs
from transrender.runtime.render import RenderOption, RenderStrategy, coerce_render_option
from transrender.runtime.resolver import TranslationResolver
from transrender.runtime.value_types import FragmentStringifier, default_fragment_stringifier

__all__ = [
    "TranslationContext",
    "get_active_context",
    "translation_context",
]

logger = logging.getLogger(__name__)

# Nearest enclosing context for the current thread/task
_active_context: ContextVar[TranslationContext | None] = ContextVar(
    "transrender_active_context", default=None
)


@dataclass(frozen=True, slots=True)
class TranslationContext:
    """Immutable configuration for resolving and rendering translations.

    Attributes:
        locale: Active locale code (must match the catalog's keys exactly)
        catalog: Catalog snapshot
        default_render: Render option applied when a call omits ``render=``;
            accepts the same forms as ``render=`` (tag name, element, callable)
        format_specs: Named formatting options, by style id
        element_factory: Produces output nodes for tag/template rendering
        fragment_stringifier: Renders fragments when flattening to a string

    Example:
        >>> catalog = Catalog.from_mapping({"cs": {"Original": "Původní"}})
        >>> ctx = TranslationContext("cs", catalog)
        >>> ctx.merge(default_render="span").default_render
        Tag(name='span')
    """

    locale: LocaleCode
    catalog: Catalog
    default_render: RenderOption | None = None
    format_specs: Mapping[str, FormatSpecInput] = field(default_factory=dict)
    element_factory: ElementFactory = field(default_factory=DefaultElementFactory)
    fragment_stringifier: FragmentStringifier = default_fragment_stringifier

    def __post_init__(self) -> None:
        if not isinstance(self.locale, str) or not self.locale:
            msg = f"locale must be a non-empty string, got {self.locale!r}"
            raise ValueError(msg)
        if not isinstance(self.catalog, Catalog):
            msg = f"catalog must be a Catalog, got {type(self.catalog).__name__}"
            raise TypeError(msg)
        if self.default_render is not None:
            object.__setattr__(
                self,
                "default_render",
                coerce_render_option(self.default_render, factory=self.element_factory),
            )
        object.__setattr__(self, "format_specs", MappingProxyType(dict(self.format_specs)))

    @classmethod
    def for_system_locale(
        cls, catalog: Catalog, *, fallback: LocaleCode = "en_US", **options: object
    ) -> TranslationContext:
        """Create a context for the OS/environment locale.

        The detected locale (e.g. ``cs_CZ``) is matched against the catalog's
        keys ignoring ``-``/``_`` and case; otherwise it is used as detected.
        When no locale is configured at all, ``fallback`` is used the same way.
        """
        detected = get_system_locale() or fallback
        locale = match_locale(detected, catalog.locales) or detected
        logger.debug("System locale '%s' resolved to '%s'", detected, locale)
        return cls(locale, catalog, **options)  # type: ignore[arg-type]

    def merge(self, **overrides: object) -> TranslationContext:
        """Return a child context with overrides applied.

        ``format_specs`` merge key by key over the parent's; every other
        field is replaced.

        Raises:
            TypeError: On an unknown field name
        """
        names = {f.name for f in fields(self)}
        unknown = set(overrides) - names
        if unknown:
            msg = f"Unknown TranslationContext fields: {', '.join(sorted(unknown))}"
            raise TypeError(msg)
        if "format_specs" in overrides:
            overrides["format_specs"] = merge_format_specs(
                self.format_specs,
                overrides["format_specs"],  # type: ignore[arg-type]
            )
        return replace(self, **overrides)  # type: ignore[arg-type]

    def resolver(self) -> TranslationResolver:
        """Resolver configured with this context's fragment stringifier."""
        return TranslationResolver(fragment_stringifier=self.fragment_stringifier)

    def render_strategy(self) -> RenderStrategy:
        """Render strategy configured with this context's factory and default."""
        return RenderStrategy(factory=self.element_factory, default_render=self.default_render)


def get_active_context() -> TranslationContext | None:
    """Nearest enclosing context for the current thread/task, if any."""
    return _active_context.get()


@contextmanager
def translation_context(
    context: TranslationContext | None = None, **overrides: object
) -> Generator[TranslationContext]:
    """Activate a context for the enclosed block.

    Args:
        context: Full context to activate; defaults to the enclosing one
        **overrides: Fields merged over context (or the enclosing context)

    Yields:
        The activated context

    Raises:
        TypeError: If there is no base context and locale/catalog are missing

    Example:
        >>> catalog = Catalog.from_mapping({"cs": {"Original": "Původní"}})
        >>> with translation_context(locale="cs", catalog=catalog) as ctx:
        ...     get_active_context() is ctx
        True
        >>> get_active_context() is None
        True
    """
    base = context if context is not None else _active_context.get()
    if base is None:
        active = TranslationContext(**overrides)  # type: ignore[arg-type]
    elif overrides:
        active = base.merge(**overrides)
    else:
        active = base

    token = _active_context.set(active)
    try:
        yield active
    finally:
        _active_context.reset(token)

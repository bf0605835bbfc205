"""Translation runtime package.

Provides message formatting, catalog lookup, resolution, rendering and the
context-scoped call-site API. Depends on syntax package for parsing.

Python 3.13+.
"""

from .catalog import MISSING, Catalog, Missing
from .context import TranslationContext, get_active_context, translation_context
from .elements import DefaultElementFactory, Element, ElementFactory
from .format_spec import FormatSpec
from .formatter import FormatResult, MessageFormatter, format_message
from .locale_context import LocaleContext
from .plural_rules import select_plural_category
from .render import (
    AUTO,
    PLAIN,
    Auto,
    Function,
    Plain,
    RenderMetadata,
    RenderOption,
    RenderStrategy,
    Tag,
    Template,
    coerce_render_option,
)
from .resolver import Resolution, TranslationResolver
from .trans import resolve, trans, translate
from .value_types import Fragment, ResolvedToken, Text

__all__ = [
    "AUTO",
    "MISSING",
    "PLAIN",
    "Auto",
    "Catalog",
    "DefaultElementFactory",
    "Element",
    "ElementFactory",
    "FormatResult",
    "FormatSpec",
    "Fragment",
    "Function",
    "LocaleContext",
    "MessageFormatter",
    "Missing",
    "Plain",
    "RenderMetadata",
    "RenderOption",
    "RenderStrategy",
    "Resolution",
    "ResolvedToken",
    "Tag",
    "Template",
    "Text",
    "TranslationContext",
    "TranslationResolver",
    "coerce_render_option",
    "format_message",
    "get_active_context",
    "resolve",
    "select_plural_category",
    "trans",
    "translate",
    "translation_context",
]

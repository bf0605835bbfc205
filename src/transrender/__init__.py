"""transrender - ICU-style translation resolution and rendering.

Resolves symbolic message ids against an immutable catalog, interpolates
values (including opaque renderable fragments), applies CLDR plural rules
and Babel number/date formatting, and renders the result as a string,
a fragment sequence, an element tree or through a caller-supplied function.

Public API:
    trans - Translate and render a message in the nearest context
    translate - Translate a message to a plain string
    translation_context - Scope a TranslationContext to a block
    TranslationContext - Immutable locale/catalog/rendering configuration
    Catalog - Immutable locale -> id -> pattern snapshot
    MessageFormatter - Pattern + values -> resolved tokens
    TranslationResolver - Catalog -> defaults -> id resolution
    RenderStrategy - Tokens -> output for a render option
    Element - Default output node

Exceptions:
    TranslationError - Base exception class
    PatternSyntaxError - Malformed message patterns
    MissingTranslationError / MissingPlaceholderValueError - Lookup fallbacks
    NoActiveContextError - Resolution outside any context
    FormattingError - Number/date formatting failures

Submodules:
    transrender.syntax - Pattern parse tree and parser
    transrender.diagnostics - Error types, codes and templates
    transrender.runtime.locale_context - Thread-safe LocaleContext for formatting
"""

# Essential Public API - Minimal exports for clean namespace
from .diagnostics import (
    FormattingError,
    MissingPlaceholderValueError,
    MissingTranslationError,
    NoActiveContextError,
    PatternSyntaxError,
    TranslationError,
)
from .runtime import (
    MISSING,
    Catalog,
    Element,
    FormatSpec,
    MessageFormatter,
    RenderStrategy,
    Resolution,
    TranslationContext,
    TranslationResolver,
    get_active_context,
    trans,
    translate,
    translation_context,
)

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("transrender")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "MISSING",
    "Catalog",
    "Element",
    "FormatSpec",
    "FormattingError",
    "MessageFormatter",
    "MissingPlaceholderValueError",
    "MissingTranslationError",
    "NoActiveContextError",
    "PatternSyntaxError",
    "RenderStrategy",
    "Resolution",
    "TranslationContext",
    "TranslationError",
    "TranslationResolver",
    "__version__",
    "get_active_context",
    "trans",
    "translate",
    "translation_context",
]

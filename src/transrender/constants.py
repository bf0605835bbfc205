"""Shared constants for transrender.

This module provides centralized configuration constants used across the
syntax and runtime packages. Placing constants here avoids circular imports
and provides a single source of truth.

Constants are grouped by domain:
- Depth limits: Recursion protection for pattern parsing and formatting
- Cache limits: Memory bounds for caching subsystems
- Fallback strings: Visible output for recoverable authoring errors

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Depth limits
    "MAX_DEPTH",
    # Cache limits
    "MAX_LOCALE_CACHE_SIZE",
    "DEFAULT_PATTERN_CACHE_SIZE",
    # Fallback strings
    "FALLBACK_INVALID",
    "FALLBACK_MISSING_PLACEHOLDER",
    "DEFAULT_FRAGMENT_TEXT",
    # Format styles
    "BUILTIN_DATE_STYLES",
]

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Maximum nesting of plural/select branches inside one pattern.
# Real catalogs rarely nest more than 2-3 levels; 100 levels is malformed input.
MAX_DEPTH: int = 100

# ============================================================================
# CACHE LIMITS
# ============================================================================

# Maximum cached LocaleContext instances.
# 128 covers typical multi-region applications (major locales + variants).
MAX_LOCALE_CACHE_SIZE: int = 128

# Maximum parsed patterns kept by the shared PatternCache.
# A typical UI catalog has fewer than 1000 messages per locale.
DEFAULT_PATTERN_CACHE_SIZE: int = 1000

# ============================================================================
# FALLBACK STRINGS
# ============================================================================

# Invalid message id (empty or non-string)
FALLBACK_INVALID: str = "{???}"

# Missing placeholder value renders the placeholder name itself.
# Format string - use .format(name=...)
FALLBACK_MISSING_PLACEHOLDER: str = "{name}"

# Text used for opaque fragments when a token sequence is flattened to a string
DEFAULT_FRAGMENT_TEXT: str = "[object]"

# ============================================================================
# FORMAT STYLES
# ============================================================================

# Date/time style ids understood without a FormatSpec
BUILTIN_DATE_STYLES: frozenset[str] = frozenset({"short", "medium", "long", "full"})

"""Locale code helpers shared by formatting and context setup.

Catalog lookups never go through this module: catalogs match locale strings
exactly. Normalization only applies when talking to Babel and when matching
a detected system locale against catalog keys.

Python 3.13+.
"""

from __future__ import annotations

import functools
import locale as locale_module
import os
from collections.abc import Iterable

from babel import Locale

from transrender.constants import MAX_LOCALE_CACHE_SIZE

__all__ = [
    "get_babel_locale",
    "get_system_locale",
    "locale_key",
    "match_locale",
    "normalize_locale",
]

# Environment variables consulted after the OS locale, highest priority first
_LOCALE_ENV_VARS = ("LC_ALL", "LC_MESSAGES", "LANG")

_PSEUDO_LOCALES = frozenset({"", "C", "POSIX"})


def normalize_locale(locale_code: str) -> str:
    """Convert a BCP 47 code to the POSIX form Babel expects.

    Example:
        >>> normalize_locale("pt-BR")
        'pt_BR'
    """
    return locale_code.replace("-", "_")


def locale_key(locale_code: str) -> str:
    """Comparison key for locale codes: POSIX separators, lowercase.

    Example:
        >>> locale_key("cs-CZ") == locale_key("cs_cz")
        True
    """
    return normalize_locale(locale_code).lower()


def match_locale(locale_code: str, candidates: Iterable[str]) -> str | None:
    """Return the first candidate equal to locale_code up to separator and case."""
    wanted = locale_key(locale_code)
    return next((c for c in candidates if locale_key(c) == wanted), None)


@functools.lru_cache(maxsize=MAX_LOCALE_CACHE_SIZE)
def get_babel_locale(locale_code: str) -> Locale:
    """Parse a locale code into a cached Babel Locale.

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid
    """
    return Locale.parse(normalize_locale(locale_code))


def _strip_locale_suffix(value: str) -> str:
    # "de_AT.UTF-8@euro" -> "de_AT"
    return value.split(".", 1)[0].split("@", 1)[0]


def get_system_locale() -> str | None:
    """Detect the locale from the OS, then LC_ALL, LC_MESSAGES and LANG.

    Encoding and modifier suffixes are dropped and the pseudo-locales
    "C" and "POSIX" are skipped.

    Returns:
        POSIX locale code, or None when nothing usable is configured
    """
    try:
        system_locale, _ = locale_module.getlocale()
    except (ValueError, AttributeError):
        system_locale = None
    if system_locale and system_locale not in _PSEUDO_LOCALES:
        return normalize_locale(_strip_locale_suffix(system_locale))

    for var in _LOCALE_ENV_VARS:
        value = _strip_locale_suffix(os.environ.get(var, ""))
        if value not in _PSEUDO_LOCALES:
            return normalize_locale(value)
    return None

"""CLDR plural rules implementation using Babel.

Provides cardinal and ordinal plural category selection for all locales
using Babel's CLDR data.

Python 3.13+. Depends on Babel for CLDR data.

Reference: https://www.unicode.org/cldr/charts/47/supplemental/language_plural_rules.html
"""

import logging
from decimal import Decimal

from babel.core import UnknownLocaleError

from transrender.locale_utils import get_babel_locale

__all__ = ["select_plural_category"]

logger = logging.getLogger(__name__)


def select_plural_category(
    n: int | float | Decimal, locale: str, *, ordinal: bool = False
) -> str:
    """Select CLDR plural category for number using Babel's CLDR data.

    Args:
        n: Number to categorize
        locale: Locale code (e.g., "cs", "en_US", "ar-SA")
        ordinal: Use ordinal rules (1st, 2nd, 3rd) instead of cardinal

    Returns:
        Plural category: "zero", "one", "two", "few", "many", or "other"

    Examples:
        >>> select_plural_category(1, "en_US")
        'one'
        >>> select_plural_category(3, "cs")
        'few'
        >>> select_plural_category(5, "ru_RU")
        'many'
        >>> select_plural_category(2, "en", ordinal=True)
        'two'

    If locale parsing fails, falls back to the simple one/other rule
    (cardinal) or "other" (ordinal). Numbers Babel cannot classify
    (NaN, infinities) select "other".
    """
    try:
        locale_obj = get_babel_locale(locale)
    except (UnknownLocaleError, ValueError, TypeError):
        if ordinal:
            return "other"
        return "one" if abs(n) == 1 else "other"

    plural_rule = locale_obj.ordinal_form if ordinal else locale_obj.plural_form
    try:
        return plural_rule(n)
    except (ValueError, OverflowError, ArithmeticError) as e:
        logger.warning("Cannot select plural category for %r in '%s': %s", n, locale, e)
        return "other"

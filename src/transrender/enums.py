"""Enumerations for transrender type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class FormatKind(StrEnum):
    """Type keyword of a formatted placeholder.

    StrEnum provides automatic string conversion: str(FormatKind.NUMBER) == "number"
    """

    NUMBER = "number"
    """Number placeholder: {count, number, integer}"""

    DATE = "date"
    """Date placeholder: {when, date, short}"""

    TIME = "time"
    """Time placeholder: {when, time, short}"""


class BranchKind(StrEnum):
    """Type keyword of a branching placeholder.

    StrEnum provides automatic string conversion: str(BranchKind.PLURAL) == "plural"
    """

    PLURAL = "plural"
    """Cardinal plural: {count, plural, one{# file} other{# files}}"""

    SELECTORDINAL = "selectordinal"
    """Ordinal plural: {pos, selectordinal, one{#st} two{#nd} few{#rd} other{#th}}"""

    SELECT = "select"
    """Exact string match: {gender, select, female{she} other{they}}"""


class ResolutionSource(StrEnum):
    """Which pattern a resolution ended up formatting.

    StrEnum provides automatic string conversion: str(ResolutionSource.CATALOG) == "catalog"
    """

    CATALOG = "catalog"
    """Catalog entry for the active locale"""

    DEFAULTS = "defaults"
    """Explicit default pattern supplied by the caller"""

    ID = "id"
    """The message id itself"""


__all__ = [
    "BranchKind",
    "FormatKind",
    "ResolutionSource",
]

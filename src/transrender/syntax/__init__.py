"""Message pattern syntax: parse tree, cursor and parser.

Python 3.13+. Zero external dependencies.
"""

from .ast import (
    ArgumentElement,
    Branch,
    BranchElement,
    FormattedArgument,
    Pattern,
    PatternElement,
    PoundElement,
    TextElement,
)
from .parser import PatternParser, parse_pattern

__all__ = [
    "ArgumentElement",
    "Branch",
    "BranchElement",
    "FormattedArgument",
    "Pattern",
    "PatternElement",
    "PatternParser",
    "PoundElement",
    "TextElement",
    "parse_pattern",
]

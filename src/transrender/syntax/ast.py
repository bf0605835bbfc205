"""Message pattern parse tree.

ICU-style patterns parse once into a tree of frozen nodes; formatting walks
the tree instead of re-scanning the raw text.

Example:
    "You have {count, plural, one{# file} other{# files}} in {folder}"

    Pattern(elements=(
        TextElement("You have "),
        BranchElement(name="count", kind=BranchKind.PLURAL, branches=(
            Branch("one", Pattern((PoundElement(), TextElement(" file")))),
            Branch("other", Pattern((PoundElement(), TextElement(" files")))),
        )),
        TextElement(" in "),
        ArgumentElement("folder"),
    ))

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass

from transrender.enums import BranchKind, FormatKind

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    "Pattern",
    "TextElement",
    "ArgumentElement",
    "FormattedArgument",
    "PoundElement",
    "Branch",
    "BranchElement",
    "PatternElement",
]


@dataclass(frozen=True, slots=True)
class TextElement:
    """Literal text, with ICU apostrophe quoting already removed."""

    value: str


@dataclass(frozen=True, slots=True)
class ArgumentElement:
    """Plain substitution: ``{name}``."""

    name: str


@dataclass(frozen=True, slots=True)
class FormattedArgument:
    """Formatted substitution: ``{name, number|date|time[, style]}``.

    Attributes:
        name: Placeholder name
        kind: Value type to format as
        style: Style id (built-in or FormatSpec name); None for locale default
    """

    name: str
    kind: FormatKind
    style: str | None = None


@dataclass(frozen=True, slots=True)
class PoundElement:
    """``#`` inside a plural branch: the offset-adjusted number."""


@dataclass(frozen=True, slots=True)
class Branch:
    """One case of a plural or select placeholder.

    Attributes:
        key: Selector key (``one``, ``other``, ``=0``, ``female``)
        value: Branch sub-pattern
    """

    key: str
    value: "Pattern"

    @property
    def is_exact(self) -> bool:
        """True for explicit value keys such as ``=0``."""
        return self.key.startswith("=")


@dataclass(frozen=True, slots=True)
class BranchElement:
    """Branching substitution: plural, selectordinal or select.

    Attributes:
        name: Placeholder name
        kind: Branch selection rule
        branches: Cases in source order; always contains ``other``
        offset: Plural offset (``offset:1``); 0 for select
    """

    name: str
    kind: BranchKind
    branches: tuple[Branch, ...]
    offset: int = 0

    def find(self, key: str) -> Branch | None:
        """Return the branch with the given key, if any."""
        for branch in self.branches:
            if branch.key == key:
                return branch
        return None


type PatternElement = (
    TextElement | ArgumentElement | FormattedArgument | PoundElement | BranchElement
)


@dataclass(frozen=True, slots=True)
class Pattern:
    """Parsed message pattern."""

    elements: tuple[PatternElement, ...]

    @property
    def is_static(self) -> bool:
        """True when the pattern has no placeholders at all."""
        return all(isinstance(element, TextElement) for element in self.elements)

    def placeholder_names(self) -> frozenset[str]:
        """Collect every placeholder name, including those inside branches."""
        names: set[str] = set()
        for element in self.elements:
            match element:
                case ArgumentElement(name=name) | FormattedArgument(name=name):
                    names.add(name)
                case BranchElement(name=name, branches=branches):
                    names.add(name)
                    for branch in branches:
                        names |= branch.value.placeholder_names()
        return frozenset(names)

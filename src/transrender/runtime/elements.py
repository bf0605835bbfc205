"""Framework-neutral output elements.

Rendering produces Element trees by default. Hosts that render into a UI
framework plug in their own ElementFactory producing framework-native nodes;
the render strategies only talk to the factory.

Attribute names follow HTML, with the Python-friendly aliases ``class_name``
and ``className`` mapped to ``class``.

Python 3.13+. Zero external dependencies.
"""

import html
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Protocol, runtime_checkable

__all__ = [
    "DefaultElementFactory",
    "Element",
    "ElementFactory",
    "normalize_attrs",
]

_ATTR_ALIASES: dict[str, str] = {
    "class_name": "class",
    "className": "class",
    "html_for": "for",
    "htmlFor": "for",
}

# Elements that never have children or a closing tag
_VOID_TAGS: frozenset[str] = frozenset(
    {"area", "base", "br", "col", "embed", "hr", "img", "input", "link", "meta", "source", "wbr"}
)


def normalize_attrs(attrs: Mapping[str, object] | None) -> dict[str, object]:
    """Map attribute aliases to HTML names, keeping order.

    Example:
        >>> normalize_attrs({"class_name": "lead", "id": "intro"})
        {'class': 'lead', 'id': 'intro'}
    """
    if not attrs:
        return {}
    return {_ATTR_ALIASES.get(name, name): value for name, value in attrs.items()}


def _render_child(child: object) -> str:
    if isinstance(child, Element):
        return child.to_html()
    if child is None:
        return ""
    return html.escape(str(child), quote=False)


@dataclass(frozen=True, slots=True)
class Element:
    """Immutable element node: tag, attributes and children.

    Children are strings, nested Elements or opaque fragment values.
    Elements are hashable when their attribute values and children are.

    Example:
        >>> Element("p", {"class_name": "lead"}, ("Původní",)).to_html()
        '<p class="lead">Původní</p>'
    """

    tag: str
    attrs: Mapping[str, object] = field(default_factory=dict)
    children: tuple[object, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "attrs", MappingProxyType(normalize_attrs(self.attrs)))
        object.__setattr__(self, "children", tuple(self.children))

    def clone(
        self, *, children: Iterable[object] | None = None, **attrs: object
    ) -> "Element":
        """Copy with attributes merged over the originals and, optionally, new children."""
        merged = dict(self.attrs)
        merged.update(normalize_attrs(attrs))
        return Element(
            self.tag, merged, self.children if children is None else tuple(children)
        )

    def text_content(self) -> str:
        """Concatenated text of all descendants."""
        parts: list[str] = []
        for child in self.children:
            if isinstance(child, Element):
                parts.append(child.text_content())
            elif child is not None:
                parts.append(str(child))
        return "".join(parts)

    def to_html(self) -> str:
        """Serialize to HTML with escaped text and attribute values.

        ``True`` attributes render bare; ``False`` and ``None`` are omitted.
        """
        attr_parts: list[str] = []
        for name, value in self.attrs.items():
            if value is None or value is False:
                continue
            if value is True:
                attr_parts.append(f" {name}")
            else:
                attr_parts.append(f' {name}="{html.escape(str(value), quote=True)}"')
        attr_text = "".join(attr_parts)

        if self.tag in _VOID_TAGS and not self.children:
            return f"<{self.tag}{attr_text}>"
        inner = "".join(_render_child(child) for child in self.children)
        return f"<{self.tag}{attr_text}>{inner}</{self.tag}>"

    def __hash__(self) -> int:
        # Equal attribute mappings have equal item sets regardless of order
        return hash((self.tag, frozenset(self.attrs.items()), self.children))

    def __str__(self) -> str:
        return self.to_html()


@runtime_checkable
class ElementFactory(Protocol):
    """Protocol for producing output nodes.

    Implement this to render into framework-native nodes instead of Element.

    Example:
        >>> class TupleFactory:
        ...     def create(self, tag, attrs, children):
        ...         return (tag, dict(attrs), children)
        ...     def clone(self, template, attrs, children):
        ...         return (template[0], {**template[1], **attrs}, children)
        ...     def is_template(self, value):
        ...         return isinstance(value, tuple) and len(value) == 3
    """

    def create(
        self, tag: str, attrs: Mapping[str, object], children: tuple[object, ...]
    ) -> object:
        """Build a new node with the given tag, attributes and children."""

    def clone(
        self, template: object, attrs: Mapping[str, object], children: tuple[object, ...]
    ) -> object:
        """Copy template with attrs merged in and its children replaced."""

    def is_template(self, value: object) -> bool:
        """Check whether value is a node usable as a render template."""


class DefaultElementFactory:
    """ElementFactory producing Element trees."""

    __slots__ = ()

    def create(
        self, tag: str, attrs: Mapping[str, object], children: tuple[object, ...]
    ) -> Element:
        return Element(tag, attrs, children)

    def clone(
        self, template: object, attrs: Mapping[str, object], children: tuple[object, ...]
    ) -> Element:
        if not isinstance(template, Element):
            msg = f"Template must be an Element, got {type(template).__name__}"
            raise TypeError(msg)
        return template.clone(children=children, **normalize_attrs(attrs))

    def is_template(self, value: object) -> bool:
        return isinstance(value, Element)

"""Render strategies - compose resolved tokens into final output.

The call-site ``render=`` argument is normalized into one tagged variant:

    omitted        -> Auto       use the context default, else plain
    None           -> Plain      bare string or composed fragment tuple
    "span"         -> Tag        one element of that tag
    Element(...)   -> Template   clone of the template with new children
    callable       -> Function   called with the render metadata

Python 3.13+. Zero external dependencies.
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Final, TypedDict

from transrender.runtime.elements import DefaultElementFactory, ElementFactory, normalize_attrs
from transrender.runtime.value_types import Fragment, ResolvedToken, Text

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Variants
    "Auto",
    "Plain",
    "Tag",
    "Template",
    "Function",
    "RenderOption",
    "AUTO",
    "PLAIN",
    # Metadata
    "RenderMetadata",
    "RenderFunction",
    # Strategy
    "RenderStrategy",
    "coerce_render_option",
    "compose",
]

logger = logging.getLogger(__name__)


class RenderMetadata(TypedDict):
    """Arguments passed to a render function."""

    id: str
    defaults: str | None
    translation: str


type RenderFunction = Callable[[RenderMetadata], object]


@dataclass(frozen=True, slots=True)
class Auto:
    """Use the context's default render, else render plainly."""


@dataclass(frozen=True, slots=True)
class Plain:
    """No wrapper: a bare string, or a tuple of strings and fragments."""


@dataclass(frozen=True, slots=True)
class Tag:
    """Wrap the content in one element with this tag name."""

    name: str


@dataclass(frozen=True, slots=True)
class Template:
    """Clone this element, replacing its children with the content."""

    element: object


@dataclass(frozen=True, slots=True)
class Function:
    """Delegate rendering to a caller-supplied function."""

    fn: RenderFunction


type RenderOption = Auto | Plain | Tag | Template | Function

AUTO: Final = Auto()
PLAIN: Final = Plain()


def coerce_render_option(
    value: object, *, factory: ElementFactory | None = None
) -> RenderOption:
    """Normalize a call-site ``render=`` argument.

    Args:
        value: RenderOption, None, tag name, template element or callable
        factory: Decides what counts as a template element

    Raises:
        TypeError: If value is none of the accepted kinds

    Examples:
        >>> coerce_render_option(None)
        Plain()
        >>> coerce_render_option("span")
        Tag(name='span')
    """
    factory = factory if factory is not None else _DEFAULT_FACTORY
    match value:
        case Auto() | Plain() | Tag() | Template() | Function():
            return value
        case None:
            return PLAIN
        case str():
            if not value:
                msg = "Render tag name must not be empty"
                raise TypeError(msg)
            return Tag(value)
    if factory.is_template(value):
        return Template(value)
    if callable(value):
        return Function(value)
    msg = f"Cannot render with {type(value).__name__}: expected None, str, element or callable"
    raise TypeError(msg)


def compose(tokens: tuple[ResolvedToken, ...]) -> tuple[object, ...]:
    """Turn tokens into output children: strings and fragment values in order."""
    children: list[object] = []
    for token in tokens:
        match token:
            case Text(value=value):
                children.append(value)
            case Fragment(value=value):
                children.append(value)
    return tuple(children)


class RenderStrategy:
    """Composes tokens into the output requested by a RenderOption.

    Example:
        >>> from transrender.runtime.value_types import Text
        >>> strategy = RenderStrategy()
        >>> metadata = {"id": "Original", "defaults": None, "translation": "Původní"}
        >>> strategy.render((Text("Původní"),), Tag("p"), metadata,
        ...                 attrs={"class_name": "lead"}).to_html()
        '<p class="lead">Původní</p>'
    """

    __slots__ = ("_default_render", "_factory")

    def __init__(
        self,
        *,
        factory: ElementFactory | None = None,
        default_render: RenderOption | None = None,
    ) -> None:
        """Initialize strategy.

        Args:
            factory: Node factory (keyword-only, default: Element trees)
            default_render: Option used for Auto (keyword-only)
        """
        self._factory = factory if factory is not None else _DEFAULT_FACTORY
        self._default_render = default_render

    @property
    def factory(self) -> ElementFactory:
        """Node factory used for Tag and Template rendering."""
        return self._factory

    def render(
        self,
        tokens: tuple[ResolvedToken, ...],
        option: RenderOption,
        metadata: RenderMetadata,
        *,
        attrs: Mapping[str, object] | None = None,
    ) -> object:
        """Compose tokens into output according to option.

        Args:
            tokens: Resolved tokens
            option: Render variant
            metadata: id, defaults and flattened translation
            attrs: Pass-through attributes for Tag and Template

        Returns:
            str, tuple of children, a node from the factory, or whatever a
            render function returns
        """
        match option:
            case Auto():
                default = self._default_render
                if default is None or isinstance(default, Auto):
                    return self._render_plain(tokens)
                return self.render(tokens, default, metadata, attrs=attrs)
            case Plain():
                if attrs:
                    logger.debug("Ignoring attributes for plain render: %s", ", ".join(attrs))
                return self._render_plain(tokens)
            case Tag(name=name):
                return self._factory.create(name, normalize_attrs(attrs), compose(tokens))
            case Template(element=element):
                return self._factory.clone(element, normalize_attrs(attrs), compose(tokens))
            case Function(fn=fn):
                return fn(
                    {
                        "id": metadata["id"],
                        "defaults": metadata["defaults"],
                        "translation": metadata["translation"],
                    }
                )

    @staticmethod
    def _render_plain(tokens: tuple[ResolvedToken, ...]) -> object:
        if not tokens:
            return ""
        if len(tokens) == 1 and isinstance(tokens[0], Text):
            return tokens[0].value
        return compose(tokens)


_DEFAULT_FACTORY: Final = DefaultElementFactory()

"""Call-site API: translate a message id in the nearest context.

    trans("Original", render="p", class_name="lead")
    # -> Element('<p class="lead">Původní</p>') in a "cs" context

    translate("My name is {name}", values={"name": "Dave"})
    # -> 'My name is Dave'

Neither function raises for missing translations, values or context.
Without an enclosing context the literal message id is output (no
interpolation) and a NoActiveContextError is logged.

Python 3.13+.
"""

import logging
from collections.abc import Mapping

from transrender.diagnostics import (
    ErrorTemplate,
    MissingTranslationError,
    NoActiveContextError,
    TranslationError,
)
from transrender.enums import ResolutionSource
from transrender.runtime.context import TranslationContext, get_active_context
from transrender.runtime.format_spec import FormatSpecInput, merge_format_specs
from transrender.runtime.render import (
    AUTO,
    RenderMetadata,
    RenderStrategy,
    coerce_render_option,
)
from transrender.runtime.resolver import Resolution
from transrender.runtime.value_types import ResolvedToken, Text, ValueMap

__all__ = ["resolve", "trans", "translate"]

logger = logging.getLogger(__name__)


def _log_errors(message_id: object, errors: tuple[TranslationError, ...]) -> None:
    """Log resolution errors; a plain missing translation is only a debug event."""
    if not errors:
        logger.debug("Resolved message '%s'", message_id)
        return
    serious = [e for e in errors if not isinstance(e, MissingTranslationError)]
    if serious:
        logger.warning(
            "Message resolution errors for '%s': %d error(s)", message_id, len(serious)
        )
    for err in errors:
        logger.debug("  - %s: %s", type(err).__name__, err)


def _no_context(message_id: object) -> NoActiveContextError:
    error = NoActiveContextError(ErrorTemplate.no_active_context(str(message_id)))
    logger.warning("No active translation context for '%s'", message_id)
    return error


def resolve(
    message_id: str,
    *,
    defaults: str | None = None,
    values: ValueMap | None = None,
    formats: Mapping[str, FormatSpecInput] | None = None,
    context: TranslationContext | None = None,
) -> Resolution:
    """Resolve a message id in the explicit or nearest context.

    Without a context the Resolution holds the literal id and a
    NoActiveContextError.
    """
    ctx = context if context is not None else get_active_context()
    if ctx is None:
        literal = message_id if isinstance(message_id, str) else str(message_id)
        tokens: tuple[ResolvedToken, ...] = (Text(literal),) if literal else ()
        return Resolution(
            translation=literal,
            tokens=tokens,
            source=ResolutionSource.ID,
            errors=(_no_context(message_id),),
        )

    resolution = ctx.resolver().resolve(
        message_id,
        defaults,
        values,
        locale=ctx.locale,
        catalog=ctx.catalog,
        format_specs=merge_format_specs(ctx.format_specs, formats),
    )
    _log_errors(message_id, resolution.errors)
    return resolution


def trans(
    message_id: str,
    *,
    defaults: str | None = None,
    values: ValueMap | None = None,
    formats: Mapping[str, FormatSpecInput] | None = None,
    render: object = AUTO,
    context: TranslationContext | None = None,
    **attrs: object,
) -> object:
    """Translate and render a message.

    Args:
        message_id: Message identifier
        defaults: Pattern used when the catalog has no entry
        values: Placeholder values; non-primitive values are fragments
        formats: Named formatting options merged over the context's
        render: None (plain), tag name, template element, callable, or a
            RenderOption; omitted uses the context's default_render
        context: Explicit context instead of the nearest enclosing one
        **attrs: Attributes for tag/template rendering (class_name -> class)

    Returns:
        A string, a tuple of strings and fragments, an element, or the
        render function's result

    Raises:
        TypeError: If render is of an unsupported kind
    """
    ctx = context if context is not None else get_active_context()
    factory = ctx.element_factory if ctx is not None else None
    option = coerce_render_option(render, factory=factory)
    resolution = resolve(
        message_id, defaults=defaults, values=values, formats=formats, context=ctx
    )

    metadata: RenderMetadata = {
        "id": message_id,
        "defaults": defaults,
        "translation": resolution.translation,
    }
    strategy = ctx.render_strategy() if ctx is not None else RenderStrategy()
    return strategy.render(resolution.tokens, option, metadata, attrs=attrs)


def translate(
    message_id: str,
    *,
    defaults: str | None = None,
    values: ValueMap | None = None,
    formats: Mapping[str, FormatSpecInput] | None = None,
    context: TranslationContext | None = None,
) -> str:
    """Translate a message to a plain string.

    Fragments are rendered by the context's fragment stringifier.

    Example:
        >>> translate("unknown")  # no context: the id itself
        'unknown'
    """
    return resolve(
        message_id, defaults=defaults, values=values, formats=formats, context=context
    ).translation

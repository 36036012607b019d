"""Template chains over Renderables.

A template chain renders a Context through templates in order.  Each
template's output is bound to ``"body"`` and the updated Context feeds
the next template, so a post can be rendered through ``post.html`` and
then wrapped by ``default.html``.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Sequence

from wren.manipulations import ContextManipulation, identity
from wren.renderable import Action, Context, Renderable
from wren.templates import apply_template


def apply_chain(
    manipulation: ContextManipulation,
    templates: Sequence[str | os.PathLike[str]],
    context: Context,
) -> Context:
    """Apply *manipulation*, then every template in *templates*.

    With no templates this is just the manipulated Context.
    """
    result = dict(manipulation(context))
    for template in templates:
        result = {**result, "body": apply_template(template, result)}
    return result


def render_with(
    manipulation: ContextManipulation,
    templates: Iterable[str | os.PathLike[str]],
    renderable: Renderable,
) -> Renderable:
    """Render *renderable* through *templates*, keeping its URL.

    The template paths are prepended to the dependency list.
    """
    template_paths = tuple(os.fspath(t) for t in templates)

    async def _render() -> Context:
        return apply_chain(manipulation, template_paths, await renderable.render())

    return Renderable(
        _render,
        (*template_paths, *renderable.dependencies),
        renderable.url,
    )


def render_and_concat_with(
    manipulation: ContextManipulation,
    templates: Iterable[str | os.PathLike[str]],
    items: Iterable[Renderable],
) -> Action[str]:
    """Render every item through *templates* and concatenate the bodies.

    Items are rendered in order and joined with no separator.  The
    result depends on the templates, then on each item's dependencies.
    """
    template_paths = tuple(os.fspath(t) for t in templates)
    renderables = tuple(items)

    async def _concat() -> str:
        parts: list[str] = []
        for item in renderables:
            context = apply_chain(manipulation, template_paths, await item.render())
            parts.append(context.get("body", ""))
        return "".join(parts)

    return Action(
        _concat,
        (*template_paths, *(dep for item in renderables for dep in item.dependencies)),
    )


def render_and_concat(
    templates: Iterable[str | os.PathLike[str]],
    items: Iterable[Renderable],
) -> Action[str]:
    return render_and_concat_with(identity, templates, items)

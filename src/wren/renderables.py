"""Construction and combination of Renderables.

Leaves come from source files (``create_page_path``) or from explicit
fields (``create_custom_page``).  Leaves are merged with ``combine`` /
``combine_with_url`` or aggregated into listings with
``create_listing`` / ``create_listing_with``.  Every operation returns
a new Renderable and performs no I/O until that Renderable is forced.

Pipeline for a blog index::

    posts = [create_page_path(p) for p in ("posts/a.md", "posts/b.md")]
    index = create_listing("index.html", ["templates/item.html"], posts, [
        ("title", "Home"),
    ])
    page = render_with(identity, ["templates/default.html"], index)
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from functools import partial

import anyio

from wren.errors import EvaluationError, WrenError
from wren.manipulations import ContextManipulation, identity
from wren.pages import read_page
from wren.render import render_and_concat_with
from wren.renderable import Action, Context, Renderable, constant
from wren.urls import to_url

# A field value is either a literal or a computation with its own dependencies
type FieldValue = str | Action[str]
type Field = tuple[str, FieldValue]


# ---------------------------------------------------------------------------
# Leaves
# ---------------------------------------------------------------------------


def create_page_path(path: str | os.PathLike[str]) -> Renderable:
    """A Renderable for the source file at *path*.

    Depends on *path* alone.  The URL comes from the URL resolver and
    the Context from the page reader; their errors propagate unchanged.
    """
    path = os.fspath(path)
    return Renderable(
        partial(read_page, path),
        (path,),
        partial(to_url, path),
    )


def create_custom_page(url: str, fields: Iterable[Field] = ()) -> Renderable:
    """A Renderable built from literal and computed fields.

    The Context is assembled from ``[("url", url), *fields]`` in order,
    later keys overwriting earlier ones.  A ``"url"`` entry in *fields*
    therefore replaces *url* in the Context, while ``resolve_url()``
    still returns *url*.  Existing callers rely on that override, so it
    is kept as is.

    Computed fields are awaited one by one, in field order.  If one
    fails, the error propagates and no Context is produced.  Errors
    other than ``WrenError`` are wrapped in ``EvaluationError``.

    Usage::

        create_custom_page("about.html", [
            ("title", "About"),
            ("body", create_page_path("about.md").map(lambda c: c["body"])),
        ])
    """
    association: list[Field] = [("url", url), *fields]
    dependencies = tuple(
        dep
        for _, value in association
        if isinstance(value, Action)
        for dep in value.dependencies
    )

    async def _render() -> Context:
        context: Context = {}
        for key, value in association:
            context[key] = await _evaluate(key, value)
        return context

    return Renderable(_render, dependencies, constant(url))


async def _evaluate(key: str, value: FieldValue) -> str:
    if not isinstance(value, Action):
        return value
    try:
        return await value.run()
    except WrenError:
        raise
    except Exception as exc:
        raise EvaluationError(key, str(exc)) from exc


# ---------------------------------------------------------------------------
# Listings
# ---------------------------------------------------------------------------


def create_listing(
    url: str,
    templates: Iterable[str | os.PathLike[str]],
    items: Iterable[Renderable],
    fields: Iterable[Field] = (),
) -> Renderable:
    """A custom page whose ``body`` lists *items* rendered through *templates*.

    ::

        create_listing(
            "index.html",            # Destination of the page
            ["templates/item.html"],  # Templates to render every item with
            posts,                   # Renderables in the list
            [("title", "Home")],     # Additional fields
        )
    """
    return create_listing_with(identity, url, templates, items, fields)


def create_listing_with(
    manipulation: ContextManipulation,
    url: str,
    templates: Iterable[str | os.PathLike[str]],
    items: Iterable[Renderable],
    fields: Iterable[Field] = (),
) -> Renderable:
    """Like ``create_listing``, rewriting every item's Context first.

    *manipulation* runs on each item's Context before its templates are
    applied.  An empty *items* gives an empty ``body``.
    """
    concatenation = render_and_concat_with(manipulation, templates, items)
    return create_custom_page(url, [("body", concatenation), *fields])


# ---------------------------------------------------------------------------
# Combination
# ---------------------------------------------------------------------------


def combine(x: Renderable, y: Renderable) -> Renderable:
    """Union of two Renderables, *x* taking precedence.

    - Dependencies are ``x``'s followed by ``y``'s.
    - The URL is ``x``'s if it has one, else ``y``'s.
    - On a key collision, the value from ``x`` wins.

    Both operands are rendered concurrently.  If either fails, the other
    is cancelled and the failure propagates.
    """

    async def _render() -> Context:
        x_context, y_context = await _render_both(x, y)
        return {**y_context, **x_context}

    return Renderable(
        _render,
        (*x.dependencies, *y.dependencies),
        x.url if x.url is not None else y.url,
    )


def combine_with_url(url: str, x: Renderable, y: Renderable) -> Renderable:
    """``combine(x, y)`` with its URL, and its ``"url"`` key, forced to *url*."""
    combined = combine(x, y)

    async def _render() -> Context:
        context = await combined.render()
        context["url"] = url
        return context

    return Renderable(_render, combined.dependencies, constant(url))


async def _render_both(x: Renderable, y: Renderable) -> tuple[Context, Context]:
    """Render *x* and *y* concurrently.

    The first failure cancels the sibling.  When both fail before
    cancellation lands, ``x``'s error is the one raised.
    """
    results: dict[int, Context] = {}
    errors: dict[int, Exception] = {}

    async def _force(index: int, renderable: Renderable) -> None:
        try:
            results[index] = await renderable.render()
        except Exception as exc:
            errors[index] = exc
            tg.cancel_scope.cancel()

    async with anyio.create_task_group() as tg:
        tg.start_soon(_force, 0, x)
        tg.start_soon(_force, 1, y)

    if errors:
        raise errors[min(errors)]
    return results[0], results[1]

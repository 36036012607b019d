"""Output writing and staleness checks.

A page is rewritten only when its output file is missing or older than
one of its dependencies.  The dependency list comes straight from the
Renderable, which is why every combinator must keep it complete.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

import anyio

from wren.errors import ResolveError
from wren.manipulations import identity
from wren.render import render_with
from wren.renderable import Renderable
from wren.site import get_site
from wren.urls import to_destination

logger = logging.getLogger("wren.writer")


def is_stale(
    destination: str | os.PathLike[str],
    dependencies: Iterable[str | os.PathLike[str]],
    *,
    site_dir: str | os.PathLike[str] | None = None,
) -> bool:
    """Whether *destination* must be rebuilt.

    True when the destination is missing, or when any dependency is
    missing or was modified after it.  Relative dependencies are
    resolved against *site_dir* when given.
    """
    try:
        built = Path(destination).stat().st_mtime
    except FileNotFoundError:
        return True

    base = Path(site_dir) if site_dir is not None else None
    for dependency in dependencies:
        path = Path(dependency)
        if base is not None and not path.is_absolute():
            path = base / path
        try:
            if path.stat().st_mtime > built:
                return True
        except FileNotFoundError:
            return True
    return False


async def write_page(renderable: Renderable, *, force: bool = False) -> Path | None:
    """Render *renderable* and write its ``body`` to its destination.

    Returns the written path, or ``None`` when the output is up to date.

    Raises:
        ResolveError: If *renderable* has no URL, or its URL leaves the
            destination directory.
    """
    site = get_site()
    url = await renderable.resolve_url()
    if url is None:
        raise ResolveError("<renderable>", "has no url; use combine_with_url to give it one")

    destination = to_destination(url)
    if not force:
        stale = await anyio.to_thread.run_sync(
            lambda: is_stale(destination, renderable.dependencies, site_dir=site.config.site_path),
        )
        if not stale:
            logger.debug("Up to date: %s", destination)
            return None

    context = await renderable.render()
    target = anyio.Path(destination)
    await target.parent.mkdir(parents=True, exist_ok=True)
    await target.write_text(context.get("body", ""), encoding="utf-8")
    logger.info("Wrote %s", destination)
    return destination


async def render_chain(
    templates: Iterable[str | os.PathLike[str]],
    renderable: Renderable,
    *,
    force: bool = False,
) -> Path | None:
    """Render *renderable* through *templates* and write the result."""
    return await write_page(render_with(identity, templates, renderable), force=force)

"""The active site, carried in a ContextVar.

Provides:
- ``Site``: binds a ``SiteConfig`` to the collaborators deferred
  computations need (kida environment, Markdown renderer).
- ``site_var``: The site whose collaborators are used when a
  Renderable is forced.

Renderables never capture a site at construction time.  The site is
looked up when ``render()`` or ``resolve_url()`` actually runs, so the
same Renderable can be evaluated against different configurations.

Thread safety:
    ``ContextVar`` is task-local under asyncio and thread-local under
    free-threading (3.14t).  anyio task groups copy the current context
    into child tasks, so ``combine`` sees the same site in both branches.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import TYPE_CHECKING, Any

import anyio

from wren.config import SiteConfig
from wren.errors import ConfigurationError

if TYPE_CHECKING:
    from kida import Environment

    from wren.markdown import MarkdownRenderer

site_var: ContextVar[Site] = ContextVar("wren_site")
"""The active site. Set by ``Site.activate()``."""


def get_site() -> Site:
    """Return the active site.

    Raises ``ConfigurationError`` if called outside ``Site.activate()``.
    """
    try:
        return site_var.get()
    except LookupError:
        msg = "No active site. Evaluate renderables inside Site.activate() or Site.run()."
        raise ConfigurationError(msg) from None


class Site:
    """Configuration plus lazily-built collaborators for one site.

    Usage::

        site = Site(SiteConfig(site_dir="blog"))
        context = site.run_sync(page.render)
    """

    __slots__ = ("_env", "_markdown", "config")

    def __init__(self, config: SiteConfig | None = None) -> None:
        self.config = config or SiteConfig()
        self._env: Environment | None = None
        self._markdown: MarkdownRenderer | None = None

    @property
    def env(self) -> Environment:
        """The kida environment, created on first template lookup."""
        if self._env is None:
            from wren.templates import create_environment

            self._env = create_environment(self.config, markdown=self._markdown_or_none())
        return self._env

    @property
    def markdown(self) -> MarkdownRenderer:
        """The patitas-backed renderer, created on first Markdown page."""
        if self._markdown is None:
            from wren.markdown import MarkdownRenderer

            self._markdown = MarkdownRenderer(
                plugins=self.config.markdown_plugins,
                highlight=self.config.highlight,
            )
        return self._markdown

    def _markdown_or_none(self) -> MarkdownRenderer | None:
        from wren.markdown import MarkdownNotInstalledError

        try:
            return self.markdown
        except MarkdownNotInstalledError:
            return None

    @contextmanager
    def activate(self) -> Iterator[Site]:
        """Make this the active site for the duration of the block."""
        token = site_var.set(self)
        try:
            yield self
        finally:
            site_var.reset(token)

    async def run[T](self, func: Callable[..., Awaitable[T]], *args: Any) -> T:
        """Await ``func(*args)`` with this site active."""
        with self.activate():
            return await func(*args)

    def run_sync[T](self, func: Callable[..., Awaitable[T]], *args: Any) -> T:
        """Run ``func(*args)`` to completion on a fresh event loop."""
        return anyio.run(self.run, func, *args)

    def __repr__(self) -> str:
        return f"<Site {str(self.config.site_path)!r}>"

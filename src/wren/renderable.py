"""Deferred computations with dependency metadata.

An ``Action`` pairs a coroutine function with the list of files it
reads and, optionally, a deferred URL.  Nothing runs when an action is
built; ``run()`` / ``render()`` / ``resolve_url()`` force it.  Actions
are frozen: every combinator builds a new one, so forcing the same
action twice is safe and yields equal results while the underlying
files are unchanged.

A ``Renderable`` is the action whose result is a page Context.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

# -- Type aliases --

# A page's substitutable fields
type Context = dict[str, str]

# Work that has been described but not performed
type Deferred[T] = Callable[[], Awaitable[T]]


def constant[T](value: T) -> Deferred[T]:
    """A deferred computation that just returns *value*."""

    async def _constant() -> T:
        return value

    return _constant


@dataclass(frozen=True, slots=True)
class Action[T]:
    """A deferred computation plus the files it depends on.

    Attributes:
        function: Coroutine function producing the result.
        dependencies: Every path whose content affects the result (or
            the URL).  Ordered; duplicates are allowed.
        url: Deferred URL, or ``None`` when the result has no canonical
            address.
    """

    function: Deferred[T]
    dependencies: tuple[str, ...] = ()
    url: Deferred[str] | None = None

    @classmethod
    def pure(cls, value: T) -> Action[T]:
        """An action with no dependencies that returns *value*."""
        return cls(constant(value))

    async def run(self) -> T:
        """Force the computation."""
        return await self.function()

    async def resolve_url(self) -> str | None:
        """Force the deferred URL, or return ``None`` when there is none."""
        if self.url is None:
            return None
        return await self.url()

    def map[U](self, func: Callable[[T], U]) -> Action[U]:
        """Post-process the result, keeping dependencies and URL.

        Turns a Renderable into a computed field::

            create_custom_page("index.html", [
                ("latest", post.map(lambda ctx: ctx["title"])),
            ])
        """
        function = self.function

        async def _mapped() -> U:
            return func(await function())

        return Action(_mapped, self.dependencies, self.url)


@dataclass(frozen=True, slots=True)
class Renderable(Action[Context]):
    """A composable unit of page content.

    Forcing ``render()`` yields the page Context.  When ``url`` is
    present, the construction operations in ``wren.renderables``
    guarantee the Context's ``"url"`` key matches it.
    """

    async def render(self) -> Context:
        """Force the Context-producing computation."""
        return await self.function()

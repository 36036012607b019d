"""Markdown renderer wrapping patitas.

Used by the page reader to turn Markdown page bodies into HTML, and
registered as a ``markdown`` filter on the site's kida environment.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from wren.markdown.errors import MarkdownNotInstalledError

if TYPE_CHECKING:
    from patitas import Markdown

# Extensions the page reader treats as Markdown sources
MARKDOWN_EXTENSIONS = frozenset({
    ".markdown", ".md", ".mdn", ".mdwn", ".mkd", ".mkdn", ".mkdwn",
})


class MarkdownRenderer:
    """Turns the body of a Markdown page into the HTML stored under ``body``.

    ``Site.markdown`` builds one from ``SiteConfig.markdown_plugins`` and
    ``SiteConfig.highlight`` on first use, and the same instance backs
    the ``markdown`` template filter.
    ``plugins=None`` enables every patitas plugin.
    """

    def __init__(
        self,
        *,
        plugins: list[str] | tuple[str, ...] | None = None,
        highlight: bool = False,
    ) -> None:
        self._md: Markdown = _get_markdown(plugins=plugins, highlight=highlight)

    def render(self, source: str) -> str:
        """HTML for *source*; an empty body stays empty."""
        if not source:
            return ""
        return self._md(source)


def _get_markdown(
    *,
    plugins: list[str] | tuple[str, ...] | None,
    highlight: bool,
) -> Markdown:
    """Build the patitas parser, or explain how to install the markdown extra."""
    try:
        from patitas import Markdown
    except ImportError:
        msg = (
            "wren.markdown requires 'patitas' for Markdown rendering. "
            "Install with: pip install wren[markdown]"
        )
        raise MarkdownNotInstalledError(msg) from None

    return Markdown(plugins=list(plugins) if plugins else ["all"], highlight=highlight)

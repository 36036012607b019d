"""Template filter registration for Markdown rendering.

Lets templates use ``{{ summary | markdown }}`` on front-matter values
that are not rendered by the page reader.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from wren.markdown.renderer import MarkdownRenderer

if TYPE_CHECKING:
    from kida import Environment


def register_markdown_filter(
    env: Environment,
    renderer: MarkdownRenderer,
    *,
    filter_name: str = "markdown",
) -> MarkdownRenderer:
    """Register *renderer* as a kida template filter on *env*.

    Returns the renderer so callers can chain it into other setup code.
    """
    env.update_filters({filter_name: renderer.render})
    return renderer

"""Markdown rendering for wren via patitas.

Page bodies with a Markdown extension are rendered by the page reader;
templates can render other values with ``{{ value | markdown }}``.

Requires ``patitas``::

    pip install wren[markdown]
"""

from wren.markdown.errors import MarkdownError, MarkdownNotInstalledError
from wren.markdown.filters import register_markdown_filter
from wren.markdown.renderer import MARKDOWN_EXTENSIONS, MarkdownRenderer

__all__ = [
    "MARKDOWN_EXTENSIONS",
    "MarkdownError",
    "MarkdownNotInstalledError",
    "MarkdownRenderer",
    "register_markdown_filter",
]

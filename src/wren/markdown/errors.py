"""Errors raised while rendering Markdown page bodies."""

from wren.errors import WrenError


class MarkdownError(WrenError):
    """A Markdown page body could not be rendered."""


class MarkdownNotInstalledError(MarkdownError):
    """A Markdown page was read but the ``markdown`` extra is not installed."""

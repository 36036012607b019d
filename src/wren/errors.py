"""Wren exception hierarchy.

Shared across the algebra and its collaborators so every module raises
and catches the same types.  Combinators never catch these; the first
failure during evaluation propagates to whoever forced the Renderable.
"""

from pathlib import Path


class WrenError(Exception):
    """Base for all wren-specific errors."""


class ConfigurationError(WrenError):
    """Raised when site configuration is invalid.

    Also raised when a Renderable is evaluated outside an active site.
    """


class ReadError(WrenError):
    """A source page is missing or cannot be parsed."""

    def __init__(self, path: str | Path, detail: str = "") -> None:
        self.path = str(path)
        self.detail = detail
        super().__init__(f"{self.path}: {detail}" if detail else self.path)


class ResolveError(WrenError):
    """A source path cannot be mapped to a public URL."""

    def __init__(self, path: str | Path, detail: str = "") -> None:
        self.path = str(path)
        self.detail = detail
        super().__init__(f"{self.path}: {detail}" if detail else self.path)


class TemplateError(WrenError):
    """A template is missing or references a key the context lacks."""

    def __init__(self, template: str | Path, detail: str = "") -> None:
        self.template = str(template)
        self.detail = detail
        super().__init__(f"{self.template}: {detail}" if detail else self.template)


class EvaluationError(WrenError):
    """A computed field of a custom page failed to evaluate.

    Carries the context key the field was bound to.  The original
    exception is chained as ``__cause__``.
    """

    def __init__(self, key: str, detail: str = "") -> None:
        self.key = key
        self.detail = detail
        msg = f"field {key!r} failed"
        super().__init__(f"{msg}: {detail}" if detail else msg)

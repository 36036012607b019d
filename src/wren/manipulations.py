"""Context manipulations.

A manipulation rewrites a Context before it is fed to templates, e.g.
to expose a page's ``title`` under a second key for a listing item.
Every manipulation returns a new dict and leaves the input untouched.
Manipulations that read a key do nothing when the key is absent.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import PurePosixPath

from wren.renderable import Context

type ContextManipulation = Callable[[Context], Context]


def identity(context: Context) -> Context:
    return dict(context)


def rename_value(src: str, dst: str) -> ContextManipulation:
    """Move the value at *src* to *dst*."""

    def _rename(context: Context) -> Context:
        if src not in context:
            return dict(context)
        result = {k: v for k, v in context.items() if k != src}
        result[dst] = context[src]
        return result

    return _rename


def copy_value(
    src: str,
    dst: str,
    transform: Callable[[str], str] = str,
) -> ContextManipulation:
    """Copy the value at *src* to *dst*, optionally transforming it."""

    def _copy(context: Context) -> Context:
        if src not in context:
            return dict(context)
        return {**context, dst: transform(context[src])}

    return _copy


def change_value(key: str, transform: Callable[[str], str]) -> ContextManipulation:
    """Replace the value at *key* with ``transform(value)``."""
    return copy_value(key, key, transform)


def change_extension(key: str, extension: str) -> ContextManipulation:
    """Swap the file extension of the path stored at *key*.

    ``change_extension("url", ".php")`` turns ``posts/a.html`` into
    ``posts/a.php``.  Directory-style values (ending in ``/``) are left
    alone.
    """
    suffix = extension if extension.startswith(".") else f".{extension}"

    def _swap(value: str) -> str:
        if not value or value.endswith("/"):
            return value
        return PurePosixPath(value).with_suffix(suffix).as_posix()

    return change_value(key, _swap)


def compose(*manipulations: ContextManipulation) -> ContextManipulation:
    """Chain manipulations, applied left to right."""

    def _composed(context: Context) -> Context:
        result = dict(context)
        for manipulation in manipulations:
            result = manipulation(result)
        return result

    return _composed

"""Page reader — source file to initial Context.

A page is an optional front-matter block followed by a body::

    ---
    title: Hello
    tags: [python, sites]
    ---
    Body text, rendered as Markdown for Markdown extensions.

The front matter is YAML.  Every value is flattened to a string since
a Context maps strings to strings.
"""

from __future__ import annotations

import datetime
import logging
import os
from pathlib import PurePosixPath
from typing import Any

import anyio
import yaml

from wren.errors import ReadError
from wren.markdown.renderer import MARKDOWN_EXTENSIONS
from wren.site import get_site
from wren.urls import site_relative, to_root, to_url

logger = logging.getLogger("wren.pages")

_FENCE = "---"

# Keys derived from the file itself; front matter cannot change them
_RESERVED_KEYS = ("url", "path")


def parse_page(source: str, *, path: str | os.PathLike[str] = "<string>") -> tuple[dict[str, str], str]:
    """Split *source* into front-matter metadata and body.

    A source without an opening ``---`` line, or without a closing one,
    has no metadata and is all body.

    A leading byte-order mark is dropped.

    Raises:
        ReadError: If the front matter is not a valid YAML mapping, or
            holds a nested mapping.
    """
    source = source.removeprefix("\ufeff")
    lines = source.splitlines(keepends=True)
    if not lines or lines[0].rstrip() != _FENCE:
        return {}, source

    for index, line in enumerate(lines[1:], start=1):
        if line.rstrip() == _FENCE:
            header = "".join(lines[1:index])
            body = "".join(lines[index + 1:])
            break
    else:
        return {}, source

    try:
        data = yaml.safe_load(header)
    except yaml.YAMLError as exc:
        raise ReadError(path, f"invalid front matter: {exc}") from exc

    if data is None:
        return {}, body
    if not isinstance(data, dict):
        raise ReadError(path, "front matter must be a mapping")

    metadata: dict[str, str] = {}
    for key, value in data.items():
        try:
            metadata[str(key)] = _to_str(value)
        except ValueError as exc:
            raise ReadError(path, f"front matter key '{key}': {exc}") from exc
    return metadata, body


def _to_str(value: Any) -> str:
    """Flatten a YAML value to its Context string form."""
    if isinstance(value, dict):
        raise ValueError("nested mappings are not supported")
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return ", ".join(_to_str(item) for item in value)
    return str(value)


async def read_page(path: str | os.PathLike[str]) -> dict[str, str]:
    """Read the page at *path* in the active site.

    The returned Context holds the front matter plus ``url``, ``path``,
    ``root`` (relative path back to the site root) and, unless the page
    has no body text, ``body``.

    Raises:
        ReadError: If the file is missing, undecodable, or has
            malformed front matter.
        ResolveError: If the URL cannot be derived.
    """
    site = get_site()
    relative = site_relative(path, site.config.site_path)
    source_path = anyio.Path(site.config.site_path / relative)

    try:
        source = await source_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ReadError(path, "no such file") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ReadError(path, str(exc)) from exc

    logger.debug("Read page %s", relative)
    metadata, body = parse_page(source, path=path)
    for key in _RESERVED_KEYS:
        metadata.pop(key, None)

    if PurePosixPath(relative).suffix.lower() in MARKDOWN_EXTENSIONS:
        body = site.markdown.render(body)

    url = await to_url(relative)
    context = {
        "root": to_root(url),
        **metadata,
        "url": url,
        "path": relative.as_posix(),
    }
    # Front-matter-only pages carry no body, so they can be combined
    # underneath a page that has one.
    if body.strip():
        context["body"] = body
    return context

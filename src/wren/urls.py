"""Source path to public URL mapping.

URLs are site-relative, use forward slashes, and never start with
``/``.  Files with a renderable extension become ``.html`` pages (or
``name/`` directories when index URLs are enabled); everything else
keeps its path unchanged.
"""

from __future__ import annotations

import os
from pathlib import Path, PurePosixPath

import anyio

from wren.errors import ResolveError
from wren.markdown.renderer import MARKDOWN_EXTENSIONS
from wren.site import get_site

RENDERABLE_EXTENSIONS = MARKDOWN_EXTENSIONS | frozenset({
    ".html", ".htm", ".txt", ".text", ".rst",
})


def has_renderable_extension(path: str | os.PathLike[str]) -> bool:
    """Whether *path* is turned into an HTML page when rendered."""
    return PurePosixPath(os.fspath(path)).suffix.lower() in RENDERABLE_EXTENSIONS


def site_relative(path: str | os.PathLike[str], site_dir: str | Path) -> PurePosixPath:
    """Normalize *path* to a POSIX path relative to *site_dir*.

    Raises:
        ResolveError: If *path* points outside the site directory.
    """
    candidate = Path(path)
    if candidate.is_absolute():
        try:
            candidate = candidate.relative_to(Path(site_dir).absolute())
        except ValueError:
            raise ResolveError(path, "outside the site directory") from None
    relative = PurePosixPath(candidate.as_posix())
    if ".." in relative.parts:
        raise ResolveError(path, "outside the site directory")
    if not relative.parts:
        raise ResolveError(path, "not a file")
    return relative


def url_for(path: str | os.PathLike[str], *, enable_index_url: bool = False) -> str:
    """Compute the URL of *path* without touching the filesystem.

    ::

        url_for("posts/hello.md")                         # "posts/hello.html"
        url_for("posts/hello.md", enable_index_url=True)  # "posts/hello/"
        url_for("css/site.css")                           # "css/site.css"
    """
    relative = site_relative(path, ".")
    if not has_renderable_extension(relative):
        return relative.as_posix()
    if enable_index_url and relative.stem != "index":
        return f"{relative.with_suffix('').as_posix()}/"
    return relative.with_suffix(".html").as_posix()


async def to_url(path: str | os.PathLike[str]) -> str:
    """Resolve the public URL of a source file in the active site.

    Raises:
        ResolveError: If *path* is outside the site or does not exist.
    """
    site = get_site()
    relative = site_relative(path, site.config.site_path)
    if not await anyio.Path(site.config.site_path / relative).is_file():
        raise ResolveError(path, "no such file")
    return url_for(relative, enable_index_url=site.config.enable_index_url)


def to_destination(url: str) -> Path:
    """Output file for *url* inside the active site's destination directory.

    Raises:
        ResolveError: If *url* climbs out of the destination directory.
    """
    relative = PurePosixPath(url.lstrip("/"))
    if ".." in relative.parts:
        raise ResolveError(url, "outside the destination directory")
    destination = get_site().config.destination_path / relative
    if url.endswith("/"):
        return destination / "index.html"
    return destination


def to_root(url: str) -> str:
    """Relative path from the page at *url* back to the site root.

    ::

        to_root("about.html")        # "."
        to_root("posts/hello.html")  # ".."
        to_root("posts/hello/")      # "../.."
    """
    path = url.lstrip("/")
    directory = path if path.endswith("/") else path.rpartition("/")[0]
    depth = sum(1 for part in directory.split("/") if part)
    return "/".join([".."] * depth) or "."

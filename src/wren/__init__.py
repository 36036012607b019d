"""Wren — the content-composition core of a static site generator.

Pages are Renderables: a deferred Context, an optional deferred URL, and
the list of files they depend on.  Renderables are built from source
files or explicit fields, combined, and aggregated into listings.
Nothing is read until a Renderable is forced.

Basic usage::

    from wren import Site, SiteConfig, combine, create_page_path

    page = combine(create_page_path("about.md"), create_page_path("defaults.md"))
    site = Site(SiteConfig(site_dir="blog"))
    context = site.run_sync(page.render)

Markdown pages (``pip install wren[markdown]``) are rendered with patitas;
templates are kida templates addressed by their path in the site.
"""

# Declare free-threading support (PEP 703)
_Py_mod_gil = 0

__version__ = "0.1.0-dev"
__all__ = [
    "Action",
    "ConfigurationError",
    "Context",
    "EvaluationError",
    "ReadError",
    "Renderable",
    "ResolveError",
    "Site",
    "SiteConfig",
    "TemplateError",
    "WrenError",
    "combine",
    "combine_with_url",
    "create_custom_page",
    "create_listing",
    "create_listing_with",
    "create_page_path",
    "get_site",
    "render_chain",
    "render_with",
    "write_page",
]

_RENDERABLES = (
    "combine",
    "combine_with_url",
    "create_custom_page",
    "create_listing",
    "create_listing_with",
    "create_page_path",
)

_ERRORS = (
    "ConfigurationError",
    "EvaluationError",
    "ReadError",
    "ResolveError",
    "TemplateError",
    "WrenError",
)


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import wren`` fast while providing a clean top-level API.
    """
    if name in ("Action", "Context", "Renderable"):
        from wren import renderable as _renderable

        return getattr(_renderable, name)

    if name in _RENDERABLES:
        from wren import renderables as _renderables

        return getattr(_renderables, name)

    if name == "SiteConfig":
        from wren.config import SiteConfig

        return SiteConfig

    if name in ("Site", "get_site"):
        from wren import site as _site

        return getattr(_site, name)

    if name == "render_with":
        from wren.render import render_with

        return render_with

    if name in ("render_chain", "write_page"):
        from wren import writer as _writer

        return getattr(_writer, name)

    if name in _ERRORS:
        from wren import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)

"""Kida environment setup and template application.

Templates are addressed by their path inside the site directory, the
same path that ends up in a Renderable's dependency list.  The
environment is created once per ``Site`` and reused for every page.

Templates must be self-contained.  A template that extends, includes,
imports or embeds another would make the rendered output depend on a
file that no dependency list records, so it is rejected.
"""

from __future__ import annotations

import logging
import os
import re
from typing import TYPE_CHECKING

from kida import Environment, FileSystemLoader
from kida import TemplateError as KidaTemplateError

from wren.errors import ResolveError, TemplateError
from wren.site import get_site
from wren.urls import site_relative

if TYPE_CHECKING:
    from collections.abc import Mapping

    from kida import Template

    from wren.config import SiteConfig
    from wren.markdown import MarkdownRenderer

logger = logging.getLogger("wren.templates")

# Tags that pull another template into the one being rendered
_REFERENCE_TAG = re.compile(
    r"\{%-?\s*(?P<tag>extends|include|import|from|embed)\b",
)


def create_environment(
    config: SiteConfig,
    *,
    markdown: MarkdownRenderer | None = None,
) -> Environment:
    """Create a kida Environment rooted at the site directory.

    Autoescaping is off by default: context values such as ``body`` are
    already-rendered HTML produced by the page reader or by earlier
    templates in a chain.
    """
    env = Environment(
        loader=FileSystemLoader(str(config.site_path)),
        autoescape=config.autoescape,
        trim_blocks=config.trim_blocks,
        lstrip_blocks=config.lstrip_blocks,
    )

    if markdown is not None:
        from wren.markdown import register_markdown_filter

        register_markdown_filter(env, markdown)

    return env


def apply_template(template_path: str | os.PathLike[str], context: Mapping[str, str]) -> str:
    """Render the template at *template_path* with *context*.

    The template must be self-contained: ``{% extends %}``,
    ``{% include %}``, ``{% import %}``, ``{% from %}`` and
    ``{% embed %}`` are refused, since only *template_path* itself is
    recorded as a dependency of the pages it renders.

    Raises:
        TemplateError: If the template is missing, fails to compile,
            references another template, or references a key that
            *context* lacks.
    """
    site = get_site()
    try:
        name = site_relative(template_path, site.config.site_path).as_posix()
    except ResolveError as exc:
        raise TemplateError(template_path, exc.detail) from exc

    logger.debug("Applying template %s", name)
    try:
        template = site.env.get_template(name)
        _check_self_contained(site.env, name, template, template_path)
        return template.render(dict(context))
    except KidaTemplateError as exc:
        raise TemplateError(template_path, str(exc)) from exc


def _check_self_contained(
    env: Environment,
    name: str,
    template: Template,
    template_path: str | os.PathLike[str],
) -> None:
    metadata = template.template_metadata()
    if metadata is not None and metadata.extends:
        raise TemplateError(
            template_path,
            f"extends {metadata.extends!r}; templates must be self-contained",
        )

    source, _ = env.loader.get_source(name)
    match = _REFERENCE_TAG.search(source)
    if match is not None:
        raise TemplateError(
            template_path,
            f"uses {{% {match['tag']} %}}; templates must be self-contained",
        )

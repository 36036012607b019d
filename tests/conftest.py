"""Shared pytest configuration for wren tests.

Provides a throwaway site directory and a ``Site`` bound to it.  Tests
force Renderables with ``await site.run(renderable.render)`` so the site
is active only for the evaluation under test.
"""

from pathlib import Path

import pytest

from wren.config import SiteConfig
from wren.site import Site


def write_file(root: Path, relative: str, text: str) -> Path:
    """Write *text* to ``root / relative``, creating parent directories."""
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def site_dir(tmp_path: Path) -> Path:
    """A small site: two posts, a metadata-only page, and templates."""
    root = tmp_path / "site"
    write_file(root, "a.md", "---\ntitle: A\n---\n")
    write_file(root, "b.md", "---\ntitle: B\n---\nhi\n")
    write_file(root, "about.html", "---\ntitle: About\n---\n<p>About us</p>")
    write_file(root, "posts/first.html", "---\ntitle: First\n---\none")
    write_file(root, "posts/second.html", "---\ntitle: Second\n---\ntwo")
    write_file(root, "templates/item.html", "<li>{{ title }}</li>")
    write_file(root, "templates/wrap.html", "<ul>{{ body }}</ul>")
    write_file(root, "templates/default.html", "<title>{{ title }}</title>{{ body }}")
    return root


@pytest.fixture
def site(site_dir: Path) -> Site:
    return Site(SiteConfig(site_dir=site_dir))

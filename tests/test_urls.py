"""Tests for wren.urls — source path to URL mapping."""

from pathlib import Path

import pytest

from wren.config import SiteConfig
from wren.errors import ResolveError
from wren.site import Site
from wren.urls import has_renderable_extension, site_relative, to_destination, to_root, to_url, url_for


class TestUrlFor:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("about.md", "about.html"),
            ("posts/hello.markdown", "posts/hello.html"),
            ("posts/hello.html", "posts/hello.html"),
            ("notes.txt", "notes.html"),
            ("css/site.css", "css/site.css"),
            ("images/logo.png", "images/logo.png"),
            ("./about.md", "about.html"),
        ],
    )
    def test_plain_urls(self, path: str, expected: str) -> None:
        assert url_for(path) == expected

    def test_index_urls(self) -> None:
        assert url_for("posts/hello.md", enable_index_url=True) == "posts/hello/"

    def test_index_page_keeps_html(self) -> None:
        assert url_for("posts/index.md", enable_index_url=True) == "posts/index.html"

    def test_index_urls_ignore_static_files(self) -> None:
        assert url_for("css/site.css", enable_index_url=True) == "css/site.css"

    def test_parent_path_rejected(self) -> None:
        with pytest.raises(ResolveError):
            url_for("../secret.md")


class TestHelpers:
    def test_renderable_extension_case_insensitive(self) -> None:
        assert has_renderable_extension("README.MD")
        assert not has_renderable_extension("favicon.ico")

    def test_site_relative_absolute_inside(self, tmp_path: Path) -> None:
        assert site_relative(tmp_path / "a" / "b.md", tmp_path).as_posix() == "a/b.md"

    def test_site_relative_absolute_outside(self, tmp_path: Path) -> None:
        with pytest.raises(ResolveError):
            site_relative("/elsewhere/b.md", tmp_path)

    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("about.html", "."),
            ("posts/hello.html", ".."),
            ("posts/2024/hello.html", "../.."),
            ("posts/hello/", "../.."),
            ("/about.html", "."),
        ],
    )
    def test_to_root(self, url: str, expected: str) -> None:
        assert to_root(url) == expected


class TestToUrl:
    async def test_existing_file(self, site: Site) -> None:
        assert await site.run(to_url, "posts/first.html") == "posts/first.html"

    async def test_missing_file(self, site: Site) -> None:
        with pytest.raises(ResolveError, match="no such file"):
            await site.run(to_url, "posts/missing.md")

    async def test_index_url_config(self, site_dir: Path) -> None:
        site = Site(SiteConfig(site_dir=site_dir, enable_index_url=True))
        assert await site.run(to_url, "about.html") == "about/"


class TestToDestination:
    def test_file_url(self, site: Site, site_dir: Path) -> None:
        with site.activate():
            assert to_destination("posts/a.html") == site_dir / "_site" / "posts" / "a.html"

    def test_directory_url(self, site: Site, site_dir: Path) -> None:
        with site.activate():
            assert to_destination("posts/a/") == site_dir / "_site" / "posts" / "a" / "index.html"

    def test_absolute_destination(self, site_dir: Path, tmp_path: Path) -> None:
        out = tmp_path / "out"
        with Site(SiteConfig(site_dir=site_dir, destination_dir=out)).activate():
            assert to_destination("a.html") == out / "a.html"

    @pytest.mark.parametrize("url", ["../x.html", "posts/../../x.html", "/../x/"])
    def test_url_escaping_destination(self, site: Site, url: str) -> None:
        with site.activate(), pytest.raises(ResolveError, match="outside the destination"):
            to_destination(url)

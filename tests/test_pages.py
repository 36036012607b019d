"""Tests for wren.pages — front matter parsing and page reading."""

from pathlib import Path

import pytest

from conftest import write_file
from wren.config import SiteConfig
from wren.errors import ReadError
from wren.pages import parse_page, read_page
from wren.site import Site

# ── parse_page ───────────────────────────────────────────────────────────


class TestParsePage:
    def test_no_front_matter(self) -> None:
        assert parse_page("just text") == ({}, "just text")

    def test_front_matter_and_body(self) -> None:
        metadata, body = parse_page("---\ntitle: Hello\nauthor: Ada\n---\nBody\n")
        assert metadata == {"title": "Hello", "author": "Ada"}
        assert body == "Body\n"

    def test_unclosed_front_matter_is_body(self) -> None:
        source = "---\ntitle: Hello\nno closing fence"
        assert parse_page(source) == ({}, source)

    def test_empty_front_matter(self) -> None:
        assert parse_page("---\n---\nBody") == ({}, "Body")

    def test_values_are_flattened_to_strings(self) -> None:
        metadata, _ = parse_page(
            "---\n"
            "count: 3\n"
            "draft: false\n"
            "date: 2024-05-01\n"
            "tags: [python, sites]\n"
            "subtitle:\n"
            "---\n"
        )
        assert metadata == {
            "count": "3",
            "draft": "false",
            "date": "2024-05-01",
            "tags": "python, sites",
            "subtitle": "",
        }

    def test_invalid_yaml(self) -> None:
        with pytest.raises(ReadError, match="invalid front matter"):
            parse_page("---\ntitle: [unclosed\n---\n", path="bad.md")

    def test_non_mapping_front_matter(self) -> None:
        with pytest.raises(ReadError, match="must be a mapping") as exc_info:
            parse_page("---\n- a\n- b\n---\n", path="list.md")
        assert exc_info.value.path == "list.md"

    def test_nested_mapping_rejected(self) -> None:
        with pytest.raises(ReadError, match="'author'.*nested mapping") as exc_info:
            parse_page("---\nauthor:\n  name: Ada\n---\n", path="nested.md")
        assert exc_info.value.path == "nested.md"

    def test_mapping_inside_list_rejected(self) -> None:
        with pytest.raises(ReadError, match="nested mapping"):
            parse_page("---\nlinks: [{href: a.html}]\n---\n")

    def test_byte_order_mark_is_dropped(self) -> None:
        metadata, body = parse_page("\ufeff---\ntitle: Hello\n---\nBody")
        assert metadata == {"title": "Hello"}
        assert body == "Body"


# ── read_page ────────────────────────────────────────────────────────────


class TestReadPage:
    async def test_html_page(self, site: Site) -> None:
        context = await site.run(read_page, "about.html")
        assert context == {
            "root": ".",
            "title": "About",
            "url": "about.html",
            "path": "about.html",
            "body": "<p>About us</p>",
        }

    async def test_markdown_body_is_rendered(self, site: Site) -> None:
        context = await site.run(read_page, "b.md")
        assert context["url"] == "b.html"
        assert "<p>hi</p>" in context["body"]

    async def test_metadata_only_page_has_no_body(self, site: Site) -> None:
        context = await site.run(read_page, "a.md")
        assert "body" not in context
        assert context["title"] == "A"

    async def test_root_for_nested_page(self, site: Site) -> None:
        context = await site.run(read_page, "posts/first.html")
        assert context["root"] == ".."

    async def test_front_matter_cannot_override_url_or_path(self, site: Site, site_dir: Path) -> None:
        write_file(site_dir, "sneaky.html", "---\nurl: elsewhere.html\npath: x\n---\nbody")
        context = await site.run(read_page, "sneaky.html")
        assert context["url"] == "sneaky.html"
        assert context["path"] == "sneaky.html"

    async def test_front_matter_can_override_root(self, site: Site, site_dir: Path) -> None:
        write_file(site_dir, "rooted.html", "---\nroot: https://example.com\n---\nbody")
        context = await site.run(read_page, "rooted.html")
        assert context["root"] == "https://example.com"

    async def test_missing_page(self, site: Site) -> None:
        with pytest.raises(ReadError, match="no such file") as exc_info:
            await site.run(read_page, "nope.md")
        assert exc_info.value.path == "nope.md"

    async def test_byte_order_mark_before_front_matter(self, site: Site, site_dir: Path) -> None:
        (site_dir / "bom.html").write_text("---\ntitle: Marked\n---\nbody", encoding="utf-8-sig")
        context = await site.run(read_page, "bom.html")
        assert context["title"] == "Marked"
        assert context["body"] == "body"

    async def test_index_url_page(self, site_dir: Path) -> None:
        site = Site(SiteConfig(site_dir=site_dir, enable_index_url=True))
        context = await site.run(read_page, "posts/first.html")
        assert context["url"] == "posts/first/"
        assert context["root"] == "../.."

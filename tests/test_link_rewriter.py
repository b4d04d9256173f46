"""Unit tests for rewriting links between content files into site routes."""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import pytest
from bs4 import BeautifulSoup

from space_pages.config import SiteConfig, SiteMetadata
from space_pages.content import ContentItem
from space_pages.generator import HtmlContentRenderer
from space_pages.generator.link_rewriter import _build_link_rewriter, content_path_to_route

if typ.TYPE_CHECKING:
    import collections.abc as cabc

CONTENT_ROOT = Path("/site/content")


def _render_links(
    markdown: str,
    *,
    base_url: str = "/",
    known_routes: cabc.Collection[str] | None = None,
) -> list[str]:
    item = ContentItem(
        path=CONTENT_ROOT / "docs" / "java" / "virtual_threads.md",
        slug="virtual_threads",
        route="/docs/java/virtual_threads/",
        title="Virtual Threads",
        body=markdown,
    )
    site = SiteConfig(site=SiteMetadata(content_dir=CONTENT_ROOT, base_url=base_url))
    extension = _build_link_rewriter(
        item, content_root=CONTENT_ROOT, site=site, known_routes=known_routes
    )
    html = HtmlContentRenderer().render(markdown, link_extension=extension).html
    return [a["href"] for a in BeautifulSoup(html, "html.parser").find_all("a")]


@pytest.mark.parametrize(
    ("target", "expected"),
    [
        ("scoped_value.md", "/docs/java/scoped_value/"),
        ("./scoped_value.md#usage", "/docs/java/scoped_value/#usage"),
        ("../kafka/producer_deepdive.mdx", "/docs/kafka/producer_deepdive/"),
        ("../index.md", "/docs/"),
        ("/about", "/about"),
        ("/docs/index.mdx?tab=1", "/docs/?tab=1"),
    ],
)
def test_content_links_become_routes(target: str, expected: str) -> None:
    """Relative and root-relative content links resolve to page routes."""
    assert _render_links(f"[link]({target})") == [expected]


@pytest.mark.parametrize(
    "target",
    [
        "https://example.com/a.md",
        "mailto:me@example.com",
        "#section",
        "//cdn.example.com/x.js",
        "diagram.png",
        "../../../outside.md",
    ],
)
def test_other_links_are_left_alone(target: str) -> None:
    """External links, anchors, assets, and links escaping the root are untouched."""
    assert _render_links(f"[link]({target})") == [target]


def test_base_url_prefix_is_applied() -> None:
    """Routes gain the configured base URL."""
    links = _render_links("[a](scoped_value.md) [b](/about/)", base_url="/space/")
    assert links == ["/space/docs/java/scoped_value/", "/space/about/"]


def test_unknown_route_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    """Links to content that is not published are rewritten but reported."""
    with caplog.at_level(logging.WARNING, logger="space_pages.generator.link_rewriter"):
        links = _render_links("[gone](gone.md)", known_routes={"/docs/"})
    assert links == ["/docs/java/gone/"]
    assert any("not a page" in record.getMessage() for record in caplog.records)


@pytest.mark.parametrize(
    ("path", "route"),
    [
        ("index.md", "/"),
        ("docs/index.mdx", "/docs/"),
        ("blogs/adr_introduction.md", "/blogs/adr_introduction/"),
        ("docs/diagram.svg", None),
    ],
)
def test_content_path_to_route(path: str, route: str | None) -> None:
    """File paths map to the routes the navigation tree assigns."""
    assert content_path_to_route(path) == route

"""Helpers for rewriting links between content files into site URLs."""

from __future__ import annotations

import logging
import posixpath
import typing as typ
from urllib.parse import urlsplit

from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

from space_pages._constants import CONTENT_SUFFIXES, INDEX_SLUG

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path
    from xml.etree.ElementTree import Element

    from markdown import Markdown

    from space_pages.config import SiteConfig
    from space_pages.content import ContentItem
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    Element = typ.Any

logger = logging.getLogger(__name__)

_EXTERNAL_PREFIXES = ("http://", "https://", "mailto:", "tel:", "data:", "javascript:")


def _build_link_rewriter(
    item: ContentItem,
    *,
    content_root: Path,
    site: SiteConfig,
    known_routes: cabc.Collection[str] | None = None,
) -> Extension:
    """Return a RelativeLinkExtension configured for the provided content item."""
    relative = item.path.parent.relative_to(content_root).as_posix()
    base_dir = "" if relative == "." else relative
    return RelativeLinkExtension(
        base_dir,
        url_for=site.url_for,
        known_routes=frozenset(known_routes) if known_routes is not None else None,
        source=str(item.path),
    )


def content_path_to_route(path: str) -> str | None:
    """Return the site route for a content-root-relative file path.

    Examples
    --------
    >>> content_path_to_route("docs/kafka/producer_deepdive.mdx")
    '/docs/kafka/producer_deepdive/'
    >>> content_path_to_route("docs/index.md")
    '/docs/'
    >>> content_path_to_route("docs/diagram.png") is None
    True
    """
    stem, suffix = posixpath.splitext(path)
    if suffix.lower() not in CONTENT_SUFFIXES:
        return None
    parts = [part for part in stem.split("/") if part]
    if parts and parts[-1] == INDEX_SLUG:
        parts = parts[:-1]
    if not parts:
        return "/"
    return "/" + "/".join(parts) + "/"


class RelativeLinkExtension(Extension):
    """Rewrite links to sibling content files into site routes.

    Insert this extension into a ``markdown.Markdown`` instance so that
    intra-site links written against the source tree (``./intro.md``,
    ``../java/virtual_threads.mdx#usage``) point at the generated pages
    (``/docs/java/virtual_threads/#usage``). Root-relative links gain the
    configured base URL. Links to content that does not exist are logged.
    """

    def __init__(
        self,
        base_dir: str,
        *,
        url_for: cabc.Callable[[str], str],
        known_routes: frozenset[str] | None = None,
        source: str = "<content>",
    ) -> None:
        super().__init__()
        self.base_dir = base_dir
        self.url_for = url_for
        self.known_routes = known_routes
        self.source = source

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the relative-link treeprocessor on the Markdown instance."""
        processor = RelativeLinkTreeprocessor(md, self)
        md.treeprocessors.register(processor, "space_pages_relative_links", 15)


class RelativeLinkTreeprocessor(Treeprocessor):
    """Rewrite relative markdown links to generated page URLs."""

    def __init__(self, md: Markdown, extension: RelativeLinkExtension) -> None:
        super().__init__(md)
        self.extension = extension

    def run(self, root: Element) -> Element:
        """Rewrite anchors in the parsed markdown tree to site URLs."""
        for element in root.iter():
            if element.tag == "a":
                rewritten = self._rewrite(element.get("href"))
                if rewritten:
                    element.set("href", rewritten)
        return root

    def _rewrite(self, target: str | None) -> str | None:
        """Return the site URL for ``target``, or None to leave it untouched."""
        if not target:
            return None
        lower = target.lower()
        if lower.startswith(_EXTERNAL_PREFIXES) or target.startswith(("#", "//")):
            return None
        parsed = urlsplit(target)
        if parsed.scheme or parsed.netloc or not parsed.path:
            return None

        if parsed.path.startswith("/"):
            route = content_path_to_route(parsed.path) or parsed.path
        else:
            joined = posixpath.normpath(
                posixpath.join(self.extension.base_dir, parsed.path)
            )
            if joined.startswith("../") or joined == "..":
                return None
            route = content_path_to_route(joined)
            if route is None:
                return None

        self._check_route(route, target)
        url = self.extension.url_for(route)
        if parsed.query:
            url = f"{url}?{parsed.query}"
        if parsed.fragment:
            url = f"{url}#{parsed.fragment}"
        return url

    def _check_route(self, route: str, target: str) -> None:
        known = self.extension.known_routes
        if known is None or not route.endswith("/"):
            return
        if route not in known:
            logger.warning(
                "%s: link '%s' points at '%s', which is not a page",
                self.extension.source,
                target,
                route,
            )


__all__ = [
    "RelativeLinkExtension",
    "RelativeLinkTreeprocessor",
    "_build_link_rewriter",
    "content_path_to_route",
]

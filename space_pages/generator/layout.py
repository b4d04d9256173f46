"""Compose the shared page chrome around rendered content.

:class:`LayoutComposer` receives the build's :class:`NavigationTree` as a
constructor argument and turns it into navbar, sidebar, breadcrumb and
previous/next context for ``layout.jinja``. It owns no state beyond those
inputs and performs no I/O apart from loading templates.

Example
-------
>>> from space_pages.generator import LayoutComposer
>>> composer = LayoutComposer(site_config, tree)  # doctest: +SKIP
>>> html = composer.compose(rendered_page)  # doctest: +SKIP
"""

from __future__ import annotations

import datetime as dt
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader
from markupsafe import Markup

from space_pages._constants import PAGE_MANIFEST_FILENAME, PYGMENTS_CSS_PATH
from space_pages.navigation import EntryKind, NavNode

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from space_pages.config import SiteConfig
    from space_pages.navigation import NavigationTree

    from .models import RenderedPage

DATE_FORMAT = "%b %d, %Y"


class LayoutComposer:
    """Wrap rendered pages in banner, navbar, sidebar, TOC and footer chrome."""

    def __init__(
        self,
        site_config: SiteConfig,
        tree: NavigationTree,
        *,
        templates_dir: Path | None = None,
        listing_routes: cabc.Collection[str] = (),
    ) -> None:
        """Initialize the composer and its Jinja environment.

        Parameters
        ----------
        site_config : SiteConfig
            Parsed site configuration (chrome settings and feature flags).
        tree : NavigationTree
            Navigation tree computed for this build.
        templates_dir : Path, optional
            Directory containing Jinja templates. Defaults to
            ``space_pages/templates``.
        listing_routes : Collection[str], optional
            Directory routes served by generated listing pages (the blog
            index), used as landing links for directories without an
            ``index`` page.
        """
        self.site = site_config
        self.tree = tree
        self.listing_routes = frozenset(listing_routes)
        self.templates_dir = templates_dir or Path(__file__).resolve().parents[1] / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.globals["url_for"] = site_config.url_for
        self.template = self.env.get_template("layout.jinja")

    def compose(self, page: RenderedPage) -> str:
        """Return the complete HTML document for ``page``."""
        item = page.item
        route = item.route
        node = self.tree.find(route)
        previous, following = self.tree.neighbours(route)
        section = self.tree.section_for(route)
        context = {
            "page": {
                "title": item.title,
                "description": item.description,
                "date": _format_date(item.date),
                "date_iso": item.date.isoformat() if item.date else None,
                "tags": list(item.tags),
                "reading_minutes": (
                    page.content.reading_minutes
                    if self.site.features.reading_time
                    else None
                ),
                "route": route,
                "standalone": node.kind is EntryKind.PAGE,
            },
            "body": Markup(page.content.html),  # noqa: S704 - renderer output
            "toc_items": page.content.toc_items,
            "breadcrumbs": self._breadcrumbs(route),
            "previous": self._neighbour_link(previous),
            "next": self._neighbour_link(following),
            "edit_url": self._edit_url(item.path),
        }
        return self._render(context, route=route, section=section)

    def compose_listing(
        self,
        *,
        title: str,
        description: str | None,
        route: str,
        body_html: str,
        section_slug: str,
    ) -> str:
        """Return a complete HTML document for a generated listing page."""
        section = self.tree.section(section_slug)
        context = {
            "page": {
                "title": title,
                "description": description,
                "date": None,
                "date_iso": None,
                "tags": [],
                "reading_minutes": None,
                "route": route,
                "standalone": False,
            },
            "body": Markup(body_html),  # noqa: S704 - template output
            "toc_items": [],
            "breadcrumbs": [{"title": title, "href": None}],
            "previous": None,
            "next": None,
            "edit_url": None,
        }
        return self._render(context, route=route, section=section)

    def _render(
        self, context: dict[str, typ.Any], *, route: str, section: NavNode | None
    ) -> str:
        features = self.site.features
        context.update(
            {
                "site": self.site.site,
                "navbar": self.site.navbar,
                "banner": self.site.banner,
                "footer": self.site.footer,
                "feedback": self.site.feedback,
                "sidebar_config": self.site.sidebar,
                "toc_config": self.site.toc,
                "features": features,
                "nav_links": self._navbar_links(route),
                "sidebar": self._sidebar(section, route),
                "pygments_css_url": (
                    self.site.url_for("/" + PYGMENTS_CSS_PATH)
                    if features.code_highlight
                    else None
                ),
                "search_manifest_url": (
                    self.site.url_for("/" + PAGE_MANIFEST_FILENAME)
                    if features.search
                    else None
                ),
                "generated_at": dt.datetime.now(dt.UTC),
            }
        )
        html = self.template.render(**context)
        if not html.endswith("\n"):
            html += "\n"
        return html

    def _navbar_links(self, route: str) -> list[dict[str, typ.Any]]:
        """Return top-level navbar entries; groups never appear in the navbar."""
        links: list[dict[str, typ.Any]] = []
        for node in self.tree.root.visible_children():
            if node.route == "/" and not node.is_directory:
                continue
            match node.kind:
                case EntryKind.PAGE | EntryKind.DOC:
                    href = self._landing_route(node)
                    if href is None:
                        continue
                    links.append(
                        {
                            "title": node.title,
                            "href": self.site.url_for(href),
                            "active": _contains(node, route),
                        }
                    )
                case EntryKind.GROUP:
                    continue
                case _ as unreachable:
                    typ.assert_never(unreachable)
        return links

    def _sidebar(self, section: NavNode | None, route: str) -> list[dict[str, typ.Any]]:
        """Return the sidebar tree for the section holding ``route``."""
        if section is None or not section.is_directory:
            return []
        return self._sidebar_items(section, route, depth=1)

    def _sidebar_items(
        self, directory: NavNode, route: str, *, depth: int
    ) -> list[dict[str, typ.Any]]:
        items: list[dict[str, typ.Any]] = []
        for node in directory.visible_children():
            match node.kind:
                case EntryKind.PAGE:
                    continue
                case EntryKind.GROUP:
                    items.append({"type": "label", "title": node.title})
                case EntryKind.DOC if node.is_directory:
                    active = _contains(node, route)
                    landing = node.item.route if node.item else None
                    items.append(
                        {
                            "type": "folder",
                            "title": node.title,
                            "href": self.site.url_for(landing) if landing else None,
                            "active": landing == route,
                            "open": active
                            or depth < self.site.sidebar.default_menu_collapse_level,
                            "children": self._sidebar_items(
                                node, route, depth=depth + 1
                            ),
                        }
                    )
                case EntryKind.DOC:
                    if node.route is None:
                        continue
                    items.append(
                        {
                            "type": "link",
                            "title": node.title,
                            "href": self.site.url_for(node.route),
                            "active": node.route == route,
                        }
                    )
                case _ as unreachable:
                    typ.assert_never(unreachable)
        return items

    def _breadcrumbs(self, route: str) -> list[dict[str, str | None]]:
        crumbs: list[dict[str, str | None]] = []
        for node in self.tree.breadcrumbs(route):
            if node.is_directory:
                landing = self._landing_route(node)
                href = self.site.url_for(landing) if landing else None
            else:
                href = None if node.route == route else self.site.url_for(node.route or "/")
            crumbs.append({"title": node.title, "href": href})
        return crumbs

    def _neighbour_link(self, node: NavNode | None) -> dict[str, str] | None:
        if node is None or node.route is None:
            return None
        return {"title": node.title, "href": self.site.url_for(node.route)}

    def _landing_route(self, node: NavNode) -> str | None:
        """Return where a link to ``node`` should point."""
        if not node.is_directory:
            return node.route
        if node.item is not None:
            return node.item.route
        if node.route in self.listing_routes:
            return node.route
        return _first_page_route(node)

    def _edit_url(self, path: Path) -> str | None:
        project_root = self.site.site.content_dir.parent
        try:
            relative = path.resolve().relative_to(project_root.resolve())
        except ValueError:
            return None
        return self.site.edit_url(relative.as_posix())


def _contains(node: NavNode, route: str) -> bool:
    """Return True when ``route`` is ``node`` itself or one of its descendants."""
    return any(descendant.route == route for descendant in node.walk())


def _first_page_route(node: NavNode) -> str | None:
    for child in node.visible_children():
        if child.is_directory:
            nested = _first_page_route(child)
            if nested:
                return nested
        elif child.item is not None and child.route is not None:
            return child.route
    return None


def _format_date(value: dt.date | None) -> str | None:
    if value is None:
        return None
    return value.strftime(DATE_FORMAT)


__all__ = ["LayoutComposer"]

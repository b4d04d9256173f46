"""Aggregate per-directory menus into the site navigation tree.

The tree is computed once per build by :func:`build_navigation_tree` and then
handed to the generators as an ordinary value. Building it loads every
content item, so front-matter and metadata problems surface here, before any
output is written.

Example
-------
>>> from pathlib import Path
>>> from space_pages.navigation import build_navigation_tree
>>> tree = build_navigation_tree(Path("content"))  # doctest: +SKIP
>>> [node.title for node in tree.root.visible_children()]  # doctest: +SKIP
['About', 'Projects', 'Books', 'Docs', 'Blogs']
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ

from space_pages._constants import INDEX_SLUG, META_FILENAME
from space_pages.content import AmbiguousSlugError, load_content_item, scan_directory

from .meta import load_meta_file
from .models import EntryKind, MenuItem, NavigationError, NavNode
from .resolver import resolve_menu

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from space_pages.content import ContentItem

logger = logging.getLogger(__name__)


@dc.dataclass(slots=True)
class NavigationTree:
    """The full hierarchical menu structure for one build.

    Attributes
    ----------
    root : NavNode
        Directory node for the content root.
    """

    root: NavNode
    _by_route: dict[str, NavNode] = dc.field(init=False, repr=False)
    _trails: dict[str, list[NavNode]] = dc.field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._by_route = {}
        self._trails = {}
        self._index(self.root, [])

    def _index(self, node: NavNode, trail: list[NavNode]) -> None:
        for child in node.children:
            if child.is_directory:
                self._index(child, [*trail, child])
                continue
            if child.item is None or child.route is None:
                continue
            if child.route in self._by_route:
                existing = self._by_route[child.route].item
                other = existing.path if existing else child.route
                msg = f"{child.item.path} and {other} both resolve to {child.route}"
                raise NavigationError(msg)
            self._by_route[child.route] = child
            self._trails[child.route] = [*trail, child]

    def pages(self) -> list[NavNode]:
        """Return every page node in menu order, hidden pages included."""
        return list(self._by_route.values())

    def items(self) -> list[ContentItem]:
        """Return every content item in menu order."""
        return [node.item for node in self._by_route.values() if node.item]

    def find(self, route: str) -> NavNode:
        """Return the page node for ``route``.

        Raises
        ------
        KeyError
            If no content item is published at ``route``.
        """
        try:
            return self._by_route[route]
        except KeyError as exc:
            msg = f"No content item is published at '{route}'."
            raise KeyError(msg) from exc

    def breadcrumbs(self, route: str) -> list[NavNode]:
        """Return the nodes from the top-level section down to ``route``."""
        self.find(route)
        return list(self._trails[route])

    def section_for(self, route: str) -> NavNode:
        """Return the top-level node that contains ``route``."""
        return self.breadcrumbs(route)[0]

    def section(self, slug: str) -> NavNode | None:
        """Return the top-level node named ``slug``, if any."""
        return next((node for node in self.root.children if node.slug == slug), None)

    def neighbours(self, route: str) -> tuple[NavNode | None, NavNode | None]:
        """Return the previous and next doc pages within the same section.

        Only visible ``DOC`` pages take part, in sidebar order, so standalone
        pages and hidden drafts never show up as previous/next links.
        """
        section = self.section_for(route)
        sequence = [
            node
            for node in _iter_visible_pages(section)
            if node.kind is EntryKind.DOC and node.route is not None
        ]
        routes = [node.route for node in sequence]
        if route not in routes:
            return None, None
        idx = routes.index(route)
        previous = sequence[idx - 1] if idx > 0 else None
        following = sequence[idx + 1] if idx + 1 < len(sequence) else None
        return previous, following


def _iter_visible_pages(node: NavNode) -> cabc.Iterator[NavNode]:
    if node.hidden:
        return
    if not node.is_directory:
        if node.item is not None:
            yield node
        return
    for child in node.children:
        yield from _iter_visible_pages(child)


def build_navigation_tree(content_root: Path) -> NavigationTree:
    """Walk ``content_root`` and return the aggregated :class:`NavigationTree`.

    Raises
    ------
    FileNotFoundError
        If ``content_root`` is not a directory.
    NavigationError
        If metadata is duplicated, dangling, malformed, or ambiguous, or a
        nested directory lists a ``page`` entry.
    ContentError
        If any content item has a malformed front-matter header.
    """
    if not content_root.is_dir():
        msg = f"Content directory '{content_root}' not found."
        raise FileNotFoundError(msg)
    root = _build_directory(
        content_root,
        parts=(),
        menu_item=MenuItem(slug="", title="", kind=EntryKind.DOC),
    )
    tree = NavigationTree(root=root)
    logger.debug("navigation tree built with %d pages", len(tree.pages()))
    return tree


def _route(parts: tuple[str, ...]) -> str:
    if not parts:
        return "/"
    return "/" + "/".join(parts) + "/"


def _build_directory(
    path: Path, *, parts: tuple[str, ...], menu_item: MenuItem
) -> NavNode:
    """Return the directory node for ``path`` with its resolved children."""
    try:
        listing = scan_directory(path)
    except AmbiguousSlugError as exc:
        raise NavigationError(str(exc)) from exc

    meta_path = path / META_FILENAME
    entries = load_meta_file(meta_path) if meta_path.is_file() else []
    menu = resolve_menu(entries, listing.slugs, source=str(meta_path))
    nested_pages = [
        entry.slug for entry in menu if parts and entry.kind is EntryKind.PAGE
    ]
    if nested_pages:
        names = ", ".join(f"'{slug}'" for slug in nested_pages)
        msg = (
            f"{meta_path}: page entries are only allowed in the top-level "
            f"{META_FILENAME}: {names}"
        )
        raise NavigationError(msg)

    route = _route(parts)
    node = NavNode(
        slug=menu_item.slug,
        title=menu_item.title,
        kind=menu_item.kind,
        route=route,
        hidden=menu_item.hidden,
        is_directory=True,
    )
    for entry in menu:
        child: NavNode
        if entry.kind is EntryKind.GROUP:
            child = NavNode(
                slug=entry.slug,
                title=entry.title,
                kind=entry.kind,
                route=None,
                hidden=entry.hidden,
            )
        elif entry.slug in listing.directories:
            child = _build_directory(
                listing.directories[entry.slug],
                parts=(*parts, entry.slug),
                menu_item=entry,
            )
        else:
            page_route = route if entry.slug == INDEX_SLUG else _route((*parts, entry.slug))
            item = load_content_item(listing.pages[entry.slug], route=page_route)
            child = NavNode(
                slug=entry.slug,
                title=entry.title if not entry.derived else item.title,
                kind=entry.kind,
                route=page_route,
                item=item,
                hidden=entry.hidden,
            )
            if entry.slug == INDEX_SLUG:
                node.item = item
        node.children.append(child)
    return node


__all__ = ["NavigationTree", "build_navigation_tree"]

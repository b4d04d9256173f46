"""Dataclasses and enums shared by the navigation metadata pipeline."""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from space_pages.content import ContentItem


class NavigationError(ValueError):
    """Raised when navigation metadata is inconsistent with the content tree."""


class EntryKind(enum.StrEnum):
    """How a navigation entry is presented in the site chrome."""

    PAGE = "page"
    DOC = "doc"
    GROUP = "group"


class Display(enum.StrEnum):
    """Whether a navigation entry is listed in menus."""

    NORMAL = "normal"
    HIDDEN = "hidden"


@dc.dataclass(frozen=True, slots=True)
class MetaEntry:
    """One record from a directory's ``_meta.yaml`` mapping."""

    slug: str
    title: str
    kind: EntryKind = EntryKind.DOC
    hidden: bool = False


@dc.dataclass(frozen=True, slots=True)
class MenuItem:
    """An ordered menu entry produced by :func:`resolve_menu`.

    Attributes
    ----------
    slug : str
        Content slug or directory name; free-form for ``GROUP`` labels.
    title : str
        Display title.
    kind : EntryKind
        Presentation kind.
    hidden : bool
        Excluded from menus while remaining reachable by URL.
    derived : bool
        True when the title was derived from the slug because the metadata
        did not list the entry.
    """

    slug: str
    title: str
    kind: EntryKind = EntryKind.DOC
    hidden: bool = False
    derived: bool = False


@dc.dataclass(slots=True)
class NavNode:
    """A node of the navigation tree.

    Directories carry ``children``; pages do not. A directory's ``item`` is
    its ``index`` content item when one exists. ``GROUP`` nodes have neither.
    """

    slug: str
    title: str
    kind: EntryKind
    route: str | None
    item: ContentItem | None = None
    children: list[NavNode] = dc.field(default_factory=list)
    hidden: bool = False
    is_directory: bool = False

    @property
    def has_page(self) -> bool:
        """Return True when the node renders to a page of its own."""
        return self.item is not None

    def visible_children(self) -> list[NavNode]:
        """Return children shown in menus, preserving order."""
        return [child for child in self.children if not child.hidden]

    def walk(self) -> cabc.Iterator[NavNode]:
        """Yield this node and every descendant depth-first in menu order."""
        yield self
        for child in self.children:
            yield from child.walk()


__all__ = [
    "Display",
    "EntryKind",
    "MenuItem",
    "MetaEntry",
    "NavNode",
    "NavigationError",
]

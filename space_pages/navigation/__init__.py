"""Navigation metadata parsing, menu resolution, and the site navigation tree."""

from .meta import load_meta_file, parse_meta_entries
from .models import Display, EntryKind, MenuItem, MetaEntry, NavigationError, NavNode
from .resolver import derive_title, resolve_menu
from .tree import NavigationTree, build_navigation_tree

__all__ = [
    "Display",
    "EntryKind",
    "MenuItem",
    "MetaEntry",
    "NavNode",
    "NavigationError",
    "NavigationTree",
    "build_navigation_tree",
    "derive_title",
    "load_meta_file",
    "parse_meta_entries",
    "resolve_menu",
]

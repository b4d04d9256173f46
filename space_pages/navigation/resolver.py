"""Merge a directory's navigation metadata with the content actually present.

:func:`resolve_menu` is the single place where metadata order, derived titles
and dangling-entry checks are decided. Metadata entries come first, in
metadata order; content the metadata does not mention follows in discovery
order with a title derived from its slug.

Example
-------
>>> from space_pages.navigation.resolver import resolve_menu
>>> menu = resolve_menu({"intro": "Overview", "guide": "Guide"}, ["guide", "intro"])
>>> [(item.slug, item.title) for item in menu]
[('intro', 'Overview'), ('guide', 'Guide')]
"""

from __future__ import annotations

import collections.abc as cabc
import logging
import re

from .meta import parse_meta_entries
from .models import EntryKind, MenuItem, MetaEntry, NavigationError

logger = logging.getLogger(__name__)

_SEPARATOR_PATTERN = re.compile(r"[-_\s]+")
_NUMERIC_PREFIX_PATTERN = re.compile(r"^\d+[.\-_\s]+")


def derive_title(slug: str) -> str:
    """Return a display title for ``slug`` when metadata does not provide one.

    Leading ordering numbers are dropped and word separators become spaces.
    Words that already contain capitals (``AWS``, ``iOS``) keep their casing.

    Examples
    --------
    >>> derive_title("kafka_core_concepts")
    'Kafka Core Concepts'
    >>> derive_title("01-getting-started")
    'Getting Started'
    """
    trimmed = _NUMERIC_PREFIX_PATTERN.sub("", slug) or slug
    words = [word for word in _SEPARATOR_PATTERN.split(trimmed) if word]
    if not words:
        return slug
    return " ".join(
        word if any(char.isupper() for char in word) else word.capitalize()
        for word in words
    )


def resolve_menu(
    metadata: cabc.Sequence[MetaEntry] | cabc.Mapping[str, object],
    discovered: cabc.Sequence[str],
    *,
    source: str = "<meta>",
) -> list[MenuItem]:
    """Return the ordered menu for one directory.

    Parameters
    ----------
    metadata : Sequence[MetaEntry] or Mapping[str, object]
        Parsed metadata records, or a raw ordered mapping of slug to a title
        string or ``{title, type, display}`` record.
    discovered : Sequence[str]
        Slugs of the content files and sub-directories present, in discovery
        order.
    source : str, optional
        Label used in error messages, usually the metadata file path.

    Returns
    -------
    list[MenuItem]
        Metadata entries in metadata order, followed by undocumented content
        with derived titles.

    Raises
    ------
    NavigationError
        If the metadata repeats a key or lists a non-group slug with no
        matching content.
    """
    if isinstance(metadata, cabc.Mapping):
        entries = parse_meta_entries(metadata, source=source)
    else:
        entries = list(metadata)
        _ensure_unique(entries, source)

    present = set(discovered)
    dangling = [
        entry.slug
        for entry in entries
        if entry.kind is not EntryKind.GROUP and entry.slug not in present
    ]
    if dangling:
        missing = ", ".join(f"'{slug}'" for slug in dangling)
        msg = f"{source}: navigation entries without matching content: {missing}"
        raise NavigationError(msg)
    shadowing = [
        entry.slug
        for entry in entries
        if entry.kind is EntryKind.GROUP and entry.slug in present
    ]
    if shadowing:
        names = ", ".join(f"'{slug}'" for slug in shadowing)
        msg = f"{source}: group labels must not reuse content slugs: {names}"
        raise NavigationError(msg)

    menu = [
        MenuItem(slug=entry.slug, title=entry.title, kind=entry.kind, hidden=entry.hidden)
        for entry in entries
    ]
    listed = {entry.slug for entry in entries}
    for slug in discovered:
        if slug in listed:
            continue
        listed.add(slug)
        title = derive_title(slug)
        logger.debug("%s: '%s' not listed in metadata; using '%s'", source, slug, title)
        menu.append(MenuItem(slug=slug, title=title, derived=True))
    return menu


def _ensure_unique(entries: cabc.Sequence[MetaEntry], source: str) -> None:
    seen: set[str] = set()
    for entry in entries:
        if entry.slug in seen:
            msg = f"{source}: duplicate navigation key '{entry.slug}'"
            raise NavigationError(msg)
        seen.add(entry.slug)


__all__ = ["derive_title", "resolve_menu"]

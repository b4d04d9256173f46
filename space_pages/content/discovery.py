"""Discover content files and sub-directories within a content directory."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from space_pages._constants import CONTENT_SUFFIXES, INDEX_SLUG

if typ.TYPE_CHECKING:
    from pathlib import Path


class AmbiguousSlugError(ValueError):
    """Raised when two filesystem entries map onto the same slug."""


@dc.dataclass(slots=True)
class DirectoryListing:
    """Content physically present in one directory.

    Attributes
    ----------
    path : Path
        Directory that was scanned.
    pages : dict[str, Path]
        Content files keyed by slug.
    directories : dict[str, Path]
        Sub-directories keyed by slug.
    """

    path: Path
    pages: dict[str, Path] = dc.field(default_factory=dict)
    directories: dict[str, Path] = dc.field(default_factory=dict)

    @property
    def slugs(self) -> list[str]:
        """Return every slug in discovery order: ``index`` first, then by name."""
        names = set(self.pages) | set(self.directories)
        return sorted(names, key=lambda slug: (slug != INDEX_SLUG, slug))

    @property
    def index_page(self) -> Path | None:
        """Return the directory's landing page, if one exists."""
        return self.pages.get(INDEX_SLUG)


def _is_ignored(path: Path) -> bool:
    return path.name.startswith(("_", "."))


def scan_directory(path: Path) -> DirectoryListing:
    """Return the content files and sub-directories found directly under ``path``.

    Files and directories whose names start with ``_`` or ``.`` are skipped,
    so metadata files and drafts stay out of the site.

    Raises
    ------
    AmbiguousSlugError
        If two files share a stem (``intro.md`` and ``intro.mdx``) or a file
        and a directory share a name.
    """
    listing = DirectoryListing(path=path)
    for entry in sorted(path.iterdir()):
        if _is_ignored(entry):
            continue
        if entry.is_dir():
            listing.directories[entry.name] = entry
        elif entry.suffix.lower() in CONTENT_SUFFIXES:
            existing = listing.pages.get(entry.stem)
            if existing is not None:
                msg = (
                    f"{path}: '{existing.name}' and '{entry.name}' both define "
                    f"the slug '{entry.stem}'"
                )
                raise AmbiguousSlugError(msg)
            listing.pages[entry.stem] = entry

    clashes = sorted(set(listing.pages) & set(listing.directories))
    if clashes:
        names = ", ".join(clashes)
        msg = f"{path}: slugs used by both a file and a directory: {names}"
        raise AmbiguousSlugError(msg)
    return listing


__all__ = ["AmbiguousSlugError", "DirectoryListing", "scan_directory"]

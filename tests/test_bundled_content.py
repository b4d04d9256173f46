"""Checks over the repository's own ``content/`` tree.

Every bundled content file must parse into a non-empty title (and a valid
date when one is given), every ``_meta.yaml`` mapping must have unique keys,
and every non-group entry must resolve to a file or directory. Building the
navigation tree and running ``check_site`` exercises all three at once; the
individual assertions below point at the offending file when one fails.
"""

from __future__ import annotations

import datetime as dt
from pathlib import Path

import pytest

from space_pages._constants import CONTENT_SUFFIXES, META_FILENAME
from space_pages.config import load_site_config
from space_pages.content import load_content_item, scan_directory
from space_pages.generator import check_site
from space_pages.navigation import EntryKind, build_navigation_tree, load_meta_file

REPO_ROOT = Path(__file__).resolve().parents[1]
CONTENT_ROOT = REPO_ROOT / "content"

CONTENT_FILES = sorted(
    path
    for path in CONTENT_ROOT.rglob("*")
    if path.suffix in CONTENT_SUFFIXES
    and not any(part.startswith(("_", ".")) for part in path.relative_to(CONTENT_ROOT).parts)
)
META_FILES = sorted(CONTENT_ROOT.rglob(META_FILENAME))


def _ids(paths: list[Path]) -> list[str]:
    return [path.relative_to(CONTENT_ROOT).as_posix() for path in paths]


@pytest.mark.parametrize("path", CONTENT_FILES, ids=_ids(CONTENT_FILES))
def test_content_front_matter_is_valid(path: Path) -> None:
    """Each content file has a title and, when present, a real date."""
    item = load_content_item(path, route="/")
    assert item.title.strip(), f"{path} has an empty title"
    if item.date is not None:
        assert isinstance(item.date, dt.date)


@pytest.mark.parametrize("meta", META_FILES, ids=_ids(META_FILES))
def test_meta_entries_resolve(meta: Path) -> None:
    """Meta keys are unique and every non-group entry has matching content."""
    entries = load_meta_file(meta)
    slugs = [entry.slug for entry in entries]
    assert len(slugs) == len(set(slugs)), f"duplicate keys in {meta}"
    present = set(scan_directory(meta.parent).slugs)
    dangling = [
        entry.slug
        for entry in entries
        if entry.kind is not EntryKind.GROUP and entry.slug not in present
    ]
    assert not dangling, f"{meta} lists missing content: {dangling}"


def test_bundled_tree_builds() -> None:
    """The whole bundled tree aggregates into navigation without errors."""
    tree = build_navigation_tree(CONTENT_ROOT)
    assert len(tree.pages()) == len(CONTENT_FILES)
    top = [node.title for node in tree.root.visible_children() if node.is_directory]
    assert top == ["Docs", "Blogs"]


def test_bundled_site_checks_clean() -> None:
    """The bundled config and content pass ``pages check``."""
    summary = check_site(load_site_config(REPO_ROOT / "config" / "site.yaml"))
    assert summary.sections == ("about", "project", "books", "docs", "blogs")
    assert summary.blog_posts == 3

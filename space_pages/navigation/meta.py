"""Load per-directory ``_meta.yaml`` navigation metadata.

Each content directory may carry a ``_meta.yaml`` file: an ordered mapping
from slug to either a plain title string or a record with ``title``, ``type``
(``page``, ``doc`` or ``group``) and ``display`` (``normal`` or ``hidden``).
Mapping order defines menu order, so the loader preserves it and rejects
duplicate keys rather than letting the last one win.

Example
-------
>>> from space_pages.navigation.meta import parse_meta_entries
>>> entries = parse_meta_entries(
...     [("intro", "Overview"), ("about", {"title": "About", "type": "page"})]
... )
>>> [(entry.slug, entry.kind.value) for entry in entries]
[('intro', 'doc'), ('about', 'page')]
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from ruamel.yaml import YAML
from ruamel.yaml.constructor import DuplicateKeyError
from ruamel.yaml.error import YAMLError

from .models import Display, EntryKind, MetaEntry, NavigationError

if typ.TYPE_CHECKING:
    from pathlib import Path

RECORD_KEYS = frozenset({"title", "type", "display"})


def load_meta_file(path: Path) -> list[MetaEntry]:
    """Parse ``path`` into ordered :class:`MetaEntry` records.

    Raises
    ------
    NavigationError
        If the file repeats a key, is not a mapping, or holds an invalid
        record.
    """
    loader = YAML(typ="safe", pure=True)
    loader.version = (1, 2)
    loader.allow_duplicate_keys = False
    try:
        with path.open("r", encoding="utf-8") as handle:
            loaded = loader.load(handle)
    except DuplicateKeyError as exc:
        msg = f"{path}: duplicate navigation key ({exc.problem})"
        raise NavigationError(msg) from exc
    except YAMLError as exc:
        msg = f"{path}: invalid navigation metadata: {exc}"
        raise NavigationError(msg) from exc
    if loaded is None:
        return []
    if not isinstance(loaded, dict):
        msg = f"{path}: navigation metadata must be a mapping"
        raise NavigationError(msg)
    return parse_meta_entries(loaded.items(), source=str(path))


def parse_meta_entries(
    pairs: cabc.Iterable[tuple[object, object]] | cabc.Mapping[str, object],
    *,
    source: str = "<meta>",
) -> list[MetaEntry]:
    """Validate slug/record pairs and return ordered :class:`MetaEntry` values.

    Parameters
    ----------
    pairs : Iterable[tuple[object, object]] or Mapping[str, object]
        Ordered slug/value pairs. Values are either a title string or a
        mapping with ``title``, ``type`` and ``display`` keys.
    source : str, optional
        Label used in error messages, usually the metadata file path.

    Raises
    ------
    NavigationError
        If a slug repeats, is empty, or its record is malformed.
    """
    items = pairs.items() if isinstance(pairs, cabc.Mapping) else pairs
    entries: list[MetaEntry] = []
    seen: set[str] = set()
    for raw_slug, payload in items:
        slug = str(raw_slug).strip()
        if not slug:
            msg = f"{source}: navigation keys must not be empty"
            raise NavigationError(msg)
        if slug in seen:
            msg = f"{source}: duplicate navigation key '{slug}'"
            raise NavigationError(msg)
        seen.add(slug)
        entries.append(_build_entry(slug, payload, source))
    return entries


def _build_entry(slug: str, payload: object, source: str) -> MetaEntry:
    match payload:
        case str() as title:
            return MetaEntry(slug=slug, title=_clean_title(title, slug, source))
        case cabc.Mapping():
            unknown = sorted(set(payload) - RECORD_KEYS)
            if unknown:
                msg = f"{source}: entry '{slug}' has unknown keys: {', '.join(unknown)}"
                raise NavigationError(msg)
            title = payload.get("title")
            if not isinstance(title, str):
                msg = f"{source}: entry '{slug}' requires a string 'title'"
                raise NavigationError(msg)
            return MetaEntry(
                slug=slug,
                title=_clean_title(title, slug, source),
                kind=_parse_kind(payload.get("type"), slug, source),
                hidden=_parse_display(payload.get("display"), slug, source)
                is Display.HIDDEN,
            )
        case _:
            msg = f"{source}: entry '{slug}' must be a title or a mapping"
            raise NavigationError(msg)


def _clean_title(title: str, slug: str, source: str) -> str:
    cleaned = title.strip()
    if not cleaned:
        msg = f"{source}: entry '{slug}' has an empty title"
        raise NavigationError(msg)
    return cleaned


def _parse_kind(value: object, slug: str, source: str) -> EntryKind:
    if value is None:
        return EntryKind.DOC
    try:
        return EntryKind(str(value).lower())
    except ValueError as exc:
        allowed = ", ".join(kind.value for kind in EntryKind)
        msg = f"{source}: entry '{slug}' has unknown type {value!r} (expected {allowed})"
        raise NavigationError(msg) from exc


def _parse_display(value: object, slug: str, source: str) -> Display:
    if value is None:
        return Display.NORMAL
    try:
        return Display(str(value).lower())
    except ValueError as exc:
        allowed = ", ".join(display.value for display in Display)
        msg = (
            f"{source}: entry '{slug}' has unknown display {value!r} "
            f"(expected {allowed})"
        )
        raise NavigationError(msg) from exc


__all__ = ["load_meta_file", "parse_meta_entries"]

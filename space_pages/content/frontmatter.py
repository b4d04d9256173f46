r"""Parse front-matter headers from Markdown/MDX content files.

Every content file starts with a YAML header fenced by ``---`` lines. The
header carries the content item's ``title`` (required), and optionally a
``description``, a publication ``date`` and a list of ``tags``. Anything
else is kept verbatim in :attr:`ContentItem.extra`.

Example
-------
>>> from space_pages.content.frontmatter import split_front_matter
>>> header, body = split_front_matter("---\ntitle: Intro\n---\nHello\n")
>>> header["title"], body
('Intro', 'Hello\n')
"""

from __future__ import annotations

import datetime as dt
import io
import typing as typ

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .models import ContentError, ContentItem

if typ.TYPE_CHECKING:
    from pathlib import Path

FRONT_MATTER_DELIMITER = "---"
KNOWN_KEYS = frozenset({"title", "description", "date", "tags"})


def _new_yaml() -> YAML:
    loader = YAML(typ="safe", pure=True)
    loader.version = (1, 2)
    return loader


def split_front_matter(
    text: str, *, path: Path | None = None
) -> tuple[dict[str, typ.Any], str]:
    """Split ``text`` into its parsed header mapping and the remaining body.

    Parameters
    ----------
    text : str
        Full file contents. ``\r\n`` line endings are normalized first.
    path : Path, optional
        Source path used in error messages.

    Returns
    -------
    tuple[dict[str, Any], str]
        The header mapping and the body that follows the closing delimiter.

    Raises
    ------
    ContentError
        If the header is absent, unterminated, not valid YAML, or not a
        mapping.
    """
    source: Path | str = path if path is not None else "<string>"
    normalized = text.replace("\r\n", "\n").lstrip("\ufeff")
    lines = normalized.split("\n")
    if not lines or lines[0].strip() != FRONT_MATTER_DELIMITER:
        raise ContentError(source, "missing front-matter header")

    end_idx: int | None = None
    for idx, line in enumerate(lines[1:], start=1):
        if line.strip() == FRONT_MATTER_DELIMITER:
            end_idx = idx
            break
    if end_idx is None:
        raise ContentError(source, "unterminated front-matter header")

    block = "\n".join(lines[1:end_idx])
    body = "\n".join(lines[end_idx + 1 :])
    if body.startswith("\n"):
        body = body[1:]

    try:
        header = _new_yaml().load(io.StringIO(block))
    except (YAMLError, ValueError) as exc:
        raise ContentError(source, f"invalid front-matter YAML: {exc}") from exc
    if header is None:
        header = {}
    if not isinstance(header, dict):
        raise ContentError(source, "front-matter header must be a mapping")
    return dict(header), body


def load_content_item(path: Path, *, route: str) -> ContentItem:
    """Read ``path`` and return a validated :class:`ContentItem`.

    Parameters
    ----------
    path : Path
        Markdown or MDX source file.
    route : str
        Site URL assigned by the navigation tree.

    Raises
    ------
    ContentError
        If any front-matter field is missing or malformed.
    """
    text = path.read_text(encoding="utf-8")
    header, body = split_front_matter(text, path=path)
    return ContentItem(
        path=path,
        slug=path.stem,
        route=route,
        title=_require_title(header.get("title"), path),
        body=body,
        description=_optional_text(header.get("description"), "description", path),
        date=_parse_date(header.get("date"), path),
        tags=_parse_tags(header.get("tags"), path),
        extra={k: v for k, v in header.items() if k not in KNOWN_KEYS},
    )


def _require_title(value: object, path: Path) -> str:
    if value is None:
        raise ContentError(path, "front matter is missing required field 'title'")
    if not isinstance(value, str):
        raise ContentError(path, "front-matter 'title' must be a string")
    title = value.strip()
    if not title:
        raise ContentError(path, "front-matter 'title' must not be empty")
    return title


def _optional_text(value: object, field: str, path: Path) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ContentError(path, f"front-matter '{field}' must be a string")
    return value.strip() or None


def _parse_date(value: object, path: Path) -> dt.date | None:
    """Return the publication date, accepting YAML dates and ISO strings."""
    match value:
        case None:
            return None
        case dt.datetime():
            return value.date()
        case dt.date():
            return value
        case str() as text:
            sanitized = text.strip()
            if not sanitized:
                return None
            if sanitized.endswith("Z"):
                sanitized = sanitized[:-1] + "+00:00"
            try:
                return dt.datetime.fromisoformat(sanitized).date()
            except ValueError as exc:
                msg = f"front-matter 'date' is not a valid ISO date: {text!r}"
                raise ContentError(path, msg) from exc
        case _:
            raise ContentError(path, f"front-matter 'date' has invalid value {value!r}")


def _parse_tags(value: object, path: Path) -> tuple[str, ...]:
    """Normalize tags from a list or a comma-separated string."""
    match value:
        case None:
            return ()
        case str() as text:
            candidates: list[object] = list(text.split(","))
        case list() | tuple():
            candidates = list(value)
        case _:
            raise ContentError(path, "front-matter 'tags' must be a list of strings")
    tags: list[str] = []
    for candidate in candidates:
        if isinstance(candidate, bool) or not isinstance(
            candidate, str | int | float
        ):
            raise ContentError(path, f"front-matter tag {candidate!r} is not a string")
        tag = str(candidate).strip()
        if tag and tag not in tags:
            tags.append(tag)
    return tuple(tags)


__all__ = ["FRONT_MATTER_DELIMITER", "load_content_item", "split_front_matter"]

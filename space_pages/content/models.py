"""Typed dataclasses describing authored content items."""

from __future__ import annotations

import dataclasses as dc
import datetime as dt  # noqa: TC003 - used for runtime type metadata
import typing as typ
from pathlib import Path  # noqa: TC003 - used for runtime type metadata


class ContentError(ValueError):
    """Raised when a content file has a malformed front-matter header."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


@dc.dataclass(frozen=True, slots=True)
class ContentItem:
    """A single authored document (blog post or doc page).

    Attributes
    ----------
    path : Path
        Source file the item was loaded from.
    slug : str
        File stem; unique within its directory.
    route : str
        Site URL path with leading and trailing slashes (``/docs/kafka/``).
    title : str
        Display title from the front matter; never empty.
    description : str | None
        Optional summary shown under the title and in listings.
    date : datetime.date | None
        Optional publication date.
    tags : tuple[str, ...]
        Tag labels in authoring order.
    body : str
        Markdown/MDX source following the header block.
    extra : dict[str, Any]
        Front-matter keys outside the known schema, kept verbatim.
    """

    path: Path
    slug: str
    route: str
    title: str
    body: str
    description: str | None = None
    date: dt.date | None = None
    tags: tuple[str, ...] = ()
    extra: dict[str, typ.Any] = dc.field(default_factory=dict, compare=False)

    @property
    def is_mdx(self) -> bool:
        """Return True when the item was authored as MDX."""
        return self.path.suffix.lower() == ".mdx"


__all__ = ["ContentError", "ContentItem"]

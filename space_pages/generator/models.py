"""Shared dataclasses used by the page generation pipeline."""

from __future__ import annotations

import dataclasses as dc
import math
import typing as typ

if typ.TYPE_CHECKING:
    from space_pages.content import ContentItem

WORDS_PER_MINUTE = 200


@dc.dataclass(slots=True)
class TocItem:
    """Table-of-contents entry for one heading in a rendered page.

    Attributes
    ----------
    label : str
        Plain-text heading label.
    anchor : str
        ``id`` attribute assigned to the heading.
    level : int
        Heading level (``2`` for ``##``).
    """

    label: str
    anchor: str
    level: int


@dc.dataclass(slots=True)
class RenderedContent:
    """HTML produced from one Markdown/MDX body.

    Attributes
    ----------
    html : str
        Rendered body HTML.
    toc_items : list[TocItem]
        Headings collected for the table of contents, in document order.
    word_count : int
        Words of visible text, used for reading-time estimates.
    """

    html: str
    toc_items: list[TocItem] = dc.field(default_factory=list)
    word_count: int = 0

    @property
    def reading_minutes(self) -> int:
        """Return the estimated reading time, never less than one minute."""
        return max(1, math.ceil(self.word_count / WORDS_PER_MINUTE))


@dc.dataclass(slots=True)
class RenderedPage:
    """A content item paired with its rendered body, ready for the layout."""

    item: ContentItem
    content: RenderedContent


__all__ = ["RenderedContent", "RenderedPage", "TocItem", "WORDS_PER_MINUTE"]

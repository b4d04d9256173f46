"""Load authored Markdown/MDX content items and their front matter.

Examples
--------
>>> from pathlib import Path
>>> from space_pages.content import load_content_item
>>> item = load_content_item(Path("content/about.md"), route="/about/")  # doctest: +SKIP
>>> item.title  # doctest: +SKIP
'About'
"""

from .discovery import AmbiguousSlugError, DirectoryListing, scan_directory
from .frontmatter import load_content_item, split_front_matter
from .models import ContentError, ContentItem

__all__ = [
    "AmbiguousSlugError",
    "ContentError",
    "ContentItem",
    "DirectoryListing",
    "load_content_item",
    "scan_directory",
    "split_front_matter",
]

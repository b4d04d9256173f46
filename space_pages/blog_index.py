"""Build and render the blog listing page.

The blog section (``blogs/`` by default) has no ``index`` content item of its
own; this module generates one. Every visible post in the section is listed
newest first, with its date, tags, and a rendered description, and the page
is wrapped in the shared layout so the sidebar and navbar match the posts.

>>> from space_pages.blog_index import BlogIndexBuilder
>>> builder = BlogIndexBuilder(site, tree, composer)  # doctest: +SKIP
>>> builder.run(Path("out"))  # doctest: +SKIP
PosixPath('out/blogs/index.html')
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader
from markdown import markdown
from markupsafe import Markup

from .config import SiteConfigError

if typ.TYPE_CHECKING:  # pragma: no cover - import for type hints only
    import collections.abc as cabc

    from .config import BlogConfig, SiteConfig
    from .content import ContentItem
    from .generator import LayoutComposer
    from .navigation import NavigationTree, NavNode

logger = logging.getLogger(__name__)

DATE_FORMAT = "%b %d, %Y"


class BlogIndexBuilder:
    """Render the listing page for the configured blog section."""

    def __init__(
        self,
        site_config: SiteConfig,
        tree: NavigationTree,
        composer: LayoutComposer,
        *,
        templates_dir: Path | None = None,
    ) -> None:
        """Initialize the blog index builder.

        Parameters
        ----------
        site_config : SiteConfig
            Parsed site configuration; ``site_config.blog`` must be set.
        tree : NavigationTree
            Navigation tree for the current build.
        composer : LayoutComposer
            Layout composer used to wrap the listing in the site chrome.
        templates_dir : Path, optional
            Directory containing the Jinja templates. Defaults to the
            ``space_pages/templates`` directory when ``None``.

        Raises
        ------
        SiteConfigError
            If no blog section is configured.
        """
        if site_config.blog is None:
            msg = "Blog index requested but no 'blog' section is configured."
            raise SiteConfigError(msg)
        self.site_config = site_config
        self.blog: BlogConfig = site_config.blog
        self.tree = tree
        self.composer = composer
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("blog_index.jinja")
        self._markdown_extensions = ["sane_lists", "tables", "fenced_code"]

    @property
    def route(self) -> str:
        """Return the route the listing is published at."""
        return f"/{self.blog.section}/"

    def run(self, output_dir: Path) -> Path:
        """Render the blog index HTML file beneath ``output_dir``."""
        section = resolve_blog_section(self.site_config, self.tree)
        posts = self._gather_posts(section)
        body = self.template.render(posts=posts)
        html = self.composer.compose_listing(
            title=self.blog.title,
            description=self.blog.description,
            route=self.route,
            body_html=body,
            section_slug=self.blog.section,
        )
        output_path = output_dir / self.blog.section / "index.html"
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(html, encoding="utf-8")
        logger.debug("blog index lists %d posts", len(posts))
        return output_path

    def _gather_posts(self, section: NavNode) -> list[dict[str, typ.Any]]:
        """Collect visible posts in the section, newest first."""
        items = sorted(visible_posts(section), key=_post_sort_key)
        return [
            {
                "title": item.title,
                "href": self.site_config.url_for(item.route),
                "date": item.date.strftime(DATE_FORMAT) if item.date else None,
                "date_iso": item.date.isoformat() if item.date else None,
                "tags": list(item.tags),
                "description_html": self._render_description(item.description),
            }
            for item in items
        ]

    def _render_description(self, text: str | None) -> Markup | None:
        normalized = (text or "").strip()
        if not normalized:
            return None
        html = markdown(
            normalized,
            extensions=self._markdown_extensions,
            output_format="html5",
        )
        return Markup(html)  # noqa: S704 - markdown output


def resolve_blog_section(site_config: SiteConfig, tree: NavigationTree) -> NavNode:
    """Return the configured blog section node.

    Raises
    ------
    SiteConfigError
        If no blog is configured, the section is not a content directory, or
        the section already has an ``index`` page of its own.
    """
    blog = site_config.blog
    if blog is None:
        msg = "Blog index requested but no 'blog' section is configured."
        raise SiteConfigError(msg)
    section = tree.section(blog.section)
    if section is None or not section.is_directory:
        msg = f"Blog section '{blog.section}' is not a content directory."
        raise SiteConfigError(msg)
    if section.item is not None:
        msg = (
            f"Blog section '{blog.section}' already has an index page; "
            "remove it or drop the 'blog' setting."
        )
        raise SiteConfigError(msg)
    return section


def visible_posts(node: NavNode) -> cabc.Iterator[ContentItem]:
    """Yield the content items beneath ``node``, skipping hidden subtrees."""
    for child in node.children:
        if child.hidden:
            continue
        if child.is_directory:
            yield from visible_posts(child)
        elif child.item is not None:
            yield child.item


def _post_sort_key(item: ContentItem) -> tuple[int, int, str]:
    """Sort dated posts newest first, then undated posts by title."""
    if item.date is None:
        return (1, 0, item.title.casefold())
    return (0, -item.date.toordinal(), item.title.casefold())


__all__ = ["BlogIndexBuilder", "resolve_blog_section", "visible_posts"]

"""High-level orchestration for building the static site.

This module coordinates the whole build: it computes the navigation tree from
the content root, renders every content item's body with
:class:`HtmlContentRenderer`, wraps it in the shared layout with
:class:`LayoutComposer`, and writes ``<output_dir>/<route>/index.html``. The
blog listing, the page manifest read by the search box, the Pygments
stylesheet, and the static assets are written alongside.

Example
-------
>>> from pathlib import Path
>>> from space_pages.config import load_site_config
>>> from space_pages.generator import SiteGenerator
>>> config = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
>>> SiteGenerator(config).run()  # doctest: +SKIP
[PosixPath('out/index.html'), PosixPath('out/about/index.html'), ...]
"""

from __future__ import annotations

import dataclasses as dc
import json
import logging
import shutil
import typing as typ
from pathlib import Path

from space_pages._constants import (
    INDEX_SLUG,
    PAGE_MANIFEST_FILENAME,
    PYGMENTS_CSS_PATH,
)
from space_pages.blog_index import (
    BlogIndexBuilder,
    resolve_blog_section,
    visible_posts,
)
from space_pages.config import SiteConfigError
from space_pages.navigation import EntryKind, build_navigation_tree

from .layout import LayoutComposer
from .link_rewriter import _build_link_rewriter
from .models import RenderedPage
from .renderer import HtmlContentRenderer

if typ.TYPE_CHECKING:
    from space_pages.config import SiteConfig
    from space_pages.navigation import NavigationTree

logger = logging.getLogger(__name__)

PACKAGE_STATIC_DIR = Path(__file__).resolve().parents[1] / "static"


@dc.dataclass(frozen=True, slots=True)
class SiteSummary:
    """Counts reported by ``pages check``."""

    pages: int
    hidden: int
    sections: tuple[str, ...]
    blog_posts: int | None = None


class SiteGenerator:
    """Render every content item and write the complete site to disk."""

    def __init__(
        self,
        site_config: SiteConfig,
        *,
        output_dir: Path | None = None,
        templates_dir: Path | None = None,
    ) -> None:
        """Initialize the generator.

        Parameters
        ----------
        site_config : SiteConfig
            Parsed site configuration.
        output_dir : Path, optional
            Override for the output directory; defaults to
            ``site_config.site.output_dir``.
        templates_dir : Path, optional
            Directory containing Jinja templates; defaults to the package
            templates.
        """
        self.site = site_config
        self.output_dir = output_dir or site_config.site.output_dir
        self.templates_dir = templates_dir
        features = site_config.features
        self.renderer = HtmlContentRenderer(
            site_config.pygments_style,
            code_highlight=features.code_highlight,
            copy_code=features.default_show_copy_code,
        )

    def run(self) -> list[Path]:
        """Build the site and return the written artifacts.

        Returns
        -------
        list[Path]
            Generated HTML pages in menu order, followed by the blog index,
            the page manifest, and the Pygments stylesheet.

        Raises
        ------
        ContentError
            If a content item has malformed front matter.
        NavigationError
            If navigation metadata is duplicated, dangling, or malformed.
        SiteConfigError
            If the blog section is misconfigured, the output directory would
            overwrite the content or static tree, or a static file would
            replace a generated page.

        Notes
        -----
        The output directory is deleted and recreated before anything is
        written.
        """
        tree = build_navigation_tree(self.site.site.content_dir)
        if self.site.blog is not None:
            resolve_blog_section(self.site, tree)
        self._check_output_dir(tree)
        self._prepare_output_dir()

        listing_routes = [f"/{self.site.blog.section}/"] if self.site.blog else []
        known_routes = {node.route for node in tree.pages() if node.route}
        known_routes.update(listing_routes)
        composer = LayoutComposer(
            self.site,
            tree,
            templates_dir=self.templates_dir,
            listing_routes=listing_routes,
        )

        written: list[Path] = []
        for item in tree.items():
            link_extension = _build_link_rewriter(
                item,
                content_root=self.site.site.content_dir,
                site=self.site,
                known_routes=known_routes,
            )
            content = self.renderer.render(
                item.body, mdx=item.is_mdx, link_extension=link_extension
            )
            html = composer.compose(RenderedPage(item=item, content=content))
            written.append(self._write_page(item.route, html))
            logger.debug("rendered %s -> %s", item.path, item.route)

        if self.site.blog is not None:
            builder = BlogIndexBuilder(
                self.site, tree, composer, templates_dir=self.templates_dir
            )
            written.append(builder.run(self.output_dir))

        written.append(self._write_manifest(tree))
        if self.site.features.code_highlight:
            written.append(self._write_stylesheet())
        self._copy_static()
        logger.info("built %d pages into %s", len(tree.pages()), self.output_dir)
        return written

    def _prepare_output_dir(self) -> None:
        out_dir = self.output_dir.resolve()
        if out_dir.exists():
            shutil.rmtree(out_dir)
        out_dir.mkdir(parents=True)

    def _check_output_dir(self, tree: NavigationTree) -> None:
        """Refuse output locations that would wipe sources or clobber output.

        Raises
        ------
        SiteConfigError
            If the output directory contains the content tree, the output and
            static directories contain one another, or a static file has the
            same path as a generated artifact.
        """
        out_dir = self.output_dir.resolve()
        content_dir = self.site.site.content_dir.resolve()
        if out_dir == content_dir or out_dir in content_dir.parents:
            msg = f"Output directory '{self.output_dir}' contains the content tree."
            raise SiteConfigError(msg)
        static_dir = self.site.site.static_dir
        if static_dir is None or not static_dir.is_dir():
            return
        static = static_dir.resolve()
        if out_dir == static or out_dir in static.parents or static in out_dir.parents:
            msg = (
                f"Output directory '{self.output_dir}' overlaps the static "
                f"directory '{static_dir}'."
            )
            raise SiteConfigError(msg)

        generated = self._planned_artifacts(tree)
        collisions = sorted(
            relative
            for path in static.rglob("*")
            if path.is_file()
            and (relative := path.relative_to(static).as_posix()) in generated
        )
        if collisions:
            names = ", ".join(collisions)
            msg = (
                f"Static files in '{static_dir}' would overwrite generated "
                f"output: {names}"
            )
            raise SiteConfigError(msg)

    def _planned_artifacts(self, tree: NavigationTree) -> set[str]:
        """Return output-relative paths the build writes itself."""
        routes = [item.route for item in tree.items()]
        if self.site.blog is not None:
            routes.append(f"/{self.site.blog.section}/")
        planned = {
            f"{route.strip('/')}/index.html".lstrip("/") for route in routes
        }
        planned.add(PAGE_MANIFEST_FILENAME)
        if self.site.features.code_highlight:
            planned.add(PYGMENTS_CSS_PATH)
        planned.update(
            f"assets/{path.relative_to(PACKAGE_STATIC_DIR).as_posix()}"
            for path in PACKAGE_STATIC_DIR.rglob("*")
            if path.is_file()
        )
        return planned

    def _write_page(self, route: str, html: str) -> Path:
        relative = route.strip("/")
        target_dir = self.output_dir / relative if relative else self.output_dir
        target_dir.mkdir(parents=True, exist_ok=True)
        output_path = target_dir / "index.html"
        output_path.write_text(html, encoding="utf-8")
        return output_path

    def _write_manifest(self, tree: NavigationTree) -> Path:
        """Write the page manifest the search box filters client-side."""
        entries = [
            {
                "route": node.route,
                "url": self.site.url_for(node.route),
                "title": node.item.title,
                "description": node.item.description,
                "tags": list(node.item.tags),
                "date": node.item.date.isoformat() if node.item.date else None,
            }
            for node in tree.pages()
            if node.item is not None and node.route is not None and not node.hidden
        ]
        path = self.output_dir / PAGE_MANIFEST_FILENAME
        payload = json.dumps(entries, ensure_ascii=False, indent=2)
        path.write_text(payload, encoding="utf-8")
        return path

    def _write_stylesheet(self) -> Path:
        path = self.output_dir / PYGMENTS_CSS_PATH
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.renderer.stylesheet, encoding="utf-8")
        return path

    def _copy_static(self) -> None:
        """Copy bundled assets and the configured static directory."""
        assets_dir = self.output_dir / "assets"
        shutil.copytree(PACKAGE_STATIC_DIR, assets_dir, dirs_exist_ok=True)
        static_dir = self.site.site.static_dir
        if static_dir is None:
            return
        if not static_dir.is_dir():
            logger.debug("static directory %s not found; skipping", static_dir)
            return
        shutil.copytree(static_dir, self.output_dir, dirs_exist_ok=True)


def check_site(site_config: SiteConfig) -> SiteSummary:
    """Validate content and navigation metadata without writing output.

    Raises
    ------
    ContentError, NavigationError, SiteConfigError
        On the first problem found.
    """
    tree = build_navigation_tree(site_config.site.content_dir)
    pages = tree.pages()
    sections = tuple(
        node.slug
        for node in tree.root.visible_children()
        if node.kind is not EntryKind.GROUP and node.slug != INDEX_SLUG
    )
    blog_posts = None
    if site_config.blog is not None:
        section = resolve_blog_section(site_config, tree)
        blog_posts = sum(1 for _ in visible_posts(section))
    return SiteSummary(
        pages=len(pages),
        hidden=sum(1 for node in pages if node.hidden),
        sections=sections,
        blog_posts=blog_posts,
    )


__all__ = ["SiteGenerator", "SiteSummary", "check_site"]

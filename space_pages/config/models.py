"""Typed dataclasses describing the site configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class SiteMetadata:
    """Document-level metadata and filesystem locations for the site."""

    title: str = "Daniel's Space - Tech & Life"
    description: str = (
        "A modern documentation site about technology, development, "
        "and life experiences"
    )
    content_dir: Path = Path("content")
    output_dir: Path = Path("out")
    static_dir: Path | None = Path("public")
    base_url: str = "/"
    lang: str = "en"
    theme_color: str = "#3b82f6"
    favicon: str | None = "/favicon.ico"
    docs_repository_base: str | None = None


@dc.dataclass(slots=True)
class NavbarConfig:
    """Top navigation bar settings."""

    logo_text: str = "Daniel's Space"


@dc.dataclass(slots=True)
class BannerConfig:
    """Announcement banner shown above the navbar."""

    text: str
    key: str = "banner"
    dismissible: bool = True
    link: str | None = None


@dc.dataclass(slots=True)
class FooterConfig:
    """Site footer copy."""

    enabled: bool = True
    text: str = ""


@dc.dataclass(slots=True)
class FeedbackConfig:
    """Feedback link rendered beside the table of contents."""

    content: str = "Question? Give us feedback →"
    link: str | None = None


@dc.dataclass(slots=True)
class SidebarConfig:
    """Sidebar behaviour hints consumed by the layout."""

    default_menu_collapse_level: int = 2
    toggle_button: bool = True
    auto_collapse: bool = True


@dc.dataclass(slots=True)
class TocConfig:
    """Table-of-contents behaviour hints consumed by the layout."""

    back_to_top: bool = True
    float: bool = True


@dc.dataclass(slots=True)
class FeatureFlags:
    """Rendering features switched on for the whole site."""

    search: bool = True
    default_show_copy_code: bool = True
    reading_time: bool = True
    code_highlight: bool = True


@dc.dataclass(slots=True)
class BlogConfig:
    """Directory rendered as a date-ordered post listing."""

    section: str = "blogs"
    title: str = "Blogs"
    description: str | None = None


@dc.dataclass(slots=True)
class SiteConfig:
    """Fully resolved site configuration with defaults applied."""

    site: SiteMetadata = dc.field(default_factory=SiteMetadata)
    navbar: NavbarConfig = dc.field(default_factory=NavbarConfig)
    footer: FooterConfig = dc.field(default_factory=FooterConfig)
    feedback: FeedbackConfig = dc.field(default_factory=FeedbackConfig)
    sidebar: SidebarConfig = dc.field(default_factory=SidebarConfig)
    toc: TocConfig = dc.field(default_factory=TocConfig)
    features: FeatureFlags = dc.field(default_factory=FeatureFlags)
    banner: BannerConfig | None = None
    blog: BlogConfig | None = None
    pygments_style: str = "monokai"

    def url_for(self, route: str) -> str:
        """Return ``route`` prefixed with the configured base URL."""
        base = self.site.base_url.rstrip("/")
        return f"{base}{route}" if route.startswith("/") else f"{base}/{route}"

    def edit_url(self, relative_path: str) -> str | None:
        """Return the repository URL used by "edit this page" links."""
        if not self.site.docs_repository_base:
            return None
        base = self.site.docs_repository_base.rstrip("/")
        return f"{base}/{relative_path.lstrip('/')}"


__all__ = [
    "BannerConfig",
    "BlogConfig",
    "FeatureFlags",
    "FeedbackConfig",
    "FooterConfig",
    "NavbarConfig",
    "SidebarConfig",
    "SiteConfig",
    "SiteConfigError",
    "SiteMetadata",
    "TocConfig",
]

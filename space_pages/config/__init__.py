"""Load and validate the site configuration YAML for space_pages builds.

This subpackage parses the project's ``config/site.yaml`` file, applies
defaults for every omitted key, resolves content/output directories against
the project root, and produces strongly typed dataclasses
(:class:`SiteConfig`, :class:`SidebarConfig`, etc.) that the generators
consume. The primary entry point is :func:`load_site_config`.

Examples
--------
>>> from pathlib import Path
>>> from space_pages.config import load_site_config
>>> site = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
>>> site.features.search  # doctest: +SKIP
True
"""

from .loader import load_site_config
from .logging import configure_logging
from .models import (
    BannerConfig,
    BlogConfig,
    FeatureFlags,
    FeedbackConfig,
    FooterConfig,
    NavbarConfig,
    SidebarConfig,
    SiteConfig,
    SiteConfigError,
    SiteMetadata,
    TocConfig,
)

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
    "configure_logging",
    "load_site_config",
]

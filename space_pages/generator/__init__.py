"""Utilities for rendering content bodies, composing layouts, and writing the site."""

from .callout import CalloutType, render_callout
from .layout import LayoutComposer
from .link_rewriter import RelativeLinkExtension
from .models import RenderedContent, RenderedPage, TocItem
from .renderer import HtmlContentRenderer
from .site_generator import SiteGenerator, SiteSummary, check_site

__all__ = [
    "CalloutType",
    "HtmlContentRenderer",
    "LayoutComposer",
    "RelativeLinkExtension",
    "RenderedContent",
    "RenderedPage",
    "SiteGenerator",
    "SiteSummary",
    "TocItem",
    "check_site",
    "render_callout",
]

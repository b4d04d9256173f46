"""Utility helpers shared by the site configuration loader."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from .models import (
    BannerConfig,
    BlogConfig,
    FeatureFlags,
    FeedbackConfig,
    FooterConfig,
    NavbarConfig,
    SidebarConfig,
    SiteConfigError,
    SiteMetadata,
    TocConfig,
)


def _section(raw: typ.Mapping[str, typ.Any], name: str) -> dict[str, typ.Any]:
    """Return the mapping stored under ``name`` or an empty dict."""
    value = raw.get(name)
    match value:
        case None:
            return {}
        case dict():
            return dict(value)
        case _:
            msg = f"Configuration section '{name}' must be a mapping."
            raise SiteConfigError(msg)


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _require_str(payload: typ.Mapping[str, typ.Any], key: str, default: str) -> str:
    value = payload.get(key, default)
    if not isinstance(value, str):
        msg = f"Configuration value '{key}' must be a string."
        raise SiteConfigError(msg)
    return value


def _bool(payload: typ.Mapping[str, typ.Any], key: str, default: bool) -> bool:  # noqa: FBT001
    value = payload.get(key, default)
    if not isinstance(value, bool):
        msg = f"Configuration value '{key}' must be true or false."
        raise SiteConfigError(msg)
    return value


def _optional_path(value: object | None, default: Path | None) -> Path | None:
    match value:
        case None:
            return default
        case False:
            return None
        case str() | Path():
            return Path(value)
        case _:
            msg = f"Expected a filesystem path, got {value!r}."
            raise SiteConfigError(msg)


def _build_site_metadata(
    payload: typ.Mapping[str, typ.Any], *, root: Path
) -> SiteMetadata:
    """Build SiteMetadata, resolving directories relative to ``root``."""
    base = SiteMetadata()
    base_url = _require_str(payload, "base_url", base.base_url)
    if not base_url.startswith("/") and "://" not in base_url:
        msg = "'base_url' must be an absolute path or URL."
        raise SiteConfigError(msg)
    if "static_dir" in payload and payload["static_dir"] is None:
        static_dir = None
    else:
        static_dir = _optional_path(payload.get("static_dir"), base.static_dir)
    return SiteMetadata(
        title=_require_str(payload, "title", base.title),
        description=_require_str(payload, "description", base.description),
        content_dir=_resolve(root, _optional_path(payload.get("content_dir"), base.content_dir)),
        output_dir=_resolve(root, _optional_path(payload.get("output_dir"), base.output_dir)),
        static_dir=_resolve(root, static_dir) if static_dir else None,
        base_url=base_url,
        lang=_require_str(payload, "lang", base.lang),
        theme_color=_require_str(payload, "theme_color", base.theme_color),
        favicon=_optional_str(payload.get("favicon", base.favicon)),
        docs_repository_base=_optional_str(payload.get("docs_repository_base")),
    )


def _resolve(root: Path, path: Path | None) -> Path:
    if path is None:
        msg = "Directory settings must not be empty."
        raise SiteConfigError(msg)
    return path if path.is_absolute() else root / path


def _build_navbar_config(payload: typ.Mapping[str, typ.Any]) -> NavbarConfig:
    base = NavbarConfig()
    return NavbarConfig(logo_text=_require_str(payload, "logo_text", base.logo_text))


def _build_banner_config(payload: typ.Mapping[str, typ.Any]) -> BannerConfig | None:
    """Return the banner config, or None when no banner text is configured."""
    text = _optional_str(payload.get("text"))
    if not text:
        return None
    return BannerConfig(
        text=text,
        key=_require_str(payload, "key", "banner"),
        dismissible=_bool(payload, "dismissible", True),
        link=_optional_str(payload.get("link")),
    )


def _build_footer_config(payload: typ.Mapping[str, typ.Any]) -> FooterConfig:
    base = FooterConfig()
    return FooterConfig(
        enabled=_bool(payload, "enabled", base.enabled),
        text=_require_str(payload, "text", base.text),
    )


def _build_feedback_config(payload: typ.Mapping[str, typ.Any]) -> FeedbackConfig:
    base = FeedbackConfig()
    return FeedbackConfig(
        content=_require_str(payload, "content", base.content),
        link=_optional_str(payload.get("link")),
    )


def _build_sidebar_config(payload: typ.Mapping[str, typ.Any]) -> SidebarConfig:
    base = SidebarConfig()
    level = payload.get("default_menu_collapse_level", base.default_menu_collapse_level)
    if isinstance(level, bool) or not isinstance(level, int) or level < 1:
        msg = "'default_menu_collapse_level' must be a positive integer."
        raise SiteConfigError(msg)
    return SidebarConfig(
        default_menu_collapse_level=level,
        toggle_button=_bool(payload, "toggle_button", base.toggle_button),
        auto_collapse=_bool(payload, "auto_collapse", base.auto_collapse),
    )


def _build_toc_config(payload: typ.Mapping[str, typ.Any]) -> TocConfig:
    base = TocConfig()
    return TocConfig(
        back_to_top=_bool(payload, "back_to_top", base.back_to_top),
        float=_bool(payload, "float", base.float),
    )


def _build_feature_flags(payload: typ.Mapping[str, typ.Any]) -> FeatureFlags:
    base = FeatureFlags()
    return FeatureFlags(
        search=_bool(payload, "search", base.search),
        default_show_copy_code=_bool(
            payload, "default_show_copy_code", base.default_show_copy_code
        ),
        reading_time=_bool(payload, "reading_time", base.reading_time),
        code_highlight=_bool(payload, "code_highlight", base.code_highlight),
    )


def _build_blog_config(payload: typ.Mapping[str, typ.Any]) -> BlogConfig:
    """Build the blog listing config from the provided mapping payload."""
    base = BlogConfig()
    section = _require_str(payload, "section", base.section).strip("/")
    if not section or "/" in section:
        msg = "'blog.section' must name a single top-level content directory."
        raise SiteConfigError(msg)
    return BlogConfig(
        section=section,
        title=_require_str(payload, "title", base.title),
        description=_optional_str(payload.get("description")),
    )


__all__ = [
    "_bool",
    "_build_banner_config",
    "_build_blog_config",
    "_build_feature_flags",
    "_build_feedback_config",
    "_build_footer_config",
    "_build_navbar_config",
    "_build_sidebar_config",
    "_build_site_metadata",
    "_build_toc_config",
    "_optional_str",
    "_section",
]

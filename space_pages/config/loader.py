"""Load site configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ

from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound
from ruamel.yaml import YAML

from .helpers import (
    _build_banner_config,
    _build_blog_config,
    _build_feature_flags,
    _build_feedback_config,
    _build_footer_config,
    _build_navbar_config,
    _build_sidebar_config,
    _build_site_metadata,
    _build_toc_config,
    _section,
)
from .models import SiteConfig, SiteConfigError

if typ.TYPE_CHECKING:
    from pathlib import Path


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration describing the site chrome and features.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``config/site.yaml``). Relative directories inside the file resolve
        against the project root: the parent of a ``config/`` directory,
        otherwise the file's own directory.

    Returns
    -------
    SiteConfig
        Parsed site configuration with defaults applied to every omitted key.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If a section or value has the wrong shape.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from space_pages.config import load_site_config
    >>> config = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
    >>> config.navbar.logo_text  # doctest: +SKIP
    "Daniel's Space"
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):  # pragma: no cover - config error guard
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)

    pygments_style = raw.get("pygments_style", "monokai")
    if not isinstance(pygments_style, str) or not pygments_style.strip():
        msg = "'pygments_style' must be a non-empty string."
        raise SiteConfigError(msg)
    try:
        get_style_by_name(pygments_style.strip())
    except ClassNotFound as exc:
        msg = f"Unknown pygments_style '{pygments_style}'."
        raise SiteConfigError(msg) from exc

    blog = _build_blog_config(_section(raw, "blog")) if raw.get("blog") else None

    return SiteConfig(
        site=_build_site_metadata(_section(raw, "site"), root=_project_root(path)),
        navbar=_build_navbar_config(_section(raw, "navbar")),
        footer=_build_footer_config(_section(raw, "footer")),
        feedback=_build_feedback_config(_section(raw, "feedback")),
        sidebar=_build_sidebar_config(_section(raw, "sidebar")),
        toc=_build_toc_config(_section(raw, "toc")),
        features=_build_feature_flags(_section(raw, "features")),
        banner=_build_banner_config(_section(raw, "banner")),
        blog=blog,
        pygments_style=pygments_style.strip(),
    )


def _project_root(config_path: Path) -> Path:
    """Return the directory relative settings resolve against."""
    parent = config_path.resolve().parent
    if parent.name == "config":
        return parent.parent
    return parent


__all__ = ["load_site_config"]

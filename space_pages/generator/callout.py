"""Callout component: a visually distinguished note, warning, or error box.

Content files use it as an MDX element::

    <Callout type="warning" emoji="⚠️">
    Run the migration **before** upgrading.
    </Callout>

:func:`render_callout` is a pure function of its inputs. An unrecognised
``type`` falls back to the default ``info`` style instead of failing.
"""

from __future__ import annotations

import enum
import functools
import logging
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader
from markupsafe import Markup

if typ.TYPE_CHECKING:
    from jinja2 import Template

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"


class CalloutType(enum.StrEnum):
    """Severity selector for callout boxes."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


DEFAULT_CALLOUT_TYPE = CalloutType.INFO
CALLOUT_BASE_CLASSES = "callout my-6 flex gap-3 rounded-lg border px-4 py-3"
CALLOUT_STYLES: dict[CalloutType, str] = {
    CalloutType.INFO: (
        "border-blue-200 bg-blue-50 text-blue-900 "
        "dark:border-blue-800 dark:bg-blue-950 dark:text-blue-100"
    ),
    CalloutType.WARNING: (
        "border-yellow-200 bg-yellow-50 text-yellow-900 "
        "dark:border-yellow-800 dark:bg-yellow-950 dark:text-yellow-100"
    ),
    CalloutType.ERROR: (
        "border-red-200 bg-red-50 text-red-900 "
        "dark:border-red-800 dark:bg-red-950 dark:text-red-100"
    ),
}


def resolve_callout_type(value: str | CalloutType | None) -> CalloutType:
    """Return the matching :class:`CalloutType`, or the default for unknown input."""
    if isinstance(value, CalloutType):
        return value
    if value is None:
        return DEFAULT_CALLOUT_TYPE
    try:
        return CalloutType(str(value).strip().lower())
    except ValueError:
        logger.debug("unknown callout type %r; using %s", value, DEFAULT_CALLOUT_TYPE)
        return DEFAULT_CALLOUT_TYPE


def callout_classes(callout_type: str | CalloutType | None) -> str:
    """Return the full class list for a callout container."""
    resolved = resolve_callout_type(callout_type)
    return f"{CALLOUT_BASE_CLASSES} {CALLOUT_STYLES[resolved]}"


@functools.cache
def _callout_template() -> Template:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    return env.get_template("callout.jinja")


def render_callout(
    children_html: str,
    callout_type: str | CalloutType | None = None,
    emoji: str | None = None,
) -> Markup:
    """Render a callout container around already-rendered child HTML.

    Parameters
    ----------
    children_html : str
        Trusted HTML placed inside the callout body.
    callout_type : str or CalloutType, optional
        One of ``info``, ``warning`` or ``error``. Anything else renders with
        the ``info`` style.
    emoji : str, optional
        Glyph shown before the body; escaped before rendering.

    Returns
    -------
    Markup
        The callout HTML, safe to embed in other templates.
    """
    resolved = resolve_callout_type(callout_type)
    html = _callout_template().render(
        classes=callout_classes(resolved),
        callout_type=resolved.value,
        emoji=(emoji or "").strip() or None,
        body=Markup(children_html),  # noqa: S704 - body is renderer output
    )
    return Markup(html.strip())  # noqa: S704 - template output is autoescaped


__all__ = [
    "CALLOUT_STYLES",
    "DEFAULT_CALLOUT_TYPE",
    "CalloutType",
    "callout_classes",
    "render_callout",
    "resolve_callout_type",
]

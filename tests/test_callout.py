"""Unit tests for the callout component.

``render_callout`` must render for every severity, fall back to the ``info``
style for anything else, and escape the emoji glyph while leaving the
already-rendered body untouched.
"""

from __future__ import annotations

import logging

import pytest
from bs4 import BeautifulSoup

from space_pages.generator.callout import (
    CALLOUT_STYLES,
    CalloutType,
    callout_classes,
    render_callout,
    resolve_callout_type,
)


def _container(html: str) -> BeautifulSoup:
    soup = BeautifulSoup(html, "html.parser")
    container = soup.select_one("div.callout")
    assert container is not None, "expected a div.callout container"
    return container


@pytest.mark.parametrize("severity", list(CalloutType))
def test_every_severity_renders_with_its_style(severity: CalloutType) -> None:
    """Each severity uses its own style classes."""
    html = render_callout("<p>Body</p>", severity.value)
    container = _container(str(html))
    assert container["data-callout-type"] == severity.value
    for css_class in CALLOUT_STYLES[severity].split():
        assert css_class in container["class"], f"missing {css_class} for {severity}"
    assert container.select_one(".callout__body p").get_text() == "Body"


@pytest.mark.parametrize("value", ["tip", "", None, "  WARNING  "])
def test_unknown_or_missing_severity_falls_back(value: str | None) -> None:
    """Unrecognised severities render with the default info style."""
    expected = CalloutType.WARNING if value and value.strip() else CalloutType.INFO
    assert resolve_callout_type(value) is expected
    html = render_callout("<p>x</p>", value)
    assert _container(str(html))["data-callout-type"] == expected.value


def test_unknown_severity_is_logged_at_debug(caplog: pytest.LogCaptureFixture) -> None:
    """Falling back is not an error but leaves a debug trace."""
    with caplog.at_level(logging.DEBUG, logger="space_pages.generator.callout"):
        resolve_callout_type("tip")
    assert any("unknown callout type 'tip'" in rec.getMessage() for rec in caplog.records)


def test_emoji_is_rendered_and_escaped() -> None:
    """The emoji glyph sits in a leading span and is HTML-escaped."""
    html = str(render_callout("<p>x</p>", "error", "<b>!</b>"))
    container = _container(html)
    emoji = container.select_one(".callout__emoji")
    assert emoji is not None
    assert emoji.get_text() == "<b>!</b>", "emoji should be text, not markup"
    assert "&lt;b&gt;" in html


def test_no_emoji_span_without_emoji() -> None:
    """No emoji span is emitted when no glyph is given."""
    container = _container(str(render_callout("<p>x</p>", "info")))
    assert container.select_one(".callout__emoji") is None


def test_callout_classes_include_base_classes() -> None:
    """The container always carries the shared base classes."""
    assert callout_classes("bogus").startswith("callout ")
    assert callout_classes("bogus") == callout_classes(CalloutType.INFO)

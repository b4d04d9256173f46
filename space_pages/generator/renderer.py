"""Utilities for rendering Markdown/MDX bodies and syntax-highlighted code."""

from __future__ import annotations

import functools
import html as html_lib
import re
import textwrap
import typing as typ
from html import escape

from markdown import Markdown
from pygments.formatters.html import HtmlFormatter

from .callout import render_callout
from .models import RenderedContent, TocItem

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from markdown.extensions import Extension
else:  # pragma: no cover - type-checking fallback
    Extension = typ.Any

FENCED_INDENT_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)
FENCE_LABEL_PATTERN = re.compile(
    r"^([`~]{3,})([A-Za-z0-9_+#.-]+)?(,[^\r\n]+)$", re.MULTILINE
)
FENCE_LINE_PATTERN = re.compile(r"^\s*(`{3,}|~{3,})")
LANG_PREFIX = "language-"
MDX_ESM_PATTERN = re.compile(r"^(?:import|export)\s")
MDX_COMMENT_PATTERN = re.compile(r"\{/\*.*?\*/\}", re.DOTALL)
CALLOUT_PATTERN = re.compile(
    r"<Callout\b(?P<attrs>[^>]*)>(?P<body>(?:(?!<Callout\b).)*?)</Callout>", re.DOTALL
)
CALLOUT_ATTR_PATTERN = re.compile(
    r"""(?P<name>[A-Za-z_][\w-]*)\s*=\s*"""
    r"""(?:"(?P<dq>[^"]*)"|'(?P<sq>[^']*)'|\{\s*["'](?P<jsx>[^"']*)["']\s*\})"""
)
CODE_PLACEHOLDER_PATTERN = re.compile(
    r"^[ \t]*CODEBLOCKPLACEHOLDER(\d+)X[ \t]*$", re.MULTILINE
)
CALLOUT_PLACEHOLDER_PATTERN = re.compile(
    r"<p>CALLOUTPLACEHOLDER(\d+)X</p>|CALLOUTPLACEHOLDER(\d+)X"
)
TAG_PATTERN = re.compile(r"<[^>]+>")
WORD_PATTERN = re.compile(r"\w+")


class AnnotatedHtmlFormatter(HtmlFormatter):
    """Pygments HTML formatter that tags each block with its language.

    Python-Markdown's ``codehilite`` calls a custom formatter class with a
    ``lang_str`` of ``language-<name>`` for fenced and indented blocks alike,
    so the label always belongs to the block being formatted.
    """

    def __init__(
        self, lang_str: str = "", *, copy_code: bool = True, **options: typ.Any
    ) -> None:
        super().__init__(**options)
        self.language = lang_str.removeprefix(LANG_PREFIX) or "text"
        self.copy_code = copy_code

    def _wrap_div(
        self, inner: cabc.Iterable[tuple[int, str]]
    ) -> cabc.Iterator[tuple[int, str]]:
        copy_attr = ' data-copy="true"' if self.copy_code else ""
        language = escape(self.language, quote=True)
        yield 0, f'<div class="{self.cssclass}" data-language="{language}"{copy_attr}>'
        yield from inner
        yield 0, "</div>\n"


class HtmlContentRenderer:
    """Render Markdown/MDX bodies and code snippets with consistent styling."""

    def __init__(
        self,
        pygments_style: str = "monokai",
        *,
        code_highlight: bool = True,
        copy_code: bool = True,
        link_extension: Extension | None = None,
    ) -> None:
        """Initialize a renderer.

        Parameters
        ----------
        pygments_style : str, optional
            Name of the Pygments style used for syntax highlighting. Defaults to
            ``"monokai"``.
        code_highlight : bool, optional
            Highlight fenced code with Pygments; plain ``<pre>`` blocks otherwise.
        copy_code : bool, optional
            Mark highlighted blocks with ``data-copy`` so the layout shows a
            copy button.
        link_extension : Extension, optional
            Default Markdown extension used when rewriting links; individual
            :meth:`render` calls may pass their own.
        """
        self.pygments_style = pygments_style
        self.code_highlight = code_highlight
        self.copy_code = copy_code
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="codehilite")
        self._link_extension = link_extension

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(".codehilite")

    def render(
        self,
        text: str,
        *,
        mdx: bool = False,
        link_extension: Extension | None = None,
    ) -> RenderedContent:
        """Render a content body into HTML plus table-of-contents entries.

        Parameters
        ----------
        text : str
            Markdown source, without the front-matter header.
        mdx : bool, optional
            Drop MDX ``import``/``export`` lines and ``{/* */}`` comments.
        link_extension : Extension, optional
            Link rewriter for this body; defaults to the renderer's own.

        Returns
        -------
        RenderedContent
            Body HTML, ``h2``/``h3`` headings for the table of contents, and
            the visible word count.
        """
        extension = link_extension or self._link_extension
        source, code_blocks = _stash_code_blocks(text)
        if mdx:
            source = _strip_mdx_syntax(source)
        source, callouts = self._extract_callouts(source, code_blocks, extension)
        source = _restore_code_blocks(source, code_blocks)

        normalized = self._normalize_fenced_blocks(source)
        if not normalized.strip():
            return RenderedContent(html="")
        md = self._build_markdown(extension)
        html = _restore_callouts(md.convert(normalized), callouts)
        toc_items = _flatten_toc(getattr(md, "toc_tokens", []))
        word_count = len(WORD_PATTERN.findall(TAG_PATTERN.sub(" ", html)))
        return RenderedContent(html=html, toc_items=toc_items, word_count=word_count)

    def markdown(self, text: str, *, link_extension: Extension | None = None) -> str:
        """Render markdown into HTML using the configured extensions."""
        return self.render(text, link_extension=link_extension).html

    def _build_markdown(self, link_extension: Extension | None) -> Markdown:
        extensions: list[Extension | str] = [
            "fenced_code",
            "tables",
            "sane_lists",
            "toc",
        ]
        if self.code_highlight:
            extensions.append("codehilite")
        if link_extension:
            extensions.append(link_extension)
        return Markdown(
            extensions=extensions,
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": self.pygments_style,
                    "lang_prefix": LANG_PREFIX,
                    "pygments_formatter": functools.partial(
                        AnnotatedHtmlFormatter, copy_code=self.copy_code
                    ),
                },
                "toc": {"toc_depth": "2-3"},
            },
        )

    def _extract_callouts(
        self,
        source: str,
        code_blocks: list[str],
        link_extension: Extension | None,
    ) -> tuple[str, list[str]]:
        """Replace ``<Callout>`` elements with placeholders and render them.

        Nested callouts are rendered innermost first; an outer body sees each
        inner callout as a placeholder and restores it after rendering.
        """
        rendered: list[str] = []

        def _repl(match: re.Match[str]) -> str:
            attrs = _parse_attributes(match.group("attrs"))
            body = _restore_code_blocks(match.group("body"), code_blocks)
            body_html = _restore_callouts(
                self.markdown(
                    textwrap.dedent(body).strip("\n"), link_extension=link_extension
                ),
                rendered,
            )
            rendered.append(
                str(
                    render_callout(
                        body_html,
                        attrs.get("type"),
                        attrs.get("emoji") or attrs.get("icon"),
                    )
                )
            )
            line_start = match.string.rfind("\n", 0, match.start()) + 1
            indent = match.string[line_start : match.start()]
            if indent.strip():
                indent = ""
            return f"\n\n{indent}CALLOUTPLACEHOLDER{len(rendered) - 1}X\n\n"

        while True:
            source, count = CALLOUT_PATTERN.subn(_repl, source)
            if not count:
                return source, rendered

    @staticmethod
    def _normalize_fenced_blocks(text: str) -> str:
        without_indent = FENCED_INDENT_PATTERN.sub(r"\1", text)

        def _strip_labels(match: re.Match[str]) -> str:
            fence, language, _extras = match.groups()
            label = language or ""
            return f"{fence}{label}"

        return FENCE_LABEL_PATTERN.sub(_strip_labels, without_indent)


def _stash_code_blocks(text: str) -> tuple[str, list[str]]:
    """Swap fenced code blocks for placeholder lines so MDX handling skips them."""
    output: list[str] = []
    blocks: list[str] = []
    current: list[str] | None = None
    fence = ""
    for line in text.split("\n"):
        if current is None:
            match = FENCE_LINE_PATTERN.match(line)
            if match:
                current = [line]
                fence = match.group(1)
            else:
                output.append(line)
            continue
        current.append(line)
        stripped = line.strip()
        if len(stripped) >= len(fence) and set(stripped) == {fence[0]}:
            output.append(f"CODEBLOCKPLACEHOLDER{len(blocks)}X")
            blocks.append("\n".join(current))
            current = None
    if current is not None:
        output.extend(current)
    return "\n".join(output), blocks


def _restore_code_blocks(text: str, blocks: list[str]) -> str:
    if not blocks:
        return text
    return CODE_PLACEHOLDER_PATTERN.sub(lambda m: blocks[int(m.group(1))], text)


def _strip_mdx_syntax(text: str) -> str:
    """Drop MDX ESM statements and JSX comments outside code blocks."""
    without_comments = MDX_COMMENT_PATTERN.sub("", text)
    kept = [
        line for line in without_comments.split("\n") if not MDX_ESM_PATTERN.match(line)
    ]
    return "\n".join(kept)


def _parse_attributes(raw: str) -> dict[str, str]:
    attrs: dict[str, str] = {}
    for match in CALLOUT_ATTR_PATTERN.finditer(raw):
        value = match.group("dq")
        if value is None:
            value = match.group("sq")
        if value is None:
            value = match.group("jsx")
        attrs[match.group("name")] = value or ""
    return attrs


def _restore_callouts(html: str, callouts: list[str]) -> str:
    if not callouts:
        return html

    def _repl(match: re.Match[str]) -> str:
        index = match.group(1) or match.group(2)
        return callouts[int(index)]

    return CALLOUT_PLACEHOLDER_PATTERN.sub(_repl, html)


def _flatten_toc(tokens: cabc.Iterable[dict[str, typ.Any]]) -> list[TocItem]:
    """Flatten Python-Markdown's nested ``toc_tokens`` into document order."""
    items: list[TocItem] = []
    for token in tokens:
        items.append(
            TocItem(
                label=html_lib.unescape(str(token.get("name", ""))),
                anchor=str(token.get("id", "")),
                level=int(token.get("level", 2)),
            )
        )
        items.extend(_flatten_toc(token.get("children", []) or []))
    return items


__all__ = ["AnnotatedHtmlFormatter", "HtmlContentRenderer"]

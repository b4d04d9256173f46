"""Unit tests for the Markdown/MDX body renderer.

These tests cover MDX handling (ESM lines and JSX comments dropped, callouts
rendered, code blocks left alone), syntax highlighting metadata, the table of
contents, word counts, and the feature switches for highlighting and copy
buttons.
"""

from __future__ import annotations

from bs4 import BeautifulSoup

from space_pages.generator import HtmlContentRenderer, TocItem

MDX_SOURCE = """\
import { Callout } from 'nextra/components'
export const meta = { draft: true }

{/* editor note */}

## Setup

<Callout type="warning" emoji="⚠️">
  Run **this** first.

  ```bash
  make setup
  ```
</Callout>

```tsx
import { Callout } from 'nextra/components'
// {/* kept inside code */}
```

### Details

Text after.
"""


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def test_mdx_syntax_is_stripped_outside_code() -> None:
    """ESM statements and JSX comments vanish, but code blocks keep them."""
    html = HtmlContentRenderer().render(MDX_SOURCE, mdx=True).html
    soup = _soup(html)
    prose = " ".join(p.get_text() for p in soup.find_all("p"))
    assert "export const" not in prose
    assert "editor note" not in html
    code = " ".join(block.get_text() for block in soup.select("pre"))
    assert "import { Callout }" in code, "imports inside code blocks must survive"
    assert "{/* kept inside code */}" in code


def test_callout_renders_inner_markdown() -> None:
    """Callout bodies are rendered as Markdown and wrapped in the component."""
    soup = _soup(HtmlContentRenderer().render(MDX_SOURCE, mdx=True).html)
    callout = soup.select_one("div.callout")
    assert callout is not None, "expected the <Callout> element to be rendered"
    assert callout["data-callout-type"] == "warning"
    assert callout.select_one(".callout__emoji").get_text() == "⚠️"
    assert callout.select_one("strong").get_text() == "this"
    nested = callout.select_one("div.codehilite")
    assert nested is not None and nested["data-language"] == "bash"
    assert "CALLOUTPLACEHOLDER" not in str(soup)
    assert callout.find_parent("p") is None, "callouts must not be wrapped in <p>"


def test_callout_with_jsx_attribute_syntax() -> None:
    """``type={'error'}`` style attributes are understood too."""
    source = "<Callout type={'error'}>\nBroken.\n</Callout>\n"
    soup = _soup(HtmlContentRenderer().render(source, mdx=True).html)
    assert soup.select_one("div.callout")["data-callout-type"] == "error"


def test_code_blocks_carry_language_and_copy_flag() -> None:
    """Highlighted blocks are tagged with their language and the copy flag."""
    source = "```python\nprint('hi')\n```\n\n```\nplain\n```\n"
    soup = _soup(HtmlContentRenderer().render(source).html)
    blocks = soup.select("div.codehilite")
    assert [block["data-language"] for block in blocks] == ["python", "text"]
    assert all(block["data-copy"] == "true" for block in blocks)


def test_language_labels_follow_each_block_whatever_the_fence() -> None:
    """Tilde fences, backtick fences and indented blocks keep their own labels."""
    source = (
        "~~~python\nprint('hi')\n~~~\n\n"
        "Some text.\n\n"
        "    indented = True\n\n"
        "```js\nlet x = 1;\n```\n"
    )
    soup = _soup(HtmlContentRenderer().render(source).html)
    blocks = soup.select("div.codehilite")
    assert [block["data-language"] for block in blocks] == ["python", "text", "js"]


def test_nested_callouts_render_inside_each_other() -> None:
    """An inner callout is wrapped by its outer one with no stray closing tag."""
    source = (
        '<Callout type="warning">\n'
        "  before\n\n"
        '  <Callout type="error">\n'
        "    inner\n"
        "  </Callout>\n\n"
        "  after\n"
        "</Callout>\n"
    )
    html = HtmlContentRenderer().render(source, mdx=True).html
    assert "</Callout>" not in html
    assert "CALLOUTPLACEHOLDER" not in html
    soup = _soup(html)
    outer = soup.select_one("div.callout")
    assert outer is not None and outer["data-callout-type"] == "warning"
    inner = outer.select_one("div.callout")
    assert inner is not None and inner["data-callout-type"] == "error"
    assert inner.get_text(strip=True).endswith("inner")
    assert "after" in outer.get_text()


def test_copy_flag_can_be_disabled() -> None:
    """``copy_code=False`` omits the ``data-copy`` attribute."""
    html = HtmlContentRenderer(copy_code=False).render("```js\nx\n```\n").html
    assert "data-copy" not in html


def test_highlighting_can_be_disabled() -> None:
    """Without highlighting, fenced code renders as a plain block."""
    html = HtmlContentRenderer(code_highlight=False).render("```js\nlet x\n```\n").html
    soup = _soup(html)
    assert soup.select_one("div.codehilite") is None
    assert soup.select_one("pre code").get_text().strip() == "let x"


def test_fence_labels_and_indentation_are_normalised() -> None:
    """Rust-style labels (``rust,no_run``) and indented fences still highlight."""
    source = "- Example\n\n  ```rust,no_run\n  fn main() {}\n  ```\n"
    soup = _soup(HtmlContentRenderer().render(source).html)
    block = soup.select_one("div.codehilite")
    assert block is not None and block["data-language"] == "rust"


def test_toc_collects_h2_and_h3_in_order() -> None:
    """Second- and third-level headings feed the table of contents."""
    content = HtmlContentRenderer().render(MDX_SOURCE, mdx=True)
    assert content.toc_items == [
        TocItem(label="Setup", anchor="setup", level=2),
        TocItem(label="Details", anchor="details", level=3),
    ]


def test_mdx_stripping_is_opt_in() -> None:
    """Plain Markdown keeps lines that merely look like ESM."""
    html = HtmlContentRenderer().render("import this\n").html
    assert "import this" in html


def test_word_count_and_reading_time() -> None:
    """Visible words are counted and reading time rounds up to a minute."""
    content = HtmlContentRenderer().render("word " * 450)
    assert content.word_count == 450
    assert content.reading_minutes == 3


def test_empty_body_renders_nothing() -> None:
    """Whitespace-only bodies produce empty HTML and no TOC."""
    content = HtmlContentRenderer().render("\n\n")
    assert content.html == ""
    assert content.toc_items == []
    assert content.reading_minutes == 1


def test_stylesheet_targets_codehilite() -> None:
    """The Pygments stylesheet is scoped to ``.codehilite``."""
    assert ".codehilite" in HtmlContentRenderer("friendly").stylesheet

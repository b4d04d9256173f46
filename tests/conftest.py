"""Shared fixtures for building throwaway content trees.

Most tests need a small project on disk: a ``config/site.yaml`` file and a
``content/`` directory holding Markdown files and ``_meta.yaml`` menus. The
``write_file`` fixture writes dedented text relative to ``tmp_path`` and
``site_project`` lays out a representative site with docs, pages, and a blog
section.
"""

from __future__ import annotations

import textwrap
import typing as typ

import pytest

if typ.TYPE_CHECKING:
    from pathlib import Path

WriteFile = typ.Callable[[str, str], "Path"]


@pytest.fixture
def write_file(tmp_path: Path) -> WriteFile:
    """Return a helper that writes dedented text beneath ``tmp_path``."""

    def _write(relative: str, text: str) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(text).lstrip("\n"), encoding="utf-8")
        return path

    return _write


def page(title: str, body: str = "", **fields: str) -> str:
    """Return a content file with a front-matter header."""
    header = [f"title: {title}"]
    header.extend(f"{key}: {value}" for key, value in fields.items())
    return "---\n" + "\n".join(header) + "\n---\n" + textwrap.dedent(body)


@pytest.fixture
def page_text() -> typ.Callable[..., str]:
    """Return the :func:`page` helper for tests that write their own trees."""
    return page


@pytest.fixture
def site_project(tmp_path: Path, write_file: WriteFile) -> Path:
    """Lay out a small site and return the path to its ``config/site.yaml``."""
    write_file(
        "config/site.yaml",
        """
        site:
          title: Test Space
          description: A test site
          static_dir: public
          docs_repository_base: https://github.com/example/space/blob/main
        navbar:
          logo_text: Test Space
        feedback:
          link: https://github.com/example/space/issues/new
        blog:
          section: blogs
          title: Blogs
        """,
    )
    write_file(
        "content/_meta.yaml",
        """
        about: {title: About, type: page}
        docs: Docs
        blogs: Blogs
        """,
    )
    write_file("content/index.md", page("Home", "Welcome to [the docs](docs/intro.md).\n"))
    write_file("content/about.md", page("About Me", "## Contact\n\nSay hi.\n"))
    write_file(
        "content/docs/_meta.yaml",
        """
        intro: Introduction
        "--tools": {title: Tools, type: group}
        kafka: Kafka
        drafts: {title: Drafts, display: hidden}
        """,
    )
    write_file(
        "content/docs/intro.md",
        page(
            "Intro",
            """
            ## Getting started

            Read the [producer notes](kafka/producer.mdx#batching) next.

            ```python
            print("hello")
            ```
            """,
            description="Start here",
        ),
    )
    write_file("content/docs/drafts.md", page("Draft notes", "Not ready.\n"))
    write_file(
        "content/docs/kafka/producer.mdx",
        page(
            "Producer",
            """
            import { Callout } from 'nextra/components'

            ## Batching

            <Callout type="warning" emoji="!">
              Tune **linger.ms** carefully.
            </Callout>
            """,
            date="2024-05-20",
            tags="[kafka]",
        ),
    )
    write_file("content/docs/kafka/consumer.md", page("Consumer", "## Groups\n"))
    write_file(
        "content/blogs/older.md",
        page("Older post", "Old.\n", date="2023-01-01", description="The *first* one"),
    )
    write_file(
        "content/blogs/newer.md",
        page("Newer post", "New.\n", date="2024-01-01", tags="[aws, dynamodb]"),
    )
    write_file("content/blogs/undated.md", page("Undated post", "Whenever.\n"))
    write_file("public/robots.txt", "User-agent: *\n")
    return tmp_path / "config" / "site.yaml"

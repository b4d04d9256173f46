"""Static site builder for a personal documentation and blog site.

This package turns a ``content/`` tree of Markdown and MDX files, ordered by
per-directory ``_meta.yaml`` menus, into themed static HTML. It exposes the
CLI entry points used by ``uv run pages``.

Exports
-------
- ``app``: Cyclopts application holding the ``build``, ``check`` and
  ``serve`` subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from space_pages import main
>>> main()  # doctest: +SKIP
>>> from space_pages import app
>>> "pages" in app.name
True
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]

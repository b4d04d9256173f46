"""Cyclopts CLI entrypoint for building and previewing the site.

The ``pages`` console script defined here renders every content item under
``content/`` into static HTML, validates front matter and navigation metadata
without writing anything, and serves the output directory for local preview.
Typical usage runs ``pages build`` in CI and ``pages serve`` while writing.

Examples
--------
Build the site with the default configuration:

>>> from space_pages.cli import main
>>> main()  # doctest: +SKIP

Build into a custom directory:

>>> from space_pages.cli import app
>>> app(["build", "--output-dir", "dist"])  # doctest: +SKIP
"""

from __future__ import annotations

import functools
import logging
import typing as typ
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import configure_logging, load_site_config
from .generator import SiteGenerator, check_site

DEFAULT_CONFIG = Path("config/site.yaml")
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000

app = App(name="pages", config=cyclopts.config.Env("PAGES_", command=False))  # type: ignore[unknown-argument]

logger = logging.getLogger(__name__)

ConfigOption = typ.Annotated[
    Path, Parameter(help="Path to site config", env_var="PAGES_CONFIG")
]
VerboseOption = typ.Annotated[
    bool, Parameter(help="Enable debug logging", env_var="PAGES_VERBOSE")
]
LogJsonOption = typ.Annotated[
    bool, Parameter(help="Emit logs as JSON lines", env_var="PAGES_LOG_JSON")
]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _build(config: Path, output_dir: Path | None) -> Path:
    """Run a full build and print each written artifact."""
    site_config = load_site_config(config)
    generator = SiteGenerator(site_config, output_dir=output_dir)
    for path in generator.run():
        print(f"wrote {_format_path(path)}")
    return generator.output_dir


@app.command(help="Render every content item into static HTML.")
def build(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="PAGES_OUTPUT_DIR"),
    ] = None,
    verbose: VerboseOption = False,
    log_json: LogJsonOption = False,
) -> None:
    """Build the complete site for the requested configuration.

    Parameters
    ----------
    config : Path, optional
        Path to the ``site.yaml`` configuration file (overridable via
        ``PAGES_CONFIG``).
    output_dir : Path or None, optional
        Override for ``site.output_dir``. The directory is cleared first.
    verbose : bool, optional
        Enable debug logging for ``space_pages``.
    log_json : bool, optional
        Render log records as JSON lines.

    Raises
    ------
    ContentError
        If a content item has malformed front matter.
    NavigationError
        If navigation metadata is duplicated, dangling, or malformed.
    SiteConfigError
        If the configuration is invalid.
    """
    configure_logging(verbose=verbose, log_json=log_json)
    _build(config, output_dir)


@app.command(help="Validate front matter and navigation metadata.")
def check(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    verbose: VerboseOption = False,
    log_json: LogJsonOption = False,
) -> None:
    """Load every content item and navigation file without writing output."""
    configure_logging(verbose=verbose, log_json=log_json)
    summary = check_site(load_site_config(config))
    print(f"ok: {summary.pages} pages ({summary.hidden} hidden)")
    print(f"sections: {', '.join(summary.sections) or '-'}")
    if summary.blog_posts is not None:
        print(f"blog posts: {summary.blog_posts}")


def _make_server(directory: Path, host: str, port: int) -> ThreadingHTTPServer:
    handler = functools.partial(SimpleHTTPRequestHandler, directory=str(directory))
    return ThreadingHTTPServer((host, port), handler)


@app.command(help="Serve the output directory for local preview.")
def serve(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    host: typ.Annotated[
        str, Parameter(help="Interface to bind", env_var="PAGES_HOST")
    ] = DEFAULT_HOST,
    port: typ.Annotated[
        int, Parameter(help="Port to listen on", env_var="PAGES_PORT")
    ] = DEFAULT_PORT,
    rebuild: typ.Annotated[
        bool,
        Parameter(
            name="--build",
            negative="--no-build",
            help="Rebuild before serving",
            env_var="PAGES_BUILD",
        ),
    ] = True,
    verbose: VerboseOption = False,
    log_json: LogJsonOption = False,
) -> None:
    """Optionally build the site, then serve it until interrupted.

    Raises
    ------
    FileNotFoundError
        If ``--no-build`` is given and the output directory does not exist.
    """
    configure_logging(verbose=verbose, log_json=log_json)
    if rebuild:
        output_dir = _build(config, None)
    else:
        output_dir = load_site_config(config).site.output_dir
        if not output_dir.is_dir():
            msg = f"Output directory '{output_dir}' not found; run 'pages build'."
            raise FileNotFoundError(msg)

    server = _make_server(output_dir, host, port)
    print(f"serving {_format_path(output_dir)} at http://{host}:{port}/")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("server stopped")
    finally:
        server.server_close()


def main() -> None:
    """Invoke the Cyclopts application that powers the `pages` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()

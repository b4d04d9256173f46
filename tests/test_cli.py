"""Tests for the ``pages`` Cyclopts application.

Commands are parsed with ``app.parse_args`` and then called directly, so
exceptions propagate to pytest instead of exiting the interpreter. Logging
configuration is patched out to keep pytest's log capture intact, and the HTTP
server is replaced with a stub so ``serve`` returns immediately.
"""

from __future__ import annotations

import typing as typ

import pytest

from space_pages import cli
from space_pages.navigation import NavigationError

if typ.TYPE_CHECKING:
    from pathlib import Path

    from conftest import WriteFile
    from pytest_mock import MockerFixture


@pytest.fixture(autouse=True)
def logging_setup(mocker: MockerFixture) -> typ.Any:  # noqa: ANN401
    """Replace logging setup so handlers installed by pytest survive."""
    return mocker.patch.object(cli, "configure_logging")


def _run(args: list[str]) -> object:
    command, bound, _ = cli.app.parse_args(args)
    return command(*bound.args, **bound.kwargs)


def test_build_writes_site_and_reports_paths(
    site_project: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """``pages build`` prints one ``wrote`` line per artifact."""
    out_dir = tmp_path / "dist"
    _run(["build", "--config", str(site_project), "--output-dir", str(out_dir)])
    lines = capsys.readouterr().out.splitlines()
    assert lines, "expected progress output"
    assert all(line.startswith("wrote ") for line in lines)
    assert any(line.endswith("dist/docs/intro/index.html") for line in lines)
    assert (out_dir / "index.html").is_file()


def test_build_passes_logging_flags(
    site_project: Path, logging_setup: typ.Any
) -> None:
    """``--verbose`` and ``--log-json`` reach the logging setup."""
    _run(["build", "--config", str(site_project), "--verbose", "--log-json"])
    logging_setup.assert_called_once_with(verbose=True, log_json=True)


def test_build_reads_environment(
    site_project: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Options fall back to ``PAGES_*`` environment variables."""
    monkeypatch.setenv("PAGES_CONFIG", str(site_project))
    monkeypatch.setenv("PAGES_OUTPUT_DIR", str(tmp_path / "from-env"))
    _run(["build"])
    assert (tmp_path / "from-env" / "about" / "index.html").is_file()


def test_build_propagates_navigation_errors(
    site_project: Path, write_file: WriteFile
) -> None:
    """Invalid metadata aborts the build with the underlying exception."""
    write_file("content/docs/_meta.yaml", "intro: Intro\nmissing: Missing\n")
    with pytest.raises(NavigationError, match="'missing'"):
        _run(["build", "--config", str(site_project)])


def test_check_prints_summary_without_writing(
    site_project: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """``pages check`` validates content and prints counts only."""
    _run(["check", "--config", str(site_project)])
    out = capsys.readouterr().out
    assert "ok: 9 pages (1 hidden)" in out
    assert "sections: about, docs, blogs" in out
    assert "blog posts: 3" in out
    assert not (tmp_path / "out").exists()


def test_serve_builds_then_serves(
    site_project: Path,
    tmp_path: Path,
    mocker: MockerFixture,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """``pages serve`` rebuilds by default and serves the output directory."""
    server = mocker.Mock()
    make_server = mocker.patch.object(cli, "_make_server", return_value=server)
    _run(["serve", "--config", str(site_project), "--port", "9001"])

    make_server.assert_called_once_with(tmp_path / "out", "127.0.0.1", 9001)
    server.serve_forever.assert_called_once_with()
    server.server_close.assert_called_once_with()
    out = capsys.readouterr().out
    assert "http://127.0.0.1:9001/" in out
    assert (tmp_path / "out" / "index.html").is_file()


def test_serve_stops_cleanly_on_interrupt(
    site_project: Path, mocker: MockerFixture
) -> None:
    """Ctrl-C ends serving and still closes the socket."""
    server = mocker.Mock()
    server.serve_forever.side_effect = KeyboardInterrupt
    mocker.patch.object(cli, "_make_server", return_value=server)
    _run(["serve", "--config", str(site_project)])
    server.server_close.assert_called_once_with()


def test_serve_without_build_requires_output(
    site_project: Path, mocker: MockerFixture
) -> None:
    """``--no-build`` refuses to serve a directory that was never built."""
    make_server = mocker.patch.object(cli, "_make_server")
    with pytest.raises(FileNotFoundError, match="run 'pages build'"):
        _run(["serve", "--config", str(site_project), "--no-build"])
    make_server.assert_not_called()

"""
Root Typer application for the docbridge CLI.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version

import typer
from typer import Typer

from docbridge import __version__
from docbridge.core.logging import configure_logging
from docbridge.core.settings import get_settings

app = Typer(
    name="docbridge",
    help="docbridge: compile JSDoc contracts and serve them as MCP tools.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        try:
            v = pkg_version("docbridge")
        except PackageNotFoundError:
            v = __version__
        typer.echo(f"docbridge {v}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="Override DOCBRIDGE_LOG_LEVEL"),
    log_json: bool | None = typer.Option(None, "--log-json/--log-console", help="Force log format"),
) -> None:
    """docbridge CLI: docgen, run, tools."""
    settings = get_settings()
    configure_logging(
        level=log_level or settings.log_level,
        json_format=log_json if log_json is not None else settings.log_json,
    )


# ── Command registration ─────────────────────────────────────────────────

from docbridge.cli.bridge import run, tools  # noqa: E402
from docbridge.cli.docgen import docgen  # noqa: E402

app.command("docgen")(docgen)
app.command("run")(run)
app.command("tools")(tools)


if __name__ == "__main__":
    app()

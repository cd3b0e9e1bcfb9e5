"""CLI entrypoint: Typer app definition and command registration"""

from typing import Annotated, Optional

import typer

from lessonmark.cli.commands import (
    check_cmd,
    configure_logging,
    init_cmd,
    parse_cmd,
    preview_cmd,
    pull_cmd,
    push_cmd,
    render_cmd,
    serialize_cmd,
)


app = typer.Typer(name="lessonmark", no_args_is_help=True, help="Topic content markup: parse, serialize, render")


@app.callback()
def main(
    log_level: Annotated[Optional[str], typer.Option("--log-level", help="DEBUG, INFO, WARNING, ERROR")] = None,
    ):
    """Configure logging before any command runs."""
    configure_logging(log_level)


app.command(name="parse")(parse_cmd)
app.command(name="serialize")(serialize_cmd)
app.command(name="render")(render_cmd)
app.command(name="preview")(preview_cmd)
app.command(name="check")(check_cmd)
app.command(name="init")(init_cmd)
app.command(name="push")(push_cmd)
app.command(name="pull")(pull_cmd)

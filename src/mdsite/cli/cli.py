"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdsite.cli.commands import build_cmd, init_cmd, list_cmd
from mdsite.logging_setup import configure_logging


app = typer.Typer(name="mdsite", no_args_is_help=True, help="Static site resource pipeline")


@app.callback()
def main() -> None:
    configure_logging()


app.command(name="build")(build_cmd)
app.command(name="list")(list_cmd)
app.command(name="init")(init_cmd)

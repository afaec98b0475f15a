"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from typing import Annotated

import typer

from pickview import __version__
from pickview.cli.commands import config, pick, scan
from pickview.utils.formatting import configure_logging

# Create main Typer app
app = typer.Typer(
    name="pickview",
    help="Pick a path from a filtered tree, view it, optionally remove it.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"pickview version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable debug logging.",
        ),
    ] = False,
) -> None:
    """pickview - pick a path with an external selector and open it.

    Candidates are streamed to a selector such as fzy or fzf; the chosen
    path is handed to a viewer and can be removed afterwards.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(verbose)


# Register commands
app.command(name="open")(pick.open_path)
app.command(name="scan")(scan.scan_paths)
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()

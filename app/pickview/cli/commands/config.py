"""Configuration commands.

Provides commands to show, locate and initialize the pickview config file.
"""

from pathlib import Path
from typing import Annotated

import tomli_w
import typer

from pickview.core.config import (
    PickviewConfig,
    config_to_dict,
    load_config_or_default,
    save_config,
)
from pickview.core.paths import get_config_path
from pickview.errors import ConfigError
from pickview.utils.formatting import print_error, print_info, print_success, print_warning
from pickview.utils.shell import command_exists

app = typer.Typer(
    help="Show and initialize configuration.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command()
def show(
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Config file to read."),
    ] = None,
) -> None:
    """Show the effective configuration as TOML."""
    try:
        config = load_config_or_default(config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    typer.echo(tomli_w.dumps(config_to_dict(config)), nl=False)

    selector = config.selector().executable
    if not command_exists(selector):
        print_warning(f"Selector program '{selector}' not found in PATH.")


@app.command()
def init(
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Where to write the config file."),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a config file with default settings."""
    target = config_path or get_config_path()
    if target.exists() and not force:
        print_info(f"Config already exists: {target} (use --force to overwrite)")
        raise typer.Exit(code=1)

    try:
        written = save_config(PickviewConfig(), target)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {written}")


@app.command()
def path() -> None:
    """Print the default config file location."""
    typer.echo(str(get_config_path()))

"""CLI package for pickview.

This package contains the Typer application and all subcommands.
"""

from pickview.cli.main import app

__all__ = ["app"]

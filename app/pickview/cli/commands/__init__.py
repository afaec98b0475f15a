"""CLI commands for pickview.

This package contains all subcommand implementations.
"""

from pickview.cli.commands import config, pick, scan

__all__ = ["config", "pick", "scan"]

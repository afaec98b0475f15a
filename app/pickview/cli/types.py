"""Shared helpers for CLI commands.

Used by both ``open`` and ``scan`` to validate the entry-type flags and
build the scan filter.
"""

import shutil

import typer

from pickview.filesystem.models import ScanFilter
from pickview.picker.command import DEFAULT_LINES
from pickview.utils.formatting import print_error

USAGE_ERROR = 2


def build_scan_filter(pattern: str, *, dirs: bool, files: bool) -> ScanFilter:
    """Build a ScanFilter from CLI flags.

    Args:
        pattern: Name pattern argument.
        dirs: Value of --dirs.
        files: Value of --files.

    Returns:
        The validated filter.

    Raises:
        typer.Exit: With code 2 if neither --dirs nor --files was given.
        ScanError: If the pattern is invalid.
    """
    if not (dirs or files):
        print_error("At least one of --dirs/-d or --files/-f is required.")
        raise typer.Exit(code=USAGE_ERROR)
    return ScanFilter.create(pattern, include_directories=dirs, include_files=files)


def terminal_lines() -> int:
    """Height of the controlling terminal, or a default if unknown."""
    return shutil.get_terminal_size((80, DEFAULT_LINES)).lines

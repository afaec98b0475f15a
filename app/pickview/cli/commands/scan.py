"""Scan command implementation.

Prints the candidates that ``open`` would offer, one per line, without
starting a selector.
"""

from itertools import islice
from typing import Annotated

import typer

from pickview.cli.types import build_scan_filter
from pickview.errors import PickviewError
from pickview.filesystem.models import SortOrder
from pickview.filesystem.resolver import normalize_root
from pickview.filesystem.scanner import PathScanner
from pickview.utils.formatting import print_error


def scan_paths(
    pattern: Annotated[
        str,
        typer.Argument(help="Case-insensitive regex matched against file names."),
    ],
    root: Annotated[
        str,
        typer.Argument(help="Directory to scan."),
    ],
    dirs: Annotated[
        bool,
        typer.Option("--dirs", "-d", help="List directories."),
    ] = False,
    files: Annotated[
        bool,
        typer.Option("--files", "-f", help="List files whose name matches PATTERN."),
    ] = False,
    sort: Annotated[
        SortOrder,
        typer.Option("--sort", "-s", help="Candidate ordering.", case_sensitive=False),
    ] = SortOrder.NAME,
    limit: Annotated[
        int | None,
        typer.Option("--limit", "-l", min=1, help="Limit number of results."),
    ] = None,
) -> None:
    """List candidates below ROOT, relative to ROOT."""
    try:
        scan_filter = build_scan_filter(pattern, dirs=dirs, files=files)
        candidates = PathScanner(scan_filter, sort=sort).scan(normalize_root(root))
        for candidate in islice(candidates, limit):
            typer.echo(candidate)
    except PickviewError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

"""Open command implementation.

Picks a path below a root directory with the external selector, runs a
viewer on it, and optionally removes it afterwards.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from pickview.cli.types import build_scan_filter, terminal_lines
from pickview.core.action import ActionRunner
from pickview.core.config import PickviewConfig, load_config_or_default
from pickview.core.pipeline import OpenPipeline, PipelineStatus
from pickview.errors import PickviewError
from pickview.filesystem.models import PruneResult, PruneState, ScanFilter, SortOrder
from pickview.filesystem.pruner import Pruner
from pickview.filesystem.resolver import normalize_root
from pickview.filesystem.scanner import PathScanner
from pickview.picker.picker import InteractivePicker
from pickview.utils.formatting import console, print_error, print_info

logger = logging.getLogger(__name__)


def open_path(
    program: Annotated[
        str,
        typer.Argument(help="Viewer program run with the picked path."),
    ],
    pattern: Annotated[
        str,
        typer.Argument(help="Case-insensitive regex matched against file names."),
    ],
    root: Annotated[
        str,
        typer.Argument(help="Directory to pick from."),
    ],
    dirs: Annotated[
        bool,
        typer.Option("--dirs", "-d", help="Offer directories."),
    ] = False,
    files: Annotated[
        bool,
        typer.Option("--files", "-f", help="Offer files whose name matches PATTERN."),
    ] = False,
    remove: Annotated[
        bool,
        typer.Option("--remove", "-r", help="Offer to remove the path after viewing."),
    ] = False,
    sort: Annotated[
        SortOrder | None,
        typer.Option("--sort", "-s", help="Candidate ordering.", case_sensitive=False),
    ] = None,
    keep_root: Annotated[
        bool | None,
        typer.Option("--keep-root/--prune-root", help="Never remove ROOT itself when pruning."),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", "-n", help="Show what would be removed without removing."),
    ] = False,
    lines: Annotated[
        int | None,
        typer.Option("--lines", "-l", min=1, help="Selector height (default: terminal height)."),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Config file to use."),
    ] = None,
) -> None:
    """Pick a path below ROOT and open it with PROGRAM.

    Exits non-zero without output when nothing is picked.

    Examples:
        pickview open mpv '\\.(mkv|mp4)$' ~/videos -f -r
        pickview open ranger . ~/projects -d
    """
    try:
        scan_filter = build_scan_filter(pattern, dirs=dirs, files=files)
        config = load_config_or_default(config_path)
    except PickviewError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if lines is not None:
        config = config.model_copy(update={"lines": lines})

    pipeline = build_pipeline(
        program,
        scan_filter,
        config,
        root=root,
        sort=sort,
        remove=remove,
        keep_root=keep_root,
        dry_run=dry_run,
    )

    try:
        result = pipeline.run(root)
    except PickviewError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if result.status == PipelineStatus.NO_SELECTION:
        raise typer.Exit(code=result.exit_code)

    if result.prune is not None:
        _report_prune(result.prune)


def build_pipeline(
    program: str,
    scan_filter: ScanFilter,
    config: PickviewConfig,
    *,
    root: str,
    sort: SortOrder | None = None,
    remove: bool = False,
    keep_root: bool | None = None,
    dry_run: bool = False,
) -> OpenPipeline:
    """Assemble the pipeline from CLI flags and configuration.

    Flags given on the command line override configured values.

    Args:
        program: Viewer program.
        scan_filter: Filter for candidates.
        config: Loaded configuration.
        root: Scan root, used as the prune boundary with keep_root.
        sort: Candidate ordering override.
        remove: Offer removal after viewing.
        keep_root: Override for config.keep_root.
        dry_run: Never remove anything.

    Returns:
        Configured OpenPipeline.
    """
    pruner: Pruner | None = None
    if remove:
        keep = config.keep_root if keep_root is None else keep_root
        pruner = Pruner(dry_run=dry_run, stop_at=normalize_root(root) if keep else None)

    return OpenPipeline(
        scanner=PathScanner(scan_filter, sort=sort or config.sort),
        picker=InteractivePicker(config.selector(terminal_lines())),
        viewer=ActionRunner(program),
        pruner=pruner,
        prompt=f"{Path(program).name}{config.prompt_suffix}",
        confirm_prompt=config.confirm_prompt,
    )


def _report_prune(prune: PruneResult) -> None:
    """Print what the removal step did.

    Args:
        prune: Result of the removal step.
    """
    if prune.state == PruneState.ABORTED:
        return
    if prune.dry_run:
        print_info(f"Dry-run: would remove {escape(prune.path)} and prune empty parents.")
        return
    if prune.deleted:
        console.print(f"[removed]Removed[/] [path]{escape(prune.path)}[/]", highlight=False)
    for directory in prune.removed_dirs:
        console.print(f"[removed]Pruned[/] [path]{escape(directory)}[/]", highlight=False)

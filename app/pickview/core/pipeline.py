"""The pick, view and optionally remove pipeline.

Control flow is strictly sequential: scan candidates into the selector,
resolve the answer, run the viewer, then (if a Pruner is configured)
confirm through the selector again and remove.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from pickview.core.action import ActionRunner
from pickview.filesystem.models import PruneResult
from pickview.filesystem.pruner import Pruner
from pickview.filesystem.resolver import normalize_root, resolve
from pickview.filesystem.scanner import PathScanner
from pickview.picker.picker import DEFAULT_PROMPT, InteractivePicker

logger = logging.getLogger(__name__)

DEFAULT_CONFIRM_PROMPT = "Remove? "


class PipelineStatus(str, Enum):
    """How a pipeline run ended.

    Attributes:
        OPENED: A path was picked and handed to the viewer.
        NO_SELECTION: The user picked nothing; nothing else happened.
    """

    OPENED = "opened"
    NO_SELECTION = "no_selection"


@dataclass(frozen=True, slots=True)
class PipelineResult:
    """Result of one pipeline run.

    Attributes:
        status: How the run ended.
        path: Resolved path that was opened, if any.
        viewer_returncode: Viewer exit status, if it ran.
        prune: Outcome of the removal step, if it was requested.
    """

    status: PipelineStatus
    path: str | None = None
    viewer_returncode: int | None = None
    prune: PruneResult | None = None

    @property
    def exit_code(self) -> int:
        """Process exit code: non-zero when nothing was selected."""
        return 0 if self.status == PipelineStatus.OPENED else 1


@dataclass
class OpenPipeline:
    """Wires scanner, picker, viewer and pruner together.

    Attributes:
        scanner: Produces candidates below the root.
        picker: Selector used for both the pick and the confirmation.
        viewer: Runs the viewer program.
        pruner: If set, offers removal after viewing.
        prompt: Prompt for the pick.
        confirm_prompt: Prompt for the removal confirmation.
    """

    scanner: PathScanner
    picker: InteractivePicker
    viewer: ActionRunner
    pruner: Pruner | None = None
    prompt: str = DEFAULT_PROMPT
    confirm_prompt: str = DEFAULT_CONFIRM_PROMPT

    def run(self, root: str) -> PipelineResult:
        """Run the pipeline once.

        Args:
            root: Directory to pick from.

        Returns:
            PipelineResult describing what happened.

        Raises:
            ScanError: If the root or a subdirectory cannot be read, or the
                name pattern is invalid.
            PickerError: If the selector cannot be started.
            ActionError: If the viewer cannot be started.
        """
        root = normalize_root(root)
        selected = self.picker.pick(self.scanner.scan(root), self.prompt)
        if selected is None:
            logger.debug("Nothing selected")
            return PipelineResult(status=PipelineStatus.NO_SELECTION)

        path = resolve(root, selected)
        logger.debug("Selected %s", path)
        returncode = self.viewer.run(path)

        prune: PruneResult | None = None
        if self.pruner is not None:
            prune = self.pruner.maybe_delete(
                path, lambda: self.picker.confirm(self.confirm_prompt)
            )

        return PipelineResult(
            status=PipelineStatus.OPENED,
            path=path,
            viewer_returncode=returncode,
            prune=prune,
        )

"""Run the viewer program on the picked path."""

import logging
from dataclasses import dataclass

from pickview.errors import ActionError, ActionErrorReason
from pickview.utils.shell import run_interactive

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ActionRunner:
    """Launches a viewer with the picked path as its only argument.

    The viewer inherits the terminal and is waited for. Its exit status
    is returned but never interpreted: a failing viewer does not stop
    the pipeline.

    Attributes:
        program: Viewer executable, looked up on PATH.
    """

    program: str

    def run(self, path: str) -> int:
        """Run the viewer on ``path`` and wait for it.

        Args:
            path: Resolved absolute path.

        Returns:
            The viewer's exit status.

        Raises:
            ActionError: SPAWN_FAILED if the viewer cannot be started.
        """
        try:
            returncode = run_interactive([self.program, path])
        except (FileNotFoundError, OSError) as e:
            msg = f"Cannot start viewer {self.program!r}: {e}"
            raise ActionError(ActionErrorReason.SPAWN_FAILED, msg) from e

        if returncode != 0:
            logger.info("Viewer %s exited with %d", self.program, returncode)
        return returncode

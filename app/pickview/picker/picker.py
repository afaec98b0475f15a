"""Interactive picking through an external selector.

One pick is one selector process: candidates go in, at most one line
comes back. An empty answer means the user aborted, which is a normal
outcome and reported as None.
"""

import logging
from collections.abc import Iterable

from pickview.picker.command import SelectorCommand
from pickview.picker.session import ENCODING, ENCODING_ERRORS, SelectorSession

logger = logging.getLogger(__name__)

CONFIRM_CHOICES: tuple[str, str] = ("No", "Yes")
DEFAULT_PROMPT = "> "


def parse_answer(data: bytes) -> str | None:
    """Extract the chosen line from the selector's output.

    Args:
        data: Everything the selector wrote before exiting.

    Returns:
        The first line without its terminator, or None if it is empty.
    """
    line = data.split(b"\n", 1)[0]
    if not line:
        return None
    return line.decode(ENCODING, ENCODING_ERRORS)


class InteractivePicker:
    """Lets a human choose one candidate using an external selector.

    Args:
        command: Selector command template. Defaults to fzy in alacritty.
    """

    def __init__(self, command: SelectorCommand | None = None) -> None:
        self._command = command or SelectorCommand()

    @property
    def command(self) -> SelectorCommand:
        """The selector command template in use."""
        return self._command

    def pick(self, candidates: Iterable[str], prompt: str = DEFAULT_PROMPT) -> str | None:
        """Run the selector over ``candidates`` and return the choice.

        Candidates are streamed: an error raised by the iterable (for
        example a failing lazy scan) terminates the selector, reaps it,
        and propagates.

        Args:
            candidates: Lines to offer; none may contain a newline.
            prompt: Prompt displayed by the selector.

        Returns:
            The chosen candidate, or None if nothing was chosen.

        Raises:
            PickerError: SPAWN_FAILED if the selector cannot be started.
        """
        with SelectorSession.spawn(lambda r, w: self._command.build(prompt, r, w)) as session:
            sent = session.send(candidates)
            answer = session.receive()
        logger.debug("Offered %d candidates, got %d answer bytes", sent, len(answer))
        # fzy and fzf exit 1 when the user aborts
        if not answer and session.returncode is not None and session.returncode > 1:
            logger.warning(
                "Selector %s exited with status %d", self._command.executable, session.returncode
            )
        return parse_answer(answer)

    def confirm(self, prompt: str) -> bool:
        """Ask a yes/no question through the selector.

        Args:
            prompt: Question shown by the selector.

        Returns:
            True only if "Yes" was chosen.
        """
        return self.pick(CONFIRM_CHOICES, prompt) == CONFIRM_CHOICES[1]

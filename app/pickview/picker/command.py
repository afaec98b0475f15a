"""Selector command templates.

The selector is an external program: it reads newline-delimited
candidates from stdin, lets a human choose at most one, and writes the
choice to stdout. Which program (and which terminal hosts it) is pure
configuration, expressed as an argv template.

Placeholders available in every template element:
    {prompt}     the prompt text as-is
    {qprompt}    the prompt quoted for ``sh -c`` strings
    {lines}      terminal height hint for the selector
    {input_fd}   descriptor number carrying the candidate stream
    {output_fd}  descriptor number receiving the answer
"""

import shlex
from dataclasses import dataclass

from pickview.errors import PickerError, PickerErrorReason

# fzy inside a fresh alacritty window; the terminal gives the selector its
# own tty, so the pipes are handed over by descriptor number. Redirects go
# through /dev/fd: dash rejects "n<&m" for descriptors above 9.
DEFAULT_SELECTOR_COMMAND: tuple[str, ...] = (
    "alacritty",
    "-e",
    "sh",
    "-c",
    "fzy -p {qprompt} -l {lines} < /dev/fd/{input_fd} > /dev/fd/{output_fd}",
)

DEFAULT_LINES = 40


@dataclass(frozen=True, slots=True)
class SelectorCommand:
    """An argv template for the external selector.

    Attributes:
        template: Command and arguments, each formatted with the placeholders.
        lines: Height hint substituted for ``{lines}``.
    """

    template: tuple[str, ...] = DEFAULT_SELECTOR_COMMAND
    lines: int = DEFAULT_LINES

    def __post_init__(self) -> None:
        """Validate the template is runnable."""
        if not self.template:
            msg = "Selector command template cannot be empty"
            raise ValueError(msg)

    @property
    def executable(self) -> str:
        """Name of the program that is spawned first."""
        return self.template[0]

    def build(self, prompt: str, input_fd: int, output_fd: int) -> list[str]:
        """Render the template into an argv list.

        Args:
            prompt: Prompt shown by the selector.
            input_fd: Child-side descriptor of the candidate pipe.
            output_fd: Child-side descriptor of the answer pipe.

        Returns:
            Argument vector ready for subprocess.

        Raises:
            PickerError: SPAWN_FAILED if the template references an
                unknown placeholder or is malformed.
        """
        fields = {
            "prompt": prompt,
            "qprompt": shlex.quote(prompt),
            "lines": self.lines,
            "input_fd": input_fd,
            "output_fd": output_fd,
        }
        try:
            return [part.format(**fields) for part in self.template]
        except (KeyError, IndexError, ValueError) as e:
            msg = f"Invalid selector command template: {e}"
            raise PickerError(PickerErrorReason.SPAWN_FAILED, msg) from e

"""Shell execution utilities.

Provides subprocess helpers for programs that share the user's terminal.
"""

import shutil
import subprocess


def command_exists(name: str) -> bool:
    """Check if a command exists in the system PATH.

    Args:
        name: Command name to check.

    Returns:
        True if command exists, False otherwise.
    """
    return shutil.which(name) is not None


def run_interactive(args: list[str]) -> int:
    """Execute a command interactively, inheriting the terminal.

    Stdin, stdout and stderr are not redirected, so the subprocess can
    interact with the user's terminal directly. Blocks until it exits.

    Args:
        args: Command and arguments to execute.

    Returns:
        Exit code of the command.

    Raises:
        FileNotFoundError: If command executable is not found.
        OSError: If command cannot be executed.
    """
    result = subprocess.run(args, check=False)
    return result.returncode

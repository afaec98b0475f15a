"""Utility modules for pickview.

This module exports commonly used utility functions.
"""

from pickview.utils.formatting import (
    configure_logging,
    console,
    err_console,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from pickview.utils.shell import command_exists, run_interactive

__all__ = [
    "command_exists",
    "configure_logging",
    "console",
    "err_console",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "run_interactive",
]

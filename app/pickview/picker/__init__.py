"""External selector integration.

This module exports the picker, its command template and the
underlying subprocess session.
"""

from pickview.picker.command import DEFAULT_LINES, DEFAULT_SELECTOR_COMMAND, SelectorCommand
from pickview.picker.picker import CONFIRM_CHOICES, InteractivePicker, parse_answer
from pickview.picker.session import SelectorSession

__all__ = [
    "CONFIRM_CHOICES",
    "DEFAULT_LINES",
    "DEFAULT_SELECTOR_COMMAND",
    "InteractivePicker",
    "SelectorCommand",
    "SelectorSession",
    "parse_answer",
]

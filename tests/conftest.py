"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules. Selector
stand-ins are small POSIX programs (sed, sh, head) that follow the
selector contract: read candidates on stdin, print at most one line.
"""

import shlex
from collections.abc import Callable
from pathlib import Path

import pytest
from pickview.picker.command import SelectorCommand


def _nth_line(n: int) -> SelectorCommand:
    return SelectorCommand(template=("sed", "-n", f"{n}p"))


def _fixed_answer(answer: str) -> SelectorCommand:
    script = f"cat > /dev/null; printf '%s\\n' {shlex.quote(answer)}"
    return SelectorCommand(template=("sh", "-c", script))


def _scripted(pick: str, confirm: str, confirm_prompt: str = "Remove? ") -> SelectorCommand:
    script = (
        "cat > /dev/null; "
        f"if [ {{qprompt}} = {shlex.quote(confirm_prompt)} ]; "
        f"then printf '%s\\n' {shlex.quote(confirm)}; "
        f"else printf '%s\\n' {shlex.quote(pick)}; fi"
    )
    return SelectorCommand(template=("sh", "-c", script))


@pytest.fixture
def scripted_selector() -> Callable[..., SelectorCommand]:
    """Factory for a selector answering ``pick`` to the pick and ``confirm`` to the confirmation."""
    return _scripted


@pytest.fixture
def nth_line_selector() -> Callable[[int], SelectorCommand]:
    """Factory for a selector that answers with the n-th candidate (1-based)."""
    return _nth_line


@pytest.fixture
def fixed_answer_selector() -> Callable[[str], SelectorCommand]:
    """Factory for a selector that drains its input and answers with a fixed line."""
    return _fixed_answer


@pytest.fixture
def silent_selector() -> SelectorCommand:
    """Selector that reads everything and answers nothing (user aborted)."""
    return SelectorCommand(template=("sh", "-c", "cat > /dev/null"))


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Create a small directory tree for scanning.

    Layout::

        T/
            a/
                c.txt
            a.md
            b.txt
            empty/
            sub/
                deep/
                    Z.TXT
                y.txt
            x.txt
    """
    root = tmp_path / "T"
    (root / "a").mkdir(parents=True)
    (root / "a" / "c.txt").write_text("c")
    (root / "a.md").write_text("a")
    (root / "b.txt").write_text("b")
    (root / "empty").mkdir()
    (root / "sub" / "deep").mkdir(parents=True)
    (root / "sub" / "deep" / "Z.TXT").write_text("z")
    (root / "sub" / "y.txt").write_text("y")
    (root / "x.txt").write_text("x")
    return root

"""Filesystem domain models for candidate scanning and pruning.

This module defines the scan filter, ordering options, and the result of
a delete-and-prune run.
"""

import re
from dataclasses import dataclass, field
from enum import Enum

from pickview.errors import ScanError, ScanErrorReason


class SortOrder(str, Enum):
    """Ordering of scan candidates.

    Attributes:
        NAME: Depth-first, siblings sorted by name (lazy, streamed). This
            is lexicographic per path component, so "a/b" precedes "a-c"
            even though "-" sorts before "/".
        CTIME: Newest inode change time first, ties broken by path.
    """

    NAME = "name"
    CTIME = "ctime"


class PruneState(str, Enum):
    """States of the delete-and-prune sequence.

    Attributes:
        IDLE: Nothing has happened yet.
        CONFIRMING: Waiting for the user to confirm removal.
        ABORTED: User declined; the filesystem was not touched.
        DELETING: Removing the selected path.
        PRUNING: Removing now-empty ancestor directories.
        DONE: Sequence finished.
    """

    IDLE = "idle"
    CONFIRMING = "confirming"
    ABORTED = "aborted"
    DELETING = "deleting"
    PRUNING = "pruning"
    DONE = "done"


@dataclass(frozen=True, slots=True)
class ScanFilter:
    """Type and name predicate applied to every scanned entry.

    Directories are matched on type alone; files must also have a base
    name matched by ``name_pattern``.

    Attributes:
        include_directories: Emit directory entries.
        include_files: Emit non-directory entries whose name matches.
        name_pattern: Compiled case-insensitive pattern searched in base names.
    """

    include_directories: bool
    include_files: bool
    name_pattern: re.Pattern[str]

    def __post_init__(self) -> None:
        """Validate that the filter can match anything at all."""
        if not (self.include_directories or self.include_files):
            msg = "At least one of include_directories or include_files must be set"
            raise ValueError(msg)

    @classmethod
    def create(
        cls,
        pattern: str,
        *,
        include_directories: bool = False,
        include_files: bool = True,
    ) -> "ScanFilter":
        """Build a filter from an uncompiled pattern.

        Args:
            pattern: Regular expression matched anywhere in a file's base name.
            include_directories: Emit directory entries.
            include_files: Emit matching file entries.

        Returns:
            A validated ScanFilter.

        Raises:
            ScanError: If the pattern does not compile (INVALID_PATTERN).
            ValueError: If both include flags are False.
        """
        try:
            compiled = re.compile(pattern, re.IGNORECASE)
        except re.error as e:
            msg = f"Invalid name pattern {pattern!r}: {e}"
            raise ScanError(ScanErrorReason.INVALID_PATTERN, msg) from e
        return cls(
            include_directories=include_directories,
            include_files=include_files,
            name_pattern=compiled,
        )

    def accepts(self, name: str, is_dir: bool) -> bool:
        """Check whether an entry passes the filter.

        Args:
            name: Base name of the entry.
            is_dir: Whether the entry is (or links to) a directory.

        Returns:
            True if the entry should be emitted as a candidate.
        """
        if is_dir:
            return self.include_directories
        return self.include_files and self.name_pattern.search(name) is not None


@dataclass(slots=True)
class PruneResult:
    """Outcome of a delete-and-prune run.

    Attributes:
        path: The path that was offered for removal.
        state: Terminal state reached (ABORTED or DONE).
        deleted: Whether the path itself was removed.
        removed_dirs: Ancestor directories removed, innermost first.
        dry_run: Whether this was a dry-run (no actual removal).
    """

    path: str
    state: PruneState = PruneState.IDLE
    deleted: bool = False
    removed_dirs: list[str] = field(default_factory=list)
    dry_run: bool = False

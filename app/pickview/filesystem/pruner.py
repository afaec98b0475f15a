"""Confirmed deletion with pruning of emptied ancestor directories.

Deletion and pruning are best-effort: by the time they run the user has
already viewed the file, so failures are logged and never raised.
"""

import logging
import os
from collections.abc import Callable

from pickview.filesystem.models import PruneResult, PruneState

logger = logging.getLogger(__name__)


class Pruner:
    """Deletes a path after confirmation and removes emptied parents.

    Attributes:
        _dry_run: If True, report what would be removed without removing.
        _stop_at: Directory the prune loop must not remove (nor go above).
    """

    def __init__(self, *, dry_run: bool = False, stop_at: str | None = None) -> None:
        """Initialize the Pruner.

        Args:
            dry_run: If True, never touch the filesystem.
            stop_at: Optional boundary directory, typically the scan root.
        """
        self._dry_run = dry_run
        self._stop_at = os.path.normpath(stop_at) if stop_at else None

    def maybe_delete(self, path: str, confirm: Callable[[], bool]) -> PruneResult:
        """Ask for confirmation, then delete ``path`` and prune its parents.

        Args:
            path: Absolute path to remove.
            confirm: Callback returning True to proceed with removal.

        Returns:
            PruneResult in state ABORTED (declined) or DONE.
        """
        result = PruneResult(path=path, dry_run=self._dry_run)

        result.state = PruneState.CONFIRMING
        if not confirm():
            logger.debug("Removal of %s declined", path)
            result.state = PruneState.ABORTED
            return result

        if self._dry_run:
            logger.info("Dry-run: would remove %s and prune empty parents", path)
            result.state = PruneState.DONE
            return result

        result.state = PruneState.DELETING
        result.deleted = self._delete(path)

        result.state = PruneState.PRUNING
        result.removed_dirs = self._prune(os.path.dirname(path))

        result.state = PruneState.DONE
        return result

    def _delete(self, path: str) -> bool:
        """Remove the selected path.

        Directories are only removed when empty; links are removed, not
        their targets.

        Returns:
            True if the path was removed.
        """
        try:
            if os.path.isdir(path) and not os.path.islink(path):
                os.rmdir(path)
            else:
                os.unlink(path)
        except OSError as e:
            logger.debug("Could not remove %s: %s", path, e)
            return False
        logger.info("Removed %s", path)
        return True

    def _prune(self, start: str) -> list[str]:
        """Remove empty directories from ``start`` upwards.

        Stops at the first directory that cannot be removed (not empty,
        permission denied, or the filesystem root), or at the boundary.
        A cursor that is a link to a directory (the path was picked
        through an alias) removes the emptied target, then the link.

        Args:
            start: First directory to try, usually the deleted path's parent.

        Returns:
            Directories that were removed, innermost first.
        """
        removed: list[str] = []
        cursor = start
        while cursor:
            if self._is_boundary(cursor):
                break
            parent = os.path.dirname(cursor)
            if parent == cursor:
                # Filesystem root
                break
            try:
                if os.path.islink(cursor):
                    target = os.path.realpath(cursor)
                    if self._is_boundary(target):
                        break
                    os.rmdir(target)
                    removed.append(target)
                    os.unlink(cursor)
                else:
                    os.rmdir(cursor)
            except OSError as e:
                logger.debug("Prune stopped at %s: %s", cursor, e)
                break
            removed.append(cursor)
            cursor = parent
        return removed

    def _is_boundary(self, path: str) -> bool:
        return self._stop_at is not None and os.path.normpath(path) == self._stop_at

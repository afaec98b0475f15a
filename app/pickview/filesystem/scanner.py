"""Directory tree scanner producing selector candidates.

Walks a root directory, follows symbolic links when classifying entries,
and yields every entry accepted by a ScanFilter as a path relative to the
root. A link leading back to a directory on the current descent path is
skipped, so link cycles terminate.
"""

import logging
import os
from collections.abc import Iterator
from pathlib import Path

from pickview.errors import ScanError, ScanErrorReason
from pickview.filesystem.models import ScanFilter, SortOrder

logger = logging.getLogger(__name__)


class PathScanner:
    """Scans a directory tree for candidates matching a filter.

    With SortOrder.NAME the scan is lazy: candidates are produced while
    the tree is walked, and a read failure below the root is raised at
    the point the consumer reaches it.

    Args:
        scan_filter: Type/name predicate applied to every entry.
        sort: Candidate ordering.

    Example:
        >>> scanner = PathScanner(ScanFilter.create(r"\\.mkv$"))
        >>> for candidate in scanner.scan("/srv/videos"):
        ...     print(candidate)
    """

    def __init__(self, scan_filter: ScanFilter, *, sort: SortOrder = SortOrder.NAME) -> None:
        self._filter = scan_filter
        self._sort = sort

    def scan(self, root: str | Path) -> Iterator[str]:
        """Scan ``root`` and return an iterator of relative candidate paths.

        The root is opened eagerly so an unreadable root fails here rather
        than on first iteration.

        Args:
            root: Directory to scan. The root itself is never emitted.

        Returns:
            Iterator over root-relative paths using "/" separators.

        Raises:
            ScanError: ROOT_UNREADABLE if the root cannot be listed;
                TRAVERSAL_FAILED (possibly during iteration) if a
                subdirectory cannot be read.
        """
        root_path = os.fspath(root)
        try:
            root_id = _identity(os.stat(root_path))
            root_entries = _sorted_entries(root_path)
        except OSError as e:
            msg = f"Cannot read scan root {root_path}: {e.strerror or e}"
            raise ScanError(ScanErrorReason.ROOT_UNREADABLE, msg, path=root_path) from e

        prefix = root_path if root_path.endswith(os.sep) else root_path + os.sep
        candidates = self._walk(prefix, root_entries, root_id)

        if self._sort == SortOrder.CTIME:
            return iter(self._by_ctime(prefix, candidates))
        return candidates

    def _walk(
        self,
        prefix: str,
        root_entries: list[os.DirEntry[str]],
        root_id: tuple[int, int],
    ) -> Iterator[str]:
        """Yield accepted entries in depth-first pre-order.

        A directory whose identity is already on the current descent path
        closes a link cycle and is skipped. Other paths to the same
        directory (sibling links, bind mounts) are walked like any other.

        Args:
            prefix: Root path with trailing separator, stripped from results.
            root_entries: Already-read entries of the root directory.
            root_id: Identity of the root directory.

        Yields:
            Root-relative candidate paths.
        """
        stack: list[tuple[tuple[int, int], Iterator[os.DirEntry[str]]]] = [
            (root_id, iter(root_entries))
        ]
        ancestors: set[tuple[int, int]] = {root_id}
        while stack:
            entry = next(stack[-1][1], None)
            if entry is None:
                ancestors.discard(stack.pop()[0])
                continue

            try:
                is_dir = entry.is_dir()
                if is_dir:
                    identity = _identity(entry.stat())
            except OSError as e:
                msg = f"Cannot stat {entry.path}: {e.strerror or e}"
                raise ScanError(ScanErrorReason.TRAVERSAL_FAILED, msg, path=entry.path) from e

            if is_dir and identity in ancestors:
                logger.debug("Skipping link cycle: %s", entry.path)
                continue

            if self._filter.accepts(entry.name, is_dir):
                yield entry.path[len(prefix) :]

            if is_dir:
                try:
                    children = _sorted_entries(entry.path)
                except OSError as e:
                    msg = f"Cannot read directory {entry.path}: {e.strerror or e}"
                    raise ScanError(
                        ScanErrorReason.TRAVERSAL_FAILED, msg, path=entry.path
                    ) from e
                ancestors.add(identity)
                stack.append((identity, iter(children)))

    @staticmethod
    def _by_ctime(prefix: str, candidates: Iterator[str]) -> list[str]:
        """Order candidates newest inode change first.

        Args:
            prefix: Root path with trailing separator.
            candidates: Candidates in traversal order.

        Returns:
            Materialized, re-ordered candidate list.

        Raises:
            ScanError: TRAVERSAL_FAILED if a candidate cannot be stat'ed.
        """
        keyed: list[tuple[float, str]] = []
        for candidate in candidates:
            full = prefix + candidate
            try:
                try:
                    ctime = os.stat(full).st_ctime
                except FileNotFoundError:
                    # Dangling link: use the link itself
                    ctime = os.lstat(full).st_ctime
            except OSError as e:
                msg = f"Cannot stat {full}: {e.strerror or e}"
                raise ScanError(ScanErrorReason.TRAVERSAL_FAILED, msg, path=full) from e
            keyed.append((ctime, candidate))

        keyed.sort(key=lambda item: (-item[0], item[1]))
        return [candidate for _, candidate in keyed]


def _sorted_entries(path: str) -> list[os.DirEntry[str]]:
    """List a directory's entries sorted by name.

    Raises:
        OSError: If the directory cannot be opened or read.
    """
    with os.scandir(path) as it:
        return sorted(it, key=lambda e: e.name)


def _identity(st: os.stat_result) -> tuple[int, int]:
    """Physical identity of a filesystem node."""
    return (st.st_dev, st.st_ino)

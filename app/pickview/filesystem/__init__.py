"""Filesystem scanning, resolution and pruning.

This module provides the candidate scanner, path resolution and the
confirmed delete-and-prune sequence.
"""

from pickview.filesystem.models import PruneResult, PruneState, ScanFilter, SortOrder
from pickview.filesystem.pruner import Pruner
from pickview.filesystem.resolver import normalize_root, resolve
from pickview.filesystem.scanner import PathScanner

__all__ = [
    "PathScanner",
    "PruneResult",
    "PruneState",
    "Pruner",
    "ScanFilter",
    "SortOrder",
    "normalize_root",
    "resolve",
]

"""Turn a selector answer back into a filesystem path."""

import os


def normalize_root(root: str) -> str:
    """Normalize a user-supplied scan root.

    Expands ``~`` and strips trailing slashes. The filesystem root stays "/".

    Args:
        root: Root directory as given on the command line.

    Returns:
        Root path without a trailing slash.
    """
    expanded = os.path.expanduser(root)
    stripped = expanded.rstrip("/")
    if not stripped and expanded.startswith("/"):
        return "/"
    return stripped or expanded


def resolve(root: str, selected: str) -> str:
    """Join a scan root and a root-relative candidate.

    No filesystem access: ``selected`` is one of the candidates scanned
    below the same root.

    Args:
        root: Normalized scan root.
        selected: Candidate chosen in the selector.

    Returns:
        ``root + "/" + selected``.
    """
    return f"{root.rstrip('/')}/{selected}"

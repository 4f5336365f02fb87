"""Utility functions for vault paths."""

import posixpath


def normalize_path(path: str) -> str:
    """
    Normalize a vault path to its canonical form.

    Backslashes become slashes, leading slashes and ``.`` segments are
    dropped, and the vault root is the empty string.

    Args:
        path: Vault-relative path

    Returns:
        Canonical vault path ("" for the root)
    """
    cleaned = path.replace("\\", "/").strip()
    if not cleaned:
        return ""
    normalized = posixpath.normpath(cleaned).lstrip("/")
    return "" if normalized == "." else normalized


def path_prefix(path: str) -> str:
    """Directory part of a vault path ("" for documents at the root)."""
    parent = posixpath.dirname(normalize_path(path))
    return parent


def is_within(path: str, directory: str, recursive: bool = True) -> bool:
    """
    Check whether a vault path lies inside a directory.

    Comparison is per path component, so ``events2/a.md`` is not inside
    ``events``. Without ``recursive`` only direct children count.
    """
    directory = normalize_path(directory)
    parent = path_prefix(path)
    if not recursive:
        return parent == directory
    if not directory:
        return True
    return parent == directory or parent.startswith(directory + "/")

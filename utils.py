"""Utility functions."""
import posixpath
from pathlib import Path

from errors import PermissionDenied


def clean_relative_path(path: str) -> str:
    """Lexically normalise a caller supplied path, rejecting traversal.

    Returns "" for the root. Symlinks are not resolved.
    """
    if not path:
        return ""
    cleaned = posixpath.normpath(path)
    if ".." in cleaned.split("/"):
        raise PermissionDenied(f"Path escapes photos directory: {path}")
    cleaned = cleaned.lstrip("/")
    return "" if cleaned == "." else cleaned


def resolve_under_root(root: Path, path: str) -> tuple[str, Path]:
    """Return the cleaned relative path and its location under root."""
    clean = clean_relative_path(path)
    return clean, (root / clean if clean else root)

"""Tests for path sanitisation."""
from pathlib import Path

import pytest

from errors import PermissionDenied
from utils import clean_relative_path, resolve_under_root


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("", ""),
        (".", ""),
        ("vacation", "vacation"),
        ("vacation/", "vacation"),
        ("vacation//beach.jpg", "vacation/beach.jpg"),
        ("./vacation/./beach.jpg", "vacation/beach.jpg"),
        ("vacation/x/../beach.jpg", "vacation/beach.jpg"),
        ("/etc/passwd", "etc/passwd"),
        ("//double", "double"),
        ("foo..bar.jpg", "foo..bar.jpg"),
    ],
)
def test_clean_relative_path(raw, expected):
    assert clean_relative_path(raw) == expected


@pytest.mark.parametrize("raw", ["..", "../secret", "vacation/../../secret", "a/../.."])
def test_traversal_is_rejected(raw):
    with pytest.raises(PermissionDenied):
        clean_relative_path(raw)


def test_resolve_under_root():
    root = Path("/photos")
    assert resolve_under_root(root, "") == ("", root)
    assert resolve_under_root(root, "/a/b.jpg") == ("a/b.jpg", root / "a" / "b.jpg")

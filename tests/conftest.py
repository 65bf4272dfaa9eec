"""
Shared fixtures: a temporary photos tree with generated images and a test client.
"""

import os
import sys

# Add project root to sys.path so the flat modules can be imported
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import pytest
from fastapi.testclient import TestClient
from PIL import Image as PILImage

from app import create_app
from config import Settings
from services import ImageService

ORIENTATION_TAG = 0x0112


def make_jpeg(path, size, orientation=None, color=(200, 120, 40)):
    """Write a solid JPEG, optionally tagged with an EXIF orientation."""
    path.parent.mkdir(parents=True, exist_ok=True)
    im = PILImage.new("RGB", size, color)
    if orientation is None:
        im.save(path, format="JPEG")
    else:
        exif = PILImage.Exif()
        exif[ORIENTATION_TAG] = orientation
        im.save(path, format="JPEG", exif=exif)
    return path


def make_split_jpeg(path, size, orientation):
    """Left half red, right half blue, so rotations can be checked by colour."""
    path.parent.mkdir(parents=True, exist_ok=True)
    width, height = size
    im = PILImage.new("RGB", size, (0, 0, 255))
    im.paste((255, 0, 0), (0, 0, width // 2, height))
    exif = PILImage.Exif()
    exif[ORIENTATION_TAG] = orientation
    im.save(path, format="JPEG", exif=exif, quality=95)
    return path


@pytest.fixture
def photos_dir(tmp_path):
    """
    photos/
      vacation/beach.jpg      500x300, orientation 1
      vacation/sunset.PNG     64x32
      vacation/notes.txt
      vacation/.hidden.jpg
      rotated.jpg             400x200, orientation 6
      broken.jpg              not an image
      Archive/  .git/  beta/
    """
    root = tmp_path / "photos"
    make_jpeg(root / "vacation" / "beach.jpg", (500, 300), orientation=1)
    PILImage.new("RGB", (64, 32), (10, 200, 10)).save(root / "vacation" / "sunset.PNG")
    (root / "vacation" / "notes.txt").write_text("not an image")
    make_jpeg(root / "vacation" / ".hidden.jpg", (10, 10))
    make_split_jpeg(root / "rotated.jpg", (400, 200), orientation=6)
    (root / "broken.jpg").write_bytes(b"definitely not a jpeg")
    (root / "Archive").mkdir()
    (root / ".git").mkdir()
    (root / "beta").mkdir()
    return root


@pytest.fixture
def cache_dir(tmp_path):
    return tmp_path / "cache"


@pytest.fixture
def image_service(photos_dir, cache_dir):
    return ImageService(photos_dir, cache_dir)


@pytest.fixture
def settings(photos_dir, cache_dir, tmp_path):
    return Settings(
        photos_dir=photos_dir,
        cache_dir=cache_dir,
        frontend_dir=tmp_path / "frontend",
    )


@pytest.fixture
def client(settings):
    return TestClient(create_app(settings))

"""Thumbnail rendering and the content-addressed thumbnail cache."""
import contextlib
import hashlib
import logging
import os
import tempfile
from pathlib import Path
from typing import Callable

from PIL import Image as PILImage

from errors import DecodeError, NotFound, StorageError
from utils import resolve_under_root

logger = logging.getLogger(__name__)

# Configuration
DEFAULT_THUMB_SIZE = 200
MAX_THUMB_SIZE = 1000
JPEG_QUALITY = 80

# EXIF orientation -> transform that brings the image upright. The code comes
# from the cached metadata, not re-read from the image as exif_transpose would.
ORIENTATION_TRANSPOSE = {
    2: PILImage.Transpose.FLIP_LEFT_RIGHT,
    3: PILImage.Transpose.ROTATE_180,
    4: PILImage.Transpose.FLIP_TOP_BOTTOM,
    5: PILImage.Transpose.TRANSPOSE,
    6: PILImage.Transpose.ROTATE_270,
    7: PILImage.Transpose.TRANSVERSE,
    8: PILImage.Transpose.ROTATE_90,
}


def clamp_size(size) -> int:
    """Return size as an int in 1..MAX_THUMB_SIZE, DEFAULT_THUMB_SIZE otherwise."""
    try:
        value = int(size)
    except (TypeError, ValueError):
        return DEFAULT_THUMB_SIZE
    if value <= 0 or value > MAX_THUMB_SIZE:
        return DEFAULT_THUMB_SIZE
    return value


def cache_filename(clean_path: str, size: int) -> str:
    digest = hashlib.md5(clean_path.encode("utf-8")).hexdigest()
    return f"{digest}_{size}.jpg"


def apply_orientation(im: PILImage.Image, orientation: int) -> PILImage.Image:
    """Rotate/flip an image according to its EXIF orientation code."""
    method = ORIENTATION_TRANSPOSE.get(orientation)
    if method is None:
        return im
    return im.transpose(method)


def render_thumbnail(source: Path, size: int, orientation: int) -> PILImage.Image:
    """Decode source and return an upright RGB image fitting in size x size."""
    try:
        with PILImage.open(source) as im:
            im.load()
            upright = apply_orientation(im, orientation)
            upright.thumbnail((size, size), PILImage.Resampling.LANCZOS)
            return upright.convert("RGB")
    except (OSError, ValueError, SyntaxError) as exc:
        raise DecodeError(f"Cannot decode {source.name}: {exc}") from exc


def write_jpeg_atomic(im: PILImage.Image, target: Path) -> None:
    """Write a JPEG next to target and rename it into place.

    Concurrent readers either see no file or the complete one.
    """
    fd, tmp_name = tempfile.mkstemp(prefix=".", suffix=".tmp", dir=target.parent)
    try:
        with os.fdopen(fd, "wb") as fh:
            im.save(fh, format="JPEG", quality=JPEG_QUALITY)
        os.replace(tmp_name, target)
    except BaseException as exc:
        with contextlib.suppress(OSError):
            os.unlink(tmp_name)
        if isinstance(exc, (OSError, ValueError)):
            raise StorageError(f"Cannot write thumbnail: {exc}") from exc
        raise


class ThumbnailCache:
    """Generates thumbnails on demand and keeps them in cache_dir forever.

    A cache file that exists is served as is, regardless of source changes.
    """

    def __init__(self, base_dir: Path, cache_dir: Path, orientation_of: Callable[[str], int]):
        self.base_dir = Path(base_dir)
        self.cache_dir = Path(cache_dir)
        self.orientation_of = orientation_of

    def cache_path(self, path: str, size: int) -> Path:
        clean, _ = resolve_under_root(self.base_dir, path)
        return self.cache_dir / cache_filename(clean, size)

    def get(self, path: str, size: int = DEFAULT_THUMB_SIZE) -> Path:
        """Return the cached thumbnail for path at size, generating it on a miss."""
        size = clamp_size(size)
        clean, source = resolve_under_root(self.base_dir, path)
        target = self.cache_dir / cache_filename(clean, size)
        try:
            if target.exists():
                return target
        except OSError as exc:
            raise StorageError(f"Cannot read thumbnail cache: {exc}") from exc

        try:
            if not source.is_file():
                raise NotFound(f"Image not found: {clean}")
        except OSError as exc:
            raise NotFound(f"Image not found: {clean}") from exc

        image = render_thumbnail(source, size, self.orientation_of(path))
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(f"Cannot create cache directory: {exc}") from exc
        write_jpeg_atomic(image, target)
        logger.info("Generated %dpx thumbnail for %s", size, clean)
        return target

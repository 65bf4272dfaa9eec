"""Image metadata extraction and the in-memory metadata cache."""
import logging
import threading
from datetime import datetime
from pathlib import Path
from typing import Optional

from PIL import Image as PILImage
from pillow_heif import register_heif_opener

from models import ImageInfo

logger = logging.getLogger(__name__)

register_heif_opener()

ORIENTATION_TAG = 0x0112
THUMBNAIL_URL_PREFIX = "/api/thumbnail/"


def read_image_meta(path: Path) -> tuple[int, int, int]:
    """Read width, height and EXIF orientation with a single open.

    Undecodable files give (0, 0, 0); a missing or out of range orientation is 0.
    """
    try:
        with PILImage.open(path) as im:
            width, height = im.width, im.height
            try:
                value = im.getexif().get(ORIENTATION_TAG, 0)
            except Exception as exc:
                logger.debug("No EXIF for %s: %s", path, exc)
                value = 0
    except Exception as exc:
        logger.debug("No dimensions for %s: %s", path, exc)
        return 0, 0, 0
    try:
        orientation = int(value)
    except (TypeError, ValueError):
        orientation = 0
    return width, height, (orientation if 1 <= orientation <= 8 else 0)


def thumbnail_url(clean_path: str) -> str:
    return f"{THUMBNAIL_URL_PREFIX}{clean_path}"


def build_image_info(clean_path: str, full_path: Path) -> ImageInfo:
    """Stat and measure an image. Raises OSError if the file cannot be stat'ed."""
    stat = full_path.stat()
    width, height, orientation = read_image_meta(full_path)
    return ImageInfo(
        name=full_path.name,
        path=clean_path,
        size=stat.st_size,
        mod_time=datetime.fromtimestamp(stat.st_mtime).astimezone(),
        width=width,
        height=height,
        orientation=orientation,
        thumbnail_url=thumbnail_url(clean_path),
    )


class MetadataCache:
    """Thread-safe memo of resolved ImageInfo keyed by the requested path.

    Entries are never invalidated: a replaced source file keeps serving the
    first resolution until the process restarts.
    """

    def __init__(self):
        self._entries: dict[str, ImageInfo] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[ImageInfo]:
        with self._lock:
            return self._entries.get(key)

    def put(self, key: str, info: ImageInfo) -> ImageInfo:
        """Store info unless another thread got there first; return the stored value."""
        with self._lock:
            return self._entries.setdefault(key, info)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

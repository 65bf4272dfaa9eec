"""Image service: metadata, thumbnails, batches and saving selections."""
import logging
from pathlib import Path
from typing import Iterable, Optional

from batches import BatchStore
from errors import KerpicError, NotFound
from metadata import MetadataCache, build_image_info
from models import ImageInfo, SaveResult
from mover import SelectionMover
from scanner import is_image_file, iter_visible_entries, open_folder
from thumbnails import DEFAULT_THUMB_SIZE, ThumbnailCache
from utils import resolve_under_root

logger = logging.getLogger(__name__)


class ImageService:
    """Owns the metadata cache and the batch table for one photos directory."""

    def __init__(self, base_dir: Path, cache_dir: Path):
        self.base_dir = Path(base_dir)
        self.cache_dir = Path(cache_dir)
        self.metadata = MetadataCache()
        self.batches = BatchStore()
        self.thumbnails = ThumbnailCache(self.base_dir, self.cache_dir, self._orientation_of)
        self.mover = SelectionMover(self.base_dir)

    def get_image_info(self, path: str) -> ImageInfo:
        """Resolve metadata for an image, memoised by the exact path string."""
        cached = self.metadata.get(path)
        if cached is not None:
            return cached

        clean, full = resolve_under_root(self.base_dir, path)
        try:
            if not clean or not full.is_file():
                raise NotFound(f"Image not found: {clean or '/'}")
            info = build_image_info(clean, full)
        except OSError as exc:
            raise NotFound(f"Image not found: {clean}") from exc
        return self.metadata.put(path, info)

    def _orientation_of(self, path: str) -> int:
        try:
            return self.get_image_info(path).orientation
        except KerpicError:
            return 0

    def list_images(self, folder: str) -> list[ImageInfo]:
        """Resolve every image directly inside folder, skipping ones that fail."""
        clean, full = open_folder(self.base_dir, folder)
        images = []
        for entry in iter_visible_entries(full):
            if not is_image_file(entry.name):
                continue
            try:
                if not entry.is_file():
                    continue
            except OSError:
                continue
            rel = f"{clean}/{entry.name}" if clean else entry.name
            try:
                images.append(self.get_image_info(rel))
            except KerpicError as exc:
                logger.warning("Skipping %s: %s", rel, exc)
        return images

    def generate_thumbnail(self, path: str, size: int = DEFAULT_THUMB_SIZE) -> Path:
        return self.thumbnails.get(path, size)

    def create_batch(self, image_paths: Iterable[str]) -> tuple[str, list[ImageInfo]]:
        """Resolve image_paths and store them as a new batch.

        Paths that cannot be resolved are left out of the batch without error.
        """
        images = []
        for path in image_paths:
            try:
                images.append(self.get_image_info(path))
            except KerpicError as exc:
                logger.debug("Dropping %s from batch: %s", path, exc)
        batch_id = self.batches.add(images)
        logger.info("Created %s with %d images", batch_id, len(images))
        return batch_id, images

    def get_batch(self, batch_id: str) -> Optional[list[ImageInfo]]:
        return self.batches.get(batch_id)

    def save_selected(
        self, batch_id: str, selected_paths: Iterable[str], target_folder: str = ""
    ) -> SaveResult:
        """Move selected images into target_folder beside each image.

        batch_id is informational; selected paths are not checked against it.
        """
        result = self.mover.move_many(selected_paths, target_folder)
        logger.info(
            "Saved selection of %s: %d moved, %d failed, %d conflicts",
            batch_id or "-", len(result.success), len(result.failed), len(result.conflicts),
        )
        return result

"""Folder listing utilities."""
import logging
import os
import posixpath
from pathlib import Path
from typing import Iterable

from errors import InvalidFolder, NotFound, StorageError
from models import FolderInfo, ImageRef
from utils import resolve_under_root

logger = logging.getLogger(__name__)

# Configuration
ALLOWED_EXTS = {".jpg", ".jpeg", ".png", ".webp", ".heic"}
ROOT_FOLDER_NAME = "Root"


def is_image_file(name: str) -> bool:
    """Check if a file name has a supported image extension."""
    return os.path.splitext(name)[1].lower() in ALLOWED_EXTS


def iter_visible_entries(directory: Path) -> Iterable[os.DirEntry]:
    """Yield non-hidden direct children of directory, sorted by name."""
    try:
        with os.scandir(directory) as it:
            entries = [e for e in it if not e.name.startswith(".")]
    except OSError as exc:
        raise StorageError(f"Cannot read folder: {exc}") from exc
    entries.sort(key=lambda e: (e.name.lower(), e.name))
    return entries


def open_folder(root: Path, path: str) -> tuple[str, Path]:
    """Resolve a relative folder path, checking it exists and is a directory."""
    clean, full = resolve_under_root(root, path)
    try:
        exists, is_dir = full.exists(), full.is_dir()
    except OSError as exc:
        raise NotFound(f"Folder not found: {clean}") from exc
    if not exists:
        raise NotFound(f"Folder not found: {clean or '/'}")
    if not is_dir:
        raise InvalidFolder(f"Not a folder: {clean}")
    return clean, full


class FolderService:
    """Lists folder contents below the photos directory."""

    def __init__(self, base_dir: Path):
        self.base_dir = Path(base_dir)

    def list_folders(self) -> list[FolderInfo]:
        """Return the root folder as the only top-level entry."""
        return [self.list_contents("")]

    def list_contents(self, path: str) -> FolderInfo:
        """Return one level of subfolders and images for a relative folder path."""
        clean, full = open_folder(self.base_dir, path)
        folder = FolderInfo(
            name=posixpath.basename(clean) if clean else ROOT_FOLDER_NAME,
            path=clean,
        )

        for entry in iter_visible_entries(full):
            child = posixpath.join(clean, entry.name) if clean else entry.name
            try:
                is_dir = entry.is_dir()
            except OSError:
                continue
            if is_dir:
                folder.subfolders.append(FolderInfo(name=entry.name, path=child))
            elif is_image_file(entry.name):
                folder.images.append(ImageRef(name=entry.name, path=child))

        logger.debug(
            "Listed %s: %d subfolders, %d images",
            clean or "/", len(folder.subfolders), len(folder.images),
        )
        return folder

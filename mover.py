"""Moves selected images into a subfolder next to them."""
import enum
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from errors import PermissionDenied
from models import SaveResult
from utils import clean_relative_path, resolve_under_root

logger = logging.getLogger(__name__)

DEFAULT_TARGET_FOLDER = "saved"


class Outcome(enum.Enum):
    SUCCESS = "success"
    FAILED = "failed"
    CONFLICT = "conflict"


@dataclass(frozen=True)
class MoveResult:
    path: str
    outcome: Outcome
    dst: Optional[Path] = None
    reason: str = ""


def same_file(a: Path, b: Path) -> bool:
    """Cheap identity check: equal size and modification time."""
    try:
        sa, sb = a.stat(), b.stat()
    except OSError:
        return False
    return sa.st_size == sb.st_size and sa.st_mtime_ns == sb.st_mtime_ns


def unique_destination(src: Path, dest_dir: Path) -> Optional[Path]:
    """Find a free name in dest_dir for src.

    Tries name.ext, name_1.ext, name_2.ext, ... Returns None when a candidate
    already holds the same file as src. Raises OSError when a candidate
    cannot be checked, e.g. a suffixed name past the filesystem limit.
    """
    candidate = dest_dir / src.name
    counter = 1
    while candidate.exists():
        if same_file(src, candidate):
            return None
        candidate = dest_dir / f"{src.stem}_{counter}{src.suffix}"
        counter += 1
    return candidate


class SelectionMover:
    """Moves images below base_dir into <image dir>/<target folder>."""

    def __init__(self, base_dir: Path):
        self.base_dir = Path(base_dir)

    def move_one(self, path: str, target_folder: str) -> MoveResult:
        try:
            clean, src = resolve_under_root(self.base_dir, path)
        except PermissionDenied:
            return MoveResult(path, Outcome.FAILED, reason="path outside photos directory")
        try:
            if not clean or not src.is_file():
                return MoveResult(path, Outcome.FAILED, reason="source missing")
        except OSError as exc:
            return MoveResult(path, Outcome.FAILED, reason=str(exc))

        dest_dir = src.parent / target_folder
        try:
            dest_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            return MoveResult(path, Outcome.FAILED, reason=str(exc))

        try:
            dst = unique_destination(src, dest_dir)
        except OSError as exc:
            return MoveResult(path, Outcome.FAILED, reason=str(exc))
        if dst is None:
            return MoveResult(path, Outcome.CONFLICT, reason="identical file exists")

        try:
            os.rename(src, dst)
        except OSError as exc:
            return MoveResult(path, Outcome.FAILED, dst, reason=str(exc))
        return MoveResult(path, Outcome.SUCCESS, dst)

    def move_many(self, paths: Iterable[str], target_folder: str = "") -> SaveResult:
        """Move every path independently and sort the outcomes into a SaveResult."""
        paths = list(paths)
        try:
            target = clean_relative_path(target_folder or DEFAULT_TARGET_FOLDER)
        except PermissionDenied:
            logger.warning("Rejected target folder %r", target_folder)
            return SaveResult(failed=paths, target_folder=target_folder)
        if not target:
            target = DEFAULT_TARGET_FOLDER

        result = SaveResult(target_folder=target)
        buckets = {
            Outcome.SUCCESS: result.success,
            Outcome.FAILED: result.failed,
            Outcome.CONFLICT: result.conflicts,
        }
        for path in paths:
            move = self.move_one(path, target)
            buckets[move.outcome].append(path)
            if move.outcome is Outcome.SUCCESS:
                logger.info("Moved %s -> %s", path, move.dst)
            else:
                logger.info("Skipped %s (%s): %s", path, move.outcome.value, move.reason)
        return result

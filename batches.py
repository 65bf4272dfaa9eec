"""In-memory comparison batches."""
import threading
import uuid
from typing import Optional

from models import ImageInfo


def new_batch_id() -> str:
    return f"batch_{uuid.uuid4().hex}"


class BatchStore:
    """Maps batch ids to their resolved images. Lost on restart."""

    def __init__(self):
        self._batches: dict[str, list[ImageInfo]] = {}
        self._lock = threading.Lock()

    def add(self, images: list[ImageInfo]) -> str:
        """Store images under a fresh id and return the id."""
        with self._lock:
            batch_id = new_batch_id()
            while batch_id in self._batches:
                batch_id = new_batch_id()
            self._batches[batch_id] = list(images)
        return batch_id

    def get(self, batch_id: str) -> Optional[list[ImageInfo]]:
        with self._lock:
            images = self._batches.get(batch_id)
            return list(images) if images is not None else None

    def __len__(self) -> int:
        with self._lock:
            return len(self._batches)

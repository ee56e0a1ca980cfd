"""
Image Preview Manager

Local preview handles for selected image files. Each handle is released
exactly once: by its owner on removal, or by release_all() when the owning
draft is torn down. Releasing drops the buffered bytes immediately instead
of waiting for garbage collection.

Usage:
    with PreviewManager() as previews:
        handle = previews.acquire(local_file)
        ...
    # every handle acquired above is released here
"""

import uuid
from dataclasses import dataclass, field
from typing import Dict, Optional

from models.application_models import LocalFile

@dataclass
class PreviewHandle:
    file_name: str
    media_type: str
    content: Optional[bytes] = None
    handle_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    released: bool = False

    @property
    def url(self) -> str:
        return f"preview://{self.handle_id}"

class PreviewManager:
    def __init__(self):
        self._active: Dict[str, PreviewHandle] = {}

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.release_all()

    def acquire(self, local_file: LocalFile) -> PreviewHandle:
        if not local_file.is_image:
            raise ValueError(f"No preview for non-image file {local_file.name} ({local_file.media_type})")
        handle = PreviewHandle(
            file_name=local_file.name,
            media_type=local_file.media_type,
            content=local_file.content,
        )
        self._active[handle.handle_id] = handle
        return handle

    def release(self, handle: PreviewHandle) -> bool:
        """Release a handle. Returns False when it was already released."""
        if handle.released:
            return False
        handle.released = True
        handle.content = None
        self._active.pop(handle.handle_id, None)
        return True

    def release_all(self) -> int:
        released = 0
        for handle in list(self._active.values()):
            if self.release(handle):
                released += 1
        return released

    def get(self, handle_id: str) -> Optional[PreviewHandle]:
        return self._active.get(handle_id)

    @property
    def active_count(self) -> int:
        return len(self._active)

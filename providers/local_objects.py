"""
Local Object Store

Stores uploaded bytes under a root directory using aiofiles. Retrieval URLs
are built from a public base URL when one is configured (e.g. a static file
server in front of the directory), otherwise a file:// URI is returned.
"""

from pathlib import Path, PurePosixPath
from typing import Optional, Union

import aiofiles

from providers.base import ObjectHandle, ObjectStoreError
from storage.logs_manager import LogsManager

class LocalObjectStore:
    def __init__(
        self,
        root_dir: Union[str, Path],
        public_base_url: str = "",
        logs_manager: Optional[LogsManager] = None
    ):
        self.root_dir = Path(root_dir).resolve()
        self.root_dir.mkdir(parents=True, exist_ok=True)
        self.public_base_url = public_base_url.rstrip('/')
        self.logs_manager = logs_manager

    def _target(self, path: str) -> Path:
        relative = PurePosixPath(path.lstrip('/'))
        if not relative.parts or '..' in relative.parts:
            raise ObjectStoreError(f"Invalid object path: {path!r}")
        return self.root_dir.joinpath(*relative.parts)

    async def put_object(self, path: str, data: bytes, content_type: str = "application/octet-stream") -> ObjectHandle:
        target = self._target(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(target, 'wb') as f:
                await f.write(data)
        except OSError as e:
            raise ObjectStoreError(f"Failed to store {path}: {e}") from e

        if self.logs_manager:
            await self.logs_manager.debug(f"[LocalObjectStore] Stored {path} ({len(data)} bytes)")
        return ObjectHandle(path=path.lstrip('/'), size=len(data), content_type=content_type)

    async def get_retrieval_url(self, handle: ObjectHandle) -> str:
        target = self._target(handle.path)
        if not target.exists():
            raise ObjectStoreError(f"Object not found: {handle.path}")
        if self.public_base_url:
            return f"{self.public_base_url}/{handle.path}"
        return target.as_uri()

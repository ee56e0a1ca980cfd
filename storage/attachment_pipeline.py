"""
File Attachment Pipeline

Turns locally selected files into resolved attachment references:

1. Upload the raw bytes to <prefix>/<applicant namespace>/<uuid4><extension>
2. Ask the object store for a durable retrieval URL
3. Return Attachment(name=<original file name>, url=<retrieval URL>)

Every resolve() call stores a new object; the same file resolved twice ends
up stored twice. resolve_all() uploads concurrently and joins all uploads
before reporting: if any upload fails a single AttachmentUploadError names
every failed file. Uploads that did succeed are left in place.
"""

import asyncio
import re
import uuid
from typing import List, Optional, Sequence, Tuple, Union

from constants import FormConstants, PortalDefaults
from models.application_models import Attachment, LocalFile
from providers.base import ObjectStore
from storage.logs_manager import LogsManager

_UNSAFE_SEGMENT_PATTERN = re.compile(r"[\\/:*?\"<>|]+")

class AttachmentUploadError(Exception):
    """One or more files of a submission failed to upload."""

    def __init__(self, failures: List[Tuple[str, Exception]]):
        self.failures = failures
        names = ", ".join(name for name, _ in failures)
        super().__init__(f"Failed to upload {names}")

    @property
    def failed_names(self) -> List[str]:
        return [name for name, _ in self.failures]

def upload_namespace(applicant_name: str) -> str:
    """Storage folder for an applicant; blank names share a generic folder."""
    cleaned = _UNSAFE_SEGMENT_PATTERN.sub("_", applicant_name.strip()).strip("._ ")
    return cleaned or FormConstants.GENERIC_UPLOAD_NAMESPACE

class AttachmentPipeline:
    def __init__(
        self,
        objects: ObjectStore,
        prefix: str = PortalDefaults.UPLOAD_PREFIX,
        logs_manager: Optional[LogsManager] = None
    ):
        self.objects = objects
        self.prefix = prefix.strip('/')
        self.logs_manager = logs_manager

    def object_path(self, local_file: LocalFile, applicant_name: str) -> str:
        filename = f"{uuid.uuid4().hex}{local_file.extension}"
        parts = [self.prefix, upload_namespace(applicant_name), filename]
        return "/".join(part for part in parts if part)

    async def resolve(self, local_file: LocalFile, applicant_name: str = "") -> Attachment:
        """Upload one file and return its resolved reference."""
        path = self.object_path(local_file, applicant_name)
        handle = await self.objects.put_object(path, local_file.content, local_file.media_type)
        url = await self.objects.get_retrieval_url(handle)
        if self.logs_manager:
            await self.logs_manager.debug(f"[AttachmentPipeline] Uploaded {local_file.name} -> {path}")
        return Attachment(name=local_file.name, url=url)

    async def resolve_all(
        self,
        entries: Sequence[Union[Attachment, LocalFile]],
        applicant_name: str = ""
    ) -> List[Attachment]:
        """
        Resolve every pending local file, keeping already-resolved references
        unchanged and in their original positions.
        """
        pending = [(index, entry) for index, entry in enumerate(entries) if isinstance(entry, LocalFile)]
        results = await asyncio.gather(
            *(self.resolve(entry, applicant_name) for _, entry in pending),
            return_exceptions=True
        )

        failures = []
        for (_, entry), result in zip(pending, results):
            if isinstance(result, Exception):
                failures.append((entry.name, result))
            elif isinstance(result, BaseException):
                raise result

        if failures:
            if self.logs_manager:
                for name, error in failures:
                    await self.logs_manager.error(f"[AttachmentPipeline] Upload failed for {name}: {error}")
            raise AttachmentUploadError(failures)

        resolved = list(entries)
        for (index, _), attachment in zip(pending, results):
            resolved[index] = attachment
        return resolved

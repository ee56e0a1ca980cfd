"""
Storage Package

This package handles persistence of applications and their attachments,
plus application logging.

Components:
- LogsManager: Manages application logging
- ApplicationRecordStore: CRUD and live listing of application records
- AttachmentPipeline: Uploads local files and resolves retrieval URLs
"""

from .logs_manager import LogsManager
from .record_store import ApplicationRecordStore
from .attachment_pipeline import AttachmentPipeline, AttachmentUploadError

__all__ = ['LogsManager', 'ApplicationRecordStore', 'AttachmentPipeline', 'AttachmentUploadError']

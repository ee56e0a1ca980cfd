"""
Application Form Controller

Owns the editable draft of one rental application (new or existing) and
orchestrates its submission.

Submission sequence:
1. Required-field gate (the only validation performed)
2. Drop occupant rows whose fields are all blank
3. Upload pending local files concurrently, all-or-nothing
4. Assemble the record: draft fields, resolved attachments, owner id and
   timestamps (createdAt kept when editing, updatedAt = now)
5. Strip empty-string fields (ApplicationRecord.to_document)
6. Update the existing record by id, or create one and capture its id
7. Report success, hand the record to on_saved and schedule navigation to
   the tenant dashboard after the redirect delay

The sequence is not transactional. An upload failure aborts before any
record write; a write failure after successful uploads leaves the uploaded
objects orphaned. Either way the failure is reported through status_message
and the user resubmits manually.
"""

import asyncio
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Awaitable, Callable, List, Optional, Sequence, Union

from constants import TimingConstants, Messages, FormConstants
from models.application_models import (
    ApplicationDraft,
    ApplicationFields,
    ApplicationRecord,
    Attachment,
    LocalFile,
    Occupant,
)
from models.user_models import AuthUser
from orchestrator.task_manager import TaskManager
from storage.attachment_pipeline import AttachmentPipeline, AttachmentUploadError
from storage.logs_manager import LogsManager
from storage.record_store import ApplicationRecordStore
from utils.preview_manager import PreviewHandle, PreviewManager

@dataclass
class PendingAttachment:
    """A file selected for upload; becomes an Attachment on successful submission."""
    local_file: LocalFile
    preview: Optional[PreviewHandle] = None

    @property
    def name(self) -> str:
        return self.local_file.name

AttachmentEntry = Union[Attachment, PendingAttachment]

class ApplicationFormController:
    def __init__(
        self,
        user: AuthUser,
        record_store: ApplicationRecordStore,
        pipeline: AttachmentPipeline,
        existing: Optional[ApplicationRecord] = None,
        previews: Optional[PreviewManager] = None,
        task_manager: Optional[TaskManager] = None,
        on_saved: Optional[Callable[[ApplicationRecord], None]] = None,
        on_navigate: Optional[Callable[['ApplicationFormController'], Awaitable[None]]] = None,
        redirect_delay: float = TimingConstants.SUBMIT_REDIRECT_DELAY / 1000,
        logs_manager: Optional[LogsManager] = None
    ):
        """
        Args:
            user: The signed-in tenant; becomes the record owner on creation.
            existing: Record to edit. None starts an empty draft with one blank occupant row.
            on_saved: Receives the saved record after every successful submission.
            on_navigate: Awaited redirect_delay seconds after a successful submission.
        """
        self.user = user
        self.record_store = record_store
        self.pipeline = pipeline
        self.existing = existing
        self.previews = previews or PreviewManager()
        self.task_manager = task_manager or TaskManager(logs_manager)
        self.on_saved = on_saved
        self.on_navigate = on_navigate
        self.redirect_delay = redirect_delay
        self.logs_manager = logs_manager

        self.draft = ApplicationDraft.from_record(existing) if existing else ApplicationDraft()
        self.attachments: List[AttachmentEntry] = list(existing.uploaded_files) if existing else []
        self.status_message = ""
        self.submitting = False
        self.torn_down = False

    @property
    def is_editing(self) -> bool:
        return self.existing is not None and bool(self.existing.id)

    # -------------------------------------------------------------------------
    # Draft mutation
    # -------------------------------------------------------------------------

    def set_field(self, name: str, value: Optional[str]) -> None:
        """Set a scalar field by its document name (e.g. 'applyingFor') or attribute name."""
        attr = ApplicationFields.resolve_field_name(name)
        setattr(self.draft, attr, "" if value is None else str(value))

    def get_field(self, name: str) -> str:
        return getattr(self.draft, ApplicationFields.resolve_field_name(name))

    def set_occupant_field(self, index: int, field: str, value: Optional[str]) -> None:
        if field not in FormConstants.OCCUPANT_FIELDS:
            raise KeyError(f"Unknown occupant field: {field}")
        occupants = self.draft.additional_occupants
        if not 0 <= index < len(occupants):
            raise IndexError(f"No occupant at position {index}")
        setattr(occupants[index], field, "" if value is None else str(value))

    def add_occupant(self) -> int:
        """Append a blank occupant row and return its position."""
        self.draft.additional_occupants.append(Occupant())
        return len(self.draft.additional_occupants) - 1

    def missing_required_fields(self) -> List[str]:
        """Labels of required fields that are still blank."""
        return [
            FormConstants.FIELD_LABELS[name]
            for name in FormConstants.REQUIRED_FIELDS
            if not self.get_field(name).strip()
        ]

    # -------------------------------------------------------------------------
    # Attachments
    # -------------------------------------------------------------------------

    def select_files(self, files: Sequence[LocalFile]) -> None:
        """Append newly chosen files. Images get a preview handle."""
        for local_file in files:
            preview = self.previews.acquire(local_file) if local_file.is_image else None
            self.attachments.append(PendingAttachment(local_file=local_file, preview=preview))

    def remove_file(self, index: int) -> AttachmentEntry:
        if not 0 <= index < len(self.attachments):
            raise IndexError(f"No attachment at position {index}")
        entry = self.attachments.pop(index)
        self._release_preview(entry)
        return entry

    def _release_preview(self, entry: AttachmentEntry) -> None:
        if isinstance(entry, PendingAttachment) and entry.preview is not None:
            self.previews.release(entry.preview)

    def teardown(self) -> None:
        """Release every preview still held by this form."""
        for entry in self.attachments:
            self._release_preview(entry)
        self.torn_down = True

    # -------------------------------------------------------------------------
    # Submission
    # -------------------------------------------------------------------------

    def _build_record(self, occupants: List[Occupant], uploaded: List[Attachment]) -> ApplicationRecord:
        now = datetime.now(timezone.utc)
        if self.is_editing:
            created_at = self.existing.created_at or now
            previous = self.existing.updated_at
            updated_at = max(now, previous) if previous else now
            owner = self.existing.user_id or self.user.uid
            record_id = self.existing.id
        else:
            created_at = updated_at = now
            owner = self.user.uid
            record_id = None

        return ApplicationRecord(
            **self.draft.scalar_values(),
            id=record_id,
            user_id=owner,
            additional_occupants=occupants,
            uploaded_files=uploaded,
            created_at=created_at,
            updated_at=updated_at,
        )

    async def submit(self) -> Optional[ApplicationRecord]:
        """
        Submit the draft. Returns the saved record, or None when the submission
        was refused or failed (status_message says why).
        """
        missing = self.missing_required_fields()
        if missing:
            self.status_message = Messages.MISSING_REQUIRED.format(", ".join(missing))
            return None

        was_editing = self.is_editing
        self.submitting = True
        self.status_message = Messages.SUBMITTING
        try:
            occupants = [
                occupant.model_copy()
                for occupant in self.draft.additional_occupants
                if not occupant.is_blank()
            ]
            entries = [
                entry.local_file if isinstance(entry, PendingAttachment) else entry
                for entry in self.attachments
            ]
            uploaded = await self.pipeline.resolve_all(entries, self.draft.applicant_full_name)

            record = self._build_record(occupants, uploaded)
            if was_editing:
                await self.record_store.update(record.id, record)
            else:
                record.id = await self.record_store.create(record)

        except AttachmentUploadError as e:
            self.status_message = Messages.UPLOAD_FAILED.format(", ".join(e.failed_names))
            if self.logs_manager:
                await self.logs_manager.error(f"[ApplicationForm] Submission aborted: {e}")
            return None
        except Exception as e:
            self.status_message = Messages.SUBMIT_FAILED
            if self.logs_manager:
                await self.logs_manager.error(f"[ApplicationForm] Failed to save application: {e}")
            return None
        finally:
            self.submitting = False

        if was_editing:
            record = await self._reload(record)

        # Uploaded files are now plain references; their local previews are no longer needed
        for entry in self.attachments:
            self._release_preview(entry)
        self.attachments = list(uploaded)
        self.existing = record

        self.status_message = Messages.UPDATE_SUCCESS if was_editing else Messages.SUBMIT_SUCCESS
        if self.logs_manager:
            await self.logs_manager.info(
                f"[ApplicationForm] Application {record.id} saved for user {record.user_id}"
            )
        if self.on_saved:
            self.on_saved(record)
        if self.on_navigate:
            await self.task_manager.spawn(
                self._navigate_after_delay(),
                task_id=f"submit-redirect-{uuid.uuid4().hex[:8]}"
            )
        return record

    async def _reload(self, record: ApplicationRecord) -> ApplicationRecord:
        """
        Re-read a record after an update. The update is a shallow merge of the
        non-empty fields, so the stored document can differ from what was sent.
        """
        try:
            stored = await self.record_store.get(record.id)
        except Exception as e:
            if self.logs_manager:
                await self.logs_manager.warning(f"[ApplicationForm] Could not reload application {record.id}: {e}")
            return record
        return stored or record

    async def _navigate_after_delay(self) -> None:
        await asyncio.sleep(self.redirect_delay)
        await self.on_navigate(self)

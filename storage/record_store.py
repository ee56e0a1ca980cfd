"""
Application Record Store

CRUD over the applications collection. One record per tenant, keyed by the
owning user's id in the `userId` field.

- update() has shallow-merge semantics: top-level fields present in the
  record replace the stored ones, fields absent from it are left as they are.
- list_all() and subscribe_all() order by `createdAt`, newest first.
"""

from typing import Callable, List, Optional

from constants import PortalDefaults
from models.application_models import ApplicationRecord
from providers.base import DocumentSnapshot, DocumentStore, Unsubscribe
from storage.logs_manager import LogsManager

ORDER_FIELD = 'createdAt'
OWNER_FIELD = 'userId'

class ApplicationRecordStore:
    def __init__(
        self,
        documents: DocumentStore,
        collection: str = PortalDefaults.APPLICATIONS_COLLECTION,
        logs_manager: Optional[LogsManager] = None
    ):
        self.documents = documents
        self.collection = collection
        self.logs_manager = logs_manager

    @staticmethod
    def _to_records(snapshots: List[DocumentSnapshot]) -> List[ApplicationRecord]:
        return [ApplicationRecord.from_document(snap.id, snap.data) for snap in snapshots]

    async def create(self, record: ApplicationRecord) -> str:
        doc_id = await self.documents.add(self.collection, record.to_document())
        if self.logs_manager:
            await self.logs_manager.info(f"[RecordStore] Created application {doc_id} for user {record.user_id}")
        return doc_id

    async def update(self, record_id: str, record: ApplicationRecord) -> None:
        await self.documents.update(self.collection, record_id, record.to_document())
        if self.logs_manager:
            await self.logs_manager.info(f"[RecordStore] Updated application {record_id}")

    async def get(self, record_id: str) -> Optional[ApplicationRecord]:
        snap = await self.documents.get(self.collection, record_id)
        if snap is None:
            return None
        return ApplicationRecord.from_document(snap.id, snap.data)

    async def get_by_owner(self, user_id: str) -> Optional[ApplicationRecord]:
        """Return the owner's record, or None. At most one is expected; the first match wins."""
        snapshots = await self.documents.query(self.collection, where=[(OWNER_FIELD, '==', user_id)])
        if not snapshots:
            return None
        if len(snapshots) > 1 and self.logs_manager:
            await self.logs_manager.warning(
                f"[RecordStore] {len(snapshots)} applications found for user {user_id}; using the first"
            )
        return ApplicationRecord.from_document(snapshots[0].id, snapshots[0].data)

    async def list_all(self) -> List[ApplicationRecord]:
        """One-shot fetch of every application, newest first."""
        snapshots = await self.documents.query(self.collection, order_by=ORDER_FIELD, descending=True)
        return self._to_records(snapshots)

    async def subscribe_all(self, callback: Callable[[List[ApplicationRecord]], None]) -> Unsubscribe:
        """Live mode: callback receives the full ordered list now and after every change."""
        def on_snapshot(snapshots: List[DocumentSnapshot]) -> None:
            callback(self._to_records(snapshots))

        return await self.documents.subscribe(
            self.collection,
            on_snapshot,
            order_by=ORDER_FIELD,
            descending=True
        )

    async def delete(self, record_id: str) -> None:
        await self.documents.delete(self.collection, record_id)
        if self.logs_manager:
            await self.logs_manager.info(f"[RecordStore] Deleted application {record_id}")

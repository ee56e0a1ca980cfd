"""
Landlord Dashboard Controller

Live list of every application, newest first, with a detail view, a manual
resync and a guarded delete.

- resync() clears the local list before fetching; when the fetch fails the
  list stays empty rather than falling back to the previous data.
- delete is only allowed once the operator has typed the confirmation phrase
  ("delete application", any letter case). Otherwise an alert is raised and
  the datastore is not touched.
- Live updates and local actions are not coordinated: whichever arrives last
  decides what is shown.
"""

from typing import List, Optional

from constants import FormConstants, Messages
from models.application_models import ApplicationRecord, ApplicationSummary
from providers.base import Unsubscribe
from storage.logs_manager import LogsManager
from storage.record_store import ApplicationRecordStore
from ui.components.record_sections import Section, application_sections

class LandlordDashboardController:
    def __init__(self, record_store: ApplicationRecordStore, logs_manager: Optional[LogsManager] = None):
        self.record_store = record_store
        self.logs_manager = logs_manager
        self.applications: List[ApplicationRecord] = []
        self.selected_id: Optional[str] = None
        self.confirmation_text = ""
        self.status_message = ""
        self.alert_message = ""
        self._unsubscribe: Optional[Unsubscribe] = None

    # -------------------------------------------------------------------------
    # Live feed
    # -------------------------------------------------------------------------

    async def start(self) -> None:
        if self._unsubscribe is None:
            self._unsubscribe = await self.record_store.subscribe_all(self._on_records)

    def stop(self) -> None:
        if self._unsubscribe:
            self._unsubscribe()
        self._unsubscribe = None

    @property
    def is_live(self) -> bool:
        return self._unsubscribe is not None

    def _on_records(self, records: List[ApplicationRecord]) -> None:
        self.applications = records
        if self.selected_id and self.selected is None:
            self.close_detail()

    # -------------------------------------------------------------------------
    # Cards and detail view
    # -------------------------------------------------------------------------

    @property
    def cards(self) -> List[ApplicationSummary]:
        return [ApplicationSummary.from_record(record) for record in self.applications]

    @property
    def selected(self) -> Optional[ApplicationRecord]:
        for record in self.applications:
            if record.id == self.selected_id:
                return record
        return None

    @property
    def detail_sections(self) -> List[Section]:
        record = self.selected
        return application_sections(record) if record else []

    def select(self, index: int) -> ApplicationRecord:
        """Open the detail view of the card at the given position."""
        if not 0 <= index < len(self.applications):
            raise IndexError(f"No application card at position {index}")
        record = self.applications[index]
        self.selected_id = record.id
        self.confirmation_text = ""
        self.alert_message = ""
        return record

    def close_detail(self) -> None:
        self.selected_id = None
        self.confirmation_text = ""
        self.alert_message = ""

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    async def resync(self) -> None:
        """One-shot refetch. Local state is cleared first, so a failure leaves an empty list."""
        self.applications = []
        self.selected_id = None
        try:
            self.applications = await self.record_store.list_all()
            self.status_message = Messages.RESYNC_SUCCESS
        except Exception as e:
            self.status_message = Messages.RESYNC_FAILED.format(e)
            if self.logs_manager:
                await self.logs_manager.error(f"[LandlordDashboard] Resync failed: {e}")

    def set_confirmation(self, text: str) -> None:
        self.confirmation_text = text
        self.alert_message = ""

    @property
    def can_delete(self) -> bool:
        return self.confirmation_text.lower() == FormConstants.DELETE_CONFIRMATION_PHRASE.lower()

    async def delete_selected(self) -> bool:
        """Delete the application open in the detail view. Returns True when deleted."""
        record = self.selected
        if record is None:
            return False
        if not self.can_delete:
            self.alert_message = Messages.DELETE_CONFIRM_REQUIRED
            return False

        try:
            await self.record_store.delete(record.id)
        except Exception as e:
            self.status_message = Messages.DELETE_FAILED.format(e)
            if self.logs_manager:
                await self.logs_manager.error(f"[LandlordDashboard] Delete of {record.id} failed: {e}")
            return False

        self.applications = [item for item in self.applications if item.id != record.id]
        self.close_detail()
        self.status_message = Messages.DELETE_SUCCESS
        return True

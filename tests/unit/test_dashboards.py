"""
Unit Tests for the Landlord and Tenant Dashboard Controllers
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, patch

import pytest

from constants import Messages
from models.application_models import ApplicationRecord, Attachment, Occupant
from providers.base import DocumentStoreError
from ui.components.landlord_dashboard import LandlordDashboardController
from ui.components.record_sections import application_sections
from ui.components.tenant_dashboard import TenantDashboardController

BASE_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

def make_record(user_id, name, minutes_ago):
    created = BASE_TIME - timedelta(minutes=minutes_ago)
    return ApplicationRecord(
        user_id=user_id,
        applicant_full_name=name,
        applying_for="Unit 3",
        created_at=created,
        updated_at=created,
    )

@pytest.fixture
async def dashboard(record_store):
    await record_store.create(make_record("t1", "Older Applicant", minutes_ago=60))
    await record_store.create(make_record("t2", "Newer Applicant", minutes_ago=5))
    controller = LandlordDashboardController(record_store)
    await controller.start()
    yield controller
    controller.stop()

# -----------------------------------------------------------------------------
# Landlord
# -----------------------------------------------------------------------------

async def test_live_cards_newest_first(dashboard, record_store):
    assert dashboard.is_live
    assert [card.applicant_full_name for card in dashboard.cards] == ["Newer Applicant", "Older Applicant"]

    await record_store.create(make_record("t3", "Newest Applicant", minutes_ago=0))

    assert dashboard.cards[0].applicant_full_name == "Newest Applicant"

async def test_select_opens_detail(dashboard):
    record = dashboard.select(0)

    assert dashboard.selected is record
    assert dashboard.detail_sections[0][0] == "Application Details"
    with pytest.raises(IndexError):
        dashboard.select(7)

async def test_delete_requires_confirmation_phrase(dashboard, record_store):
    dashboard.select(0)
    dashboard.set_confirmation("delete")

    with patch.object(record_store, 'delete', new_callable=AsyncMock) as mock_delete:
        deleted = await dashboard.delete_selected()

    assert not deleted
    assert dashboard.alert_message == Messages.DELETE_CONFIRM_REQUIRED
    mock_delete.assert_not_awaited()
    assert len(dashboard.applications) == 2

async def test_delete_with_phrase_in_any_case(dashboard, record_store):
    target = dashboard.select(0)
    dashboard.set_confirmation("Delete Application")

    assert dashboard.can_delete
    assert await dashboard.delete_selected()

    assert dashboard.status_message == Messages.DELETE_SUCCESS
    assert dashboard.selected_id is None
    assert target.id not in [r.id for r in dashboard.applications]
    assert await record_store.get(target.id) is None

async def test_delete_failure_keeps_list(dashboard, record_store):
    dashboard.select(1)
    dashboard.set_confirmation("delete application")

    with patch.object(record_store, 'delete', new_callable=AsyncMock, side_effect=DocumentStoreError("offline")):
        deleted = await dashboard.delete_selected()

    assert not deleted
    assert dashboard.status_message == Messages.DELETE_FAILED.format("offline")
    assert len(dashboard.applications) == 2

async def test_resync_refetches(dashboard):
    dashboard.select(0)

    await dashboard.resync()

    assert len(dashboard.applications) == 2
    assert dashboard.selected_id is None
    assert dashboard.status_message == Messages.RESYNC_SUCCESS

async def test_failed_resync_leaves_list_empty(dashboard, record_store):
    with patch.object(record_store, 'list_all', new_callable=AsyncMock, side_effect=DocumentStoreError("offline")):
        await dashboard.resync()

    assert dashboard.applications == []
    assert dashboard.status_message == Messages.RESYNC_FAILED.format("offline")

async def test_remote_delete_closes_detail(dashboard, record_store):
    target = dashboard.select(0)

    await record_store.delete(target.id)

    assert dashboard.selected is None
    assert dashboard.selected_id is None

async def test_stop_ends_live_updates(dashboard, record_store):
    dashboard.stop()
    await record_store.create(make_record("t3", "Late Applicant", minutes_ago=0))

    assert not dashboard.is_live
    assert len(dashboard.applications) == 2

# -----------------------------------------------------------------------------
# Tenant and shared sections
# -----------------------------------------------------------------------------

async def test_tenant_dashboard_edit_routes_record():
    record = make_record("t1", "Jane Doe", minutes_ago=0)
    on_edit = AsyncMock()
    dashboard = TenantDashboardController(record, on_edit=on_edit)

    await dashboard.edit()

    assert dashboard.summary.applicant_full_name == "Jane Doe"
    on_edit.assert_awaited_once_with(record)

def test_sections_skip_blank_rows_and_sections():
    record = ApplicationRecord(
        id="r1",
        applicant_full_name="Jane Doe",
        phone="555-0100",
        additional_occupants=[Occupant(), Occupant(name="Sam Doe", relationship="Son")],
        uploaded_files=[Attachment(name="stub.pdf", url="https://files.example.com/stub.pdf")],
    )

    sections = dict(application_sections(record))

    assert sections["Application Details"] == [("Phone Number", "555-0100")]
    assert sections["Personal Information"] == [("Applicant's Full Name", "Jane Doe")]
    assert "Co-Resident Information" not in sections
    assert sections["Additional Occupants"] == [("Sam Doe", "Son")]
    assert sections["Documents"] == [("stub.pdf", "https://files.example.com/stub.pdf")]

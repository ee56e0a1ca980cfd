"""
Tenant Dashboard Controller

Read-only summary of the signed-in tenant's own application with a single
action: edit, which reopens the form with the record preloaded.
"""

from typing import Awaitable, Callable, List

from models.application_models import ApplicationRecord, ApplicationSummary
from ui.components.record_sections import Section, application_sections

class TenantDashboardController:
    def __init__(self, record: ApplicationRecord, on_edit: Callable[[ApplicationRecord], Awaitable[None]]):
        self.record = record
        self.on_edit = on_edit

    @property
    def summary(self) -> ApplicationSummary:
        return ApplicationSummary.from_record(self.record)

    @property
    def sections(self) -> List[Section]:
        return application_sections(self.record)

    async def edit(self) -> None:
        await self.on_edit(self.record)

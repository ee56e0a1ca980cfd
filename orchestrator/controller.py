"""
Main Controller Module (Async)

The view state machine at the top of the portal. It decides which view is
active from the session classification and from explicit navigation, and it
owns the per-session controllers behind those views.

States:
--------
- initializing: before the first auth classification arrives
- signed_out / signing_up / resetting_password: the auth views; explicit
  navigation moves freely between these three and nowhere else
- editing_application: the application form (new or existing record)
- tenant_dashboard: read-only summary of the tenant's own record
- landlord_dashboard: live list of every application

Transitions:
------------
- signed in as landlord -> landlord_dashboard
- signed in as tenant   -> editing_application when the tenant has no record,
                           tenant_dashboard otherwise
- successful submission -> tenant_dashboard (after the redirect delay)
- edit from dashboard   -> editing_application with the record preloaded
- signed out            -> signed_out; all cached session state is cleared

No state is terminal. Every auth transition clears the previous session's
draft, record and dashboards before the next view is built, so nothing of
one user's data survives into the next session on the same device.

Usage:
------
    controller = build_controller(settings)   # orchestrator.bootstrap
    await controller.start()
    controller.auth_form.email = "tenant@example.com"
    ...
"""

from enum import Enum
from typing import Optional

from agents.credentials_agent import AuthResult, CredentialsAgent
from agents.session_agent import SessionAgent
from constants import Messages, PortalDefaults, TimingConstants
from models.application_models import ApplicationRecord
from models.user_models import SessionState, SessionStatus
from orchestrator.task_manager import TaskManager
from providers.base import DocumentStore, IdentityProvider, ObjectStore
from storage.attachment_pipeline import AttachmentPipeline
from storage.logs_manager import LogsManager
from storage.record_store import ApplicationRecordStore
from ui.components.application_form import ApplicationFormController
from ui.components.auth_forms import AuthFormController
from ui.components.landlord_dashboard import LandlordDashboardController
from ui.components.tenant_dashboard import TenantDashboardController
from utils.preview_manager import PreviewManager

class ViewState(str, Enum):
    INITIALIZING = "initializing"
    SIGNED_OUT = "signed_out"
    SIGNING_UP = "signing_up"
    RESETTING_PASSWORD = "resetting_password"
    EDITING_APPLICATION = "editing_application"
    TENANT_DASHBOARD = "tenant_dashboard"
    LANDLORD_DASHBOARD = "landlord_dashboard"

AUTH_VIEWS = frozenset({ViewState.SIGNED_OUT, ViewState.SIGNING_UP, ViewState.RESETTING_PASSWORD})

class ViewTransitionError(Exception):
    """An explicit navigation request that the current view does not allow."""

class Controller:
    def __init__(
        self,
        settings: dict,
        identity: IdentityProvider,
        documents: DocumentStore,
        objects: ObjectStore,
        logs_manager: Optional[LogsManager] = None,
        previews: Optional[PreviewManager] = None,
        task_manager: Optional[TaskManager] = None
    ):
        portal = settings.get('portal', {})
        self.settings = settings
        self.logs_manager = logs_manager
        self.redirect_delay = float(portal.get('redirect_delay', TimingConstants.SUBMIT_REDIRECT_DELAY / 1000))

        self.previews = previews or PreviewManager()
        self.task_manager = task_manager or TaskManager(logs_manager)
        self.record_store = ApplicationRecordStore(
            documents,
            collection=portal.get('collection', PortalDefaults.APPLICATIONS_COLLECTION),
            logs_manager=logs_manager
        )
        self.pipeline = AttachmentPipeline(
            objects,
            prefix=portal.get('upload_prefix', PortalDefaults.UPLOAD_PREFIX),
            logs_manager=logs_manager
        )
        self.session_agent = SessionAgent(
            identity,
            landlord_email=portal.get('landlord_email', PortalDefaults.LANDLORD_EMAIL),
            logs_manager=logs_manager
        )
        self.credentials_agent = CredentialsAgent(identity, logs_manager=logs_manager)
        self.auth_form = AuthFormController(self.credentials_agent)

        self.state = ViewState.INITIALIZING
        self.session = SessionState.signed_out()

        # Session-specific state, cleared on every auth transition
        self.current_record: Optional[ApplicationRecord] = None
        self.form: Optional[ApplicationFormController] = None
        self.tenant_dashboard: Optional[TenantDashboardController] = None
        self.landlord_dashboard: Optional[LandlordDashboardController] = None

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def start(self) -> None:
        """Subscribe to auth state; the first classification selects the initial view."""
        await self.session_agent.start(self._on_session_change)

    async def stop(self) -> None:
        self.session_agent.stop()
        self._clear_session_state()

    @property
    def active_view(self):
        """The controller backing the current view."""
        if self.state in AUTH_VIEWS:
            return self.auth_form
        if self.state == ViewState.EDITING_APPLICATION:
            return self.form
        if self.state == ViewState.TENANT_DASHBOARD:
            return self.tenant_dashboard
        if self.state == ViewState.LANDLORD_DASHBOARD:
            return self.landlord_dashboard
        return None

    async def _set_state(self, new_state: ViewState) -> None:
        if self.logs_manager and new_state != self.state:
            await self.logs_manager.info(
                f"[Controller] {Messages.VIEW_CHANGED.format(self.state.value, new_state.value)}"
            )
        self.state = new_state

    def _clear_session_state(self) -> None:
        if self.form:
            self.form.teardown()
        if self.landlord_dashboard:
            self.landlord_dashboard.stop()
        self.form = None
        self.current_record = None
        self.tenant_dashboard = None
        self.landlord_dashboard = None

    # -------------------------------------------------------------------------
    # Session transitions
    # -------------------------------------------------------------------------

    async def _on_session_change(self, session: SessionState) -> None:
        self.session = session
        self._clear_session_state()

        if session.status == SessionStatus.SIGNED_OUT:
            await self._set_state(ViewState.SIGNED_OUT)
            return

        self.auth_form.reset()

        if session.status == SessionStatus.LANDLORD:
            dashboard = LandlordDashboardController(self.record_store, logs_manager=self.logs_manager)
            try:
                await dashboard.start()
            except Exception as e:
                await self._load_failed(session, e)
                return
            self.landlord_dashboard = dashboard
            await self._set_state(ViewState.LANDLORD_DASHBOARD)
            return

        try:
            record = await self.record_store.get_by_owner(session.user.uid)
        except Exception as e:
            await self._load_failed(session, e)
            return

        if record is None:
            self._open_form(existing=None)
            await self._set_state(ViewState.EDITING_APPLICATION)
        else:
            self.current_record = record
            await self._show_tenant_dashboard()

    async def _load_failed(self, session: SessionState, error: Exception) -> None:
        """Return to the sign-in view with an inline message when a signed-in view cannot be built."""
        self.auth_form.message = Messages.LOAD_FAILED.format(error)
        if self.logs_manager:
            await self.logs_manager.error(
                f"[Controller] Could not load the {session.status.value} view for {session.user.uid}: {error}"
            )
        await self._set_state(ViewState.SIGNED_OUT)

    async def sign_out(self) -> AuthResult:
        """Sign out from any view."""
        result = await self.credentials_agent.sign_out()
        if self.session.is_signed_in or self.state != ViewState.SIGNED_OUT:
            # The provider did not report the change; clear locally anyway
            await self._on_session_change(SessionState.signed_out())
        return result

    # -------------------------------------------------------------------------
    # Auth view navigation
    # -------------------------------------------------------------------------

    async def _navigate_auth(self, target: ViewState) -> None:
        if self.state not in AUTH_VIEWS:
            raise ViewTransitionError(Messages.INVALID_TRANSITION.format(self.state.value, target.value))
        self.auth_form.message = ""
        await self._set_state(target)

    async def show_sign_in(self) -> None:
        await self._navigate_auth(ViewState.SIGNED_OUT)

    async def show_sign_up(self) -> None:
        await self._navigate_auth(ViewState.SIGNING_UP)

    async def show_reset_password(self) -> None:
        await self._navigate_auth(ViewState.RESETTING_PASSWORD)

    # -------------------------------------------------------------------------
    # Tenant views
    # -------------------------------------------------------------------------

    def _open_form(self, existing: Optional[ApplicationRecord]) -> None:
        self.form = ApplicationFormController(
            user=self.session.user,
            record_store=self.record_store,
            pipeline=self.pipeline,
            existing=existing,
            previews=self.previews,
            task_manager=self.task_manager,
            on_saved=self._on_application_saved,
            on_navigate=self._on_submit_redirect,
            redirect_delay=self.redirect_delay,
            logs_manager=self.logs_manager
        )

    def _on_application_saved(self, record: ApplicationRecord) -> None:
        self.current_record = record

    async def _on_submit_redirect(self, form: ApplicationFormController) -> None:
        # Ignore redirects from a form that is no longer active (signed out, new session)
        if form is not self.form or self.state != ViewState.EDITING_APPLICATION:
            return
        await self._show_tenant_dashboard()

    async def _show_tenant_dashboard(self) -> None:
        if self.form:
            self.form.teardown()
            self.form = None
        self.tenant_dashboard = TenantDashboardController(self.current_record, on_edit=self.edit_application)
        await self._set_state(ViewState.TENANT_DASHBOARD)

    async def edit_application(self, record: Optional[ApplicationRecord] = None) -> ApplicationFormController:
        """Leave the tenant dashboard for the form, preloaded with the tenant's record."""
        if self.state != ViewState.TENANT_DASHBOARD:
            raise ViewTransitionError(
                Messages.INVALID_TRANSITION.format(self.state.value, ViewState.EDITING_APPLICATION.value)
            )
        self.tenant_dashboard = None
        self._open_form(existing=record or self.current_record)
        await self._set_state(ViewState.EDITING_APPLICATION)
        return self.form

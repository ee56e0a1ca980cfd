"""
Session Agent

Observes identity provider auth state and classifies every transition into
exactly one SessionState: signed out, landlord or tenant.

Classification rule:
- a signed-in identity whose email matches the configured landlord address
  (case-insensitive, surrounding whitespace ignored) is a landlord
- any other signed-in identity is a tenant
"""

from typing import Awaitable, Callable, Optional

from models.user_models import AuthUser, Role, SessionState, SessionStatus
from providers.base import IdentityProvider, Unsubscribe
from storage.logs_manager import LogsManager

SessionCallback = Callable[[SessionState], Awaitable[None]]

def classify_role(user: AuthUser, landlord_email: str) -> Role:
    if user.email.strip().lower() == landlord_email.strip().lower():
        return Role.LANDLORD
    return Role.TENANT

def classify_session(user: Optional[AuthUser], landlord_email: str) -> SessionState:
    if user is None:
        return SessionState.signed_out()
    role = classify_role(user, landlord_email)
    status = SessionStatus.LANDLORD if role == Role.LANDLORD else SessionStatus.TENANT
    return SessionState(status=status, user=user)

class SessionAgent:
    def __init__(
        self,
        identity: IdentityProvider,
        landlord_email: str,
        logs_manager: Optional[LogsManager] = None
    ):
        self.identity = identity
        self.landlord_email = landlord_email
        self.logs_manager = logs_manager
        self.current = SessionState.signed_out()
        self._on_change: Optional[SessionCallback] = None
        self._unsubscribe: Optional[Unsubscribe] = None

    async def start(self, on_change: SessionCallback) -> None:
        """Subscribe to the identity provider. The current state is delivered before this returns."""
        self.stop()
        self._on_change = on_change
        self._unsubscribe = await self.identity.on_auth_state_change(self._handle_auth_change)

    def stop(self) -> None:
        if self._unsubscribe:
            self._unsubscribe()
        self._unsubscribe = None

    async def _handle_auth_change(self, user: Optional[AuthUser]) -> None:
        self.current = classify_session(user, self.landlord_email)
        if self.logs_manager:
            who = user.email if user else "nobody"
            await self.logs_manager.info(f"[SessionAgent] Auth state: {self.current.status.value} ({who})")
        if self._on_change:
            await self._on_change(self.current)

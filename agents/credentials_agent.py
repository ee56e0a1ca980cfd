"""
Credentials Agent

Account operations on top of the identity provider:

1. Create account (email/password, optional confirmation)
2. Sign in (email/password or federated)
3. Password reset email
4. Sign out

Provider failures never escape this module: each operation returns an
AuthResult whose message is ready to show inline on the form. Retrying is
left to the user.
"""

from dataclasses import dataclass
from typing import Optional

from constants import Messages
from models.user_models import AuthUser
from providers.base import (
    AuthError,
    EmailAlreadyInUseError,
    FederatedSignInError,
    IdentityProvider,
    InvalidCredentialsError,
    UserNotFoundError,
    WeakPasswordError,
)
from storage.logs_manager import LogsManager

@dataclass
class AuthResult:
    ok: bool
    message: str = ""
    user: Optional[AuthUser] = None

def describe_auth_error(error: AuthError) -> str:
    """Human-readable message for an identity provider failure."""
    if isinstance(error, InvalidCredentialsError):
        return Messages.INVALID_CREDENTIALS
    if isinstance(error, WeakPasswordError):
        return Messages.WEAK_PASSWORD
    if isinstance(error, EmailAlreadyInUseError):
        return Messages.EMAIL_IN_USE
    if isinstance(error, UserNotFoundError):
        return Messages.USER_NOT_FOUND
    if isinstance(error, FederatedSignInError):
        return Messages.FEDERATED_FAILED
    return Messages.AUTH_FAILED.format(error)

class CredentialsAgent:
    def __init__(self, identity: IdentityProvider, logs_manager: Optional[LogsManager] = None):
        self.identity = identity
        self.logs_manager = logs_manager

    async def _fail(self, action: str, error: AuthError) -> AuthResult:
        message = describe_auth_error(error)
        if self.logs_manager:
            await self.logs_manager.warning(f"[CredentialsAgent] {action} failed: {error}")
        return AuthResult(ok=False, message=message)

    async def create_account(self, email: str, password: str, confirm_password: Optional[str] = None) -> AuthResult:
        if confirm_password is not None and confirm_password != password:
            return AuthResult(ok=False, message=Messages.PASSWORD_MISMATCH)
        try:
            user = await self.identity.create_account(email, password)
        except AuthError as e:
            return await self._fail("Sign-up", e)
        if self.logs_manager:
            await self.logs_manager.info(f"[CredentialsAgent] Account created for {user.email}")
        return AuthResult(ok=True, user=user)

    async def sign_in(self, email: str, password: str) -> AuthResult:
        try:
            user = await self.identity.sign_in(email, password)
        except AuthError as e:
            return await self._fail("Sign-in", e)
        if self.logs_manager:
            await self.logs_manager.info(f"[CredentialsAgent] Signed in {user.email}")
        return AuthResult(ok=True, user=user)

    async def sign_in_federated(self) -> AuthResult:
        try:
            user = await self.identity.sign_in_federated()
        except AuthError as e:
            return await self._fail("Federated sign-in", e)
        if self.logs_manager:
            await self.logs_manager.info(f"[CredentialsAgent] Signed in {user.email} (federated)")
        return AuthResult(ok=True, user=user)

    async def send_password_reset(self, email: str) -> AuthResult:
        try:
            await self.identity.send_password_reset(email)
        except AuthError as e:
            return await self._fail("Password reset", e)
        return AuthResult(ok=True, message=Messages.RESET_EMAIL_SENT)

    async def sign_out(self) -> AuthResult:
        try:
            await self.identity.sign_out()
        except AuthError as e:
            return await self._fail("Sign-out", e)
        if self.logs_manager:
            await self.logs_manager.info("[CredentialsAgent] Signed out")
        return AuthResult(ok=True)

"""
Local Identity Provider

In-memory email/password accounts for local runs and tests.

- Passwords are stored as salted PBKDF2 hashes, never in clear text.
- A minimum password length of 6 mirrors the hosted provider's rule.
- Federated sign-in signs in a preset identity when one is configured.
- Password reset emails are recorded in an outbox instead of being sent.
- Auth state listeners are awaited in registration order on every change.
"""

import hashlib
import hmac
import inspect
import os
import re
import uuid
from dataclasses import dataclass
from typing import Dict, List, Optional

from models.user_models import AuthUser
from providers.base import (
    AuthStateCallback,
    EmailAlreadyInUseError,
    FederatedSignInError,
    InvalidCredentialsError,
    Unsubscribe,
    UserNotFoundError,
    WeakPasswordError,
)
from storage.logs_manager import LogsManager

MIN_PASSWORD_LENGTH = 6
_PBKDF2_ITERATIONS = 100_000
_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

@dataclass
class _Account:
    uid: str
    email: str
    salt: bytes = b""
    password_hash: bytes = b""

def _hash_password(password: str, salt: bytes) -> bytes:
    return hashlib.pbkdf2_hmac('sha256', password.encode('utf-8'), salt, _PBKDF2_ITERATIONS)

class LocalIdentityProvider:
    def __init__(self, federated_email: Optional[str] = None, logs_manager: Optional[LogsManager] = None):
        """
        Args:
            federated_email: Identity returned by sign_in_federated(). When None,
                federated sign-in fails with FederatedSignInError.
            logs_manager: Optional LogsManager for debug output.
        """
        self.federated_email = federated_email
        self.logs_manager = logs_manager
        self.current_user: Optional[AuthUser] = None
        self.sent_password_resets: List[str] = []
        self._accounts: Dict[str, _Account] = {}
        self._listeners: List[AuthStateCallback] = []

    @staticmethod
    def _key(email: str) -> str:
        return email.strip().lower()

    async def create_account(self, email: str, password: str) -> AuthUser:
        key = self._key(email)
        if not _EMAIL_PATTERN.match(key):
            raise InvalidCredentialsError(f"Invalid email address: {email}")
        if key in self._accounts:
            raise EmailAlreadyInUseError(f"Account already exists: {email}")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise WeakPasswordError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

        salt = os.urandom(16)
        account = _Account(
            uid=uuid.uuid4().hex,
            email=email.strip(),
            salt=salt,
            password_hash=_hash_password(password, salt),
        )
        self._accounts[key] = account
        if self.logs_manager:
            await self.logs_manager.debug(f"[LocalIdentityProvider] Account created: {account.email}")

        # The hosted provider signs the new account in immediately
        await self._set_current(AuthUser(uid=account.uid, email=account.email))
        return self.current_user

    async def sign_in(self, email: str, password: str) -> AuthUser:
        account = self._accounts.get(self._key(email))
        if account is None or not account.password_hash:
            raise InvalidCredentialsError("Invalid email or password")
        if not hmac.compare_digest(account.password_hash, _hash_password(password, account.salt)):
            raise InvalidCredentialsError("Invalid email or password")

        await self._set_current(AuthUser(uid=account.uid, email=account.email))
        return self.current_user

    async def sign_in_federated(self) -> AuthUser:
        if not self.federated_email:
            raise FederatedSignInError("No federated identity is available")

        key = self._key(self.federated_email)
        account = self._accounts.get(key)
        if account is None:
            # Federated accounts carry no password
            account = _Account(uid=uuid.uuid4().hex, email=self.federated_email.strip())
            self._accounts[key] = account

        await self._set_current(AuthUser(uid=account.uid, email=account.email))
        return self.current_user

    async def send_password_reset(self, email: str) -> None:
        account = self._accounts.get(self._key(email))
        if account is None:
            raise UserNotFoundError(f"No account for {email}")
        self.sent_password_resets.append(account.email)
        if self.logs_manager:
            await self.logs_manager.debug(f"[LocalIdentityProvider] Password reset queued for {account.email}")

    async def sign_out(self) -> None:
        await self._set_current(None)

    async def on_auth_state_change(self, callback: AuthStateCallback) -> Unsubscribe:
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        await self._deliver(callback, self.current_user)
        return unsubscribe

    async def _set_current(self, user: Optional[AuthUser]) -> None:
        self.current_user = user
        for listener in list(self._listeners):
            await self._deliver(listener, user)

    @staticmethod
    async def _deliver(listener: AuthStateCallback, user: Optional[AuthUser]) -> None:
        result = listener(user)
        if inspect.isawaitable(result):
            await result

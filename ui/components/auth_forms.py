"""
Auth Form Controller

Backs the sign-in, sign-up and reset-password views. Holds the typed inputs
and the inline message shown under the form; the inputs stay editable after
a failure so the user can correct them and retry.
"""

from typing import Optional

from agents.credentials_agent import AuthResult, CredentialsAgent

class AuthFormController:
    def __init__(self, credentials: CredentialsAgent):
        self.credentials = credentials
        self.email = ""
        self.password = ""
        self.confirm_password = ""
        self.message = ""
        self.busy = False

    def reset(self) -> None:
        """Clear inputs and message, e.g. when switching between auth views."""
        self.email = ""
        self.password = ""
        self.confirm_password = ""
        self.message = ""

    async def _run(self, operation) -> AuthResult:
        self.busy = True
        self.message = ""
        try:
            result = await operation
        finally:
            self.busy = False
        # Messages set while the session changed (e.g. a failed record load) are kept
        if result.message:
            self.message = result.message
        if result.ok:
            self.password = ""
            self.confirm_password = ""
        return result

    async def sign_in(self) -> AuthResult:
        return await self._run(self.credentials.sign_in(self.email, self.password))

    async def sign_in_federated(self) -> AuthResult:
        return await self._run(self.credentials.sign_in_federated())

    async def sign_up(self, require_confirmation: bool = True) -> AuthResult:
        confirm: Optional[str] = self.confirm_password if require_confirmation else None
        return await self._run(self.credentials.create_account(self.email, self.password, confirm))

    async def send_reset(self) -> AuthResult:
        return await self._run(self.credentials.send_password_reset(self.email))

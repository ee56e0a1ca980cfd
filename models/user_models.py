"""
User and Session Models

The authenticated principal handed out by the identity provider, the role a
signed-in principal is classified into, and the resulting session state.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel

class AuthUser(BaseModel):
    uid: str
    email: str

class Role(str, Enum):
    LANDLORD = "landlord"
    TENANT = "tenant"

class SessionStatus(str, Enum):
    SIGNED_OUT = "signed_out"
    LANDLORD = "landlord"
    TENANT = "tenant"

@dataclass(frozen=True)
class SessionState:
    status: SessionStatus
    user: Optional[AuthUser] = None

    @classmethod
    def signed_out(cls) -> 'SessionState':
        return cls(status=SessionStatus.SIGNED_OUT)

    @property
    def is_signed_in(self) -> bool:
        return self.status != SessionStatus.SIGNED_OUT

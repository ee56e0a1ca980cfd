"""
Provider Interfaces

Narrow async interfaces over the three external collaborators the portal
consumes: the identity provider, the document datastore and the binary
object store. Controllers receive implementations by injection, so the local
providers in this package and hosted ones are interchangeable.
"""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional, Protocol, Sequence, Tuple, Union

from models.user_models import AuthUser

# -------------------------------------------------------------------------
# Errors
# -------------------------------------------------------------------------

class AuthError(Exception):
    """Base class for identity provider failures."""

class InvalidCredentialsError(AuthError):
    pass

class WeakPasswordError(AuthError):
    pass

class EmailAlreadyInUseError(AuthError):
    pass

class UserNotFoundError(AuthError):
    pass

class FederatedSignInError(AuthError):
    pass

class DocumentStoreError(Exception):
    """Base class for document datastore failures."""

class DocumentNotFoundError(DocumentStoreError):
    pass

class ObjectStoreError(Exception):
    """Raised when an object cannot be stored or located."""

# -------------------------------------------------------------------------
# Value types
# -------------------------------------------------------------------------

@dataclass(frozen=True)
class DocumentSnapshot:
    id: str
    data: Dict[str, Any] = field(default_factory=dict)

@dataclass(frozen=True)
class ObjectHandle:
    path: str
    size: int
    content_type: str = "application/octet-stream"

AuthStateCallback = Callable[[Optional[AuthUser]], Union[None, Awaitable[None]]]
SnapshotCallback = Callable[[List[DocumentSnapshot]], None]
Unsubscribe = Callable[[], None]
WhereClause = Tuple[str, str, Any]

# -------------------------------------------------------------------------
# Interfaces
# -------------------------------------------------------------------------

class IdentityProvider(Protocol):
    async def create_account(self, email: str, password: str) -> AuthUser:
        raise NotImplementedError

    async def sign_in(self, email: str, password: str) -> AuthUser:
        raise NotImplementedError

    async def sign_in_federated(self) -> AuthUser:
        raise NotImplementedError

    async def send_password_reset(self, email: str) -> None:
        raise NotImplementedError

    async def sign_out(self) -> None:
        raise NotImplementedError

    async def on_auth_state_change(self, callback: AuthStateCallback) -> Unsubscribe:
        """Register a listener; the current state is delivered before this returns."""
        raise NotImplementedError

class DocumentStore(Protocol):
    async def add(self, collection: str, data: Dict[str, Any]) -> str:
        raise NotImplementedError

    async def update(self, collection: str, doc_id: str, data: Dict[str, Any]) -> None:
        """Shallow merge: top-level keys in data replace the stored ones."""
        raise NotImplementedError

    async def delete(self, collection: str, doc_id: str) -> None:
        raise NotImplementedError

    async def get(self, collection: str, doc_id: str) -> Optional[DocumentSnapshot]:
        raise NotImplementedError

    async def query(
        self,
        collection: str,
        where: Sequence[WhereClause] = (),
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> List[DocumentSnapshot]:
        raise NotImplementedError

    async def subscribe(
        self,
        collection: str,
        callback: SnapshotCallback,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> Unsubscribe:
        """Live query: callback receives the full ordered result set now and on every change."""
        raise NotImplementedError

class ObjectStore(Protocol):
    async def put_object(self, path: str, data: bytes, content_type: str = "application/octet-stream") -> ObjectHandle:
        raise NotImplementedError

    async def get_retrieval_url(self, handle: ObjectHandle) -> str:
        raise NotImplementedError

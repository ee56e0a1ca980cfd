"""
Providers Package

Interfaces and local implementations of the external collaborators.

Components:
- base: IdentityProvider, DocumentStore and ObjectStore interfaces plus errors
- LocalIdentityProvider: In-memory email/password and federated accounts
- InMemoryDocumentStore: Collections with queries and live listeners
- LocalObjectStore: Filesystem-backed object storage
"""

from .local_identity import LocalIdentityProvider
from .local_objects import LocalObjectStore
from .memory_documents import InMemoryDocumentStore

__all__ = ['LocalIdentityProvider', 'LocalObjectStore', 'InMemoryDocumentStore']

"""
Portal bootstrap: wires settings and the hosted-service providers into a
Controller. Any provider not passed in falls back to the local implementation.
"""

from typing import Optional

from orchestrator.controller import Controller
from providers.base import DocumentStore, IdentityProvider, ObjectStore
from providers.local_identity import LocalIdentityProvider
from providers.local_objects import LocalObjectStore
from providers.memory_documents import InMemoryDocumentStore
from storage.logs_manager import LogsManager

def build_controller(
    settings: dict,
    logs_manager: Optional[LogsManager] = None,
    identity: Optional[IdentityProvider] = None,
    documents: Optional[DocumentStore] = None,
    objects: Optional[ObjectStore] = None
) -> Controller:
    provider_settings = settings.get('providers', {})
    if identity is None:
        identity = LocalIdentityProvider(logs_manager=logs_manager)
    if documents is None:
        documents = InMemoryDocumentStore()
    if objects is None:
        objects = LocalObjectStore(
            provider_settings.get('object_store_dir', './data/uploads'),
            public_base_url=provider_settings.get('public_base_url', ''),
            logs_manager=logs_manager
        )
    return Controller(settings, identity, documents, objects, logs_manager=logs_manager)

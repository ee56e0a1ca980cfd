"""
In-Memory Document Store

Collection-style document storage with generated ids, equality filters,
single-field ordering and live listeners. Stored data is deep-copied on the
way in and out so callers never share mutable state with the store.

Ordering follows the hosted datastore: documents that lack the order_by
field are left out of ordered results.
"""

import copy
import uuid
from typing import Any, Dict, List, Optional, Sequence, Tuple

from providers.base import (
    DocumentNotFoundError,
    DocumentSnapshot,
    SnapshotCallback,
    Unsubscribe,
    WhereClause,
)

class InMemoryDocumentStore:
    def __init__(self):
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self._listeners: Dict[str, List[Tuple[SnapshotCallback, Optional[str], bool]]] = {}

    def _collection(self, name: str) -> Dict[str, Dict[str, Any]]:
        return self._collections.setdefault(name, {})

    @staticmethod
    def _new_id() -> str:
        return uuid.uuid4().hex[:20]

    async def add(self, collection: str, data: Dict[str, Any]) -> str:
        doc_id = self._new_id()
        self._collection(collection)[doc_id] = copy.deepcopy(data)
        self._notify(collection)
        return doc_id

    async def update(self, collection: str, doc_id: str, data: Dict[str, Any]) -> None:
        documents = self._collection(collection)
        if doc_id not in documents:
            raise DocumentNotFoundError(f"{collection}/{doc_id} does not exist")
        documents[doc_id].update(copy.deepcopy(data))
        self._notify(collection)

    async def delete(self, collection: str, doc_id: str) -> None:
        documents = self._collection(collection)
        if doc_id not in documents:
            raise DocumentNotFoundError(f"{collection}/{doc_id} does not exist")
        del documents[doc_id]
        self._notify(collection)

    async def get(self, collection: str, doc_id: str) -> Optional[DocumentSnapshot]:
        data = self._collection(collection).get(doc_id)
        if data is None:
            return None
        return DocumentSnapshot(id=doc_id, data=copy.deepcopy(data))

    async def query(
        self,
        collection: str,
        where: Sequence[WhereClause] = (),
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> List[DocumentSnapshot]:
        return self._run_query(collection, where, order_by, descending)

    async def subscribe(
        self,
        collection: str,
        callback: SnapshotCallback,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> Unsubscribe:
        entry = (callback, order_by, descending)
        self._listeners.setdefault(collection, []).append(entry)

        def unsubscribe() -> None:
            listeners = self._listeners.get(collection, [])
            if entry in listeners:
                listeners.remove(entry)

        callback(self._run_query(collection, (), order_by, descending))
        return unsubscribe

    def _run_query(
        self,
        collection: str,
        where: Sequence[WhereClause],
        order_by: Optional[str],
        descending: bool,
    ) -> List[DocumentSnapshot]:
        for field_name, op, _ in where:
            if op != '==':
                raise ValueError(f"Unsupported query operator for '{field_name}': {op}")

        results = [
            (doc_id, data)
            for doc_id, data in self._collection(collection).items()
            if all(field_name in data and data[field_name] == value for field_name, _, value in where)
        ]

        if order_by:
            results = [(doc_id, data) for doc_id, data in results if data.get(order_by) is not None]
            results.sort(key=lambda item: item[1][order_by], reverse=descending)

        return [DocumentSnapshot(id=doc_id, data=copy.deepcopy(data)) for doc_id, data in results]

    def _notify(self, collection: str) -> None:
        for callback, order_by, descending in list(self._listeners.get(collection, [])):
            callback(self._run_query(collection, (), order_by, descending))

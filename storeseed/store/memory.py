"""In-process document store used for dry runs and the test suite."""

import copy
import datetime
from typing import Any

from storeseed.errors import StoreCommitError
from storeseed.store.base import (
    DocumentSnapshot,
    DocumentStore,
    WriteBatch,
    merge_document,
    resolve_server_timestamps,
)


class InMemoryWriteBatch(WriteBatch):
    def __init__(self, store: "InMemoryDocumentStore") -> None:
        super().__init__(store.max_batch_size)
        self._store = store

    async def commit(self) -> None:
        await self._store._apply(self)


class InMemoryDocumentStore(DocumentStore):
    """Dictionary-backed store.

    ``commit_log`` records the size of every applied batch and
    ``page_requests`` counts ``list_page`` calls.  Setting
    ``fail_on_commit`` to *n* makes the *n*-th commit (1-based) raise
    ``StoreCommitError`` without applying anything.
    """

    def __init__(self, *, fail_on_commit: int | None = None) -> None:
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}
        self.commit_log: list[int] = []
        self.page_requests = 0
        self.fail_on_commit = fail_on_commit
        self._commit_attempts = 0

    def batch(self) -> InMemoryWriteBatch:
        return InMemoryWriteBatch(self)

    async def get(self, collection: str, doc_id: str) -> DocumentSnapshot | None:
        data = self._collections.get(collection, {}).get(doc_id)
        if data is None:
            return None
        return DocumentSnapshot(id=doc_id, data=copy.deepcopy(data))

    async def list_page(
        self,
        collection: str,
        *,
        limit: int,
        start_after: str | None = None,
    ) -> list[DocumentSnapshot]:
        self.page_requests += 1
        docs = self._collections.get(collection, {})
        ids = sorted(doc_id for doc_id in docs if start_after is None or doc_id > start_after)
        return [DocumentSnapshot(id=doc_id, data=copy.deepcopy(docs[doc_id])) for doc_id in ids[:limit]]

    async def list_all(self, collection: str) -> list[DocumentSnapshot]:
        docs = self._collections.get(collection, {})
        return [DocumentSnapshot(id=doc_id, data=copy.deepcopy(docs[doc_id])) for doc_id in sorted(docs)]

    async def find(self, collection: str, field: str, value: Any) -> list[DocumentSnapshot]:
        return [snap for snap in await self.list_all(collection) if snap.data.get(field) == value]

    def count(self, collection: str) -> int:
        return len(self._collections.get(collection, {}))

    def ids(self, collection: str) -> list[str]:
        return sorted(self._collections.get(collection, {}))

    def insert(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        """Place a document directly, bypassing batches and the commit log."""
        self._collections.setdefault(collection, {})[doc_id] = copy.deepcopy(data)

    async def _apply(self, batch: WriteBatch) -> None:
        self._commit_attempts += 1
        if self.fail_on_commit is not None and self._commit_attempts == self.fail_on_commit:
            collection = batch.ops[0].collection if len(batch) else None
            raise StoreCommitError(collection, "commit", RuntimeError("injected failure"))

        now = datetime.datetime.now(datetime.UTC)
        for op in batch.ops:
            docs = self._collections.setdefault(op.collection, {})
            if op.kind == "delete":
                docs.pop(op.doc_id, None)
                continue
            data = copy.deepcopy(resolve_server_timestamps(op.data or {}, now))
            existing = docs.get(op.doc_id)
            if op.merge and existing is not None:
                docs[op.doc_id] = merge_document(existing, data)
            else:
                docs[op.doc_id] = data
        self.commit_log.append(len(batch))

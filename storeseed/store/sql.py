"""SQLAlchemy-backed document store.

All collections share the ``documents`` table keyed by ``(collection, doc_id)``
with the document body in a JSON column.  Each write batch runs in a single
transaction, so a failed commit leaves none of its operations applied.
"""

import datetime
import logging
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from sqlalchemy import delete, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from storeseed.errors import StoreCommitError
from storeseed.models.document import Document
from storeseed.store.base import (
    DocumentSnapshot,
    DocumentStore,
    WriteBatch,
    merge_document,
    resolve_server_timestamps,
)

logger = logging.getLogger(__name__)


def _to_json(value: Any) -> Any:
    """Convert *value* to plain JSON types (money as numbers, datetimes as ISO strings)."""
    if isinstance(value, Mapping):
        return {str(k): _to_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_json(v) for v in value]
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (datetime.datetime, datetime.date)):
        return value.isoformat()
    return value


class SqlWriteBatch(WriteBatch):
    def __init__(self, store: "SqlDocumentStore") -> None:
        super().__init__(store.max_batch_size)
        self._store = store

    async def commit(self) -> None:
        if not self._ops:
            return
        collection = self._ops[0].collection
        now = datetime.datetime.now(datetime.UTC)
        try:
            async with self._store.session_factory() as session, session.begin():
                for op in self._ops:
                    if op.kind == "delete":
                        await session.execute(
                            delete(Document).where(
                                Document.collection == op.collection,
                                Document.doc_id == op.doc_id,
                            )
                        )
                        continue

                    data = _to_json(resolve_server_timestamps(op.data or {}, now))
                    existing = await session.get(Document, (op.collection, op.doc_id))
                    if existing is None:
                        session.add(Document(collection=op.collection, doc_id=op.doc_id, data=data))
                    elif op.merge:
                        existing.data = merge_document(existing.data, data)
                    else:
                        existing.data = data
        except SQLAlchemyError as exc:
            logger.error("Batch commit of %d ops on '%s' failed: %s", len(self._ops), collection, exc)
            raise StoreCommitError(collection, "commit", exc) from exc


class SqlDocumentStore(DocumentStore):
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    def batch(self) -> SqlWriteBatch:
        return SqlWriteBatch(self)

    async def get(self, collection: str, doc_id: str) -> DocumentSnapshot | None:
        async with self.session_factory() as session:
            doc = await self._run(collection, "get", session.get(Document, (collection, doc_id)))
        if doc is None:
            return None
        return DocumentSnapshot(id=doc.doc_id, data=doc.data)

    async def list_page(
        self,
        collection: str,
        *,
        limit: int,
        start_after: str | None = None,
    ) -> list[DocumentSnapshot]:
        stmt = select(Document).where(Document.collection == collection)
        if start_after is not None:
            stmt = stmt.where(Document.doc_id > start_after)
        return await self._select(collection, stmt.order_by(Document.doc_id).limit(limit))

    async def list_all(self, collection: str) -> list[DocumentSnapshot]:
        stmt = select(Document).where(Document.collection == collection).order_by(Document.doc_id)
        return await self._select(collection, stmt)

    async def find(self, collection: str, field: str, value: Any) -> list[DocumentSnapshot]:
        stmt = (
            select(Document)
            .where(
                Document.collection == collection,
                Document.data[field].as_string() == str(value),
            )
            .order_by(Document.doc_id)
        )
        return await self._select(collection, stmt)

    async def ping(self) -> None:
        async with self.session_factory() as session:
            await session.execute(text("SELECT 1"))

    async def _select(self, collection: str, stmt: Any) -> list[DocumentSnapshot]:
        async with self.session_factory() as session:
            result = await self._run(collection, "query", session.execute(stmt))
            return [DocumentSnapshot(id=doc.doc_id, data=doc.data) for doc in result.scalars().all()]

    @staticmethod
    async def _run(collection: str, operation: str, awaitable: Any) -> Any:
        try:
            return await awaitable
        except SQLAlchemyError as exc:
            raise StoreCommitError(collection, operation, exc) from exc

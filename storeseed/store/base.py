"""Document store interface shared by every binding.

A store organises documents into named collections addressed by string id.
It offers per-document reads, cursor-paged listing ordered by document id,
single-field equality lookups, and write batches that apply a group of
set/delete operations atomically.  There are no multi-batch transactions.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Literal, NamedTuple

from pydantic import BaseModel

from storeseed.config import MAX_BATCH_SIZE


class _ServerTimestamp:
    """Sentinel replaced by the commit time when a batch is applied."""

    _instance: "_ServerTimestamp | None" = None

    def __new__(cls) -> "_ServerTimestamp":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP = _ServerTimestamp()


class DocumentSnapshot(BaseModel):
    id: str
    data: dict[str, Any]


class WriteOp(NamedTuple):
    kind: Literal["set", "delete"]
    collection: str
    doc_id: str
    data: dict[str, Any] | None
    merge: bool


def resolve_server_timestamps(data: Mapping[str, Any], now: datetime) -> dict[str, Any]:
    """Return a copy of *data* with every ``SERVER_TIMESTAMP`` replaced by *now*."""
    resolved: dict[str, Any] = {}
    for key, value in data.items():
        if value is SERVER_TIMESTAMP:
            resolved[key] = now
        elif isinstance(value, Mapping):
            resolved[key] = resolve_server_timestamps(value, now)
        else:
            resolved[key] = value
    return resolved


def merge_document(existing: Mapping[str, Any], incoming: Mapping[str, Any]) -> dict[str, Any]:
    """Merge *incoming* into *existing* the way an upsert-merge write does.

    Nested mappings present on both sides are merged recursively; any other
    incoming value replaces the stored one.  Fields absent from *incoming*
    are left untouched.
    """
    merged = dict(existing)
    for key, value in incoming.items():
        current = merged.get(key)
        if isinstance(value, Mapping) and isinstance(current, Mapping):
            merged[key] = merge_document(current, value)
        else:
            merged[key] = value
    return merged


class WriteBatch(ABC):
    """Accumulates set/delete operations and applies them in one commit."""

    def __init__(self, max_size: int = MAX_BATCH_SIZE) -> None:
        self.max_size = max_size
        self._ops: list[WriteOp] = []

    def __len__(self) -> int:
        return len(self._ops)

    @property
    def ops(self) -> list[WriteOp]:
        return list(self._ops)

    def set(
        self,
        collection: str,
        doc_id: str,
        data: Mapping[str, Any],
        *,
        merge: bool = True,
    ) -> None:
        self._append(WriteOp("set", collection, doc_id, dict(data), merge))

    def delete(self, collection: str, doc_id: str) -> None:
        self._append(WriteOp("delete", collection, doc_id, None, False))

    def _append(self, op: WriteOp) -> None:
        if len(self._ops) >= self.max_size:
            raise ValueError(f"Write batch is limited to {self.max_size} operations")
        self._ops.append(op)

    @abstractmethod
    async def commit(self) -> None:
        """Apply every queued operation atomically."""


class DocumentStore(ABC):
    max_batch_size: int = MAX_BATCH_SIZE

    @abstractmethod
    def batch(self) -> WriteBatch:
        """Return an empty write batch bound to this store."""

    @abstractmethod
    async def get(self, collection: str, doc_id: str) -> DocumentSnapshot | None:
        """Return one document, or ``None`` when it does not exist."""

    @abstractmethod
    async def list_page(
        self,
        collection: str,
        *,
        limit: int,
        start_after: str | None = None,
    ) -> list[DocumentSnapshot]:
        """Return up to *limit* documents ordered by id, strictly after *start_after*."""

    @abstractmethod
    async def list_all(self, collection: str) -> list[DocumentSnapshot]:
        """Return every document of *collection* ordered by id."""

    @abstractmethod
    async def find(self, collection: str, field: str, value: Any) -> list[DocumentSnapshot]:
        """Return documents whose top-level *field* equals *value*."""

    async def ping(self) -> None:
        """Raise if the backend is unreachable."""

    async def close(self) -> None:
        """Release backend resources."""

from storeseed.store.base import (
    SERVER_TIMESTAMP,
    DocumentSnapshot,
    DocumentStore,
    WriteBatch,
    merge_document,
    resolve_server_timestamps,
)
from storeseed.store.memory import InMemoryDocumentStore
from storeseed.store.sql import SqlDocumentStore

__all__ = [
    "SERVER_TIMESTAMP",
    "DocumentSnapshot",
    "DocumentStore",
    "WriteBatch",
    "merge_document",
    "resolve_server_timestamps",
    "InMemoryDocumentStore",
    "SqlDocumentStore",
]

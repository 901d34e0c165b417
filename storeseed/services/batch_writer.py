"""Chunked, sequential upsert-merge writes to one collection."""

import itertools
import logging
from collections.abc import Iterable
from typing import Any

from storeseed.schemas.reports import CollectionWriteResult
from storeseed.store.base import DocumentStore

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 400


class BatchWriter:
    """Commit ``(key, document)`` pairs in fixed-size chunks, one after another.

    *pairs* may be a lazy iterable: each chunk is fully materialised before it
    is committed, so an exception raised while producing a document prevents
    the whole chunk from being written.  There is no rollback across chunks;
    a failure leaves every earlier chunk committed.
    """

    def __init__(self, store: DocumentStore, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        if not 1 <= chunk_size <= store.max_batch_size:
            raise ValueError(f"chunk_size must be between 1 and {store.max_batch_size}, got {chunk_size}")
        self.store = store
        self.chunk_size = chunk_size

    async def write(
        self,
        collection: str,
        pairs: Iterable[tuple[str, dict[str, Any]]],
        *,
        label: str | None = None,
    ) -> CollectionWriteResult:
        label = label or collection
        iterator = iter(pairs)
        written = 0
        chunks = 0

        while chunk := list(itertools.islice(iterator, self.chunk_size)):
            batch = self.store.batch()
            for key, document in chunk:
                batch.set(collection, key, document, merge=True)
            await batch.commit()
            written += len(chunk)
            chunks += 1
            logger.info("%s: committed %d docs...", label, len(chunk))

        logger.info("%s: seeded %d docs to '%s'.", label, written, collection)
        return CollectionWriteResult(collection=collection, written=written, chunks=chunks)

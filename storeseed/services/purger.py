"""Remove user-owned documents whose owner is not preserved."""

import itertools
import logging
from collections.abc import Iterable

from storeseed.schemas.reports import PurgeResult
from storeseed.store.base import DocumentStore

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 500


class RelatedDataPurger:
    """Delete documents of a dependent collection not owned by a preserved user.

    The whole collection is read in one listing; dependent collections are
    assumed small.  Deletes are committed in chunks, one after another, and
    chunks already committed stay deleted if a later one fails.
    """

    def __init__(self, store: DocumentStore, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        if not 1 <= chunk_size <= store.max_batch_size:
            raise ValueError(f"chunk_size must be between 1 and {store.max_batch_size}, got {chunk_size}")
        self.store = store
        self.chunk_size = chunk_size

    async def purge(self, collection: str, preserve_user_ids: Iterable[str] = ()) -> PurgeResult:
        preserve = frozenset(preserve_user_ids)
        snapshots = await self.store.list_all(collection)
        doomed = iter([snap.id for snap in snapshots if snap.data.get("userId") not in preserve])

        deleted = 0
        while chunk := list(itertools.islice(doomed, self.chunk_size)):
            batch = self.store.batch()
            for doc_id in chunk:
                batch.delete(collection, doc_id)
            await batch.commit()
            deleted += len(chunk)

        if deleted:
            logger.info("%s: removed %d docs not owned by preserved users.", collection, deleted)
        else:
            logger.info("%s: nothing to remove.", collection)
        return PurgeResult(collection=collection, scanned=len(snapshots), deleted=deleted)

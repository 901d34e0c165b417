"""Page through a collection and delete everything except preserved ids."""

import logging
from collections.abc import Iterable

from storeseed.schemas.reports import DeleteResult
from storeseed.store.base import DocumentStore

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 500


class PaginatedDeleter:
    """Delete every document of a collection whose id is not preserved.

    Pages are read with an id cursor so preserved documents are never
    fetched twice.  The loop ends when a page holds nothing deletable
    (empty collection, or only preserved documents left) or when a page
    comes back shorter than ``page_size`` and the collection is exhausted.
    """

    def __init__(self, store: DocumentStore, page_size: int = DEFAULT_PAGE_SIZE) -> None:
        limit = store.max_batch_size
        if not 1 <= page_size <= limit:
            raise ValueError(f"page_size must be between 1 and {limit}, got {page_size}")
        self.store = store
        self.page_size = page_size

    async def delete_all(self, collection: str, preserve_ids: Iterable[str] = ()) -> DeleteResult:
        preserve = frozenset(preserve_ids)
        if preserve:
            logger.info("%s: preserving %s", collection, ", ".join(sorted(preserve)))

        deleted = 0
        preserved = 0
        iterations = 0
        cursor: str | None = None

        while True:
            iterations += 1
            page = await self.store.list_page(collection, limit=self.page_size, start_after=cursor)
            to_delete = [snap.id for snap in page if snap.id not in preserve]
            preserved += len(page) - len(to_delete)

            if not to_delete:
                break

            batch = self.store.batch()
            for doc_id in to_delete:
                batch.delete(collection, doc_id)
            await batch.commit()
            deleted += len(to_delete)
            logger.info("%s: deleted %d docs...", collection, len(to_delete))

            if len(page) < self.page_size:
                break
            cursor = page[-1].id

        logger.info(
            "%s: deleted %d docs, kept %d, in %d iteration(s).", collection, deleted, preserved, iterations
        )
        return DeleteResult(collection=collection, deleted=deleted, preserved=preserved, iterations=iterations)

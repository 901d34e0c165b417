"""Flush orchestration: wipe the primary collections, then orphaned user data."""

import logging
from collections.abc import Iterable

from storeseed.collections import FLUSH_COLLECTIONS, USER_RELATED_COLLECTIONS, USERS
from storeseed.schemas.reports import FlushReport
from storeseed.services.deleter import PaginatedDeleter
from storeseed.services.purger import RelatedDataPurger
from storeseed.store.base import DocumentStore

logger = logging.getLogger(__name__)


class FlushOrchestrator:
    def __init__(
        self,
        store: DocumentStore,
        deleter: PaginatedDeleter | None = None,
        purger: RelatedDataPurger | None = None,
    ) -> None:
        self.store = store
        self.deleter = deleter or PaginatedDeleter(store)
        self.purger = purger or RelatedDataPurger(store)

    async def run(self, preserve_user_ids: Iterable[str] = ()) -> FlushReport:
        """Flush every collection, keeping only the given users and what they own.

        Preserved ids apply to ``users`` only; every other primary collection
        is emptied.  Collections are processed one at a time.
        """
        preserve = sorted(set(preserve_user_ids))
        report = FlushReport(preserved_user_ids=preserve)

        for collection in FLUSH_COLLECTIONS:
            logger.info("Flushing %s...", collection)
            keep = preserve if collection == USERS else ()
            report.collections.append(await self.deleter.delete_all(collection, keep))

        for collection in USER_RELATED_COLLECTIONS:
            logger.info("Purging %s for users outside %s...", collection, preserve or "[]")
            report.related.append(await self.purger.purge(collection, preserve))

        logger.info(
            "Flush complete: %d docs deleted, %d related docs removed.",
            sum(r.deleted for r in report.collections),
            sum(r.deleted for r in report.related),
        )
        return report

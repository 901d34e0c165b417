"""Move a seeded user onto a new id, carrying the documents they own."""

import itertools
import logging

from storeseed.collections import USER_OWNED_COLLECTIONS, USERS
from storeseed.schemas.reports import ReassignReport
from storeseed.store.base import DocumentStore

logger = logging.getLogger(__name__)


async def _rewrite_owner(store: DocumentStore, collection: str, old_user_id: str, new_user_id: str) -> int:
    owned = iter(await store.find(collection, "userId", old_user_id))
    updated = 0
    while chunk := list(itertools.islice(owned, store.max_batch_size)):
        batch = store.batch()
        for snap in chunk:
            batch.set(collection, snap.id, {"userId": new_user_id}, merge=True)
        await batch.commit()
        updated += len(chunk)

    if updated:
        logger.info("%s: updated %d docs", collection, updated)
    else:
        logger.info('%s: no documents found with userId="%s"', collection, old_user_id)
    return updated


async def reassign_user_id(store: DocumentStore, old_user_id: str, new_user_id: str) -> ReassignReport:
    """Copy ``users/{old}`` to ``users/{new}`` and repoint every owned document.

    A missing user document is logged and skipped; owned documents are
    still rewritten.
    """
    if not old_user_id or not new_user_id:
        raise ValueError("Both the old and the new user id are required")
    if old_user_id == new_user_id:
        raise ValueError(f"User id is already {new_user_id}")

    logger.info("Reassigning documents from userId %s to %s", old_user_id, new_user_id)
    report = ReassignReport(old_user_id=old_user_id, new_user_id=new_user_id, user_moved=False)

    user = await store.get(USERS, old_user_id)
    if user is not None:
        batch = store.batch()
        batch.set(USERS, new_user_id, {**user.data, "userId": new_user_id}, merge=False)
        batch.delete(USERS, old_user_id)
        await batch.commit()
        report.user_moved = True
        logger.info("%s: moved document from %s to %s", USERS, old_user_id, new_user_id)
    else:
        logger.info("%s: no document found for %s", USERS, old_user_id)

    for collection in USER_OWNED_COLLECTIONS:
        report.updated[collection] = await _rewrite_owner(store, collection, old_user_id, new_user_id)
    return report

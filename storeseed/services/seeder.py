"""Seed orchestration: load every selected collection in dependency order.

Stages run ``users -> products -> discounts -> orders -> tickets -> replies``.
Orders come after users and products because order expansion needs both
reference indexes.  The first error stops the run at the current stage and
propagates; collections seeded by earlier stages stay written.
"""

import logging
from collections.abc import Callable, Iterable
from typing import Any

from storeseed.collections import ADDRESSES, SEED_COLLECTIONS, SEED_ORDER, SeedTarget
from storeseed.schemas.reports import CollectionWriteResult, SeedReport
from storeseed.services.addresses import extract_addresses
from storeseed.services.batch_writer import BatchWriter
from storeseed.services.documents import (
    discount_document,
    product_document,
    reply_document,
    ticket_document,
    user_document,
)
from storeseed.services.loader import SeedFileLoader
from storeseed.services.orders import build_order_document
from storeseed.services.reference_index import ReferenceIndex
from storeseed.store.base import DocumentStore

logger = logging.getLogger(__name__)

_LABELS: dict[SeedTarget, str] = {
    SeedTarget.USERS: "Users",
    SeedTarget.PRODUCTS: "Products",
    SeedTarget.DISCOUNTS: "Discounts",
    SeedTarget.ORDERS: "Orders",
    SeedTarget.TICKETS: "Support Tickets",
    SeedTarget.REPLIES: "Ticket Replies",
}

_BUILDERS: dict[SeedTarget, Callable[[Any], tuple[str, dict[str, Any]]]] = {
    SeedTarget.USERS: user_document,
    SeedTarget.PRODUCTS: product_document,
    SeedTarget.DISCOUNTS: discount_document,
    SeedTarget.TICKETS: ticket_document,
    SeedTarget.REPLIES: reply_document,
}


def select_targets(targets: Iterable[SeedTarget | str] | None) -> list[SeedTarget]:
    """Return the selected targets in dependency order; nothing selected means all."""
    chosen = {SeedTarget(t) for t in targets or ()}
    if not chosen:
        return list(SEED_ORDER)
    return [target for target in SEED_ORDER if target in chosen]


class SeedOrchestrator:
    def __init__(
        self,
        store: DocumentStore,
        loader: SeedFileLoader,
        writer: BatchWriter | None = None,
    ) -> None:
        self.store = store
        self.loader = loader
        self.writer = writer or BatchWriter(store)
        self._users: ReferenceIndex | None = None
        self._products: ReferenceIndex | None = None

    async def run(self, targets: Iterable[SeedTarget | str] | None = None) -> SeedReport:
        report = SeedReport()
        self._users = None
        self._products = None

        selected = select_targets(targets)
        for step, target in enumerate(selected, start=1):
            logger.info("[%d/%d] Seeding %s...", step, len(selected), target.value)
            await self._run_stage(target, report)

        logger.info("Seed complete: %s", ", ".join(f"{r.collection}={r.written}" for r in report.collections))
        return report

    async def _run_stage(self, target: SeedTarget, report: SeedReport) -> None:
        records = self.loader.load(target)
        collection = SEED_COLLECTIONS[target]
        label = _LABELS[target]

        if target is SeedTarget.ORDERS:
            users = self._users if self._users is not None else self._index_from_file(SeedTarget.USERS, "userId")
            products = (
                self._products if self._products is not None else self._index_from_file(SeedTarget.PRODUCTS, "sku")
            )
            pairs = (build_order_document(order, products, users) for order in records)
        else:
            pairs = map(_BUILDERS[target], records)

        report.collections.append(await self.writer.write(collection, pairs, label=label))

        if target is SeedTarget.USERS:
            self._users = ReferenceIndex.from_records(records, "userId")
            report.collections.append(await self.seed_addresses(records))
        elif target is SeedTarget.PRODUCTS:
            self._products = ReferenceIndex.from_records(records, "sku")

    async def seed_addresses(self, users: Iterable[Any]) -> CollectionWriteResult:
        """Write the addresses nested on *users* to the standalone addresses collection."""
        pairs = (pair for user in users for pair in extract_addresses(user))
        return await self.writer.write(ADDRESSES, pairs, label="Addresses")

    def _index_from_file(self, target: SeedTarget, key_field: str) -> ReferenceIndex:
        """Build a reference index straight from the seed file when its stage did not run."""
        logger.info("Building %s index from %s", target.value, self.loader.path_for(target).name)
        return ReferenceIndex.from_records(self.loader.load(target), key_field)

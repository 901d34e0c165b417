from decimal import Decimal

import pytest

from storeseed.collections import (
    ADDRESSES,
    DISCOUNTS,
    ORDERS,
    PRODUCTS,
    SUPPORT_TICKETS,
    TICKET_REPLIES,
    USERS,
    SeedTarget,
)
from storeseed.errors import (
    InvalidValueError,
    MalformedInputError,
    MissingRequiredFieldError,
    UnknownReferenceError,
)
from storeseed.services.batch_writer import BatchWriter
from storeseed.services.seeder import SeedOrchestrator, select_targets

_TIMESTAMP_FIELDS = {"createdAt", "updatedAt", "placedAt"}


def _without_timestamps(data: dict) -> dict:
    return {k: v for k, v in data.items() if k not in _TIMESTAMP_FIELDS}


async def _snapshot(store, collection):
    return {snap.id: _without_timestamps(snap.data) for snap in await store.list_all(collection)}


class TestSelectTargets:
    def test_nothing_selected_means_all(self):
        assert select_targets(None) == list(SeedTarget)
        assert select_targets([]) == list(SeedTarget)

    def test_selection_follows_dependency_order(self):
        assert select_targets(["orders", "users", "replies"]) == [
            SeedTarget.USERS,
            SeedTarget.ORDERS,
            SeedTarget.REPLIES,
        ]

    def test_unknown_target_rejected(self):
        with pytest.raises(ValueError):
            select_targets(["widgets"])


class TestFullSeed:
    @pytest.mark.asyncio
    async def test_every_collection_written(self, store, loader):
        report = await SeedOrchestrator(store, loader).run()

        assert [r.collection for r in report.collections] == [
            USERS,
            ADDRESSES,
            PRODUCTS,
            DISCOUNTS,
            ORDERS,
            SUPPORT_TICKETS,
            TICKET_REPLIES,
        ]
        assert store.ids(USERS) == ["U1", "U2"]
        assert store.ids(ADDRESSES) == ["U1-addr-0", "U1-addr-1"]
        assert store.ids(PRODUCTS) == ["A1", "B2"]
        assert store.ids(DISCOUNTS) == ["WELCOME10"]
        assert store.ids(ORDERS) == ["O1", "O2"]
        assert store.ids(SUPPORT_TICKETS) == ["T1"]
        assert store.ids(TICKET_REPLIES) == ["R1"]
        assert report.written(USERS) == 2

    @pytest.mark.asyncio
    async def test_example_order_totals(self, store, loader):
        await SeedOrchestrator(store, loader).run()
        order = (await store.get(ORDERS, "O1")).data
        assert order["subtotalUSD"] == Decimal("30.00")
        assert order["taxUSD"] == Decimal("3.00")
        assert order["totalUSD"] == Decimal("35.00")
        assert order["customerSnapshot"] == {"name": "Una Tester", "email": "una@example.com"}

    @pytest.mark.asyncio
    async def test_server_timestamps_resolved(self, store, loader):
        await SeedOrchestrator(store, loader).run()
        product = (await store.get(PRODUCTS, "A1")).data
        assert product["createdAt"].tzinfo is not None

    @pytest.mark.asyncio
    async def test_seeding_twice_is_idempotent(self, store, loader):
        orchestrator = SeedOrchestrator(store, loader)
        await orchestrator.run()
        first = {c: await _snapshot(store, c) for c in (USERS, ADDRESSES, PRODUCTS, ORDERS)}

        await orchestrator.run()
        second = {c: await _snapshot(store, c) for c in (USERS, ADDRESSES, PRODUCTS, ORDERS)}

        assert first == second

    @pytest.mark.asyncio
    async def test_reseed_keeps_fields_added_outside_the_seed(self, store, loader):
        await SeedOrchestrator(store, loader).run([SeedTarget.PRODUCTS])
        batch = store.batch()
        batch.set(PRODUCTS, "A1", {"rating": 4.5})
        await batch.commit()

        await SeedOrchestrator(store, loader).run([SeedTarget.PRODUCTS])
        assert (await store.get(PRODUCTS, "A1")).data["rating"] == 4.5

    @pytest.mark.asyncio
    async def test_uses_configured_writer(self, store, loader):
        await SeedOrchestrator(store, loader, BatchWriter(store, chunk_size=1)).run([SeedTarget.USERS])
        # two users, then two addresses, one document per commit
        assert store.commit_log == [1, 1, 1, 1]


class TestSubsetRuns:
    @pytest.mark.asyncio
    async def test_only_selected_collections_written(self, store, loader):
        await SeedOrchestrator(store, loader).run([SeedTarget.PRODUCTS])
        assert store.count(PRODUCTS) == 2
        assert store.count(USERS) == 0
        assert store.count(ORDERS) == 0

    @pytest.mark.asyncio
    async def test_orders_alone_build_indexes_from_seed_files(self, store, loader):
        report = await SeedOrchestrator(store, loader).run([SeedTarget.ORDERS])
        assert [r.collection for r in report.collections] == [ORDERS]
        assert store.ids(ORDERS) == ["O1", "O2"]
        assert store.count(USERS) == 0
        assert store.count(PRODUCTS) == 0


class TestFailures:
    @pytest.mark.asyncio
    async def test_unknown_sku_order_not_written(self, store, seed_dir, seed_data, write_seed, loader):
        write_seed(
            seed_dir,
            SeedTarget.ORDERS,
            [{"orderId": "O9", "userId": "U1", "items": [{"sku": "GHOST", "qty": 1}]}],
        )
        with pytest.raises(UnknownReferenceError):
            await SeedOrchestrator(store, loader).run()
        assert await store.get(ORDERS, "O9") is None
        # earlier stages stay written; later ones never ran
        assert store.count(PRODUCTS) == 2
        assert store.count(SUPPORT_TICKETS) == 0

    @pytest.mark.asyncio
    async def test_null_inventory_halts_at_products(self, store, seed_dir, seed_data, write_seed, loader):
        products = seed_data[SeedTarget.PRODUCTS]
        products[1]["inventory"] = None
        write_seed(seed_dir, SeedTarget.PRODUCTS, products)

        with pytest.raises(MissingRequiredFieldError):
            await SeedOrchestrator(store, loader).run()
        assert store.count(USERS) == 2
        assert store.count(PRODUCTS) == 0
        assert store.count(ORDERS) == 0

    @pytest.mark.asyncio
    async def test_negative_inventory_rejected(self, store, seed_dir, seed_data, write_seed, loader):
        products = seed_data[SeedTarget.PRODUCTS]
        products[0]["inventory"] = -1
        write_seed(seed_dir, SeedTarget.PRODUCTS, products)

        with pytest.raises(InvalidValueError):
            await SeedOrchestrator(store, loader).run([SeedTarget.PRODUCTS])
        assert store.count(PRODUCTS) == 0

    @pytest.mark.asyncio
    async def test_numeric_sku_rejected_before_write(self, store, seed_dir, seed_data, write_seed, loader):
        products = seed_data[SeedTarget.PRODUCTS]
        products.append({"sku": 1001, "name": "Numbered", "priceUSD": 5, "inventory": 1})
        write_seed(seed_dir, SeedTarget.PRODUCTS, products)

        with pytest.raises(InvalidValueError) as exc_info:
            await SeedOrchestrator(store, loader).run([SeedTarget.PRODUCTS])
        assert exc_info.value.field == "sku"
        assert store.count(PRODUCTS) == 0
        # ids stay comparable, so paging over the collection still works
        assert await store.list_page(PRODUCTS, limit=10) == []

    @pytest.mark.asyncio
    async def test_malformed_file(self, store, seed_dir, write_seed, loader):
        write_seed(seed_dir, SeedTarget.DISCOUNTS, {"code": "X"})
        with pytest.raises(MalformedInputError):
            await SeedOrchestrator(store, loader).run([SeedTarget.DISCOUNTS])

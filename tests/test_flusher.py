import pytest

from storeseed.collections import FLUSH_COLLECTIONS, USER_RELATED_COLLECTIONS
from storeseed.services.deleter import PaginatedDeleter
from storeseed.services.flusher import FlushOrchestrator
from storeseed.services.purger import RelatedDataPurger
from storeseed.services.seeder import SeedOrchestrator


@pytest.fixture
async def seeded(store, loader):
    await SeedOrchestrator(store, loader).run()
    store.insert("paymentMethods", "pm-1", {"userId": "U1", "brand": "visa"})
    store.insert("paymentMethods", "pm-2", {"userId": "U2", "brand": "amex"})
    store.insert("settings", "storefront", {"theme": "dark"})
    store.insert("content", "home", {"hero": "Spring sale"})
    store.insert("products", "A1", {"sku": "A1"})
    return store


@pytest.mark.asyncio
async def test_only_preserved_user_survives(seeded):
    await FlushOrchestrator(seeded).run(["U1"])
    assert seeded.ids("users") == ["U1"]
    assert seeded.count("addresses") == 0
    assert seeded.count("paymentMethods") == 0


@pytest.mark.asyncio
async def test_primary_collections_emptied(seeded):
    await FlushOrchestrator(seeded).run(["U1"])
    for collection in FLUSH_COLLECTIONS:
        if collection != "users":
            assert seeded.count(collection) == 0, collection


@pytest.mark.asyncio
async def test_collections_outside_the_flush_list_untouched(seeded):
    await FlushOrchestrator(seeded).run(["U1"])
    assert seeded.ids("supportTickets") == ["T1"]
    assert seeded.ids("ticketReplies") == ["R1"]


@pytest.mark.asyncio
async def test_report_lists_collections_in_order(seeded):
    report = await FlushOrchestrator(seeded).run(["U1"])
    assert [r.collection for r in report.collections] == list(FLUSH_COLLECTIONS)
    assert [r.collection for r in report.related] == list(USER_RELATED_COLLECTIONS)
    assert report.preserved_user_ids == ["U1"]
    users = next(r for r in report.collections if r.collection == "users")
    assert users.deleted == 1
    assert users.preserved == 1


@pytest.mark.asyncio
async def test_no_preserve_ids_deletes_all_users(seeded):
    await FlushOrchestrator(seeded).run()
    assert seeded.count("users") == 0


@pytest.mark.asyncio
async def test_preserve_set_is_per_call(seeded):
    orchestrator = FlushOrchestrator(seeded)
    await orchestrator.run(["U1", "U2"])
    assert seeded.ids("users") == ["U1", "U2"]
    await orchestrator.run(["U2"])
    assert seeded.ids("users") == ["U2"]


@pytest.mark.asyncio
async def test_flush_is_idempotent(seeded):
    orchestrator = FlushOrchestrator(seeded, PaginatedDeleter(seeded, page_size=1))
    await orchestrator.run(["U1"])
    second = await orchestrator.run(["U1"])
    assert sum(r.deleted for r in second.collections) == 0
    assert sum(r.deleted for r in second.related) == 0
    assert seeded.ids("users") == ["U1"]


class _KeepEverythingDeleter(PaginatedDeleter):
    async def delete_all(self, collection, preserve_ids=()):
        everything = [snap.id for snap in await self.store.list_all(collection)]
        return await super().delete_all(collection, preserve_ids=everything)


@pytest.mark.asyncio
async def test_related_data_of_preserved_user_survives_purge(seeded):
    orchestrator = FlushOrchestrator(seeded, _KeepEverythingDeleter(seeded), RelatedDataPurger(seeded))
    report = await orchestrator.run(["U1"])
    assert seeded.ids("addresses") == ["U1-addr-0", "U1-addr-1"]
    assert seeded.ids("paymentMethods") == ["pm-1"]
    payment = next(r for r in report.related if r.collection == "paymentMethods")
    assert payment.deleted == 1
    for collection in USER_RELATED_COLLECTIONS:
        remaining = await seeded.list_all(collection)
        assert remaining
        assert all(snap.data.get("userId") == "U1" for snap in remaining)

"""Shared pytest fixtures for the StoreSeed test suite.

The environment setup at module level runs at collection time, before any
``storeseed.*`` module is imported, so pydantic-settings picks up the test
values rather than a developer ``.env``.

Fixtures
--------
* ``store`` (function): empty in-memory document store.
* ``seed_data`` (function): representative records for every seed target.
* ``seed_dir`` (function): ``seed_data`` written as seed files under ``tmp_path``.
* ``loader`` (function): ``SeedFileLoader`` over ``seed_dir``.
* ``sql_store`` (function): ``SqlDocumentStore`` on a throwaway SQLite file.
* ``async_client`` (function): httpx client over the full app, wired to ``store``.
"""

import copy
import json
import os
from collections.abc import AsyncGenerator
from pathlib import Path
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

ADMIN_KEY = "test-admin-key"

# Override (not setdefault) so tests never touch a real database.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ADMIN_API_KEY"] = ADMIN_KEY
os.environ["STORE_BACKEND"] = "memory"

from storeseed.collections import SEED_FILES, SeedTarget  # noqa: E402
from storeseed.services.loader import SeedFileLoader  # noqa: E402
from storeseed.store.memory import InMemoryDocumentStore  # noqa: E402

PRESERVED_USER = "U1"

SEED_DATA: dict[SeedTarget, list[dict[str, Any]]] = {
    SeedTarget.USERS: [
        {
            "userId": "U1",
            "email": "una@example.com",
            "name": "Una Tester",
            "addresses": [
                {"label": "default", "line1": "1 Main St", "city": "Austin", "region": "TX", "postalCode": "73301"},
                {"label": "billing", "line1": "PO Box 9", "city": "Austin", "state": "TX", "country": "US"},
            ],
        },
        {"userId": "U2", "email": "ben@example.com", "name": "Ben Shopper"},
    ],
    SeedTarget.PRODUCTS: [
        {"sku": "A1", "name": "Canvas Tote", "category": "Bags", "priceUSD": 10, "inventory": 5},
        {
            "sku": "B2",
            "name": "Steel Bottle",
            "category": "Outdoor Gear",
            "priceUSD": 24.99,
            "inventory": 0,
            "imageUrl": "https://img.example.com/b2.jpg",
        },
    ],
    SeedTarget.DISCOUNTS: [
        {"code": "WELCOME10", "scope": "site-wide", "value": 10, "validFrom": "2024-01-01"},
    ],
    SeedTarget.ORDERS: [
        {
            "orderId": "O1",
            "userId": "U1",
            "items": [{"sku": "A1", "qty": 3}],
            "shippingUSD": 2,
            "taxRate": 0.1,
        },
        {
            "orderId": "O2",
            "userId": "U2",
            "items": [{"sku": "B2", "qty": 2}, {"sku": "A1", "qty": 1}],
            "placedAt": "2025-04-02T09:10:00Z",
            "status": "shipped",
        },
    ],
    SeedTarget.TICKETS: [
        {"id": "T1", "userId": "U1", "subject": "Where is my order?", "createdAt": "2025-03-18T10:00:00Z"},
    ],
    SeedTarget.REPLIES: [
        {"id": "R1", "ticketId": "T1", "userId": "U1", "message": "Any update?"},
    ],
}


def write_seed_file(directory: Path, target: SeedTarget, records: Any) -> Path:
    path = directory / SEED_FILES[target]
    path.write_text(json.dumps(records), encoding="utf-8")
    return path


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def seed_data() -> dict[SeedTarget, list[dict[str, Any]]]:
    return copy.deepcopy(SEED_DATA)


@pytest.fixture
def seed_dir(tmp_path: Path, seed_data: dict[SeedTarget, list[dict[str, Any]]]) -> Path:
    directory = tmp_path / "seed"
    directory.mkdir()
    for target, records in seed_data.items():
        write_seed_file(directory, target, records)
    return directory


@pytest.fixture
def loader(seed_dir: Path) -> SeedFileLoader:
    return SeedFileLoader(seed_dir)


@pytest.fixture
async def sql_store(tmp_path: Path) -> AsyncGenerator[Any]:
    """SQL document store on a per-test SQLite database with the schema created."""
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

    from storeseed.models.base import Base
    from storeseed.store.sql import SqlDocumentStore

    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'store.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield SqlDocumentStore(async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False))

    await engine.dispose()


@pytest.fixture
async def async_client(store: InMemoryDocumentStore, seed_dir: Path) -> AsyncGenerator[AsyncClient]:
    """httpx.AsyncClient that drives the full FastAPI app against ``store``.

    The ASGI lifespan is not run, so no database connection is attempted.
    """
    from storeseed.dependencies import get_loader, get_store
    from storeseed.main import app

    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_loader] = lambda: SeedFileLoader(seed_dir)
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"X-Admin-Key": ADMIN_KEY}


@pytest.fixture
def write_seed():
    """Return a helper that writes one seed file: ``write_seed(directory, target, records)``."""
    return write_seed_file

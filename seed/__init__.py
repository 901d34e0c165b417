"""Command-line entry points for seeding and maintaining the document store.

    python -m seed [--users] [--products] ...   seed collections
    python -m seed.flush [--yes]                delete seeded data
    python -m seed.reassign NEW_UID SEEDED_UID  move a seeded user to a new id
    python -m seed.discounts                    regenerate category discounts

Requires DATABASE_URL (or a .env file); STORE_BACKEND=memory gives a dry run.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from storeseed.config import settings
from storeseed.store.base import DocumentStore


def configure_logging() -> None:
    logging.basicConfig(level=settings.log_level.upper(), format="%(message)s")


def banner(title: str) -> None:
    print(title)
    print("=" * 50)


@asynccontextmanager
async def open_store() -> AsyncGenerator[DocumentStore]:
    """Yield the configured store and dispose the engine afterwards."""
    from storeseed.database import AsyncSessionLocal, engine
    from storeseed.store.memory import InMemoryDocumentStore
    from storeseed.store.sql import SqlDocumentStore

    if settings.store_backend == "memory":
        print("Using the in-memory store; nothing will be persisted.")
        yield InMemoryDocumentStore()
        return
    try:
        yield SqlDocumentStore(AsyncSessionLocal)
    finally:
        await engine.dispose()

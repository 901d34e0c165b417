"""FastAPI dependencies: the configured document store, seed loader and admin-key guard."""

import secrets
from functools import lru_cache

from fastapi import HTTPException, Security, status
from fastapi.security import APIKeyHeader

from storeseed.config import settings
from storeseed.database import AsyncSessionLocal
from storeseed.services.loader import SeedFileLoader
from storeseed.store.base import DocumentStore
from storeseed.store.memory import InMemoryDocumentStore
from storeseed.store.sql import SqlDocumentStore

__all__ = ["get_store", "get_loader", "require_admin_key"]

_admin_key_header = APIKeyHeader(
    name="X-Admin-Key",
    scheme_name="AdminKeyAuth",
    description="Value of `ADMIN_API_KEY`. Admin routes are disabled when no key is configured.",
    auto_error=False,
)


@lru_cache(maxsize=1)
def _memory_store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


def get_store() -> DocumentStore:
    """Return the store selected by ``STORE_BACKEND``.

    The memory backend is a process-wide singleton so consecutive requests
    see each other's writes.
    """
    if settings.store_backend == "memory":
        return _memory_store()
    return SqlDocumentStore(AsyncSessionLocal)


def get_loader() -> SeedFileLoader:
    return SeedFileLoader(settings.seed_data_dir)


async def require_admin_key(api_key: str | None = Security(_admin_key_header)) -> None:  # noqa: B008
    """Reject the request with ``HTTP 403`` unless ``X-Admin-Key`` matches the configured key."""
    expected = settings.admin_api_key
    if not expected:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin API is disabled",
        )
    if api_key is None or not secrets.compare_digest(api_key.encode(), expected.encode()):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid admin key",
        )

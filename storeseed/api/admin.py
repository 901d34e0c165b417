"""Admin endpoints that run the seed and flush pipelines against the configured store."""

from fastapi import APIRouter, Body, Depends

from storeseed.config import settings
from storeseed.dependencies import get_loader, get_store, require_admin_key
from storeseed.schemas.admin import SeedRequest
from storeseed.schemas.common import ErrorResponse
from storeseed.schemas.reports import FlushReport, SeedReport
from storeseed.services.batch_writer import BatchWriter
from storeseed.services.deleter import PaginatedDeleter
from storeseed.services.flusher import FlushOrchestrator
from storeseed.services.loader import SeedFileLoader
from storeseed.services.purger import RelatedDataPurger
from storeseed.services.seeder import SeedOrchestrator
from storeseed.store.base import DocumentStore

router = APIRouter(
    prefix="/admin",
    tags=["Admin"],
    dependencies=[Depends(require_admin_key)],
    responses={
        403: {"model": ErrorResponse, "description": "Missing or invalid admin key"},
        422: {"model": ErrorResponse, "description": "Seed data failed validation"},
        502: {"model": ErrorResponse, "description": "Document store rejected a write"},
    },
)


@router.post("/seed", response_model=SeedReport)
async def seed(
    body: SeedRequest | None = Body(default=None),  # noqa: B008
    store: DocumentStore = Depends(get_store),  # noqa: B008
    loader: SeedFileLoader = Depends(get_loader),  # noqa: B008
) -> SeedReport:
    """Seed the selected collections (all when none are given) from the seed files.

    Stops at the first invalid record; collections written before it stay written.
    """
    writer = BatchWriter(store, settings.seed_chunk_size)
    orchestrator = SeedOrchestrator(store, loader, writer)
    return await orchestrator.run(body.collections if body else None)


@router.post("/flush", response_model=FlushReport)
async def flush(store: DocumentStore = Depends(get_store)) -> FlushReport:  # noqa: B008
    """Delete all seeded data except the preserved user and what they own."""
    orchestrator = FlushOrchestrator(
        store,
        PaginatedDeleter(store, settings.delete_page_size),
        RelatedDataPurger(store, settings.purge_chunk_size),
    )
    return await orchestrator.run([settings.preserve_user_id])

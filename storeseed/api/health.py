"""Health check endpoint; always answers 200 so it can serve as a liveness probe."""

import logging

from fastapi import APIRouter, Depends

from storeseed.config import settings
from storeseed.dependencies import get_store
from storeseed.schemas.health import HealthResponse
from storeseed.store.base import DocumentStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
async def health(store: DocumentStore = Depends(get_store)) -> HealthResponse:  # noqa: B008
    try:
        await store.ping()
        store_status = "connected"
        app_status = "ok"
    except Exception as exc:
        logger.warning("Store ping failed: %s", exc)
        store_status = "disconnected"
        app_status = "degraded"

    return HealthResponse(
        status=app_status,
        store=store_status,
        backend=settings.store_backend,
        version=settings.version,
        built_by=settings.app_name,
    )

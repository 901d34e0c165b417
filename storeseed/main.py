import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException

from storeseed.api.router import api_router
from storeseed.config import settings
from storeseed.database import engine
from storeseed.errors import StoreSeedError
from storeseed.middleware.access_log import AccessLogMiddleware
from storeseed.middleware.error_handler import (
    http_exception_handler,
    storeseed_error_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from storeseed.middleware.request_id import RequestIdMiddleware

logger = logging.getLogger(__name__)

_OPENAPI_TAGS = [
    {"name": "Health", "description": "Health check endpoints"},
    {"name": "Admin", "description": "Seed and flush the document store"},
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    # Startup: verify database connection when the SQL store is in use
    if settings.store_backend == "sql":
        async with engine.connect() as conn:
            await conn.run_sync(lambda _: None)
    logger.info("%s %s started with the %s store", settings.app_name, settings.version, settings.store_backend)
    yield
    # Shutdown: dispose all connections
    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    description="Seed and flush tooling for the storefront document store",
    version=settings.version,
    debug=settings.debug,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=_OPENAPI_TAGS,
)

# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------

app.add_exception_handler(HTTPException, http_exception_handler)  # type: ignore[arg-type]
app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
app.add_exception_handler(StoreSeedError, storeseed_error_handler)  # type: ignore[arg-type]
app.add_exception_handler(Exception, unhandled_exception_handler)

# ---------------------------------------------------------------------------
# Middleware (Starlette LIFO: last add_middleware call runs outermost)
# ---------------------------------------------------------------------------

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Reads REQUEST_ID_CTX, so it must run inside RequestIdMiddleware.
app.add_middleware(AccessLogMiddleware)

app.add_middleware(RequestIdMiddleware)

app.include_router(api_router)

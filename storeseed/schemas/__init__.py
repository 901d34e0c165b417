from .admin import SeedRequest
from .common import ErrorCode, ErrorDetail, ErrorResponse
from .health import HealthResponse
from .orders import CustomerSnapshot, LineItem, OrderTotals
from .reports import (
    CollectionWriteResult,
    DeleteResult,
    DiscountRefreshReport,
    FlushReport,
    PurgeResult,
    ReassignReport,
    SeedReport,
)

__all__ = [
    # admin
    "SeedRequest",
    # common
    "ErrorDetail",
    "ErrorCode",
    "ErrorResponse",
    # health
    "HealthResponse",
    # orders
    "LineItem",
    "OrderTotals",
    "CustomerSnapshot",
    # reports
    "CollectionWriteResult",
    "SeedReport",
    "DeleteResult",
    "PurgeResult",
    "FlushReport",
    "ReassignReport",
    "DiscountRefreshReport",
]

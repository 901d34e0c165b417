from storeseed.services.batch_writer import BatchWriter
from storeseed.services.deleter import PaginatedDeleter
from storeseed.services.discounts import (
    build_category_discounts,
    collect_categories,
    refresh_discount_file,
)
from storeseed.services.flusher import FlushOrchestrator
from storeseed.services.loader import SeedFileLoader
from storeseed.services.orders import build_order_document, compute_totals, expand_line_items
from storeseed.services.purger import RelatedDataPurger
from storeseed.services.reassign import reassign_user_id
from storeseed.services.reference_index import ReferenceIndex
from storeseed.services.seeder import SeedOrchestrator, select_targets

__all__ = [
    # seed
    "BatchWriter",
    "ReferenceIndex",
    "SeedFileLoader",
    "SeedOrchestrator",
    "build_order_document",
    "compute_totals",
    "expand_line_items",
    "select_targets",
    # flush
    "FlushOrchestrator",
    "PaginatedDeleter",
    "RelatedDataPurger",
    # maintenance
    "build_category_discounts",
    "collect_categories",
    "reassign_user_id",
    "refresh_discount_file",
]

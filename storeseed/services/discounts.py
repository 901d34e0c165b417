"""Regenerate category-scoped discounts from the categories in the product catalog."""

import json
import logging
import re
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from storeseed.collections import PRODUCTS
from storeseed.errors import InvalidValueError
from storeseed.schemas.reports import DiscountRefreshReport
from storeseed.services.loader import SeedFileLoader
from storeseed.store.base import DocumentStore

logger = logging.getLogger(__name__)

VALID_FROM = "2024-01-01"
VALID_UNTIL = "2026-12-31"
KEPT_SCOPES = ("site-wide", "item")

_NON_ALNUM = re.compile(r"[^A-Z0-9]")


async def collect_categories(store: DocumentStore) -> list[str]:
    """Sorted distinct ``category`` values across all products."""
    categories = {snap.data.get("category") for snap in await store.list_all(PRODUCTS)}
    return sorted(c for c in categories if c)


def category_code(category: str, index: int) -> str:
    return _NON_ALNUM.sub("", category.upper())[:10] + str(10 + index * 5)


def build_category_discounts(categories: Iterable[str]) -> list[dict[str, Any]]:
    discounts = []
    for index, category in enumerate(categories):
        code = category_code(category, index)
        tier = index % 3
        discounts.append(
            {
                "id": code,
                "code": code,
                "type": "percentage",
                "value": 15 + tier * 5,
                "description": f"Discount on {category}",
                "category": category,
                "minPurchaseUSD": 30 + tier * 20,
                "maxDiscountUSD": 50 + tier * 25,
                "validFrom": VALID_FROM,
                "validUntil": VALID_UNTIL,
                "usageLimit": 500 + index * 100,
                "usageCount": 0,
                "isActive": True,
                "stackable": True,
                "scope": "category",
            }
        )
    return discounts


async def refresh_discount_file(store: DocumentStore, path: Path) -> DiscountRefreshReport:
    """Rewrite the discount seed file with one discount per product category.

    Site-wide discounts come first, then the regenerated category discounts,
    then item discounts.  Discounts with any other scope are dropped.
    """
    categories = await collect_categories(store)
    if not categories:
        raise InvalidValueError("Product", "category", None, reason="No categories found in products")
    logger.info("Found categories: %s", ", ".join(categories))

    existing = SeedFileLoader(path.parent).load_path(path)
    site_wide = [d for d in existing if isinstance(d, dict) and d.get("scope") == "site-wide"]
    items = [d for d in existing if isinstance(d, dict) and d.get("scope") == "item"]
    category_discounts = build_category_discounts(categories)

    updated = [*site_wide, *category_discounts, *items]
    path.write_text(json.dumps(updated, indent=2) + "\n", encoding="utf-8")

    for discount in category_discounts:
        logger.info("  - %s: %d%% off %s", discount["code"], discount["value"], discount["category"])
    logger.info("Updated %s with %d category-specific codes", path.name, len(category_discounts))
    return DiscountRefreshReport(
        categories=categories,
        category_discounts=len(category_discounts),
        total_discounts=len(updated),
    )

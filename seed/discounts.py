"""Regenerate the category discounts in the discount seed file.

Reads product categories from the store, so seed products first. Afterwards
run ``python -m seed --discounts`` to load the new codes.
"""

import asyncio
import sys

from seed import banner, configure_logging, open_store
from storeseed.collections import SEED_FILES, SeedTarget
from storeseed.config import settings
from storeseed.errors import StoreSeedError
from storeseed.services.discounts import refresh_discount_file


async def main() -> int:
    configure_logging()
    banner("StoreSeed Discount Categories")
    path = settings.seed_data_dir / SEED_FILES[SeedTarget.DISCOUNTS]

    async with open_store() as store:
        try:
            report = await refresh_discount_file(store, path)
        except StoreSeedError as exc:
            print(f"\n✗ Discount refresh failed: {exc}", file=sys.stderr)
            return 1

    print(f"\n✓ Wrote {report.total_discounts} discounts ({report.category_discounts} category codes) to {path}")
    print("\nRun: python -m seed --discounts")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))

"""Seed the document store from the JSON files in ``SEED_DATA_DIR``.

Run as:
    python -m seed                      # every collection
    python -m seed --products --orders  # only the selected ones
"""

import argparse
import asyncio
import sys

from seed import banner, configure_logging, open_store
from storeseed.collections import SEED_ORDER
from storeseed.config import settings
from storeseed.errors import StoreSeedError
from storeseed.services.batch_writer import BatchWriter
from storeseed.services.loader import SeedFileLoader
from storeseed.services.seeder import SeedOrchestrator


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="python -m seed",
        description="Seed the document store. With no flags every collection is seeded.",
    )
    for target in SEED_ORDER:
        parser.add_argument(f"--{target.value}", action="store_true", help=f"Seed {target.value}")
    return parser.parse_args(argv)


async def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    targets = [target for target in SEED_ORDER if getattr(args, target.value)]

    configure_logging()
    banner("StoreSeed Seed Script")
    print(f"Seed files: {settings.seed_data_dir}")

    async with open_store() as store:
        orchestrator = SeedOrchestrator(
            store,
            SeedFileLoader(settings.seed_data_dir),
            BatchWriter(store, settings.seed_chunk_size),
        )
        try:
            report = await orchestrator.run(targets)
        except StoreSeedError as exc:
            print(f"\n✗ Seed failed: {exc}", file=sys.stderr)
            return 1

    print()
    for result in report.collections:
        print(f"  ✓ {result.collection}: {result.written} docs in {result.chunks} chunk(s)")
    print("\n✓ Seed complete!")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))

"""Delete seeded data from every collection except the preserved user.

Run as:
    python -m seed.flush        # waits 3 seconds so the run can be cancelled
    python -m seed.flush --yes  # no wait
"""

import argparse
import asyncio
import sys

from seed import banner, configure_logging, open_store
from storeseed.collections import FLUSH_COLLECTIONS
from storeseed.config import settings
from storeseed.errors import StoreSeedError
from storeseed.services.deleter import PaginatedDeleter
from storeseed.services.flusher import FlushOrchestrator
from storeseed.services.purger import RelatedDataPurger

CANCEL_WINDOW_SECONDS = 3


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="python -m seed.flush", description=__doc__.splitlines()[0])
    parser.add_argument("--yes", action="store_true", help="Skip the cancel window")
    return parser.parse_args(argv)


async def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging()
    banner("StoreSeed Flush Script")
    print(f"⚠ This deletes ALL data in: {', '.join(FLUSH_COLLECTIONS)}")
    print(f"  Preserving user: {settings.preserve_user_id}")

    if not args.yes:
        print(f"\nStarting in {CANCEL_WINDOW_SECONDS} seconds. Press Ctrl+C to cancel.")
        await asyncio.sleep(CANCEL_WINDOW_SECONDS)

    async with open_store() as store:
        orchestrator = FlushOrchestrator(
            store,
            PaginatedDeleter(store, settings.delete_page_size),
            RelatedDataPurger(store, settings.purge_chunk_size),
        )
        try:
            report = await orchestrator.run([settings.preserve_user_id])
        except StoreSeedError as exc:
            print(f"\n✗ Flush failed: {exc}", file=sys.stderr)
            return 1

    print()
    for result in report.collections:
        print(f"  ✓ {result.collection}: deleted {result.deleted}, kept {result.preserved}")
    for purged in report.related:
        print(f"  ✓ {purged.collection}: removed {purged.deleted} orphaned docs")
    print("\n✓ Flush complete!")
    return 0


if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        print("\nCancelled.")
        sys.exit(130)

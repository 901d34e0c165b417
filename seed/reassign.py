"""Move a seeded user and the documents they own onto a new user id.

Run as:
    python -m seed.reassign NEW_UID SEEDED_UID
"""

import argparse
import asyncio
import sys

from seed import banner, configure_logging, open_store
from storeseed.errors import StoreSeedError
from storeseed.services.reassign import reassign_user_id


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="python -m seed.reassign", description=__doc__.splitlines()[0])
    parser.add_argument("new_uid", help="User id to move the data to (e.g. the auth provider uid)")
    parser.add_argument("seeded_uid", help="User id the data was seeded under")
    return parser.parse_args(argv)


async def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging()
    banner("StoreSeed Reassign Script")
    print(f"  FROM userId: {args.seeded_uid}")
    print(f"  TO userId:   {args.new_uid}\n")

    async with open_store() as store:
        try:
            report = await reassign_user_id(store, args.seeded_uid, args.new_uid)
        except (StoreSeedError, ValueError) as exc:
            print(f"\n✗ Reassign failed: {exc}", file=sys.stderr)
            return 1

    print(f"\n  users: {'moved' if report.user_moved else 'no document found'}")
    for collection, count in report.updated.items():
        print(f"  {collection}: updated {count} docs")
    print("\n✓ All documents updated!")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))

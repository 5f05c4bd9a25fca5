#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import logging

from dpapi.clients import ETagMismatchError, FilterClient, RequestAuth


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Fetch all options of a filter dimension in batches")
    p.add_argument("filter_id")
    p.add_argument("dimension")
    p.add_argument("--url", default="http://localhost:22100")
    p.add_argument("--service-token", default="")
    p.add_argument("--batch-size", type=int, default=100)
    p.add_argument("--max-workers", type=int, default=10)
    p.add_argument("-v", "--verbose", action="store_true")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    auth = RequestAuth(service_auth_token=args.service_token)
    async with FilterClient(args.url) as client:
        try:
            opts, etag = await client.get_dimension_options_in_batches(
                auth, args.filter_id, args.dimension, args.batch_size, args.max_workers
            )
        except ETagMismatchError:
            print("Filter changed while it was being read, try again")
            return

    print("=" * 65)
    print(f"Filter     : {args.filter_id}")
    print(f"Dimension  : {args.dimension}")
    print(f"ETag       : {etag}")
    print(f"Options    : {opts.total_count}")
    print("=" * 65)
    for o in opts.items:
        print(o.option)


if __name__ == "__main__":
    asyncio.run(main())

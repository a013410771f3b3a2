"""Import existing random integers into the Redis state store.

Each positional argument is ``<name>=<identifier>`` where the identifier is
``<result>,<min>,<max>`` or ``<result>,<min>,<max>,<seed>``.

Run it after installing the project (``pip install -e .``) so the resource
modules are importable.

Usage:
    python scripts/import_resources.py --redis redis://localhost:6379/0 dice=4,1,6 port=8080,1024,65535,web
"""
from __future__ import annotations

import argparse
import logging
import os

import redis

from app import ResourceStore
from import_codec import ImportStateError
from lifecycle import IntegerResourceController

logger = logging.getLogger("import_resources")

DEFAULT_PREFIX = "random_integer:"


def _split_entry(entry: str) -> tuple[str, str]:
    name, sep, identifier = entry.partition("=")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"expected <name>=<identifier>, got {entry!r}")
    return name, identifier


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Import random integers into Redis")
    parser.add_argument(
        "--redis",
        default=os.getenv("REDIS_URL", "redis://localhost:6379/0"),
        help="Redis URL",
    )
    parser.add_argument(
        "--prefix",
        default=os.getenv("RESOURCE_KEY_PREFIX", DEFAULT_PREFIX),
        help="Key prefix for stored records",
    )
    parser.add_argument("entries", nargs="+", type=_split_entry, help="<name>=<identifier>")
    args = parser.parse_args(argv)

    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))
    client = redis.Redis.from_url(args.redis, decode_responses=True)
    store = ResourceStore(client, args.prefix)
    controller = IntegerResourceController()

    failed = 0
    for name, identifier in args.entries:
        try:
            record = controller.import_state(identifier)
        except ImportStateError as exc:
            logger.error("%s: %s: %s", name, exc.summary, exc.detail)
            failed += 1
            continue
        store.put(name, record)
        print(f"Imported {name} = {record.result}")

    if failed:
        raise SystemExit(1)


if __name__ == "__main__":
    main()

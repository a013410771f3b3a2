"""Seeded random integer generation.

This module draws a single integer from an inclusive ``[lower, upper]`` range.
A non-empty seed string always produces the same value for the same range;
without a seed the value comes from OS entropy. It also offers a simple CLI
for printing a generated value either as plain text or as JSON.
"""

from __future__ import annotations

import argparse
import hashlib
import json
import logging
import os
from dataclasses import dataclass, field
from random import Random
from typing import Protocol

from integer_resource import ResourceError, check_utf8

logger = logging.getLogger(__name__)


class RangeError(ResourceError, ValueError):
    summary = "Create Random Integer Error"

    def __init__(self) -> None:
        super().__init__(
            "The minimum (min) value needs to be smaller than or equal to maximum (max) value."
        )


class RandomSource(Protocol):
    def randrange(self, width: int) -> int:
        ...


def fold_seed(seed: str) -> int:
    """Fold a seed string into a stable 64-bit integer.

    The builtin ``hash()`` is salted per process, so a fixed digest of the
    UTF-8 bytes is used instead.
    """
    digest = hashlib.blake2b(seed.encode("utf-8"), digest_size=8).digest()
    return int.from_bytes(digest, "big", signed=False)


@dataclass
class SeededSource:
    """Deterministic source: the same seed string yields the same draws."""

    seed: str
    _rng: Random = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._rng = Random(fold_seed(self.seed))

    def randrange(self, width: int) -> int:
        return self._rng.randrange(width)


class EntropySource:
    """Source seeded from OS entropy; draws vary between instances."""

    def __init__(self) -> None:
        self._rng = Random()

    def randrange(self, width: int) -> int:
        return self._rng.randrange(width)


def new_random_source(seed: str | None) -> RandomSource:
    if seed:
        return SeededSource(seed)
    return EntropySource()


def validate_range(lower: int, upper: int) -> None:
    """Raise :class:`RangeError` unless ``lower <= upper``."""
    if upper < lower:
        raise RangeError()


def generate_integer(
    lower: int,
    upper: int,
    seed: str | None = None,
    source: RandomSource | None = None,
) -> int:
    """Generate one pseudo-random integer.

    Args:
        lower: Inclusive lower bound of the range.
        upper: Inclusive upper bound of the range.
        seed: Optional seed. A non-empty string makes the result reproducible;
            ``None`` or an empty string draws from OS entropy.
        source: Explicit random source, overriding the seed-based selection.

    Returns:
        An integer drawn uniformly from the inclusive range ``[lower, upper]``.

    Raises:
        RangeError: If ``lower`` is greater than ``upper``.
    """

    validate_range(lower, upper)
    if source is None:
        source = new_random_source(seed)
    return source.randrange((upper - lower) + 1) + lower


def _format_result(result: int, as_json: bool) -> str:
    if as_json:
        return json.dumps({"result": result})
    return str(result)


def _seed_arg(value: str) -> str:
    try:
        return check_utf8(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--min", type=int, required=True, help="Inclusive lower bound")
    parser.add_argument("--max", type=int, required=True, help="Inclusive upper bound")
    parser.add_argument(
        "--seed",
        default=None,
        type=_seed_arg,
        help="Seed string; the same seed and range always give the same value",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output the generated value as a JSON object",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))
    args = _parse_args(argv)
    try:
        result = generate_integer(args.min, args.max, args.seed)
    except RangeError as exc:
        logger.error("%s: %s", exc.summary, exc.detail)
        raise SystemExit(2) from exc
    print(_format_result(result, args.json))


if __name__ == "__main__":
    main()

"""Lifecycle operations for the random integer resource.

Every user-supplied attribute forces replacement, so read, update and delete
never touch the generated value. The controller keeps no state between calls.
"""
from __future__ import annotations

import logging
from enum import Enum

from import_codec import decode_import_id
from integer_resource import IntegerResource, IntegerResourceRequest
from seeded_random import RandomSource, generate_integer

logger = logging.getLogger(__name__)

REPLACE_ATTRIBUTES = ("keepers", "min", "max", "seed")


class PlanAction(str, Enum):
    CREATE = "create"
    NOOP = "noop"
    REPLACE = "replace"


def requires_replace(request: IntegerResourceRequest, state: IntegerResource) -> list[str]:
    """Return the replacement-triggering attributes that differ."""
    changed: list[str] = []
    for name in REPLACE_ATTRIBUTES:
        desired = getattr(request, name)
        current = getattr(state, name)
        if name == "keepers":
            # an imported record carries an empty map where config has none
            desired = desired or {}
            current = current or {}
        if desired != current:
            changed.append(name)
    return changed


class IntegerResourceController:
    def __init__(self, source: RandomSource | None = None) -> None:
        self._source = source

    def plan(self, request: IntegerResourceRequest, state: IntegerResource | None) -> PlanAction:
        if state is None:
            return PlanAction.CREATE
        if requires_replace(request, state):
            return PlanAction.REPLACE
        return PlanAction.NOOP

    def create(self, request: IntegerResourceRequest) -> IntegerResource:
        """Generate a value for ``request`` and build the record to persist.

        Raises:
            RangeError: If ``request.max`` is smaller than ``request.min``.
        """
        number = generate_integer(request.min, request.max, request.seed, source=self._source)
        logger.info("Created random integer in [%d, %d]", request.min, request.max)
        return IntegerResource(
            id=str(number),
            keepers=request.keepers,
            min=request.min,
            max=request.max,
            seed=request.seed,
            result=number,
        )

    def read(self, state: IntegerResource) -> IntegerResource:
        return state

    def update(self, request: IntegerResourceRequest, state: IntegerResource) -> IntegerResource:
        return state

    def delete(self, state: IntegerResource) -> None:
        logger.info("Deleted random integer %s", state.id)

    def import_state(self, identifier: str) -> IntegerResource:
        state = decode_import_id(identifier)
        logger.info("Imported random integer %s", state.id)
        return state

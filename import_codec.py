"""Import identifiers for random integers.

An identifier has the form ``<result>,<min>,<max>`` or
``<result>,<min>,<max>,<seed>``. Decoding trusts the supplied result and
performs no generation or range check.
"""
from __future__ import annotations

import re

from integer_resource import INT64_MAX, INT64_MIN, IntegerResource, ResourceError, check_utf8

IMPORT_SUMMARY = "Import Random Integer Error"

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")

_FIELD_LABELS = {
    "result": "value",
    "min": "min value",
    "max": "max value",
    "seed": "seed",
}


class ImportStateError(ResourceError, ValueError):
    summary = IMPORT_SUMMARY


class BadFormatError(ImportStateError):
    def __init__(self, identifier: str) -> None:
        super().__init__(
            "Invalid import usage: expecting {result},{min},{max} or {result},{min},{max},{seed}"
        )
        self.identifier = identifier


class BadFieldError(ImportStateError):
    def __init__(self, field: str, raw: str, cause: Exception) -> None:
        reason = "is not valid UTF-8 text" if field == "seed" else "could not be parsed as an integer"
        super().__init__(
            f"The {_FIELD_LABELS[field]} supplied {reason}.\n\n"
            f"Original Error: {cause}"
        )
        self.field = field
        self.raw = raw
        self.cause = cause


def _parse_int64(raw: str) -> int:
    if not _INT_PATTERN.fullmatch(raw):
        raise ValueError(f"parsing {raw!r}: invalid syntax")
    value = int(raw)
    if value < INT64_MIN or value > INT64_MAX:
        raise ValueError(f"parsing {raw!r}: value out of range")
    return value


def _parse_field(field: str, raw: str) -> int:
    try:
        return _parse_int64(raw)
    except ValueError as exc:
        raise BadFieldError(field, raw, exc) from exc


def decode_import_id(identifier: str) -> IntegerResource:
    parts = identifier.split(",")
    if len(parts) not in (3, 4):
        raise BadFormatError(identifier)

    result = _parse_field("result", parts[0])
    lower = _parse_field("min", parts[1])
    upper = _parse_field("max", parts[2])
    seed = None
    if len(parts) == 4:
        try:
            seed = check_utf8(parts[3])
        except ValueError as exc:
            raise BadFieldError("seed", parts[3], exc) from exc

    return IntegerResource(
        id=parts[0],
        keepers={},
        min=lower,
        max=upper,
        seed=seed,
        result=result,
    )


def encode_import_id(record: IntegerResource) -> str:
    """Format ``record`` as an identifier accepted by :func:`decode_import_id`."""
    fields = [str(record.result), str(record.min), str(record.max)]
    if record.seed is not None:
        fields.append(record.seed)
    return ",".join(fields)

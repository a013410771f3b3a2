"""State records and errors for the random integer resource.

The persisted record is an immutable value: once created, any change to
``keepers``, ``min``, ``max`` or ``seed`` is handled as a replacement rather
than an in-place update.
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def check_utf8(value: str, name: str = "seed") -> str:
    """Return ``value`` unchanged, or raise ``ValueError`` if it is not valid UTF-8 text.

    Lone surrogates pass JSON decoding and ``surrogateescape`` argv decoding but
    cannot be hashed or persisted.
    """
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise ValueError(f"{name} must be valid UTF-8 text") from exc
    return value


class ResourceError(Exception):
    """Base error surfaced to the caller as a summary plus a detail message."""

    summary = "Random Integer Error"

    def __init__(self, detail: str, summary: str | None = None) -> None:
        super().__init__(detail)
        self.detail = detail
        if summary is not None:
            self.summary = summary

    def as_dict(self) -> dict[str, str]:
        return {"summary": self.summary, "detail": self.detail}


class IntegerResourceRequest(BaseModel):
    """Desired state for a random integer."""

    keepers: dict[str, str] | None = Field(
        default=None,
        description="Arbitrary map of values that, when changed, triggers recreation.",
    )
    min: int = Field(..., ge=INT64_MIN, le=INT64_MAX, description="Inclusive lower bound")
    max: int = Field(..., ge=INT64_MIN, le=INT64_MAX, description="Inclusive upper bound")
    seed: str | None = Field(default=None, description="Custom seed to always produce the same value")

    @field_validator("seed")
    @classmethod
    def validate_seed(cls, value: str | None) -> str | None:
        if value is None:
            return value
        return check_utf8(value)


class IntegerResource(BaseModel):
    """Persisted state of a random integer."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="The string representation of the integer result.")
    keepers: dict[str, str] | None = Field(
        default=None,
        description="Arbitrary map of values that, when changed, triggers recreation.",
    )
    min: int = Field(..., ge=INT64_MIN, le=INT64_MAX, description="The minimum inclusive value of the range.")
    max: int = Field(..., ge=INT64_MIN, le=INT64_MAX, description="The maximum inclusive value of the range.")
    seed: str | None = Field(default=None, description="A custom seed to always produce the same value.")
    result: int = Field(..., ge=INT64_MIN, le=INT64_MAX, description="The random integer result.")

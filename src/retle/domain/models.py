"""Domain value objects describing backoff settings."""

from __future__ import annotations

import math

from pydantic import Field, field_validator
from pydantic.dataclasses import dataclass as pydantic_dataclass

DEFAULT_INITIAL_INTERVAL = 0.5
DEFAULT_MULTIPLIER = 1.5


@pydantic_dataclass(frozen=True)
class BackoffPolicy:
    """Immutable starting point for an exponential backoff timer.

    ``initial_interval`` is expressed in seconds. ``multiplier`` is the factor
    applied to the interval after every wait and must keep the sequence
    non-decreasing.
    """

    initial_interval: float = Field(default=DEFAULT_INITIAL_INTERVAL, ge=0, strict=True)
    multiplier: float = Field(default=DEFAULT_MULTIPLIER, ge=1, strict=True)

    @field_validator("initial_interval", "multiplier")
    @classmethod
    def validate_finite(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError("value must be a finite number")
        return value

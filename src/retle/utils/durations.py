"""Helpers for normalizing duration inputs to seconds."""

from __future__ import annotations

from datetime import timedelta
from typing import Union

DurationLike = Union[int, float, timedelta]


def to_seconds(value: DurationLike) -> float:
    if isinstance(value, timedelta):
        return value.total_seconds()
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(
            f"duration must be seconds or a timedelta, got {type(value).__name__}"
        )
    return float(value)

"""Backoff configuration management helpers."""

from __future__ import annotations

import os
from dataclasses import dataclass

from pydantic import ValidationError

from retle.domain.exceptions import InvalidBackoffError
from retle.domain.models import (
    DEFAULT_INITIAL_INTERVAL,
    DEFAULT_MULTIPLIER,
    BackoffPolicy,
)


def _str_to_float(value: str | None, default: float) -> float:
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise ValueError(f"Invalid float value: {value}") from exc


@dataclass(frozen=True)
class RetleConfig:
    """Immutable configuration object loaded from the environment."""

    initial_interval: float = DEFAULT_INITIAL_INTERVAL
    multiplier: float = DEFAULT_MULTIPLIER

    def __post_init__(self) -> None:
        self.validate()

    @classmethod
    def from_env(cls) -> "RetleConfig":
        defaults = cls()
        return cls(
            initial_interval=_str_to_float(
                os.getenv("RETLE_INITIAL_INTERVAL"), defaults.initial_interval
            ),
            multiplier=_str_to_float(
                os.getenv("RETLE_MULTIPLIER"), defaults.multiplier
            ),
        )

    def validate(self) -> None:
        try:
            self.to_policy()
        except ValidationError as exc:
            raise InvalidBackoffError(
                context={
                    "initial_interval": self.initial_interval,
                    "multiplier": self.multiplier,
                }
            ) from exc

    def to_policy(self) -> BackoffPolicy:
        return BackoffPolicy(
            initial_interval=self.initial_interval, multiplier=self.multiplier
        )

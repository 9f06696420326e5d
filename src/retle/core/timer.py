"""Exponential backoff timer and the retry loop driven by it."""

from __future__ import annotations

import logging
import time
from typing import Optional

from pydantic import ValidationError

from retle.core.config import RetleConfig
from retle.core.context import Context
from retle.domain.exceptions import InvalidBackoffError
from retle.domain.interfaces import ICancellationContext, RetryFunc
from retle.domain.models import (
    DEFAULT_INITIAL_INTERVAL,
    DEFAULT_MULTIPLIER,
    BackoffPolicy,
)
from retle.utils.durations import DurationLike, to_seconds

logger = logging.getLogger(__name__)


class ExpTimer:
    """Backoff state: the next wait in seconds and its growth factor.

    Every call to :meth:`next_duration` hands out the current interval and
    multiplies it, so a timer is meant to be used for a single retry loop.
    """

    def __init__(self, interval: DurationLike, multiplier: float) -> None:
        try:
            policy = BackoffPolicy(
                initial_interval=to_seconds(interval), multiplier=multiplier
            )
        except (TypeError, ValidationError) as exc:
            raise InvalidBackoffError(
                context={"interval": interval, "multiplier": multiplier}
            ) from exc
        self._interval = float(policy.initial_interval)
        self._multiplier = float(policy.multiplier)

    @classmethod
    def from_policy(cls, policy: BackoffPolicy) -> "ExpTimer":
        return cls(policy.initial_interval, policy.multiplier)

    @classmethod
    def from_config(cls, config: RetleConfig) -> "ExpTimer":
        return cls.from_policy(config.to_policy())

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def multiplier(self) -> float:
        return self._multiplier

    def next_duration(self) -> float:
        """Return the current interval, then grow it by the multiplier."""

        current = self._interval
        self._interval = current * self._multiplier
        return current

    def sleep(self) -> None:
        """Block the calling thread for :meth:`next_duration` seconds."""

        time.sleep(self.next_duration())

    def retry(
        self, ctx: Optional[ICancellationContext], operation: RetryFunc
    ) -> None:
        """Call ``operation`` until it stops asking for another attempt.

        ``operation`` returns ``(should_retry, error)``. When ``should_retry``
        is False the loop ends: ``error`` is raised as-is if present, otherwise
        the call returns None. Between attempts the timer waits for
        :meth:`next_duration` seconds. If ``ctx`` is done before or during
        that wait, its error (``ContextCancelledError`` or
        ``DeadlineExceededError``) is raised without another attempt.
        """

        ctx = ctx if ctx is not None else Context.background()
        attempt = 0
        while True:
            attempt += 1
            should_retry, error = operation()
            if not should_retry:
                if error is not None:
                    raise error
                return None

            if ctx.err() is None:
                duration = self.next_duration()
                logger.debug(
                    "Retrying in %.3fs (attempt %d, last error: %r)",
                    duration,
                    attempt,
                    error,
                )
                if not ctx.wait(duration):
                    continue

            cancel_error = ctx.err()
            logger.info("Retry stopped after %d attempt(s): %s", attempt, cancel_error)
            raise cancel_error

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ExpTimer):
            return NotImplemented
        return (self._interval, self._multiplier) == (
            other._interval,
            other._multiplier,
        )

    def __repr__(self) -> str:
        return f"ExpTimer(interval={self._interval!r}, multiplier={self._multiplier!r})"


def default_exp_timer() -> ExpTimer:
    """Return a timer starting at 500ms and growing by 1.5x per wait."""

    return ExpTimer(DEFAULT_INITIAL_INTERVAL, DEFAULT_MULTIPLIER)


def retry(ctx: Optional[ICancellationContext], operation: RetryFunc) -> None:
    """Run :meth:`ExpTimer.retry` on a fresh :func:`default_exp_timer`."""

    return default_exp_timer().retry(ctx, operation)

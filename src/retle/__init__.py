"""Exponential backoff retries with cancellation support."""

from .core.config import RetleConfig
from .core.context import Context
from .core.timer import ExpTimer, default_exp_timer, retry
from .domain.exceptions import (
    ContextCancelledError,
    ContextError,
    DeadlineExceededError,
    InvalidBackoffError,
    RequestFailedError,
    RetleError,
    RetryableStatusError,
)
from .domain.interfaces import ICancellationContext, RetryFunc
from .domain.models import DEFAULT_INITIAL_INTERVAL, DEFAULT_MULTIPLIER, BackoffPolicy

__all__ = [
    "ExpTimer",
    "default_exp_timer",
    "retry",
    "Context",
    "RetleConfig",
    "BackoffPolicy",
    "RetryFunc",
    "ICancellationContext",
    "DEFAULT_INITIAL_INTERVAL",
    "DEFAULT_MULTIPLIER",
    "RetleError",
    "InvalidBackoffError",
    "ContextError",
    "ContextCancelledError",
    "DeadlineExceededError",
    "RequestFailedError",
    "RetryableStatusError",
]

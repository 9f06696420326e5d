"""Exception hierarchy for backoff and cancellation failures."""

from __future__ import annotations

from typing import Any, Mapping


class RetleError(Exception):
    """Root of retle's errors: bad backoff settings, a finished context or a
    failed HTTP operation. ``context`` carries the offending values."""

    default_message = "Retry error occurred"

    def __init__(
        self, message: str | None = None, *, context: Mapping[str, Any] | None = None
    ):
        self.message = message or self.default_message
        self.context: Mapping[str, Any] = dict(context or {})
        formatted = self._format_message()
        super().__init__(formatted)

    def _format_message(self) -> str:
        if self.context:
            return f"{self.message} | context={self.context}"
        return self.message


class InvalidBackoffError(RetleError, ValueError):
    """Raised when interval or multiplier are out of range."""

    default_message = "Invalid backoff settings"


class ContextError(RetleError):
    """A cancellation context is done and retrying must stop."""

    default_message = "Context is done"


class ContextCancelledError(ContextError):
    """The context was cancelled explicitly."""

    default_message = "context canceled"


class DeadlineExceededError(ContextError):
    """The context deadline passed."""

    default_message = "context deadline exceeded"


class RequestFailedError(RetleError):
    """An HTTP operation returned an error status."""

    default_message = "Request failed"

    @property
    def status_code(self) -> int | None:
        return self.context.get("status_code")


class RetryableStatusError(RequestFailedError):
    """An HTTP operation returned a status worth retrying (429, 5xx)."""

    default_message = "Request failed with retryable status"

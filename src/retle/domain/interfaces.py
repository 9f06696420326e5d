"""Contracts shared by the timer, contexts and operation adapters."""

from __future__ import annotations

from typing import Optional, Protocol, Tuple


class RetryFunc(Protocol):
    """A single attempt of the operation being retried."""

    def __call__(self) -> Tuple[bool, Optional[BaseException]]:
        """Return ``(should_retry, error)``.

        When ``should_retry`` is False the error (possibly None) is the final
        outcome of the retry loop.
        """


class ICancellationContext(Protocol):
    """Signals that a retry loop should stop waiting."""

    def err(self) -> Optional[BaseException]:
        """Return None while live, otherwise the reason the context is done."""

    def wait(self, timeout: float) -> bool:
        """Block for up to ``timeout`` seconds; True once the context is done."""

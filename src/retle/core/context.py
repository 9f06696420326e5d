"""Cancellation contexts used to stop a retry loop from the outside."""

from __future__ import annotations

import threading
import time
from typing import List, Optional

from retle.domain.exceptions import (
    ContextCancelledError,
    ContextError,
    DeadlineExceededError,
)
from retle.utils.durations import DurationLike, to_seconds


class Context:
    """Carries a cancellation signal and an optional deadline.

    Contexts form a tree: cancelling a parent (or reaching its deadline)
    finishes every child, while cancelling a child leaves the parent alive.
    Deadlines are measured against ``time.monotonic()``. Once done, a context
    keeps the first error that finished it.

    Usage::

        with Context.with_timeout(5) as ctx:
            timer.retry(ctx, operation)
    """

    def __init__(
        self,
        parent: Optional["Context"] = None,
        *,
        deadline: Optional[float] = None,
        cancellable: bool = True,
    ) -> None:
        self._parent = parent
        self._deadline = self._merge_deadline(parent, deadline)
        self._cancellable = cancellable
        self._done = threading.Event()
        self._lock = threading.Lock()
        self._err: Optional[ContextError] = None
        self._children: List[Context] = []
        if parent is not None:
            parent._attach(self)

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------
    @classmethod
    def background(cls) -> "Context":
        """Return a context that is never cancelled and has no deadline."""

        return cls(cancellable=False)

    @classmethod
    def with_cancel(cls, parent: Optional["Context"] = None) -> "Context":
        return cls(parent)

    @classmethod
    def with_deadline(
        cls, deadline: float, parent: Optional["Context"] = None
    ) -> "Context":
        """Return a child finishing at the monotonic timestamp ``deadline``."""

        return cls(parent, deadline=deadline)

    @classmethod
    def with_timeout(
        cls, timeout: DurationLike, parent: Optional["Context"] = None
    ) -> "Context":
        return cls.with_deadline(time.monotonic() + to_seconds(timeout), parent)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    @property
    def deadline(self) -> Optional[float]:
        return self._deadline

    def cancel(self) -> None:
        if not self._cancellable:
            return
        self._check_deadline()
        self._finish(ContextCancelledError())

    def err(self) -> Optional[ContextError]:
        self._check_deadline()
        return self._err

    def done(self) -> bool:
        return self.err() is not None

    def wait(self, timeout: DurationLike) -> bool:
        """Block until the context is done or ``timeout`` seconds elapse.

        Returns True when the context finished, False on timeout.
        """

        seconds = max(to_seconds(timeout), 0.0)
        if self._deadline is not None:
            remaining = self._deadline - time.monotonic()
            if remaining <= seconds:
                if self._done.wait(max(remaining, 0.0)):
                    return True
                self._finish(DeadlineExceededError())
                return True
        return self._done.wait(seconds)

    def __enter__(self) -> "Context":
        return self

    def __exit__(self, *exc_info) -> None:
        self.cancel()

    def __repr__(self) -> str:
        state = type(self._err).__name__ if self._err else "live"
        return f"Context(deadline={self._deadline!r}, state={state})"

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _merge_deadline(
        parent: Optional["Context"], deadline: Optional[float]
    ) -> Optional[float]:
        parent_deadline = parent.deadline if parent is not None else None
        if parent_deadline is None:
            return deadline
        if deadline is None:
            return parent_deadline
        return min(parent_deadline, deadline)

    def _attach(self, child: "Context") -> None:
        with self._lock:
            err = self._err
            if err is None:
                self._children.append(child)
        if err is not None:
            child._finish(err)

    def _check_deadline(self) -> None:
        if (
            self._err is None
            and self._deadline is not None
            and time.monotonic() >= self._deadline
        ):
            self._finish(DeadlineExceededError())

    def _finish(self, err: ContextError) -> None:
        with self._lock:
            if self._err is not None:
                return
            self._err = err
            children, self._children = self._children, []
            self._done.set()
        for child in children:
            child._finish(err)
        if self._parent is not None:
            self._parent._detach(self)

    def _detach(self, child: "Context") -> None:
        with self._lock:
            if child in self._children:
                self._children.remove(child)

"""
Cancellation tokens for render calls.

A Context reports whether the caller has abandoned the work in flight and
why. Checking a context is a non-blocking poll; nothing in this package
waits on one.

Usage:
    ctx, cancel = with_timeout(background(), 2.5)
    try:
        renderer.render_context(ctx, sink, data)
    finally:
        cancel()
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from datetime import timedelta

CancelFunc = Callable[[], None]


class ContextError(Exception):
    """Base exception for cancellation reasons."""

    pass


class Canceled(ContextError):
    """Raised when the context was canceled by its owner."""

    def __init__(self, message: str = "context canceled"):
        super().__init__(message)


class DeadlineExceeded(ContextError, TimeoutError):
    """Raised when the context deadline passed."""

    def __init__(self, message: str = "context deadline exceeded"):
        super().__init__(message)


class Context:
    """A cancellation token, optionally bound to a parent and a deadline.

    Deadlines are expressed on the time.monotonic() clock.
    """

    def __init__(self, parent: Context | None = None, deadline: float | None = None):
        self._parent = parent
        self._deadline = deadline
        self._done = threading.Event()
        self._lock = threading.Lock()
        self._err: ContextError | None = None

    @property
    def deadline(self) -> float | None:
        """Earliest deadline of this context and its ancestors, if any."""
        parent_deadline = self._parent.deadline if self._parent else None
        if self._deadline is None:
            return parent_deadline
        if parent_deadline is None:
            return self._deadline
        return min(self._deadline, parent_deadline)

    def err(self) -> ContextError | None:
        """Return the cancellation reason, or None while the context is live."""
        if self._done.is_set():
            return self._err

        if self._parent is not None:
            parent_err = self._parent.err()
            if parent_err is not None:
                self._cancel(parent_err)
                return self._err

        if self._deadline is not None and time.monotonic() >= self._deadline:
            self._cancel(DeadlineExceeded())

        return self._err

    def done(self) -> bool:
        """Return True once the context is canceled or expired."""
        return self.err() is not None

    def _cancel(self, err: ContextError) -> None:
        with self._lock:
            if self._done.is_set():
                return
            self._err = err
            self._done.set()


class _BackgroundContext(Context):
    """Root context that is never canceled."""

    def err(self) -> ContextError | None:
        return None

    def _cancel(self, err: ContextError) -> None:
        return None

    def __repr__(self) -> str:
        return "context.background()"


_background = _BackgroundContext()


def background() -> Context:
    """Return the shared non-cancellable root context."""
    return _background


def with_cancel(parent: Context) -> tuple[Context, CancelFunc]:
    """Derive a context that is canceled when the returned function is called.

    Args:
        parent: Context whose cancellation propagates to the child

    Returns:
        Tuple of (child context, cancel function)
    """
    ctx = Context(parent)

    def cancel() -> None:
        ctx._cancel(Canceled())

    return ctx, cancel


def with_deadline(parent: Context, deadline: float) -> tuple[Context, CancelFunc]:
    """Derive a context that expires at a time.monotonic() deadline.

    Args:
        parent: Context whose cancellation propagates to the child
        deadline: Absolute monotonic time after which the context is done

    Returns:
        Tuple of (child context, cancel function)
    """
    ctx = Context(parent, deadline=deadline)

    def cancel() -> None:
        ctx._cancel(Canceled())

    return ctx, cancel


def with_timeout(parent: Context, timeout: float | timedelta) -> tuple[Context, CancelFunc]:
    """Derive a context that expires after a relative timeout.

    Args:
        parent: Context whose cancellation propagates to the child
        timeout: Seconds (or timedelta) from now

    Returns:
        Tuple of (child context, cancel function)
    """
    if isinstance(timeout, timedelta):
        timeout = timeout.total_seconds()
    return with_deadline(parent, time.monotonic() + timeout)


def check_context(ctx: Context) -> None:
    """Raise the context's cancellation reason if it is already done.

    Each call raises a new exception of the recorded type, so tracebacks
    from separate checks never accumulate on one shared instance.

    Raises:
        Canceled: If the context was canceled
        DeadlineExceeded: If the context deadline passed
    """
    err = ctx.err()
    if err is not None:
        raise type(err)(*err.args)

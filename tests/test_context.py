"""Tests for cancellation contexts."""

import time
from datetime import timedelta

import pytest

from renderkit.context import (
    Canceled,
    ContextError,
    DeadlineExceeded,
    background,
    check_context,
    with_cancel,
    with_deadline,
    with_timeout,
)

pytestmark = pytest.mark.unit


class TestBackground:
    """Tests for the root context."""

    def test_never_done(self) -> None:
        """Test the background context is never canceled."""
        ctx = background()
        assert ctx.err() is None
        assert ctx.done() is False
        assert ctx.deadline is None
        check_context(ctx)

    def test_shared_instance(self) -> None:
        """Test background() returns the same context."""
        assert background() is background()


class TestWithCancel:
    """Tests for with_cancel."""

    def test_cancel_sets_error(self) -> None:
        """Test canceling reports Canceled."""
        ctx, cancel = with_cancel(background())
        assert ctx.err() is None

        cancel()

        assert isinstance(ctx.err(), Canceled)
        assert ctx.done() is True
        with pytest.raises(Canceled, match="context canceled"):
            check_context(ctx)

    def test_cancel_is_idempotent(self) -> None:
        """Test the first cancellation reason is kept."""
        ctx, cancel = with_cancel(background())
        cancel()
        first = ctx.err()
        cancel()
        assert ctx.err() is first

    def test_each_check_raises_fresh_error(self) -> None:
        """Test repeated checks raise distinct exceptions of the recorded type."""
        ctx, cancel = with_cancel(background())
        cancel()

        with pytest.raises(Canceled) as first:
            check_context(ctx)
        with pytest.raises(Canceled) as second:
            check_context(ctx)

        assert first.value is not second.value
        assert first.value is not ctx.err()
        assert ctx.err().__traceback__ is None
        assert str(second.value) == "context canceled"

    def test_parent_cancel_propagates(self) -> None:
        """Test canceling a parent cancels its children."""
        parent, cancel_parent = with_cancel(background())
        child, _ = with_cancel(parent)

        cancel_parent()

        assert isinstance(child.err(), Canceled)

    def test_child_cancel_does_not_affect_parent(self) -> None:
        """Test canceling a child leaves the parent live."""
        parent, _ = with_cancel(background())
        child, cancel_child = with_cancel(parent)

        cancel_child()

        assert child.done() is True
        assert parent.err() is None


class TestDeadlines:
    """Tests for with_deadline and with_timeout."""

    def test_expired_deadline(self) -> None:
        """Test a deadline in the past reports DeadlineExceeded."""
        ctx, cancel = with_deadline(background(), time.monotonic() - 1)
        try:
            assert isinstance(ctx.err(), DeadlineExceeded)
            with pytest.raises(TimeoutError):
                check_context(ctx)
        finally:
            cancel()

    def test_future_deadline_is_live(self) -> None:
        """Test a distant deadline does not expire immediately."""
        ctx, cancel = with_timeout(background(), 60)
        try:
            assert ctx.err() is None
            assert ctx.deadline is not None
        finally:
            cancel()

    def test_timeout_accepts_timedelta(self) -> None:
        """Test with_timeout converts a timedelta."""
        before = time.monotonic()
        ctx, cancel = with_timeout(background(), timedelta(seconds=30))
        cancel()
        assert ctx.deadline is not None
        assert ctx.deadline >= before + 29

    def test_zero_timeout_expires(self) -> None:
        """Test a zero timeout is already expired."""
        ctx, _ = with_timeout(background(), 0)
        assert isinstance(ctx.err(), DeadlineExceeded)

    def test_cancel_before_deadline(self) -> None:
        """Test explicit cancellation wins over a pending deadline."""
        ctx, cancel = with_timeout(background(), 60)
        cancel()
        assert isinstance(ctx.err(), Canceled)

    def test_earliest_deadline_wins(self) -> None:
        """Test a child reports the earlier of its own and its parent's deadline."""
        now = time.monotonic()
        parent, _ = with_deadline(background(), now + 10)
        child, _ = with_deadline(parent, now + 100)
        assert child.deadline == now + 10

    def test_errors_share_base(self) -> None:
        """Test both reasons are ContextError subclasses."""
        assert issubclass(Canceled, ContextError)
        assert issubclass(DeadlineExceeded, ContextError)

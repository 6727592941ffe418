"""Tests for iteration bookkeeping."""

import math

import pytest

from roots_lab.algorithms.trace import (
    IterationRecord,
    RootTrace,
    StopReason,
    TraceRecorder,
    relative_error,
)
from roots_lab.data.methods import Method
from roots_lab.errors import InvalidInputError


class TestIterationRecord:
    """Tests for IterationRecord dataclass."""

    @pytest.fixture
    def record(self) -> IterationRecord:
        return IterationRecord(
            iteration=1,
            x_lower=1.0,
            f_lower=-1.0,
            x_upper=2.0,
            f_upper=2.0,
            xr=1.5,
            f_xr=0.25,
            relative_error=float("nan"),
        )

    def test_immutable(self, record: IterationRecord) -> None:
        """IterationRecord should be immutable."""
        with pytest.raises(AttributeError):
            record.xr = 1.25  # type: ignore[misc]

    def test_slots(self, record: IterationRecord) -> None:
        """IterationRecord should use slots (no __dict__)."""
        assert not hasattr(record, "__dict__")


class TestRelativeError:
    """Tests for relative_error helper."""

    def test_fraction(self) -> None:
        assert relative_error(2.0, 1.0) == 0.5

    def test_sign_independent(self) -> None:
        assert relative_error(-2.0, -1.0) == 0.5

    def test_zero_estimate_is_infinite(self) -> None:
        """Division by a zero estimate gives inf rather than raising."""
        assert relative_error(0.0, 1.0) == math.inf

    def test_both_zero_is_nan(self) -> None:
        assert math.isnan(relative_error(0.0, 0.0))


class TestTraceRecorder:
    """Tests for TraceRecorder."""

    def test_first_row_has_nan_error(self) -> None:
        """No previous estimate exists on the first iteration."""
        recorder = TraceRecorder(Method.BISECTION, 1e-3)
        recorder.record(1.0, -1.0, 2.0, 2.0, 1.5, 0.25)
        trace = recorder.finish()
        assert math.isnan(trace.records[0].relative_error)

    def test_first_row_never_meets_tolerance(self) -> None:
        """A huge tolerance still needs a second estimate to stop."""
        recorder = TraceRecorder(Method.BISECTION, 1e6)
        assert recorder.record(1.0, -1.0, 2.0, 2.0, 1.5, 0.25) is False
        assert recorder.record(1.0, -1.0, 1.5, 0.25, 1.25, -0.4375) is True
        assert recorder.finish().stop_reason is StopReason.TOLERANCE

    def test_exact_root_stops(self) -> None:
        recorder = TraceRecorder(Method.SECANT, 1e-9)
        assert recorder.record(0.0, 1.0, 1.0, 2.0, 0.5, 0.0) is True
        trace = recorder.finish()
        assert trace.stop_reason is StopReason.EXACT_ROOT
        assert trace.converged

    def test_error_reported_in_percent(self) -> None:
        recorder = TraceRecorder(Method.BISECTION, 1e-9)
        recorder.record(1.0, -1.0, 2.0, 2.0, 1.5, 0.25)
        recorder.record(1.0, -1.0, 1.5, 0.25, 1.25, -0.4375)
        trace = recorder.finish()
        assert trace.records[1].relative_error == pytest.approx(20.0)
        assert trace.relative_error == pytest.approx(20.0)

    def test_default_stop_reason_is_cap(self) -> None:
        recorder = TraceRecorder(Method.NEWTON, 1e-9, max_iterations=1)
        for _ in recorder.iterations():
            recorder.record(1.0, 1.0, math.nan, math.nan, 2.0, 1.0)
        trace = recorder.finish()
        assert trace.stop_reason is StopReason.ITERATION_CAP
        assert not trace.converged

    def test_summary_only(self) -> None:
        """keep_trace=False counts iterations without keeping rows."""
        recorder = TraceRecorder(Method.BISECTION, 1e-9, keep_trace=False)
        recorder.record(1.0, -1.0, 2.0, 2.0, 1.5, 0.25)
        recorder.record(1.0, -1.0, 1.5, 0.25, 1.25, -0.4375)
        trace = recorder.finish()
        assert trace.records == ()
        assert trace.iterations == 2
        assert trace.root == 1.25
        assert not trace.has_trace

    def test_iteration_indices_start_at_one(self) -> None:
        recorder = TraceRecorder(Method.BISECTION, 1e-12)
        for i in range(5):
            recorder.record(0.0, -1.0, 1.0, 1.0, 1.0 + i, 1.0)
        trace = recorder.finish()
        assert [r.iteration for r in trace.records] == [1, 2, 3, 4, 5]
        assert trace.has_trace

    @pytest.mark.parametrize("tolerance", [0.0, -1e-3, float("nan"), float("inf")])
    def test_rejects_bad_tolerance(self, tolerance: float) -> None:
        with pytest.raises(InvalidInputError):
            TraceRecorder(Method.BISECTION, tolerance)

    def test_rejects_bad_iteration_cap(self) -> None:
        with pytest.raises(InvalidInputError):
            TraceRecorder(Method.BISECTION, 1e-3, max_iterations=0)


class TestRootTrace:
    """Tests for RootTrace dataclass."""

    def test_immutable(self) -> None:
        trace = RootTrace(
            method=Method.NEWTON,
            records=(),
            iterations=0,
            root=float("nan"),
            f_root=float("nan"),
            relative_error=float("nan"),
            stop_reason=StopReason.ITERATION_CAP,
        )
        with pytest.raises(AttributeError):
            trace.root = 1.0  # type: ignore[misc]

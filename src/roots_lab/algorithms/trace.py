"""Per-iteration bookkeeping shared by every root-finding method.

Each method produces the same row shape (current pair, new estimate,
relative approximate error) and stops under the same rule:

    f(xr) == 0  or  ea <= tolerance  or  iteration cap reached

``TraceRecorder`` owns that rule so the four algorithms only implement their
update step. It can keep the full trace (single runs, tables) or only the
running summary (comparisons).
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

import numpy as np

from roots_lab.data.methods import MAX_ITERATIONS, Method
from roots_lab.errors import InvalidInputError

logger = logging.getLogger(__name__)

RealFunction = Callable[[float], float]
"""A pure mapping float -> float; may return NaN/Inf where undefined."""


@dataclass(frozen=True, slots=True)
class IterationRecord:
    """One row of a method's iteration table."""

    iteration: int
    """1-based iteration index."""

    x_lower: float
    """Lower bracket end (bracketing), x0 (secant) or current x (Newton)."""

    f_lower: float
    """f(x_lower)."""

    x_upper: float
    """Upper bracket end (bracketing), x1 (secant), NaN for Newton."""

    f_upper: float
    """f(x_upper), NaN for Newton."""

    xr: float
    """New root estimate."""

    f_xr: float
    """f(xr)."""

    relative_error: float
    """Relative approximate error in percent; NaN on the first iteration."""


class StopReason(Enum):
    """Why an iteration loop ended."""

    EXACT_ROOT = "exact_root"
    TOLERANCE = "tolerance"
    ITERATION_CAP = "iteration_cap"


@dataclass(frozen=True, slots=True)
class RootTrace:
    """Complete outcome of one method run."""

    method: Method
    """Method that produced the trace."""

    records: tuple[IterationRecord, ...]
    """Ordered iteration rows (empty when the run kept no trace)."""

    iterations: int
    """Number of iterations performed."""

    root: float
    """Final root estimate."""

    f_root: float
    """f(root)."""

    relative_error: float
    """Last relative approximate error in percent (NaN after one iteration)."""

    stop_reason: StopReason
    """Termination cause."""

    @property
    def converged(self) -> bool:
        """True unless the loop ran into the iteration cap."""
        return self.stop_reason is not StopReason.ITERATION_CAP

    @property
    def has_trace(self) -> bool:
        """Whether per-iteration rows were retained."""
        return len(self.records) == self.iterations


def relative_error(current: float, previous: float) -> float:
    """|(current - previous) / current| as a fraction.

    A zero ``current`` gives inf (or NaN when both are zero) instead of
    raising, so the loop simply keeps iterating.
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        value = np.abs((np.float64(current) - np.float64(previous)) / np.float64(current))
    return float(value)


class TraceRecorder:
    """Accumulates iteration rows and applies the termination rule.

    Example:
        >>> recorder = TraceRecorder(Method.BISECTION, tolerance=1e-4)
        >>> for _ in recorder.iterations():
        ...     if recorder.record(lo, f_lo, hi, f_hi, xr, f_xr):
        ...         break
        >>> trace = recorder.finish()
    """

    __slots__ = (
        "_method",
        "_tolerance",
        "_max_iterations",
        "_keep_trace",
        "_records",
        "_count",
        "_previous",
        "_last_xr",
        "_last_f_xr",
        "_last_error",
        "_stop_reason",
    )

    def __init__(
        self,
        method: Method,
        tolerance: float,
        *,
        max_iterations: int = MAX_ITERATIONS,
        keep_trace: bool = True,
    ) -> None:
        """Initialize recorder.

        Args:
            method: Method being traced.
            tolerance: Stopping threshold for the relative error (fraction).
            max_iterations: Iteration cap.
            keep_trace: Retain every row (True) or only the running summary.

        Raises:
            InvalidInputError: If tolerance is not a positive finite number
                or max_iterations < 1.
        """
        if not math.isfinite(tolerance) or tolerance <= 0:
            msg = f"Tolerance must be a positive finite number, got {tolerance}"
            raise InvalidInputError(msg)
        if max_iterations < 1:
            msg = f"max_iterations must be at least 1, got {max_iterations}"
            raise InvalidInputError(msg)

        self._method = method
        self._tolerance = tolerance
        self._max_iterations = max_iterations
        self._keep_trace = keep_trace
        self._records: list[IterationRecord] = []
        self._count = 0
        self._previous: float | None = None
        self._last_xr = float("nan")
        self._last_f_xr = float("nan")
        self._last_error = float("nan")
        self._stop_reason = StopReason.ITERATION_CAP

    def iterations(self) -> range:
        """Loop bound for the caller's iteration loop."""
        return range(self._max_iterations)

    def record(
        self,
        x_lower: float,
        f_lower: float,
        x_upper: float,
        f_upper: float,
        xr: float,
        f_xr: float,
    ) -> bool:
        """Append one iteration and report whether the loop should stop."""
        self._count += 1

        if self._previous is None:
            ea = math.inf
            ea_percent = float("nan")
        else:
            ea = relative_error(xr, self._previous)
            ea_percent = ea * 100.0

        if self._keep_trace:
            self._records.append(
                IterationRecord(
                    iteration=self._count,
                    x_lower=x_lower,
                    f_lower=f_lower,
                    x_upper=x_upper,
                    f_upper=f_upper,
                    xr=xr,
                    f_xr=f_xr,
                    relative_error=ea_percent,
                )
            )

        self._previous = xr
        self._last_xr = xr
        self._last_f_xr = f_xr
        self._last_error = ea_percent

        if f_xr == 0.0:
            self._stop_reason = StopReason.EXACT_ROOT
            return True
        if ea <= self._tolerance:
            self._stop_reason = StopReason.TOLERANCE
            return True
        return False

    def finish(self) -> RootTrace:
        """Freeze the accumulated state into a RootTrace."""
        logger.debug(
            "%s stopped after %d iteration(s) by %s: root=%r f(root)=%r",
            self._method.value,
            self._count,
            self._stop_reason.value,
            self._last_xr,
            self._last_f_xr,
        )
        return RootTrace(
            method=self._method,
            records=tuple(self._records),
            iterations=self._count,
            root=self._last_xr,
            f_root=self._last_f_xr,
            relative_error=self._last_error,
            stop_reason=self._stop_reason,
        )


__all__ = [
    "IterationRecord",
    "RealFunction",
    "RootTrace",
    "StopReason",
    "TraceRecorder",
    "relative_error",
]

"""Multi-method comparison and efficiency ranking.

Runs every method on the same problem in a fixed order (bisection, false
position, secant, Newton). Each run is isolated: any exception a method
raises, its own or one coming out of f, becomes a ``MethodFailure``
carrying its identity and error, and the remaining methods still run.

Ranking among successful runs (lexicographic, ascending):
    1. iteration count
    2. |f(root)|
    3. |last relative error|   (NaN sorts last)

The first entry under that order is flagged ``is_best``. When nothing
succeeds ``best`` is None and ``has_applicable_method`` is False.
"""

from __future__ import annotations

import dataclasses
import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from roots_lab.algorithms.solver import run_method
from roots_lab.algorithms.trace import RealFunction, RootTrace, StopReason
from roots_lab.config import SolverConfig
from roots_lab.data.methods import (
    MAX_ITERATIONS,
    STATUS_OK,
    Method,
    get_display_name,
    list_methods,
)
from roots_lab.errors import RootFindingError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MethodResult:
    """Summary of one successful method run."""

    method: Method
    """Method that produced the result."""

    iterations: int
    """Iterations performed."""

    root: float
    """Final root estimate."""

    f_root: float
    """f(root)."""

    relative_error: float
    """Last relative approximate error in percent."""

    stop_reason: StopReason
    """Termination cause."""

    is_best: bool = False
    """Set on the single winner after all methods completed."""

    trace: RootTrace | None = None
    """Full trace, when the comparison was asked to keep it."""

    @classmethod
    def from_trace(cls, trace: RootTrace, *, keep_trace: bool = False) -> MethodResult:
        """Summarize a RootTrace."""
        return cls(
            method=trace.method,
            iterations=trace.iterations,
            root=trace.root,
            f_root=trace.f_root,
            relative_error=trace.relative_error,
            stop_reason=trace.stop_reason,
            trace=trace if keep_trace else None,
        )

    @property
    def ok(self) -> bool:
        return True

    @property
    def status(self) -> str:
        return STATUS_OK

    @property
    def display_name(self) -> str:
        return get_display_name(self.method)


@dataclass(frozen=True, slots=True)
class MethodFailure:
    """A method that could not be applied or broke down."""

    method: Method
    """Method that failed."""

    error: Exception
    """The error raised by the run, a RootFindingError or anything f raised."""

    @property
    def ok(self) -> bool:
        return False

    @property
    def is_best(self) -> bool:
        return False

    @property
    def status(self) -> str:
        """Failure description shown in place of "OK"."""
        return str(self.error) or type(self.error).__name__

    @property
    def error_kind(self) -> str:
        """Exception class name, e.g. 'InvalidBracketError'."""
        return type(self.error).__name__

    @property
    def display_name(self) -> str:
        return get_display_name(self.method)


MethodOutcome = MethodResult | MethodFailure


def ranking_key(result: MethodResult) -> tuple[int, float, float]:
    """Sort key for the efficiency ranking; NaN compares as +inf."""
    return (
        result.iterations,
        _nan_last(abs(result.f_root)),
        _nan_last(abs(result.relative_error)),
    )


def select_best(outcomes: Sequence[MethodOutcome]) -> MethodResult | None:
    """Pick the best successful result, or None when none succeeded.

    Exact ties keep the earlier method in comparison order.
    """
    successes = [o for o in outcomes if isinstance(o, MethodResult)]
    if not successes:
        return None
    return min(successes, key=ranking_key)


@dataclass(frozen=True, slots=True)
class ComparisonResult:
    """Outcome of comparing all methods on one problem.

    Example:
        >>> result = compare_methods(lambda x: x**3 - x - 2, 1.0, 2.0, 1e-6)
        >>> result.best.method
        <Method.NEWTON: 'newton'>
    """

    outcomes: tuple[MethodOutcome, ...]
    """One entry per method, in comparison order."""

    best: MethodResult | None
    """Flagged winner, None when no method was applicable."""

    @property
    def has_applicable_method(self) -> bool:
        return self.best is not None

    @property
    def successes(self) -> tuple[MethodResult, ...]:
        return tuple(o for o in self.outcomes if isinstance(o, MethodResult))

    @property
    def failures(self) -> tuple[MethodFailure, ...]:
        return tuple(o for o in self.outcomes if isinstance(o, MethodFailure))

    def get(self, method: Method) -> MethodOutcome:
        """Outcome for a given method."""
        for outcome in self.outcomes:
            if outcome.method is method:
                return outcome
        msg = f"{method.value} was not part of this comparison"
        raise KeyError(msg)

    def summary(self) -> str:
        """One-line verdict, as shown under the comparison table."""
        if self.best is None:
            return "Best method: N/A (no method applied to the given inputs)"
        return (
            f"Best method: {self.best.display_name} "
            f"(iterations: {self.best.iterations})"
        )

    def as_rows(self) -> list[dict[str, Any]]:
        """Return one dict per method, suitable for tables or JSON export.

        Failed methods carry NaN numbers, zero iterations and the error
        message as status.
        """
        rows: list[dict[str, Any]] = []
        nan = float("nan")
        for outcome in self.outcomes:
            if isinstance(outcome, MethodResult):
                rows.append(
                    {
                        "method": outcome.display_name,
                        "iterations": outcome.iterations,
                        "root": outcome.root,
                        "f_root": outcome.f_root,
                        "relative_error": outcome.relative_error,
                        "status": outcome.status,
                        "is_best": outcome.is_best,
                    }
                )
            else:
                rows.append(
                    {
                        "method": outcome.display_name,
                        "iterations": 0,
                        "root": nan,
                        "f_root": nan,
                        "relative_error": nan,
                        "status": outcome.status,
                        "is_best": False,
                    }
                )
        return rows


def compare_methods(
    f: RealFunction,
    lower: float,
    upper: float | None,
    tolerance: float,
    *,
    derivative: RealFunction | None = None,
    max_iterations: int = MAX_ITERATIONS,
    keep_traces: bool = False,
    methods: Sequence[Method] | None = None,
) -> ComparisonResult:
    """Run all (or the given) methods and rank them.

    Args:
        f: Function whose root is sought.
        lower: Lower bracket end / x0.
        upper: Upper bracket end / x1. When None, the two-point methods fail
            with InvalidInputError and only Newton can succeed.
        tolerance: Relative-error threshold as a fraction.
        derivative: Analytic f'(x) for Newton (numeric when None).
        max_iterations: Iteration cap per method.
        keep_traces: Attach each successful run's full trace to its result.
        methods: Subset to run (default: all four, in comparison order).

    Returns:
        ComparisonResult; never raises for per-method failures.

    Raises:
        InvalidInputError: Caller-side input errors (bad bounds, tolerance).
    """
    SolverConfig(
        method=Method.NEWTON,
        lower=lower,
        upper=upper,
        tolerance=tolerance,
        max_iterations=max_iterations,
    ).validate(require_upper=False)

    selected = list(methods) if methods is not None else list_methods()
    outcomes: list[MethodOutcome] = []

    for method in selected:
        try:
            trace = run_method(
                method,
                f,
                lower,
                upper,
                tolerance,
                derivative=derivative,
                max_iterations=max_iterations,
                keep_trace=keep_traces,
            )
        except RootFindingError as exc:
            logger.info("%s not applicable: %s", method.value, exc)
            outcomes.append(MethodFailure(method=method, error=exc))
        except Exception as exc:
            # raised directly by f or f'
            logger.warning(
                "%s broke down: %s: %s", method.value, type(exc).__name__, exc
            )
            outcomes.append(MethodFailure(method=method, error=exc))
        else:
            outcomes.append(MethodResult.from_trace(trace, keep_trace=keep_traces))

    best = select_best(outcomes)
    if best is not None:
        flagged = dataclasses.replace(best, is_best=True)
        outcomes = [flagged if o is best else o for o in outcomes]
        best = flagged
        logger.debug("Best method: %s (%d iterations)", best.method.value, best.iterations)
    else:
        logger.info("No applicable method among %s", [m.value for m in selected])

    return ComparisonResult(outcomes=tuple(outcomes), best=best)


def compare(
    f: RealFunction,
    config: SolverConfig,
    derivative: RealFunction | None = None,
    *,
    keep_traces: bool = False,
) -> ComparisonResult:
    """Compare all methods using the bounds and tolerance from ``config``.

    ``config.method`` is ignored.
    """
    config.validate(require_upper=False)
    return compare_methods(
        f,
        config.lower,
        config.upper,
        config.effective_tolerance,
        derivative=derivative,
        max_iterations=config.max_iterations,
        keep_traces=keep_traces,
    )


def _nan_last(value: float) -> float:
    return math.inf if math.isnan(value) else value


__all__ = [
    "ComparisonResult",
    "MethodFailure",
    "MethodOutcome",
    "MethodResult",
    "compare",
    "compare_methods",
    "ranking_key",
    "select_best",
]

"""Run configuration: method choice, starting points and tolerance.

``SolverConfig`` is built once by the caller (CLI, notebook, tests) and
passed into the engine; nothing else carries run settings.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass

from roots_lab.data.methods import MAX_ITERATIONS, Method, get_spec, parse_method
from roots_lab.errors import InvalidInputError


@dataclass(frozen=True, slots=True)
class SolverConfig:
    """Configuration for a single run or a comparison.

    Args:
        method: Method for single runs (ignored by comparisons).
        lower: Lower bracket end, x0 for secant and Newton.
        upper: Upper bracket end, x1 for secant; unused by Newton.
        tolerance: Stopping threshold for the relative approximate error.
        tolerance_is_percent: Treat ``tolerance`` as a percentage.
        max_iterations: Iteration cap.

    Example:
        >>> config = SolverConfig(Method.BISECTION, 1.0, 2.0, tolerance=0.01,
        ...                       tolerance_is_percent=True)
        >>> config.effective_tolerance
        0.0001
    """

    method: Method
    lower: float
    upper: float | None = None
    tolerance: float = 1e-4
    tolerance_is_percent: bool = False
    max_iterations: int = MAX_ITERATIONS

    @classmethod
    def create(
        cls,
        method: Method | str,
        lower: float,
        upper: float | None = None,
        *,
        tolerance: float = 1e-4,
        tolerance_is_percent: bool = False,
        max_iterations: int = MAX_ITERATIONS,
    ) -> SolverConfig:
        """Build and validate a config, accepting a method name string."""
        try:
            parsed = parse_method(method)
        except ValueError as exc:
            raise InvalidInputError(str(exc)) from exc

        config = cls(
            method=parsed,
            lower=lower,
            upper=upper,
            tolerance=tolerance,
            tolerance_is_percent=tolerance_is_percent,
            max_iterations=max_iterations,
        )
        config.validate()
        return config

    @property
    def effective_tolerance(self) -> float:
        """Tolerance as a fraction, ready for the engine."""
        if self.tolerance_is_percent:
            return self.tolerance / 100.0
        return self.tolerance

    def validate(self, *, require_upper: bool | None = None) -> None:
        """Check caller-side input before any method runs.

        Args:
            require_upper: Force (or waive) the upper-bound check. By default
                it is required when the configured method uses two points.

        Raises:
            InvalidInputError: On non-finite bounds, a missing upper bound,
                a non-positive tolerance or a non-positive iteration cap.
        """
        if require_upper is None:
            require_upper = get_spec(self.method).uses_upper

        if not _is_finite_number(self.lower):
            msg = f"Lower bound / x0 must be a finite number, got {self.lower!r}"
            raise InvalidInputError(msg)

        if self.upper is None:
            if require_upper:
                msg = f"{get_spec(self.method).display_name} requires an upper bound / x1"
                raise InvalidInputError(msg)
        elif not _is_finite_number(self.upper):
            msg = f"Upper bound / x1 must be a finite number, got {self.upper!r}"
            raise InvalidInputError(msg)

        tol = self.effective_tolerance
        if not _is_finite_number(tol) or tol <= 0:
            msg = f"Tolerance must be > 0, got {self.tolerance!r}"
            raise InvalidInputError(msg)

        if self.max_iterations < 1:
            msg = f"max_iterations must be at least 1, got {self.max_iterations}"
            raise InvalidInputError(msg)


def _is_finite_number(value: object) -> bool:
    # numbers.Real also admits numpy scalars (np.float64, np.int64)
    return (
        isinstance(value, numbers.Real)
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


__all__ = ["SolverConfig"]

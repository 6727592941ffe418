"""Central-difference derivative used when no analytic f'(x) is supplied."""

from __future__ import annotations

from typing import TYPE_CHECKING

from roots_lab.data.methods import DERIVATIVE_STEP

if TYPE_CHECKING:
    from roots_lab.algorithms.trace import RealFunction


def numeric_derivative(f: RealFunction, x: float) -> float:
    """Approximate f'(x) with a centered finite difference.

    Uses (f(x + h) - f(x - h)) / (2h) with h = 2^-26. NaN/Inf produced by f
    pass straight through; no guard against cancellation beyond the step
    choice.

    Example:
        >>> round(numeric_derivative(lambda x: x * x, 3.0), 6)
        6.0
    """
    h = DERIVATIVE_STEP
    return (float(f(x + h)) - float(f(x - h))) / (2.0 * h)


def resolve_derivative(
    f: RealFunction,
    derivative: RealFunction | None = None,
) -> RealFunction:
    """Return the analytic derivative if given, else a numeric stand-in for f."""
    if derivative is not None:
        return derivative

    def df(x: float) -> float:
        return numeric_derivative(f, x)

    return df


__all__ = ["numeric_derivative", "resolve_derivative"]

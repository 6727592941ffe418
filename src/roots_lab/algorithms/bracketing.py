"""Bracketing methods: bisection and false position (regula falsi).

Both keep an interval [x_lower, x_upper] whose endpoints have opposite signs
and shrink it every iteration. They differ only in how the new estimate is
placed inside the bracket:

    bisection:       xr = (x_lower + x_upper) / 2
    false position:  xr = x_upper - f(x_upper) (x_lower - x_upper)
                               / (f(x_lower) - f(x_upper))

After evaluating f(xr) the endpoint on the same side as xr is replaced:
if f(x_lower) f(xr) < 0 the root lies in [x_lower, xr], otherwise in
[xr, x_upper].

False position is the plain variant; one endpoint may never move for convex
functions and the iteration cap bounds that case.

References:
- Chapra & Canale: "Numerical Methods for Engineers" (7th ed.), Ch. 5
"""

from __future__ import annotations

from collections.abc import Callable

from roots_lab.algorithms.trace import RealFunction, RootTrace, TraceRecorder
from roots_lab.data.methods import MAX_ITERATIONS, Method, get_display_name
from roots_lab.errors import DivisionByZeroError, InvalidBracketError

PlacementRule = Callable[[float, float, float, float], float]


def _midpoint(x_lower: float, f_lower: float, x_upper: float, f_upper: float) -> float:
    return (x_lower + x_upper) / 2.0


def _interpolate(x_lower: float, f_lower: float, x_upper: float, f_upper: float) -> float:
    denominator = f_lower - f_upper
    if denominator == 0.0:
        msg = (
            f"{get_display_name(Method.FALSE_POSITION)}: f(x_lower) = f(x_upper) "
            f"= {f_lower!r}, division by zero"
        )
        raise DivisionByZeroError(msg)
    return x_upper - f_upper * (x_lower - x_upper) / denominator


_PLACEMENT: dict[Method, PlacementRule] = {
    Method.BISECTION: _midpoint,
    Method.FALSE_POSITION: _interpolate,
}


def check_bracket(
    f: RealFunction,
    x_lower: float,
    x_upper: float,
    method: Method = Method.BISECTION,
) -> tuple[float, float]:
    """Evaluate f at both ends and verify the sign change.

    Returns:
        (f(x_lower), f(x_upper))

    Raises:
        InvalidBracketError: If f(x_lower) * f(x_upper) > 0.
    """
    f_lower = float(f(x_lower))
    f_upper = float(f(x_upper))
    if f_lower * f_upper > 0:
        msg = (
            f"{get_display_name(method)}: no sign change in "
            f"[{x_lower!r}, {x_upper!r}] (f = {f_lower!r}, {f_upper!r})"
        )
        raise InvalidBracketError(msg)
    return f_lower, f_upper


def run_bracketing(
    method: Method,
    f: RealFunction,
    x_lower: float,
    x_upper: float,
    tolerance: float,
    *,
    max_iterations: int = MAX_ITERATIONS,
    keep_trace: bool = True,
) -> RootTrace:
    """Run a bracketing method to termination.

    Args:
        method: Method.BISECTION or Method.FALSE_POSITION.
        f: Function whose root is sought.
        x_lower: Lower bracket end.
        x_upper: Upper bracket end.
        tolerance: Relative-error threshold as a fraction (not percent).
        max_iterations: Iteration cap (normal termination when reached).
        keep_trace: Retain every iteration row.

    Returns:
        RootTrace with the estimate and (optionally) the full table.

    Raises:
        InvalidBracketError: If there is no sign change; raised before any
            iteration is recorded.
        DivisionByZeroError: False position with f(x_lower) == f(x_upper).
    """
    if method not in _PLACEMENT:
        msg = f"{method.value} is not a bracketing method"
        raise ValueError(msg)
    place = _PLACEMENT[method]

    recorder = TraceRecorder(
        method, tolerance, max_iterations=max_iterations, keep_trace=keep_trace
    )
    f_lower, f_upper = check_bracket(f, x_lower, x_upper, method)

    for _ in recorder.iterations():
        xr = place(x_lower, f_lower, x_upper, f_upper)
        f_xr = float(f(xr))

        if recorder.record(x_lower, f_lower, x_upper, f_upper, xr, f_xr):
            break

        # Narrow toward the half that still holds the sign change
        if f_lower * f_xr < 0:
            x_upper, f_upper = xr, f_xr
        else:
            x_lower, f_lower = xr, f_xr

    return recorder.finish()


def bisection(
    f: RealFunction,
    x_lower: float,
    x_upper: float,
    tolerance: float,
    *,
    max_iterations: int = MAX_ITERATIONS,
    keep_trace: bool = True,
) -> RootTrace:
    """Bisection method on [x_lower, x_upper]."""
    return run_bracketing(
        Method.BISECTION,
        f,
        x_lower,
        x_upper,
        tolerance,
        max_iterations=max_iterations,
        keep_trace=keep_trace,
    )


def false_position(
    f: RealFunction,
    x_lower: float,
    x_upper: float,
    tolerance: float,
    *,
    max_iterations: int = MAX_ITERATIONS,
    keep_trace: bool = True,
) -> RootTrace:
    """False position (regula falsi) on [x_lower, x_upper]."""
    return run_bracketing(
        Method.FALSE_POSITION,
        f,
        x_lower,
        x_upper,
        tolerance,
        max_iterations=max_iterations,
        keep_trace=keep_trace,
    )


__all__ = [
    "bisection",
    "check_bracket",
    "false_position",
    "run_bracketing",
]

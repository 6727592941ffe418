"""Open methods: secant and Newton-Raphson.

Neither needs a sign change. Both converge superlinearly near a simple root
(order ~1.618 for secant, 2 for Newton) but may diverge from a poor start;
the iteration cap bounds that case.

    secant:  xr = x1 - f(x1) (x0 - x1) / (f(x0) - f(x1)),  then x0 <- x1, x1 <- xr
    newton:  x_next = x - f(x) / f'(x)

References:
- Chapra & Canale: "Numerical Methods for Engineers" (7th ed.), Ch. 6
"""

from __future__ import annotations

from roots_lab.algorithms.derivative import resolve_derivative
from roots_lab.algorithms.trace import RealFunction, RootTrace, TraceRecorder
from roots_lab.data.methods import MAX_ITERATIONS, Method, get_display_name
from roots_lab.errors import DivisionByZeroError, ZeroDerivativeError

_NAN = float("nan")


def secant(
    f: RealFunction,
    x0: float,
    x1: float,
    tolerance: float,
    *,
    max_iterations: int = MAX_ITERATIONS,
    keep_trace: bool = True,
) -> RootTrace:
    """Secant method from the starting pair (x0, x1).

    Each row records the pair in use (x0 in the lower slots, x1 in the upper
    slots) and the new estimate.

    Args:
        f: Function whose root is sought.
        x0: First starting point.
        x1: Second starting point.
        tolerance: Relative-error threshold as a fraction.
        max_iterations: Iteration cap.
        keep_trace: Retain every iteration row.

    Raises:
        DivisionByZeroError: When f(x0) == f(x1) at any iteration.
    """
    recorder = TraceRecorder(
        Method.SECANT, tolerance, max_iterations=max_iterations, keep_trace=keep_trace
    )
    f0 = float(f(x0))
    f1 = float(f(x1))

    for _ in recorder.iterations():
        denominator = f0 - f1
        if denominator == 0.0:
            msg = (
                f"{get_display_name(Method.SECANT)}: f(x0) = f(x1) = {f0!r} "
                f"at x0={x0!r}, x1={x1!r}, division by zero"
            )
            raise DivisionByZeroError(msg)

        xr = x1 - f1 * (x0 - x1) / denominator
        f_xr = float(f(xr))

        if recorder.record(x0, f0, x1, f1, xr, f_xr):
            break

        x0, f0 = x1, f1
        x1, f1 = xr, f_xr

    return recorder.finish()


def newton(
    f: RealFunction,
    x0: float,
    tolerance: float,
    *,
    derivative: RealFunction | None = None,
    max_iterations: int = MAX_ITERATIONS,
    keep_trace: bool = True,
) -> RootTrace:
    """Newton-Raphson from x0.

    Rows hold the current x and f(x) in the lower slots; the upper slots are
    NaN.

    Args:
        f: Function whose root is sought.
        x0: Starting point.
        tolerance: Relative-error threshold as a fraction.
        derivative: Analytic f'(x); central differences when None.
        max_iterations: Iteration cap.
        keep_trace: Retain every iteration row.

    Raises:
        ZeroDerivativeError: When f'(x) == 0 at the current estimate.
    """
    df = resolve_derivative(f, derivative)
    recorder = TraceRecorder(
        Method.NEWTON, tolerance, max_iterations=max_iterations, keep_trace=keep_trace
    )
    x = x0

    for _ in recorder.iterations():
        fx = float(f(x))
        dfx = float(df(x))
        if dfx == 0.0:
            msg = (
                f"{get_display_name(Method.NEWTON)}: f'(x) = 0 at x={x!r}. "
                "Try another x0 or supply f'(x)"
            )
            raise ZeroDerivativeError(msg)

        x_next = x - fx / dfx
        f_next = float(f(x_next))

        stop = recorder.record(x, fx, _NAN, _NAN, x_next, f_next)
        x = x_next
        if stop:
            break

    return recorder.finish()


__all__ = ["newton", "secant"]

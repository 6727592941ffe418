"""Single-method entry point driven by a SolverConfig."""

from __future__ import annotations

import logging

from roots_lab.algorithms.bracketing import run_bracketing
from roots_lab.algorithms.open_methods import newton, secant
from roots_lab.algorithms.trace import RealFunction, RootTrace
from roots_lab.config import SolverConfig
from roots_lab.data.methods import MAX_ITERATIONS, Method, get_display_name
from roots_lab.errors import InvalidInputError

logger = logging.getLogger(__name__)


def run_method(
    method: Method,
    f: RealFunction,
    lower: float,
    upper: float | None,
    tolerance: float,
    *,
    derivative: RealFunction | None = None,
    max_iterations: int = MAX_ITERATIONS,
    keep_trace: bool = True,
) -> RootTrace:
    """Dispatch one method with already-validated inputs.

    ``tolerance`` is a fraction. ``upper`` is ignored by Newton and must not
    be None for the other methods (InvalidInputError otherwise).
    """
    if method is Method.NEWTON:
        return newton(
            f,
            lower,
            tolerance,
            derivative=derivative,
            max_iterations=max_iterations,
            keep_trace=keep_trace,
        )

    if upper is None:
        msg = f"{get_display_name(method)} requires an upper bound / x1"
        raise InvalidInputError(msg)

    if method is Method.SECANT:
        return secant(
            f,
            lower,
            upper,
            tolerance,
            max_iterations=max_iterations,
            keep_trace=keep_trace,
        )

    return run_bracketing(
        method,
        f,
        lower,
        upper,
        tolerance,
        max_iterations=max_iterations,
        keep_trace=keep_trace,
    )


def solve(
    f: RealFunction,
    config: SolverConfig,
    derivative: RealFunction | None = None,
) -> RootTrace:
    """Run the configured method and return its full trace.

    Errors propagate unchanged; no partial trace is returned.

    Args:
        f: Function whose root is sought.
        config: Method, starting points and tolerance.
        derivative: Analytic f'(x) for Newton (numeric when None).

    Returns:
        RootTrace with every iteration row.

    Raises:
        InvalidInputError: If the config is invalid.
        InvalidBracketError: No sign change for a bracketing method.
        DivisionByZeroError: Secant/false position denominator vanished.
        ZeroDerivativeError: Newton's derivative vanished.
    """
    config.validate()
    logger.debug(
        "Solving with %s from (%r, %r), tol=%r",
        config.method.value,
        config.lower,
        config.upper,
        config.effective_tolerance,
    )
    return run_method(
        config.method,
        f,
        config.lower,
        config.upper,
        config.effective_tolerance,
        derivative=derivative,
        max_iterations=config.max_iterations,
    )


__all__ = ["run_method", "solve"]

"""
Root-Finding Method Definitions - Single Source of Truth

This module defines the four supported iterative methods with their input
requirements, display names, convergence characteristics and the engine-wide
constants shared by every method.

References:
    - Chapra & Canale: "Numerical Methods for Engineers" (7th ed.), Part 2
    - Burden & Faires: "Numerical Analysis" (9th ed.), Chapter 2
"""

from dataclasses import dataclass
from enum import Enum


class Method(Enum):
    """Supported root-finding methods, in comparison order."""

    BISECTION = "bisection"
    FALSE_POSITION = "false_position"
    SECANT = "secant"
    NEWTON = "newton"


@dataclass(frozen=True, slots=True)
class MethodSpec:
    """Specification for a root-finding method."""

    method: Method
    display_name: str
    requires_bracket: bool  # f(lower) * f(upper) <= 0 must hold
    uses_upper: bool  # False for single-point methods
    convergence_order: float
    lower_label: str
    upper_label: str

    @property
    def initial_points(self) -> int:
        """Number of starting points the method consumes."""
        return 2 if self.uses_upper else 1


# =============================================================================
# ENGINE CONSTANTS
# =============================================================================

MAX_ITERATIONS = 1000
"""Hard iteration cap; reaching it is a normal termination."""

DERIVATIVE_STEP = 2.0**-26
"""Central-difference step, roughly sqrt of FP64 machine epsilon."""

STATUS_OK = "OK"
"""Status string of a successful comparator run."""


# =============================================================================
# METHOD SPECIFICATIONS
# =============================================================================
# Convergence orders are asymptotic rates for simple roots:
# linear for the bracketing methods, golden ratio for secant, quadratic for
# Newton.

_METHOD_SPECS: dict[Method, MethodSpec] = {
    Method.BISECTION: MethodSpec(
        method=Method.BISECTION,
        display_name="Bisection",
        requires_bracket=True,
        uses_upper=True,
        convergence_order=1.0,
        lower_label="x_lower",
        upper_label="x_upper",
    ),
    Method.FALSE_POSITION: MethodSpec(
        method=Method.FALSE_POSITION,
        display_name="False position",
        requires_bracket=True,
        uses_upper=True,
        convergence_order=1.0,
        lower_label="x_lower",
        upper_label="x_upper",
    ),
    Method.SECANT: MethodSpec(
        method=Method.SECANT,
        display_name="Secant",
        requires_bracket=False,
        uses_upper=True,
        convergence_order=1.618,
        lower_label="x0",
        upper_label="x1",
    ),
    Method.NEWTON: MethodSpec(
        method=Method.NEWTON,
        display_name="Newton-Raphson",
        requires_bracket=False,
        uses_upper=False,
        convergence_order=2.0,
        lower_label="x0",
        upper_label="-",
    ),
}


# =============================================================================
# PUBLIC API
# =============================================================================


def get_spec(method: Method | str) -> MethodSpec:
    """
    Get the full specification for a method.

    Args:
        method: Method (enum or string like 'bisection', 'False-Position')

    Returns:
        MethodSpec with all method properties

    Raises:
        ValueError: If method is unknown

    Example:
        >>> get_spec("newton").display_name
        'Newton-Raphson'
    """
    return _METHOD_SPECS[parse_method(method)]


def get_display_name(method: Method | str) -> str:
    """Human-readable name used in tables and status messages."""
    return get_spec(method).display_name


def list_methods() -> list[Method]:
    """
    List methods in the fixed order the comparator runs them.

    Returns:
        [BISECTION, FALSE_POSITION, SECANT, NEWTON]
    """
    return list(Method)


def parse_method(method: Method | str) -> Method:
    """
    Parse a string into a Method enum.

    Accepts enum values, case-insensitive, with '-' or ' ' in place of '_'.
    A few common aliases ('regula_falsi', 'newton_raphson') are recognized.
    """
    if isinstance(method, Method):
        return method

    normalized = method.strip().lower().replace("-", "_").replace(" ", "_")
    normalized = _ALIASES.get(normalized, normalized)

    for candidate in Method:
        if candidate.value == normalized:
            return candidate

    valid = [m.value for m in Method]
    msg = f"Unknown method: '{method}'. Valid: {valid}"
    raise ValueError(msg)


# =============================================================================
# INTERNAL HELPERS
# =============================================================================

_ALIASES: dict[str, str] = {
    "regula_falsi": "false_position",
    "falsi": "false_position",
    "newton_raphson": "newton",
}

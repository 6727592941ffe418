"""Numerical algorithms module.

This module contains implementations of:
- Bisection and false position (bracketing methods)
- Secant and Newton-Raphson (open methods)
- Central-difference numeric derivative
- Shared iteration bookkeeping and termination policy
- Multi-method comparison and efficiency ranking
"""

from roots_lab.algorithms.bracketing import (
    bisection,
    check_bracket,
    false_position,
    run_bracketing,
)
from roots_lab.algorithms.comparison import (
    ComparisonResult,
    MethodFailure,
    MethodOutcome,
    MethodResult,
    compare,
    compare_methods,
    ranking_key,
    select_best,
)
from roots_lab.algorithms.derivative import numeric_derivative, resolve_derivative
from roots_lab.algorithms.open_methods import newton, secant
from roots_lab.algorithms.solver import run_method, solve
from roots_lab.algorithms.trace import (
    IterationRecord,
    RealFunction,
    RootTrace,
    StopReason,
    TraceRecorder,
    relative_error,
)

__all__ = [
    # Bracketing methods
    "bisection",
    "check_bracket",
    "false_position",
    "run_bracketing",
    # Open methods
    "newton",
    "secant",
    # Derivative
    "numeric_derivative",
    "resolve_derivative",
    # Single runs
    "run_method",
    "solve",
    # Trace bookkeeping
    "IterationRecord",
    "RealFunction",
    "RootTrace",
    "StopReason",
    "TraceRecorder",
    "relative_error",
    # Comparison
    "ComparisonResult",
    "MethodFailure",
    "MethodOutcome",
    "MethodResult",
    "compare",
    "compare_methods",
    "ranking_key",
    "select_best",
]

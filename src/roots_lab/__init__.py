"""Roots Lab: classical root-finding methods with traces and comparisons."""

__version__ = "0.1.0"

from roots_lab.algorithms import (
    ComparisonResult,
    IterationRecord,
    MethodResult,
    RootTrace,
    compare,
    compare_methods,
    solve,
)
from roots_lab.config import SolverConfig
from roots_lab.data.methods import Method

__all__ = [
    "__version__",
    "ComparisonResult",
    "IterationRecord",
    "Method",
    "MethodResult",
    "RootTrace",
    "SolverConfig",
    "compare",
    "compare_methods",
    "solve",
]

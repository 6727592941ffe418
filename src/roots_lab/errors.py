"""Exception taxonomy for the root-finding engine.

Single-method runs propagate these to the caller. The comparator catches
``RootFindingError`` per method and records it as that method's status.
"""


class RootFindingError(Exception):
    """Base exception for root finding errors."""


class InvalidBracketError(RootFindingError):
    """Raised when a bracketing method's interval has no sign change."""


class DivisionByZeroError(RootFindingError):
    """Raised when an interpolation denominator f(a) - f(b) is exactly zero."""


class ZeroDerivativeError(RootFindingError):
    """Raised when Newton's derivative vanishes at the current estimate."""


class InvalidInputError(RootFindingError, ValueError):
    """Raised for malformed or missing caller input (bounds, tolerance)."""


class ExpressionError(InvalidInputError):
    """Raised when function text cannot be turned into a callable."""


__all__ = [
    "DivisionByZeroError",
    "ExpressionError",
    "InvalidBracketError",
    "InvalidInputError",
    "RootFindingError",
    "ZeroDerivativeError",
]

"""Function adapter: turn user-typed expression text into f(x) callables.

Parsing and evaluation are delegated to sympy; this module only normalizes a
few habits from calculator-style input and guards the result:

- ``^`` is accepted as the power operator (``x^2`` -> ``x**2``)
- ``ln(...)`` is the natural logarithm
- ``pi`` and ``e`` are the usual constants
- ``x`` is the only free variable

Evaluation goes through numpy, so points where the expression is undefined
return NaN/Inf instead of raising.
"""

from __future__ import annotations

import re

import numpy as np
import sympy as sp

from roots_lab.algorithms.trace import RealFunction
from roots_lab.errors import ExpressionError

X_SYMBOL = sp.Symbol("x", real=True)

_LOCALS: dict[str, object] = {
    "x": X_SYMBOL,
    "e": sp.E,
    "pi": sp.pi,
}

_LN_PATTERN = re.compile(r"\bln\s*\(", re.IGNORECASE)


def normalize_expression(text: str) -> str:
    """Apply the calculator-style rewrites (``^`` and ``ln``)."""
    text = text.strip().replace("^", "**")
    return _LN_PATTERN.sub("log(", text)


def parse_expression(text: str) -> sp.Expr:
    """Parse expression text into a sympy expression in ``x``.

    Raises:
        ExpressionError: If the text is empty, cannot be parsed, or uses a
            variable other than x.
    """
    if not text or not text.strip():
        msg = "Function expression cannot be empty"
        raise ExpressionError(msg)

    normalized = normalize_expression(text)
    try:
        expr = sp.sympify(normalized, locals=_LOCALS)
    except Exception as exc:
        # sympify evaluates the text, so anything Python can raise may surface
        msg = f"Invalid function expression: {text!r}"
        raise ExpressionError(msg) from exc

    if not isinstance(expr, sp.Expr):
        msg = f"Expression does not describe a real function: {text!r}"
        raise ExpressionError(msg)

    extra = sorted(str(s) for s in expr.free_symbols - {X_SYMBOL})
    if extra:
        msg = f"Unknown variable(s) {extra} in {text!r}; only 'x' is allowed"
        raise ExpressionError(msg)

    return expr


def build_function(text: str) -> RealFunction:
    """Convert expression text into a callable f(x) -> float.

    Raises:
        ExpressionError: If the text does not parse or cannot be compiled,
            and from the returned callable if evaluation itself fails
            (unsupported function, non-numeric result).

    Example:
        >>> f = build_function("x^2 - 2")
        >>> f(3.0)
        7.0
    """
    expr = parse_expression(text)
    if expr.has(sp.zoo, sp.nan):
        msg = f"Expression is undefined everywhere: {text!r}"
        raise ExpressionError(msg)

    try:
        compiled = sp.lambdify(X_SYMBOL, expr, modules="numpy")
    except Exception as exc:
        msg = f"Cannot compile function expression {text!r}: {exc}"
        raise ExpressionError(msg) from exc

    def evaluate(x: float) -> float:
        try:
            with np.errstate(all="ignore"):
                value = compiled(np.float64(x))
            return _to_real(value)
        except Exception as exc:
            msg = f"Cannot evaluate {text!r} at x={x!r}: {exc}"
            raise ExpressionError(msg) from exc

    return evaluate


def build_derivative(text: str | None) -> RealFunction | None:
    """Build f'(x) from text; None or blank text means "use numeric".

    Example:
        >>> build_derivative("") is None
        True
    """
    if text is None or not text.strip():
        return None
    return build_function(text)


def _to_real(value: object) -> float:
    """Convert a numpy/sympy result into a float; complex values become NaN."""
    result = complex(value)  # type: ignore[arg-type]
    if result.imag != 0.0:
        return float("nan")
    return result.real


__all__ = [
    "X_SYMBOL",
    "build_derivative",
    "build_function",
    "normalize_expression",
    "parse_expression",
]

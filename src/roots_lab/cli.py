"""
Command-line interface for Roots Lab.

Usage:
    roots-lab methods            Show the available root-finding methods
    roots-lab presets            Show the bundled example problems
    roots-lab solve EXPR         Run one method and print its iteration table
    roots-lab compare EXPR       Run every method and rank them
"""

import logging
import math
from typing import Annotated, NoReturn

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from roots_lab import __version__
from roots_lab.algorithms import (
    ComparisonResult,
    RealFunction,
    RootTrace,
    StopReason,
    compare,
    solve,
)
from roots_lab.config import SolverConfig
from roots_lab.data import (
    MAX_ITERATIONS,
    STATUS_OK,
    Method,
    get_preset,
    get_spec,
    list_methods,
    list_presets,
)
from roots_lab.errors import RootFindingError
from roots_lab.expressions import build_derivative, build_function

app = typer.Typer(
    name="roots-lab",
    help="Classical root-finding methods with iteration tables and comparisons",
    add_completion=False,
)
console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"roots-lab version {__version__}")
        raise typer.Exit()


@app.callback()  # type: ignore[misc]
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Log engine decisions (debug level)."),
    ] = False,
) -> None:
    """Roots Lab - Bisection, false position, secant and Newton-Raphson."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


@app.command()  # type: ignore[misc]
def methods() -> None:
    """Display the available methods and the inputs they use."""
    table = Table(title="Root-Finding Methods")

    table.add_column("Method", style="cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("Inputs")
    table.add_column("Sign change", justify="center")
    table.add_column("Order", justify="right")

    for method in list_methods():
        spec = get_spec(method)
        labels = (spec.lower_label, spec.upper_label)[: spec.initial_points]
        table.add_row(
            method.value,
            spec.display_name,
            ", ".join(labels),
            "✓" if spec.requires_bracket else "✗",
            f"{spec.convergence_order:.3g}",
        )

    console.print(table)


@app.command()  # type: ignore[misc]
def presets() -> None:
    """Display the bundled example problems."""
    table = Table(title="Example Problems")

    table.add_column("Preset", style="cyan", no_wrap=True)
    table.add_column("f(x)")
    table.add_column("f'(x)")
    table.add_column("Interval", justify="right")
    table.add_column("Method")

    for preset in list_presets():
        table.add_row(
            preset.name,
            preset.expression,
            preset.derivative or "numeric",
            f"[{preset.lower:g}, {preset.upper:g}]",
            preset.method.value,
        )

    console.print(table)


ExpressionArg = Annotated[
    str | None,
    typer.Argument(help="f(x), e.g. 'x^2 - 2' (omit when using --preset)"),
]
DerivativeOpt = Annotated[
    str | None,
    typer.Option("--derivative", "-d", help="Analytic f'(x); numeric if omitted"),
]
LowerOpt = Annotated[
    float | None,
    typer.Option("--lower", "-a", help="Lower bound / x0"),
]
UpperOpt = Annotated[
    float | None,
    typer.Option("--upper", "-b", help="Upper bound / x1 (ignored by Newton)"),
]
ToleranceOpt = Annotated[
    float,
    typer.Option("--tol", "-t", help="Relative approximate error threshold"),
]
PercentOpt = Annotated[
    bool,
    typer.Option("--percent", help="Tolerance is given in percent"),
]
PresetOpt = Annotated[
    str | None,
    typer.Option("--preset", help="Load expression and bounds from a preset"),
]
MaxIterOpt = Annotated[
    int,
    typer.Option("--max-iter", "-i", help="Maximum iterations"),
]


@app.command(name="solve")  # type: ignore[misc]
def solve_cmd(
    expression: ExpressionArg = None,
    method: Annotated[
        str | None,
        typer.Option("--method", "-m", help="bisection, false_position, secant or newton"),
    ] = None,
    derivative: DerivativeOpt = None,
    lower: LowerOpt = None,
    upper: UpperOpt = None,
    tolerance: ToleranceOpt = 1e-4,
    percent: PercentOpt = False,
    preset: PresetOpt = None,
    max_iterations: MaxIterOpt = MAX_ITERATIONS,
) -> None:
    """Run one method and print its iteration table."""
    try:
        problem = _Problem.resolve(expression, derivative, lower, upper, preset)
        config = SolverConfig.create(
            method or problem.method.value,
            problem.lower,
            problem.upper,
            tolerance=tolerance,
            tolerance_is_percent=percent,
            max_iterations=max_iterations,
        )
        trace = solve(problem.f, config, problem.df)
    except (RootFindingError, ValueError) as exc:
        _fail(exc)

    _print_trace(trace)


@app.command(name="compare")  # type: ignore[misc]
def compare_cmd(
    expression: ExpressionArg = None,
    derivative: DerivativeOpt = None,
    lower: LowerOpt = None,
    upper: UpperOpt = None,
    tolerance: ToleranceOpt = 1e-4,
    percent: PercentOpt = False,
    preset: PresetOpt = None,
    max_iterations: MaxIterOpt = MAX_ITERATIONS,
) -> None:
    """Run every method on the same problem and rank them."""
    try:
        problem = _Problem.resolve(expression, derivative, lower, upper, preset)
        config = SolverConfig.create(
            Method.NEWTON,
            problem.lower,
            problem.upper,
            tolerance=tolerance,
            tolerance_is_percent=percent,
            max_iterations=max_iterations,
        )
        result = compare(problem.f, config, problem.df)
    except (RootFindingError, ValueError) as exc:
        _fail(exc)

    _print_comparison(result)


# =============================================================================
# HELPERS
# =============================================================================


class _Problem:
    """Function, derivative and starting points gathered from the options."""

    __slots__ = ("f", "df", "lower", "upper", "method")

    def __init__(
        self,
        f: RealFunction,
        df: RealFunction | None,
        lower: float,
        upper: float | None,
        method: Method,
    ) -> None:
        self.f = f
        self.df = df
        self.lower = lower
        self.upper = upper
        self.method = method

    @classmethod
    def resolve(
        cls,
        expression: str | None,
        derivative: str | None,
        lower: float | None,
        upper: float | None,
        preset_name: str | None,
    ) -> "_Problem":
        """Merge explicit options over an optional preset."""
        method = Method.BISECTION
        if preset_name is not None:
            preset = get_preset(preset_name)
            expression = expression or preset.expression
            derivative = derivative or preset.derivative
            lower = preset.lower if lower is None else lower
            upper = preset.upper if upper is None else upper
            method = preset.method

        if expression is None:
            msg = "Provide a function expression or --preset"
            raise ValueError(msg)
        if lower is None:
            msg = "Provide --lower (lower bound / x0)"
            raise ValueError(msg)

        return cls(
            f=build_function(expression),
            df=build_derivative(derivative),
            lower=lower,
            upper=upper,
            method=method,
        )


def _fail(exc: Exception) -> NoReturn:
    console.print(f"[red]Error:[/] {escape(str(exc))}")
    raise typer.Exit(code=1)


def _fmt(value: float, spec: str = ".6f") -> str:
    if math.isnan(value):
        return "-"
    return format(value, spec)


def _print_trace(trace: RootTrace) -> None:
    spec = get_spec(trace.method)
    table = Table(title=f"{spec.display_name} iterations")

    table.add_column("n", justify="right", style="cyan")
    table.add_column(spec.lower_label, justify="right")
    table.add_column(f"f({spec.lower_label})", justify="right")
    if spec.uses_upper:
        table.add_column(spec.upper_label, justify="right")
        table.add_column(f"f({spec.upper_label})", justify="right")
    table.add_column("xr", justify="right")
    table.add_column("f(xr)", justify="right")
    table.add_column("ea %", justify="right")

    for rec in trace.records:
        row = [str(rec.iteration), _fmt(rec.x_lower), _fmt(rec.f_lower)]
        if spec.uses_upper:
            row += [_fmt(rec.x_upper), _fmt(rec.f_upper)]
        row += [_fmt(rec.xr), _fmt(rec.f_xr), _fmt(rec.relative_error, ".4g")]
        table.add_row(*row)

    console.print(table)
    console.print(f"Method: {spec.display_name}")
    console.print(f"Root: {_fmt(trace.root)}")
    console.print(f"f(root): {_fmt(trace.f_root)}")
    console.print(f"Iterations: {trace.iterations}")
    console.print(f"Stopped by: {trace.stop_reason.value}")

    if trace.stop_reason is StopReason.ITERATION_CAP:
        console.print(
            "\n[yellow]Note:[/] iteration cap reached before the tolerance was met."
        )


def _print_comparison(result: ComparisonResult) -> None:
    table = Table(title="Method Comparison")

    table.add_column("Method", style="cyan", no_wrap=True)
    table.add_column("Iter", justify="right")
    table.add_column("Root", justify="right")
    table.add_column("f(root)", justify="right")
    table.add_column("ea %", justify="right")
    table.add_column("Status")
    table.add_column("Best", justify="center")

    for row in result.as_rows():
        ok = row["status"] == STATUS_OK
        table.add_row(
            row["method"],
            str(row["iterations"]) if ok else "-",
            _fmt(row["root"]),
            _fmt(row["f_root"]),
            _fmt(row["relative_error"], ".4g"),
            escape(row["status"]),
            "★" if row["is_best"] else "",
            style="bold green" if row["is_best"] else ("" if ok else "dim"),
        )

    console.print(table)
    console.print(result.summary())


if __name__ == "__main__":
    app()

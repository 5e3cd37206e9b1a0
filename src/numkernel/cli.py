"""
Command-line interface for numkernel.

Usage:
    numkernel info                  Show available precision contexts
    numkernel sqrt VALUE            Approximate a square root
    numkernel polar REAL IMAGINARY  Magnitude and argument of a complex number
    numkernel det "1,2;3,4"         Determinant and structure of a matrix
"""

from decimal import Decimal
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from numkernel import __version__
from numkernel.algorithms import SquareRootCalculator
from numkernel.data import (
    DEFAULT_CONTEXT,
    PrecisionContext,
    get_context,
    list_contexts,
    to_decimal,
)
from numkernel.errors import InvalidArgumentError, NumericKernelError
from numkernel.linear import DecimalMatrix, IntegerMatrix, Matrix
from numkernel.number import DecimalComplex

app = typer.Typer(
    name="numkernel",
    help="Arbitrary-precision square roots, complex numbers and matrix algebra",
    add_completion=False,
)
console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"numkernel version {__version__}")
        raise typer.Exit()


def _fail(error: NumericKernelError) -> typer.Exit:
    console.print(f"[red]Error:[/] {escape(str(error))}")
    return typer.Exit(code=1)


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
) -> None:
    """numkernel - arbitrary-precision numeric kernel."""
    pass


@app.command()  # type: ignore[misc]
def info() -> None:
    """Display the named precision contexts."""
    table = Table(title="Precision Contexts")

    table.add_column("Context", style="cyan", no_wrap=True)
    table.add_column("Digits", justify="right")
    table.add_column("Epsilon", justify="right")
    table.add_column("Rounding", justify="right")
    table.add_column("Max iterations", justify="right")
    table.add_column("Default", justify="center")

    for name in list_contexts():
        context = get_context(name)
        table.add_row(
            name,
            str(context.digits),
            f"{context.epsilon:.0E}" if context.epsilon is not None else "-",
            context.rounding.value,
            str(context.max_iterations),
            "✓" if context == DEFAULT_CONTEXT else "",
        )

    console.print(table)


@app.command()  # type: ignore[misc]
def sqrt(
    value: Annotated[str, typer.Argument(help="Non-negative integer or decimal")],
    epsilon: Annotated[
        str | None,
        typer.Option("--epsilon", "-e", help="Stop when successive iterates differ by less"),
    ] = None,
    digits: Annotated[
        int | None,
        typer.Option("--digits", "-d", help="Significant digits (alone: precision policy)"),
    ] = None,
    rounding: Annotated[
        str,
        typer.Option("--rounding", "-r", help="Rounding mode, e.g. half_up or half_even"),
    ] = "half_up",
    trace: Annotated[
        bool,
        typer.Option("--trace", "-t", help="Show every Heron iteration"),
    ] = False,
) -> None:
    """Approximate a square root with Heron's method."""
    try:
        context = _sqrt_context(epsilon, digits, rounding)
        radicand = _parse_radicand(value)
        result = SquareRootCalculator(context).trace(radicand)
    except NumericKernelError as exc:
        raise _fail(exc) from exc

    console.print(f"sqrt({escape(value)}) = [bold]{result.result}[/]")
    console.print(
        f"  policy: {result.policy.value}, iterations: {result.iterations}, "
        f"converged: {result.converged}"
    )

    if trace:
        table = Table(title="Heron iterations")
        table.add_column("#", justify="right")
        table.add_column("Estimate", style="cyan")
        table.add_column("|Δ|", justify="right")
        for row in result.history:
            table.add_row(str(row["iteration"]), str(row["estimate"]), f"{row['delta']:.3E}")
        console.print(table)


@app.command()  # type: ignore[misc]
def polar(
    real: Annotated[str, typer.Argument(help="Real part")],
    imaginary: Annotated[str, typer.Argument(help="Imaginary part")],
    digits: Annotated[
        int,
        typer.Option("--digits", "-d", help="Significant digits"),
    ] = DEFAULT_CONTEXT.digits,
) -> None:
    """Show the polar form (magnitude, argument) of REAL + IMAGINARY·i."""
    try:
        context = PrecisionContext(digits=digits)
        number = DecimalComplex.of(real, imaginary)
        form = number.polar_form(context)
    except NumericKernelError as exc:
        raise _fail(exc) from exc

    table = Table(title=f"Polar form of {number}")
    table.add_column("Property", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("abs", str(form.radial))
    table.add_row("argument", str(form.angular))
    console.print(table)


@app.command()  # type: ignore[misc]
def det(
    matrix: Annotated[str, typer.Argument(help='Rows separated by ";", cells by ","')],
    decimal: Annotated[
        bool,
        typer.Option("--decimal", help="Parse cells as decimals instead of integers"),
    ] = False,
) -> None:
    """Compute the determinant and classify the structure of a square matrix."""
    try:
        parsed = _parse_matrix(matrix, DecimalMatrix if decimal else IntegerMatrix)
        determinant = parsed.determinant()
    except NumericKernelError as exc:
        raise _fail(exc) from exc

    table = Table(title=f"{parsed.row_size}×{parsed.column_size} {type(parsed).__name__}")
    table.add_column("Property", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("determinant", str(determinant))
    table.add_row("trace", str(parsed.trace()))
    for name in (
        "triangular",
        "diagonal",
        "is_identity",
        "symmetric",
        "skew_symmetric",
        "invertible",
    ):
        table.add_row(name, "✓" if getattr(parsed, name)() else "✗")
    console.print(table)


def _sqrt_context(epsilon: str | None, digits: int | None, rounding: str) -> PrecisionContext:
    if epsilon is None and digits is not None:
        return PrecisionContext(digits=digits, rounding=rounding, epsilon=None)
    return PrecisionContext(
        digits=DEFAULT_CONTEXT.digits if digits is None else digits,
        rounding=rounding,
        epsilon=DEFAULT_CONTEXT.epsilon if epsilon is None else to_decimal(epsilon, "epsilon"),
    )


def _parse_radicand(text: str) -> int | Decimal:
    value = to_decimal(text, "value")
    if value == value.to_integral_value() and "." not in text and "e" not in text.lower():
        return int(value)
    return value


def _parse_matrix(text: str, matrix_type: type[Matrix]) -> Matrix:
    rows = [[cell.strip() for cell in row.split(",")] for row in text.split(";") if row.strip()]
    if matrix_type is IntegerMatrix:
        try:
            return matrix_type.of(*[[int(cell) for cell in row] for row in rows])
        except ValueError as exc:
            if isinstance(exc, InvalidArgumentError):
                raise
            raise InvalidArgumentError(f"expected integer cells but actual {text!r}") from exc
    return matrix_type.of(*rows)


if __name__ == "__main__":
    app()

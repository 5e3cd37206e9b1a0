"""Exception hierarchy for numkernel.

Two failure kinds are raised by the kernel:

- ``InvalidArgumentError``: the caller passed something the operation cannot
  accept (out-of-range index, bad precision, zero divisor, ...).
- ``InvalidStateError``: the value the operation was invoked on cannot support
  it (argument of zero, determinant of a non-square matrix, ...).

Both derive from the matching built-in so callers can keep catching
``ValueError`` / ``RuntimeError``.
"""

from __future__ import annotations


class NumericKernelError(Exception):
    """Base class for all numkernel errors."""


class InvalidArgumentError(NumericKernelError, ValueError):
    """Raised when an argument is missing, malformed or out of range."""


class InvalidStateError(NumericKernelError, RuntimeError):
    """Raised when a value structurally cannot support an operation."""


class MatrixNotSquareError(InvalidStateError):
    """Raised when a square-only query is made on a non-square matrix."""

    def __init__(self, row_size: int, column_size: int) -> None:
        super().__init__(
            f"expected square matrix but actual {row_size} x {column_size}"
        )
        self.row_size = row_size
        self.column_size = column_size


__all__ = [
    "InvalidArgumentError",
    "InvalidStateError",
    "MatrixNotSquareError",
    "NumericKernelError",
]

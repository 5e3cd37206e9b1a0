"""Immutable 1-based matrices over an element ring.

Storage is a row-major tuple of ``row_size * column_size`` elements. Like
vectors, matrices only come out of ``MatrixBuilder.build()``; the builder
preallocates every cell and refuses to build while any cell is empty.

Determinant dispatch:
    non-square      -> MatrixNotSquareError
    triangular      -> product of the diagonal (covers 1×1)
    2×2             -> ad - bc
    3×3             -> rule of Sarrus
    n×n, n > 3      -> Leibniz formula (factorial time)

``invertible`` means the determinant is a unit of the element ring: ±1 for
integers, ±1 and ±i for Gaussian integers, ±1 for Decimal complex numbers
and anything non-zero for Decimals.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from decimal import Decimal
from typing import TYPE_CHECKING, ClassVar, Generic, TypeVar

import numpy as np

from numkernel.algorithms.determinant import (
    diagonal_product,
    leibniz_formula,
    rule_of_sarrus,
    two_by_two,
)
from numkernel.algorithms.sqrt import sqrt
from numkernel.data.precision import DEFAULT_CONTEXT, PrecisionContext
from numkernel.errors import InvalidArgumentError, InvalidStateError, MatrixNotSquareError
from numkernel.linear.rings import Ring, exact_sum
from numkernel.linear.vector import Vector, _check_index, _check_size

if TYPE_CHECKING:
    from numpy.typing import NDArray

logger = logging.getLogger(__name__)

E = TypeVar("E")
M = TypeVar("M", bound="Matrix")


class Matrix(Generic[E]):
    """Immutable ``row_size × column_size`` matrix of ring elements."""

    __slots__ = ("_row_size", "_column_size", "_elements")

    ring: ClassVar[Ring]
    vector_type: ClassVar[type[Vector]]

    def __init__(self, row_size: int, column_size: int, elements: tuple[E, ...]) -> None:
        """Wrap fully validated row-major elements; use ``builder()`` instead."""
        self._row_size = row_size
        self._column_size = column_size
        self._elements = elements

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def builder(cls: type[M], row_size: int, column_size: int) -> MatrixBuilder[M]:
        return MatrixBuilder(cls, row_size, column_size)

    @classmethod
    def of(cls: type[M], *rows: Sequence[object]) -> M:
        """Build from row sequences, coercing each value into the ring.

        Example:
            >>> IntegerMatrix.of([1, 2], [3, 4]).determinant()
            -2
        """
        if not rows:
            raise InvalidArgumentError("expected at least one row but actual 0")
        column_size = len(rows[0])
        builder = cls.builder(len(rows), column_size)
        coerce = cls.ring.coerce
        for r, row in enumerate(rows, start=1):
            if len(row) != column_size:
                raise InvalidArgumentError(
                    f"expected row {r} to have {column_size} elements but actual {len(row)}"
                )
            for c, value in enumerate(row, start=1):
                builder.put(r, c, coerce(value))
        return builder.build()

    @classmethod
    def from_array(cls: type[M], values: Iterable[Sequence[object]]) -> M:
        """Build from a nested sequence or a 2-D numpy array."""
        if hasattr(values, "tolist"):
            values = values.tolist()
        return cls.of(*values)

    @classmethod
    def zero(cls: type[M], row_size: int, column_size: int) -> M:
        return cls.builder(row_size, column_size).put_all(cls.ring.zero).build()

    @classmethod
    def identity(cls: type[M], size: int) -> M:
        builder = cls.builder(size, size)
        for i in range(1, size + 1):
            builder.put(i, i, cls.ring.one)
        return builder.fill_missing(cls.ring.zero).build()

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def row_size(self) -> int:
        return self._row_size

    @property
    def column_size(self) -> int:
        return self._column_size

    @property
    def size(self) -> int:
        """Number of cells."""
        return len(self._elements)

    def element(self, row_index: int, column_index: int) -> E:
        _check_index(row_index, self._row_size, "row_index")
        _check_index(column_index, self._column_size, "column_index")
        return self._at(row_index, column_index)

    def row(self, row_index: int) -> Vector[E]:
        _check_index(row_index, self._row_size, "row_index")
        start = (row_index - 1) * self._column_size
        return self.vector_type(self._elements[start : start + self._column_size])

    def column(self, column_index: int) -> Vector[E]:
        _check_index(column_index, self._column_size, "column_index")
        return self.vector_type(self._elements[column_index - 1 :: self._column_size])

    def rows(self) -> tuple[Vector[E], ...]:
        return tuple(self.row(r) for r in range(1, self._row_size + 1))

    def columns(self) -> tuple[Vector[E], ...]:
        return tuple(self.column(c) for c in range(1, self._column_size + 1))

    def elements(self) -> tuple[E, ...]:
        """All elements in row-major order."""
        return self._elements

    def cells(self) -> Iterator[tuple[int, int, E]]:
        """Yield ``(row, column, element)`` triples in row-major order."""
        for offset, element in enumerate(self._elements):
            row, column = divmod(offset, self._column_size)
            yield row + 1, column + 1, element

    def to_numpy(self) -> NDArray:
        to_builtin = self.ring.to_builtin
        return np.array(
            [to_builtin(e) for e in self._elements], dtype=self.ring.numpy_dtype
        ).reshape(self._row_size, self._column_size)

    def _at(self, row_index: int, column_index: int) -> E:
        return self._elements[(row_index - 1) * self._column_size + column_index - 1]

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def add(self: M, summand: M) -> M:
        self._check_same_shape(summand, "summand")
        add = self.ring.add
        return self._with(tuple(add(a, b) for a, b in zip(self._elements, summand._elements)))

    def subtract(self: M, subtrahend: M) -> M:
        self._check_same_shape(subtrahend, "subtrahend")
        subtract = self.ring.subtract
        return self._with(
            tuple(subtract(a, b) for a, b in zip(self._elements, subtrahend._elements))
        )

    def multiply(self: M, factor: M) -> M:
        """Matrix product ``self · factor``."""
        self._check_type(factor, "factor")
        if self._column_size != factor._row_size:
            raise InvalidArgumentError(
                f"expected column_size == factor.row_size but actual "
                f"{self._column_size} != {factor._row_size}"
            )
        rows = self.rows()
        columns = factor.columns()
        elements = tuple(row.dot_product(column) for row in rows for column in columns)
        return type(self)(self._row_size, factor._column_size, elements)

    def multiply_vector(self, vector: Vector[E]) -> Vector[E]:
        """Matrix-vector product ``self · vector``."""
        if type(vector) is not self.vector_type:
            raise InvalidArgumentError(
                f"expected a {self.vector_type.__name__} but actual {type(vector).__name__}"
            )
        if vector.size != self._column_size:
            raise InvalidArgumentError(
                f"expected column_size == vector.size but actual {self._column_size} != {vector.size}"
            )
        return self.vector_type(tuple(row.dot_product(vector) for row in self.rows()))

    def scalar_multiply(self: M, scalar: E) -> M:
        scalar = self.ring.validate(scalar)
        multiply = self.ring.multiply
        return self._with(tuple(multiply(scalar, e) for e in self._elements))

    def negate(self: M) -> M:
        negate = self.ring.negate
        return self._with(tuple(negate(e) for e in self._elements))

    def transpose(self: M) -> M:
        elements = tuple(
            self._at(r, c)
            for c in range(1, self._column_size + 1)
            for r in range(1, self._row_size + 1)
        )
        return type(self)(self._column_size, self._row_size, elements)

    def trace(self) -> E:
        self._require_square()
        return self.ring.sum(self._at(i, i) for i in range(1, self._row_size + 1))

    def minor(self: M, row_index: int, column_index: int) -> M:
        """Delete one row and one column; the rest is reindexed from 1."""
        _check_index(row_index, self._row_size, "row_index")
        _check_index(column_index, self._column_size, "column_index")
        if self._row_size == 1 or self._column_size == 1:
            raise InvalidArgumentError(
                f"expected at least 2 rows and columns but actual "
                f"{self._row_size} x {self._column_size}"
            )
        elements = tuple(
            element
            for r, c, element in self.cells()
            if r != row_index and c != column_index
        )
        return type(self)(self._row_size - 1, self._column_size - 1, elements)

    def determinant(self) -> E:
        self._require_square()
        size = self._row_size
        if self.triangular():
            logger.debug("Determinant of triangular %dx%d matrix from diagonal", size, size)
            return diagonal_product(self._at, size, self.ring)
        if size == 2:
            return two_by_two(self._at, self.ring)
        if size == 3:
            return rule_of_sarrus(self._at, self.ring)
        return leibniz_formula(self._at, size, self.ring)

    # ------------------------------------------------------------------
    # Predicates
    # ------------------------------------------------------------------

    def square(self) -> bool:
        return self._row_size == self._column_size

    def upper_triangular(self) -> bool:
        is_zero = self.ring.is_zero
        return self.square() and all(is_zero(e) for r, c, e in self.cells() if r > c)

    def lower_triangular(self) -> bool:
        is_zero = self.ring.is_zero
        return self.square() and all(is_zero(e) for r, c, e in self.cells() if r < c)

    def triangular(self) -> bool:
        return self.upper_triangular() or self.lower_triangular()

    def diagonal(self) -> bool:
        is_zero = self.ring.is_zero
        return self.square() and all(is_zero(e) for r, c, e in self.cells() if r != c)

    def is_identity(self) -> bool:
        ring = self.ring
        return self.square() and all(
            ring.is_one(e) if r == c else ring.is_zero(e) for r, c, e in self.cells()
        )

    def symmetric(self) -> bool:
        equal = self.ring.equal
        return self.square() and all(equal(e, self._at(c, r)) for r, c, e in self.cells() if r < c)

    def skew_symmetric(self) -> bool:
        ring = self.ring
        return self.square() and all(
            ring.equal(e, ring.negate(self._at(c, r))) for r, c, e in self.cells() if r <= c
        )

    def invertible(self) -> bool:
        return self.square() and self.ring.is_unit(self.determinant())

    # ------------------------------------------------------------------
    # Norms
    # ------------------------------------------------------------------

    def max_norm(self, context: PrecisionContext = DEFAULT_CONTEXT) -> int | Decimal:
        """Largest absolute value of any element."""
        abs_ = self.ring.abs
        return max(abs_(e, context) for e in self._elements)

    def max_abs_row_sum_norm(self, context: PrecisionContext = DEFAULT_CONTEXT) -> int | Decimal:
        """Maximum over rows of the sum of absolute values (the ∞-norm)."""
        return max(row.taxicab_norm(context) for row in self.rows())

    def max_abs_column_sum_norm(
        self, context: PrecisionContext = DEFAULT_CONTEXT
    ) -> int | Decimal:
        """Maximum over columns of the sum of absolute values (the 1-norm)."""
        return max(column.taxicab_norm(context) for column in self.columns())

    def frobenius_norm_squared(self) -> int | Decimal:
        abs_squared = self.ring.abs_squared
        return exact_sum(abs_squared(e) for e in self._elements)

    def frobenius_norm(self, context: PrecisionContext = DEFAULT_CONTEXT) -> Decimal:
        return sqrt(self.frobenius_norm_squared(), context)

    # ------------------------------------------------------------------
    # Helpers and dunders
    # ------------------------------------------------------------------

    def _with(self: M, elements: tuple[E, ...]) -> M:
        return type(self)(self._row_size, self._column_size, elements)

    def _require_square(self) -> None:
        if not self.square():
            raise MatrixNotSquareError(self._row_size, self._column_size)

    def _check_type(self, other: object, name: str) -> None:
        if type(other) is not type(self):
            raise InvalidArgumentError(
                f"expected {name} to be a {type(self).__name__} but actual {type(other).__name__}"
            )

    def _check_same_shape(self, other: object, name: str) -> None:
        self._check_type(other, name)
        if (self._row_size, self._column_size) != (other._row_size, other._column_size):
            raise InvalidArgumentError(
                f"expected {self._row_size} x {self._column_size} {name} but actual "
                f"{other._row_size} x {other._column_size}"
            )

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return (
            self._row_size == other._row_size
            and self._column_size == other._column_size
            and self._elements == other._elements
        )

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._row_size, self._column_size, self._elements))

    def __add__(self: M, other: object) -> M:
        if type(other) is not type(self):
            return NotImplemented
        return self.add(other)

    def __sub__(self: M, other: object) -> M:
        if type(other) is not type(self):
            return NotImplemented
        return self.subtract(other)

    def __matmul__(self, other: object) -> Matrix[E] | Vector[E]:
        if type(other) is type(self):
            return self.multiply(other)
        if type(other) is self.vector_type:
            return self.multiply_vector(other)
        return NotImplemented

    def __mul__(self: M, scalar: object) -> M:
        if isinstance(scalar, Matrix | Vector):
            return NotImplemented
        return self.scalar_multiply(self.ring.coerce(scalar))

    __rmul__ = __mul__

    def __neg__(self: M) -> M:
        return self.negate()

    def __repr__(self) -> str:
        rows = "; ".join(
            ", ".join(str(e) for e in self._elements[start : start + self._column_size])
            for start in range(0, len(self._elements), self._column_size)
        )
        return f"{type(self).__name__}({self._row_size}x{self._column_size}: {rows})"


class MatrixBuilder(Generic[M]):
    """Single-use staging area for a ``row_size × column_size`` matrix."""

    __slots__ = ("_matrix_type", "_row_size", "_column_size", "_cells")

    def __init__(self, matrix_type: type[M], row_size: int, column_size: int) -> None:
        _check_size(row_size, "row_size")
        _check_size(column_size, "column_size")
        self._matrix_type = matrix_type
        self._row_size = row_size
        self._column_size = column_size
        self._cells: list[object | None] = [None] * (row_size * column_size)

    @property
    def row_size(self) -> int:
        return self._row_size

    @property
    def column_size(self) -> int:
        return self._column_size

    def put(self, row_index: int, column_index: int, element: object) -> MatrixBuilder[M]:
        self._cells[self._offset(row_index, column_index)] = self._validated(element)
        return self

    def put_all(self, element: object) -> MatrixBuilder[M]:
        """Set every cell to ``element``."""
        value = self._validated(element)
        self._cells = [value] * len(self._cells)
        return self

    def fill_missing(self, element: object) -> MatrixBuilder[M]:
        """Set every still-empty cell to ``element``."""
        value = self._validated(element)
        self._cells = [value if e is None else e for e in self._cells]
        return self

    def element(self, row_index: int, column_index: int) -> object | None:
        """Current content of a cell (None while unfilled)."""
        return self._cells[self._offset(row_index, column_index)]

    def build(self) -> M:
        missing = [
            divmod(offset, self._column_size)
            for offset, e in enumerate(self._cells)
            if e is None
        ]
        if missing:
            first_row, first_column = missing[0]
            raise InvalidStateError(
                f"expected all cells to be set but actual {len(missing)} missing, "
                f"first at ({first_row + 1}, {first_column + 1})"
            )
        return self._matrix_type(self._row_size, self._column_size, tuple(self._cells))

    def _offset(self, row_index: int, column_index: int) -> int:
        _check_index(row_index, self._row_size, "row_index")
        _check_index(column_index, self._column_size, "column_index")
        return (row_index - 1) * self._column_size + column_index - 1

    def _validated(self, element: object) -> object:
        if element is None:
            raise InvalidArgumentError("expected element != None")
        return self._matrix_type.ring.validate(element)


__all__ = ["Matrix", "MatrixBuilder"]

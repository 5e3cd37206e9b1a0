"""Immutable 1-based vectors over an element ring.

Vectors are created through ``VectorBuilder``: the builder preallocates one
slot per index, tracks which slots are filled and only ``build()``s once
every slot holds an element. The built vector stores a tuple, so later
builder mutation never leaks into it.

Concrete classes (``IntegerVector`` and friends) live in
``numkernel.linear.domains``; they bind ``ring`` and the matching matrix type.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from decimal import Decimal
from typing import TYPE_CHECKING, ClassVar, Generic, TypeVar

import numpy as np

from numkernel.algorithms.sqrt import sqrt
from numkernel.data.precision import DEFAULT_CONTEXT, PrecisionContext
from numkernel.errors import InvalidArgumentError, InvalidStateError
from numkernel.linear.rings import Ring, exact_sum

if TYPE_CHECKING:
    from numpy.typing import NDArray

    from numkernel.linear.matrix import Matrix

E = TypeVar("E")
V = TypeVar("V", bound="Vector")


class Vector(Generic[E]):
    """Immutable vector of ``size`` ring elements, indexed from 1."""

    __slots__ = ("_elements",)

    ring: ClassVar[Ring]
    matrix_type: ClassVar[type[Matrix]]

    def __init__(self, elements: tuple[E, ...]) -> None:
        """Wrap fully validated elements; use ``builder()`` or ``of()`` instead."""
        self._elements = elements

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def builder(cls: type[V], size: int) -> VectorBuilder[V]:
        return VectorBuilder(cls, size)

    @classmethod
    def of(cls: type[V], *elements: object) -> V:
        """Build from positional values, coerced into the ring."""
        if not elements:
            raise InvalidArgumentError("expected at least one element but actual 0")
        builder = cls.builder(len(elements))
        for element in elements:
            builder.put(cls.ring.coerce(element))
        return builder.build()

    @classmethod
    def from_array(cls: type[V], values: Iterable[object]) -> V:
        """Build from any 1-D iterable, including a numpy array."""
        if hasattr(values, "tolist"):
            values = values.tolist()
        return cls.of(*values)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def size(self) -> int:
        return len(self._elements)

    def element(self, index: int) -> E:
        _check_index(index, self.size, "index")
        return self._elements[index - 1]

    def elements(self) -> tuple[E, ...]:
        return self._elements

    def to_numpy(self) -> NDArray:
        to_builtin = self.ring.to_builtin
        return np.array([to_builtin(e) for e in self._elements], dtype=self.ring.numpy_dtype)

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def add(self: V, summand: V) -> V:
        self._check_same_size(summand, "summand")
        add = self.ring.add
        return type(self)(tuple(add(a, b) for a, b in zip(self._elements, summand._elements)))

    def subtract(self: V, subtrahend: V) -> V:
        self._check_same_size(subtrahend, "subtrahend")
        subtract = self.ring.subtract
        return type(self)(
            tuple(subtract(a, b) for a, b in zip(self._elements, subtrahend._elements))
        )

    def scalar_multiply(self: V, scalar: E) -> V:
        scalar = self.ring.validate(scalar)
        multiply = self.ring.multiply
        return type(self)(tuple(multiply(scalar, e) for e in self._elements))

    def negate(self: V) -> V:
        negate = self.ring.negate
        return type(self)(tuple(negate(e) for e in self._elements))

    def dot_product(self: V, other: V) -> E:
        """Bilinear ``Σ a_i·b_i`` (no conjugation for complex rings)."""
        self._check_same_size(other, "other")
        multiply = self.ring.multiply
        return self.ring.sum(multiply(a, b) for a, b in zip(self._elements, other._elements))

    def dyadic_product(self: V, other: V) -> Matrix:
        """Outer product: a ``size × other.size`` matrix with entries ``a_i·b_j``."""
        self._check_type(other, "other")
        multiply = self.ring.multiply
        builder = self.matrix_type.builder(self.size, other.size)
        for i, a in enumerate(self._elements, start=1):
            for j, b in enumerate(other._elements, start=1):
                builder.put(i, j, multiply(a, b))
        return builder.build()

    def orthogonal_to(self: V, other: V) -> bool:
        return self.ring.is_zero(self.dot_product(other))

    # ------------------------------------------------------------------
    # Norms and distances
    # ------------------------------------------------------------------

    def taxicab_norm(self, context: PrecisionContext = DEFAULT_CONTEXT) -> int | Decimal:
        """Sum of absolute values; ``context`` only matters for complex rings."""
        abs_ = self.ring.abs
        return exact_sum(abs_(e, context) for e in self._elements)

    def taxicab_distance(
        self: V, other: V, context: PrecisionContext = DEFAULT_CONTEXT
    ) -> int | Decimal:
        return self.subtract(other).taxicab_norm(context)

    def euclidean_norm_squared(self) -> int | Decimal:
        abs_squared = self.ring.abs_squared
        return exact_sum(abs_squared(e) for e in self._elements)

    def euclidean_norm(self, context: PrecisionContext = DEFAULT_CONTEXT) -> Decimal:
        return sqrt(self.euclidean_norm_squared(), context)

    def euclidean_distance_squared(self: V, other: V) -> int | Decimal:
        return self.subtract(other).euclidean_norm_squared()

    def euclidean_distance(
        self: V, other: V, context: PrecisionContext = DEFAULT_CONTEXT
    ) -> Decimal:
        return self.subtract(other).euclidean_norm(context)

    def max_norm(self, context: PrecisionContext = DEFAULT_CONTEXT) -> int | Decimal:
        abs_ = self.ring.abs
        return max(abs_(e, context) for e in self._elements)

    def max_distance(
        self: V, other: V, context: PrecisionContext = DEFAULT_CONTEXT
    ) -> int | Decimal:
        return self.subtract(other).max_norm(context)

    # ------------------------------------------------------------------
    # Helpers and dunders
    # ------------------------------------------------------------------

    def _check_type(self, other: object, name: str) -> None:
        if type(other) is not type(self):
            raise InvalidArgumentError(
                f"expected {name} to be a {type(self).__name__} but actual {type(other).__name__}"
            )

    def _check_same_size(self, other: object, name: str) -> None:
        self._check_type(other, name)
        if other.size != self.size:
            raise InvalidArgumentError(f"expected equal sizes but actual {self.size} != {other.size}")

    def __iter__(self) -> Iterator[E]:
        return iter(self._elements)

    def __len__(self) -> int:
        return self.size

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._elements == other._elements

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._elements))

    def __add__(self: V, other: object) -> V:
        if type(other) is not type(self):
            return NotImplemented
        return self.add(other)

    def __sub__(self: V, other: object) -> V:
        if type(other) is not type(self):
            return NotImplemented
        return self.subtract(other)

    def __matmul__(self: V, other: object) -> E:
        if type(other) is not type(self):
            return NotImplemented
        return self.dot_product(other)

    def __neg__(self: V) -> V:
        return self.negate()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({', '.join(str(e) for e in self._elements)})"


class VectorBuilder(Generic[V]):
    """Single-use staging area for a vector of fixed ``size``."""

    __slots__ = ("_vector_type", "_size", "_slots", "_next")

    def __init__(self, vector_type: type[V], size: int) -> None:
        _check_size(size, "size")
        self._vector_type = vector_type
        self._size = size
        self._slots: list[object | None] = [None] * size
        self._next = 0

    @property
    def size(self) -> int:
        return self._size

    def put(self, element: object) -> VectorBuilder[V]:
        """Store ``element`` at the next free index."""
        while self._next < self._size and self._slots[self._next] is not None:
            self._next += 1
        if self._next >= self._size:
            raise InvalidStateError(f"expected a free index but all {self._size} are filled")
        self._slots[self._next] = self._validated(element)
        self._next += 1
        return self

    def put_at(self, index: int, element: object) -> VectorBuilder[V]:
        _check_index(index, self._size, "index")
        self._slots[index - 1] = self._validated(element)
        return self

    def put_all(self, element: object) -> VectorBuilder[V]:
        """Set every index to ``element``."""
        value = self._validated(element)
        self._slots = [value] * self._size
        return self

    def fill_missing(self, element: object) -> VectorBuilder[V]:
        """Set every still-empty index to ``element``."""
        value = self._validated(element)
        self._slots = [value if e is None else e for e in self._slots]
        return self

    def element(self, index: int) -> object | None:
        """Current content at ``index`` (None while unfilled)."""
        _check_index(index, self._size, "index")
        return self._slots[index - 1]

    def build(self) -> V:
        missing = [i for i, e in enumerate(self._slots, start=1) if e is None]
        if missing:
            raise InvalidStateError(f"expected all elements to be set but actual missing {missing}")
        return self._vector_type(tuple(self._slots))

    def _validated(self, element: object) -> object:
        if element is None:
            raise InvalidArgumentError("expected element != None")
        return self._vector_type.ring.validate(element)


def _check_size(value: object, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidArgumentError(f"expected {name} > 0 but actual {value!r}")


def _check_index(index: object, upper: int, name: str) -> None:
    if isinstance(index, bool) or not isinstance(index, int) or not 1 <= index <= upper:
        raise InvalidArgumentError(f"expected {name} in [1, {upper}] but actual {index!r}")


__all__ = ["Vector", "VectorBuilder"]

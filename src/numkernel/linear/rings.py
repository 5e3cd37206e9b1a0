"""Element rings for the generic matrix and vector kernel.

A Ring bundles the arithmetic a Matrix or Vector needs from its elements:
identities, closed add/subtract/multiply/negate, zero and unit tests, and the
absolute value used by norms. Four rings are provided:

- INTEGER_RING: Python int
- DECIMAL_RING: Decimal, exact arithmetic under EXACT_CONTEXT
- INTEGER_COMPLEX_RING: IntegerComplex (Gaussian integers)
- DECIMAL_COMPLEX_RING: DecimalComplex
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from decimal import Decimal
from functools import reduce
from typing import Generic, TypeVar

import numpy as np

from numkernel.data.precision import EXACT_CONTEXT, PrecisionContext, to_decimal
from numkernel.errors import InvalidArgumentError
from numkernel.number import decimal_complex, integer_complex
from numkernel.number.decimal_complex import DecimalComplex
from numkernel.number.integer_complex import IntegerComplex

E = TypeVar("E")
"""Element type of a ring."""


class Ring(ABC, Generic[E]):
    """Abstract base class for element rings.

    Subclasses must provide identities, the closed operations and ``abs``;
    ``abs_squared`` must be exact.
    """

    name: str = "ring"
    numpy_dtype: type = np.float64

    @property
    @abstractmethod
    def zero(self) -> E:
        """Additive identity."""

    @property
    @abstractmethod
    def one(self) -> E:
        """Multiplicative identity."""

    @abstractmethod
    def validate(self, element: object) -> E:
        """Return ``element`` as a ring element or raise InvalidArgumentError."""

    def coerce(self, value: object) -> E:
        """Convert a convenience value (e.g. a float or Python complex) to an element.

        Used by ``of``/``from_array``; builders only accept ``validate``-d elements.
        """
        return self.validate(value)

    @abstractmethod
    def to_builtin(self, a: E) -> int | float | complex:
        """Nearest Python scalar, for numpy interop."""

    @abstractmethod
    def add(self, a: E, b: E) -> E: ...

    @abstractmethod
    def subtract(self, a: E, b: E) -> E: ...

    @abstractmethod
    def multiply(self, a: E, b: E) -> E: ...

    @abstractmethod
    def negate(self, a: E) -> E: ...

    @abstractmethod
    def abs(self, a: E, context: PrecisionContext) -> int | Decimal:
        """Absolute value (approximated under ``context`` for complex rings)."""

    @abstractmethod
    def abs_squared(self, a: E) -> int | Decimal:
        """Exact square of the absolute value."""

    @abstractmethod
    def is_unit(self, a: E) -> bool:
        """True if ``a`` has a multiplicative inverse inside the ring."""

    def equal(self, a: E, b: E) -> bool:
        return a == b

    def is_zero(self, a: E) -> bool:
        return self.equal(a, self.zero)

    def is_one(self, a: E) -> bool:
        return self.equal(a, self.one)

    def sum(self, elements: Iterable[E]) -> E:
        return reduce(self.add, elements, self.zero)

    def product(self, elements: Iterable[E]) -> E:
        return reduce(self.multiply, elements, self.one)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class IntegerRing(Ring[int]):
    """Ring of Python ints. Units are +1 and -1."""

    name = "integer"

    @property
    def zero(self) -> int:
        return 0

    @property
    def one(self) -> int:
        return 1

    def validate(self, element: object) -> int:
        if isinstance(element, bool) or not isinstance(element, int):
            raise InvalidArgumentError(f"expected an int element but actual {element!r}")
        return element

    def to_builtin(self, a: int) -> int:
        return a

    def add(self, a: int, b: int) -> int:
        return a + b

    def subtract(self, a: int, b: int) -> int:
        return a - b

    def multiply(self, a: int, b: int) -> int:
        return a * b

    def negate(self, a: int) -> int:
        return -a

    def abs(self, a: int, context: PrecisionContext) -> int:
        return -a if a < 0 else a

    def abs_squared(self, a: int) -> int:
        return a * a

    def is_unit(self, a: int) -> bool:
        return a in (1, -1)


class DecimalRing(Ring[Decimal]):
    """Ring of Decimals with exact (unrounded) arithmetic. Units are non-zero."""

    name = "decimal"

    @property
    def zero(self) -> Decimal:
        return Decimal(0)

    @property
    def one(self) -> Decimal:
        return Decimal(1)

    def validate(self, element: object) -> Decimal:
        if isinstance(element, Decimal):
            if not element.is_finite():
                raise InvalidArgumentError(f"expected a finite element but actual {element}")
            return element
        if isinstance(element, int) and not isinstance(element, bool):
            return Decimal(element)
        raise InvalidArgumentError(f"expected a Decimal element but actual {element!r}")

    def coerce(self, value: object) -> Decimal:
        return to_decimal(value, "element")

    def to_builtin(self, a: Decimal) -> float:
        return float(a)

    def add(self, a: Decimal, b: Decimal) -> Decimal:
        return EXACT_CONTEXT.add(a, b)

    def subtract(self, a: Decimal, b: Decimal) -> Decimal:
        return EXACT_CONTEXT.subtract(a, b)

    def multiply(self, a: Decimal, b: Decimal) -> Decimal:
        return EXACT_CONTEXT.multiply(a, b)

    def negate(self, a: Decimal) -> Decimal:
        return a.copy_negate()

    def abs(self, a: Decimal, context: PrecisionContext) -> Decimal:
        return a.copy_abs()

    def abs_squared(self, a: Decimal) -> Decimal:
        return EXACT_CONTEXT.multiply(a, a)

    def is_unit(self, a: Decimal) -> bool:
        return not a.is_zero()


class IntegerComplexRing(Ring[IntegerComplex]):
    """Gaussian integers. Units are 1, -1, i and -i."""

    name = "integer_complex"
    numpy_dtype = np.complex128

    _UNITS = (
        integer_complex.ONE,
        integer_complex.ONE.negate(),
        integer_complex.IMAGINARY,
        integer_complex.IMAGINARY.negate(),
    )

    @property
    def zero(self) -> IntegerComplex:
        return integer_complex.ZERO

    @property
    def one(self) -> IntegerComplex:
        return integer_complex.ONE

    def validate(self, element: object) -> IntegerComplex:
        if not isinstance(element, IntegerComplex):
            raise InvalidArgumentError(
                f"expected an IntegerComplex element but actual {element!r}"
            )
        return element

    def coerce(self, value: object) -> IntegerComplex:
        if isinstance(value, int) and not isinstance(value, bool):
            return IntegerComplex(value, 0)
        if isinstance(value, complex):
            if not (value.real.is_integer() and value.imag.is_integer()):
                raise InvalidArgumentError(
                    f"expected integral real and imaginary parts but actual {value!r}"
                )
            return IntegerComplex(int(value.real), int(value.imag))
        return self.validate(value)

    def to_builtin(self, a: IntegerComplex) -> complex:
        return complex(a.real, a.imaginary)

    def add(self, a: IntegerComplex, b: IntegerComplex) -> IntegerComplex:
        return a.add(b)

    def subtract(self, a: IntegerComplex, b: IntegerComplex) -> IntegerComplex:
        return a.subtract(b)

    def multiply(self, a: IntegerComplex, b: IntegerComplex) -> IntegerComplex:
        return a.multiply(b)

    def negate(self, a: IntegerComplex) -> IntegerComplex:
        return a.negate()

    def abs(self, a: IntegerComplex, context: PrecisionContext) -> Decimal:
        return a.abs(context)

    def abs_squared(self, a: IntegerComplex) -> int:
        return a.abs_squared()

    def is_unit(self, a: IntegerComplex) -> bool:
        return a in self._UNITS


class DecimalComplexRing(Ring[DecimalComplex]):
    """Complex numbers with Decimal parts. Units are 1 and -1."""

    name = "decimal_complex"
    numpy_dtype = np.complex128

    _UNITS = (decimal_complex.ONE, decimal_complex.ONE.negate())

    @property
    def zero(self) -> DecimalComplex:
        return decimal_complex.ZERO

    @property
    def one(self) -> DecimalComplex:
        return decimal_complex.ONE

    def validate(self, element: object) -> DecimalComplex:
        if not isinstance(element, DecimalComplex):
            raise InvalidArgumentError(
                f"expected a DecimalComplex element but actual {element!r}"
            )
        return element

    def coerce(self, value: object) -> DecimalComplex:
        if isinstance(value, IntegerComplex):
            return DecimalComplex.from_integer_complex(value)
        if isinstance(value, complex):
            return DecimalComplex.of(value.real, value.imag)
        if isinstance(value, DecimalComplex):
            return value
        return DecimalComplex.of(value)

    def to_builtin(self, a: DecimalComplex) -> complex:
        return complex(float(a.real), float(a.imaginary))

    def add(self, a: DecimalComplex, b: DecimalComplex) -> DecimalComplex:
        return a.add(b)

    def subtract(self, a: DecimalComplex, b: DecimalComplex) -> DecimalComplex:
        return a.subtract(b)

    def multiply(self, a: DecimalComplex, b: DecimalComplex) -> DecimalComplex:
        return a.multiply(b)

    def negate(self, a: DecimalComplex) -> DecimalComplex:
        return a.negate()

    def abs(self, a: DecimalComplex, context: PrecisionContext) -> Decimal:
        return a.abs(context)

    def abs_squared(self, a: DecimalComplex) -> Decimal:
        return a.abs_squared()

    def is_unit(self, a: DecimalComplex) -> bool:
        return a in self._UNITS


INTEGER_RING = IntegerRing()
DECIMAL_RING = DecimalRing()
INTEGER_COMPLEX_RING = IntegerComplexRing()
DECIMAL_COMPLEX_RING = DecimalComplexRing()


def exact_sum(values: Iterable[int | Decimal]) -> int | Decimal:
    """Sum ints and Decimals without rounding; stays int if every term is."""
    total: int | Decimal = 0
    for value in values:
        if isinstance(total, int) and isinstance(value, int):
            total += value
        else:
            total = EXACT_CONTEXT.add(total, value)
    return total


__all__ = [
    "DECIMAL_COMPLEX_RING",
    "DECIMAL_RING",
    "INTEGER_COMPLEX_RING",
    "INTEGER_RING",
    "DecimalComplexRing",
    "DecimalRing",
    "IntegerComplexRing",
    "IntegerRing",
    "Ring",
    "exact_sum",
]

"""Complex numbers with integer parts (exact kernel).

Gaussian integers: addition, subtraction, multiplication, negation,
conjugation and powers are closed and exact. Operations whose result is
generally not a Gaussian integer (division, inversion, magnitude, argument,
polar form) return Decimal-based values computed through DecimalComplex.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, ClassVar

from numkernel.algorithms.sqrt import sqrt
from numkernel.algorithms.transcendental import DEFAULT_PROVIDER, TranscendentalProvider
from numkernel.data.precision import DEFAULT_CONTEXT, PrecisionContext
from numkernel.errors import InvalidArgumentError, InvalidStateError
from numkernel.number.decimal_complex import DecimalComplex

if TYPE_CHECKING:
    from numkernel.linear.domains import IntegerMatrix
    from numkernel.number.polar import PolarForm


@dataclass(frozen=True, slots=True)
class IntegerComplex:
    """Immutable complex number ``real + imaginary·i`` over int."""

    real: int
    imaginary: int

    ZERO: ClassVar[IntegerComplex]
    ONE: ClassVar[IntegerComplex]
    IMAGINARY: ClassVar[IntegerComplex]

    def __post_init__(self) -> None:
        for name in ("real", "imaginary"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidArgumentError(
                    f"expected {name} to be an int but actual {value!r}"
                )

    @classmethod
    def of(cls, real: int, imaginary: int = 0) -> IntegerComplex:
        return cls(real, imaginary)

    def add(self, summand: IntegerComplex) -> IntegerComplex:
        _check_operand(summand, "summand")
        return IntegerComplex(self.real + summand.real, self.imaginary + summand.imaginary)

    def subtract(self, subtrahend: IntegerComplex) -> IntegerComplex:
        _check_operand(subtrahend, "subtrahend")
        return IntegerComplex(
            self.real - subtrahend.real, self.imaginary - subtrahend.imaginary
        )

    def multiply(self, factor: IntegerComplex) -> IntegerComplex:
        _check_operand(factor, "factor")
        return IntegerComplex(
            self.real * factor.real - self.imaginary * factor.imaginary,
            self.real * factor.imaginary + self.imaginary * factor.real,
        )

    def divide(
        self,
        divisor: IntegerComplex,
        context: PrecisionContext = DEFAULT_CONTEXT,
    ) -> DecimalComplex:
        """Compute ``self / divisor``; the quotient is rounded to ``context``.

        Raises:
            InvalidArgumentError: If divisor is zero.
        """
        _check_operand(divisor, "divisor")
        if not divisor.invertible():
            raise InvalidArgumentError(
                f"expected divisor to be invertible but actual {divisor}"
            )
        return self.to_decimal().divide(divisor.to_decimal(), context)

    def pow(self, exponent: int) -> IntegerComplex:
        """Raise to a non-negative integer power by repeated multiplication."""
        if isinstance(exponent, bool) or not isinstance(exponent, int):
            raise InvalidArgumentError(
                f"expected exponent to be an int but actual {exponent!r}"
            )
        if exponent < 0:
            raise InvalidArgumentError(f"expected exponent >= 0 but actual {exponent}")
        result = ONE
        for _ in range(exponent):
            result = result.multiply(self)
        return result

    def negate(self) -> IntegerComplex:
        return IntegerComplex(-self.real, -self.imaginary)

    def conjugate(self) -> IntegerComplex:
        return IntegerComplex(self.real, -self.imaginary)

    def invert(self, context: PrecisionContext = DEFAULT_CONTEXT) -> DecimalComplex:
        """Return ``1 / self``.

        Raises:
            InvalidStateError: If this number is zero.
        """
        if not self.invertible():
            raise InvalidStateError(f"expected to be invertible but actual {self}")
        return ONE.divide(self, context)

    def invertible(self) -> bool:
        return self != ZERO

    def is_zero(self) -> bool:
        return self == ZERO

    def abs_squared(self) -> int:
        return self.real * self.real + self.imaginary * self.imaginary

    def abs(self, context: PrecisionContext = DEFAULT_CONTEXT) -> Decimal:
        """Magnitude as a Decimal approximation (generally irrational)."""
        return sqrt(self.abs_squared(), context)

    def argument(
        self,
        context: PrecisionContext = DEFAULT_CONTEXT,
        provider: TranscendentalProvider = DEFAULT_PROVIDER,
    ) -> Decimal:
        """Angle θ in (-π, π]; see DecimalComplex.argument.

        Raises:
            InvalidStateError: If this number is zero.
        """
        if self.is_zero():
            raise InvalidStateError(f"expected this != 0 but actual {self}")
        return self.to_decimal().argument(context, provider)

    def polar_form(
        self,
        context: PrecisionContext = DEFAULT_CONTEXT,
        provider: TranscendentalProvider = DEFAULT_PROVIDER,
    ) -> PolarForm:
        if self.is_zero():
            raise InvalidStateError(f"expected this != 0 but actual {self}")
        return self.to_decimal().polar_form(context, provider)

    def matrix(self) -> IntegerMatrix:
        """Embed ``a + bi`` as the 2×2 matrix ``[[a, -b], [b, a]]``."""
        from numkernel.linear.domains import IntegerMatrix

        return (
            IntegerMatrix.builder(2, 2)
            .put(1, 1, self.real)
            .put(1, 2, -self.imaginary)
            .put(2, 1, self.imaginary)
            .put(2, 2, self.real)
            .build()
        )

    def to_decimal(self) -> DecimalComplex:
        return DecimalComplex.from_integer_complex(self)

    def __add__(self, other: object) -> IntegerComplex:
        if not isinstance(other, IntegerComplex):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: object) -> IntegerComplex:
        if not isinstance(other, IntegerComplex):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, other: object) -> IntegerComplex:
        if not isinstance(other, IntegerComplex):
            return NotImplemented
        return self.multiply(other)

    def __truediv__(self, other: object) -> DecimalComplex:
        if not isinstance(other, IntegerComplex):
            return NotImplemented
        return self.divide(other)

    def __pow__(self, exponent: int) -> IntegerComplex:
        return self.pow(exponent)

    def __neg__(self) -> IntegerComplex:
        return self.negate()

    def __abs__(self) -> Decimal:
        return self.abs()

    def __str__(self) -> str:
        sign = "-" if self.imaginary < 0 else "+"
        return f"{self.real}{sign}{abs(self.imaginary)}i"


def _check_operand(value: object, name: str) -> None:
    if not isinstance(value, IntegerComplex):
        raise InvalidArgumentError(
            f"expected {name} to be an IntegerComplex but actual {value!r}"
        )


ZERO = IntegerComplex(0, 0)
ONE = IntegerComplex(1, 0)
IMAGINARY = IntegerComplex(0, 1)

IntegerComplex.ZERO = ZERO
IntegerComplex.ONE = ONE
IntegerComplex.IMAGINARY = IMAGINARY


__all__ = [
    "IMAGINARY",
    "ONE",
    "ZERO",
    "IntegerComplex",
]

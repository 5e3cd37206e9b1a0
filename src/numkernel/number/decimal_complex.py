"""Complex numbers with Decimal parts (approximate kernel).

Addition, subtraction and multiplication are exact: they run under
EXACT_CONTEXT, so no digit is ever dropped. Rounding happens only where the
result is generally not representable: ``divide``/``invert`` (the final
division by |divisor|^2), ``abs``, ``argument`` and polar conversion, each
governed by a caller-supplied PrecisionContext.

Equality (``==``) compares numeric values, so ``1.0 + 2i == 1.00 + 2.0i``;
``is_identical_to`` compares representations as well.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, ClassVar

from numkernel.algorithms.sqrt import sqrt
from numkernel.algorithms.transcendental import DEFAULT_PROVIDER, TranscendentalProvider
from numkernel.data.precision import (
    DEFAULT_CONTEXT,
    EXACT_CONTEXT,
    PrecisionContext,
    to_decimal,
)
from numkernel.errors import InvalidArgumentError, InvalidStateError
from numkernel.number.polar import PolarForm

if TYPE_CHECKING:
    from numkernel.linear.domains import DecimalMatrix
    from numkernel.number.integer_complex import IntegerComplex

_TWO = Decimal(2)


@dataclass(frozen=True, slots=True)
class DecimalComplex:
    """Immutable complex number ``real + imaginary·i`` over Decimal."""

    real: Decimal
    imaginary: Decimal

    ZERO: ClassVar[DecimalComplex]
    ONE: ClassVar[DecimalComplex]
    IMAGINARY: ClassVar[DecimalComplex]

    def __post_init__(self) -> None:
        object.__setattr__(self, "real", _part(self.real, "real"))
        object.__setattr__(self, "imaginary", _part(self.imaginary, "imaginary"))

    @classmethod
    def of(
        cls,
        real: int | float | str | Decimal,
        imaginary: int | float | str | Decimal = 0,
    ) -> DecimalComplex:
        """Create from ints, decimal strings, Decimals or floats."""
        return cls(to_decimal(real, "real"), to_decimal(imaginary, "imaginary"))

    @classmethod
    def from_integer_complex(cls, number: IntegerComplex) -> DecimalComplex:
        """Widen an exact complex number without loss."""
        return cls(Decimal(number.real), Decimal(number.imaginary))

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def add(self, summand: DecimalComplex) -> DecimalComplex:
        _check_operand(summand, "summand")
        return DecimalComplex(
            EXACT_CONTEXT.add(self.real, summand.real),
            EXACT_CONTEXT.add(self.imaginary, summand.imaginary),
        )

    def subtract(self, subtrahend: DecimalComplex) -> DecimalComplex:
        _check_operand(subtrahend, "subtrahend")
        return DecimalComplex(
            EXACT_CONTEXT.subtract(self.real, subtrahend.real),
            EXACT_CONTEXT.subtract(self.imaginary, subtrahend.imaginary),
        )

    def multiply(self, factor: DecimalComplex) -> DecimalComplex:
        _check_operand(factor, "factor")
        ctx = EXACT_CONTEXT
        return DecimalComplex(
            ctx.subtract(
                ctx.multiply(self.real, factor.real),
                ctx.multiply(self.imaginary, factor.imaginary),
            ),
            ctx.add(
                ctx.multiply(self.real, factor.imaginary),
                ctx.multiply(self.imaginary, factor.real),
            ),
        )

    def divide(
        self,
        divisor: DecimalComplex,
        context: PrecisionContext = DEFAULT_CONTEXT,
    ) -> DecimalComplex:
        """Compute ``self / divisor`` as ``self · conj(divisor) / |divisor|²``.

        Raises:
            InvalidArgumentError: If divisor is zero.
        """
        _check_operand(divisor, "divisor")
        if not divisor.invertible():
            raise InvalidArgumentError(
                f"expected divisor to be invertible but actual {divisor}"
            )
        numerator = self.multiply(divisor.conjugate())
        denominator = divisor.abs_squared()
        rounding = context.decimal_context()
        return DecimalComplex(
            rounding.divide(numerator.real, denominator),
            rounding.divide(numerator.imaginary, denominator),
        )

    def pow(self, exponent: int) -> DecimalComplex:
        """Raise to a non-negative integer power by repeated multiplication."""
        _check_exponent(exponent)
        result = ONE
        for _ in range(exponent):
            result = result.multiply(self)
        return result

    def negate(self) -> DecimalComplex:
        return DecimalComplex(self.real.copy_negate(), self.imaginary.copy_negate())

    def conjugate(self) -> DecimalComplex:
        return DecimalComplex(self.real, self.imaginary.copy_negate())

    def invert(self, context: PrecisionContext = DEFAULT_CONTEXT) -> DecimalComplex:
        """Return ``1 / self``.

        Raises:
            InvalidStateError: If this number is zero.
        """
        if not self.invertible():
            raise InvalidStateError(f"expected to be invertible but actual {self}")
        return ONE.divide(self, context)

    def invertible(self) -> bool:
        return not self.is_zero()

    def is_zero(self) -> bool:
        return self.real.is_zero() and self.imaginary.is_zero()

    # ------------------------------------------------------------------
    # Magnitude and angle
    # ------------------------------------------------------------------

    def abs_squared(self) -> Decimal:
        """Exact ``real² + imaginary²``."""
        ctx = EXACT_CONTEXT
        return ctx.add(
            ctx.multiply(self.real, self.real),
            ctx.multiply(self.imaginary, self.imaginary),
        )

    def abs(self, context: PrecisionContext = DEFAULT_CONTEXT) -> Decimal:
        """Magnitude ``sqrt(real² + imaginary²)`` approximated under ``context``."""
        return sqrt(self.abs_squared(), context)

    def argument(
        self,
        context: PrecisionContext = DEFAULT_CONTEXT,
        provider: TranscendentalProvider = DEFAULT_PROVIDER,
    ) -> Decimal:
        """Angle θ in (-π, π] with ``self = r·(cos θ + i·sin θ)``.

        Raises:
            InvalidStateError: If this number is zero.
        """
        if self.is_zero():
            raise InvalidStateError(f"expected this != 0 but actual {self}")

        rounding = context.decimal_context()
        if not self.real.is_zero():
            arctan = provider.atan(rounding.divide(self.imaginary, self.real), context)
            if self.real > 0:
                return arctan
            pi = provider.pi(context)
            if self.imaginary >= 0:
                return rounding.add(arctan, pi)
            return rounding.subtract(arctan, pi)

        half_pi = rounding.divide(provider.pi(context), _TWO)
        return half_pi if self.imaginary > 0 else half_pi.copy_negate()

    def polar_form(
        self,
        context: PrecisionContext = DEFAULT_CONTEXT,
        provider: TranscendentalProvider = DEFAULT_PROVIDER,
    ) -> PolarForm:
        """Return ``(abs, argument)``.

        Raises:
            InvalidStateError: If this number is zero.
        """
        if self.is_zero():
            raise InvalidStateError(f"expected this != 0 but actual {self}")
        return PolarForm(self.abs(context), self.argument(context, provider))

    # ------------------------------------------------------------------
    # Conversions and comparison
    # ------------------------------------------------------------------

    def matrix(self) -> DecimalMatrix:
        """Embed ``a + bi`` as the 2×2 matrix ``[[a, -b], [b, a]]``."""
        from numkernel.linear.domains import DecimalMatrix

        return (
            DecimalMatrix.builder(2, 2)
            .put(1, 1, self.real)
            .put(1, 2, self.imaginary.copy_negate())
            .put(2, 1, self.imaginary)
            .put(2, 2, self.real)
            .build()
        )

    def is_identical_to(self, other: DecimalComplex) -> bool:
        """True if both parts have the same value *and* representation."""
        _check_operand(other, "other")
        return (
            self.real.compare_total(other.real) == 0
            and self.imaginary.compare_total(other.imaginary) == 0
        )

    def __add__(self, other: object) -> DecimalComplex:
        if not isinstance(other, DecimalComplex):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: object) -> DecimalComplex:
        if not isinstance(other, DecimalComplex):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, other: object) -> DecimalComplex:
        if not isinstance(other, DecimalComplex):
            return NotImplemented
        return self.multiply(other)

    def __truediv__(self, other: object) -> DecimalComplex:
        if not isinstance(other, DecimalComplex):
            return NotImplemented
        return self.divide(other)

    def __pow__(self, exponent: int) -> DecimalComplex:
        return self.pow(exponent)

    def __neg__(self) -> DecimalComplex:
        return self.negate()

    def __abs__(self) -> Decimal:
        return self.abs()

    def __str__(self) -> str:
        sign = "-" if self.imaginary.is_signed() else "+"
        return f"{self.real}{sign}{self.imaginary.copy_abs()}i"


def _part(value: object, name: str) -> Decimal:
    if isinstance(value, bool) or not isinstance(value, int | Decimal):
        raise InvalidArgumentError(f"expected {name} to be a Decimal but actual {value!r}")
    return to_decimal(value, name)


def _check_operand(value: object, name: str) -> None:
    if not isinstance(value, DecimalComplex):
        raise InvalidArgumentError(
            f"expected {name} to be a DecimalComplex but actual {value!r}"
        )


def _check_exponent(exponent: object) -> None:
    if isinstance(exponent, bool) or not isinstance(exponent, int):
        raise InvalidArgumentError(f"expected exponent to be an int but actual {exponent!r}")
    if exponent < 0:
        raise InvalidArgumentError(f"expected exponent >= 0 but actual {exponent}")


ZERO = DecimalComplex(Decimal(0), Decimal(0))
ONE = DecimalComplex(Decimal(1), Decimal(0))
IMAGINARY = DecimalComplex(Decimal(0), Decimal(1))

DecimalComplex.ZERO = ZERO
DecimalComplex.ONE = ONE
DecimalComplex.IMAGINARY = IMAGINARY


__all__ = [
    "IMAGINARY",
    "ONE",
    "ZERO",
    "DecimalComplex",
]

"""Arbitrary-precision transcendental functions for the complex kernel.

Angles, polar conversion and anything else that needs pi, atan, sin or cos at
a caller-chosen precision goes through a TranscendentalProvider. Providers
are injected, so a different high-precision backend can be swapped in
without touching the complex-number code.

Key Providers:
- SympyProvider: exact symbolic arguments, numeric evaluation with ``evalf``
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

import sympy

from numkernel.data.precision import GUARD_DIGITS, PrecisionContext


class TranscendentalProvider(ABC):
    """Abstract base class for high-precision transcendental functions.

    Every method returns a Decimal rounded to ``context`` (its working digits
    and rounding mode).
    """

    @abstractmethod
    def pi(self, context: PrecisionContext) -> Decimal:
        """Return pi."""

    @abstractmethod
    def atan(self, x: Decimal, context: PrecisionContext) -> Decimal:
        """Return the arctangent of ``x`` in (-pi/2, pi/2)."""

    @abstractmethod
    def sin(self, x: Decimal, context: PrecisionContext) -> Decimal:
        """Return the sine of ``x`` (radians)."""

    @abstractmethod
    def cos(self, x: Decimal, context: PrecisionContext) -> Decimal:
        """Return the cosine of ``x`` (radians)."""

    @abstractmethod
    def sqrt(self, x: Decimal, context: PrecisionContext) -> Decimal:
        """Return the square root of non-negative ``x``."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class SympyProvider(TranscendentalProvider):
    """Transcendental functions evaluated with sympy.

    Decimal arguments become exact rationals, so no precision is lost before
    evaluation. Expressions are evaluated with GUARD_DIGITS extra decimal
    digits and then rounded once to the context.
    """

    def pi(self, context: PrecisionContext) -> Decimal:
        return self._evaluate(sympy.pi, context)

    def atan(self, x: Decimal, context: PrecisionContext) -> Decimal:
        return self._evaluate(sympy.atan(_rational(x)), context)

    def sin(self, x: Decimal, context: PrecisionContext) -> Decimal:
        return self._evaluate(sympy.sin(_rational(x)), context)

    def cos(self, x: Decimal, context: PrecisionContext) -> Decimal:
        return self._evaluate(sympy.cos(_rational(x)), context)

    def sqrt(self, x: Decimal, context: PrecisionContext) -> Decimal:
        return self._evaluate(sympy.sqrt(_rational(x)), context)

    @staticmethod
    def _evaluate(expression: sympy.Expr, context: PrecisionContext) -> Decimal:
        value = expression.evalf(context.working_digits + GUARD_DIGITS)
        return context.round(Decimal(str(value)))


def _rational(x: Decimal) -> sympy.Rational:
    numerator, denominator = Decimal(x).as_integer_ratio()
    return sympy.Rational(numerator, denominator)


DEFAULT_PROVIDER: TranscendentalProvider = SympyProvider()
"""Provider used when a caller supplies none."""


__all__ = [
    "DEFAULT_PROVIDER",
    "SympyProvider",
    "TranscendentalProvider",
]

"""Polar form of a complex number."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING

from numkernel.algorithms.transcendental import DEFAULT_PROVIDER, TranscendentalProvider
from numkernel.data.precision import DEFAULT_CONTEXT, PrecisionContext, to_decimal
from numkernel.errors import InvalidArgumentError

if TYPE_CHECKING:
    from numkernel.number.decimal_complex import DecimalComplex


@dataclass(frozen=True, slots=True)
class PolarForm:
    """``radial·(cos angular + i·sin angular)``.

    ``angular`` is in radians; values produced by ``argument()`` lie in
    (-π, π].
    """

    radial: Decimal
    angular: Decimal

    def __post_init__(self) -> None:
        radial = to_decimal(self.radial, "radial")
        if radial < 0:
            raise InvalidArgumentError(f"expected radial >= 0 but actual {radial}")
        object.__setattr__(self, "radial", radial)
        object.__setattr__(self, "angular", to_decimal(self.angular, "angular"))

    def to_complex(
        self,
        context: PrecisionContext = DEFAULT_CONTEXT,
        provider: TranscendentalProvider = DEFAULT_PROVIDER,
    ) -> DecimalComplex:
        """Convert back to rectangular form.

        The result is an approximation: cos and sin are evaluated by
        ``provider`` and the products are rounded to ``context``.
        """
        from numkernel.number.decimal_complex import DecimalComplex

        rounding = context.decimal_context()
        return DecimalComplex(
            rounding.multiply(self.radial, provider.cos(self.angular, context)),
            rounding.multiply(self.radial, provider.sin(self.angular, context)),
        )


__all__ = ["PolarForm"]

"""Tests for transcendental provider module."""

import math
from decimal import Decimal

import pytest

from numkernel.algorithms.transcendental import (
    DEFAULT_PROVIDER,
    SympyProvider,
    TranscendentalProvider,
)
from numkernel.data.precision import PrecisionContext

CONTEXT_50 = PrecisionContext(digits=50)


class TestSympyProvider:
    """Tests for the sympy-backed provider."""

    def test_default_provider(self) -> None:
        """DEFAULT_PROVIDER should be a SympyProvider."""
        assert isinstance(DEFAULT_PROVIDER, SympyProvider)

    def test_pi_fifty_digits(self) -> None:
        """pi should be correctly rounded to 50 significant digits."""
        expected = Decimal("3.1415926535897932384626433832795028841971693993751")
        assert DEFAULT_PROVIDER.pi(CONTEXT_50) == expected

    def test_result_has_context_digits(self) -> None:
        """Results carry no more digits than the context allows."""
        context = PrecisionContext(digits=12)
        value = DEFAULT_PROVIDER.pi(context)
        assert len(value.as_tuple().digits) <= 12

    def test_sqrt(self) -> None:
        """sqrt(2) to 20 digits."""
        context = PrecisionContext(digits=20)
        assert DEFAULT_PROVIDER.sqrt(Decimal(2), context) == Decimal("1.4142135623730950488")

    def test_atan_one_is_quarter_pi(self) -> None:
        """atan(1) = pi/4."""
        quarter_pi = CONTEXT_50.decimal_context().divide(DEFAULT_PROVIDER.pi(CONTEXT_50), 4)
        assert abs(DEFAULT_PROVIDER.atan(Decimal(1), CONTEXT_50) - quarter_pi) < Decimal("1E-45")

    def test_sin_cos_zero(self) -> None:
        """sin(0) = 0 and cos(0) = 1."""
        assert DEFAULT_PROVIDER.sin(Decimal(0), CONTEXT_50) == 0
        assert DEFAULT_PROVIDER.cos(Decimal(0), CONTEXT_50) == 1

    @pytest.mark.parametrize("x", ["0.5", "-1.25", "3"])
    def test_matches_math_module(self, x: str) -> None:
        """Agrees with the float implementations."""
        value = Decimal(x)
        context = PrecisionContext(digits=20)
        assert float(DEFAULT_PROVIDER.sin(value, context)) == pytest.approx(math.sin(float(x)))
        assert float(DEFAULT_PROVIDER.cos(value, context)) == pytest.approx(math.cos(float(x)))
        assert float(DEFAULT_PROVIDER.atan(value, context)) == pytest.approx(math.atan(float(x)))

    def test_pythagorean_identity(self) -> None:
        """sin² + cos² = 1 to the context's precision."""
        x = Decimal("0.7")
        s = DEFAULT_PROVIDER.sin(x, CONTEXT_50)
        c = DEFAULT_PROVIDER.cos(x, CONTEXT_50)
        assert abs(s * s + c * c - 1) < Decimal("1E-25")

    def test_cannot_instantiate_abstract(self) -> None:
        """The provider ABC cannot be instantiated."""
        with pytest.raises(TypeError):
            TranscendentalProvider()  # type: ignore[abstract]

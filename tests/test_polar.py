"""Tests for polar form."""

from decimal import Decimal

import pytest

from numkernel.algorithms.transcendental import DEFAULT_PROVIDER
from numkernel.data.precision import PrecisionContext
from numkernel.errors import InvalidArgumentError
from numkernel.number import DecimalComplex, PolarForm

CONTEXT = PrecisionContext(digits=40)


class TestPolarForm:
    """Tests for PolarForm dataclass."""

    def test_converts_inputs(self) -> None:
        """Radial and angular parts are stored as Decimals."""
        form = PolarForm(2, "0.5")
        assert form.radial == Decimal(2)
        assert form.angular == Decimal("0.5")

    def test_negative_radial_raises(self) -> None:
        with pytest.raises(InvalidArgumentError, match="radial"):
            PolarForm(Decimal(-1), Decimal(0))

    def test_immutable(self) -> None:
        form = PolarForm(1, 0)
        with pytest.raises(AttributeError):
            form.radial = Decimal(2)  # type: ignore[misc]

    def test_to_complex_zero_angle(self) -> None:
        """r·(cos 0 + i sin 0) = r."""
        assert PolarForm(Decimal("2.5"), 0).to_complex(CONTEXT) == DecimalComplex.of("2.5", 0)

    def test_to_complex_quarter_turn(self) -> None:
        """An angle of π/2 maps onto the imaginary axis."""
        half_pi = CONTEXT.decimal_context().divide(DEFAULT_PROVIDER.pi(CONTEXT), 2)
        z = PolarForm(2, half_pi).to_complex(CONTEXT)
        assert abs(z.real) < Decimal("1E-35")
        assert abs(z.imaginary - 2) < Decimal("1E-35")

    def test_roundtrip(self) -> None:
        """polar_form(to_complex(p)) ≈ p for an angle inside (-π, π]."""
        form = PolarForm(Decimal(3), Decimal("-2.1"))
        restored = form.to_complex(CONTEXT).polar_form(CONTEXT.with_epsilon(None))
        assert abs(restored.radial - form.radial) < Decimal("1E-35")
        assert abs(restored.angular - form.angular) < Decimal("1E-35")

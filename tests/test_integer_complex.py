"""Tests for the exact (Gaussian integer) complex-number kernel."""

import math
from decimal import Decimal

import pytest

from numkernel.data.precision import PrecisionContext
from numkernel.errors import InvalidArgumentError, InvalidStateError
from numkernel.linear import IntegerMatrix
from numkernel.number import DecimalComplex, IntegerComplex
from numkernel.number.integer_complex import IMAGINARY, ONE, ZERO


class TestIntegerComplex:
    """Tests for IntegerComplex arithmetic."""

    @pytest.mark.parametrize("real", [1.0, Decimal(1), True, "1"])
    def test_rejects_non_int_parts(self, real: object) -> None:
        """Only ints are accepted for the parts."""
        with pytest.raises(InvalidArgumentError, match="int"):
            IntegerComplex(real, 0)  # type: ignore[arg-type]

    def test_of_defaults_imaginary(self) -> None:
        assert IntegerComplex.of(7) == IntegerComplex(7, 0)

    def test_multiply(self) -> None:
        """(1 + 2i)(3 + 4i) = -5 + 10i."""
        assert IntegerComplex(1, 2) * IntegerComplex(3, 4) == IntegerComplex(-5, 10)

    def test_ring_laws(self) -> None:
        """add/multiply are commutative and associative with identities."""
        a, b, c = IntegerComplex(2, -3), IntegerComplex(-1, 4), IntegerComplex(5, 6)
        assert a + b == b + a
        assert a * b == b * a
        assert (a + b) + c == a + (b + c)
        assert (a * b) * c == a * (b * c)
        assert a + ZERO == a
        assert a * ONE == a
        assert a - a == ZERO

    def test_pow(self) -> None:
        assert IMAGINARY ** 2 == IntegerComplex(-1, 0)
        assert IntegerComplex(1, 1).pow(4) == IntegerComplex(-4, 0)
        assert IntegerComplex(9, 9).pow(0) == ONE

    def test_negative_exponent_raises(self) -> None:
        with pytest.raises(InvalidArgumentError, match="exponent"):
            IntegerComplex(1, 1).pow(-2)

    def test_conjugate(self) -> None:
        z = IntegerComplex(3, -4)
        assert z.conjugate() == IntegerComplex(3, 4)
        assert z.conjugate().conjugate() == z
        assert -z == IntegerComplex(-3, 4)

    def test_divide_returns_decimal_complex(self) -> None:
        """(1 + 2i) / (3 + 4i) = 0.44 + 0.08i."""
        quotient = IntegerComplex(1, 2) / IntegerComplex(3, 4)
        assert isinstance(quotient, DecimalComplex)
        assert quotient == DecimalComplex.of("0.44", "0.08")

    def test_divide_by_zero_raises(self) -> None:
        with pytest.raises(InvalidArgumentError):
            ONE.divide(ZERO)

    def test_invert(self) -> None:
        assert IMAGINARY.invert() == DecimalComplex.of(0, -1)
        assert IntegerComplex(2, 0).invert() == DecimalComplex.of("0.5", 0)

    def test_invert_zero_raises(self) -> None:
        with pytest.raises(InvalidStateError):
            ZERO.invert()

    def test_abs(self) -> None:
        """abs(3 + 4i) = 5; the magnitude is a Decimal."""
        assert IntegerComplex(3, 4).abs_squared() == 25
        assert IntegerComplex(3, 4).abs(PrecisionContext(digits=20, epsilon=None)) == 5
        assert float(abs(IntegerComplex(1, 1))) == pytest.approx(math.sqrt(2))

    def test_argument(self) -> None:
        argument = IntegerComplex(-3, -4).argument()
        assert float(argument) == pytest.approx(math.atan2(-4, -3))

    def test_argument_zero_raises(self) -> None:
        with pytest.raises(InvalidStateError):
            ZERO.argument()
        with pytest.raises(InvalidStateError):
            ZERO.polar_form()

    def test_polar_form(self) -> None:
        form = IntegerComplex(0, 3).polar_form(PrecisionContext(digits=20, epsilon=None))
        assert form.radial == 3
        assert float(form.angular) == pytest.approx(math.pi / 2)

    def test_matrix(self) -> None:
        """a + bi embeds as the integer matrix [[a, -b], [b, a]]."""
        matrix = IntegerComplex(2, 1).matrix()
        assert isinstance(matrix, IntegerMatrix)
        assert matrix == IntegerMatrix.of([2, -1], [1, 2])
        assert matrix.determinant() == IntegerComplex(2, 1).abs_squared()

    def test_matrix_is_multiplicative(self) -> None:
        """matrix(a·b) = matrix(a) @ matrix(b)."""
        a, b = IntegerComplex(1, -2), IntegerComplex(3, 5)
        assert (a * b).matrix() == a.matrix() @ b.matrix()

    def test_to_decimal(self) -> None:
        assert IntegerComplex(3, -4).to_decimal() == DecimalComplex.of(3, -4)

    def test_str(self) -> None:
        assert str(IntegerComplex(3, -4)) == "3-4i"
        assert str(IntegerComplex(0, 1)) == "0+1i"

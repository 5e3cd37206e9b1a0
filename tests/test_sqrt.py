"""Tests for square root algorithm."""

import logging
import math
from decimal import Decimal

import pytest

from numkernel.algorithms.sqrt import (
    ConvergenceResult,
    HeronIteration,
    IterationResult,
    SquareRootCalculator,
    SquareRootTrace,
    is_perfect_square,
    sqrt,
    sqrt_of_perfect_square,
)
from numkernel.data.precision import PrecisionContext, TerminationPolicy
from numkernel.errors import InvalidArgumentError

EPSILON_CONTEXT = PrecisionContext(epsilon=Decimal("1E-10"))
PRECISION_CONTEXT = PrecisionContext(digits=20, epsilon=None)


class TestIterationResult:
    """Tests for IterationResult dataclass."""

    def test_immutable(self) -> None:
        """IterationResult should be immutable."""
        result = IterationResult(estimate=Decimal(2), previous=Decimal(3), delta=Decimal(1))
        with pytest.raises(AttributeError):
            result.estimate = Decimal(1)  # type: ignore[misc]

    def test_slots(self) -> None:
        """IterationResult should use slots (no __dict__)."""
        result = IterationResult(estimate=Decimal(2), previous=Decimal(3), delta=Decimal(1))
        assert not hasattr(result, "__dict__")


class TestHeronIteration:
    """Tests for HeronIteration engine."""

    def test_seed_above_root(self) -> None:
        """The seed must not lie below the root."""
        for value in (2, 10, 12345, Decimal("0.5"), Decimal("0.0001"), Decimal("98765.4321")):
            engine = HeronIteration(value, EPSILON_CONTEXT)
            assert engine.current >= Decimal(value).sqrt()

    def test_iterates_decrease_monotonically(self) -> None:
        """Heron iterates from above decrease towards the root."""
        engine = HeronIteration(2, EPSILON_CONTEXT)
        working = EPSILON_CONTEXT.decimal_context()
        previous = engine.current
        for _ in range(4):
            result = engine.iterate()
            assert result.estimate <= previous
            assert result.delta == working.subtract(result.previous, result.estimate).copy_abs()
            previous = result.estimate

    def test_iteration_counter(self) -> None:
        """iterations should count executed steps."""
        engine = HeronIteration(Decimal(7), EPSILON_CONTEXT)
        engine.iterate()
        engine.iterate()
        assert engine.iterations == 2

    def test_check_convergence_returns_result(self) -> None:
        """check_convergence() should return ConvergenceResult."""
        engine = HeronIteration(2, EPSILON_CONTEXT)
        result = engine.check_convergence(engine.iterate())
        assert isinstance(result, ConvergenceResult)
        assert not result.converged

    def test_precision_policy_returns_rounded_value(self) -> None:
        """Under the precision policy the converged value has `digits` digits."""
        context = PrecisionContext(digits=8, epsilon=None)
        engine = HeronIteration(2, context)
        while True:
            convergence = engine.check_convergence(engine.iterate())
            if convergence.converged:
                break
        assert convergence.value == Decimal("1.4142136")

    def test_non_positive_rejected(self) -> None:
        """The engine only handles positive radicands."""
        with pytest.raises(InvalidArgumentError):
            HeronIteration(0, EPSILON_CONTEXT)


class TestSquareRootCalculator:
    """Tests for SquareRootCalculator."""

    def test_sqrt_two_epsilon(self) -> None:
        """sqrt(2) under epsilon 1e-10 is within 1e-10 of the root."""
        result = SquareRootCalculator(EPSILON_CONTEXT).sqrt(2)
        assert abs(result - Decimal("1.4142135624")) < Decimal("1E-10")

    def test_sqrt_two_precision(self) -> None:
        """sqrt(2) under the precision policy has exactly `digits` digits."""
        result = SquareRootCalculator(PRECISION_CONTEXT).sqrt(2)
        assert result == Decimal("1.4142135623730950488")

    @pytest.mark.parametrize("value", [0, 1, Decimal(0), Decimal(1)])
    def test_fast_paths(self, value: int | Decimal) -> None:
        """0 and 1 return immediately without iterating."""
        trace = SquareRootCalculator().trace(value)
        assert trace.result == Decimal(value)
        assert trace.iterations == 0
        assert trace.converged

    @pytest.mark.parametrize("value", [4, 9, 144, 10**20, Decimal("6.25")])
    def test_perfect_squares(self, value: int | Decimal) -> None:
        """Perfect squares converge to their exact root."""
        result = SquareRootCalculator(PRECISION_CONTEXT).sqrt(value)
        assert result == Decimal(value).sqrt()

    def test_small_decimal(self) -> None:
        """Radicands below 1 are handled."""
        result = sqrt(Decimal("0.0004"), PRECISION_CONTEXT)
        assert result == Decimal("0.02")

    def test_large_integer_precision_policy(self) -> None:
        """Large integers converge with the precision policy."""
        value = 2**200 + 1
        result = sqrt(value, PRECISION_CONTEXT)
        expected = PRECISION_CONTEXT.round(Decimal(value).sqrt(PRECISION_CONTEXT.decimal_context(10)))
        assert result == expected

    def test_epsilon_derived_digits(self) -> None:
        """digits=0 works for large roots under an absolute epsilon."""
        context = PrecisionContext(digits=0, epsilon=Decimal("1E-8"))
        result = sqrt(10**30 + 7, context)
        assert abs(result - Decimal(10**30 + 7).sqrt()) < Decimal("1E-6")

    def test_matches_float_reference(self) -> None:
        """Agrees with math.sqrt to float precision."""
        for value in (3, 17, 1234567):
            assert float(sqrt(value)) == pytest.approx(math.sqrt(value), rel=1e-12)

    @pytest.mark.parametrize("context", [EPSILON_CONTEXT, PRECISION_CONTEXT], ids=["epsilon", "precision"])
    @pytest.mark.parametrize(
        "smaller,larger",
        [
            (0, Decimal("1E-20")),
            (Decimal("0.25"), Decimal("0.26")),
            (1, 2),
            (2, Decimal("2.0001")),
            (2, 3),
            (99, 100),
            (10**40, 10**41),
        ],
    )
    def test_monotonic(self, smaller: int | Decimal, larger: int | Decimal, context: PrecisionContext) -> None:
        """A larger radicand never yields a smaller root."""
        assert sqrt(smaller, context) <= sqrt(larger, context)

    @pytest.mark.parametrize("value", [-1, Decimal("-0.5")])
    def test_negative_raises(self, value: int | Decimal) -> None:
        """Negative radicands raise InvalidArgumentError."""
        with pytest.raises(InvalidArgumentError, match=">= 0"):
            sqrt(value)

    @pytest.mark.parametrize("value", [2.0, "2", None, True, Decimal("NaN")])
    def test_non_numeric_raises(self, value: object) -> None:
        """Only int and finite Decimal radicands are accepted."""
        with pytest.raises(InvalidArgumentError):
            sqrt(value)  # type: ignore[arg-type]

    def test_trace(self) -> None:
        """trace() records every iteration."""
        trace = SquareRootCalculator(EPSILON_CONTEXT).trace(2)
        assert isinstance(trace, SquareRootTrace)
        assert trace.converged
        assert trace.policy is TerminationPolicy.EPSILON
        assert len(trace.history) == trace.iterations
        assert trace.history[-1]["delta"] < Decimal("1E-10")

    def test_iteration_cap_returns_current_value(self, caplog: pytest.LogCaptureFixture) -> None:
        """Hitting max_iterations logs a warning and returns the last iterate."""
        context = PrecisionContext(epsilon=Decimal("1E-30"), max_iterations=2)
        with caplog.at_level(logging.WARNING, logger="numkernel.algorithms.sqrt"):
            trace = SquareRootCalculator(context).trace(2)
        assert not trace.converged
        assert trace.iterations == 2
        assert trace.result > Decimal(2).sqrt()
        assert "did not converge" in caplog.text

    def test_rejects_non_context(self) -> None:
        """The calculator requires a PrecisionContext."""
        with pytest.raises(InvalidArgumentError):
            SquareRootCalculator("decimal64")  # type: ignore[arg-type]


class TestPerfectSquares:
    """Tests for exact integer roots."""

    @pytest.mark.parametrize("value,expected", [(0, True), (1, True), (16, True), (15, False)])
    def test_is_perfect_square(self, value: int, expected: bool) -> None:
        """Detects perfect squares."""
        assert is_perfect_square(value) is expected

    def test_sqrt_of_perfect_square(self) -> None:
        """Returns the exact integer root."""
        assert sqrt_of_perfect_square(12345678987654321**2) == 12345678987654321

    def test_sqrt_of_non_square_raises(self) -> None:
        """Non-squares raise InvalidArgumentError."""
        with pytest.raises(InvalidArgumentError, match="perfect square"):
            sqrt_of_perfect_square(8)

    def test_negative_raises(self) -> None:
        """Negative input raises InvalidArgumentError."""
        with pytest.raises(InvalidArgumentError):
            is_perfect_square(-4)

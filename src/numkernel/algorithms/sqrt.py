"""Heron's (Newton-Raphson) square root with selectable termination policy.

Approximates sqrt(v) for v >= 0 by iterating

    x_{n+1} = (x_n + v / x_n) / 2

from a seed above the root, so the iterates decrease monotonically towards
sqrt(v). Termination follows the policy of the PrecisionContext:

- EPSILON: stop when |x_n - x_{n+1}| < epsilon.
- PRECISION: stop when x_n and x_{n+1} agree once rounded to ``digits``
  significant digits; the rounded value is returned.

References:
- Heath: "Scientific Computing" (2nd ed.), §5.5
- Brent & Zimmermann: "Modern Computer Arithmetic", §3.5
"""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass
from decimal import Decimal, localcontext

from numkernel.data.precision import (
    DEFAULT_CONTEXT,
    GUARD_DIGITS,
    PrecisionContext,
    TerminationPolicy,
)
from numkernel.errors import InvalidArgumentError, InvalidStateError

logger = logging.getLogger(__name__)

_TWO = Decimal(2)


@dataclass(frozen=True, slots=True)
class IterationResult:
    """Result of a single Heron step."""

    estimate: Decimal
    """New iterate x_{n+1}."""

    previous: Decimal
    """Iterate x_n the step started from."""

    delta: Decimal
    """|x_n - x_{n+1}|."""


@dataclass(frozen=True, slots=True)
class ConvergenceResult:
    """Result of a convergence check."""

    converged: bool
    """True if the context's termination policy is satisfied."""

    value: Decimal
    """Value to return if converged (rounded under the precision policy)."""


class HeronIteration:
    """Heron iteration engine for a single positive radicand.

    Example:
        >>> engine = HeronIteration(Decimal(2), PrecisionContext(epsilon=Decimal("1e-10")))
        >>> while True:
        ...     result = engine.iterate()
        ...     if engine.check_convergence(result).converged:
        ...         break
    """

    __slots__ = (
        "_value",
        "_context",
        "_working",
        "_target",
        "_current",
        "_iterations",
    )

    def __init__(self, value: int | Decimal, context: PrecisionContext) -> None:
        """Initialize the iteration engine.

        Args:
            value: Positive radicand.
            context: Precision context selecting the termination policy.
        """
        radicand = _checked_radicand(value)
        if radicand <= 0:
            raise InvalidArgumentError(f"expected value > 0 but actual {value}")

        self._context = context
        self._value = radicand

        if context.policy is TerminationPolicy.PRECISION:
            self._working = context.decimal_context(GUARD_DIGITS)
            self._target = context.decimal_context()
        else:
            extra = 0
            if context.digits == 0:
                # Absolute epsilon needs digits for the integer part of the root.
                extra = max(0, radicand.adjusted() // 2 + 1)
            self._working = context.decimal_context(extra)
            self._target = None

        self._current = self._working.plus(_seed(value, radicand, self._working))
        self._iterations = 0
        logger.debug("seed value for sqrt(%s) = %s", radicand, self._current)

    def iterate(self) -> IterationResult:
        """Execute a single Heron step.

        Returns:
            IterationResult with the new iterate and its distance to the old one.
        """
        previous = self._current
        with localcontext(self._working):
            estimate = (previous + self._value / previous) / _TWO
            delta = abs(previous - estimate)

        self._current = estimate
        self._iterations += 1
        logger.debug("|successor - predecessor| = %s", delta)

        return IterationResult(estimate=estimate, previous=previous, delta=delta)

    def check_convergence(self, result: IterationResult) -> ConvergenceResult:
        """Apply the context's termination policy to an iteration result."""
        epsilon = self._context.epsilon
        if epsilon is not None:
            return ConvergenceResult(converged=result.delta < epsilon, value=result.estimate)
        if self._target is None:
            raise InvalidStateError("precision policy without a target context")

        rounded = self._target.plus(result.estimate)
        return ConvergenceResult(
            converged=rounded == self._target.plus(result.previous),
            value=rounded,
        )

    @property
    def current(self) -> Decimal:
        """Current iterate."""
        return self._current

    @property
    def iterations(self) -> int:
        """Number of steps executed so far."""
        return self._iterations


@dataclass(frozen=True, slots=True)
class SquareRootTrace:
    """Complete trace of a square-root computation."""

    value: Decimal
    """Radicand."""

    result: Decimal
    """Approximation of sqrt(value)."""

    iterations: int
    """Number of Heron steps performed."""

    converged: bool
    """Whether the termination policy was met before the iteration cap."""

    policy: TerminationPolicy
    """Termination policy that was applied."""

    total_time: float
    """Total execution time (seconds)."""

    history: list[dict]
    """Per-iteration metrics."""


class SquareRootCalculator:
    """Square roots of non-negative integers and decimals for one context.

    Example:
        >>> calculator = SquareRootCalculator(PrecisionContext(digits=10, epsilon=None))
        >>> calculator.sqrt(2)
        Decimal('1.414213562')
    """

    __slots__ = ("_context",)

    def __init__(self, context: PrecisionContext = DEFAULT_CONTEXT) -> None:
        if not isinstance(context, PrecisionContext):
            raise InvalidArgumentError(
                f"expected a PrecisionContext but actual {context!r}"
            )
        self._context = context

    @property
    def context(self) -> PrecisionContext:
        """Precision context used by this calculator."""
        return self._context

    def sqrt(self, value: int | Decimal) -> Decimal:
        """Approximate the square root of ``value``.

        Args:
            value: Non-negative int or Decimal.

        Returns:
            Non-negative Decimal approximation of sqrt(value).

        Raises:
            InvalidArgumentError: If value is negative or not a number.
        """
        return self._run(value, record=False).result

    def trace(self, value: int | Decimal) -> SquareRootTrace:
        """Approximate sqrt(value) and record every iteration."""
        return self._run(value, record=True)

    def _run(self, value: int | Decimal, *, record: bool) -> SquareRootTrace:
        radicand = _checked_radicand(value)
        if radicand < 0:
            raise InvalidArgumentError(f"expected value >= 0 but actual {value}")

        context = self._context
        start_time = time.perf_counter()

        if radicand == 0 or radicand == 1:
            return SquareRootTrace(
                value=radicand,
                result=Decimal(int(radicand)),
                iterations=0,
                converged=True,
                policy=context.policy,
                total_time=time.perf_counter() - start_time,
                history=[],
            )

        engine = HeronIteration(value, context)
        history: list[dict] = []
        converged = False
        result = engine.current

        for iteration in range(context.max_iterations):
            iter_result = engine.iterate()
            conv_result = engine.check_convergence(iter_result)
            result = conv_result.value

            if record:
                history.append(
                    {
                        "iteration": iteration,
                        "estimate": iter_result.estimate,
                        "delta": iter_result.delta,
                    }
                )

            if conv_result.converged:
                converged = True
                break

        if not converged:
            logger.warning(
                "sqrt(%s) did not converge within %d iterations; returning %s",
                radicand,
                context.max_iterations,
                result,
            )

        logger.debug("terminated after %d iterations", engine.iterations)
        logger.debug("sqrt(%s) = %s", radicand, result)

        return SquareRootTrace(
            value=radicand,
            result=result,
            iterations=engine.iterations,
            converged=converged,
            policy=context.policy,
            total_time=time.perf_counter() - start_time,
            history=history,
        )

    def __repr__(self) -> str:
        return f"SquareRootCalculator(context={self._context!r})"


def sqrt(value: int | Decimal, context: PrecisionContext = DEFAULT_CONTEXT) -> Decimal:
    """Approximate sqrt(value) under ``context``.

    Convenience wrapper around SquareRootCalculator.

    Raises:
        InvalidArgumentError: If value is negative or not a number.
    """
    return SquareRootCalculator(context).sqrt(value)


def is_perfect_square(integer: int) -> bool:
    """Return True if ``integer`` is the square of an integer.

    Raises:
        InvalidArgumentError: If integer is negative or not an int.
    """
    _check_non_negative_int(integer)
    root = math.isqrt(integer)
    return root * root == integer


def sqrt_of_perfect_square(integer: int) -> int:
    """Return the exact integer root of a perfect square.

    Raises:
        InvalidArgumentError: If integer is negative or not a perfect square.
    """
    _check_non_negative_int(integer)
    root = math.isqrt(integer)
    if root * root != integer:
        raise InvalidArgumentError(f"expected perfect square but actual {integer}")
    return root


# =============================================================================
# INTERNAL HELPERS
# =============================================================================


def _checked_radicand(value: object) -> Decimal:
    if isinstance(value, bool) or not isinstance(value, int | Decimal):
        raise InvalidArgumentError(f"expected int or Decimal but actual {value!r}")
    if isinstance(value, Decimal) and not value.is_finite():
        raise InvalidArgumentError(f"expected finite value but actual {value}")
    return Decimal(value)


def _check_non_negative_int(integer: object) -> None:
    if isinstance(integer, bool) or not isinstance(integer, int):
        raise InvalidArgumentError(f"expected int but actual {integer!r}")
    if integer < 0:
        raise InvalidArgumentError(f"expected integer >= 0 but actual {integer}")


def _seed(value: int | Decimal, radicand: Decimal, working) -> Decimal:
    """Cheap starting point that is >= sqrt(radicand)."""
    with localcontext(working):
        seed = (radicand + 1) / _TWO  # AM-GM: (v + 1) / 2 >= sqrt(v)

    if isinstance(value, int):
        # 2**ceil(bits / 2) > sqrt(v) since v < 2**bits
        magnitude = Decimal(1 << ((value.bit_length() + 1) // 2))
    else:
        # v < 10**(adjusted + 1)
        magnitude = Decimal(1).scaleb(-(-(radicand.adjusted() + 1) // 2))

    return min(seed, magnitude)


__all__ = [
    "ConvergenceResult",
    "HeronIteration",
    "IterationResult",
    "SquareRootCalculator",
    "SquareRootTrace",
    "is_perfect_square",
    "sqrt",
    "sqrt_of_perfect_square",
]

"""
Precision Context Definitions - Single Source of Truth

This module defines the immutable precision context that drives every
rounding and iterative operation in the kernel, together with the named
presets (modelled on IEEE 754-2008 decimal interchange formats).

A context selects one of two square-root termination policies:

- EPSILON: stop when two successive iterates differ by less than ``epsilon``.
- PRECISION: stop when ``digits`` significant digits are stable under
  ``rounding``.

References:
    - IEEE 754-2008 decimal32 / decimal64 / decimal128 formats
    - General Decimal Arithmetic Specification (Cowlishaw)
"""

from __future__ import annotations

import decimal
from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum

from numkernel.errors import InvalidArgumentError, InvalidStateError

GUARD_DIGITS: int = 5
"""Extra digits carried by intermediate computations."""

DEFAULT_MAX_ITERATIONS: int = 1000
"""Default iteration cap for square-root approximation."""


class RoundingMode(Enum):
    """Supported rounding policies."""

    HALF_UP = "half_up"
    HALF_EVEN = "half_even"
    FLOOR = "floor"
    CEILING = "ceiling"
    TRUNCATE = "truncate"  # round toward zero

    @property
    def decimal_rounding(self) -> str:
        """The matching ``decimal`` module rounding constant."""
        return _DECIMAL_ROUNDING[self]

    @classmethod
    def parse(cls, name: RoundingMode | str) -> RoundingMode:
        """Parse a rounding mode from its name ('half-up', 'HALF_EVEN', ...)."""
        if isinstance(name, RoundingMode):
            return name
        normalized = name.lower().replace("-", "_").replace(" ", "_")
        for mode in cls:
            if mode.value == normalized:
                return mode
        valid = [m.value for m in cls]
        raise InvalidArgumentError(f"Unknown rounding mode: '{name}'. Valid: {valid}")


_DECIMAL_ROUNDING: dict[RoundingMode, str] = {
    RoundingMode.HALF_UP: decimal.ROUND_HALF_UP,
    RoundingMode.HALF_EVEN: decimal.ROUND_HALF_EVEN,
    RoundingMode.FLOOR: decimal.ROUND_FLOOR,
    RoundingMode.CEILING: decimal.ROUND_CEILING,
    RoundingMode.TRUNCATE: decimal.ROUND_DOWN,
}


class TerminationPolicy(Enum):
    """Square-root termination policy selected by a context."""

    EPSILON = "epsilon"
    PRECISION = "precision"


EXACT_CONTEXT = decimal.Context(
    prec=decimal.MAX_PREC,
    Emax=decimal.MAX_EMAX,
    Emin=decimal.MIN_EMIN,
    traps=[decimal.InvalidOperation, decimal.DivisionByZero, decimal.Overflow],
)
"""Context for rounding-free add/subtract/multiply. Never use it to divide."""


@dataclass(frozen=True, slots=True)
class PrecisionContext:
    """Precision and convergence settings for approximate operations.

    Attributes:
        digits: Significant decimal digits kept after rounding. ``0`` means
            "derive the working precision from ``epsilon``".
        rounding: Rounding policy applied wherever a result is rounded.
        epsilon: Convergence threshold in (0, 1) for the epsilon policy, or
            ``None`` to select the precision policy.
        max_iterations: Iteration cap for square-root approximation.
    """

    digits: int = 34
    rounding: RoundingMode = RoundingMode.HALF_UP
    epsilon: Decimal | None = Decimal("1E-10")
    max_iterations: int = DEFAULT_MAX_ITERATIONS

    def __post_init__(self) -> None:
        if isinstance(self.digits, bool) or not isinstance(self.digits, int):
            raise InvalidArgumentError(
                f"expected digits to be an int but actual {self.digits!r}"
            )
        if self.digits < 0:
            raise InvalidArgumentError(
                f"expected digits >= 0 but actual {self.digits}"
            )
        if not isinstance(self.rounding, RoundingMode):
            object.__setattr__(self, "rounding", RoundingMode.parse(self.rounding))
        if self.epsilon is not None:
            epsilon = _to_decimal(self.epsilon, "epsilon")
            if not Decimal(0) < epsilon < Decimal(1):
                raise InvalidArgumentError(
                    f"expected epsilon in (0, 1) but actual {epsilon}"
                )
            object.__setattr__(self, "epsilon", epsilon)
        elif self.digits == 0:
            raise InvalidArgumentError(
                "expected digits > 0 when no epsilon is given but actual 0"
            )
        if self.max_iterations < 1:
            raise InvalidArgumentError(
                f"expected max_iterations > 0 but actual {self.max_iterations}"
            )

    @property
    def policy(self) -> TerminationPolicy:
        """Termination policy selected by the populated fields."""
        if self.epsilon is not None:
            return TerminationPolicy.EPSILON
        return TerminationPolicy.PRECISION

    @property
    def working_digits(self) -> int:
        """Precision used for rounded arithmetic."""
        if self.digits > 0:
            return self.digits
        if self.epsilon is None:
            raise InvalidStateError("digits=0 requires an epsilon")
        return -self.epsilon.adjusted() + GUARD_DIGITS

    def decimal_context(self, extra_digits: int = 0) -> decimal.Context:
        """Build a fresh ``decimal.Context`` for this precision.

        Args:
            extra_digits: Digits added on top of ``working_digits``
                (e.g. guard digits for intermediate results).
        """
        return decimal.Context(
            prec=self.working_digits + extra_digits,
            rounding=self.rounding.decimal_rounding,
            Emax=decimal.MAX_EMAX,
            Emin=decimal.MIN_EMIN,
            traps=[decimal.InvalidOperation, decimal.DivisionByZero, decimal.Overflow],
        )

    def round(self, value: Decimal) -> Decimal:
        """Round ``value`` to ``working_digits`` significant digits."""
        return self.decimal_context().plus(value)

    def with_digits(self, digits: int) -> PrecisionContext:
        """Copy of this context with another digit count."""
        return replace(self, digits=digits)

    def with_epsilon(self, epsilon: Decimal | str | None) -> PrecisionContext:
        """Copy of this context with another epsilon (``None`` = precision policy)."""
        return replace(self, epsilon=epsilon)

    def with_rounding(self, rounding: RoundingMode | str) -> PrecisionContext:
        """Copy of this context with another rounding mode."""
        return replace(self, rounding=RoundingMode.parse(rounding))


# =============================================================================
# PUBLIC API
# =============================================================================


def get_context(name: str) -> PrecisionContext:
    """
    Get a named precision context preset.

    Args:
        name: Preset name (e.g. 'decimal64', 'DECIMAL-128', 'polar')

    Returns:
        The preset PrecisionContext

    Raises:
        InvalidArgumentError: If the preset is unknown

    Example:
        >>> get_context("decimal64").digits
        16
    """
    normalized = name.lower().replace("-", "").replace("_", "").replace(" ", "")
    if normalized in _CONTEXT_PRESETS:
        return _CONTEXT_PRESETS[normalized]

    valid = list(_CONTEXT_PRESETS)
    raise InvalidArgumentError(f"Unknown precision context: '{name}'. Valid: {valid}")


def list_contexts() -> list[str]:
    """List the names of all context presets, lowest precision first."""
    return sorted(_CONTEXT_PRESETS, key=lambda n: _CONTEXT_PRESETS[n].digits)


def to_decimal(value: object, name: str = "value") -> Decimal:
    """Convert an int, str or Decimal losslessly to Decimal.

    Floats are converted through their shortest repr ('0.1' rather than the
    binary expansion). Anything else raises InvalidArgumentError.
    """
    return _to_decimal(value, name)


# =============================================================================
# INTERNAL HELPERS
# =============================================================================


def _to_decimal(value: object, name: str) -> Decimal:
    if isinstance(value, Decimal):
        decimal_value = value
    elif isinstance(value, bool) or value is None:
        raise InvalidArgumentError(f"expected {name} to be a number but actual {value!r}")
    elif isinstance(value, int):
        decimal_value = Decimal(value)
    elif isinstance(value, float):
        decimal_value = Decimal(repr(value))
    elif isinstance(value, str):
        try:
            decimal_value = Decimal(value.strip())
        except decimal.InvalidOperation as exc:
            raise InvalidArgumentError(
                f"expected {name} to be a decimal string but actual {value!r}"
            ) from exc
    else:
        raise InvalidArgumentError(f"expected {name} to be a number but actual {value!r}")

    if not decimal_value.is_finite():
        raise InvalidArgumentError(f"expected {name} to be finite but actual {value!r}")
    return decimal_value


# =============================================================================
# CONTEXT PRESETS
# =============================================================================
# Digits follow the IEEE 754-2008 decimal formats; "polar" matches the
# precision used for angles when none is requested explicitly.

_CONTEXT_PRESETS: dict[str, PrecisionContext] = {
    "decimal32": PrecisionContext(digits=7, epsilon=Decimal("1E-6")),
    "decimal64": PrecisionContext(digits=16, epsilon=Decimal("1E-10")),
    "decimal128": PrecisionContext(digits=34, epsilon=Decimal("1E-10")),
    "polar": PrecisionContext(digits=100, epsilon=Decimal("1E-50")),
}

DEFAULT_CONTEXT: PrecisionContext = _CONTEXT_PRESETS["decimal128"]
"""Context used when a caller supplies none."""


__all__ = [
    "DEFAULT_CONTEXT",
    "DEFAULT_MAX_ITERATIONS",
    "EXACT_CONTEXT",
    "GUARD_DIGITS",
    "PrecisionContext",
    "RoundingMode",
    "TerminationPolicy",
    "get_context",
    "list_contexts",
    "to_decimal",
]

"""Data module for precision contexts and rounding policies."""

from numkernel.data.precision import (
    DEFAULT_CONTEXT,
    DEFAULT_MAX_ITERATIONS,
    EXACT_CONTEXT,
    GUARD_DIGITS,
    PrecisionContext,
    RoundingMode,
    TerminationPolicy,
    get_context,
    list_contexts,
    to_decimal,
)

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

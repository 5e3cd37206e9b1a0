"""Numerical algorithms module.

This module contains implementations of:
- Heron's (Newton-Raphson) square root with epsilon/precision termination
- Pluggable arbitrary-precision transcendental functions (pi, atan, sin, cos)
- Determinant expansions (diagonal product, 2×2, Sarrus, Leibniz)
"""

from numkernel.algorithms.determinant import (
    LEIBNIZ_WARN_SIZE,
    cofactor_expansion,
    diagonal_product,
    inversion_count,
    leibniz_formula,
    permutation_sign,
    rule_of_sarrus,
    two_by_two,
)
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
from numkernel.algorithms.transcendental import (
    DEFAULT_PROVIDER,
    SympyProvider,
    TranscendentalProvider,
)

__all__ = [
    # Determinants
    "LEIBNIZ_WARN_SIZE",
    "cofactor_expansion",
    "diagonal_product",
    "inversion_count",
    "leibniz_formula",
    "permutation_sign",
    "rule_of_sarrus",
    "two_by_two",
    # Square root
    "ConvergenceResult",
    "HeronIteration",
    "IterationResult",
    "SquareRootCalculator",
    "SquareRootTrace",
    "is_perfect_square",
    "sqrt",
    "sqrt_of_perfect_square",
    # Transcendental functions
    "DEFAULT_PROVIDER",
    "SympyProvider",
    "TranscendentalProvider",
]
